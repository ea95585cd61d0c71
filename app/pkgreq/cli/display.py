"""Shared Rich display functions for classification and install results.

Provides reusable table builders and summary printers used by the
install and classify commands.
"""

from rich.markup import escape
from rich.table import Table

from pkgreq.core.theme import kind_style, status_style
from pkgreq.models.reference import PackageReference, SourceKind
from pkgreq.models.result import InstallResult, InstallStatus, RunReport
from pkgreq.utils.formatting import console, print_success

_STATUS_LABELS: dict[InstallStatus, str] = {
    InstallStatus.INSTALLED: "OK",
    InstallStatus.SKIPPED: "SKIP",
    InstallStatus.UNRECOGNIZED: "??",
    InstallStatus.NO_DOWNLOAD: "NO DL",
    InstallStatus.FAILED: "FAIL",
}


def format_status(status: InstallStatus) -> str:
    """Format an install status as a short styled label."""
    return f"[{status_style(status)}]{_STATUS_LABELS[status]}[/]"


def format_kind(kind: SourceKind) -> str:
    """Format a source kind with its theme color."""
    return f"[{kind_style(kind)}]{kind.label}[/]"


def format_result_line(result: InstallResult) -> str:
    """Format one result as a single progress line."""
    detail = result.error if result.error else (result.message or "")
    return (
        f"{format_status(result.status)} {format_kind(result.kind)} "
        f"[package.name]{escape(result.entry)}[/] [muted]{escape(detail)}[/muted]"
    )


def print_result_line(result: InstallResult) -> None:
    """Print one result as soon as it is known."""
    console.print(format_result_line(result))


def create_results_table(results: tuple[InstallResult, ...] | list[InstallResult]) -> Table:
    """Create a Rich table displaying install results.

    Args:
        results: Results to display, in input order.

    Returns:
        Rich Table configured for results display.
    """
    table = Table(
        title="Results",
        show_header=True,
        header_style="header",
        border_style="border",
    )
    table.add_column("Status", width=8, justify="center")
    table.add_column("Source", no_wrap=True)
    table.add_column("Requirement", no_wrap=True)
    table.add_column("Location")
    table.add_column("Message")

    for result in results:
        if result.error:
            message = f"[error]{escape(result.error)}[/error]"
        else:
            message = f"[muted]{escape(result.message or '')}[/muted]"

        table.add_row(
            format_status(result.status),
            format_kind(result.kind),
            escape(result.entry),
            escape(str(result.target)) if result.target else "",
            message,
        )

    return table


def create_classification_table(rows: list[tuple[str, PackageReference | None]]) -> Table:
    """Create a Rich table showing how requirement lines classify.

    Args:
        rows: Pairs of raw line and its reference (None for skipped lines).

    Returns:
        Rich Table configured for classification display.
    """
    table = Table(
        title="Classification",
        show_header=True,
        header_style="header",
        border_style="border",
    )
    table.add_column("Line", no_wrap=True)
    table.add_column("Source", no_wrap=True)
    table.add_column("Identifier", no_wrap=True)
    table.add_column("Protocol", style="muted")

    for line, ref in rows:
        if ref is None:
            table.add_row(escape(line), "[muted]skip[/muted]", "", "")
            continue
        table.add_row(
            escape(line),
            format_kind(ref.kind),
            escape(ref.identifier),
            ref.protocol or "",
        )

    return table


def print_report_summary(report: RunReport) -> None:
    """Print a summary of a pipeline run.

    Shows a success message when every entry installed or was skipped,
    otherwise a count per outcome.

    Args:
        report: Report returned by the pipeline.
    """
    installed = report.count(InstallStatus.INSTALLED)
    skipped = report.count(InstallStatus.SKIPPED)
    unrecognized = report.count(InstallStatus.UNRECOGNIZED)
    no_download = report.count(InstallStatus.NO_DOWNLOAD)
    failed = report.count(InstallStatus.FAILED)

    if not report.results:
        console.print("\n[muted]No requirements to install.[/muted]")
        return

    if report.ok and not unrecognized:
        message = f"All {installed} package(s) installed successfully."
        if skipped:
            message += f" {skipped} skipped."
        print_success(message)
        return

    parts = [f"[success]{installed} installed[/success]"]
    if skipped:
        parts.append(f"[muted]{skipped} skipped[/muted]")
    if unrecognized:
        parts.append(f"[warning]{unrecognized} unrecognized[/warning]")
    if no_download:
        parts.append(f"[warning]{no_download} not downloaded[/warning]")
    if failed:
        parts.append(f"[error]{failed} failed[/error]")
    console.print(f"\nSummary: {', '.join(parts)}")
