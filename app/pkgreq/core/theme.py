"""Console styles for pkgreq output.

Styles live in the bundled data/theme.toml as a flat table of Rich style
strings. Every source kind and install status has its own entry, so
display code never hard-codes a color.
"""

import tomllib
from functools import cache
from importlib import resources

from rich.errors import StyleSyntaxError
from rich.style import Style
from rich.theme import Theme

from pkgreq.models.reference import SourceKind
from pkgreq.models.result import InstallStatus

THEME_RESOURCE = "theme.toml"


class ThemeError(Exception):
    """Raised when the bundled theme is missing or malformed."""


def kind_style(kind: SourceKind) -> str:
    """Style name used for a source kind."""
    return f"kind.{kind.value}"


def status_style(status: InstallStatus) -> str:
    """Style name used for an install status."""
    return f"status.{status.value}"


def required_styles() -> set[str]:
    """Style names the CLI renders with."""
    names = {"info", "success", "warning", "error", "muted", "header", "border", "package.name"}
    names.update(kind_style(kind) for kind in SourceKind)
    names.update(status_style(status) for status in InstallStatus)
    return names


def parse_styles(text: str) -> dict[str, str]:
    """Parse and check a theme document.

    Args:
        text: TOML with a [styles] table of name = "rich style" pairs.

    Returns:
        Mapping of style name to style definition.

    Raises:
        ThemeError: If the document is not valid TOML, a style does not
            parse, or a style the CLI needs is missing.
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        msg = f"Theme is not valid TOML: {e}"
        raise ThemeError(msg) from e

    styles = data.get("styles")
    if not isinstance(styles, dict):
        msg = "Theme has no [styles] table"
        raise ThemeError(msg)

    for name, definition in styles.items():
        if not isinstance(definition, str):
            msg = f"Style '{name}' must be a string"
            raise ThemeError(msg)
        try:
            Style.parse(definition)
        except StyleSyntaxError as e:
            msg = f"Style '{name}' is invalid: {e}"
            raise ThemeError(msg) from e

    missing = required_styles() - styles.keys()
    if missing:
        msg = f"Theme is missing styles: {', '.join(sorted(missing))}"
        raise ThemeError(msg)
    return styles


@cache
def get_theme() -> Theme:
    """Load the bundled theme once per process.

    Raises:
        ThemeError: If the bundled theme cannot be used.
    """
    text = resources.files("pkgreq.data").joinpath(THEME_RESOURCE).read_text(encoding="utf-8")
    return Theme(parse_styles(text))
