"""Requirement line classification.

Turns one raw requirement line into a typed PackageReference. Rules are
applied in a fixed precedence order and the first match wins:

1. ``forge://<name>[<qualifier>]``   -> Octave Forge
2. ``fex://<digits>[-<name>]``       -> FileExchange
3. ``<scheme>://<anything>``         -> URL
4. ``<digits>[-<name>]``             -> FileExchange
5. ``<word-chars>[<qualifier>]``     -> Octave Forge

Anything else is UNRECOGNIZED. Bare numeric ids are tested before bare
names because an id such as ``55540`` is also a valid word.
"""

import logging
import re

from pkgreq.models.reference import PackageReference, RequirementEntry, SourceKind

logger = logging.getLogger(__name__)

FORGE_PREFIX = "forge://"
EXCHANGE_PREFIX = "fex://"
SCHEME_SEPARATOR = "://"

# Only a '#' preceded by a space starts an inline comment, so URL
# fragments such as 'page.html#anchor' survive.
INLINE_COMMENT = " #"

# Characters that start a version qualifier on a Forge name
_QUALIFIER_CHARS = "=<>~! "

_FORGE_NAME_RE = re.compile(rf"^[^{_QUALIFIER_CHARS}]*")
_EXCHANGE_ID_RE = re.compile(r"^[0-9]+(-|$)")
_BARE_NAME_RE = re.compile(rf"^\w+([{_QUALIFIER_CHARS}].*)?$", re.ASCII)


def parse_entry(line: str) -> RequirementEntry | None:
    """Strip whitespace and comments from a requirement line.

    Args:
        line: Raw line text.

    Returns:
        RequirementEntry, or None if the line is blank or fully commented out.
    """
    text = line.strip()
    if not text or text.startswith("#"):
        return None

    comment: str | None = None
    idx = text.find(INLINE_COMMENT)
    if idx != -1:
        comment = text[idx + len(INLINE_COMMENT) :].strip()
        text = text[:idx].strip()

    return RequirementEntry(original=line, text=text, comment=comment)


def strip_forge_qualifier(name: str) -> str:
    """Drop a 'forge://' prefix and any trailing version qualifier.

    Examples:
        >>> strip_forge_qualifier("forge://control>=3.0")
        'control'
    """
    if name.startswith(FORGE_PREFIX):
        name = name[len(FORGE_PREFIX) :]
    match = _FORGE_NAME_RE.match(name)
    return match.group(0) if match else ""


def strip_exchange_id(package: str) -> str:
    """Drop a 'fex://' prefix and everything from the first hyphen.

    Examples:
        >>> strip_exchange_id("fex://55540-dummy-package")
        '55540'
    """
    if package.startswith(EXCHANGE_PREFIX):
        package = package[len(EXCHANGE_PREFIX) :]
    return package.split("-", 1)[0]


def classify_entry(entry: RequirementEntry) -> PackageReference:
    """Classify a prepared requirement entry.

    Args:
        entry: Entry with whitespace and comments already removed.

    Returns:
        PackageReference. Its kind is UNRECOGNIZED if no rule matched or
        the matched rule produced an unusable identifier.
    """
    text = entry.text

    if text.startswith(FORGE_PREFIX):
        return _reference(SourceKind.FORGE, strip_forge_qualifier(text), "forge", entry)

    if text.startswith(EXCHANGE_PREFIX):
        return _reference(SourceKind.EXCHANGE, strip_exchange_id(text), "fex", entry)

    if SCHEME_SEPARATOR in text:
        scheme = text.split(SCHEME_SEPARATOR, 1)[0]
        return _reference(SourceKind.URL, text, scheme or None, entry)

    if _EXCHANGE_ID_RE.match(text):
        return _reference(SourceKind.EXCHANGE, strip_exchange_id(text), None, entry)

    if _BARE_NAME_RE.match(text):
        return _reference(SourceKind.FORGE, strip_forge_qualifier(text), None, entry)

    return _unrecognized(entry)


def classify(line: str) -> PackageReference | None:
    """Classify one raw requirement line.

    Args:
        line: Raw line text, possibly with surrounding whitespace and an
            inline comment.

    Returns:
        PackageReference, or None if the line should be skipped (blank or
        commented out).
    """
    entry = parse_entry(line)
    if entry is None:
        return None
    return classify_entry(entry)


def _reference(
    kind: SourceKind,
    identifier: str,
    protocol: str | None,
    entry: RequirementEntry,
) -> PackageReference:
    """Build a reference, demoting unusable identifiers to UNRECOGNIZED."""
    if not identifier:
        return _unrecognized(entry)
    if kind == SourceKind.EXCHANGE and not (identifier.isascii() and identifier.isdigit()):
        return _unrecognized(entry)
    return PackageReference(kind=kind, identifier=identifier, protocol=protocol, entry=entry)


def _unrecognized(entry: RequirementEntry) -> PackageReference:
    logger.debug("No classification rule matched %r", entry.text)
    return PackageReference(
        kind=SourceKind.UNRECOGNIZED,
        identifier=entry.text,
        entry=entry,
    )
