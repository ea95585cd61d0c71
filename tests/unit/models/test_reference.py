"""Unit tests for requirement and reference models.

Tests for SourceKind, RequirementEntry, and PackageReference.
"""

import dataclasses

import pytest
from pkgreq.models.reference import PackageReference, RequirementEntry, SourceKind


class TestSourceKind:
    """Tests for SourceKind enum."""

    def test_protocol_values(self) -> None:
        """Explicit-protocol kinds use their scheme as value."""
        assert SourceKind.FORGE.value == "forge"
        assert SourceKind.EXCHANGE.value == "fex"

    def test_labels(self) -> None:
        """Every kind has a display label."""
        assert SourceKind.FORGE.label == "Octave Forge"
        assert SourceKind.EXCHANGE.label == "FileExchange"
        assert SourceKind.URL.label == "URL"
        assert all(kind.label for kind in SourceKind)

    def test_all_values_unique(self) -> None:
        """All kind values are unique."""
        values = [k.value for k in SourceKind]
        assert len(values) == len(set(values))


class TestRequirementEntry:
    """Tests for RequirementEntry dataclass."""

    def test_create(self) -> None:
        """Entry keeps original text, trimmed text and comment."""
        entry = RequirementEntry(original="io # x", text="io", comment="x")

        assert entry.text == "io"
        assert entry.comment == "x"

    def test_empty_text_rejected(self) -> None:
        """Entry text cannot be empty."""
        with pytest.raises(ValueError, match="cannot be empty"):
            RequirementEntry(original="  ", text="")

    def test_immutable(self) -> None:
        """Entries are frozen."""
        entry = RequirementEntry(original="io", text="io")

        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.text = "other"  # type: ignore[misc]


class TestPackageReference:
    """Tests for PackageReference dataclass."""

    def test_create_forge(self) -> None:
        """A Forge reference holds the bare name."""
        ref = PackageReference(kind=SourceKind.FORGE, identifier="control", protocol="forge")

        assert ref.is_recognized
        assert ref.text == "control"

    def test_empty_identifier_rejected(self) -> None:
        """The identifier cannot be empty."""
        with pytest.raises(ValueError, match="cannot be empty"):
            PackageReference(kind=SourceKind.URL, identifier="")

    def test_exchange_id_must_be_numeric(self) -> None:
        """FileExchange ids are digits only."""
        with pytest.raises(ValueError, match="numeric"):
            PackageReference(kind=SourceKind.EXCHANGE, identifier="55540-dummy")

    def test_unrecognized(self) -> None:
        """UNRECOGNIZED references are not installable."""
        ref = PackageReference(kind=SourceKind.UNRECOGNIZED, identifier="what is this")

        assert not ref.is_recognized

    def test_text_prefers_entry(self) -> None:
        """text is the entry text when an entry is attached."""
        entry = RequirementEntry(original="fex://55540-dummy", text="fex://55540-dummy")
        ref = PackageReference(kind=SourceKind.EXCHANGE, identifier="55540", entry=entry)

        assert ref.text == "fex://55540-dummy"
