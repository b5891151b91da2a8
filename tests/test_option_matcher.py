"""
Tests for deterministic option matching.

The matcher is a pure function over a snapshot, so every case here uses a
synthetic OptionSnapshot; no browser is involved.
"""

import pytest

from harness.errors import OptionNotFoundError
from harness.models.results import Found, NotFound, OptionSnapshot
from harness.services.option_matcher import match_option, require_match


def snapshot(*labels: str) -> OptionSnapshot:
    return OptionSnapshot(labels=labels)


class TestRulePriority:
    def test_exact_match_beats_substring(self) -> None:
        """Test that "Acme" is chosen over "Acme Corp" when the target is "Acme"."""
        result = match_option(snapshot("Acme", "Acme Corp"), "Acme")

        assert result == Found(label="Acme", index=0)

    def test_exact_match_is_case_sensitive(self) -> None:
        result = match_option(snapshot("acme", "Acme"), "Acme")

        assert result == Found(label="Acme", index=1)

    def test_trimmed_match_used_when_no_exact_match(self) -> None:
        result = match_option(snapshot("  NORTH ", "NORTH EAST"), "NORTH")

        assert isinstance(result, Found)
        assert result.label == "  NORTH "

    def test_trimmed_target_matches_exact_label(self) -> None:
        result = match_option(snapshot("NORTH", "SOUTH"), " NORTH ")

        assert result == Found(label="NORTH", index=0)

    def test_unique_substring_match(self) -> None:
        result = match_option(snapshot("30050 - TOTAL ENERGIES", "1234567 - Another Base Company Testing"), "TOTAL")

        assert result == Found(label="30050 - TOTAL ENERGIES", index=0)

    def test_exact_rule_decides_even_with_duplicate_substrings(self) -> None:
        result = match_option(snapshot("Acme East", "Acme", "Acme West"), "Acme")

        assert result == Found(label="Acme", index=1)


class TestAmbiguity:
    def test_two_substring_matches_are_not_found(self) -> None:
        """Test that "Acme East" and "Acme West" are both reported, neither picked."""
        labels = snapshot("Acme East", "Acme West")

        result = match_option(labels, "Acme")

        assert isinstance(result, NotFound)
        assert result.ambiguous
        assert result.candidates == ("Acme East", "Acme West")
        assert result.available is labels

    def test_duplicate_exact_labels_are_ambiguous(self) -> None:
        result = match_option(snapshot("TRIP", "TRIP"), "TRIP")

        assert isinstance(result, NotFound)
        assert result.candidates == ("TRIP", "TRIP")


class TestNoMatch:
    def test_missing_option_carries_full_snapshot(self) -> None:
        labels = snapshot("NORTH", "SOUTH")

        result = match_option(labels, "EAST")

        assert isinstance(result, NotFound)
        assert not result.ambiguous
        assert result.candidates == ()
        assert result.searched == "EAST"
        assert result.available.labels == ("NORTH", "SOUTH")

    def test_empty_snapshot_is_not_found(self) -> None:
        result = match_option(snapshot(), "NORTH")

        assert isinstance(result, NotFound)
        assert len(result.available) == 0

    @pytest.mark.parametrize("target", ["", "   "])
    def test_blank_target_rejected(self, target: str) -> None:
        with pytest.raises(ValueError):
            match_option(snapshot("NORTH"), target)


class TestRequireMatch:
    def test_returns_found(self) -> None:
        assert require_match(snapshot("KG", "TRIP"), "TRIP").index == 1

    def test_raises_with_available_options(self) -> None:
        with pytest.raises(OptionNotFoundError) as exc_info:
            require_match(snapshot("KG", "TRIP"), "CBM")

        assert exc_info.value.available == ("KG", "TRIP")
        assert "KG, TRIP" in str(exc_info.value)

    def test_raises_with_candidates_when_ambiguous(self) -> None:
        with pytest.raises(OptionNotFoundError) as exc_info:
            require_match(snapshot("Acme East", "Acme West"), "Acme")

        assert exc_info.value.candidates == ("Acme East", "Acme West")
        assert "ambiguous" in str(exc_info.value)
