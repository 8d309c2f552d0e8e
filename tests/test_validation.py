"""Tests for simulation input validation."""

import pytest

from src.lottery_simulator.models import PriorityTier, RankedChoice
from src.lottery_simulator.validation import (
    InvalidInputError,
    parse_priority_tier,
    validate_num_trials,
    validate_ranked_choices,
)
from src.school_data.models import School


def _choice(dbn, priority=PriorityTier.DISTRICT):
    return RankedChoice(school=School(dbn=dbn, name=f"School {dbn}"), priority=priority)


# ── Priority tiers ───────────────────────────────────────────────────


class TestParsePriorityTier:
    def test_enum_passthrough(self):
        assert parse_priority_tier(PriorityTier.ZONED) is PriorityTier.ZONED

    @pytest.mark.parametrize("value, expected", [
        ("sibling", PriorityTier.SIBLING),
        ("Zoned", PriorityTier.ZONED),
        (" DISTRICT ", PriorityTier.DISTRICT),
        ("borough", PriorityTier.BOROUGH),
        ("citywide", PriorityTier.CITYWIDE),
    ])
    def test_strings(self, value, expected):
        assert parse_priority_tier(value) is expected

    @pytest.mark.parametrize("value", ["in-district", "", None, 3, "lottery"])
    def test_invalid(self, value):
        with pytest.raises(InvalidInputError, match="Invalid priority tier"):
            parse_priority_tier(value)


# ── Trial counts ─────────────────────────────────────────────────────


class TestValidateNumTrials:
    @pytest.mark.parametrize("value", [1, 1000, 100_000])
    def test_valid(self, value):
        validate_num_trials(value)

    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive(self, value):
        with pytest.raises(InvalidInputError, match="positive"):
            validate_num_trials(value)

    @pytest.mark.parametrize("value", [1.0, "10", None, True])
    def test_non_integer(self, value):
        with pytest.raises(InvalidInputError, match="integer"):
            validate_num_trials(value)


# ── Ranked lists ─────────────────────────────────────────────────────


class TestValidateRankedChoices:
    def test_valid_list(self):
        validate_ranked_choices([_choice("A"), _choice("B", PriorityTier.SIBLING)])

    def test_empty(self):
        with pytest.raises(InvalidInputError, match="empty"):
            validate_ranked_choices([])

    def test_too_long(self):
        with pytest.raises(InvalidInputError, match="max 12"):
            validate_ranked_choices([_choice(f"S{i}") for i in range(13)])

    def test_duplicate_dbn_case_insensitive(self):
        with pytest.raises(InvalidInputError, match="more than once"):
            validate_ranked_choices([_choice("15K321"), _choice("15k321")])

    def test_not_a_ranked_choice(self):
        with pytest.raises(InvalidInputError, match="not a RankedChoice"):
            validate_ranked_choices([_choice("A"), ("B", "zoned")])

    def test_raw_string_priority(self):
        bad = RankedChoice(school=School(dbn="A", name="A"), priority="zoned")
        with pytest.raises(InvalidInputError, match="invalid priority"):
            validate_ranked_choices([bad])
