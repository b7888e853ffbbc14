"""
Tests for roulette_analyzer/taxonomy/bet_taxonomy.py.

What we test
------------
Integrity contract:
  - Every Category has a CATEGORY_MEMBERS entry; keys are unique.
  - Member counts match the table layout (151 members in total).
  - KIND_CATEGORY_MAP is a bijection between BetKind and Category.
  - EXCLUSIVE / OVERLAPPING partition Category.

members_of():
  - Total and deterministic over 0–36.
  - Only returns keys from CATEGORY_MEMBERS.
  - Exclusive categories: exactly one hit for 1–36.
  - Zero hits only straights["0"].
  - Known outcomes (1, 17, 36) map to the expected members.
  - Every split/corner/six-line key is hit by exactly the numbers it names.
  - Out-of-domain and non-int outcomes raise InvalidOutcomeError.
"""

from __future__ import annotations

import pytest

from roulette_analyzer.taxonomy.bet_taxonomy import (
    CATEGORY_KIND_MAP,
    CATEGORY_MEMBERS,
    CORNERS,
    EVEN_MONEY_KINDS,
    EXCLUSIVE_CATEGORIES,
    KIND_CATEGORY_MAP,
    OVERLAPPING_CATEGORIES,
    SIXLINES,
    SPLITS,
    BetKind,
    Category,
    InvalidOutcomeError,
    hits_for,
    members_of,
    numbers_in,
    validate_outcome,
)

ALL_OUTCOMES = range(0, 37)


class TestIntegrityContract:
    def test_all_categories_have_entry(self):
        for category in Category:
            assert category in CATEGORY_MEMBERS, (
                f"Category.{category.name} is missing from CATEGORY_MEMBERS"
            )

    def test_member_keys_unique_per_category(self):
        for category, keys in CATEGORY_MEMBERS.items():
            assert len(keys) == len(set(keys)), f"{category} has duplicate member keys"

    @pytest.mark.parametrize(
        "category, expected",
        [
            (Category.COLORS, 2),
            (Category.PARITIES, 2),
            (Category.DOZENS, 3),
            (Category.COLUMNS, 3),
            (Category.RANGES, 2),
            (Category.STREETS, 12),
            (Category.SPLITS, 57),
            (Category.CORNERS, 22),
            (Category.SIXLINES, 11),
            (Category.STRAIGHTS, 37),
        ],
    )
    def test_member_counts(self, category, expected):
        assert len(CATEGORY_MEMBERS[category]) == expected

    def test_total_member_count(self):
        assert sum(len(keys) for keys in CATEGORY_MEMBERS.values()) == 151

    def test_member_keys_are_plain_strings(self):
        for keys in CATEGORY_MEMBERS.values():
            for key in keys:
                assert type(key) is str

    def test_kind_category_map_is_bijective(self):
        assert set(KIND_CATEGORY_MAP) == set(BetKind)
        assert set(KIND_CATEGORY_MAP.values()) == set(Category)
        for kind, category in KIND_CATEGORY_MAP.items():
            assert CATEGORY_KIND_MAP[category] is kind

    def test_exclusive_and_overlapping_partition_categories(self):
        assert EXCLUSIVE_CATEGORIES | OVERLAPPING_CATEGORIES == set(Category)
        assert not EXCLUSIVE_CATEGORIES & OVERLAPPING_CATEGORIES

    def test_even_money_kinds(self):
        assert EVEN_MONEY_KINDS == {BetKind.COLOR, BetKind.PARITY, BetKind.RANGE}


class TestMembersOfTotality:
    @pytest.mark.parametrize("outcome", ALL_OUTCOMES)
    def test_only_known_keys_returned(self, outcome):
        for category in Category:
            hits = members_of(category, outcome)
            assert hits <= set(CATEGORY_MEMBERS[category])

    @pytest.mark.parametrize("outcome", ALL_OUTCOMES)
    def test_deterministic(self, outcome):
        for category in Category:
            assert members_of(category, outcome) == members_of(category, outcome)

    @pytest.mark.parametrize("outcome", range(1, 37))
    def test_exclusive_categories_hit_exactly_one(self, outcome):
        for category in EXCLUSIVE_CATEGORIES:
            assert len(members_of(category, outcome)) == 1, (category, outcome)

    @pytest.mark.parametrize("outcome", range(1, 37))
    def test_overlapping_categories_hit_at_least_one(self, outcome):
        assert 2 <= len(members_of(Category.SPLITS, outcome)) <= 4
        assert 1 <= len(members_of(Category.CORNERS, outcome)) <= 4
        assert 1 <= len(members_of(Category.SIXLINES, outcome)) <= 2

    def test_string_category_accepted(self):
        assert members_of("colors", 1) == {"red"}

    def test_hits_for_covers_every_category(self):
        assert set(hits_for(17)) == set(Category)


class TestZeroPolicy:
    def test_zero_hits_only_straight_zero(self):
        for category in Category:
            hits = members_of(category, 0)
            if category is Category.STRAIGHTS:
                assert hits == {"0"}
            else:
                assert hits == frozenset(), f"0 should not hit {category}"


class TestKnownOutcomes:
    def test_one(self):
        assert members_of(Category.COLORS, 1) == {"red"}
        assert members_of(Category.PARITIES, 1) == {"odd"}
        assert members_of(Category.DOZENS, 1) == {"first"}
        assert members_of(Category.COLUMNS, 1) == {"left"}
        assert members_of(Category.RANGES, 1) == {"low"}
        assert members_of(Category.STREETS, 1) == {"1-2-3"}
        assert members_of(Category.SPLITS, 1) == {"1-2", "1-4"}
        assert members_of(Category.CORNERS, 1) == {"1-2-4-5"}
        assert members_of(Category.SIXLINES, 1) == {"1-2-3-4-5-6"}
        assert members_of(Category.STRAIGHTS, 1) == {"1"}

    def test_seventeen(self):
        assert members_of(Category.COLORS, 17) == {"black"}
        assert members_of(Category.PARITIES, 17) == {"odd"}
        assert members_of(Category.DOZENS, 17) == {"second"}
        assert members_of(Category.COLUMNS, 17) == {"center"}
        assert members_of(Category.RANGES, 17) == {"low"}
        assert members_of(Category.STREETS, 17) == {"16-17-18"}
        assert members_of(Category.SPLITS, 17) == {"16-17", "17-18", "14-17", "17-20"}
        assert members_of(Category.CORNERS, 17) == {
            "13-14-16-17", "14-15-17-18", "16-17-19-20", "17-18-20-21",
        }
        assert members_of(Category.SIXLINES, 17) == {
            "13-14-15-16-17-18", "16-17-18-19-20-21",
        }

    def test_thirty_six(self):
        assert members_of(Category.COLORS, 36) == {"red"}
        assert members_of(Category.PARITIES, 36) == {"even"}
        assert members_of(Category.DOZENS, 36) == {"third"}
        assert members_of(Category.COLUMNS, 36) == {"right"}
        assert members_of(Category.RANGES, 36) == {"high"}
        assert members_of(Category.SPLITS, 36) == {"35-36", "33-36"}
        assert members_of(Category.CORNERS, 36) == {"32-33-35-36"}
        assert members_of(Category.SIXLINES, 36) == {"31-32-33-34-35-36"}

    def test_street_boundaries_are_not_splits(self):
        # 3 and 4 sit next to each other numerically but not on the layout
        assert "3-4" not in members_of(Category.SPLITS, 3)
        assert "3-4" not in members_of(Category.SPLITS, 4)
        assert members_of(Category.SPLITS, 4) == {"4-5", "1-4", "4-7"}

    def test_eighteen_reds_and_eighteen_blacks(self):
        reds = [n for n in range(1, 37) if members_of(Category.COLORS, n) == {"red"}]
        assert len(reds) == 18


class TestLayoutTables:
    @pytest.mark.parametrize(
        "category, keys",
        [
            (Category.SPLITS, SPLITS),
            (Category.CORNERS, CORNERS),
            (Category.SIXLINES, SIXLINES),
        ],
    )
    def test_each_key_hit_by_exactly_its_numbers(self, category, keys):
        for key in keys:
            hitting = {n for n in ALL_OUTCOMES if key in members_of(category, n)}
            assert hitting == numbers_in(key), key

    def test_every_split_key_reachable(self):
        reached = set()
        for n in ALL_OUTCOMES:
            reached |= members_of(Category.SPLITS, n)
        assert reached == set(SPLITS)


class TestInvalidOutcomes:
    @pytest.mark.parametrize("bad", [-1, 37, 100, 1.0, "5", None, True])
    def test_validate_outcome_rejects(self, bad):
        with pytest.raises(InvalidOutcomeError) as exc_info:
            validate_outcome(bad)
        assert exc_info.value.outcome == bad

    def test_members_of_rejects_out_of_domain(self):
        with pytest.raises(InvalidOutcomeError):
            members_of(Category.COLORS, 37)

    def test_invalid_outcome_is_value_error(self):
        assert issubclass(InvalidOutcomeError, ValueError)
