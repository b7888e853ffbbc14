"""
Bet taxonomy for the European (single-zero) roulette table.

Hierarchy: ``BetKind`` (what a recommendation is for) → ``Category`` (the
statistics group that tracks it) → member key (e.g. ``"red"``, ``"16-17-18"``).

Every member of every category is statically known.  The member tables for
corners and six-lines are literal copies of the table layout; streets and
splits are computed from the outcome with bounds-checked neighbour arithmetic
and always land on a key from the literal ``STREETS`` / ``SPLITS`` tables.

Zero policy: ``0`` belongs only to ``straights["0"]``.  It hits no colour,
parity, dozen, column, range, street, split, corner or six-line member.

The ``CATEGORY_MEMBERS`` dict is the canonical integrity contract:
  - Every ``Category`` must have an entry.
  - Member keys are unique within a category.
  - ``members_of(category, n)`` only ever returns keys from that entry.

Run ``tests/test_taxonomy/test_bet_taxonomy.py`` to verify this contract.

This module has NO imports from any other ``roulette_analyzer`` package.
"""

from __future__ import annotations

from enum import StrEnum

MIN_OUTCOME = 0
MAX_OUTCOME = 36


class InvalidOutcomeError(ValueError):
    """Raised when an outcome is not an integer in ``[0, 36]``.

    Attributes:
        outcome: The rejected value, unchanged.
    """

    def __init__(self, outcome: object) -> None:
        self.outcome = outcome
        super().__init__(
            f"Invalid outcome {outcome!r}: expected an integer in "
            f"[{MIN_OUTCOME}, {MAX_OUTCOME}]."
        )


class BetKind(StrEnum):
    """Kind of bet a recommendation refers to (threshold key)."""

    COLOR = "color"
    PARITY = "parity"
    RANGE = "range"
    DOZEN = "dozen"
    COLUMN = "column"
    SIXLINE = "sixline"
    CORNER = "corner"
    STREET = "street"
    SPLIT = "split"
    STRAIGHT = "straight"


class Category(StrEnum):
    """Statistics group holding one stat record per member."""

    COLORS = "colors"
    PARITIES = "parities"
    DOZENS = "dozens"
    COLUMNS = "columns"
    RANGES = "ranges"
    STREETS = "streets"
    SPLITS = "splits"
    CORNERS = "corners"
    SIXLINES = "sixlines"
    STRAIGHTS = "straights"


class Color(StrEnum):
    RED = "red"
    BLACK = "black"


class Parity(StrEnum):
    EVEN = "even"
    ODD = "odd"


class Dozen(StrEnum):
    FIRST = "first"
    """1–12"""

    SECOND = "second"
    """13–24"""

    THIRD = "third"
    """25–36"""


class Column(StrEnum):
    LEFT = "left"
    """n mod 3 == 1"""

    CENTER = "center"
    """n mod 3 == 2"""

    RIGHT = "right"
    """n mod 3 == 0"""


class Range(StrEnum):
    LOW = "low"
    """1–18"""

    HIGH = "high"
    """19–36"""


RED_NUMBERS: frozenset[int] = frozenset(
    {1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36}
)

# ── Table layout ──────────────────────────────────────────────────────────────

STREETS: tuple[str, ...] = (
    "1-2-3", "4-5-6", "7-8-9", "10-11-12",
    "13-14-15", "16-17-18", "19-20-21", "22-23-24",
    "25-26-27", "28-29-30", "31-32-33", "34-35-36",
)

SPLITS: tuple[str, ...] = (
    # Horizontal: neighbours within one street
    "1-2", "2-3", "4-5", "5-6", "7-8", "8-9",
    "10-11", "11-12", "13-14", "14-15", "16-17", "17-18",
    "19-20", "20-21", "22-23", "23-24", "25-26", "26-27",
    "28-29", "29-30", "31-32", "32-33", "34-35", "35-36",
    # Vertical: same column, adjacent streets
    "1-4", "2-5", "3-6", "4-7", "5-8", "6-9",
    "7-10", "8-11", "9-12", "10-13", "11-14", "12-15",
    "13-16", "14-17", "15-18", "16-19", "17-20", "18-21",
    "19-22", "20-23", "21-24", "22-25", "23-26", "24-27",
    "25-28", "26-29", "27-30", "28-31", "29-32", "30-33",
    "31-34", "32-35", "33-36",
)

CORNERS: tuple[str, ...] = (
    "1-2-4-5", "2-3-5-6", "4-5-7-8", "5-6-8-9",
    "7-8-10-11", "8-9-11-12", "10-11-13-14", "11-12-14-15",
    "13-14-16-17", "14-15-17-18", "16-17-19-20", "17-18-20-21",
    "19-20-22-23", "20-21-23-24", "22-23-25-26", "23-24-26-27",
    "25-26-28-29", "26-27-29-30", "28-29-31-32", "29-30-32-33",
    "31-32-34-35", "32-33-35-36",
)

SIXLINES: tuple[str, ...] = (
    "1-2-3-4-5-6", "4-5-6-7-8-9", "7-8-9-10-11-12",
    "10-11-12-13-14-15", "13-14-15-16-17-18", "16-17-18-19-20-21",
    "19-20-21-22-23-24", "22-23-24-25-26-27", "25-26-27-28-29-30",
    "28-29-30-31-32-33", "31-32-33-34-35-36",
)

STRAIGHTS: tuple[str, ...] = tuple(str(n) for n in range(MIN_OUTCOME, MAX_OUTCOME + 1))


# ── Integrity contract ────────────────────────────────────────────────────────

CATEGORY_MEMBERS: dict[Category, tuple[str, ...]] = {
    Category.COLORS:    tuple(m.value for m in Color),
    Category.PARITIES:  tuple(m.value for m in Parity),
    Category.DOZENS:    tuple(m.value for m in Dozen),
    Category.COLUMNS:   tuple(m.value for m in Column),
    Category.RANGES:    tuple(m.value for m in Range),
    Category.STREETS:   STREETS,
    Category.SPLITS:    SPLITS,
    Category.CORNERS:   CORNERS,
    Category.SIXLINES:  SIXLINES,
    Category.STRAIGHTS: STRAIGHTS,
}

KIND_CATEGORY_MAP: dict[BetKind, Category] = {
    BetKind.COLOR:    Category.COLORS,
    BetKind.PARITY:   Category.PARITIES,
    BetKind.RANGE:    Category.RANGES,
    BetKind.DOZEN:    Category.DOZENS,
    BetKind.COLUMN:   Category.COLUMNS,
    BetKind.SIXLINE:  Category.SIXLINES,
    BetKind.CORNER:   Category.CORNERS,
    BetKind.STREET:   Category.STREETS,
    BetKind.SPLIT:    Category.SPLITS,
    BetKind.STRAIGHT: Category.STRAIGHTS,
}

CATEGORY_KIND_MAP: dict[Category, BetKind] = {
    category: kind for kind, category in KIND_CATEGORY_MAP.items()
}

# At most one member hit per outcome
EXCLUSIVE_CATEGORIES: frozenset[Category] = frozenset({
    Category.COLORS, Category.PARITIES, Category.DOZENS, Category.COLUMNS,
    Category.RANGES, Category.STREETS, Category.STRAIGHTS,
})

# Several members hit per non-zero outcome
OVERLAPPING_CATEGORIES: frozenset[Category] = frozenset({
    Category.SPLITS, Category.CORNERS, Category.SIXLINES,
})

# The "near-50%" kinds that pay even money
EVEN_MONEY_KINDS: frozenset[BetKind] = frozenset({
    BetKind.COLOR, BetKind.PARITY, BetKind.RANGE,
})


# ── Membership ────────────────────────────────────────────────────────────────


def validate_outcome(outcome: object) -> int:
    """Return ``outcome`` unchanged if it is an ``int`` in ``[0, 36]``.

    ``bool`` is rejected even though it subclasses ``int``.

    Raises:
        InvalidOutcomeError: For any other value.
    """
    if isinstance(outcome, bool) or not isinstance(outcome, int):
        raise InvalidOutcomeError(outcome)
    if not MIN_OUTCOME <= outcome <= MAX_OUTCOME:
        raise InvalidOutcomeError(outcome)
    return outcome


def _numbers(key: str) -> frozenset[int]:
    return frozenset(int(part) for part in key.split("-"))


def _street_of(n: int) -> str:
    first = (n - 1) // 3 * 3 + 1
    return f"{first}-{first + 1}-{first + 2}"


def _splits_of(n: int) -> frozenset[str]:
    neighbours: list[int] = []
    if n % 3 != 1:          # not the left column: left neighbour in same street
        neighbours.append(n - 1)
    if n % 3 != 0:          # not the right column: right neighbour in same street
        neighbours.append(n + 1)
    neighbours.extend((n - 3, n + 3))
    return frozenset(
        f"{min(n, m)}-{max(n, m)}" for m in neighbours if 1 <= m <= MAX_OUTCOME
    )


def _containing(keys: tuple[str, ...], n: int) -> frozenset[str]:
    return frozenset(key for key in keys if n in _numbers(key))


def _classify(n: int) -> dict[Category, frozenset[str]]:
    """Compute every category's hit set for one outcome."""
    if n == 0:
        hits = {category: frozenset() for category in Category}
        hits[Category.STRAIGHTS] = frozenset({"0"})
        return hits

    if n <= 12:
        dozen = Dozen.FIRST
    elif n <= 24:
        dozen = Dozen.SECOND
    else:
        dozen = Dozen.THIRD

    column = {1: Column.LEFT, 2: Column.CENTER, 0: Column.RIGHT}[n % 3]

    return {
        Category.COLORS:    frozenset({(Color.RED if n in RED_NUMBERS else Color.BLACK).value}),
        Category.PARITIES:  frozenset({(Parity.EVEN if n % 2 == 0 else Parity.ODD).value}),
        Category.DOZENS:    frozenset({dozen.value}),
        Category.COLUMNS:   frozenset({column.value}),
        Category.RANGES:    frozenset({(Range.LOW if n <= 18 else Range.HIGH).value}),
        Category.STREETS:   frozenset({_street_of(n)}),
        Category.SPLITS:    _splits_of(n),
        Category.CORNERS:   _containing(CORNERS, n),
        Category.SIXLINES:  _containing(SIXLINES, n),
        Category.STRAIGHTS: frozenset({str(n)}),
    }


# Precomputed once: outcome -> category -> hit member keys
_MEMBERSHIP: dict[int, dict[Category, frozenset[str]]] = {
    n: _classify(n) for n in range(MIN_OUTCOME, MAX_OUTCOME + 1)
}


def members_of(category: Category, outcome: int) -> frozenset[str]:
    """Return the member keys of ``category`` hit by ``outcome``.

    Total over ``[0, 36]`` and deterministic: the same outcome always returns
    the same (shared, immutable) set.

    Raises:
        InvalidOutcomeError: If ``outcome`` is outside the domain.
    """
    return _MEMBERSHIP[validate_outcome(outcome)][Category(category)]


def hits_for(outcome: int) -> dict[Category, frozenset[str]]:
    """Return a copy of the hit-member map for every category."""
    return dict(_MEMBERSHIP[validate_outcome(outcome)])


def numbers_in(key: str) -> frozenset[int]:
    """Outcomes covered by a member key of a numeric category (e.g. ``"1-2-4-5"``)."""
    return _numbers(key)
