"""
Read-only statistics snapshot models.

``StatItem`` is the per-member view of one stat record: hit count, current
streak, best streak and absence streak.

``RouletteStats`` mirrors the full category store: one ``dict[str, StatItem]``
per category plus the number of accepted spins.  It is what
``AnalyzerEngine.snapshot()`` returns and what the recommendation functions
read.

Both models are frozen.  ``snapshot()`` builds a new ``RouletteStats`` every
call, so callers that mutate the inner dicts only damage their own copy.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, model_validator

from roulette_analyzer.taxonomy.bet_taxonomy import Category


class StatItem(BaseModel):
    """Running statistics for one category member.

    Attributes:
        count: Times the member has been hit.
        streak: Consecutive hits ending at the most recent spin.
        max_streak: Highest ``streak`` ever reached.
        absence_streak: Consecutive spins since the last hit
            (0 = hit on the most recent spin).
    """

    model_config = ConfigDict(frozen=True)

    count: int = 0
    streak: int = 0
    max_streak: int = 0
    absence_streak: int = 0

    @model_validator(mode="after")
    def validate_streaks(self) -> "StatItem":
        if min(self.count, self.streak, self.max_streak, self.absence_streak) < 0:
            raise ValueError("StatItem fields must be non-negative.")
        if self.max_streak < self.streak:
            raise ValueError(
                f"max_streak ({self.max_streak}) must be >= streak ({self.streak})."
            )
        return self


class RouletteStats(BaseModel):
    """Snapshot of every category's member statistics.

    Attributes:
        spins: Number of outcomes accepted since construction or reset.
        colors … straights: Member key → ``StatItem`` for each category.
    """

    model_config = ConfigDict(frozen=True)

    spins: int = 0
    colors: dict[str, StatItem]
    parities: dict[str, StatItem]
    dozens: dict[str, StatItem]
    columns: dict[str, StatItem]
    ranges: dict[str, StatItem]
    streets: dict[str, StatItem]
    splits: dict[str, StatItem]
    corners: dict[str, StatItem]
    sixlines: dict[str, StatItem]
    straights: dict[str, StatItem]

    def category(self, category: Category | str) -> dict[str, StatItem]:
        """Return the member map for one category."""
        return getattr(self, Category(category).value)

    def item(self, category: Category | str, key: str) -> StatItem:
        """Return one member's stats.

        Raises:
            KeyError: If ``key`` is not a member of ``category``.
        """
        return self.category(category)[key]
