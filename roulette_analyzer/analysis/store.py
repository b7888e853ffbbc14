"""
Mutable category store backing the analyzer engine.

One ``StatRecord`` per member of every category in ``CATEGORY_MEMBERS``.
The member set is fixed at construction; records are only ever advanced by
``StatRecord.hit()`` / ``StatRecord.miss()`` and frozen into ``StatItem``
views by ``CategoryStore.to_stats()``.
"""

from __future__ import annotations

from dataclasses import dataclass

from roulette_analyzer.models.stats import RouletteStats, StatItem
from roulette_analyzer.taxonomy.bet_taxonomy import CATEGORY_MEMBERS, Category


@dataclass
class StatRecord:
    """Mutable counterpart of ``StatItem``."""

    count:          int = 0
    streak:         int = 0
    max_streak:     int = 0
    absence_streak: int = 0

    def hit(self) -> None:
        self.absence_streak = 0
        self.count += 1
        self.streak += 1
        if self.streak > self.max_streak:
            self.max_streak = self.streak

    def miss(self) -> None:
        self.absence_streak += 1
        self.streak = 0

    def freeze(self) -> StatItem:
        return StatItem(
            count=self.count,
            streak=self.streak,
            max_streak=self.max_streak,
            absence_streak=self.absence_streak,
        )


class CategoryStore:
    """All stat records, keyed by category then member key.

    Attributes:
        spins: Outcomes applied since construction.
    """

    def __init__(self) -> None:
        self.spins = 0
        self._records: dict[Category, dict[str, StatRecord]] = {
            category: {key: StatRecord() for key in keys}
            for category, keys in CATEGORY_MEMBERS.items()
        }

    def records(self, category: Category) -> dict[str, StatRecord]:
        return self._records[category]

    def apply(self, hits: dict[Category, frozenset[str]]) -> None:
        """Advance every record for one outcome.

        Hit members are advanced with ``hit()``; every other member of every
        category, including categories with an empty hit set, gets ``miss()``
        (absence + 1, streak reset).
        """
        for category, records in self._records.items():
            hit_keys = hits.get(category, frozenset())
            for key, record in records.items():
                if key in hit_keys:
                    record.hit()
                else:
                    record.miss()
        self.spins += 1

    def to_stats(self) -> RouletteStats:
        """Freeze the current state into a new ``RouletteStats``."""
        frozen = {
            category.value: {key: rec.freeze() for key, rec in records.items()}
            for category, records in self._records.items()
        }
        return RouletteStats(spins=self.spins, **frozen)
