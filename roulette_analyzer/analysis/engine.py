"""
Analyzer engine: owns the category store and the thresholds, and is the only
thing that mutates the store.

Lifecycle
---------
    fresh ──update()──▶ updated ──update()──▶ updated …
      ▲                    │
      └──────reset()───────┘     (reset() is valid from any state)

``update(outcome)`` is synchronous and all-or-nothing: an invalid outcome is
rejected before any record is touched.  The engine performs no locking; the
caller must not run two ``update`` calls at once on one instance (see
``roulette_analyzer.simulation.session`` for a driver that enforces this).

Thresholds are read only by ``bets()`` / ``evaluate()``.  ``set_thresholds()``
swaps them and keeps streak state; ``reconfigure()`` swaps them and resets.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from roulette_analyzer.analysis.store import CategoryStore
from roulette_analyzer.config import ThresholdsConfig, coerce_thresholds
from roulette_analyzer.models.bet import Bet, Recommendation
from roulette_analyzer.models.stats import RouletteStats
from roulette_analyzer.recommendations.ranker import build_recommendations, select_bets
from roulette_analyzer.taxonomy.bet_taxonomy import InvalidOutcomeError, hits_for

logger = logging.getLogger(__name__)


class AnalyzerEngine:
    """Running category statistics plus threshold-driven recommendations.

    Args:
        thresholds: ``ThresholdsConfig``, a mapping with the ten threshold
            keys, or ``None`` for the defaults.

    Raises:
        InvalidThresholdError: If ``thresholds`` cannot be validated.
    """

    def __init__(
        self,
        thresholds: ThresholdsConfig | Mapping[str, Any] | None = None,
    ) -> None:
        self._thresholds = coerce_thresholds(thresholds)
        self._store = CategoryStore()

    # ── State ─────────────────────────────────────────────────────────────────

    @property
    def thresholds(self) -> ThresholdsConfig:
        return self._thresholds

    @property
    def spins(self) -> int:
        """Outcomes accepted since construction or the last reset."""
        return self._store.spins

    def update(self, outcome: int) -> None:
        """Apply one outcome to every category.

        Hit members: absence → 0, count + 1, streak + 1, max_streak updated.
        Every other member of every category: absence + 1, streak → 0.

        Raises:
            InvalidOutcomeError: If ``outcome`` is not an int in ``[0, 36]``;
                the store is left unchanged.
        """
        try:
            hits = hits_for(outcome)
        except InvalidOutcomeError:
            logger.warning("Rejected outcome %r", outcome)
            raise
        self._store.apply(hits)
        logger.debug("Applied outcome %d (spin %d)", outcome, self._store.spins)

    def reset(self) -> None:
        """Discard all statistics and start from a fresh store."""
        self._store = CategoryStore()
        logger.info("Statistics reset")

    def snapshot(self) -> RouletteStats:
        """Return a read-only copy of the full category store."""
        return self._store.to_stats()

    # ── Thresholds ────────────────────────────────────────────────────────────

    def set_thresholds(self, thresholds: ThresholdsConfig | Mapping[str, Any]) -> None:
        """Replace the thresholds without touching streak state.

        Raises:
            InvalidThresholdError: If ``thresholds`` cannot be validated; the
                current thresholds are kept.
        """
        self._thresholds = coerce_thresholds(thresholds)
        logger.info("Thresholds updated: %s", self._thresholds.model_dump())

    def reconfigure(self, thresholds: ThresholdsConfig | Mapping[str, Any]) -> None:
        """Replace the thresholds and reset all statistics (destructive).

        Raises:
            InvalidThresholdError: If ``thresholds`` cannot be validated; in
                that case neither thresholds nor statistics change.
        """
        self.set_thresholds(thresholds)
        self.reset()

    # ── Recommendations ───────────────────────────────────────────────────────

    def bets(self) -> list[Bet]:
        """Unranked, unstaked qualifying bets for the current state."""
        return select_bets(self.snapshot(), self._thresholds)

    def evaluate(self, base_stake: float) -> list[Recommendation]:
        """Ranked, staked recommendations for the current state.

        Has no side effects and may be called any number of times.
        """
        return build_recommendations(self.bets(), base_stake)
