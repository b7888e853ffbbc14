"""
Bet selection and ranking: turns a ``RouletteStats`` snapshot plus a
thresholds record into an ordered list of staked ``Recommendation`` objects.

Usage flow
----------
1. select_bets(snapshot, thresholds)
   -> list[Bet]              (every member with absence >= its kind's threshold)

2. rank_bets(bets)
   -> list[Bet]              (stable sort, see below)

3. build_recommendations(bets, base_stake)
   -> list[Recommendation]   (rank + stake + reason)

Ranking keys (priority order)
-----------------------------
    1. absence_streak >= 5 before < 5
    2. even-money kinds (color, parity, range) before the rest
    3. absence_streak descending
Remaining ties keep emission order (``sorted`` is stable).
"""

from __future__ import annotations

from roulette_analyzer.config import ThresholdsConfig
from roulette_analyzer.models.bet import Bet, Recommendation
from roulette_analyzer.models.stats import RouletteStats
from roulette_analyzer.recommendations.scorer import (
    build_reason,
    compute_stake,
    is_even_money,
    is_long_absence,
)
from roulette_analyzer.taxonomy.bet_taxonomy import KIND_CATEGORY_MAP


def select_bets(snapshot: RouletteStats, thresholds: ThresholdsConfig) -> list[Bet]:
    """Emit one ``Bet`` per member whose absence streak reached its threshold.

    Every category is checked independently with the same rule; exclusive
    and overlapping categories are not treated differently and there is no
    cap on the number of bets.

    Args:
        snapshot:   Statistics snapshot to read (never mutated).
        thresholds: Absence-streak cutoff per bet kind.

    Returns:
        Bets in emission order (kind order of ``KIND_CATEGORY_MAP``, then
        member order of the category).
    """
    bets: list[Bet] = []
    for kind, category in KIND_CATEGORY_MAP.items():
        threshold = thresholds.for_kind(kind)
        for key, item in snapshot.category(category).items():
            if item.absence_streak >= threshold:
                bets.append(Bet(type=kind, value=key, absence_streak=item.absence_streak))
    return bets


def rank_bets(bets: list[Bet]) -> list[Bet]:
    """Return ``bets`` in recommendation order (stable)."""
    return sorted(
        bets,
        key=lambda b: (
            not is_long_absence(b.absence_streak),
            not is_even_money(b.type),
            -b.absence_streak,
        ),
    )


def build_recommendations(bets: list[Bet], base_stake: float) -> list[Recommendation]:
    """Rank ``bets`` and attach a stake and reason to each.

    Args:
        bets:       Output of ``select_bets()`` (any order).
        base_stake: Stake before sizing adjustments.

    Returns:
        Recommendations in rank order.
    """
    return [
        Recommendation(
            type=bet.type,
            value=bet.value,
            absence_streak=bet.absence_streak,
            stake=compute_stake(base_stake, bet.type, bet.absence_streak),
            reason=build_reason(bet.type, bet.absence_streak),
        )
        for bet in rank_bets(bets)
    ]


def evaluate(
    snapshot:   RouletteStats,
    thresholds: ThresholdsConfig,
    base_stake: float,
) -> list[Recommendation]:
    """Select, rank and stake in one call. Pure: reads ``snapshot`` only."""
    return build_recommendations(select_bets(snapshot, thresholds), base_stake)
