"""
ASCII terminal formatters for CLI output.

All formatters accept snapshots / recommendation lists and return plain
multi-line strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Threshold markers
-----------------
``format_stats_table()`` marks a member with ``*`` once its absence streak
has reached the threshold of its bet kind, i.e. once it would appear in the
recommendations::

  [COLORS]  threshold 8
    Member        Absence  Streak     Max   Count
    red                 0       2       3      11
    black *             9       0       2       7

Large categories (splits, corners, six-lines, straights) only show their
top-3 members by absence streak.
"""

from __future__ import annotations

from roulette_analyzer.config import ThresholdsConfig
from roulette_analyzer.models.bet import Recommendation
from roulette_analyzer.models.stats import RouletteStats, StatItem
from roulette_analyzer.taxonomy.bet_taxonomy import (
    CATEGORY_KIND_MAP,
    RED_NUMBERS,
    Category,
)

_TOP_N_CATEGORIES: frozenset[Category] = frozenset({
    Category.SPLITS, Category.CORNERS, Category.SIXLINES, Category.STRAIGHTS,
})


def top_members_by_absence(
    items: dict[str, StatItem],
    n: int = 3,
) -> list[tuple[str, StatItem]]:
    """Return the ``n`` members with the longest absence streak.

    Ties keep member order (stable sort).
    """
    ranked = sorted(items.items(), key=lambda kv: -kv[1].absence_streak)
    return ranked[:n]


# ── Statistics ────────────────────────────────────────────────────────────────


def format_stats_table(snapshot: RouletteStats, thresholds: ThresholdsConfig) -> str:
    """Format every category as an ASCII block.

    Args:
        snapshot:   Statistics snapshot.
        thresholds: Used to mark members that reached their threshold.

    Returns:
        Multi-line string.
    """
    lines: list[str] = []
    lines.append("")
    lines.append("=== Statistics ===")
    lines.append(f"  Spins: {snapshot.spins}")

    for category in Category:
        threshold = thresholds.for_kind(CATEGORY_KIND_MAP[category])
        items = snapshot.category(category)
        if category in _TOP_N_CATEGORIES:
            rows = top_members_by_absence(items)
            title = f"  [{category.upper()}]  threshold {threshold}  (top {len(rows)} by absence)"
        else:
            rows = list(items.items())
            title = f"  [{category.upper()}]  threshold {threshold}"

        lines.append("")
        lines.append(title)
        lines.append(
            f"    {'Member':<20}  {'Absence':>7}  {'Streak':>6}  {'Max':>6}  {'Count':>6}"
        )
        for key, item in rows:
            marker = " *" if item.absence_streak >= threshold else ""
            label = f"{key}{marker}"
            lines.append(
                f"    {label:<20}  {item.absence_streak:>7}  {item.streak:>6}  "
                f"{item.max_streak:>6}  {item.count:>6}"
            )

    return "\n".join(lines)


# ── Recommendations ───────────────────────────────────────────────────────────


def format_recommendations(recommendations: list[Recommendation]) -> str:
    """Format ranked recommendations as an ASCII table.

    Rows appear in the order given (already ranked by the ranker).
    """
    lines: list[str] = []
    lines.append("")
    lines.append("=== Recommended Bets ===")

    if not recommendations:
        lines.append("  (no recommended bets at this time)")
        return "\n".join(lines)

    lines.append(
        f"  {'Rank':>4}  {'Type':<8}  {'Value':<20}  {'Absence':>7}  {'Stake':>9}  Reason"
    )
    lines.append("  " + "-" * 78)
    for rank, rec in enumerate(recommendations, start=1):
        lines.append(
            f"  {rank:>4}  {rec.type.value:<8}  {rec.value:<20}  "
            f"{rec.absence_streak:>7}  {rec.stake:>9.2f}  {rec.reason}"
        )
    return "\n".join(lines)


# ── History ───────────────────────────────────────────────────────────────────


def _color_tag(outcome: int) -> str:
    if outcome == 0:
        return "G"
    return "R" if outcome in RED_NUMBERS else "B"


def format_history(history: list[int]) -> str:
    """Format recent outcomes newest first, each with an R/B/G colour tag."""
    lines = ["", "=== Last Spins ==="]
    if not history:
        lines.append("  (no spins yet)")
        return "\n".join(lines)
    lines.append("  " + ", ".join(f"{n}{_color_tag(n)}" for n in reversed(history)))
    return "\n".join(lines)
