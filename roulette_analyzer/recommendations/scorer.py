"""
Bet sizing: converts a bet kind + absence streak into a stake and a
human-readable reason.

Stake formula
-------------
    stake = base_stake
    if absence_streak >= 5:
        stake *= 1 + (absence_streak - 4) * 0.25     # 5 → ×1.25, 6 → ×1.5, …
    if kind in {color, parity, range}:
        stake *= 1.2                                  # even-money boost
    stake = round_half_away_from_zero(stake, 2)

The stake equals ``base_stake`` (rounded) when neither rule applies, and is
monotonic non-decreasing in ``absence_streak`` from 5 upward.

Reason text
-----------
Built from the same two conditions::

    "Long absence (7 spins) and Even-money bet"
    "Long absence (5 spins)"
    "Even-money bet"
    "Standard recommendation"
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from roulette_analyzer.taxonomy.bet_taxonomy import EVEN_MONEY_KINDS, BetKind

LONG_ABSENCE_START = 5
RAMP_PER_SPIN = 0.25
EVEN_MONEY_MULTIPLIER = 1.2

_CENT = Decimal("0.01")


def is_long_absence(absence_streak: int) -> bool:
    return absence_streak >= LONG_ABSENCE_START


def is_even_money(kind: BetKind | str) -> bool:
    return BetKind(kind) in EVEN_MONEY_KINDS


def compute_stake(base_stake: float, kind: BetKind | str, absence_streak: int) -> float:
    """Compute the suggested stake for one bet.

    Args:
        base_stake:     Stake before adjustments.
        kind:           Bet kind (``BetKind`` or its string value).
        absence_streak: Spins since the member was last hit.

    Returns:
        Stake rounded to 2 decimals, halves rounded away from zero.
    """
    stake = base_stake
    if is_long_absence(absence_streak):
        stake *= 1 + (absence_streak - (LONG_ABSENCE_START - 1)) * RAMP_PER_SPIN
    if is_even_money(kind):
        stake *= EVEN_MONEY_MULTIPLIER
    return round_money(stake)


def build_reason(kind: BetKind | str, absence_streak: int) -> str:
    """Assemble the reason string for one bet.

    Returns:
        Non-empty reason string.
    """
    reasons: list[str] = []
    if is_long_absence(absence_streak):
        reasons.append(f"Long absence ({absence_streak} spins)")
    if is_even_money(kind):
        reasons.append("Even-money bet")
    return " and ".join(reasons) or "Standard recommendation"


# ── Helper ────────────────────────────────────────────────────────────────────

def round_money(value: float) -> float:
    """Round to cents with ROUND_HALF_UP (half away from zero)."""
    return float(Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP))
