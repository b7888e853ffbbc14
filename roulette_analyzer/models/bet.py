"""
Bet recommendation output models.

``Bet`` is the raw selection result: a category member whose absence streak
reached its kind's threshold.  ``Recommendation`` adds the stake and the
reason text produced by the sizing pass.

Both are frozen and recomputed on every evaluation; nothing stores them.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

from roulette_analyzer.taxonomy.bet_taxonomy import BetKind


class Bet(BaseModel):
    """A qualifying category member.

    Attributes:
        type: Bet kind, e.g. ``BetKind.COLOR``.
        value: Member key within the kind's category, e.g. ``"black"``.
        absence_streak: Spins since the member was last hit.
    """

    model_config = ConfigDict(frozen=True)

    type: BetKind
    value: str
    absence_streak: int

    @field_validator("absence_streak")
    @classmethod
    def validate_absence_streak(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"absence_streak must be non-negative, got {v}.")
        return v


class Recommendation(Bet):
    """A ranked, staked bet ready for presentation.

    Attributes:
        stake: Suggested stake, rounded to 2 decimals.
        reason: Human-readable explanation of the stake adjustments.
    """

    stake: float
    reason: str

    @field_validator("reason")
    @classmethod
    def validate_reason_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("reason must not be empty.")
        return v.strip()
