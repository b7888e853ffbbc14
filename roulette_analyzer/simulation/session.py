"""
Spin session driver: feeds outcomes into one ``AnalyzerEngine``.

Outcomes come from two sources:

  - ``spin()``: a uniform draw from 0–36 using a seedable ``random.Random``.
  - ``enter(outcome)``: manual entry of an observed result.

Both go through the same single-flight path: a non-blocking lock guards the
engine update, and a second caller arriving while an update is in flight gets
``SpinInProgressError`` instead of running concurrently.

``run()`` is the timed loop (``time.sleep`` between spins) and can be stopped
early with ``stop()`` from a callback or another thread.

Typical usage::

    engine = AnalyzerEngine(config.thresholds)
    session = SpinSession(engine, rng=random.Random(42))
    for result in session.run(spins=20, delay_ms=0):
        print(result.outcome, len(result.recommendations))
"""

from __future__ import annotations

import logging
import random
import threading
import time
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from roulette_analyzer.analysis.engine import AnalyzerEngine
from roulette_analyzer.models.bet import Recommendation
from roulette_analyzer.models.stats import RouletteStats
from roulette_analyzer.taxonomy.bet_taxonomy import (
    MAX_OUTCOME,
    MIN_OUTCOME,
    InvalidOutcomeError,
    validate_outcome,
)

logger = logging.getLogger(__name__)


class SpinInProgressError(RuntimeError):
    """Raised when an outcome arrives while another update is still running."""

    def __init__(self) -> None:
        super().__init__("A spin is already being processed; wait for it to finish.")


@dataclass(frozen=True)
class SpinResult:
    """What one processed outcome produced.

    Attributes:
        outcome:         The applied outcome.
        snapshot:        Statistics right after the update.
        recommendations: Ranked, staked bets for that snapshot.
    """

    outcome:         int
    snapshot:        RouletteStats
    recommendations: list[Recommendation]


def parse_outcome(text: str) -> int:
    """Parse a manually entered outcome.

    Raises:
        InvalidOutcomeError: If ``text`` is not an integer in ``[0, 36]``.
    """
    try:
        value = int(text.strip())
    except (AttributeError, ValueError):
        raise InvalidOutcomeError(text) from None
    return validate_outcome(value)


class SpinSession:
    """Owns one engine, the recent outcome history and the spin loop.

    Parameters
    ----------
    engine:
        The analyzer engine to feed.  The session is its only writer.
    rng:
        Random source for ``spin()``.  A fresh unseeded ``random.Random``
        when *None*.
    history_size:
        How many recent outcomes to keep (oldest dropped first).
    base_stake:
        Stake passed to ``engine.evaluate()`` after every outcome.
    """

    def __init__(
        self,
        engine: AnalyzerEngine,
        rng: Optional[random.Random] = None,
        history_size: int = 100,
        base_stake: float = 10.0,
    ) -> None:
        self.engine = engine
        self.rng = rng or random.Random()
        self.base_stake = base_stake
        self._history: deque[int] = deque(maxlen=history_size)
        self._busy = threading.Lock()
        self._running = False

    @property
    def history(self) -> list[int]:
        """Recent outcomes, oldest first."""
        return list(self._history)

    @property
    def running(self) -> bool:
        return self._running

    # ── Single outcomes ───────────────────────────────────────────────────────

    def spin(self) -> SpinResult:
        """Draw a random outcome and process it."""
        return self._process(self.rng.randint(MIN_OUTCOME, MAX_OUTCOME))

    def enter(self, outcome: int) -> SpinResult:
        """Process a manually entered outcome.

        Raises:
            InvalidOutcomeError: If ``outcome`` is invalid; history and
                statistics are left unchanged.
            SpinInProgressError: If another outcome is being processed.
        """
        return self._process(outcome)

    def _process(self, outcome: int) -> SpinResult:
        if not self._busy.acquire(blocking=False):
            logger.warning("Skipped outcome %r: another spin is in progress", outcome)
            raise SpinInProgressError()
        try:
            self.engine.update(outcome)
            self._history.append(outcome)
            return SpinResult(
                outcome=outcome,
                snapshot=self.engine.snapshot(),
                recommendations=self.engine.evaluate(self.base_stake),
            )
        finally:
            self._busy.release()

    # ── Loop ──────────────────────────────────────────────────────────────────

    def run(
        self,
        spins: int,
        delay_ms: int = 0,
        on_result: Optional[Callable[[SpinResult], None]] = None,
    ) -> list[SpinResult]:
        """Spin ``spins`` times, sleeping ``delay_ms`` between spins.

        Args:
            spins:     Number of spins to run (must be >= 1).
            delay_ms:  Pause between consecutive spins, in milliseconds.
            on_result: Called after each spin with its ``SpinResult``.

        Returns:
            Results in spin order; shorter than ``spins`` if ``stop()`` was
            called.
        """
        if spins < 1:
            raise ValueError(f"spins must be >= 1, got {spins}.")

        results: list[SpinResult] = []
        self._running = True
        logger.info("Session started: %d spins, %d ms apart", spins, delay_ms)
        try:
            for i in range(spins):
                if not self._running:
                    break
                if i and delay_ms:
                    time.sleep(delay_ms / 1000.0)
                result = self.spin()
                results.append(result)
                if on_result is not None:
                    on_result(result)
        finally:
            self._running = False
            logger.info("Session stopped after %d spins", len(results))
        return results

    def stop(self) -> None:
        """Ask a running ``run()`` loop to finish after the current spin."""
        self._running = False

    def clear(self) -> None:
        """Stop the loop, reset the engine and forget the history.

        Waits for an in-flight spin to finish so history and statistics are
        cleared together.
        """
        self.stop()
        with self._busy:
            self.engine.reset()
            self._history.clear()
