"""
Tests for roulette_analyzer/simulation/session.py.

What we test
------------
parse_outcome():
  - Accepts integer text with surrounding whitespace.
  - Rejects non-numeric, fractional and out-of-range text.

SpinSession:
  - Same seed → same outcome sequence.
  - enter() updates the engine and history; invalid input changes nothing.
  - History keeps only the most recent ``history_size`` outcomes.
  - A second outcome while one is in flight raises SpinInProgressError.
  - run() sleeps between spins, honours stop(), rejects spins < 1.
  - clear() resets the engine and history, waiting for an in-flight spin.
"""

from __future__ import annotations

import random
import threading

import pytest

from roulette_analyzer.analysis.engine import AnalyzerEngine
from roulette_analyzer.simulation.session import (
    SpinInProgressError,
    SpinResult,
    SpinSession,
    parse_outcome,
)
from roulette_analyzer.taxonomy.bet_taxonomy import Category, InvalidOutcomeError


class _HeldEngine(AnalyzerEngine):
    """Engine whose update() blocks until released from the test."""

    def __init__(self) -> None:
        super().__init__()
        self.entered = threading.Event()
        self.release = threading.Event()

    def update(self, outcome: int) -> None:
        self.entered.set()
        self.release.wait(timeout=5)
        super().update(outcome)


class TestParseOutcome:
    @pytest.mark.parametrize("text, expected", [("0", 0), ("17", 17), (" 36 \n", 36)])
    def test_valid(self, text, expected):
        assert parse_outcome(text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "4.5", "-1", "37", "1e1"])
    def test_invalid(self, text):
        with pytest.raises(InvalidOutcomeError):
            parse_outcome(text)


class TestSpin:
    def test_seeded_sessions_agree(self):
        a = SpinSession(AnalyzerEngine(), rng=random.Random(7))
        b = SpinSession(AnalyzerEngine(), rng=random.Random(7))
        outcomes_a = [a.spin().outcome for _ in range(30)]
        outcomes_b = [b.spin().outcome for _ in range(30)]
        assert outcomes_a == outcomes_b
        assert a.engine.snapshot() == b.engine.snapshot()

    def test_outcomes_in_range(self, seeded_session):
        for _ in range(200):
            assert 0 <= seeded_session.spin().outcome <= 36

    def test_result_carries_snapshot_and_recommendations(self, seeded_session):
        result = seeded_session.spin()
        assert isinstance(result, SpinResult)
        assert result.snapshot.spins == 1
        assert result.recommendations == seeded_session.engine.evaluate(10.0)


class TestEnter:
    def test_enter_updates_engine_and_history(self, seeded_session):
        result = seeded_session.enter(17)
        assert result.outcome == 17
        assert seeded_session.history == [17]
        assert result.snapshot.item(Category.STRAIGHTS, "17").count == 1

    def test_invalid_outcome_changes_nothing(self, seeded_session):
        seeded_session.enter(4)
        before = seeded_session.engine.snapshot()
        with pytest.raises(InvalidOutcomeError):
            seeded_session.enter(40)
        assert seeded_session.history == [4]
        assert seeded_session.engine.snapshot() == before

    def test_history_bounded(self, seeded_session):
        for outcome in range(1, 9):
            seeded_session.enter(outcome)
        assert seeded_session.history == [4, 5, 6, 7, 8]
        assert seeded_session.engine.spins == 8

    def test_in_flight_outcome_rejected(self, seeded_session):
        seeded_session._busy.acquire()
        try:
            with pytest.raises(SpinInProgressError):
                seeded_session.enter(5)
        finally:
            seeded_session._busy.release()
        assert seeded_session.history == []
        assert seeded_session.engine.spins == 0

    def test_lock_released_after_error(self, seeded_session):
        with pytest.raises(InvalidOutcomeError):
            seeded_session.enter(-1)
        seeded_session.enter(1)
        assert seeded_session.history == [1]


class TestRun:
    def test_run_spins(self, seeded_session):
        results = seeded_session.run(12)
        assert len(results) == 12
        assert seeded_session.engine.spins == 12
        assert seeded_session.history == [r.outcome for r in results[-5:]]
        assert not seeded_session.running

    def test_delay_between_spins(self, seeded_session, monkeypatch):
        sleeps: list[float] = []
        monkeypatch.setattr("roulette_analyzer.simulation.session.time.sleep", sleeps.append)
        seeded_session.run(4, delay_ms=50)
        assert sleeps == [pytest.approx(0.05)] * 3

    def test_stop_from_callback(self, seeded_session):
        seen: list[SpinResult] = []

        def on_result(result):
            seen.append(result)
            if len(seen) == 3:
                seeded_session.stop()

        results = seeded_session.run(20, on_result=on_result)
        assert len(results) == 3
        assert seen == results
        assert seeded_session.engine.spins == 3

    @pytest.mark.parametrize("spins", [0, -2])
    def test_spins_must_be_positive(self, seeded_session, spins):
        with pytest.raises(ValueError):
            seeded_session.run(spins)

    def test_clear(self, seeded_session):
        seeded_session.run(6)
        seeded_session.clear()
        assert seeded_session.history == []
        assert seeded_session.engine.snapshot() == AnalyzerEngine().snapshot()

    def test_clear_waits_for_in_flight_spin(self):
        engine = _HeldEngine()
        session = SpinSession(engine)
        spinner = threading.Thread(target=session.enter, args=(7,))
        spinner.start()
        assert engine.entered.wait(timeout=5)

        clearer = threading.Thread(target=session.clear)
        clearer.start()
        clearer.join(timeout=0.2)
        assert clearer.is_alive()

        engine.release.set()
        spinner.join(timeout=5)
        clearer.join(timeout=5)
        assert not clearer.is_alive()
        assert session.history == []
        assert engine.spins == 0
