"""
Shared pytest fixtures for the Roulette Series Analyzer test suite.

Provides:
  - ``default_thresholds`` / ``low_thresholds``: ``ThresholdsConfig`` records.
  - ``engine``: a fresh ``AnalyzerEngine`` with the default thresholds.
  - ``fed_engine``: an engine that has already seen a short fixed sequence.
  - ``seeded_session``: a ``SpinSession`` with a deterministic RNG.
"""

from __future__ import annotations

import random

import pytest

from roulette_analyzer.analysis.engine import AnalyzerEngine
from roulette_analyzer.config import ThresholdsConfig
from roulette_analyzer.simulation.session import SpinSession

# 1 red/odd/low, 3 red/odd/low, 5 red/odd/low, 0, 17 black/odd/low, 32 red/even/high
SAMPLE_OUTCOMES: list[int] = [1, 3, 5, 0, 17, 32]


@pytest.fixture
def default_thresholds() -> ThresholdsConfig:
    return ThresholdsConfig()


@pytest.fixture
def low_thresholds() -> ThresholdsConfig:
    """Thresholds of 3 for every kind, so recommendations appear quickly."""
    return ThresholdsConfig(
        color=3, parity=3, range=3, dozen=3, column=3,
        sixline=3, corner=3, street=3, split=3, straight=3,
    )


@pytest.fixture
def engine() -> AnalyzerEngine:
    return AnalyzerEngine()


@pytest.fixture
def fed_engine() -> AnalyzerEngine:
    eng = AnalyzerEngine()
    for outcome in SAMPLE_OUTCOMES:
        eng.update(outcome)
    return eng


@pytest.fixture
def seeded_session(low_thresholds: ThresholdsConfig) -> SpinSession:
    return SpinSession(
        AnalyzerEngine(low_thresholds),
        rng=random.Random(1234),
        history_size=5,
        base_stake=10.0,
    )
