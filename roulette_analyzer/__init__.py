"""Roulette Series Analyzer — category streak statistics and bet recommendations."""

__version__ = "0.1.0"
