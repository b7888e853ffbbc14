"""
Outcome drivers for the analyzer engine.

Modules
-------
session : SpinSession (random spins, manual entry, timed loop) + parse_outcome().
"""
