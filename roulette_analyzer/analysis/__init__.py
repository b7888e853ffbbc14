"""
Statistics state and its only writer.

Modules
-------
store  : StatRecord + CategoryStore — mutable per-member records.
engine : AnalyzerEngine — update() / reset() / snapshot() / evaluate().
"""
