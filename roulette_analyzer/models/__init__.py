"""
Frozen pydantic models crossing the engine boundary.

Modules
-------
stats : StatItem + RouletteStats (read-only snapshot).
bet   : Bet + Recommendation (evaluation output).
"""
