"""
Recommendation engine: converts a statistics snapshot into ranked, staked
bet recommendations with human-readable reasons.

Modules
-------
scorer : compute_stake() + build_reason() — pure functions, no state.
ranker : select_bets() + rank_bets() + build_recommendations() + evaluate().
"""
