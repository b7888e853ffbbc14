"""
Plain-text rendering of statistics, history and recommendations.

Modules
-------
formatters : format_stats_table() + format_recommendations() + format_history().
"""
