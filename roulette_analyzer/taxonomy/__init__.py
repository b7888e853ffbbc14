"""
Fixed outcome → category membership tables.

Modules
-------
bet_taxonomy : BetKind / Category enums, member tables, members_of().
"""
