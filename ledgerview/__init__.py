"""
Ledgerview

A personal-finance dashboard over a ledger HTTP API: income, expense and
repayment timelines, calendar heatmaps and hierarchical asset breakdowns.
"""

__version__ = "1.0.0"
