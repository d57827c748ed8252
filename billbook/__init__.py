"""
Bill Book - Source Package

A shared expense ledger for a small household: pick who you are,
record what you spent, and see who has spent how much on what.

DESIGN PRINCIPLES:
1. One explicit store object, persistence injected
2. Fail early, fail visibly
3. Totals are always derived, never stored
4. Every user action is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Bill Book Team"
