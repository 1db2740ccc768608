"""
Ledger Facade - Source Package

A small HTTP facade over an Actual Budget ledger: validated accounts,
per-category budget lookups and transaction submission.

DESIGN PRINCIPLES:
1. Nothing from the ledger is trusted before it is validated
2. Fail early, fail visibly
3. No silent corrections
4. Every request outcome is auditable
5. The ledger transport is swappable
"""

__version__ = "1.0.0"
__author__ = "Ledger Facade Team"
