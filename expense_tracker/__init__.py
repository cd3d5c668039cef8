"""
Expense Tracker - Source Package

A personal expense log: dated, categorized monetary entries with a
running total, category filtering, deletion and JSON export, persisted
to a durable key-value slot.

DESIGN PRINCIPLES:
1. One owned store, passed explicitly to whoever needs it
2. Invalid records are rejected at the boundary
3. Storage failures degrade, they never crash
4. Every mutation is audited
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
