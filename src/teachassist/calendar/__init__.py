"""
Calendar

Event CRUD over the table store plus overdue rules.
"""

from .rules import is_overdue

__all__ = ["is_overdue"]
