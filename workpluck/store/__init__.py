"""
Store module.
Contains the in-memory work store shared by all request handlers.
"""

from workpluck.store.work_store import WorkStore, utc_now

__all__ = ["WorkStore", "utc_now"]
