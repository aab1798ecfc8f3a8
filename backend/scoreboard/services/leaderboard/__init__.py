"""Leaderboard domain services: ranking rules and the file-backed store.

HTTP routes and CLI commands import from here; the store owns all access to
the backing file and the ranking module holds the pure merge rules.
"""

from .store import LeaderboardStore

__all__ = ['LeaderboardStore']
