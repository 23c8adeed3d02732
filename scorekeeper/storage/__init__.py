"""
Persistence for the active match and completed-match history.
"""

from .match_store import MatchStore, ACTIVE_MATCH_KEY, HISTORY_KEY  # noqa: F401
