from __future__ import annotations


class ScorekeeperError(Exception):
    """Base class for scoring engine errors."""


class InvalidStateError(ScorekeeperError):
    """
    A ball event was submitted while the match cannot accept one: a new
    batter, bowler or innings is still pending, or the match is over.
    """


class InvalidTransitionError(ScorekeeperError):
    """An innings handover or player resolution was requested out of order."""


class PersistenceReadError(ScorekeeperError):
    """Saved match data could not be parsed back into a snapshot."""


class AnalysisUnavailable(ScorekeeperError):
    """The analysis service failed or returned an unusable payload."""
