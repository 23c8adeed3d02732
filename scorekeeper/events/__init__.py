"""
Ball event abstractions.

- schema: EventKind enum and the BallEvent value submitted by the scorer.
"""

from .schema import EventKind, BallEvent, VALID_RUN_VALUES  # noqa: F401
