"""
State tracking for a single cricket match.

- cricket_state: immutable MatchState snapshot and its parts.
- ball_processor: pure per-delivery scoring rules.
- controller: innings/match termination, player resolution, handover.
- undo: bounded stack of prior snapshots.
- stats: strike rate, economy, scorecards and innings progression.
"""

from .cricket_state import (  # noqa: F401
    MatchConfig,
    MatchState,
    MatchStatus,
    PendingRequest,
    PlayerStat,
    Team,
)
from .ball_processor import apply_delivery  # noqa: F401
from .controller import (  # noqa: F401
    OpeningPlayers,
    TossResult,
    apply_event,
    begin_second_innings,
    resolve_new_batter,
    resolve_new_bowler,
    start_match,
)
from .undo import UndoStack, undo  # noqa: F401
from .stats import economy_rate, strike_rate  # noqa: F401
