"""
Single-match cricket scorekeeping engine.

Typical usage:

    from scorekeeper import (
        BallEvent, MatchConfig, OpeningPlayers, TossResult,
        apply_event, start_match,
    )

    state = start_match(
        MatchConfig(team_a="Redhawks", team_b="Bluesharks", total_overs=5),
        TossResult(winner="Redhawks", elected_to="bat"),
        OpeningPlayers(striker="Asha", non_striker="Ben", bowler="Cara"),
    )
    state = apply_event(state, BallEvent.runs(4))

The stateful ScoringSession (persistence, undo, background analysis) lives
in scorekeeper.session.
"""

from .errors import (  # noqa: F401
    AnalysisUnavailable,
    InvalidStateError,
    InvalidTransitionError,
    PersistenceReadError,
    ScorekeeperError,
)
from .events.schema import BallEvent, EventKind  # noqa: F401
from .state.cricket_state import (  # noqa: F401
    MatchConfig,
    MatchState,
    MatchStatus,
    PendingRequest,
    PlayerStat,
    Team,
)
from .state.controller import (  # noqa: F401
    OpeningPlayers,
    TossResult,
    apply_event,
    begin_second_innings,
    resolve_new_batter,
    resolve_new_bowler,
    start_match,
)
from .state.undo import UndoStack, undo  # noqa: F401
from .state.stats import economy_rate, strike_rate  # noqa: F401

__version__ = "0.1.0"
