from __future__ import annotations

from concurrent.futures import Future
from typing import Callable, Optional, Union

from scorekeeper.commentary.analysis import AnalysisResponse, MatchAnalyst
from scorekeeper.config import UNDO_CAPACITY
from scorekeeper.errors import InvalidTransitionError
from scorekeeper.events.schema import BallEvent
from scorekeeper.state import controller
from scorekeeper.state.cricket_state import MatchConfig, MatchState, MatchStatus, PendingRequest
from scorekeeper.state.undo import UndoStack, undo
from scorekeeper.storage.match_store import MatchStore


class ScoringSession:
    """
    Stateful front end for one match, as used by a scoring UI.

    Holds the current snapshot and the undo stack, persists every change
    through an optional MatchStore and archives the match to history when
    it completes. Analysis requests run in the background and never block
    scoring.
    """

    def __init__(
        self,
        state: MatchState,
        store: Optional[MatchStore] = None,
        analyst: Optional[MatchAnalyst] = None,
        undo_capacity: int = UNDO_CAPACITY,
        forbid_consecutive_overs: bool = False,
        debug: bool = False,
    ) -> None:
        self.state = state
        self.store = store
        self.analyst = analyst
        self.undo_stack = UndoStack(undo_capacity)
        self.forbid_consecutive_overs = forbid_consecutive_overs
        self.debug = debug

    @classmethod
    def start(
        cls,
        config: MatchConfig,
        toss: controller.TossResult,
        openers: controller.OpeningPlayers,
        **kwargs,
    ) -> "ScoringSession":
        session = cls(controller.start_match(config, toss, openers), **kwargs)
        session._persist()
        return session

    @classmethod
    def resume(cls, store: MatchStore, **kwargs) -> Optional["ScoringSession"]:
        """Reopen the saved active match, if there is a readable one."""
        state = store.load_active_match()
        if state is None:
            return None
        return cls(state, store=store, **kwargs)

    # ------------------------------------------------------------------

    @property
    def pending(self) -> PendingRequest:
        return self.state.pending

    @property
    def is_complete(self) -> bool:
        return self.state.status == MatchStatus.COMPLETED

    def _persist(self) -> None:
        if self.store is None:
            return
        self.store.save_active_match(self.state)
        if self.state.status == MatchStatus.COMPLETED:
            self.store.append_to_history(self.state)

    def _commit(self, op: Callable[..., MatchState], *args, **kwargs) -> MatchState:
        before = self.state
        after = op(before, *args, **kwargs)
        self.undo_stack.push(before)
        self.state = after
        if self.debug:
            print(f"[Session] {after}")
        self._persist()
        return after

    # ------------------------------------------------------------------
    # Scoring operations
    # ------------------------------------------------------------------

    def record(self, event: Union[BallEvent, str]) -> MatchState:
        """Record one ball, given as a BallEvent or a scorer token like "4" or "WD"."""
        if not isinstance(event, BallEvent):
            event = BallEvent.from_token(event)
        return self._commit(controller.apply_event, event)

    def new_batter(self, name: str) -> MatchState:
        return self._commit(controller.resolve_new_batter, name)

    def new_bowler(self, name_or_index: Union[str, int]) -> MatchState:
        return self._commit(
            controller.resolve_new_bowler,
            name_or_index,
            forbid_consecutive_overs=self.forbid_consecutive_overs,
        )

    def next_innings(self, striker: str, non_striker: str, bowler: str) -> MatchState:
        try:
            return self._commit(controller.begin_second_innings, striker, non_striker, bowler)
        except InvalidTransitionError as e:
            print(f"[WARN] Innings handover rejected: {e}")
            raise

    def undo(self) -> bool:
        """Step back one operation. Returns False if there was nothing to undo."""
        if not self.undo_stack:
            print("[Session] Nothing to undo.")
            return False
        self.state, self.undo_stack = undo(self.state, self.undo_stack, debug=self.debug)
        if self.store is not None:
            self.store.save_active_match(self.state)
        return True

    def finish(self) -> None:
        """Leave the scoreboard: the active-match slot is cleared and the analyst stopped."""
        if self.store is not None:
            self.store.clear_active_match()
        if self.analyst is not None:
            self.analyst.shutdown()

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    def request_analysis(self) -> Optional["Future[AnalysisResponse]"]:
        if self.analyst is None:
            return None
        return self.analyst.analyze_in_background(self.state)
