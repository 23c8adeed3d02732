from __future__ import annotations

from typing import Iterable

from scorekeeper.events.schema import BallEvent
from scorekeeper.state.controller import OpeningPlayers, TossResult, apply_event, start_match
from scorekeeper.state.cricket_state import MatchConfig, MatchState

TEAM_A = "Redhawks"
TEAM_B = "Bluesharks"


def make_match(total_overs: int = 2, toss_winner: str = TEAM_A, elected_to: str = "bat", **overrides) -> MatchState:
    """Fresh first-innings match: S0 on strike, S1 at the other end, B0 bowling."""
    return start_match(
        MatchConfig(team_a=TEAM_A, team_b=TEAM_B, total_overs=total_overs),
        TossResult(winner=toss_winner, elected_to=elected_to),
        OpeningPlayers(
            striker=overrides.get("striker", "S0"),
            non_striker=overrides.get("non_striker", "S1"),
            bowler=overrides.get("bowler", "B0"),
        ),
        match_id=overrides.get("match_id", "match-1"),
        date=overrides.get("date", "2026-10-19"),
    )


def play(state: MatchState, tokens: Iterable[str]) -> MatchState:
    for tok in tokens:
        state = apply_event(state, BallEvent.from_token(tok))
    return state
