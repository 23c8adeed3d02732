from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional, Union

from scorekeeper.errors import InvalidStateError, InvalidTransitionError
from scorekeeper.events.schema import BallEvent
from scorekeeper.state.ball_processor import apply_delivery
from scorekeeper.state.cricket_state import (
    BALLS_PER_OVER,
    MAX_WICKETS,
    MatchConfig,
    MatchState,
    MatchStatus,
    PendingRequest,
    Team,
)

DRAW = "DRAW"
DRAW_MARGIN = "Match Drawn!"


@dataclass(frozen=True)
class TossResult:
    winner: str
    elected_to: str  # "bat" | "bowl"


@dataclass(frozen=True)
class OpeningPlayers:
    striker: str
    non_striker: str
    bowler: str


def _margin(n: int, unit: str) -> str:
    return f"won by {n} {unit}" + ("" if n == 1 else "s")


# ----------------------------------------------------------------------
# Match start
# ----------------------------------------------------------------------


def start_match(
    config: MatchConfig,
    toss: TossResult,
    openers: OpeningPlayers,
    match_id: Optional[str] = None,
    date: Optional[str] = None,
) -> MatchState:
    """
    Create the first-innings snapshot from the setup screen inputs.

    The toss decides who bats: the winner bats if they elected to bat,
    otherwise the other side does.
    """
    team_a, team_b = config.team_a.strip(), config.team_b.strip()
    if not team_a or not team_b:
        raise ValueError("Both team names are required")
    if team_a == team_b:
        raise ValueError("Team names must differ")
    if config.total_overs < 1:
        raise ValueError(f"total_overs must be positive (got {config.total_overs})")
    if toss.winner not in (team_a, team_b):
        raise ValueError(f"Toss winner {toss.winner!r} is not playing in this match")
    if toss.elected_to not in ("bat", "bowl"):
        raise ValueError(f"elected_to must be 'bat' or 'bowl' (got {toss.elected_to!r})")
    if openers.striker.strip() == openers.non_striker.strip():
        raise ValueError("Striker and non-striker must be different players")

    config = replace(
        config,
        team_a=team_a,
        team_b=team_b,
        toss_winner=toss.winner,
        elected_to=toss.elected_to,
    )

    batting_name = config.first_batting_team()
    bowling_name = team_b if batting_name == team_a else team_a

    batting, striker_id = Team(name=batting_name, is_batting=True).add_player(openers.striker)
    batting, non_striker_id = batting.add_player(openers.non_striker)
    bowling, bowler_id = Team(name=bowling_name).add_player(openers.bowler)

    now = datetime.now()
    return MatchState(
        id=match_id or str(int(now.timestamp() * 1000)),
        date=date or now.strftime("%Y-%m-%d"),
        config=config,
        batting_team=batting,
        bowling_team=bowling,
        current_striker_id=striker_id,
        current_non_striker_id=non_striker_id,
        current_bowler_id=bowler_id,
    )


# ----------------------------------------------------------------------
# Termination checks
# ----------------------------------------------------------------------


def is_all_out(state: MatchState) -> bool:
    return state.batting_team.wickets >= MAX_WICKETS


def is_overs_exhausted(state: MatchState) -> bool:
    return state.batting_team.legal_balls >= state.config.max_balls


def is_target_reached(state: MatchState) -> bool:
    """The chase is won on reaching the target, which is already first-innings score + 1."""
    return state.target is not None and state.batting_team.score >= state.target


def _dismissed_end(state: MatchState) -> Optional[str]:
    """Which crease position holds a dismissed batter, if any."""
    if state.striker.is_out:
        return "striker"
    if state.non_striker.is_out:
        return "non_striker"
    return None


def _complete(state: MatchState, winner: str, margin: str) -> MatchState:
    return replace(
        state,
        status=MatchStatus.COMPLETED,
        winner=winner,
        win_margin=margin,
        pending=PendingRequest.MATCH_COMPLETE,
    )


def settle(state: MatchState) -> MatchState:
    """
    Inspect a fresh snapshot and record what, if anything, the scorer must
    resolve before the next ball. Finalises the match when the second
    innings ends.
    """
    if state.status == MatchStatus.COMPLETED:
        return replace(state, pending=PendingRequest.MATCH_COMPLETE)

    batting = state.batting_team
    innings_done = is_all_out(state) or is_overs_exhausted(state)

    if state.current_innings == 2:
        target = state.target
        if is_target_reached(state):
            return _complete(state, batting.name, _margin(MAX_WICKETS - batting.wickets, "wicket"))
        if innings_done:
            if batting.score == target - 1:
                return _complete(state, DRAW, DRAW_MARGIN)
            return _complete(state, state.bowling_team.name, _margin(target - 1 - batting.score, "run"))
    elif innings_done:
        return replace(state, pending=PendingRequest.NEXT_INNINGS)

    if _dismissed_end(state) is not None:
        return replace(state, pending=PendingRequest.NEW_BATTER)

    if state.bowler_over < batting.legal_balls // BALLS_PER_OVER:
        return replace(state, pending=PendingRequest.NEW_BOWLER)

    return replace(state, pending=PendingRequest.NONE)


# ----------------------------------------------------------------------
# Operations
# ----------------------------------------------------------------------


def apply_event(state: MatchState, event: BallEvent) -> MatchState:
    """
    Record one ball and return the settled snapshot.

    Raises InvalidStateError if the match is over or a new batter, bowler
    or innings must be supplied first.
    """
    if state.status == MatchStatus.COMPLETED:
        raise InvalidStateError("Match is already completed")
    if state.pending != PendingRequest.NONE:
        raise InvalidStateError(f"Cannot record a ball while {state.pending.value} is pending")
    return settle(apply_delivery(state, event))


def resolve_new_batter(state: MatchState, name: str) -> MatchState:
    """
    Send in a batter to replace the dismissed one at the same end.

    A name already in the batting side is reused if that player is not out
    and not at the crease.
    """
    if state.pending != PendingRequest.NEW_BATTER:
        raise InvalidTransitionError(f"No new batter requested (pending: {state.pending.value})")

    end = _dismissed_end(state)
    batting, index = state.batting_team.add_player(name)
    player = batting.players[index]
    if player.is_out:
        raise ValueError(f"{player.name} has already been dismissed")
    if index in (state.current_striker_id, state.current_non_striker_id):
        raise ValueError(f"{player.name} is already at the crease")

    if end == "striker":
        new_state = replace(state, batting_team=batting, current_striker_id=index)
    else:
        new_state = replace(state, batting_team=batting, current_non_striker_id=index)
    return settle(new_state)


def resolve_new_bowler(
    state: MatchState,
    name_or_index: Union[str, int],
    forbid_consecutive_overs: bool = False,
) -> MatchState:
    """
    Choose the bowler for the next over, either an existing member of the
    fielding side (by index or name) or a new player by name.

    The previous over's bowler may continue unless forbid_consecutive_overs
    is set.
    """
    if state.pending != PendingRequest.NEW_BOWLER:
        raise InvalidTransitionError(f"No new bowler requested (pending: {state.pending.value})")

    bowling = state.bowling_team
    if isinstance(name_or_index, int):
        if not 0 <= name_or_index < len(bowling.players):
            raise ValueError(f"No player at index {name_or_index} in {bowling.name}")
        index = name_or_index
    else:
        bowling, index = bowling.add_player(name_or_index)

    if forbid_consecutive_overs and index == state.current_bowler_id:
        raise ValueError(f"{bowling.players[index].name} cannot bowl consecutive overs")

    new_state = replace(
        state,
        bowling_team=bowling,
        current_bowler_id=index,
        bowler_over=state.batting_team.legal_balls // BALLS_PER_OVER,
    )
    return settle(new_state)


def begin_second_innings(
    state: MatchState,
    striker: str,
    non_striker: str,
    bowler: str,
) -> MatchState:
    """
    Hand over to the chasing side once the first innings has ended.

    The side that bowled first now bats, the target is set to the first
    innings total plus one, and the per-innings buffers are reset (the
    match-long ball log is kept).
    """
    if state.current_innings != 1:
        raise InvalidTransitionError("Second innings has already begun")
    if not (is_all_out(state) or is_overs_exhausted(state)):
        raise InvalidTransitionError("First innings has not ended yet")
    if striker.strip() == non_striker.strip():
        raise ValueError("Striker and non-striker must be different players")

    first_innings_score = state.batting_team.score

    new_batting = replace(state.bowling_team, is_batting=True)
    new_bowling = replace(state.batting_team, is_batting=False)

    new_batting, striker_id = new_batting.add_player(striker)
    new_batting, non_striker_id = new_batting.add_player(non_striker)
    new_bowling, bowler_id = new_bowling.add_player(bowler)

    new_state = replace(
        state,
        current_innings=2,
        target=first_innings_score + 1,
        first_innings_score=first_innings_score,
        batting_team=new_batting,
        bowling_team=new_bowling,
        current_striker_id=striker_id,
        current_non_striker_id=non_striker_id,
        current_bowler_id=bowler_id,
        this_over=(),
        innings_log=(),
        bowler_over=0,
        pending=PendingRequest.NONE,
    )
    return settle(new_state)
