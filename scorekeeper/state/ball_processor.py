from __future__ import annotations

from dataclasses import replace

from scorekeeper.events.schema import BallEvent, EventKind
from scorekeeper.state.cricket_state import (
    BALLS_PER_OVER,
    MAX_WICKETS,
    BallRecord,
    MatchState,
)

# Team runs added by each kind of event, independent of the event value.
# RUNS and BYE use the event value instead.
PENALTY_RUNS = {
    EventKind.WICKET: 0,
    EventKind.WIDE: 1,
    EventKind.NO_BALL: 1,
}


def runs_charged_to_bowler(token: str) -> int:
    """
    Runs a bowler concedes for an over-strip token. Byes are not charged.
    """
    if token.isdigit():
        return int(token)
    if token in ("WD", "NB"):
        return 1
    return 0


def token_team_runs(token: str) -> int:
    """Runs a token added to the batting side's total."""
    if token.isdigit():
        return int(token)
    if token in ("WD", "NB"):
        return 1
    if token.startswith("B") and token[1:].isdigit():
        return int(token[1:])
    return 0


def _swap_strike(state: MatchState) -> MatchState:
    return replace(
        state,
        current_striker_id=state.current_non_striker_id,
        current_non_striker_id=state.current_striker_id,
    )


def apply_delivery(state: MatchState, event: BallEvent) -> MatchState:
    """
    Apply the scoring rules for one delivery and return the next snapshot.

    The input snapshot is left untouched. This does not check whether the
    match is able to accept a ball; see controller.apply_event for that.
    """
    kind = event.kind
    batting = state.batting_team
    bowling = state.bowling_team
    striker = state.striker
    bowler = state.bowler

    team_runs = 0
    extras = 0
    wickets = batting.wickets

    # 1) Batter, bowler and team tallies
    if kind == EventKind.RUNS:
        v = event.value
        striker = replace(
            striker,
            runs=striker.runs + v,
            balls=striker.balls + 1,
            fours=striker.fours + (1 if v == 4 else 0),
            sixes=striker.sixes + (1 if v == 6 else 0),
        )
        bowler = replace(
            bowler,
            runs_conceded=bowler.runs_conceded + v,
            balls_bowled=bowler.balls_bowled + 1,
        )
        team_runs = v
    elif kind == EventKind.WICKET:
        striker = replace(
            striker,
            balls=striker.balls + 1,
            is_out=True,
            out_by=f"b {bowler.name}",
        )
        bowler = replace(
            bowler,
            wickets=bowler.wickets + 1,
            balls_bowled=bowler.balls_bowled + 1,
        )
        wickets = min(MAX_WICKETS, wickets + 1)
    elif kind == EventKind.BYE:
        team_runs = event.value
        extras = event.value
    else:
        # Wide / no-ball: one penalty run, charged to the bowler.
        team_runs = PENALTY_RUNS[kind]
        extras = team_runs
        bowler = replace(bowler, runs_conceded=bowler.runs_conceded + team_runs)

    # 2) Over bookkeeping
    legal = event.is_legal
    balls_before = batting.legal_balls
    legal_balls = balls_before + 1 if legal else balls_before
    over_complete = legal and legal_balls % BALLS_PER_OVER == 0

    token = event.token
    this_over = state.this_over + (token,)
    if over_complete:
        if sum(runs_charged_to_bowler(t) for t in this_over) == 0:
            bowler = replace(bowler, maidens=bowler.maidens + 1)
        this_over = ()

    record = BallRecord(
        innings=state.current_innings,
        over=balls_before // BALLS_PER_OVER,
        ball=balls_before % BALLS_PER_OVER + (1 if legal else 0),
        token=token,
        batter=state.striker.name,
        bowler=state.bowler.name,
        runs=team_runs,
    )

    # 3) Assemble the new snapshot
    batting = replace(
        batting.with_player(state.current_striker_id, striker),
        score=batting.score + team_runs,
        wickets=wickets,
        legal_balls=legal_balls,
        extras=batting.extras + extras,
    )
    bowling = bowling.with_player(state.current_bowler_id, bowler)

    new_state = replace(
        state,
        batting_team=batting,
        bowling_team=bowling,
        this_over=this_over,
        innings_log=state.innings_log + (token,),
        ball_log=state.ball_log + (record,),
    )

    # 4) Strike rotation (legal deliveries only)
    if over_complete:
        new_state = _swap_strike(new_state)
    elif legal and kind == EventKind.RUNS and event.value % 2 == 1:
        new_state = _swap_strike(new_state)

    return new_state
