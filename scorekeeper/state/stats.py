from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np

from scorekeeper.state.ball_processor import token_team_runs
from scorekeeper.state.cricket_state import (
    BALLS_PER_OVER,
    MatchState,
    PlayerStat,
    Team,
)


def strike_rate(runs: int, balls: int) -> str:
    """Runs per 100 balls, rounded to a whole number; "0" before a ball is faced."""
    return f"{runs / balls * 100:.0f}" if balls > 0 else "0"


def economy_rate(runs_conceded: int, balls_bowled: int) -> str:
    """Runs conceded per six-ball over, to one decimal place."""
    overs = balls_bowled / BALLS_PER_OVER
    return f"{runs_conceded / overs:.1f}" if overs > 0 else "0.0"


def run_rate(team: Team) -> str:
    overs = team.legal_balls / BALLS_PER_OVER
    return f"{team.score / overs:.2f}" if overs > 0 else "0.00"


def required_run_rate(state: MatchState) -> Optional[str]:
    """
    Runs per over the chasing side still needs; None outside a live chase.
    """
    if state.target is None or not state.is_live:
        return None
    needed = state.runs_needed
    balls_left = state.balls_remaining
    if balls_left <= 0:
        return None
    return f"{needed / (balls_left / BALLS_PER_OVER):.2f}"


# ----------------------------------------------------------------------
# Scorecards
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class Scorecard:
    team: str
    batters: Tuple[PlayerStat, ...]
    bowlers: Tuple[PlayerStat, ...]


def _economy_value(p: PlayerStat) -> float:
    return p.runs_conceded / (p.balls_bowled or 1)


def scorecard(team: Team) -> Scorecard:
    """
    Batting card sorted by runs (highest first) and bowling card of players
    who bowled, sorted by wickets then economy.
    """
    batters = sorted(team.players, key=lambda p: -p.runs)
    bowlers = sorted(
        (p for p in team.players if p.has_bowled),
        key=lambda p: (-p.wickets, _economy_value(p)),
    )
    return Scorecard(team=team.name, batters=tuple(batters), bowlers=tuple(bowlers))


def format_scorecard(team: Team) -> str:
    card = scorecard(team)
    lines = [f"{team.name}: {team.score}/{team.wickets} ({team.overs_played} ov, extras {team.extras})"]
    lines.append(f"  {'Batter':<20} {'R':>4} {'B':>4} {'4s':>3} {'6s':>3} {'SR':>5}")
    for p in card.batters:
        if not p.has_batted:
            continue
        status = p.out_by if p.is_out else "not out"
        lines.append(
            f"  {p.name:<20} {p.runs:>4} {p.balls:>4} {p.fours:>3} {p.sixes:>3} "
            f"{strike_rate(p.runs, p.balls):>5}  {status}"
        )
    if card.bowlers:
        lines.append(f"  {'Bowler':<20} {'O':>4} {'M':>3} {'R':>4} {'W':>3} {'Econ':>5}")
        for p in card.bowlers:
            lines.append(
                f"  {p.name:<20} {p.overs:>4} {p.maidens:>3} {p.runs_conceded:>4} {p.wickets:>3} "
                f"{economy_rate(p.runs_conceded, p.balls_bowled):>5}"
            )
    return "\n".join(lines)


# ----------------------------------------------------------------------
# Innings progression
# ----------------------------------------------------------------------


def innings_progression(state: MatchState, innings: int) -> Dict[str, np.ndarray]:
    """
    Per-over runs and the cumulative "worm" for one innings, built from the
    match-long ball log.

    Returns
    -------
    dict with
      - "over_runs": runs scored in each over (int array, one entry per over
        started)
      - "worm": cumulative total at the end of each over
      - "wickets": wickets that fell in each over
    """
    records = [b for b in state.ball_log if b.innings == innings]
    if not records:
        empty = np.zeros(0, dtype=int)
        return {"over_runs": empty, "worm": empty, "wickets": empty}

    overs = np.array([b.over for b in records], dtype=int)
    runs = np.array([b.runs for b in records], dtype=int)
    wkts = np.array([1 if b.token == "W" else 0 for b in records], dtype=int)

    n_overs = int(overs.max()) + 1
    over_runs = np.bincount(overs, weights=runs, minlength=n_overs).astype(int)
    over_wkts = np.bincount(overs, weights=wkts, minlength=n_overs).astype(int)
    return {
        "over_runs": over_runs,
        "worm": np.cumsum(over_runs),
        "wickets": over_wkts,
    }


def this_over_runs(state: MatchState) -> int:
    return sum(token_team_runs(t) for t in state.this_over)


# ----------------------------------------------------------------------
# History rows
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class MatchSummary:
    id: str
    date: str
    team_a: str
    team_b: str
    winner: str
    result: str


def match_summary(state: MatchState) -> MatchSummary:
    return MatchSummary(
        id=state.id,
        date=state.date,
        team_a=state.config.team_a,
        team_b=state.config.team_b,
        winner=state.winner or "",
        result=state.result_text,
    )

