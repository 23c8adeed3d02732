from __future__ import annotations

from typing import List, Dict

from scorekeeper.state.cricket_state import MatchState, PlayerStat
from scorekeeper.state.stats import required_run_rate, run_rate, this_over_runs


def _batter_line(p: PlayerStat) -> str:
    return f"{p.name} ({p.runs} off {p.balls})"


def _bowler_line(p: PlayerStat) -> str:
    return f"{p.name}: {p.overs} overs, {p.runs_conceded} runs, {p.wickets} wickets"


def build_analysis_prompt(state: MatchState) -> List[Dict[str, str]]:
    """
    Build a single user message asking the LLM for commentary, a win
    probability for the batting side and tactical advice, given the current
    snapshot.
    """
    batting = state.batting_team
    score_line = (
        f"Innings: {state.current_innings}, {batting.name} {batting.score}/{batting.wickets} "
        f"after {batting.overs_played} of {state.config.total_overs} overs. "
        f"Run rate: {run_rate(batting)}."
    )
    if state.target is not None:
        rrr = required_run_rate(state)
        score_line += f" Target: {state.target} (need {state.runs_needed} off {state.balls_remaining} balls"
        score_line += f", required rate {rrr})." if rrr is not None else ")."
    else:
        score_line += " Target: N/A."

    recent = (
        f"{', '.join(state.this_over)} ({this_over_runs(state)} runs)" if state.this_over else "(new over)"
    )

    instructions = (
        "Provide a professional, TV-broadcast style analysis of this match situation:\n"
        "1. A short, exciting commentary on the current play.\n"
        "2. Estimated win probability for the batting team (0-100).\n"
        "3. Specific tactical advice based on the batter and bowler matchups.\n"
        "Stay consistent with the numbers given; do not invent scores."
    )

    content = (
        f"{instructions}\n\n"
        f"Match status:\n"
        f"- {score_line}\n\n"
        f"On the crease:\n"
        f"- Striker: {_batter_line(state.striker)}\n"
        f"- Non-striker: {_batter_line(state.non_striker)}\n\n"
        f"Bowling:\n"
        f"- {_bowler_line(state.bowler)}\n\n"
        f"This over so far: {recent}\n"
    )

    return [
        {
            "role": "user",
            "content": content,
        }
    ]
