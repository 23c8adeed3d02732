from __future__ import annotations

from dataclasses import replace

from scorekeeper.state.controller import resolve_new_batter, resolve_new_bowler
from scorekeeper.state.cricket_state import MatchStatus, PlayerStat, Team
from scorekeeper.state.stats import (
    economy_rate,
    format_scorecard,
    innings_progression,
    match_summary,
    required_run_rate,
    run_rate,
    scorecard,
    strike_rate,
)
from tests.factories import TEAM_A, TEAM_B, make_match, play


def test_strike_rate():
    assert strike_rate(50, 25) == "200"
    assert strike_rate(0, 0) == "0"
    assert strike_rate(7, 9) == "78"


def test_economy_rate():
    assert economy_rate(0, 0) == "0.0"
    assert economy_rate(30, 24) == "7.5"
    assert economy_rate(10, 9) == "6.7"


def test_run_rate():
    team = Team(name=TEAM_A, score=22, legal_balls=12)
    assert run_rate(team) == "11.00"
    assert run_rate(Team(name=TEAM_A)) == "0.00"


def test_required_run_rate(long_match):
    assert required_run_rate(long_match) is None

    batting = replace(long_match.batting_team, score=100, legal_balls=90)
    chase = replace(long_match, current_innings=2, target=151, batting_team=batting)
    # 51 needed from 5 overs.
    assert required_run_rate(chase) == "10.20"

    finished = replace(chase, status=MatchStatus.COMPLETED)
    assert not finished.is_live
    assert required_run_rate(finished) is None


def test_scorecard_sorting():
    team = Team(
        name=TEAM_B,
        players=(
            PlayerStat("Ana", runs=12, balls_bowled=12, runs_conceded=20, wickets=1),
            PlayerStat("Bo", runs=40),
            PlayerStat("Cy", runs=3, balls_bowled=12, runs_conceded=10, wickets=1),
            PlayerStat("Di", runs=0, balls_bowled=6, runs_conceded=2, wickets=2),
        ),
    )
    card = scorecard(team)

    assert [p.name for p in card.batters] == ["Bo", "Ana", "Cy", "Di"]
    # Wickets first, then the cheaper bowler.
    assert [p.name for p in card.bowlers] == ["Di", "Cy", "Ana"]
    assert not card.batters[0].has_bowled


def test_format_scorecard_lists_batters_and_bowlers(match):
    state = play(match, ["4", "W"])
    text = format_scorecard(state.batting_team)

    assert text.startswith(f"{TEAM_A}: 4/1 (0.2 ov")
    assert "b B0" in text
    assert "not out" not in text  # S1 has not faced a ball yet
    assert "B0" in format_scorecard(state.bowling_team)


def test_innings_progression():
    state = play(make_match(total_overs=5), ["1", "4", "WD", "0", "0", "6", "0"])
    state = resolve_new_bowler(state, "B1")
    state = play(state, ["W"])
    state = resolve_new_batter(state, "S2")
    state = play(state, ["2"])

    prog = innings_progression(state, 1)
    assert prog["over_runs"].tolist() == [12, 2]
    assert prog["worm"].tolist() == [12, 14]
    assert prog["wickets"].tolist() == [0, 1]

    assert innings_progression(state, 2)["over_runs"].size == 0


def test_match_summary_row(match):
    summary = match_summary(match)
    assert summary.id == "match-1"
    assert (summary.team_a, summary.team_b) == (TEAM_A, TEAM_B)
    assert summary.winner == ""
    assert summary.result == "MATCH LIVE"
