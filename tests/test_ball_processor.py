from __future__ import annotations

from scorekeeper.events.schema import BallEvent
from scorekeeper.state.ball_processor import apply_delivery
from scorekeeper.state.cricket_state import PendingRequest
from tests.factories import play


def deliver(state, tokens):
    """Apply deliveries without the controller's pending-request checks."""
    for tok in tokens:
        state = apply_delivery(state, BallEvent.from_token(tok))
    return state


def test_runs_credit_striker_bowler_and_team(match):
    state = play(match, ["4"])

    striker = state.striker
    assert striker.name == "S0"
    assert (striker.runs, striker.balls, striker.fours, striker.sixes) == (4, 1, 1, 0)
    assert state.bowler.runs_conceded == 4
    assert state.bowler.balls_bowled == 1
    assert state.batting_team.score == 4
    assert state.batting_team.overs_played == "0.1"
    assert state.this_over == ("4",)


def test_six_counts_as_six(match):
    state = play(match, ["6"])
    assert state.striker.sixes == 1
    assert state.striker.fours == 0


def test_input_snapshot_is_not_modified(match):
    apply_delivery(match, BallEvent.runs(6))
    assert match.batting_team.score == 0
    assert match.striker.runs == 0
    assert match.this_over == ()


def test_odd_runs_rotate_strike(match):
    state = play(match, ["1", "1", "1"])
    assert state.striker.name == "S1"
    assert state.non_striker.name == "S0"


def test_even_runs_keep_strike(match):
    state = play(match, ["4", "2", "6"])
    assert state.striker.name == "S0"
    assert state.batting_team.score == 12


def test_wides_do_not_advance_the_over(match):
    state = play(match, ["WD"] * 6 + ["1"])

    assert state.batting_team.overs_played == "0.1"
    assert state.batting_team.score == 7
    assert state.batting_team.extras == 6
    assert state.bowler.runs_conceded == 7
    assert state.bowler.balls_bowled == 1
    assert state.batting_team.players[0].balls == 1
    assert state.striker.name == "S1"


def test_no_ball_is_a_one_run_penalty(match):
    state = play(match, ["NB"])
    assert state.batting_team.score == 1
    assert state.bowler.runs_conceded == 1
    assert state.bowler.balls_bowled == 0
    assert state.striker.balls == 0
    assert state.batting_team.overs_played == "0.0"
    assert state.this_over == ("NB",)


def test_byes_go_to_extras_only(match):
    state = play(match, ["B3"])

    assert state.batting_team.score == 3
    assert state.batting_team.extras == 3
    assert state.striker.runs == 0
    assert state.striker.balls == 0
    assert state.bowler.runs_conceded == 0
    assert state.batting_team.overs_played == "0.0"
    # Byes are not legal deliveries here, so strike stays put.
    assert state.striker.name == "S0"


def test_wicket_marks_striker_out(match):
    state = play(match, ["W"])

    out = state.batting_team.players[0]
    assert out.is_out
    assert out.out_by == "b B0"
    assert out.balls == 1
    assert state.bowler.wickets == 1
    assert state.bowler.balls_bowled == 1
    assert state.batting_team.wickets == 1
    assert state.batting_team.overs_played == "0.1"
    assert state.pending == PendingRequest.NEW_BATTER


def test_over_completion_clears_strip_and_rotates_strike(match):
    state = play(match, ["1", "0", "0", "0", "0", "2"])

    assert state.batting_team.overs_played == "1.0"
    assert state.this_over == ()
    # S0 took a single, S1 faced the rest; end of over hands strike back to S0.
    assert state.striker.name == "S0"
    assert state.bowler.overs == "1.0"
    assert state.pending == PendingRequest.NEW_BOWLER


def test_single_off_last_ball_rotates_only_once(match):
    state = play(match, ["0"] * 5 + ["1"])
    assert state.striker.name == "S1"


def test_maiden_over_is_credited(match):
    state = play(match, ["0", "B1", "0", "0", "0", "0", "0"])
    assert state.bowler.maidens == 1


def test_wide_spoils_a_maiden(match):
    state = play(match, ["0", "WD", "0", "0", "0", "0", "0"])
    assert state.bowler.maidens == 0


def test_overs_ball_component_cycles(long_match):
    state = long_match
    seen = []
    for _ in range(13):
        state = apply_delivery(state, BallEvent.runs(0))
        seen.append(state.batting_team.overs_played)

    assert seen == [
        "0.1", "0.2", "0.3", "0.4", "0.5", "1.0",
        "1.1", "1.2", "1.3", "1.4", "1.5", "2.0",
        "2.1",
    ]


def test_score_equals_batter_runs_plus_extras(long_match):
    tokens = ["1", "WD", "4", "B2", "NB", "0", "6", "3", "B1", "2", "WD"]
    state = deliver(long_match, tokens)

    batter_runs = sum(p.runs for p in state.batting_team.players)
    assert state.batting_team.score == 1 + 1 + 4 + 2 + 1 + 0 + 6 + 3 + 1 + 2 + 1
    assert state.batting_team.score == batter_runs + state.batting_team.extras


def test_ball_log_records_every_delivery(match):
    state = play(match, ["1", "WD", "4"])

    assert [b.token for b in state.ball_log] == ["1", "WD", "4"]
    assert [b.label for b in state.ball_log] == ["0.1", "0.1", "0.2"]
    assert state.ball_log[0].batter == "S0"
    assert state.ball_log[2].batter == "S1"
    assert all(b.bowler == "B0" and b.innings == 1 for b in state.ball_log)
    assert state.innings_log == ("1", "WD", "4")
