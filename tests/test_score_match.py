from __future__ import annotations

from pathlib import Path

from scorekeeper.session import ScoringSession
from scorekeeper.simulation.score_match import (
    _openers,
    load_match_script,
    print_summary,
    replay_match,
)
from scorekeeper.state.controller import TossResult
from scorekeeper.state.cricket_state import MatchConfig, MatchStatus, PendingRequest
from scorekeeper.storage.match_store import MatchStore
from tests.factories import make_match

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "short_match.json"


def _session(script, store=None):
    return ScoringSession.start(
        MatchConfig(script["team_a"], script["team_b"], script["total_overs"]),
        TossResult(script["toss_winner"], script["elected_to"]),
        _openers(script["openers"]),
        store=store,
    )


def test_replay_sample_script(tmp_path, capsys):
    script = load_match_script(str(SCRIPT))
    store = MatchStore(tmp_path)
    session = replay_match(_session(script, store), script)
    state = session.state

    assert state.status == MatchStatus.COMPLETED
    assert state.first_innings_score == 22
    assert state.target == 23
    assert state.winner == "Bluesharks"
    assert state.win_margin == "won by 9 wickets"
    assert store.load_history()[0].id == state.id

    print_summary(session)
    out = capsys.readouterr().out
    assert "Result: Bluesharks won by 9 wickets" in out
    assert "Innings 1 worm" in out


def test_undo_after_a_wicket_takes_back_the_ball():
    script = {"balls": ["1", "W", "U", "2"], "new_batters": ["Chris", "Dana"], "bowlers": []}
    session = replay_match(ScoringSession(make_match(total_overs=2)), script, verbose=False)
    state = session.state

    assert state.batting_team.wickets == 0
    assert state.batting_team.score == 3
    assert state.pending == PendingRequest.NONE
    assert "Chris" not in [p.name for p in state.batting_team.players]
