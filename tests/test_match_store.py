from __future__ import annotations

import json
from dataclasses import replace

import pytest

from scorekeeper.errors import PersistenceReadError
from scorekeeper.events.schema import BallEvent
from scorekeeper.state.controller import apply_event, begin_second_innings
from scorekeeper.state.cricket_state import MatchState, MatchStatus
from scorekeeper.storage.match_store import ACTIVE_MATCH_KEY, HISTORY_KEY
from tests.factories import make_match, play


def _completed_match(match_id):
    state = play(make_match(total_overs=1, match_id=match_id), ["4", "0", "0", "0", "0", "0"])
    state = begin_second_innings(state, "T0", "T1", "C0")
    return apply_event(state, BallEvent.runs(6))


def test_load_without_saved_match(store):
    assert store.load_active_match() is None
    assert store.load_history() == []


def test_active_match_round_trip(store, match):
    state = play(match, ["1", "WD", "W"])
    store.save_active_match(state)

    assert store.load_active_match() == state


def test_clear_active_match(store, match):
    store.save_active_match(match)
    store.clear_active_match()
    assert store.load_active_match() is None
    store.clear_active_match()  # already gone


def test_corrupt_active_match_is_treated_as_absent(store, capsys):
    path = store.root / f"{ACTIVE_MATCH_KEY}.json"
    path.parent.mkdir(parents=True)
    path.write_text("{not json", encoding="utf-8")

    assert store.load_active_match() is None
    assert "[WARN]" in capsys.readouterr().out


def test_malformed_active_match_is_treated_as_absent(store):
    path = store.root / f"{ACTIVE_MATCH_KEY}.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps({"id": "x", "config": {}}), encoding="utf-8")

    assert store.load_active_match() is None


def test_from_dict_raises_persistence_error():
    with pytest.raises(PersistenceReadError):
        MatchState.from_dict({"id": "x"})


def test_out_of_range_index_is_malformed(match):
    data = match.to_dict()
    data["current_bowler_id"] = 4
    with pytest.raises(PersistenceReadError):
        MatchState.from_dict(data)


def test_history_is_most_recent_first_and_replaces_by_id(store):
    first = _completed_match("m-1")
    second = _completed_match("m-2")

    store.append_to_history(replace(first, status=MatchStatus.LIVE, winner=None, win_margin=None))
    store.append_to_history(second)
    store.append_to_history(first)

    history = store.load_history()
    assert [m.id for m in history] == ["m-1", "m-2"]
    assert history[0] == first

    store.remove_from_history("m-2")
    assert [m.id for m in store.load_history()] == ["m-1"]

    store.clear_history()
    assert store.load_history() == []


def test_unreadable_history_entries_are_skipped(store, capsys):
    good = _completed_match("m-1")
    path = store.root / f"{HISTORY_KEY}.json"
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps([{"id": "legacy", "winner": "X"}, good.to_dict()]), encoding="utf-8")

    history = store.load_history()
    assert [m.id for m in history] == ["m-1"]
    assert "Skipping" in capsys.readouterr().out
