# scorekeeper/simulation/score_match.py

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from scorekeeper.config import validate_config
from scorekeeper.state.controller import OpeningPlayers, TossResult
from scorekeeper.state.cricket_state import MatchConfig, PendingRequest
from scorekeeper.state.stats import format_scorecard, innings_progression
from scorekeeper.session import ScoringSession
from scorekeeper.storage.match_store import MatchStore

UNDO_TOKEN = "U"


def _openers(data: Dict[str, Any]) -> OpeningPlayers:
    return OpeningPlayers(
        striker=data["striker"],
        non_striker=data["non_striker"],
        bowler=data["bowler"],
    )


def load_match_script(path: str) -> Dict[str, Any]:
    """
    Read a scripted match. Expected keys:

      team_a, team_b, total_overs, toss_winner, elected_to,
      openers {striker, non_striker, bowler},
      second_innings {striker, non_striker, bowler},
      balls        list of tokens ("0".."6", "W", "WD", "NB", "B<n>", "U" for undo),
      new_batters  names sent in after each wicket, in order,
      bowlers      name or fielding-side index for each new over, in order.
    """
    script_path = Path(path)
    if not script_path.exists():
        raise FileNotFoundError(f"Match script not found: {script_path}")
    with script_path.open("r", encoding="utf-8") as f:
        return json.load(f)


def replay_match(session: ScoringSession, script: Dict[str, Any], verbose: bool = True) -> ScoringSession:
    """
    Feed the scripted balls through `session`, answering new-batter,
    new-bowler and next-innings requests from the script.
    """
    new_batters: List[str] = list(script.get("new_batters", []))
    bowlers: List[Any] = list(script.get("bowlers", []))

    for ball_index, token in enumerate(script.get("balls", []), start=1):
        # Undo the last recorded ball before answering any pending request.
        if str(token).upper() == UNDO_TOKEN:
            session.undo()
            continue

        if session.pending == PendingRequest.NEW_BATTER:
            if not new_batters:
                raise ValueError(f"Ball {ball_index}: script ran out of new batters")
            session.new_batter(new_batters.pop(0))
        if session.pending == PendingRequest.NEW_BOWLER:
            if not bowlers:
                raise ValueError(f"Ball {ball_index}: script ran out of bowlers")
            session.new_bowler(bowlers.pop(0))
        if session.pending == PendingRequest.NEXT_INNINGS:
            second = _openers(script["second_innings"])
            session.next_innings(second.striker, second.non_striker, second.bowler)
        if session.pending == PendingRequest.MATCH_COMPLETE:
            if verbose:
                print(f"Match complete before ball {ball_index}; ignoring remaining balls.")
            break

        state = session.state
        bowler, striker = state.bowler.name, state.striker.name
        state = session.record(token)
        if verbose:
            team = state.batting_team
            print(
                f"[Ball {ball_index}] {bowler} to {striker}: {token:<3} "
                f"-> {team.name} {team.score}/{team.wickets} ({team.overs_played} ov)"
            )

    return session


def print_summary(session: ScoringSession) -> None:
    state = session.state
    print("\n=== Scorecard ===\n")
    # First-innings side is the bowling side once the chase is on.
    teams = (state.bowling_team, state.batting_team) if state.current_innings == 2 else (state.batting_team,)
    for team in teams:
        print(format_scorecard(team))
        print()

    for innings in (1, 2):
        prog = innings_progression(state, innings)
        if prog["over_runs"].size:
            print(f"Innings {innings} runs per over: {prog['over_runs'].tolist()}")
            print(f"Innings {innings} worm:          {prog['worm'].tolist()}")

    print(f"\nResult: {state.result_text}")


def main() -> None:
    parser = argparse.ArgumentParser(
        description=(
            "Replay a scripted cricket match through the scoring engine, printing "
            "ball-by-ball updates, scorecards and the result."
        )
    )
    parser.add_argument(
        "--script",
        type=str,
        required=True,
        help="Path to the JSON match script.",
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Directory for the active match and history files (default: SCOREKEEPER_DATA_DIR).",
    )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not write the active match or history to disk.",
    )
    parser.add_argument(
        "--forbid-consecutive-overs",
        action="store_true",
        help="Reject a bowler bowling two overs in a row.",
    )
    parser.add_argument(
        "--analysis",
        action="store_true",
        help="Ask Gemini for an analysis of the final state (needs GEMINI_API_KEY).",
    )
    parser.add_argument(
        "--log-json",
        type=str,
        default=None,
        help="Optional path to write the final match snapshot as JSON.",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print the scorecard and result.",
    )

    args = parser.parse_args()
    validate_config()

    script = load_match_script(args.script)
    config = MatchConfig(
        team_a=script["team_a"],
        team_b=script["team_b"],
        total_overs=int(script["total_overs"]),
    )
    toss = TossResult(winner=script["toss_winner"], elected_to=script.get("elected_to", "bat"))
    store: Optional[MatchStore] = None
    if not args.no_save:
        store = MatchStore(args.data_dir) if args.data_dir else MatchStore()

    session = ScoringSession.start(
        config,
        toss,
        _openers(script["openers"]),
        store=store,
        forbid_consecutive_overs=args.forbid_consecutive_overs,
    )
    replay_match(session, script, verbose=not args.quiet)
    print_summary(session)

    if args.analysis:
        from scorekeeper.commentary.analysis import DEFAULT_SYSTEM_PROMPT, MatchAnalyst
        from scorekeeper.commentary.llm_client import LLMClient

        analyst = MatchAnalyst(LLMClient(system_prompt=DEFAULT_SYSTEM_PROMPT))
        result = analyst.analyze(session.state)
        print("\n=== Analysis ===")
        print(f"  {result.commentary}")
        print(f"  Win probability (batting): {result.win_probability:.0f}%")
        print(f"  Advice: {result.tactical_advice}")

    if args.log_json is not None:
        log_path = Path(args.log_json)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        with log_path.open("w", encoding="utf-8") as f:
            json.dump(session.state.to_dict(), f, indent=2)
        print(f"\nWrote final match snapshot to {log_path}")


if __name__ == "__main__":
    main()
