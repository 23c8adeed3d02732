from __future__ import annotations

from dataclasses import dataclass, replace, asdict
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from scorekeeper.errors import PersistenceReadError

BALLS_PER_OVER = 6
MAX_WICKETS = 10


def format_overs(balls: int) -> str:
    """
    Format a legal-ball count as X.Y where X is complete overs and Y is
    balls in the current over (0-5).
    """
    return f"{balls // BALLS_PER_OVER}.{balls % BALLS_PER_OVER}"


def parse_overs(overs: str) -> int:
    """Inverse of format_overs: "3.2" -> 20 legal balls."""
    whole, _, part = str(overs).partition(".")
    return int(whole) * BALLS_PER_OVER + int(part or 0)


class MatchStatus(str, Enum):
    LIVE = "live"
    COMPLETED = "completed"


class PendingRequest(str, Enum):
    """
    What the scorer must supply before the next ball can be recorded.
    """

    NONE = "none"
    NEW_BATTER = "new_batter"
    NEW_BOWLER = "new_bowler"
    NEXT_INNINGS = "next_innings"
    MATCH_COMPLETE = "match_complete"


# ----------------------------------------------------------------------
# Players and teams
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class PlayerStat:
    """
    One player's cumulative figures for the match. A player can carry
    batting and bowling figures at the same time.
    """

    name: str

    # Batting
    runs: int = 0
    balls: int = 0
    fours: int = 0
    sixes: int = 0
    is_out: bool = False
    out_by: Optional[str] = None

    # Bowling
    balls_bowled: int = 0
    runs_conceded: int = 0
    wickets: int = 0
    maidens: int = 0

    @property
    def overs(self) -> str:
        """Bowling figures as completed overs and balls, e.g. "2.3"."""
        return format_overs(self.balls_bowled)

    @property
    def has_batted(self) -> bool:
        return self.balls > 0 or self.is_out

    @property
    def has_bowled(self) -> bool:
        return self.balls_bowled > 0

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["overs"] = self.overs
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlayerStat":
        return cls(
            name=str(data["name"]),
            runs=int(data.get("runs", 0)),
            balls=int(data.get("balls", 0)),
            fours=int(data.get("fours", 0)),
            sixes=int(data.get("sixes", 0)),
            is_out=bool(data.get("is_out", False)),
            out_by=data.get("out_by"),
            balls_bowled=int(data.get("balls_bowled", 0)),
            runs_conceded=int(data.get("runs_conceded", 0)),
            wickets=int(data.get("wickets", 0)),
            maidens=int(data.get("maidens", 0)),
        )


@dataclass(frozen=True)
class Team:
    """
    A side in the match. `players` is kept in the order players were
    introduced, which is not necessarily the batting order.
    """

    name: str
    players: Tuple[PlayerStat, ...] = ()
    is_batting: bool = False
    score: int = 0
    wickets: int = 0
    legal_balls: int = 0
    extras: int = 0

    @property
    def overs_played(self) -> str:
        return format_overs(self.legal_balls)

    def index_of(self, name: str) -> Optional[int]:
        for i, p in enumerate(self.players):
            if p.name == name:
                return i
        return None

    def with_player(self, index: int, player: PlayerStat) -> "Team":
        players = list(self.players)
        players[index] = player
        return replace(self, players=tuple(players))

    def add_player(self, name: str) -> Tuple["Team", int]:
        """
        Return (team, index) for `name`, appending a fresh PlayerStat if the
        name is new to this team.
        """
        name = name.strip()
        if not name:
            raise ValueError("Player name must be non-empty")
        existing = self.index_of(name)
        if existing is not None:
            return self, existing
        team = replace(self, players=self.players + (PlayerStat(name=name),))
        return team, len(team.players) - 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "players": [p.to_dict() for p in self.players],
            "is_batting": self.is_batting,
            "score": self.score,
            "wickets": self.wickets,
            "overs_played": self.overs_played,
            "extras": self.extras,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        return cls(
            name=str(data["name"]),
            players=tuple(PlayerStat.from_dict(p) for p in data["players"]),
            is_batting=bool(data["is_batting"]),
            score=int(data["score"]),
            wickets=int(data["wickets"]),
            legal_balls=parse_overs(data["overs_played"]),
            extras=int(data.get("extras", 0)),
        )


# ----------------------------------------------------------------------
# Match
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class MatchConfig:
    team_a: str
    team_b: str
    total_overs: int
    toss_winner: str = ""
    elected_to: str = "bat"  # "bat" | "bowl"

    @property
    def max_balls(self) -> int:
        return self.total_overs * BALLS_PER_OVER

    def first_batting_team(self) -> str:
        """Name of the side that bats first given the toss decision."""
        other = self.team_b if self.toss_winner == self.team_a else self.team_a
        return self.toss_winner if self.elected_to == "bat" else other

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchConfig":
        return cls(
            team_a=str(data["team_a"]),
            team_b=str(data["team_b"]),
            total_overs=int(data["total_overs"]),
            toss_winner=str(data.get("toss_winner", "")),
            elected_to=str(data.get("elected_to", "bat")),
        )


@dataclass(frozen=True)
class BallRecord:
    """One entry of the match-long ball-by-ball log."""

    innings: int
    over: int  # 0-based over the ball belongs to
    ball: int  # legal balls bowled in that over after this delivery
    token: str
    batter: str
    bowler: str
    runs: int  # runs added to the team total

    @property
    def label(self) -> str:
        return f"{self.over}.{self.ball}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BallRecord":
        return cls(
            innings=int(data["innings"]),
            over=int(data["over"]),
            ball=int(data["ball"]),
            token=str(data["token"]),
            batter=str(data["batter"]),
            bowler=str(data["bowler"]),
            runs=int(data["runs"]),
        )


@dataclass(frozen=True)
class MatchState:
    """
    Immutable snapshot of a live or finished match.

    Every scoring operation returns a new MatchState; snapshots can be kept
    as-is for undo and compared with ==.
    """

    id: str
    date: str
    config: MatchConfig

    batting_team: Team
    bowling_team: Team

    current_striker_id: int = 0  # index in batting_team.players
    current_non_striker_id: int = 1  # index in batting_team.players
    current_bowler_id: int = 0  # index in bowling_team.players

    current_innings: int = 1
    this_over: Tuple[str, ...] = ()
    innings_log: Tuple[str, ...] = ()
    ball_log: Tuple[BallRecord, ...] = ()

    target: Optional[int] = None
    status: MatchStatus = MatchStatus.LIVE
    winner: Optional[str] = None
    win_margin: Optional[str] = None

    pending: PendingRequest = PendingRequest.NONE
    bowler_over: int = 0  # over index the current bowler was chosen for
    first_innings_score: Optional[int] = None

    # ------------------------------------------------------------------
    # Convenience accessors
    # ------------------------------------------------------------------

    @property
    def striker(self) -> PlayerStat:
        return self.batting_team.players[self.current_striker_id]

    @property
    def non_striker(self) -> PlayerStat:
        return self.batting_team.players[self.current_non_striker_id]

    @property
    def bowler(self) -> PlayerStat:
        return self.bowling_team.players[self.current_bowler_id]

    @property
    def is_live(self) -> bool:
        return self.status == MatchStatus.LIVE

    @property
    def balls_remaining(self) -> int:
        return max(0, self.config.max_balls - self.batting_team.legal_balls)

    @property
    def runs_needed(self) -> Optional[int]:
        if self.target is None:
            return None
        return max(0, self.target - self.batting_team.score)

    @property
    def result_text(self) -> str:
        if self.status != MatchStatus.COMPLETED:
            return "MATCH LIVE"
        if self.winner in (None, "DRAW"):
            return self.win_margin or "Match Drawn!"
        return f"{self.winner} {self.win_margin}"

    def __str__(self) -> str:
        return (
            f"MatchState(innings={self.current_innings}, "
            f"{self.batting_team.name} {self.batting_team.score}/{self.batting_team.wickets} "
            f"({self.batting_team.overs_played} ov), target={self.target}, "
            f"status={self.status.value}, pending={self.pending.value})"
        )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """JSON-serializable dict (enums stored as their values)."""
        return {
            "id": self.id,
            "date": self.date,
            "config": self.config.to_dict(),
            "current_innings": self.current_innings,
            "batting_team": self.batting_team.to_dict(),
            "bowling_team": self.bowling_team.to_dict(),
            "current_striker_id": self.current_striker_id,
            "current_non_striker_id": self.current_non_striker_id,
            "current_bowler_id": self.current_bowler_id,
            "this_over": list(self.this_over),
            "innings_log": list(self.innings_log),
            "ball_log": [b.to_dict() for b in self.ball_log],
            "target": self.target,
            "status": self.status.value,
            "winner": self.winner,
            "win_margin": self.win_margin,
            "pending": self.pending.value,
            "bowler_over": self.bowler_over,
            "first_innings_score": self.first_innings_score,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchState":
        """
        Rebuild a snapshot from `to_dict` output.

        Raises PersistenceReadError if the payload is not a well-formed
        match snapshot.
        """
        try:
            state = cls(
                id=str(data["id"]),
                date=str(data["date"]),
                config=MatchConfig.from_dict(data["config"]),
                current_innings=int(data["current_innings"]),
                batting_team=Team.from_dict(data["batting_team"]),
                bowling_team=Team.from_dict(data["bowling_team"]),
                current_striker_id=int(data["current_striker_id"]),
                current_non_striker_id=int(data["current_non_striker_id"]),
                current_bowler_id=int(data["current_bowler_id"]),
                this_over=tuple(str(t) for t in data.get("this_over", [])),
                innings_log=tuple(str(t) for t in data.get("innings_log", [])),
                ball_log=tuple(BallRecord.from_dict(b) for b in data.get("ball_log", [])),
                target=None if data.get("target") is None else int(data["target"]),
                status=MatchStatus(data["status"]),
                winner=data.get("winner"),
                win_margin=data.get("win_margin"),
                pending=PendingRequest(data.get("pending", PendingRequest.NONE.value)),
                bowler_over=int(data.get("bowler_over", 0)),
                first_innings_score=(
                    None if data.get("first_innings_score") is None else int(data["first_innings_score"])
                ),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise PersistenceReadError(f"Malformed match snapshot: {e!r}") from e

        # Indices must point at real players.
        if not (
            0 <= state.current_striker_id < len(state.batting_team.players)
            and 0 <= state.current_non_striker_id < len(state.batting_team.players)
            and 0 <= state.current_bowler_id < len(state.bowling_team.players)
        ):
            raise PersistenceReadError("Malformed match snapshot: player index out of range")
        return state
