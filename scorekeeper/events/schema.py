from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any

# Runs a batter can be credited with off a single legal delivery.
VALID_RUN_VALUES = (0, 1, 2, 3, 4, 6)


class EventKind(str, Enum):
    """
    Kinds of ball event a scorer can submit.

    Values double as the serialized form, e.g. in a scripted match file:

        runs, wicket, wide, no-ball, bye
    """

    RUNS = "runs"
    WICKET = "wicket"
    WIDE = "wide"
    NO_BALL = "no-ball"
    BYE = "bye"


# Kinds that count toward the over.
LEGAL_DELIVERY = {
    EventKind.RUNS: True,
    EventKind.WICKET: True,
    EventKind.WIDE: False,
    EventKind.NO_BALL: False,
    EventKind.BYE: False,
}


@dataclass(frozen=True)
class BallEvent:
    """
    A single delivery as entered by the scorer.

    Attributes
    ----------
    kind : EventKind
        What happened on the ball.
    value : int
        Runs for RUNS and BYE events; always 0 for the other kinds.
    """

    kind: EventKind
    value: int = 0

    def __post_init__(self) -> None:
        if self.kind == EventKind.RUNS and self.value not in VALID_RUN_VALUES:
            raise ValueError(f"Invalid run value {self.value!r}; expected one of {VALID_RUN_VALUES}")
        if self.kind == EventKind.BYE and self.value < 0:
            raise ValueError(f"Byes cannot be negative (got {self.value})")
        if self.kind in (EventKind.WICKET, EventKind.WIDE, EventKind.NO_BALL) and self.value != 0:
            raise ValueError(f"{self.kind.value} events carry no run value")

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def runs(cls, value: int) -> "BallEvent":
        return cls(EventKind.RUNS, value)

    @classmethod
    def wicket(cls) -> "BallEvent":
        return cls(EventKind.WICKET)

    @classmethod
    def wide(cls) -> "BallEvent":
        return cls(EventKind.WIDE)

    @classmethod
    def no_ball(cls) -> "BallEvent":
        return cls(EventKind.NO_BALL)

    @classmethod
    def bye(cls, value: int) -> "BallEvent":
        return cls(EventKind.BYE, value)

    @classmethod
    def from_token(cls, token: str) -> "BallEvent":
        """
        Parse a scorer token as shown in the over strip:
        "0".."6", "W", "WD", "NB" or "B<runs>".
        """
        tok = str(token).strip().upper()
        if tok == "W":
            return cls.wicket()
        if tok == "WD":
            return cls.wide()
        if tok == "NB":
            return cls.no_ball()
        if tok.startswith("B") and tok[1:].isdigit():
            return cls.bye(int(tok[1:]))
        if tok.isdigit():
            return cls.runs(int(tok))
        raise ValueError(f"Unrecognised ball token: {token!r}")

    # ------------------------------------------------------------------

    @property
    def is_legal(self) -> bool:
        return LEGAL_DELIVERY[self.kind]

    @property
    def token(self) -> str:
        """Short code used in the over strip and the ball-by-ball log."""
        if self.kind == EventKind.RUNS:
            return str(self.value)
        if self.kind == EventKind.WICKET:
            return "W"
        if self.kind == EventKind.WIDE:
            return "WD"
        if self.kind == EventKind.NO_BALL:
            return "NB"
        return f"B{self.value}"

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"kind": self.kind.value}
        if self.kind in (EventKind.RUNS, EventKind.BYE):
            d["value"] = self.value
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BallEvent":
        return cls(EventKind(data["kind"]), int(data.get("value", 0)))
