from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional, Union

from scorekeeper.config import DATA_DIR
from scorekeeper.errors import PersistenceReadError
from scorekeeper.state.cricket_state import MatchState

ACTIVE_MATCH_KEY = "active_match"
HISTORY_KEY = "match_history"


class MatchStore:
    """
    Best-effort key-value persistence for the active match and the match
    history, one JSON file per key under `root` (SCOREKEEPER_DATA_DIR by default).

    Reads never raise on bad data: a corrupt or unreadable record is
    reported and treated as absent.
    """

    def __init__(self, root: Union[str, Path] = DATA_DIR, debug: bool = False) -> None:
        self.root = Path(root)
        self.debug = debug

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def _read(self, key: str) -> Optional[Any]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            print(f"[WARN] Failed to read {path}: {e}")
            return None

    def _write(self, key: str, payload: Any) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        if self.debug:
            print(f"[MatchStore] Wrote {path}")

    def _remove(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()

    # ------------------------------------------------------------------
    # Active match
    # ------------------------------------------------------------------

    def save_active_match(self, state: MatchState) -> None:
        self._write(ACTIVE_MATCH_KEY, state.to_dict())

    def load_active_match(self) -> Optional[MatchState]:
        data = self._read(ACTIVE_MATCH_KEY)
        if data is None:
            return None
        try:
            if not isinstance(data, dict):
                raise PersistenceReadError("Active match record is not an object")
            return MatchState.from_dict(data)
        except PersistenceReadError as e:
            print(f"[WARN] Discarding saved active match: {e}")
            return None

    def clear_active_match(self) -> None:
        self._remove(ACTIVE_MATCH_KEY)

    # ------------------------------------------------------------------
    # History (most recent first)
    # ------------------------------------------------------------------

    def load_history(self) -> List[MatchState]:
        data = self._read(HISTORY_KEY)
        if not isinstance(data, list):
            if data is not None:
                print(f"[WARN] Match history in {self._path(HISTORY_KEY)} is not a list; ignoring it.")
            return []

        history: List[MatchState] = []
        for item in data:
            try:
                if not isinstance(item, dict):
                    raise PersistenceReadError("History entry is not an object")
                history.append(MatchState.from_dict(item))
            except PersistenceReadError as e:
                print(f"[WARN] Skipping unreadable history entry: {e}")
        return history

    def append_to_history(self, state: MatchState) -> None:
        """
        Put `state` at the front of the history, replacing any earlier
        record with the same id.
        """
        history = [m for m in self.load_history() if m.id != state.id]
        self._write(HISTORY_KEY, [state.to_dict()] + [m.to_dict() for m in history])

    def remove_from_history(self, match_id: str) -> None:
        history = [m for m in self.load_history() if m.id != match_id]
        self._write(HISTORY_KEY, [m.to_dict() for m in history])

    def clear_history(self) -> None:
        self._remove(HISTORY_KEY)
