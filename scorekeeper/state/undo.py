from __future__ import annotations

from collections import deque
from typing import Deque, Optional, Tuple

from scorekeeper.state.cricket_state import MatchState

DEFAULT_UNDO_CAPACITY = 50


class UndoStack:
    """
    Bounded last-in-first-out stack of prior snapshots.

    Pushing past `capacity` silently drops the oldest snapshot. Snapshots are
    immutable, so they are stored as-is without copying.
    """

    def __init__(self, capacity: int = DEFAULT_UNDO_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError(f"Undo capacity must be positive (got {capacity})")
        self.capacity = capacity
        self._items: Deque[MatchState] = deque(maxlen=capacity)

    def push(self, state: MatchState) -> None:
        self._items.append(state)

    def pop(self) -> Optional[MatchState]:
        if not self._items:
            return None
        return self._items.pop()

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)


def undo(state: MatchState, stack: UndoStack, debug: bool = False) -> Tuple[MatchState, UndoStack]:
    """
    Restore the most recent snapshot from `stack`.

    With an empty stack the current state is returned unchanged. Undo
    itself is never pushed, so it cannot be redone.
    """
    previous = stack.pop()
    if previous is None:
        if debug:
            print("[Undo] Nothing to undo.")
        return state, stack
    return previous, stack
