"""
engine/history.py
=================

Bounded undo log for a Match.

Each mutating Match operation pushes a HistoryEntry tagged with the
ActionType that is about to run, holding a full snapshot of the match
state taken *before* the change.  Undo pops the most recent entry and
restores that snapshot.  The log keeps at most ``limit`` entries; the
oldest are discarded first.
"""

import copy
import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Deque, Dict, List, Optional

logger = logging.getLogger(__name__)


class ActionType(str, Enum):
    RUNS = "runs"
    WICKET = "wicket"
    EXTRAS = "extras"
    RESET = "reset"
    SELECT_TEAM = "select_team"
    ADD_PLAYER = "add_player"
    REMOVE_PLAYER = "remove_player"
    ADD_TEAM = "add_team"
    REMOVE_TEAM = "remove_team"
    SET_TARGET = "set_target"
    SET_BATTERS = "set_batters"
    NEXT_BATTER = "next_batter"
    SWAP_STRIKE = "swap_strike"
    UNDO = "undo"


@dataclass
class HistoryEntry:
    action: ActionType
    snapshot: Dict[str, Any]
    detail: Dict[str, Any] = field(default_factory=dict)


class ActionHistory:
    """Fixed-depth stack of HistoryEntry objects (newest last)."""

    def __init__(self, limit: int = 50) -> None:
        if limit <= 0:
            raise ValueError("History limit must be positive.")
        self.limit = limit
        self._entries: Deque[HistoryEntry] = deque(maxlen=limit)

    def push(self, action: ActionType, snapshot: Dict[str, Any], **detail) -> None:
        if len(self._entries) == self.limit:
            logger.debug(f"History full ({self.limit}), dropping oldest {self._entries[0].action.value}")
        self._entries.append(HistoryEntry(action, copy.deepcopy(snapshot), detail))

    def pop(self) -> Optional[HistoryEntry]:
        if not self._entries:
            return None
        return self._entries.pop()

    def peek(self) -> Optional[HistoryEntry]:
        return self._entries[-1] if self._entries else None

    def actions(self) -> List[ActionType]:
        """Recorded action tags, oldest first."""
        return [e.action for e in self._entries]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
