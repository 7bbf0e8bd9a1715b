"""Event sinks: where rules code reports what happened."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Protocol

from models.game_state import GameEvent

if TYPE_CHECKING:
    from models.game_state import CombatSession


class EventSink(Protocol):
    """Anything that accepts session-level events."""

    def emit(self, event_type: str, details: dict) -> None: ...


class NullEventSink:
    """Discards every event."""

    def emit(self, event_type: str, details: dict) -> None:
        return None


class SessionEventLog:
    """Appends events to a combat session's event log, stamped with round and turn."""

    def __init__(self, session: CombatSession) -> None:
        self.session = session

    def emit(self, event_type: str, details: dict) -> None:
        self.session.event_log.append(
            GameEvent(
                round=self.session.round_number,
                turn=self.session.current_turn_index,
                event_type=event_type,
                details=details,
                timestamp=datetime.now(timezone.utc),
            )
        )
