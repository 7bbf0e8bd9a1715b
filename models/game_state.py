"""Combat session, grid, and event models."""

from datetime import datetime
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field

from config import MAP_HEIGHT, MAP_WIDTH
from models.actors import SessionActor, Team


class CombatStatus(str, Enum):
    """Possible states for a combat session."""
    WAITING = "waiting"             # Roster being assembled
    ACTIVE = "active"               # Combat in progress
    COMPLETED = "completed"         # One side has no active participants


class CombatOutcome(str, Enum):
    """How a finished combat ended."""
    PLAYERS_WON = "players_won"
    ENEMIES_WON = "enemies_won"


class GridCell(BaseModel):
    """A single cell on the battle grid."""
    x: int
    y: int
    terrain: str = "open"           # "open", "wall"
    occupant_id: str | None = None


class GameEvent(BaseModel):
    """A session-level log entry."""
    round: int
    turn: int
    event_type: str
    details: dict = {}
    timestamp: datetime


class CombatSession(BaseModel):
    """The full state of one combat.

    Participants are keyed by id in insertion order; that order is the
    tie-break when turn order is established.
    """
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str = "Combat Session"
    status: CombatStatus = CombatStatus.WAITING
    width: int = MAP_WIDTH
    height: int = MAP_HEIGHT
    environment_type: str = "generic"
    grid: list[list[GridCell]] = []             # 2D grid [y][x]
    participants: dict[str, SessionActor] = {}  # participant_id -> SessionActor
    turn_order: list[str] = []                  # Ordered participant ids
    current_turn_index: int = 0
    round_number: int = 0
    event_log: list[GameEvent] = []
    outcome: CombatOutcome | None = None

    @property
    def is_active(self) -> bool:
        return self.status == CombatStatus.ACTIVE

    def get_participant(self, participant_id: str | None) -> SessionActor | None:
        if participant_id is None:
            return None
        return self.participants.get(participant_id)

    def team_members(self, *teams: Team) -> list[SessionActor]:
        """Participants on any of the given teams, in roster order."""
        return [p for p in self.participants.values() if p.team in teams]
