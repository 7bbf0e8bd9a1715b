"""Session actor: a character instance taking part in one combat."""

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field, model_validator

from config import (
    ACTIONS_PER_TURN,
    BONUS_ACTIONS_PER_TURN,
    DEFAULT_MOVEMENT_SPEED,
    REACTIONS_PER_TURN,
    TURN_MOVEMENT_ALLOTMENT,
)
from models.abilities import ActionKind, ResourceType
from models.characters import CharacterDefinition


class Team(str, Enum):
    """Sides a participant can fight on."""
    PLAYER = "player"
    ALLY = "ally"
    ENEMY = "enemy"
    NPC = "npc"


class ActorStatus(str, Enum):
    """Lifecycle status of a session actor."""
    ACTIVE = "active"
    DOWNED = "downed"       # Prana reached 0; healing revives
    DEAD = "dead"           # Terminal; nothing in the engine produces it yet
    STUNNED = "stunned"


class StatusEffect(BaseModel):
    """A timed status effect; duration counts down on every turn reset."""
    name: str
    duration: int
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SessionActor(BaseModel):
    """A combat participant: position, current pools, action economy, status.

    Current pools start at the character's ceilings and never leave
    [0, ceiling]. Status is DOWNED exactly while Prana is 0.
    """
    id: str = Field(default_factory=lambda: str(uuid4()))
    character: CharacterDefinition
    session_id: str | None = None
    team: Team = Team.PLAYER
    x: int = 0
    y: int = 0
    z: int = 0                          # Elevation

    current_prana: int | None = None
    current_tapas: int | None = None
    current_maya: int | None = None

    movement_speed: int = DEFAULT_MOVEMENT_SPEED
    remaining_speed: int | None = None
    actions: int = ACTIONS_PER_TURN
    bonus_actions: int = BONUS_ACTIONS_PER_TURN
    reactions: int = REACTIONS_PER_TURN

    status: ActorStatus = ActorStatus.ACTIVE
    status_effects: list[StatusEffect] = []

    damage_dealt: int = 0
    damage_received: int = 0
    actions_taken: list[str] = []       # Ability ids, in order of use

    @model_validator(mode="after")
    def _fill_pools(self) -> "SessionActor":
        ceilings = (
            ("current_prana", self.character.max_prana),
            ("current_tapas", self.character.max_tapas),
            ("current_maya", self.character.max_maya),
        )
        for field_name, ceiling in ceilings:
            value = getattr(self, field_name)
            value = ceiling if value is None else min(max(0, value), ceiling)
            setattr(self, field_name, value)
        if self.remaining_speed is None:
            self.remaining_speed = self.movement_speed
        if self.current_prana == 0:
            self.status = ActorStatus.DOWNED
        return self

    @property
    def name(self) -> str:
        return self.character.name

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)

    @property
    def is_active(self) -> bool:
        return self.status == ActorStatus.ACTIVE

    # ------------------------------------------------------------------
    # Turn lifecycle and action economy
    # ------------------------------------------------------------------

    def reset_turn(self) -> None:
        """Restore the action economy and movement; tick status effects down.

        Movement always resets to TURN_MOVEMENT_ALLOTMENT, not movement_speed.
        """
        self.actions = ACTIONS_PER_TURN
        self.bonus_actions = BONUS_ACTIONS_PER_TURN
        self.reactions = REACTIONS_PER_TURN
        self.remaining_speed = TURN_MOVEMENT_ALLOTMENT

        remaining = []
        for effect in self.status_effects:
            effect.duration -= 1
            if effect.duration > 0:
                remaining.append(effect)
        self.status_effects = remaining

    def can_take_action(self, kind: ActionKind | str) -> bool:
        """Check whether the action-economy slot for `kind` is available."""
        kind = ActionKind(kind)
        if kind == ActionKind.ACTION:
            return self.actions > 0
        if kind == ActionKind.BONUS_ACTION:
            return self.bonus_actions > 0
        if kind == ActionKind.REACTION:
            return self.reactions > 0 and self.status != ActorStatus.DOWNED
        return self.status != ActorStatus.DOWNED

    def spend_action(self, kind: ActionKind | str) -> None:
        """Use up one action-economy slot. Free actions cost nothing."""
        kind = ActionKind(kind)
        if kind == ActionKind.ACTION:
            self.actions = max(0, self.actions - 1)
        elif kind == ActionKind.BONUS_ACTION:
            self.bonus_actions = max(0, self.bonus_actions - 1)
        elif kind == ActionKind.REACTION:
            self.reactions = max(0, self.reactions - 1)

    # ------------------------------------------------------------------
    # Resources
    # ------------------------------------------------------------------

    def current_resource(self, kind: ResourceType | str) -> int:
        """Return the current value of a pool (speed = remaining movement)."""
        kind = ResourceType(kind)
        if kind == ResourceType.SPEED:
            return self.remaining_speed
        return getattr(self, f"current_{kind.value}")

    def resource_ceiling(self, kind: ResourceType | str) -> int:
        kind = ResourceType(kind)
        if kind == ResourceType.SPEED:
            return TURN_MOVEMENT_ALLOTMENT
        return getattr(self.character, f"max_{kind.value}")

    def spend_resource(self, kind: ResourceType | str, amount: int) -> bool:
        """Deduct `amount` from a pool if it can be afforded.

        Returns:
            True if the pool was charged, False if it was insufficient
            (in which case nothing changes).
        """
        kind = ResourceType(kind)
        amount = max(0, amount)
        current = self.current_resource(kind)
        if current < amount:
            return False

        if kind == ResourceType.SPEED:
            self.remaining_speed = current - amount
        else:
            setattr(self, f"current_{kind.value}", current - amount)
            if kind == ResourceType.PRANA:
                self._sync_downed()
        return True

    def restore_resource(self, kind: ResourceType | str, amount: int) -> None:
        """Add `amount` to a Prana/Tapas/Maya pool, clamped to its ceiling."""
        kind = ResourceType(kind)
        if kind == ResourceType.SPEED:
            return
        amount = max(0, amount)
        ceiling = self.resource_ceiling(kind)
        current = self.current_resource(kind)
        setattr(self, f"current_{kind.value}", min(current + amount, ceiling))
        if kind == ResourceType.PRANA:
            self._sync_downed()

    def take_damage(self, amount: int) -> int:
        """Reduce Prana, never below 0; reaching 0 downs the actor.

        Returns:
            Damage actually taken (capped by remaining Prana).
        """
        amount = max(0, amount)
        old_prana = self.current_prana
        self.current_prana = max(0, self.current_prana - amount)
        self.damage_received += amount
        self._sync_downed()
        return old_prana - self.current_prana

    def heal(self, amount: int) -> int:
        """Restore Prana up to the ceiling; a downed actor above 0 stands up.

        Returns:
            Healing actually applied.
        """
        amount = max(0, amount)
        old_prana = self.current_prana
        self.current_prana = min(self.current_prana + amount, self.character.max_prana)
        self._sync_downed()
        return self.current_prana - old_prana

    def _sync_downed(self) -> None:
        if self.current_prana <= 0:
            if self.status != ActorStatus.DEAD:
                self.status = ActorStatus.DOWNED
        elif self.status == ActorStatus.DOWNED:
            self.status = ActorStatus.ACTIVE

    # ------------------------------------------------------------------
    # Position and status effects
    # ------------------------------------------------------------------

    def move_to(self, x: int, y: int, z: int = 0) -> int:
        """Set the position and return the Chebyshev distance travelled.

        Grid occupancy is not touched here; callers that own the grid
        relocate the occupant themselves.
        """
        old_x, old_y = self.x, self.y
        self.x, self.y, self.z = x, y, z
        return max(abs(x - old_x), abs(y - old_y))

    def add_status_effect(self, name: str, duration: int = 1) -> None:
        """Attach a status effect; an existing one keeps the longer duration."""
        for effect in self.status_effects:
            if effect.name == name:
                effect.duration = max(effect.duration, duration)
                return
        self.status_effects.append(StatusEffect(name=name, duration=duration))

    def remove_status_effect(self, name: str) -> None:
        self.status_effects = [e for e in self.status_effects if e.name != name]

    def has_status_effect(self, name: str) -> bool:
        return any(e.name == name for e in self.status_effects)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def health_percent(self) -> float:
        return self.current_prana / self.character.max_prana * 100

    def resource_percents(self) -> dict[str, float]:
        """Pool fill levels for HUD bars, 0-100."""
        return {
            "prana": self.current_prana / self.character.max_prana * 100,
            "tapas": self.current_tapas / self.character.max_tapas * 100,
            "maya": self.current_maya / self.character.max_maya * 100,
            "speed": self.remaining_speed / TURN_MOVEMENT_ALLOTMENT * 100,
        }

    def summary(self) -> dict:
        """Panel summary of position, pools, action economy and effects."""
        return {
            "id": self.id,
            "name": self.name,
            "team": self.team.value,
            "status": self.status.value,
            "position": {"x": self.x, "y": self.y, "z": self.z},
            "resources": {
                "prana": f"{self.current_prana}/{self.character.max_prana}",
                "tapas": f"{self.current_tapas}/{self.character.max_tapas}",
                "maya": f"{self.current_maya}/{self.character.max_maya}",
                "speed": self.remaining_speed,
            },
            "action_economy": {
                "actions": self.actions,
                "bonus_actions": self.bonus_actions,
                "reactions": self.reactions,
            },
            "status_effects": [e.name for e in self.status_effects],
        }
