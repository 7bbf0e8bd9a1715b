"""Ability and movement request/response models."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field


class SelfTarget(BaseModel):
    """The acting participant itself."""
    kind: Literal["self"] = "self"


class GroundTarget(BaseModel):
    """A grid cell."""
    kind: Literal["ground"] = "ground"
    x: int
    y: int


class UnitTarget(BaseModel):
    """Another participant, by id."""
    kind: Literal["unit"] = "unit"
    participant_id: str


TargetSpec = Annotated[
    SelfTarget | GroundTarget | UnitTarget,
    Field(discriminator="kind"),
]


class AbilityRequest(BaseModel):
    """A request to use an ability."""
    actor_id: str
    ability_id: str
    primary_target: TargetSpec = SelfTarget()
    secondary_targets: list[TargetSpec] = []    # Accepted but not resolved by any ability yet


class LogEvent(BaseModel):
    """One effect application, shaped for the combat log and HUD."""
    event_type: str                     # "damage", "heal", "status_applied", "teleport", "error"
    actor: str | None = None
    target: str | None = None
    ability: str | None = None
    damage: int | None = None
    healing: int | None = None
    status_effect: str | None = None
    target_status: str | None = None
    remaining_prana: int | None = None
    old_pos: tuple[int, int] | None = None
    new_pos: tuple[int, int] | None = None
    status_applied: str | None = None
    message: str | None = None          # Only set on "error" events


class AbilityResult(BaseModel):
    """The outcome of an ability request."""
    success: bool
    message: str
    log_events: list[LogEvent] = []
    affected_participants: list[str] = []


class MoveRequest(BaseModel):
    """A request to walk a participant to a grid cell."""
    actor_id: str
    x: int
    y: int


class MoveResult(BaseModel):
    """The outcome of a movement request."""
    success: bool
    message: str
    distance: int = 0
    old_pos: tuple[int, int] | None = None
    new_pos: tuple[int, int] | None = None
    remaining_speed: int | None = None
