"""Ability definition models: what an ability costs and what it does."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from engine.dice import parse_notation

# Range sentinel: the ability reaches as far as the actor's remaining movement.
SPEED_RANGE = "speed"


class ActionKind(str, Enum):
    """Which slot of the action economy an ability consumes."""
    ACTION = "action"
    BONUS_ACTION = "bonus_action"
    REACTION = "reaction"
    FREE = "free"


class TargetType(str, Enum):
    """What an ability is aimed at."""
    SELF = "self"
    ALLY = "ally"
    ENEMY = "enemy"
    GROUND = "ground"


class EffectType(str, Enum):
    """What an ability does to whatever it hits."""
    DAMAGE = "damage"
    HEAL = "heal"
    STATUS = "status"
    TELEPORT = "teleport"


class ResourceType(str, Enum):
    """Spendable pools on a session actor."""
    PRANA = "prana"
    TAPAS = "tapas"
    MAYA = "maya"
    SPEED = "speed"


class Attribute(str, Enum):
    """The six attributes, by their field names."""
    BALA = "bala"
    DAKSHATA = "dakshata"
    DHRITI = "dhriti"
    BUDDHI = "buddhi"
    PRAJNA = "prajna"
    SAMKALPA = "samkalpa"


class Requirements(BaseModel):
    """Custom prerequisites: minimum attribute scores."""
    min_bala: int | None = None
    min_dakshata: int | None = None
    min_dhriti: int | None = None
    min_buddhi: int | None = None
    min_prajna: int | None = None
    min_samkalpa: int | None = None

    def minimums(self) -> list[tuple[str, int]]:
        """(attribute, minimum) pairs that are set, in attribute order."""
        pairs = []
        for attribute in Attribute:
            minimum = getattr(self, f"min_{attribute.value}")
            if minimum is not None:
                pairs.append((attribute.value, minimum))
        return pairs


class AbilityDefinition(BaseModel):
    """A data-driven ability. Read-only once loaded."""
    id: str
    name: str
    description: str = ""
    action_type: ActionKind
    target_type: TargetType
    effect_type: EffectType
    damage_dice: str | None = None          # Also used as the healing dice
    damage_attribute: Attribute | None = None
    range: int | Literal["speed"] = Field(default=0)
    effect_radius: int = Field(default=0, ge=0)
    resource_type: ResourceType | None = None
    resource_cost: int = Field(default=0, ge=0)
    status_effect: str | None = None
    requirements: Requirements | None = None

    @model_validator(mode="after")
    def _check_effect_shape(self) -> "AbilityDefinition":
        if isinstance(self.range, int) and self.range < 0:
            raise ValueError(f"{self.id}: range must be non-negative")
        if self.effect_type == EffectType.STATUS and not self.status_effect:
            raise ValueError(f"{self.id}: status abilities need a status_effect")
        if self.effect_type in (EffectType.DAMAGE, EffectType.HEAL):
            if parse_notation(self.damage_dice).count == 0:
                raise ValueError(
                    f"{self.id}: {self.effect_type.value} abilities need dice notation"
                )
        if self.effect_type == EffectType.TELEPORT and self.target_type != TargetType.GROUND:
            raise ValueError(f"{self.id}: teleport abilities must target the ground")
        return self

    @property
    def uses_remaining_movement(self) -> bool:
        """True when range is the actor's remaining movement."""
        return self.range == SPEED_RANGE

    @property
    def spends_movement(self) -> bool:
        """True when moving with this ability costs the distance travelled."""
        return self.resource_type == ResourceType.SPEED or self.uses_remaining_movement
