"""Character definition models: attributes and derived resource ceilings."""

from uuid import uuid4

from pydantic import BaseModel, Field, computed_field

from engine.rules import (
    DERIVED_SKILLS,
    calculate_max_maya,
    calculate_max_prana,
    calculate_max_tapas,
    calculate_modifier,
)

ATTRIBUTE_NAMES = ("bala", "dakshata", "dhriti", "buddhi", "prajna", "samkalpa")


class Attributes(BaseModel):
    """The six core attributes (10 is average)."""
    bala: int = 10          # Strength / Power
    dakshata: int = 10      # Dexterity / Skill
    dhriti: int = 10        # Endurance / Durability
    buddhi: int = 10        # Intellect / Reasoning
    prajna: int = 10        # Wisdom / Intuition
    samkalpa: int = 10      # Will / Determination


class CharacterDefinition(BaseModel):
    """Static character template shared by every session actor built from it.

    Resource ceilings are computed on access, so changing an attribute or
    the level is reflected immediately.
    """
    id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    level: int = Field(default=1, ge=1)
    race: str = "Human"
    class_name: str = "Chara"
    attributes: Attributes = Attributes()
    abilities: list[str] = []      # Ability ids this character can use

    def score(self, attribute: str) -> int:
        """Return the raw score of an attribute by name."""
        if attribute not in ATTRIBUTE_NAMES:
            raise ValueError(f"Unknown attribute: {attribute}")
        return getattr(self.attributes, attribute)

    def modifier(self, attribute: str) -> int:
        """Return the modifier of an attribute by name."""
        return calculate_modifier(self.score(attribute))

    @computed_field
    @property
    def max_prana(self) -> int:
        return calculate_max_prana(self.level, self.attributes.dhriti, self.attributes.buddhi)

    @computed_field
    @property
    def max_tapas(self) -> int:
        return calculate_max_tapas(self.level, self.attributes.bala, self.attributes.dakshata)

    @computed_field
    @property
    def max_maya(self) -> int:
        return calculate_max_maya(self.level, self.attributes.buddhi, self.attributes.prajna)

    def skill_modifier(self, skill: str) -> int:
        """Average of the two attribute modifiers behind a derived skill.

        Unknown skills give 0.
        """
        pair = DERIVED_SKILLS.get(skill)
        if pair is None:
            return 0
        first, second = pair
        return (self.modifier(first) + self.modifier(second)) // 2

    def summary(self) -> dict:
        """Display summary: identity, attributes and resource ceilings."""
        return {
            "name": self.name,
            "level": self.level,
            "race": self.race,
            "class": self.class_name,
            "attributes": self.attributes.model_dump(),
            "resources": {
                "max_prana": self.max_prana,
                "max_tapas": self.max_tapas,
                "max_maya": self.max_maya,
            },
        }
