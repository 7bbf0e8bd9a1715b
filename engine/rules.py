"""Attribute rules: modifiers, resource ceilings, and skill checks."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from pydantic import BaseModel

from engine.dice import roll_d20

if TYPE_CHECKING:
    from models.characters import CharacterDefinition

# Each derived skill averages the modifiers of two attributes.
DERIVED_SKILLS: dict[str, tuple[str, str]] = {
    "moha": ("prajna", "samkalpa"),           # Charm / Deception
    "bhaya": ("bala", "samkalpa"),            # Intimidation
    "chhalana": ("dakshata", "buddhi"),       # Stealth / Sleight of Hand
    "anveshana": ("buddhi", "prajna"),        # Investigation
    "sahanashakti": ("dhriti", "samkalpa"),   # Resilience / Fortitude
    "yukti": ("dakshata", "prajna"),          # Tactics / Strategy
    "prerana": ("prajna", "samkalpa"),        # Performance / Inspiration
    "atindriya": ("bala", "prajna"),          # Perception / Insight
}

ATTRIBUTE_TO_RESOURCE: dict[str, str] = {
    "bala": "tapas",
    "dakshata": "tapas",
    "dhriti": "tapas",
    "buddhi": "maya",
    "prajna": "maya",
    "samkalpa": "maya",
}


def calculate_modifier(score: int) -> int:
    """Calculate an attribute modifier: floor((score - 10) / 2).

    Args:
        score: The attribute score (e.g. 14).

    Returns:
        The modifier (e.g. +2 for score 14, -1 for score 9).
    """
    return (score - 10) // 2


def calculate_max_prana(level: int, dhriti: int, buddhi: int) -> int:
    """Maximum Prana: 20 + 2*Dhriti + Buddhi + 5*(level-1), at least 1."""
    return max(1, 20 + dhriti * 2 + buddhi + (level - 1) * 5)


def calculate_max_tapas(level: int, bala: int, dakshata: int) -> int:
    """Maximum Tapas: 10 + 2*level + 2*mod(Bala) + mod(Dakshata), at least 5."""
    base = 10 + level * 2
    return max(5, base + calculate_modifier(bala) * 2 + calculate_modifier(dakshata))


def calculate_max_maya(level: int, buddhi: int, prajna: int) -> int:
    """Maximum Maya: 10 + 2*level + 2*mod(Buddhi) + mod(Prajna), at least 5."""
    base = 10 + level * 2
    return max(5, base + calculate_modifier(buddhi) * 2 + calculate_modifier(prajna))


def resource_type_for_attribute(attribute: str) -> str | None:
    """Map an attribute to the pool it fuels (tapas for physical, maya for mental)."""
    return ATTRIBUTE_TO_RESOURCE.get(attribute)


class SkillCheckResult(BaseModel):
    """Outcome of a d20 skill check."""
    skill: str
    roll: int
    modifier: int
    total: int
    difficulty: int
    success: bool


def skill_check(
    character: CharacterDefinition,
    skill: str,
    difficulty: int,
    rng: random.Random | None = None,
    advantage: bool = False,
    disadvantage: bool = False,
) -> SkillCheckResult:
    """Roll a d20 plus the character's skill modifier against a difficulty.

    Args:
        character: The character attempting the check.
        skill: Derived skill name (e.g. "yukti").
        difficulty: Target number; the check succeeds on total >= difficulty.
        rng: Optional Random instance for seeded/testing rolls.
        advantage: Roll twice, take the higher.
        disadvantage: Roll twice, take the lower.

    Returns:
        SkillCheckResult with the roll breakdown.
    """
    modifier = character.skill_modifier(skill)
    d20 = roll_d20(advantage=advantage, disadvantage=disadvantage, rng=rng)
    total = d20 + modifier
    return SkillCheckResult(
        skill=skill,
        roll=d20,
        modifier=modifier,
        total=total,
        difficulty=difficulty,
        success=total >= difficulty,
    )
