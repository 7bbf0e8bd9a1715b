"""Dice notation parsing and rolling."""

import random
import re

from pydantic import BaseModel

_NOTATION = re.compile(r"^(\d+)d(\d+)([+-]\d+)?$")


class DiceSpec(BaseModel):
    """Parsed dice notation: roll `count` dice of `sides` faces, add `bonus`."""
    count: int = 0
    sides: int = 0
    bonus: int = 0


class DiceResult(BaseModel):
    """Result of a dice roll."""
    total: int
    rolls: list[int]
    modifier: int
    notation: str


def parse_notation(notation: str | None) -> DiceSpec:
    """Parse dice notation like '2d6', '1d8+3' or '1d4-1'.

    Empty or unparseable notation yields zero dice, so rolling it is a
    deterministic 0 rather than an error.

    Args:
        notation: Dice notation string, or None.

    Returns:
        DiceSpec with count, sides and bonus.
    """
    if not notation:
        return DiceSpec()

    match = _NOTATION.match(notation.strip().lower())
    if not match or int(match.group(2)) < 1:
        return DiceSpec()

    return DiceSpec(
        count=int(match.group(1)),
        sides=int(match.group(2)),
        bonus=int(match.group(3)) if match.group(3) else 0,
    )


def roll_spec(spec: DiceSpec, rng: random.Random | None = None) -> int:
    """Roll a parsed DiceSpec and return the total."""
    rng = rng or random.Random()
    total = spec.bonus
    for _ in range(spec.count):
        total += rng.randint(1, spec.sides)
    return total


def roll(notation: str | None, rng: random.Random | None = None) -> DiceResult:
    """Parse and roll dice notation like '2d6+3', '1d20', '4d6-1'.

    Args:
        notation: Dice notation string (e.g. "2d6+3").
        rng: Optional Random instance for seeded/testing rolls.

    Returns:
        DiceResult with total, individual rolls, modifier, and notation.
    """
    rng = rng or random.Random()
    spec = parse_notation(notation)

    rolls = [rng.randint(1, spec.sides) for _ in range(spec.count)]
    total = sum(rolls) + spec.bonus

    return DiceResult(
        total=total,
        rolls=rolls,
        modifier=spec.bonus,
        notation=(notation or "").strip().lower(),
    )


def roll_d20(
    advantage: bool = False,
    disadvantage: bool = False,
    rng: random.Random | None = None,
) -> int:
    """Roll a d20, optionally with advantage or disadvantage.

    Args:
        advantage: Roll twice, take the higher.
        disadvantage: Roll twice, take the lower.
        rng: Optional Random instance for seeded/testing rolls.

    Returns:
        The resulting d20 roll.
    """
    rng = rng or random.Random()

    if advantage and disadvantage:
        # They cancel out
        return rng.randint(1, 20)

    if advantage:
        return max(rng.randint(1, 20), rng.randint(1, 20))

    if disadvantage:
        return min(rng.randint(1, 20), rng.randint(1, 20))

    return rng.randint(1, 20)
