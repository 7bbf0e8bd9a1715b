"""Engine-wide configuration constants for the Marakatas combat engine."""

import os

MAP_WIDTH = 20                # Default battlefield width in squares
MAP_HEIGHT = 15               # Default battlefield height in squares
DEFAULT_MOVEMENT_SPEED = 6    # Squares of movement an actor starts combat with
TURN_MOVEMENT_ALLOTMENT = 6   # Squares restored on every turn reset, regardless of actor speed
ACTIONS_PER_TURN = 1
BONUS_ACTIONS_PER_TURN = 1
REACTIONS_PER_TURN = 4
DEFAULT_RESOURCE_TYPE = "tapas"  # Pool charged when an ability has a cost but no resource type
STATUS_EFFECT_DURATION = 1    # Turn resets a status applied by an ability survives
ABILITY_DATA_FILE = os.environ.get("ABILITY_DATA_FILE")  # Optional JSON ability table
RNG_SEED = os.environ.get("RNG_SEED")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


def rng_seed() -> int | None:
    """Return RNG_SEED as an int, or None when unset or blank."""
    if RNG_SEED is None or not RNG_SEED.strip():
        return None
    return int(RNG_SEED)
