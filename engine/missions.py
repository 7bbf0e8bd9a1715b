"""Mission setup: turn mission content into a ready-to-start combat session."""

from __future__ import annotations

from typing import TYPE_CHECKING

from content.missions import MISSIONS
from content.roster import ROSTER
from engine.combat import add_participant, create_session, start_combat
from models.actors import ActorStatus, SessionActor, Team
from models.characters import CharacterDefinition
from models.game_state import CombatSession

if TYPE_CHECKING:
    from engine.catalog import AbilityCatalog


def get_mission(mission_id: str) -> dict | None:
    return MISSIONS.get(mission_id)


def build_character(data: dict, catalog: AbilityCatalog) -> CharacterDefinition:
    """Validate a character record, granting its class abilities if none are listed."""
    character = CharacterDefinition.model_validate(data)
    if not character.abilities:
        character.abilities = catalog.class_ability_ids(character.class_name)
    return character


def roster_character(key: str, catalog: AbilityCatalog) -> CharacterDefinition:
    """Build a character from the roster presets.

    Raises:
        ValueError: If the preset does not exist.
    """
    preset = ROSTER.get(key)
    if preset is None:
        raise ValueError(f"Unknown roster character: {key}")
    return build_character(preset, catalog)


def setup_mission(
    mission_id: str,
    catalog: AbilityCatalog,
    start: bool = True,
) -> CombatSession:
    """Create a session for a mission with its party and enemies placed.

    A protected unit joins the player team; an initial "downed" status
    starts it at 0 Prana.

    Args:
        mission_id: Key into the mission table.
        catalog: Used to grant class abilities.
        start: Establish turn order and begin combat immediately.

    Returns:
        The populated CombatSession.

    Raises:
        ValueError: If the mission or a referenced roster character is unknown.
    """
    mission = get_mission(mission_id)
    if mission is None:
        raise ValueError(f"Unknown mission: {mission_id}")

    session = create_session(
        name=mission["name"],
        width=mission["map_width"],
        height=mission["map_height"],
        environment_type=mission.get("environment_type", "generic"),
    )

    for member in mission.get("player_party", []):
        character = roster_character(member["character"], catalog)
        actor = SessionActor(character=character, team=Team.PLAYER)
        add_participant(session, actor, (member["x"], member["y"]))

    protected = mission.get("protected_unit")
    if protected is not None:
        character = roster_character(protected["character"], catalog)
        actor = SessionActor(character=character, team=Team.PLAYER)
        if protected.get("initial_status") == ActorStatus.DOWNED.value:
            actor.current_prana = 0
            actor.status = ActorStatus.DOWNED
        add_participant(session, actor, (protected["x"], protected["y"]))

    for enemy in mission.get("enemies", []):
        character = build_character(
            {
                "name": enemy["name"],
                "class_name": enemy.get("class_name", "Yodha"),
                "level": enemy.get("level", 1),
                "attributes": enemy.get("attributes", {}),
            },
            catalog,
        )
        actor = SessionActor(character=character, team=Team.ENEMY)
        add_participant(session, actor, (enemy["x"], enemy["y"]))

    if start:
        start_combat(session)
    return session
