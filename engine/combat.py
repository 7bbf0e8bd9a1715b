"""Combat orchestration: roster, turn order, rounds, and end-of-combat checks."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from config import MAP_HEIGHT, MAP_WIDTH
from engine.abilities import AbilityResolver
from engine.events import SessionEventLog
from engine.grid import (
    clear_occupant,
    create_grid,
    is_occupied,
    manhattan_distance,
    place_occupant,
    relocate_occupant,
)
from engine.rules import calculate_modifier
from models.actions import AbilityRequest, AbilityResult, MoveRequest, MoveResult
from models.actors import ActorStatus, SessionActor, Team
from models.game_state import CombatOutcome, CombatSession, CombatStatus

if TYPE_CHECKING:
    from engine.catalog import AbilityCatalog

logger = logging.getLogger(__name__)

PLAYER_SIDE = (Team.PLAYER, Team.ALLY)
ENEMY_SIDE = (Team.ENEMY,)


def create_session(
    session_id: str | None = None,
    name: str = "Combat Session",
    width: int = MAP_WIDTH,
    height: int = MAP_HEIGHT,
    environment_type: str = "generic",
) -> CombatSession:
    """Initialize a combat session with an empty grid.

    Args:
        session_id: Unique identifier; generated when omitted.
        name: Display name for the session.
        width: Map width in squares.
        height: Map height in squares.
        environment_type: Free-form environment tag (e.g. "ship_deck").

    Returns:
        A fresh CombatSession in WAITING status.
    """
    fields = {
        "name": name,
        "width": width,
        "height": height,
        "environment_type": environment_type,
        "grid": create_grid(width, height),
    }
    if session_id is not None:
        fields["id"] = session_id
    return CombatSession(**fields)


def add_participant(
    session: CombatSession,
    actor: SessionActor,
    position: tuple[int, int] | None = None,
) -> SessionActor:
    """Place an actor on the grid and add them to the roster.

    Args:
        session: Current session.
        actor: The actor to add.
        position: (x, y) to place the actor at; defaults to the actor's own.

    Returns:
        The added actor.

    Raises:
        ValueError: If the id is taken or the position is out of bounds,
            a wall, or occupied.
    """
    if actor.id in session.participants:
        raise ValueError(f"Participant '{actor.id}' is already in the session")

    x, y = position if position is not None else actor.position
    place_occupant(actor.id, (x, y), session.grid)

    actor.move_to(x, y, actor.z)
    actor.session_id = session.id
    session.participants[actor.id] = actor
    return actor


def remove_participant(session: CombatSession, participant_id: str) -> None:
    """Take a participant off the grid, the roster and the turn order.

    The current turn index is adjusted so the same actor stays current
    when someone earlier in the order leaves.
    """
    actor = session.participants.pop(participant_id, None)
    if actor is None:
        return
    clear_occupant(participant_id, actor.position, session.grid)

    if participant_id in session.turn_order:
        index = session.turn_order.index(participant_id)
        session.turn_order.remove(participant_id)
        if index < session.current_turn_index:
            session.current_turn_index -= 1
        if session.current_turn_index >= len(session.turn_order):
            session.current_turn_index = 0


def establish_turn_order(session: CombatSession) -> list[str]:
    """Order participants by Dakshata modifier, highest first.

    The sort is stable, so equal modifiers keep roster order.
    """
    ordered = sorted(
        session.participants.values(),
        key=lambda p: calculate_modifier(p.character.attributes.dakshata),
        reverse=True,
    )
    session.turn_order = [p.id for p in ordered]
    session.current_turn_index = 0
    return session.turn_order


def start_combat(session: CombatSession) -> CombatSession:
    """Fix the turn order and begin combat at round 1.

    Raises:
        ValueError: If the roster is empty.
    """
    if not session.participants:
        raise ValueError("Cannot start combat without participants")

    establish_turn_order(session)
    session.round_number = 1
    session.outcome = None
    session.status = CombatStatus.ACTIVE
    log_event(session, "combat_started", {"turn_order": list(session.turn_order)})
    logger.info("Combat %s started with %d participants", session.id, len(session.turn_order))
    return session


def get_current_actor(session: CombatSession) -> SessionActor | None:
    """The participant whose turn it is, or None if there is no turn order."""
    if not session.turn_order:
        return None
    return session.participants.get(session.turn_order[session.current_turn_index])


def next_turn(session: CombatSession) -> SessionActor | None:
    """Advance to the next participant in turn order.

    Wrapping past the end starts a new round and resets every participant's
    per-turn state. Downed participants are not skipped.

    Returns:
        The new current actor.
    """
    if not session.turn_order:
        return None

    session.current_turn_index += 1
    if session.current_turn_index >= len(session.turn_order):
        session.current_turn_index = 0
        session.round_number += 1
        for participant in session.participants.values():
            participant.reset_turn()
        logger.info("Combat %s: round %d", session.id, session.round_number)

    return get_current_actor(session)


def get_team_members(session: CombatSession, team: Team | str) -> list[SessionActor]:
    return session.team_members(Team(team))


def log_event(session: CombatSession, event_type: str, details: dict) -> None:
    """Append an entry to the session log."""
    SessionEventLog(session).emit(event_type, details)


def check_combat_end(session: CombatSession) -> CombatOutcome | None:
    """Decide whether one side has no active participants left.

    The player side is checked first, so if both sides are out at once the
    result is ENEMIES_WON.

    Returns:
        The outcome, or None while combat continues.
    """
    players_active = any(p.is_active for p in session.team_members(*PLAYER_SIDE))
    enemies_active = any(p.is_active for p in session.team_members(*ENEMY_SIDE))

    if not players_active:
        return CombatOutcome.ENEMIES_WON
    if not enemies_active:
        return CombatOutcome.PLAYERS_WON
    return None


def end_combat(session: CombatSession, outcome: CombatOutcome) -> None:
    """Mark the session COMPLETED with the given outcome."""
    session.outcome = outcome
    session.status = CombatStatus.COMPLETED
    log_event(session, "combat_ended", {"outcome": outcome.value})
    logger.info("Combat %s ended: %s", session.id, outcome.value)


def _settle(session: CombatSession) -> CombatOutcome | None:
    outcome = check_combat_end(session)
    if outcome is not None and session.is_active:
        end_combat(session, outcome)
    return outcome


def _resolve_ability(
    session: CombatSession,
    request: AbilityRequest,
    catalog: AbilityCatalog,
    rng: random.Random | None = None,
) -> AbilityResult:
    """Run the resolver against the session log, then check for combat end."""
    resolver = AbilityResolver(session, catalog, rng=rng, event_sink=SessionEventLog(session))
    result = resolver.execute_ability(request)
    if result.success:
        _settle(session)
    return result


def process_ability(
    session: CombatSession,
    request: AbilityRequest,
    catalog: AbilityCatalog,
    rng: random.Random | None = None,
) -> AbilityResult:
    """Resolve an ability for the current actor, then check for combat end.

    Args:
        session: Current session.
        request: The requested ability use.
        catalog: Ability lookup table.
        rng: Optional Random instance for seeded/testing rolls.

    Returns:
        The resolver's AbilityResult.
    """
    if not session.is_active:
        return AbilityResult(
            success=False,
            message=f"Combat is not active (status: {session.status.value})",
        )

    current = get_current_actor(session)
    if current is None or current.id != request.actor_id:
        return AbilityResult(success=False, message="It's not your turn")

    return _resolve_ability(session, request, catalog, rng)


def move_participant(session: CombatSession, request: MoveRequest) -> MoveResult:
    """Walk a participant to a cell, paying Manhattan distance from remaining speed.

    Args:
        session: Current session.
        request: Who moves and where.

    Returns:
        MoveResult; on failure nothing has changed.
    """
    actor = session.get_participant(request.actor_id)
    if actor is None:
        return MoveResult(success=False, message="Actor not found.")
    if actor.status in (ActorStatus.DOWNED, ActorStatus.DEAD):
        return MoveResult(success=False, message=f"{actor.name} cannot move while {actor.status.value}.")

    destination = (request.x, request.y)
    distance = manhattan_distance(actor.position, destination)
    if distance == 0:
        return MoveResult(success=False, message="Already at that position.")
    if distance > actor.remaining_speed:
        return MoveResult(
            success=False,
            message=f"Out of movement range ({actor.remaining_speed} remaining).",
        )
    if is_occupied(request.x, request.y, session.grid):
        return MoveResult(success=False, message="Tile occupied or blocked.")

    old_pos = actor.position
    relocate_occupant(actor.id, old_pos, destination, session.grid)
    actor.move_to(request.x, request.y)
    actor.spend_resource("speed", distance)
    log_event(session, "moved", {"actor": actor.name, "from": old_pos, "to": destination})

    return MoveResult(
        success=True,
        message=f"{actor.name} moved to ({request.x}, {request.y})",
        distance=distance,
        old_pos=old_pos,
        new_pos=destination,
        remaining_speed=actor.remaining_speed,
    )


def advance_turn(
    session: CombatSession,
    catalog: AbilityCatalog,
    rng: random.Random | None = None,
) -> SessionActor | None:
    """End the current turn and play out any enemy turns that follow.

    Enemy turns are resolved through engine.npc until a non-enemy actor is
    up or combat ends. At most one full pass over the turn order is played
    per call.

    Returns:
        The actor whose turn it now is, or None if combat is over.
    """
    from engine.npc import resolve_enemy_turn

    if not session.is_active:
        return None

    actor = next_turn(session)
    if _settle(session) is not None:
        return None

    for _ in range(len(session.turn_order)):
        if actor is None or actor.team != Team.ENEMY:
            break
        resolve_enemy_turn(session, actor, catalog, rng)
        if not session.is_active:
            return None
        actor = next_turn(session)
        if _settle(session) is not None:
            return None

    return actor
