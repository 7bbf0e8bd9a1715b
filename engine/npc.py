"""Enemy turn policy: close on the nearest player and use what is affordable."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from engine.abilities import AbilityResolver
from engine.grid import chebyshev_distance, is_occupied
from models.abilities import EffectType
from models.actions import AbilityRequest, AbilityResult, MoveRequest, MoveResult, UnitTarget
from models.actors import SessionActor, Team

if TYPE_CHECKING:
    from engine.catalog import AbilityCatalog
    from models.abilities import AbilityDefinition
    from models.game_state import CombatSession

FALLBACK_ABILITY_ID = "basic_strike"


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def nearest_player(session: CombatSession, actor: SessionActor) -> SessionActor | None:
    """Closest active player-team participant by Chebyshev distance.

    Ties go to whoever comes first in the roster.
    """
    closest = None
    closest_distance = None
    for candidate in session.team_members(Team.PLAYER):
        if not candidate.is_active:
            continue
        dist = chebyshev_distance(actor.position, candidate.position)
        if closest_distance is None or dist < closest_distance:
            closest, closest_distance = candidate, dist
    return closest


def _damage_abilities(actor: SessionActor, catalog: AbilityCatalog) -> list[AbilityDefinition]:
    abilities = [catalog.get(a) for a in actor.character.abilities]
    abilities = [a for a in abilities if a is not None and a.effect_type == EffectType.DAMAGE]
    if not abilities and FALLBACK_ABILITY_ID in catalog:
        abilities = [catalog.get(FALLBACK_ABILITY_ID)]
    return abilities


def choose_enemy_action(
    session: CombatSession,
    actor: SessionActor,
    catalog: AbilityCatalog,
) -> AbilityRequest | MoveRequest | None:
    """Decide what an enemy does on its turn.

    The first damage ability that passes use validation and reaches the
    nearest player is used on them. Failing that, the enemy steps toward
    them, stopping one square short. None means end the turn.
    """
    target = nearest_player(session, actor)
    if target is None:
        return None

    resolver = AbilityResolver(session, catalog)
    distance = chebyshev_distance(actor.position, target.position)

    for ability in _damage_abilities(actor, catalog):
        valid, _ = resolver.validate_ability_use(actor, ability)
        if not valid:
            continue
        if distance <= resolver.ability_range(actor, ability):
            return AbilityRequest(
                actor_id=actor.id,
                ability_id=ability.id,
                primary_target=UnitTarget(participant_id=target.id),
            )

    budget = min(actor.remaining_speed, distance - 1)
    if budget <= 0:
        return None

    dx = target.x - actor.x
    dy = target.y - actor.y
    step_x = _sign(dx) * min(abs(dx), budget)
    step_y = _sign(dy) * min(abs(dy), budget - abs(step_x))
    move_x, move_y = actor.x + step_x, actor.y + step_y

    if (move_x, move_y) == actor.position or is_occupied(move_x, move_y, session.grid):
        return None
    return MoveRequest(actor_id=actor.id, x=move_x, y=move_y)


def resolve_enemy_turn(
    session: CombatSession,
    actor: SessionActor,
    catalog: AbilityCatalog,
    rng: random.Random | None = None,
) -> AbilityResult | MoveResult | None:
    """Choose and carry out an enemy's action for this turn."""
    from engine.combat import _resolve_ability, move_participant

    if not actor.is_active:
        return None

    action = choose_enemy_action(session, actor, catalog)
    if isinstance(action, AbilityRequest):
        return _resolve_ability(session, action, catalog, rng)
    if isinstance(action, MoveRequest):
        return move_participant(session, action)
    return None
