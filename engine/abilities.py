"""Ability resolution: validation, targeting, resource costs, and effects.

execute_ability runs a fixed pipeline. Every validation stage is free of side
effects, so a request that fails leaves the session exactly as it was:

1. look up actor and ability
2. check the actor can use the ability (status, action economy, resources)
3. check the target
4. check custom requirements
5. pay for the ability
6. apply effects
7. report to the event sink
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, NamedTuple

from config import DEFAULT_RESOURCE_TYPE, STATUS_EFFECT_DURATION
from engine.dice import parse_notation, roll_spec
from engine.events import EventSink, NullEventSink
from engine.grid import chebyshev_distance, relocate_occupant
from models.abilities import (
    AbilityDefinition,
    ActionKind,
    EffectType,
    Requirements,
    ResourceType,
    TargetType,
)
from models.actions import AbilityRequest, AbilityResult, GroundTarget, LogEvent, UnitTarget
from models.actors import ActorStatus, SessionActor

if TYPE_CHECKING:
    from engine.catalog import AbilityCatalog
    from models.actions import TargetSpec
    from models.game_state import CombatSession

logger = logging.getLogger(__name__)

_ECONOMY_MESSAGES = {
    ActionKind.ACTION: "No actions remaining this turn.",
    ActionKind.BONUS_ACTION: "No bonus actions remaining this turn.",
    ActionKind.REACTION: "No reactions remaining this turn.",
    ActionKind.FREE: "Cannot take free actions while downed.",
}


class Targeting(NamedTuple):
    """Outcome of target validation."""
    valid: bool
    message: str
    target: SessionActor | None = None
    position: tuple[int, int] | None = None


def _resource_type(ability: AbilityDefinition) -> ResourceType:
    return ability.resource_type or ResourceType(DEFAULT_RESOURCE_TYPE)


def _cost_deferred(ability: AbilityDefinition) -> bool:
    """Speed-funded teleports skip the up-front payment; only the distance moved is spent."""
    return (
        ability.effect_type == EffectType.TELEPORT
        and ability.resource_type == ResourceType.SPEED
    )


class AbilityResolver:
    """Resolves ability requests against one combat session.

    The resolver is the only thing that mutates participants while an
    ability is being resolved. Randomness and event reporting are injected.
    """

    def __init__(
        self,
        session: CombatSession,
        catalog: AbilityCatalog,
        rng: random.Random | None = None,
        event_sink: EventSink | None = None,
    ) -> None:
        self.session = session
        self.catalog = catalog
        self.rng = rng or random.Random()
        self.event_sink = event_sink or NullEventSink()

    # ==========================================
    # Validation
    # ==========================================

    def validate_ability_use(
        self, actor: SessionActor, ability: AbilityDefinition
    ) -> tuple[bool, str]:
        """Check status, action economy and resources.

        Returns:
            (valid, error_message) tuple.
        """
        if actor.status == ActorStatus.DOWNED:
            return False, f"{actor.name} is downed and cannot act."
        if actor.status == ActorStatus.DEAD:
            return False, f"{actor.name} is dead and cannot act."

        if not actor.can_take_action(ability.action_type):
            return False, _ECONOMY_MESSAGES[ability.action_type]

        if ability.resource_cost > 0:
            kind = _resource_type(ability)
            have = actor.current_resource(kind)
            if have < ability.resource_cost:
                label = "movement" if kind == ResourceType.SPEED else kind.value.capitalize()
                return False, (
                    f"Insufficient {label} (need {ability.resource_cost}, have {have})."
                )

        if ability.effect_type == EffectType.TELEPORT and ability.resource_type != ResourceType.SPEED:
            if actor.remaining_speed < 1:
                return False, "No movement speed remaining this turn."

        return True, ""

    def ability_range(self, actor: SessionActor, ability: AbilityDefinition) -> int:
        """Range in squares; the speed sentinel resolves to remaining movement."""
        if ability.uses_remaining_movement:
            return actor.remaining_speed
        return ability.range

    def validate_targeting(
        self,
        actor: SessionActor,
        ability: AbilityDefinition,
        target: TargetSpec,
    ) -> Targeting:
        """Resolve the requested target and check range and alignment."""
        if ability.target_type == TargetType.SELF:
            return Targeting(True, "", target=actor)

        max_range = self.ability_range(actor, ability)

        if ability.target_type == TargetType.GROUND:
            if not isinstance(target, GroundTarget):
                return Targeting(False, "Ground target requires x, y coordinates.")
            if not (0 <= target.x < self.session.width and 0 <= target.y < self.session.height):
                return Targeting(False, "Target location is outside the battlefield.")
            if chebyshev_distance(actor.position, (target.x, target.y)) > max_range:
                return Targeting(False, f"Target location out of range (max {max_range} squares).")
            if ability.effect_type == EffectType.TELEPORT:
                error = self._destination_error(actor, target.x, target.y)
                if error:
                    return Targeting(False, error)
            return Targeting(True, "", position=(target.x, target.y))

        # Enemy / ally
        if not isinstance(target, UnitTarget):
            return Targeting(False, "Must specify a target participant.")

        unit = self.session.get_participant(target.participant_id)
        if unit is None:
            return Targeting(False, "Target not found.")

        if chebyshev_distance(actor.position, unit.position) > max_range:
            return Targeting(False, f"Target out of range (max {max_range} squares).")

        if ability.target_type == TargetType.ENEMY and actor.team == unit.team:
            return Targeting(False, "Cannot target allies with this ability.")
        if ability.target_type == TargetType.ALLY and actor.team != unit.team:
            return Targeting(False, "Can only target allies with this ability.")

        return Targeting(True, "", target=unit)

    def _destination_error(self, actor: SessionActor, x: int, y: int) -> str | None:
        grid = self.session.grid
        if not grid:
            return None
        cell = grid[y][x]
        if cell.terrain == "wall":
            return "Target location is blocked."
        if cell.occupant_id is not None and cell.occupant_id != actor.id:
            return "Target location is occupied."
        return None

    def validate_custom_requirements(
        self, actor: SessionActor, requirements: Requirements | None
    ) -> tuple[bool, str]:
        """Check attribute minimums against the actor's character."""
        if requirements is None:
            return True, ""
        for attribute, minimum in requirements.minimums():
            if actor.character.score(attribute) < minimum:
                return False, f"Requires {attribute.capitalize()} {minimum} or higher."
        return True, ""

    # ==========================================
    # Resource consumption
    # ==========================================

    def consume_resources(self, actor: SessionActor, ability: AbilityDefinition) -> None:
        """Spend the action-economy slot and the resource cost."""
        actor.spend_action(ability.action_type)
        if ability.resource_cost > 0:
            actor.spend_resource(_resource_type(ability), ability.resource_cost)

    # ==========================================
    # Effects
    # ==========================================

    def _roll_magnitude(self, actor: SessionActor, ability: AbilityDefinition) -> int:
        total = roll_spec(parse_notation(ability.damage_dice), self.rng)
        if ability.damage_attribute is not None:
            total += actor.character.modifier(ability.damage_attribute.value)
        return total

    def apply_damage_effect(
        self, actor: SessionActor, target: SessionActor, ability: AbilityDefinition
    ) -> LogEvent:
        """Roll damage plus attribute modifier and apply it to the target's Prana."""
        actual = target.take_damage(self._roll_magnitude(actor, ability))
        actor.damage_dealt += actual
        return LogEvent(
            event_type="damage",
            actor=actor.name,
            target=target.name,
            ability=ability.name,
            damage=actual,
            target_status=target.status.value,
            remaining_prana=target.current_prana,
        )

    def apply_heal_effect(
        self, actor: SessionActor, target: SessionActor, ability: AbilityDefinition
    ) -> LogEvent:
        """Roll healing (the ability's damage dice) plus modifier and restore Prana."""
        actual = target.heal(self._roll_magnitude(actor, ability))
        return LogEvent(
            event_type="heal",
            actor=actor.name,
            target=target.name,
            ability=ability.name,
            healing=actual,
            target_status=target.status.value,
            remaining_prana=target.current_prana,
        )

    def apply_status_effect(
        self, actor: SessionActor, target: SessionActor, ability: AbilityDefinition
    ) -> LogEvent:
        if ability.status_effect:
            target.add_status_effect(ability.status_effect, STATUS_EFFECT_DURATION)
        return LogEvent(
            event_type="status_applied",
            actor=actor.name,
            target=target.name,
            ability=ability.name,
            status_effect=ability.status_effect,
            target_status=target.status.value,
        )

    def apply_teleport_effect(
        self,
        actor: SessionActor,
        position: tuple[int, int],
        ability: AbilityDefinition,
    ) -> LogEvent:
        """Move the actor, paying movement where the ability spends it.

        If the distance exceeds remaining movement an "error" event is
        returned and nothing changes.
        """
        old_pos = actor.position
        distance = chebyshev_distance(old_pos, position)

        if ability.spends_movement and distance > actor.remaining_speed:
            return LogEvent(
                event_type="error",
                actor=actor.name,
                ability=ability.name,
                message=(
                    f"Cannot move {distance} squares with only "
                    f"{actor.remaining_speed} speed remaining."
                ),
            )

        if self.session.grid:
            relocate_occupant(actor.id, old_pos, position, self.session.grid)
        actor.move_to(position[0], position[1])

        if ability.spends_movement:
            actor.spend_resource(ResourceType.SPEED, distance)

        if ability.status_effect:
            actor.add_status_effect(ability.status_effect, STATUS_EFFECT_DURATION)

        return LogEvent(
            event_type="teleport",
            actor=actor.name,
            ability=ability.name,
            old_pos=old_pos,
            new_pos=actor.position,
            status_applied=ability.status_effect,
        )

    def participants_in_radius(self, center: tuple[int, int], radius: int) -> list[SessionActor]:
        """Participants still standing within `radius` (Chebyshev) of a cell."""
        return [
            p for p in self.session.participants.values()
            if p.status not in (ActorStatus.DOWNED, ActorStatus.DEAD)
            and chebyshev_distance(center, p.position) <= radius
        ]

    def _apply_effect(
        self, actor: SessionActor, target: SessionActor, ability: AbilityDefinition
    ) -> LogEvent | None:
        if ability.effect_type == EffectType.DAMAGE:
            return self.apply_damage_effect(actor, target, ability)
        if ability.effect_type == EffectType.HEAL:
            return self.apply_heal_effect(actor, target, ability)
        if ability.effect_type == EffectType.STATUS:
            return self.apply_status_effect(actor, target, ability)
        return None

    # ==========================================
    # Main entry point
    # ==========================================

    def execute_ability(self, request: AbilityRequest) -> AbilityResult:
        """Validate and resolve an ability request.

        Args:
            request: Actor, ability and target of the ability use.

        Returns:
            AbilityResult. On failure nothing in the session has changed.
        """
        logger.debug(
            "Executing %s by %s targeting %s",
            request.ability_id, request.actor_id, request.primary_target,
        )

        actor = self.session.get_participant(request.actor_id)
        if actor is None:
            return self._fail("Actor not found.")
        ability = self.catalog.get(request.ability_id)
        if ability is None:
            return self._fail("Ability not found.")

        valid, error = self.validate_ability_use(actor, ability)
        if not valid:
            return self._fail(error)

        targeting = self.validate_targeting(actor, ability, request.primary_target)
        if not targeting.valid:
            return self._fail(targeting.message)

        valid, error = self.validate_custom_requirements(actor, ability.requirements)
        if not valid:
            return self._fail(error)

        if not _cost_deferred(ability):
            self.consume_resources(actor, ability)

        log_events: list[LogEvent] = []
        affected: list[SessionActor] = []

        if ability.target_type == TargetType.SELF:
            affected = [actor]
            event = self._apply_effect(actor, actor, ability)
            if event is not None:
                log_events.append(event)

        elif ability.effect_type == EffectType.TELEPORT:
            affected = [actor]
            log_events.append(self.apply_teleport_effect(actor, targeting.position, ability))

        else:
            if ability.target_type == TargetType.GROUND:
                affected = self.participants_in_radius(targeting.position, ability.effect_radius)
            elif ability.effect_radius > 0:
                affected = self.participants_in_radius(
                    targeting.target.position, ability.effect_radius
                )
            else:
                affected = [targeting.target]

            for target in affected:
                event = self._apply_effect(actor, target, ability)
                if event is not None:
                    log_events.append(event)

        actor.actions_taken.append(ability.id)
        affected_ids = [p.id for p in affected]

        self.event_sink.emit(
            "ability_used",
            {
                "actor": actor.name,
                "ability": ability.name,
                "affected_count": len(affected_ids),
            },
        )

        return AbilityResult(
            success=True,
            message=f"{actor.name} used {ability.name}!",
            log_events=log_events,
            affected_participants=affected_ids,
        )

    def _fail(self, message: str) -> AbilityResult:
        logger.info("Ability rejected: %s", message)
        return AbilityResult(success=False, message=message)
