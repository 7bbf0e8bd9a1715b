"""Tests for ability validation, targeting, costs and effects."""

import random

from content.abilities import ABILITY_DATA, CLASS_ABILITIES
from engine.abilities import AbilityResolver
from engine.catalog import AbilityCatalog
from engine.combat import add_participant, create_session
from engine.grid import occupant_at
from models.actions import AbilityRequest, GroundTarget, SelfTarget, UnitTarget
from models.actors import ActorStatus, SessionActor, Team
from models.characters import Attributes, CharacterDefinition

EXTRA_ABILITIES = [
    {
        "id": "war_cry",
        "name": "War Cry",
        "action_type": "action",
        "target_type": "ground",
        "effect_type": "status",
        "range": 8,
        "effect_radius": 2,
        "status_effect": "rattled",
    },
    {
        "id": "chain_lightning",
        "name": "Chain Lightning",
        "action_type": "action",
        "target_type": "enemy",
        "effect_type": "damage",
        "damage_dice": "1d4",
        "range": 5,
        "effect_radius": 1,
    },
    {
        "id": "heavy_swing",
        "name": "Heavy Swing",
        "action_type": "action",
        "target_type": "enemy",
        "effect_type": "damage",
        "damage_dice": "1d4",
        "range": 1,
        "resource_cost": 2,
    },
]


class RecordingSink:
    """Collects emitted events for assertions."""

    def __init__(self):
        self.events = []

    def emit(self, event_type, details):
        self.events.append((event_type, details))


def _make_actor(
    actor_id: str,
    team: Team = Team.PLAYER,
    x: int = 0,
    y: int = 0,
    **attributes,
) -> SessionActor:
    """Helper to create a test actor (default attributes: Prana 50, Tapas 12, Maya 12)."""
    character = CharacterDefinition(
        name=actor_id.capitalize(), attributes=Attributes(**attributes)
    )
    return SessionActor(id=actor_id, character=character, team=team, x=x, y=y)


def _make_session(*actors: SessionActor):
    """Helper to place actors on a 10x10 board."""
    session = create_session(width=10, height=10)
    for actor in actors:
        add_participant(session, actor)
    return session


def _make_resolver(session, seed: int = 42, sink=None) -> AbilityResolver:
    catalog = AbilityCatalog(ABILITY_DATA + EXTRA_ABILITIES, CLASS_ABILITIES)
    return AbilityResolver(session, catalog, rng=random.Random(seed), event_sink=sink)


def _use(resolver, actor_id, ability_id, target=None):
    return resolver.execute_ability(
        AbilityRequest(
            actor_id=actor_id,
            ability_id=ability_id,
            primary_target=target or SelfTarget(),
        )
    )


class TestLookup:
    """Tests for unknown actors and abilities."""

    def test_actor_not_found(self):
        resolver = _make_resolver(_make_session(_make_actor("hero")))
        result = _use(resolver, "ghost", "basic_strike")
        assert not result.success
        assert result.message == "Actor not found."

    def test_ability_not_found(self):
        resolver = _make_resolver(_make_session(_make_actor("hero")))
        result = _use(resolver, "hero", "fireball")
        assert not result.success
        assert result.message == "Ability not found."


class TestFailureHasNoSideEffects:
    """A rejected request leaves the session exactly as it was."""

    def test_out_of_range_strike(self):
        session = _make_session(
            _make_actor("hero"),
            _make_actor("foe", Team.ENEMY, x=2, y=0),
        )
        before = session.model_dump()
        sink = RecordingSink()
        result = _use(_make_resolver(session, sink=sink), "hero", "basic_strike", UnitTarget(participant_id="foe"))
        assert not result.success
        assert result.message == "Target out of range (max 1 squares)."
        assert result.log_events == []
        assert session.model_dump() == before
        assert sink.events == []

    def test_insufficient_tapas(self):
        hero = _make_actor("hero")
        hero.current_tapas = 2
        session = _make_session(hero, _make_actor("foe", Team.ENEMY, x=3, y=0))
        result = _use(_make_resolver(session), "hero", "rapid_fire", UnitTarget(participant_id="foe"))
        assert not result.success
        assert result.message == "Insufficient Tapas (need 3, have 2)."
        assert hero.current_tapas == 2
        assert hero.actions == 1


class TestDamage:
    """Tests for damage abilities."""

    def test_strike_rolls_dice_plus_modifier(self):
        hero = _make_actor("hero", bala=14)             # +2
        foe = _make_actor("foe", Team.ENEMY, x=1, y=1)  # diagonal counts as 1
        session = _make_session(hero, foe)

        check_rng = random.Random(42)
        expected = check_rng.randint(1, 8) + 2

        result = _use(_make_resolver(session, seed=42), "hero", "basic_strike", UnitTarget(participant_id="foe"))
        assert result.success
        assert result.message == "Hero used Basic Strike!"
        assert result.affected_participants == ["foe"]
        assert foe.current_prana == 50 - expected
        assert hero.damage_dealt == expected
        assert foe.damage_received == expected
        assert hero.actions == 0
        assert hero.actions_taken == ["basic_strike"]

        event = result.log_events[0]
        assert event.event_type == "damage"
        assert event.damage == expected
        assert event.target == "Foe"
        assert event.remaining_prana == foe.current_prana

    def test_action_exhausted(self):
        hero = _make_actor("hero")
        foe = _make_actor("foe", Team.ENEMY, x=1, y=0)
        resolver = _make_resolver(_make_session(hero, foe))
        assert _use(resolver, "hero", "basic_strike", UnitTarget(participant_id="foe")).success
        prana = foe.current_prana

        result = _use(resolver, "hero", "basic_strike", UnitTarget(participant_id="foe"))
        assert not result.success
        assert result.message == "No actions remaining this turn."
        assert foe.current_prana == prana

    def test_downed_actor_cannot_act(self):
        hero = _make_actor("hero")
        hero.take_damage(100)
        session = _make_session(hero, _make_actor("foe", Team.ENEMY, x=1, y=0))
        result = _use(_make_resolver(session), "hero", "basic_strike", UnitTarget(participant_id="foe"))
        assert not result.success
        assert result.message == "Hero is downed and cannot act."

    def test_lethal_damage_downs_target(self):
        foe = _make_actor("foe", Team.ENEMY, x=1, y=0)
        foe.current_prana = 1
        session = _make_session(_make_actor("hero"), foe)
        result = _use(_make_resolver(session), "hero", "basic_strike", UnitTarget(participant_id="foe"))
        assert result.success
        assert foe.current_prana == 0
        assert foe.status == ActorStatus.DOWNED
        assert result.log_events[0].target_status == "downed"

    def test_cost_without_type_charges_tapas(self):
        hero = _make_actor("hero")
        session = _make_session(hero, _make_actor("foe", Team.ENEMY, x=1, y=0))
        assert _use(_make_resolver(session), "hero", "heavy_swing", UnitTarget(participant_id="foe")).success
        assert hero.current_tapas == 10

    def test_area_around_enemy_target(self):
        hero = _make_actor("hero")
        foe = _make_actor("foe", Team.ENEMY, x=3, y=0)
        neighbour = _make_actor("neighbour", Team.ENEMY, x=4, y=1)
        far = _make_actor("far", Team.ENEMY, x=5, y=0)
        session = _make_session(hero, foe, neighbour, far)
        result = _use(_make_resolver(session), "hero", "chain_lightning", UnitTarget(participant_id="foe"))
        assert result.success
        assert set(result.affected_participants) == {"foe", "neighbour"}
        assert far.current_prana == 50
        assert len(result.log_events) == 2


class TestTargeting:
    """Tests for target resolution and alignment."""

    def test_unit_target_required(self):
        session = _make_session(_make_actor("hero"), _make_actor("foe", Team.ENEMY, x=1, y=0))
        result = _use(_make_resolver(session), "hero", "basic_strike", SelfTarget())
        assert result.message == "Must specify a target participant."

    def test_unknown_target(self):
        session = _make_session(_make_actor("hero"))
        result = _use(_make_resolver(session), "hero", "basic_strike", UnitTarget(participant_id="nobody"))
        assert result.message == "Target not found."

    def test_ground_target_required(self):
        session = _make_session(_make_actor("hero"), _make_actor("foe", Team.ENEMY, x=1, y=0))
        result = _use(_make_resolver(session), "hero", "scatter_shot", UnitTarget(participant_id="foe"))
        assert result.message == "Ground target requires x, y coordinates."

    def test_cannot_strike_teammate(self):
        session = _make_session(_make_actor("hero"), _make_actor("friend", x=1, y=0))
        result = _use(_make_resolver(session), "hero", "basic_strike", UnitTarget(participant_id="friend"))
        assert not result.success
        assert result.message == "Cannot target allies with this ability."

    def test_cannot_heal_enemy(self):
        session = _make_session(_make_actor("hero"), _make_actor("foe", Team.ENEMY, x=1, y=0))
        result = _use(_make_resolver(session), "hero", "first_aid", UnitTarget(participant_id="foe"))
        assert result.message == "Can only target allies with this ability."

    def test_ally_team_is_not_player_team(self):
        session = _make_session(_make_actor("hero"), _make_actor("guide", Team.ALLY, x=1, y=0))
        result = _use(_make_resolver(session), "hero", "first_aid", UnitTarget(participant_id="guide"))
        assert not result.success
        assert result.message == "Can only target allies with this ability."


class TestRequirements:
    """Tests for attribute minimums."""

    def test_requirement_not_met(self):
        hero = _make_actor("hero", prajna=10)
        session = _make_session(hero, _make_actor("foe", Team.ENEMY, x=5, y=0))
        result = _use(_make_resolver(session), "hero", "precision_shot", UnitTarget(participant_id="foe"))
        assert not result.success
        assert result.message == "Requires Prajna 12 or higher."
        assert hero.current_maya == hero.character.max_maya
        assert hero.bonus_actions == 1

    def test_requirement_met(self):
        hero = _make_actor("hero", prajna=12)
        session = _make_session(hero, _make_actor("foe", Team.ENEMY, x=5, y=0))
        result = _use(_make_resolver(session), "hero", "precision_shot", UnitTarget(participant_id="foe"))
        assert result.success
        assert hero.current_maya == hero.character.max_maya - 2
        assert hero.bonus_actions == 0
        assert hero.actions == 1


class TestGroundArea:
    """Tests for ground-targeted area abilities."""

    def test_radius_hits_everyone_standing_in_area(self):
        hero = _make_actor("hero")
        near = _make_actor("near", Team.ENEMY, x=5, y=5)
        corner = _make_actor("corner", Team.ENEMY, x=7, y=7)
        side = _make_actor("side", Team.ENEMY, x=4, y=6)
        outside = _make_actor("outside", Team.ENEMY, x=8, y=5)
        downed = _make_actor("downed", Team.ENEMY, x=6, y=4)
        downed.take_damage(100)
        session = _make_session(hero, near, corner, side, outside, downed)

        result = _use(_make_resolver(session), "hero", "war_cry", GroundTarget(x=5, y=5))
        assert result.success
        assert set(result.affected_participants) == {"near", "corner", "side"}
        for actor in (near, corner, side):
            assert actor.has_status_effect("rattled")
        assert not outside.has_status_effect("rattled")
        assert not downed.has_status_effect("rattled")
        assert all(e.event_type == "status_applied" for e in result.log_events)

    def test_empty_area_still_succeeds(self):
        hero = _make_actor("hero")
        session = _make_session(hero)
        result = _use(_make_resolver(session), "hero", "war_cry", GroundTarget(x=6, y=6))
        assert result.success
        assert result.affected_participants == []
        assert hero.actions == 0

    def test_ground_outside_battlefield(self):
        session = _make_session(_make_actor("hero", x=8, y=8))
        result = _use(_make_resolver(session), "hero", "war_cry", GroundTarget(x=10, y=8))
        assert result.message == "Target location is outside the battlefield."

    def test_ground_out_of_range(self):
        session = _make_session(_make_actor("hero"))
        result = _use(_make_resolver(session), "hero", "intimidating_shout", GroundTarget(x=6, y=2))
        assert result.message == "Target location out of range (max 5 squares)."


class TestTeleport:
    """Tests for movement abilities."""

    def test_quick_movement(self):
        hero = _make_actor("hero")
        session = _make_session(hero)
        result = _use(_make_resolver(session), "hero", "quick_movement", GroundTarget(x=3, y=2))
        assert result.success
        assert hero.position == (3, 2)
        assert hero.remaining_speed == 3
        assert hero.bonus_actions == 1    # only the distance is paid
        assert occupant_at(0, 0, session.grid) is None
        assert occupant_at(3, 2, session.grid) == "hero"

        event = result.log_events[0]
        assert event.event_type == "teleport"
        assert event.old_pos == (0, 0)
        assert event.new_pos == (3, 2)

    def test_repeat_quick_movement_while_speed_remains(self):
        hero = _make_actor("hero")
        resolver = _make_resolver(_make_session(hero))
        assert _use(resolver, "hero", "quick_movement", GroundTarget(x=2, y=0)).success
        assert hero.remaining_speed == 4

        result = _use(resolver, "hero", "quick_movement", GroundTarget(x=4, y=0))
        assert result.success
        assert result.log_events[0].event_type == "teleport"
        assert hero.position == (4, 0)
        assert hero.remaining_speed == 2
        assert hero.bonus_actions == 1

    def test_not_enough_speed_reports_error(self):
        hero = _make_actor("hero")
        hero.remaining_speed = 2
        session = _make_session(hero)
        result = _use(_make_resolver(session), "hero", "quick_movement", GroundTarget(x=4, y=0))
        assert result.success
        assert result.log_events[0].event_type == "error"
        assert hero.position == (0, 0)
        assert hero.remaining_speed == 2
        assert hero.bonus_actions == 1

    def test_occupied_destination(self):
        session = _make_session(_make_actor("hero"), _make_actor("foe", Team.ENEMY, x=2, y=0))
        result = _use(_make_resolver(session), "hero", "quick_movement", GroundTarget(x=2, y=0))
        assert not result.success
        assert result.message == "Target location is occupied."

    def test_wall_destination(self):
        session = _make_session(_make_actor("hero"))
        session.grid[0][3].terrain = "wall"
        result = _use(_make_resolver(session), "hero", "quick_movement", GroundTarget(x=3, y=0))
        assert result.message == "Target location is blocked."

    def test_basic_move_range_is_remaining_speed(self):
        hero = _make_actor("hero")
        session = _make_session(hero)
        resolver = _make_resolver(session)
        basic_move = resolver.catalog.get("basic_move")
        assert resolver.ability_range(hero, basic_move) == 6

        assert _use(resolver, "hero", "basic_move", GroundTarget(x=4, y=4)).success
        assert hero.remaining_speed == 2
        assert resolver.ability_range(hero, basic_move) == 2

        result = _use(resolver, "hero", "basic_move", GroundTarget(x=4, y=7))
        assert not result.success
        assert result.message == "Target location out of range (max 2 squares)."

    def test_no_movement_remaining(self):
        hero = _make_actor("hero")
        hero.remaining_speed = 0
        session = _make_session(hero)
        result = _use(_make_resolver(session), "hero", "basic_move", GroundTarget(x=0, y=0))
        assert not result.success
        assert result.message == "No movement speed remaining this turn."


class TestHealing:
    """Tests for heal abilities."""

    def test_heal_revives_downed_ally(self):
        medic = _make_actor("medic")
        patient = _make_actor("patient", x=1, y=0)
        patient.take_damage(100)
        session = _make_session(medic, patient)

        expected = random.Random(7).randint(1, 8) + 2
        result = _use(_make_resolver(session, seed=7), "medic", "first_aid", UnitTarget(participant_id="patient"))
        assert result.success
        assert patient.current_prana == expected
        assert patient.status == ActorStatus.ACTIVE
        assert result.log_events[0].healing == expected

    def test_heal_caps_at_ceiling(self):
        medic = _make_actor("medic")
        patient = _make_actor("patient", x=1, y=0)
        patient.take_damage(1)
        session = _make_session(medic, patient)
        result = _use(_make_resolver(session), "medic", "first_aid", UnitTarget(participant_id="patient"))
        assert patient.current_prana == 50
        assert result.log_events[0].healing == 1


class TestSelfTarget:
    """Tests for self-targeted abilities."""

    def test_defensive_stance(self):
        hero = _make_actor("hero")
        session = _make_session(hero)
        result = _use(_make_resolver(session), "hero", "defensive_stance")
        assert result.success
        assert result.affected_participants == ["hero"]
        assert hero.has_status_effect("defended")
        assert hero.actions == 1    # free action

    def test_shield_ward_spends_reaction_and_tapas(self):
        hero = _make_actor("hero")
        session = _make_session(hero)
        assert _use(_make_resolver(session), "hero", "shield_ward").success
        assert hero.reactions == 3
        assert hero.current_tapas == 10
        assert hero.has_status_effect("shielded")


class TestEventSink:
    """Tests for session-level event reporting."""

    def test_success_emits_ability_used(self):
        sink = RecordingSink()
        session = _make_session(_make_actor("hero"), _make_actor("foe", Team.ENEMY, x=1, y=0))
        _use(_make_resolver(session, sink=sink), "hero", "basic_strike", UnitTarget(participant_id="foe"))
        assert sink.events == [
            ("ability_used", {"actor": "Hero", "ability": "Basic Strike", "affected_count": 1}),
        ]
