"""Tests for actor, action, effect and world state models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from hop_engine.models.actions import (
    TURN_ACTION_TYPES,
    MoveAction,
    ResetAction,
    UseSkillAction,
    WaitAction,
    action_adapter,
)
from hop_engine.models.actors import (
    Actor,
    ActorRole,
    Archetype,
    SkillSlot,
    StatusEffect,
    StatusType,
)
from hop_engine.models.effects import Damage, Displacement, Juice
from hop_engine.models.hex import Hex
from hop_engine.models.state import GameStatus, WorldState


def make_actor(actor_id: str = "footman_a", **overrides: object) -> Actor:
    data: dict[str, object] = {
        "id": actor_id,
        "role": ActorRole.ENEMY,
        "archetype": Archetype.FOOTMAN,
        "position": Hex(q=3, r=4),
        "hp": 1,
        "max_hp": 1,
    }
    data.update(overrides)
    return Actor(**data)


def make_player(position: Hex = Hex(q=3, r=8)) -> Actor:
    return Actor(
        id="player",
        role=ActorRole.PLAYER,
        archetype=Archetype.PLAYER,
        position=position,
        hp=3,
        max_hp=3,
        skills=[SkillSlot(id="BASIC_ATTACK"), SkillSlot(id="JUMP", upgrades=["FREE_JUMP"])],
    )


class TestActor:
    """Tests for the Actor model."""

    def test_hp_is_clamped(self) -> None:
        """Test hp is clamped into [0, max_hp] on construction."""
        assert make_actor(hp=9, max_hp=2).hp == 2
        assert make_actor(hp=-4, max_hp=2).hp == 0

    def test_role_helpers(self) -> None:
        """Test player and bomb flags."""
        assert make_player().is_player
        assert not make_actor().is_player
        assert make_actor(archetype=Archetype.BOMB).is_bomb

    def test_skill_lookup_and_upgrades(self) -> None:
        """Test skill slots and upgrade membership."""
        player = make_player()

        assert player.get_skill("JUMP") is not None
        assert player.get_skill("SPEAR_THROW") is None
        assert player.has_upgrade("FREE_JUMP")
        assert not player.has_upgrade("CLEAVE")

    def test_replace_skill_is_copy_on_write(self) -> None:
        """Test replacing a skill leaves the original actor untouched."""
        player = make_player()
        updated = player.replace_skill(SkillSlot(id="JUMP", cooldown=2))

        assert updated.get_skill("JUMP").cooldown == 2  # type: ignore[union-attr]
        assert player.get_skill("JUMP").cooldown == 0  # type: ignore[union-attr]

    def test_status_presence(self) -> None:
        """Test that expired statuses do not count."""
        stunned = make_actor(statuses=[StatusEffect(type=StatusType.STUNNED, duration=1)])
        expired = make_actor(statuses=[StatusEffect(type=StatusType.STUNNED, duration=0)])

        assert stunned.has_status(StatusType.STUNNED)
        assert not expired.has_status(StatusType.STUNNED)

    def test_facing_bounds(self) -> None:
        """Test facing must be a direction index."""
        with pytest.raises(ValidationError):
            make_actor(facing=6)


class TestActions:
    """Tests for the action vocabulary."""

    def test_parse_by_discriminator(self) -> None:
        """Test raw payloads resolve to their action model."""
        move = action_adapter.validate_python({"type": "move", "target": {"q": 3, "r": 7}})
        skill = action_adapter.validate_python({"type": "use_skill", "skill_id": "JUMP"})

        assert isinstance(move, MoveAction)
        assert move.target == Hex(q=3, r=7)
        assert isinstance(skill, UseSkillAction)
        assert skill.target is None

    def test_unknown_type_rejected(self) -> None:
        """Test payloads with an unknown type fail validation."""
        with pytest.raises(ValidationError):
            action_adapter.validate_python({"type": "fly"})

    def test_turn_action_types(self) -> None:
        """Test which actions are gated on a playing run."""
        assert WaitAction().type in TURN_ACTION_TYPES
        assert ResetAction().type not in TURN_ACTION_TYPES


class TestEffects:
    """Tests for effect models."""

    def test_symbolic_and_positional_targets(self) -> None:
        """Test effects accept either a symbolic ref or a cell."""
        assert Displacement(target="self", destination=Hex(q=1, r=3)).target == "self"
        assert Damage(target=Hex(q=1, r=3), amount=1).target == Hex(q=1, r=3)

    def test_damage_amount_non_negative(self) -> None:
        """Test negative damage is rejected."""
        with pytest.raises(ValidationError):
            Damage(target="target_actor", amount=-1)


class TestWorldState:
    """Tests for WorldState queries and copy-on-write helpers."""

    @pytest.fixture
    def state(self) -> WorldState:
        return WorldState(
            player=make_player(),
            enemies=[make_actor("footman_a"), make_actor("footman_b", position=Hex(q=2, r=5))],
            hazards=frozenset({Hex(q=4, r=4)}),
            walls=frozenset({Hex(q=2, r=4)}),
        )

    def test_defaults(self, state: WorldState) -> None:
        """Test a fresh state starts playing on turn zero with the spear."""
        assert state.status == GameStatus.PLAYING
        assert state.turn == 0
        assert state.has_spear
        assert state.juice == []

    def test_actor_queries(self, state: WorldState) -> None:
        """Test actor lookup by id and by cell."""
        assert [a.id for a in state.actors] == ["player", "footman_a", "footman_b"]
        assert state.get_actor("footman_b").position == Hex(q=2, r=5)  # type: ignore[union-attr]
        assert state.actor_at(Hex(q=3, r=8)).id == "player"  # type: ignore[union-attr]
        assert state.enemy_at(Hex(q=3, r=8)) is None

    def test_terrain_queries(self, state: WorldState) -> None:
        """Test walls block walking while hazards do not."""
        assert not state.is_walkable(Hex(q=2, r=4))
        assert state.is_walkable(Hex(q=4, r=4))
        assert state.is_hazard(Hex(q=4, r=4))
        assert not state.is_walkable(Hex(q=0, r=0))

    def test_occupancy_excludes_self(self, state: WorldState) -> None:
        """Test occupancy can ignore a given actor."""
        cell = Hex(q=3, r=4)

        assert state.is_occupied(cell)
        assert not state.is_occupied(cell, exclude_id="footman_a")

    def test_with_actor_and_without_enemy(self, state: WorldState) -> None:
        """Test copy-on-write replacement and removal keep enemy order."""
        moved = state.with_actor(make_actor("footman_a", position=Hex(q=3, r=3)))
        removed = moved.without_enemy("footman_a")

        assert moved.enemies[0].position == Hex(q=3, r=3)
        assert state.enemies[0].position == Hex(q=3, r=4)
        assert [e.id for e in removed.enemies] == ["footman_b"]

    def test_message_log_is_bounded(self, state: WorldState) -> None:
        """Test the message log keeps only the newest entries."""
        for i in range(5):
            state = state.with_message(f"m{i}", limit=3)

        assert state.messages == ["m2", "m3", "m4"]

    def test_serialization_round_trip(self, state: WorldState) -> None:
        """Test a dumped state validates back to an equal state."""
        state = state.model_copy(update={"juice": [Juice(hint="shake")]})
        payload = state.model_dump(mode="json")
        restored = WorldState.model_validate(payload)

        assert payload["walls"] == [{"q": 2, "r": 4}]
        assert restored == state

    def test_frozen(self, state: WorldState) -> None:
        """Test snapshots cannot be mutated in place."""
        with pytest.raises(ValidationError):
            state.turn = 5  # type: ignore[misc]
