"""Tests for the turn reducer."""

from __future__ import annotations

import pytest

from hop_engine.core.constants import (
    FINAL_FLOOR,
    HAZARD_PLAYER_DAMAGE,
    INITIAL_PLAYER_MAX_HP,
    SCORE_PER_FLOOR,
)
from hop_engine.engine.floors import generate_initial_state
from hop_engine.engine.reducer import parse_action, reduce, reduce_all
from hop_engine.engine.scenarios import build_scenario_state
from hop_engine.models.actions import MoveAction, ThrowAction, WaitAction
from hop_engine.models.actors import Intent
from hop_engine.models.hex import Hex
from hop_engine.models.state import GameStatus, WorldState


WAIT = {"type": "wait"}


def move(q: int, r: int) -> dict:
    return {"type": "move", "target": {"q": q, "r": r}}


def throw(q: int, r: int) -> dict:
    return {"type": "throw", "target": {"q": q, "r": r}}


class TestParseAction:
    """Tests for action payload parsing."""

    def test_dict_payloads(self) -> None:
        """Test payloads are validated into their models."""
        assert parse_action(WAIT) == WaitAction()
        assert parse_action(move(3, 7)) == MoveAction(target=Hex(q=3, r=7))

    def test_models_pass_through(self) -> None:
        """Test an action model is returned unchanged."""
        action = ThrowAction(target=Hex(q=3, r=6))

        assert parse_action(action) is action


class TestRejections:
    """Tests for actions that leave the state unchanged."""

    def test_illegal_move(self, empty_state: WorldState, spawn: Hex) -> None:
        """Test a non-adjacent move changes nothing but the message log."""
        after = reduce(empty_state, move(3, 6))

        assert after.player.position == spawn
        assert after.player.hp == empty_state.player.hp
        assert after.turn == 0
        assert after.action_log == []
        assert after.history == []
        assert after.messages[-1] == "You can only move to an adjacent hex."

    def test_move_into_wall(self, spawn: Hex) -> None:
        """Test moving onto a wall is rejected."""
        state = build_scenario_state(walls=[Hex(q=3, r=7)])
        after = reduce(state, move(3, 7))

        assert after.player.position == spawn
        assert after.messages[-1] == "You can't move there."

    def test_malformed_payload(self, empty_state: WorldState) -> None:
        """Test an unknown action type becomes a message."""
        after = reduce(empty_state, {"type": "fly"})

        assert after.messages[-1] == "Invalid action."
        assert after.turn == 0

    def test_unknown_skill(self, empty_state: WorldState) -> None:
        """Test an unknown skill id becomes a message."""
        after = reduce(empty_state, {"type": "use_skill", "skill_id": "FIREBALL"})

        assert "FIREBALL" in after.messages[-1]
        assert after.turn == 0
        assert after.action_log == []

    def test_skill_on_cooldown(self, empty_state: WorldState) -> None:
        """Test a skill used again before its cooldown expires is refused."""
        jumped = reduce(empty_state, {"type": "jump", "target": {"q": 3, "r": 6}})
        assert jumped.player.position == Hex(q=3, r=6)

        again = reduce(jumped, {"type": "jump", "target": {"q": 3, "r": 8}})
        assert again.player.position == Hex(q=3, r=6)
        assert "cooldown" in again.messages[-1]
        assert len(again.action_log) == 1

    def test_moves_refused_unless_playing(self, empty_state: WorldState) -> None:
        """Test turn actions are refused once the run is over."""
        lost = empty_state.model_copy(update={"status": GameStatus.LOST})
        after = reduce(lost, WAIT)

        assert after.turn == 0
        assert after.messages[-1] == "The run is not accepting moves right now."

    def test_input_state_untouched(self, spear_state: WorldState) -> None:
        """Test reducing never modifies its input."""
        before = spear_state.model_dump()
        reduce(spear_state, throw(3, 6))

        assert spear_state.model_dump() == before


class TestTurnResolution:
    """Tests for a full turn."""

    def test_wait_advances_turn(self, empty_state: WorldState) -> None:
        """Test waiting logs the action and stores an undo snapshot."""
        after = reduce(empty_state, WAIT)

        assert after.turn == 1
        assert after.action_log == [WaitAction()]
        assert len(after.history) == 1
        assert after.history[0].turn == 0

    def test_telegraph_hits_when_player_stays(self) -> None:
        """Test a telegraphed attack lands if the player is still on its cell."""
        state = build_scenario_state(enemies=[("footman", Hex(q=3, r=7))])
        footman = state.enemies[0].model_copy(
            update={"intent": Intent.ATTACKING, "intent_position": Hex(q=3, r=8)}
        )
        after = reduce(state.with_actor(footman), WAIT)

        assert after.player.hp == state.player.hp - 1

    def test_telegraph_misses_when_player_moves(self) -> None:
        """Test stepping off the telegraphed cell avoids the attack."""
        state = build_scenario_state(enemies=[("footman", Hex(q=3, r=7))])
        footman = state.enemies[0].model_copy(
            update={"intent": Intent.ATTACKING, "intent_position": Hex(q=3, r=8)}
        )
        after = reduce(state.with_actor(footman), move(2, 8))

        assert after.player.position == Hex(q=2, r=8)
        assert after.player.hp == state.player.hp

    def test_auto_attack_on_persisted_neighbour(self) -> None:
        """Test an enemy adjacent before and after the turn takes a passive hit."""
        state = build_scenario_state(enemies=[("footman", Hex(q=3, r=7))])
        after = reduce(state, WAIT)

        assert after.enemies == []
        assert after.kills == 1
        assert [a.id for a in after.dying_entities] == ["footman_0"]

    def test_no_auto_attack_on_new_neighbour(self) -> None:
        """Test an enemy that only just arrived is not hit."""
        state = build_scenario_state(enemies=[("footman", Hex(q=3, r=6))])
        after = reduce(state, WAIT)

        assert after.enemies[0].position == Hex(q=3, r=7)
        assert after.kills == 0

    def test_lava_burns_player(self) -> None:
        """Test ending a turn on lava hurts the player."""
        state = build_scenario_state(hazards=[Hex(q=3, r=7)])
        after = reduce(state, move(3, 7))

        assert after.player.hp == state.player.hp - HAZARD_PLAYER_DAMAGE
        assert "The lava burns you!" in after.messages

    def test_transient_fields_cleared(self) -> None:
        """Test death and juice records only last for one call."""
        state = build_scenario_state(enemies=[("footman", Hex(q=3, r=7))])
        after = reduce(reduce(state, WAIT), WAIT)

        assert after.dying_entities == []


class TestSpear:
    """End-to-end tests for throwing and recovering the spear."""

    def test_throw_kills(self, spear_state: WorldState) -> None:
        """Test a thrown spear kills the footman and drops on its cell."""
        after = reduce(spear_state, throw(3, 6))

        assert after.enemies == []
        assert any("Killed" in m for m in after.messages)
        assert not after.has_spear
        assert after.spear_position == Hex(q=3, r=6)

    def test_throw_at_empty_ground(self, empty_state: WorldState) -> None:
        """Test a miss still drops the spear on the target cell."""
        after = reduce(empty_state, throw(3, 6))

        assert not after.has_spear
        assert after.spear_position == Hex(q=3, r=6)

    def test_pick_up(self, empty_state: WorldState) -> None:
        """Test walking over the spear returns it to hand."""
        after = reduce_all(empty_state, [throw(3, 6), move(3, 7), move(3, 6)])

        assert after.has_spear
        assert after.spear_position is None
        assert "Picked up your spear." in after.messages

    def test_cannot_throw_twice(self, empty_state: WorldState) -> None:
        """Test a second throw without the spear in hand is refused."""
        thrown = reduce(empty_state, throw(3, 6))
        again = reduce(thrown, throw(3, 7))

        assert again.turn == thrown.turn
        assert again.spear_position == Hex(q=3, r=6)


class TestUndo:
    """Tests for undo."""

    def test_undo_restores_previous_state(self, empty_state: WorldState) -> None:
        """Test undo returns to the snapshot before the last action."""
        after = reduce(reduce(empty_state, move(3, 7)), {"type": "undo"})

        assert after.player.position == empty_state.player.position
        assert after.turn == 0
        assert after.history == []
        assert after.action_log == []
        assert after.messages[-1] == "Undid last action."

    def test_nothing_to_undo(self, empty_state: WorldState) -> None:
        """Test undo on a fresh state only adds a message."""
        after = reduce(empty_state, {"type": "undo"})

        assert after.messages[-1] == "Nothing to undo."

    def test_history_is_bounded(
        self,
        mock_env_vars: dict[str, str],
        empty_state: WorldState,
    ) -> None:
        """Test the undo history keeps only the configured number of snapshots."""
        after = reduce_all(empty_state, [WAIT] * 7)

        assert len(after.history) == 5
        assert after.history[-1].turn == 6
        assert all(s.history == [] for s in after.history)


class TestResetAndLoad:
    """Tests for reset and load_state."""

    def test_reset_keeps_seed_and_loadout(self) -> None:
        """Test reset without a seed replays the same opening."""
        state = generate_initial_state(seed="abc", loadout="VANGUARD")
        played = reduce(state, WAIT)
        after = reduce(played, {"type": "reset"})

        assert after == state

    def test_reset_with_new_seed(self, empty_state: WorldState) -> None:
        """Test reset with a seed starts a different run."""
        after = reduce(empty_state, {"type": "reset", "seed": "fresh"})

        assert after.initial_seed == "fresh"
        assert after.turn == 0
        assert after.action_log == []

    def test_load_state(self, empty_state: WorldState) -> None:
        """Test load_state replaces the state with a serialized snapshot."""
        scenario = build_scenario_state(enemies=[("archer", Hex(q=3, r=3))])
        payload = scenario.model_dump(mode="json")
        after = reduce(empty_state, {"type": "load_state", "state": payload})

        assert after == scenario

    def test_load_invalid_state(self, empty_state: WorldState) -> None:
        """Test a malformed snapshot is refused with a message."""
        after = reduce(empty_state, {"type": "load_state", "state": {"floor": "x"}})

        assert after.messages[-1] == "Invalid state payload."
        assert after.player == empty_state.player

    @pytest.mark.parametrize(
        "patch",
        [
            {"archetype": "player"},
            {"role": "player"},
            {"id": "player"},
            {"position": {"q": 3, "r": 8}},
        ],
    )
    def test_load_unplayable_roster(self, empty_state: WorldState, patch: dict) -> None:
        """Test a well-formed snapshot with an unusable enemy is refused."""
        scenario = build_scenario_state(enemies=[("footman", Hex(q=3, r=3))])
        payload = scenario.model_dump(mode="json")
        payload["enemies"][0].update(patch)

        after = reduce(empty_state, {"type": "load_state", "state": payload})
        waited = reduce(after, WAIT)

        assert "Loaded enemy" in after.messages[-1]
        assert after.player == empty_state.player
        assert after.enemies == empty_state.enemies
        assert waited.turn == 1

    def test_load_duplicate_enemy_ids(self, empty_state: WorldState) -> None:
        """Test two enemies sharing an id are refused."""
        scenario = build_scenario_state(
            enemies=[("footman", Hex(q=3, r=3)), ("archer", Hex(q=3, r=2))],
        )
        payload = scenario.model_dump(mode="json")
        payload["enemies"][1]["id"] = payload["enemies"][0]["id"]

        after = reduce(empty_state, {"type": "load_state", "state": payload})

        assert "clashes" in after.messages[-1]


class TestShrine:
    """Tests for shrines and upgrade selection."""

    @pytest.fixture
    def shrine_state(self) -> WorldState:
        """Provide a player standing on a shrine."""
        state = build_scenario_state(shrine_position=Hex(q=3, r=7))
        return reduce(state, move(3, 7))

    def test_shrine_offers_upgrades(self, shrine_state: WorldState) -> None:
        """Test stepping onto a shrine pauses the run with upgrade options."""
        assert shrine_state.status == GameStatus.CHOOSING_UPGRADE
        assert 1 <= len(shrine_state.shrine_options) <= 3
        assert len(set(shrine_state.shrine_options)) == len(shrine_state.shrine_options)
        assert shrine_state.messages[-1] == "A holy shrine! Choose an upgrade."

    def test_moves_refused_while_choosing(self, shrine_state: WorldState) -> None:
        """Test turn actions wait for the upgrade choice."""
        after = reduce(shrine_state, WAIT)

        assert after.status == GameStatus.CHOOSING_UPGRADE
        assert after.turn == shrine_state.turn

    def test_select_upgrade(self, shrine_state: WorldState) -> None:
        """Test picking an offered upgrade equips it and resumes play."""
        choice = shrine_state.shrine_options[0]
        after = reduce(shrine_state, {"type": "select_upgrade", "upgrade_id": choice})

        assert after.status == GameStatus.PLAYING
        assert choice in after.upgrades
        assert any(choice in slot.upgrades for slot in after.player.skills)
        assert after.shrine_position is None
        assert after.shrine_options == []
        assert after.messages[-1] == f"Gained {choice}!"
        assert len(after.action_log) == 2

    def test_select_unoffered_upgrade(self, shrine_state: WorldState) -> None:
        """Test an upgrade that was not offered is refused."""
        after = reduce(shrine_state, {"type": "select_upgrade", "upgrade_id": "NOPE"})

        assert after.status == GameStatus.CHOOSING_UPGRADE
        assert after.messages[-1] == "Upgrade NOPE was not offered."

    def test_select_without_shrine(self, empty_state: WorldState) -> None:
        """Test selecting an upgrade during play is refused."""
        after = reduce(empty_state, {"type": "select_upgrade", "upgrade_id": "CLEAVE"})

        assert after.messages[-1] == "There is no upgrade to choose."


class TestStairs:
    """Tests for floor transitions and winning."""

    def test_descend(self) -> None:
        """Test the stairs lead to a fresh floor with progress carried over."""
        state = build_scenario_state(stairs_position=Hex(q=3, r=7), player_hp=2)
        after = reduce(state, move(3, 7))

        assert after.floor == 2
        assert after.turn == 0
        assert after.player.position == Hex(q=3, r=8)
        assert after.player.hp == 3
        assert after.initial_seed == "test-seed"
        assert len(after.action_log) == 1
        assert after.enemies

    def test_heal_capped(self) -> None:
        """Test the floor heal never exceeds maximum hit points."""
        state = build_scenario_state(stairs_position=Hex(q=3, r=7))
        after = reduce(state, move(3, 7))

        assert after.player.hp == INITIAL_PLAYER_MAX_HP

    def test_final_floor_wins(self) -> None:
        """Test the stairs on the final floor end the run."""
        state = build_scenario_state(floor=FINAL_FLOOR, stairs_position=Hex(q=3, r=7))
        after = reduce(state, move(3, 7))
        score = after.player.hp + FINAL_FLOOR * SCORE_PER_FLOOR

        assert after.status == GameStatus.WON
        assert after.completed_run is not None
        assert after.completed_run.score == score
        assert after.completed_run.actions == 1
        assert after.completed_run.seed == "test-seed"
        assert after.messages[-1] == f"Run complete! Final score: {score}"
