"""Turn reducer.

``reduce(state, action) -> state`` is the only way a run advances. It never
raises: malformed payloads, illegal actions and engine errors all come back
as the unchanged state with a message appended to its log.

A turn action resolves in this order:

1. The player's action (move, jump, skill or wait).
2. Telegraphed enemy attacks from the previous turn.
3. Every enemy's policy, in list order.
4. The player's passive strikes.
5. Lava.
6. Cooldown, status and armor upkeep.
7. Shrine, then stairs.
8. Action log and undo history.

Example:
    >>> from hop_engine.engine import generate_initial_state, reduce
    >>> state = generate_initial_state(seed="demo")
    >>> state = reduce(state, {"type": "wait"})
    >>> state.turn
    1
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from hop_engine.core.config import get_settings
from hop_engine.core.constants import EXTRA_HP_UPGRADE, FINAL_FLOOR
from hop_engine.core.exceptions import (
    HopEngineError,
    InvalidActionError,
    InvalidGameStateError,
    UpgradeError,
    ValidationError,
)
from hop_engine.core.logging import get_logger
from hop_engine.engine.bestiary import BESTIARY
from hop_engine.engine.combat import (
    apply_hazards,
    end_of_turn,
    mark_turn_start,
    pick_up_spear,
    resolve_player_passives,
    resolve_telegraphs,
    run_enemy_phase,
)
from hop_engine.engine.floors import (
    complete_run,
    draw_shrine_options,
    generate_initial_state,
    next_floor_state,
)
from hop_engine.engine.interpreter import apply_effects
from hop_engine.engine.skills import (
    SkillId,
    SkillResult,
    add_upgrade,
    execute_skill,
    skill_for_upgrade,
)
from hop_engine.models.actions import (
    TURN_ACTION_TYPES,
    JumpAction,
    LoadStateAction,
    LoggedAction,
    MoveAction,
    ResetAction,
    SelectUpgradeAction,
    ThrowAction,
    UndoAction,
    UseSkillAction,
    WaitAction,
    action_adapter,
)
from hop_engine.models.actors import ActorRole
from hop_engine.models.effects import Displacement, EffectContext
from hop_engine.models.hex import hex_distance
from hop_engine.models.state import GameStatus, WorldState


logger = get_logger(__name__)


# =============================================================================
# Bookkeeping
# =============================================================================


def _begin(state: WorldState) -> WorldState:
    """Clear the per-call transient fields."""
    if not state.dying_entities and not state.juice:
        return state
    return state.model_copy(update={"dying_entities": [], "juice": []})


def _snapshot(state: WorldState) -> WorldState:
    """Strip a state down to what the undo history stores."""
    return state.model_copy(update={"history": [], "juice": [], "dying_entities": []})


def _record(before: WorldState, after: WorldState, action: LoggedAction) -> WorldState:
    """Append ``action`` to the log and ``before`` to the undo history."""
    limit = get_settings().engine.history_limit
    history = [*after.history, _snapshot(before)][-limit:] if limit else []
    return after.model_copy(
        update={"action_log": [*after.action_log, action], "history": history}
    )


def _reject(state: WorldState, messages: list[str]) -> WorldState:
    for text in messages or ["Nothing happens."]:
        state = state.with_message(text)
    return state


# =============================================================================
# Player Actions
# =============================================================================


def _move(state: WorldState, action: MoveAction) -> SkillResult:
    player = state.player
    if hex_distance(player.position, action.target) != 1:
        return SkillResult.reject("You can only move to an adjacent hex.")
    if not state.is_walkable(action.target):
        return SkillResult.reject("You can't move there.")
    if state.actor_at(action.target) is not None:
        return execute_skill(state, player, SkillId.BASIC_ATTACK, action.target)
    return SkillResult(effects=[Displacement(target="self", destination=action.target)])


def _player_action(state: WorldState, action: LoggedAction) -> tuple[SkillResult, str | None]:
    """Resolve the player's action into a skill result and its target actor id."""
    player = state.player
    if isinstance(action, MoveAction):
        occupant = state.actor_at(action.target)
        return _move(state, action), occupant.id if occupant else None
    if isinstance(action, WaitAction):
        return SkillResult(), None

    if isinstance(action, JumpAction):
        skill_id, target = SkillId.JUMP.value, action.target
    elif isinstance(action, ThrowAction):
        skill_id, target = SkillId.SPEAR_THROW.value, action.target
    elif isinstance(action, UseSkillAction):
        skill_id, target = action.skill_id, action.target
    else:
        raise InvalidActionError(f"Unexpected turn action: {action.type}", action_type=action.type)
    occupant = state.actor_at(target) if target is not None else None
    result = execute_skill(state, player, skill_id, target)
    return result, occupant.id if occupant else None


def _check_floor_features(state: WorldState, pending_actions: int) -> WorldState:
    """Trigger the shrine or the stairs under the player, shrine first."""
    position = state.player.position
    if state.shrine_position is not None and position == state.shrine_position:
        options, state = draw_shrine_options(state)
        logger.info("Shrine reached", floor=state.floor, options=options)
        return state.model_copy(
            update={"status": GameStatus.CHOOSING_UPGRADE, "shrine_options": options}
        ).with_message("A holy shrine! Choose an upgrade.")
    if state.stairs_position is not None and position == state.stairs_position:
        if state.floor >= FINAL_FLOOR:
            return complete_run(state, actions=pending_actions)
        return next_floor_state(state)
    return state


def _turn(state: WorldState, action: LoggedAction) -> WorldState:
    if state.status != GameStatus.PLAYING:
        raise InvalidGameStateError(
            "The run is not accepting moves right now.",
            current_state=str(state.status),
            expected_states=[str(GameStatus.PLAYING)],
        )

    working = mark_turn_start(state)
    result, target_id = _player_action(working, action)
    if not result.ok:
        logger.debug("Player action rejected", action=action.type, reason=result.messages)
        return _reject(state, result.messages)

    for text in result.messages:
        working = working.with_message(text)
    context = EffectContext(source_id=working.player.id, target_id=target_id)
    working = apply_effects(working, result.effects, context)
    working = pick_up_spear(working)

    if result.consumes_turn:
        for phase in (
            resolve_telegraphs,
            run_enemy_phase,
            resolve_player_passives,
            apply_hazards,
            end_of_turn,
        ):
            if working.status != GameStatus.PLAYING:
                break
            working = phase(working)

    if working.status == GameStatus.PLAYING:
        working = _check_floor_features(working, len(working.action_log) + 1)
    logger.debug(
        "Turn resolved",
        action=action.type,
        turn=working.turn,
        floor=working.floor,
        rng_counter=working.rng_counter,
    )
    return _record(state, working, action)


def _select_upgrade(state: WorldState, action: SelectUpgradeAction) -> WorldState:
    if state.status != GameStatus.CHOOSING_UPGRADE:
        raise InvalidGameStateError(
            "There is no upgrade to choose.",
            current_state=str(state.status),
            expected_states=[str(GameStatus.CHOOSING_UPGRADE)],
        )
    upgrade_id = action.upgrade_id
    if upgrade_id not in state.shrine_options:
        return state.with_message(f"Upgrade {upgrade_id} was not offered.")

    player = state.player
    if upgrade_id == EXTRA_HP_UPGRADE:
        player = player.model_copy(update={"max_hp": player.max_hp + 1, "hp": player.hp + 1})
    else:
        skill_id = skill_for_upgrade(upgrade_id)
        if skill_id is None:
            raise UpgradeError(f"Unknown upgrade: {upgrade_id}", upgrade_id=upgrade_id)
        player = add_upgrade(player, skill_id, upgrade_id)

    logger.info("Upgrade selected", upgrade_id=upgrade_id, floor=state.floor)
    after = state.with_actor(player).model_copy(
        update={
            "upgrades": [*state.upgrades, upgrade_id],
            "status": GameStatus.PLAYING,
            "shrine_position": None,
            "shrine_options": [],
        }
    ).with_message(f"Gained {upgrade_id}!")
    return _record(state, after, action)


def _reset(state: WorldState, action: ResetAction) -> WorldState:
    seed = action.seed or state.initial_seed or None
    return generate_initial_state(seed=seed, loadout=state.loadout_id)


def _check_roster(state: WorldState) -> None:
    """Reject snapshots whose actors the engine could not run.

    Raises:
        ValidationError: On a misplaced player, an enemy without bestiary
            stats, a repeated id or two actors sharing a cell.
    """
    if state.player.role != ActorRole.PLAYER:
        raise ValidationError("Loaded player has the wrong role.", field_name="player.role")
    ids = {state.player.id}
    cells = {state.player.position}
    for enemy in state.enemies:
        if enemy.role != ActorRole.ENEMY or enemy.archetype not in BESTIARY:
            raise ValidationError(
                f"Loaded enemy {enemy.id} is not a known enemy.",
                field_name="enemies",
                invalid_value=str(enemy.archetype),
            )
        if enemy.id in ids or enemy.position in cells:
            raise ValidationError(
                f"Loaded enemy {enemy.id} clashes with another actor.",
                field_name="enemies",
                invalid_value=enemy.id,
            )
        ids.add(enemy.id)
        cells.add(enemy.position)


def _load_state(state: WorldState, action: LoadStateAction) -> WorldState:
    loaded = WorldState.model_validate(action.state)
    for snapshot in [loaded, *loaded.history]:
        _check_roster(snapshot)
    logger.info("State loaded", floor=loaded.floor, turn=loaded.turn)
    return loaded


def _undo(state: WorldState) -> WorldState:
    if not state.history:
        return state.with_message("Nothing to undo.")
    previous = state.history[-1]
    logger.debug("Undo", turn=previous.turn, floor=previous.floor)
    return previous.model_copy(update={"history": state.history[:-1]}).with_message(
        "Undid last action."
    )


def _dispatch(state: WorldState, action: BaseModel) -> WorldState:
    if action.type in TURN_ACTION_TYPES:
        return _turn(state, action)  # type: ignore[arg-type]
    if isinstance(action, SelectUpgradeAction):
        return _select_upgrade(state, action)
    if isinstance(action, ResetAction):
        return _reset(state, action)
    if isinstance(action, LoadStateAction):
        return _load_state(state, action)
    if isinstance(action, UndoAction):
        return _undo(state)
    raise InvalidActionError(f"Unsupported action: {action.type}", action_type=action.type)


# =============================================================================
# Public API
# =============================================================================


def parse_action(action: BaseModel | dict[str, Any]) -> BaseModel:
    """Validate a raw action payload into its action model.

    Raises:
        pydantic.ValidationError: If the payload matches no action.
    """
    if isinstance(action, BaseModel):
        return action
    return action_adapter.validate_python(action)


def reduce(state: WorldState, action: BaseModel | dict[str, Any]) -> WorldState:
    """Apply one action and return the next state.

    Args:
        state: Current snapshot; never modified.
        action: An action model or its dict payload.

    Returns:
        The next snapshot. Rejected actions return ``state`` with the
        transient fields cleared and a message appended.
    """
    state = _begin(state)
    try:
        parsed = parse_action(action)
    except PydanticValidationError as exc:
        logger.warning("Malformed action", errors=exc.error_count())
        return state.with_message("Invalid action.")

    try:
        return _dispatch(state, parsed)
    except HopEngineError as exc:
        logger.warning("Action rejected", action=parsed.type, error=str(exc))
        return state.with_message(exc.message)
    except PydanticValidationError as exc:
        logger.warning("Action rejected", action=parsed.type, errors=exc.error_count())
        return state.with_message("Invalid state payload.")


def reduce_all(state: WorldState, actions: list[BaseModel | dict[str, Any]]) -> WorldState:
    """Fold ``actions`` over ``state`` in order."""
    for action in actions:
        state = reduce(state, action)
    return state


__all__ = [
    "parse_action",
    "reduce",
    "reduce_all",
]
