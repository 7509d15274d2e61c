"""Floor entry, floor transitions and run completion."""

from __future__ import annotations

from hop_engine.core.config import get_settings
from hop_engine.core.constants import (
    EXTRA_HP_UPGRADE,
    FLOOR_TRANSITION_HEAL,
    SCORE_PER_FLOOR,
    SHRINE_OPTION_COUNT,
)
from hop_engine.core.logging import get_logger
from hop_engine.engine.arena import ArenaLayout, generate_arena
from hop_engine.engine.loadouts import DEFAULT_LOADOUT, build_player, get_loadout
from hop_engine.engine.rng import draw_index
from hop_engine.engine.skills import get_all_skills
from hop_engine.models.actors import Actor
from hop_engine.models.state import CompletedRun, GameStatus, WorldState


logger = get_logger(__name__)


def floor_seed(initial_seed: str, floor: int) -> str:
    """Return the arena seed of ``floor`` within a run.

    The first floor uses the run seed itself; later floors append the floor
    number.
    """
    return initial_seed if floor <= 1 else f"{initial_seed}:{floor}"


def _state_from_layout(
    layout: ArenaLayout,
    player: Actor,
    *,
    initial_seed: str,
    loadout_id: str,
    upgrades: list[str],
) -> WorldState:
    return WorldState(
        floor=layout.floor,
        player=player,
        enemies=layout.enemies,
        grid_width=layout.width,
        grid_height=layout.height,
        hazards=layout.hazards,
        walls=layout.walls,
        stairs_position=layout.stairs,
        shrine_position=layout.shrine,
        rng_seed=layout.seed,
        initial_seed=initial_seed,
        loadout_id=loadout_id,
        upgrades=upgrades,
        messages=[f"Welcome to floor {layout.floor}."],
    )


def generate_initial_state(
    floor: int = 1,
    seed: str | None = None,
    *,
    loadout: str = DEFAULT_LOADOUT,
) -> WorldState:
    """Create the opening state of a run.

    Args:
        floor: Floor to start on.
        seed: Run seed; empty falls back to the configured default.
        loadout: Starting loadout id.

    Returns:
        A fresh playing state.

    Raises:
        ValidationError: If the loadout is unknown.
    """
    initial_seed = seed or get_settings().engine.default_seed
    layout = generate_arena(floor, floor_seed(initial_seed, floor))
    player = build_player(loadout, layout.player_spawn)
    upgrades = [upgrade for _, upgrade in get_loadout(loadout).upgrades]
    logger.info("Run started", seed=initial_seed, floor=layout.floor, loadout=str(loadout))
    return _state_from_layout(
        layout,
        player,
        initial_seed=initial_seed,
        loadout_id=str(loadout),
        upgrades=upgrades,
    )


def next_floor_state(state: WorldState) -> WorldState:
    """Descend to the next floor, carrying the player's progress.

    Hit points (plus a small heal), skills, upgrades, kill counters, the
    action log, the undo history and the draw counter carry over. Cooldowns
    and statuses reset, and the spear returns to hand.
    """
    next_floor = state.floor + 1
    initial_seed = state.initial_seed or state.rng_seed or get_settings().engine.default_seed
    layout = generate_arena(next_floor, floor_seed(initial_seed, next_floor))
    carried = state.player
    player = carried.model_copy(
        update={
            "hp": min(carried.max_hp, carried.hp + FLOOR_TRANSITION_HEAL),
            "position": layout.player_spawn,
            "previous_position": layout.player_spawn,
            "statuses": [],
            "temporary_armor": 0,
            "skills": [s.model_copy(update={"cooldown": 0}) for s in carried.skills],
        }
    )
    fresh = _state_from_layout(
        layout,
        player,
        initial_seed=initial_seed,
        loadout_id=state.loadout_id,
        upgrades=list(state.upgrades),
    )
    logger.info("Floor entered", floor=next_floor, enemies=len(layout.enemies))
    limit = get_settings().engine.message_log_limit
    return fresh.model_copy(
        update={
            "rng_counter": state.rng_counter,
            "kills": state.kills,
            "environmental_kills": state.environmental_kills,
            "action_log": list(state.action_log),
            "history": list(state.history),
            "messages": [*state.messages, *fresh.messages][-limit:],
            "juice": [*state.juice],
            "dying_entities": [*state.dying_entities],
        }
    )


def draw_shrine_options(state: WorldState) -> tuple[list[str], WorldState]:
    """Draw the upgrades a shrine offers.

    Candidates are the not-yet-acquired upgrades of the player's equipped
    skills, in registry order. Up to three distinct options are drawn; when
    no candidate remains the shrine offers extra hit points instead.

    Returns:
        Tuple of (options, state with the draws consumed).
    """
    owned = {slot.id: slot for slot in state.player.skills}
    pool: list[str] = []
    for definition in get_all_skills():
        slot = owned.get(definition.id)
        if slot is None:
            continue
        pool.extend(
            u for u in definition.upgrades if u not in state.upgrades and u not in slot.upgrades
        )
    if not pool:
        return [EXTRA_HP_UPGRADE], state
    options: list[str] = []
    while pool and len(options) < SHRINE_OPTION_COUNT:
        index, state = draw_index(state, len(pool))
        options.append(pool.pop(index))
    return options, state


def build_run_summary(state: WorldState, *, actions: int | None = None) -> CompletedRun:
    """Summarize a finished run.

    Args:
        state: Final state.
        actions: Logged action count; defaults to the length of the log.
    """
    return CompletedRun(
        seed=state.initial_seed,
        score=state.player.hp + state.floor * SCORE_PER_FLOOR,
        floor=state.floor,
        turns=state.turn,
        actions=len(state.action_log) if actions is None else actions,
        kills=state.kills,
    )


def complete_run(state: WorldState, *, actions: int | None = None) -> WorldState:
    """Mark the run as won and attach its summary."""
    summary = build_run_summary(state, actions=actions)
    logger.info("Run completed", seed=summary.seed, score=summary.score, kills=summary.kills)
    return state.model_copy(
        update={"status": GameStatus.WON, "completed_run": summary}
    ).with_message(f"Run complete! Final score: {summary.score}")


__all__ = [
    "floor_seed",
    "generate_initial_state",
    "next_floor_state",
    "draw_shrine_options",
    "build_run_summary",
    "complete_run",
]
