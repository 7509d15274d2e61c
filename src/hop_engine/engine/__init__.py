"""Simulation engine for the hop engine.

This package turns (seed, action log) into a deterministic sequence of
world snapshots.

Submodules:
    rng: Counter-indexed seeded draw source
    bestiary: Enemy archetype stats and construction
    arena: Procedural floor generation
    interpreter: Effect interpreter
    skills: Skill registry and skill definitions
    enemy_ai: Per-archetype enemy policies
    loadouts: Starting skill sets
    floors: Floor entry, transitions and run completion
    combat: World phases after the player's action
    reducer: The turn reducer
    replay: Replay and fingerprinting
    scenarios: Hand-built scenario states

Example:
    >>> from hop_engine.engine import generate_initial_state, reduce, fingerprint
    >>> state = generate_initial_state(seed="stress-replay-seed-42")
    >>> state = reduce(state, {"type": "wait"})
    >>> len(fingerprint(state))
    64
"""

from __future__ import annotations

# =============================================================================
# Draw Source
# =============================================================================
from hop_engine.engine.rng import DrawCursor, draw, draw_id, draw_index, shuffle

# =============================================================================
# Generation
# =============================================================================
from hop_engine.engine.bestiary import BESTIARY, EnemyStats, create_enemy, get_stats
from hop_engine.engine.arena import ArenaLayout, generate_arena

# =============================================================================
# Skills and Effects
# =============================================================================
from hop_engine.engine.interpreter import apply_effect, apply_effects
from hop_engine.engine.skills import (
    SkillDefinition,
    SkillId,
    SkillResult,
    add_upgrade,
    execute_skill,
    get_all_skills,
    get_skill,
)

# =============================================================================
# Enemies
# =============================================================================
from hop_engine.engine.enemy_ai import POLICIES, decide

# =============================================================================
# Runs
# =============================================================================
from hop_engine.engine.loadouts import DEFAULT_LOADOUT, LOADOUTS, LoadoutId, build_player
from hop_engine.engine.floors import (
    build_run_summary,
    draw_shrine_options,
    generate_initial_state,
    next_floor_state,
)
from hop_engine.engine.reducer import parse_action, reduce, reduce_all
from hop_engine.engine.replay import (
    fingerprint,
    replay,
    replay_fingerprints,
    replay_log,
    verify_replay,
)
from hop_engine.engine.scenarios import build_scenario_state


__all__ = [
    # Draw source
    "DrawCursor",
    "draw",
    "draw_id",
    "draw_index",
    "shuffle",
    # Generation
    "BESTIARY",
    "EnemyStats",
    "create_enemy",
    "get_stats",
    "ArenaLayout",
    "generate_arena",
    # Skills and effects
    "apply_effect",
    "apply_effects",
    "SkillDefinition",
    "SkillId",
    "SkillResult",
    "add_upgrade",
    "execute_skill",
    "get_all_skills",
    "get_skill",
    # Enemies
    "POLICIES",
    "decide",
    # Runs
    "DEFAULT_LOADOUT",
    "LOADOUTS",
    "LoadoutId",
    "build_player",
    "build_run_summary",
    "draw_shrine_options",
    "generate_initial_state",
    "next_floor_state",
    "parse_action",
    "reduce",
    "reduce_all",
    "fingerprint",
    "replay",
    "replay_fingerprints",
    "replay_log",
    "verify_replay",
    "build_scenario_state",
]
