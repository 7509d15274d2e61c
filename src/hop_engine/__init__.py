"""Hop Engine - Deterministic Turn-Based Hex Tactics.

Given a seed and an ordered list of actions, the engine produces a
reproducible sequence of immutable world snapshots.

DETERMINISM CONTRACT:
- Every random choice is a counter-indexed draw from the run seed
- States are frozen; the reducer returns a new snapshot per action
- The reducer never raises; rejected actions come back as messages

Example:
    >>> from hop_engine import generate_initial_state, reduce, fingerprint
    >>>
    >>> state = generate_initial_state(seed="daily-42")
    >>> state = reduce(state, {"type": "move", "target": {"q": 3, "r": 7}})
    >>> state = reduce(state, {"type": "wait"})
    >>> digest = fingerprint(state)

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas (hexes, actors, effects, actions, state).
    engine: Draw source, arena, skills, enemy AI, reducer and replay.
"""

from __future__ import annotations

# Core
from hop_engine.core.config import Settings, get_settings
from hop_engine.core.exceptions import HopEngineError
from hop_engine.core.logging import configure_from_settings, configure_logging, get_logger

# Models
from hop_engine.models.hex import Hex
from hop_engine.models.state import CompletedRun, GameStatus, WorldState

# Engine
from hop_engine.engine.floors import generate_initial_state
from hop_engine.engine.reducer import parse_action, reduce, reduce_all
from hop_engine.engine.replay import fingerprint, replay, verify_replay
from hop_engine.engine.scenarios import build_scenario_state


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "HopEngineError",
    "Settings",
    "get_settings",
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    # Models
    "Hex",
    "GameStatus",
    "WorldState",
    "CompletedRun",
    # Engine
    "generate_initial_state",
    "parse_action",
    "reduce",
    "reduce_all",
    "fingerprint",
    "replay",
    "verify_replay",
    "build_scenario_state",
]
