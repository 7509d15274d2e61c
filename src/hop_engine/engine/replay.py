"""Replay and fingerprinting.

A run is fully determined by its seed, its starting loadout and its action
log. :func:`fingerprint` condenses a state into a stable hash so two
independent replays can be compared cheaply, for instance in CI.

Example:
    >>> from hop_engine.engine.replay import verify_replay
    >>> verify_replay("stress-replay-seed-42", [{"type": "wait"}] * 6)
    True
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

from hop_engine.core.logging import bind_context, clear_context, get_logger
from hop_engine.engine.floors import generate_initial_state
from hop_engine.engine.loadouts import DEFAULT_LOADOUT
from hop_engine.engine.reducer import reduce
from hop_engine.models.actors import Actor
from hop_engine.models.hex import Hex
from hop_engine.models.state import WorldState


logger = get_logger(__name__)

ActionInput = BaseModel | dict[str, Any]


def _cell(cell: Hex | None) -> list[int] | None:
    return None if cell is None else [cell.q, cell.r]


def _actor_summary(actor: Actor) -> dict[str, Any]:
    return {
        "id": actor.id,
        "archetype": str(actor.archetype),
        "hp": actor.hp,
        "position": _cell(actor.position),
        "intent": None if actor.intent is None else str(actor.intent),
    }


def fingerprint_payload(state: WorldState) -> dict[str, Any]:
    """Return the canonical summary that :func:`fingerprint` hashes."""
    player = state.player
    return {
        "turn": state.turn,
        "floor": state.floor,
        "status": str(state.status),
        "player": {
            "hp": player.hp,
            "max_hp": player.max_hp,
            "position": _cell(player.position),
        },
        "enemies": [_actor_summary(e) for e in sorted(state.enemies, key=lambda e: e.id)],
        "rng_counter": state.rng_counter,
        "kills": state.kills,
    }


def fingerprint(state: WorldState) -> str:
    """Return a stable SHA-256 digest of the simulation-relevant state."""
    canonical = json.dumps(fingerprint_payload(state), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def replay(
    seed: str,
    actions: Sequence[ActionInput],
    *,
    loadout: str = DEFAULT_LOADOUT,
) -> list[WorldState]:
    """Replay ``actions`` from a fresh run.

    Args:
        seed: Run seed.
        actions: Actions in the order they were taken.
        loadout: Starting loadout.

    Returns:
        Every state visited, starting with the freshly generated one.
    """
    bind_context(replay_seed=seed)
    try:
        state = generate_initial_state(seed=seed, loadout=loadout)
        states = [state]
        for action in actions:
            state = reduce(state, action)
            states.append(state)
        logger.debug("Replay finished", actions=len(actions), turn=state.turn)
    finally:
        clear_context()
    return states


def replay_fingerprints(
    seed: str,
    actions: Sequence[ActionInput],
    *,
    loadout: str = DEFAULT_LOADOUT,
) -> list[str]:
    """Fingerprint every state visited by :func:`replay`."""
    return [fingerprint(s) for s in replay(seed, actions, loadout=loadout)]


def replay_log(state: WorldState) -> WorldState:
    """Rebuild ``state`` from its own seed, loadout and action log."""
    states = replay(state.initial_seed, list(state.action_log), loadout=state.loadout_id)
    return states[-1]


def verify_replay(
    seed: str,
    actions: Sequence[ActionInput],
    *,
    loadout: str = DEFAULT_LOADOUT,
) -> bool:
    """Check that two independent replays agree at every step."""
    first = replay_fingerprints(seed, actions, loadout=loadout)
    second = replay_fingerprints(seed, actions, loadout=loadout)
    if first != second:
        step = next(i for i, (a, b) in enumerate(zip(first, second)) if a != b)
        logger.warning("Replay diverged", seed=seed, step=step)
        return False
    return True


__all__ = [
    "fingerprint",
    "fingerprint_payload",
    "replay",
    "replay_fingerprints",
    "replay_log",
    "verify_replay",
]
