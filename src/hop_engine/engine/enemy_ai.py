"""Enemy decision policies.

Each archetype maps to one pure policy
``(actor, player_destination, state) -> (actor', state')`` in
:data:`POLICIES`. Policies telegraph their attacks by setting ``intent``
and ``intent_position``; the reducer resolves those on the following turn.
Every random choice goes through the draw source on ``state``.
"""

from __future__ import annotations

from collections.abc import Callable

from hop_engine.core.constants import (
    BOMB_DAMAGE,
    BOMBER_PREFERRED_DISTANCE,
    GOLEM_ATTACK_COOLDOWN,
    GOLEM_ATTACK_RANGE,
    RANGED_MAX_DISTANCE,
    RANGED_MIN_DISTANCE,
    WARLOCK_TELEPORT_CHANCE,
    WARLOCK_TELEPORT_MAX,
    WARLOCK_TELEPORT_MIN,
)
from hop_engine.core.logging import get_logger
from hop_engine.engine.bestiary import get_stats
from hop_engine.engine.interpreter import (
    add_juice,
    apply_damage,
    display_name,
    kill_enemy,
    place_bomb,
)
from hop_engine.engine.rng import draw, draw_index
from hop_engine.models.actors import Actor, Archetype, Intent, StatusEffect, StatusType
from hop_engine.models.hex import (
    DIRECTIONS,
    Hex,
    cells_between,
    facing_towards,
    hex_distance,
    is_straight_line,
    neighbors,
)
from hop_engine.models.state import WorldState


logger = get_logger(__name__)

Policy = Callable[[Actor, Hex, WorldState], tuple[Actor, WorldState]]
MoveScore = Callable[[Hex], tuple[float, ...]]


# =============================================================================
# Movement Helpers
# =============================================================================


def can_enter(state: WorldState, actor: Actor, cell: Hex) -> bool:
    """Check whether ``actor`` may step onto ``cell``."""
    return (
        state.is_walkable(cell)
        and not state.is_hazard(cell)
        and not state.is_occupied(cell, exclude_id=actor.id)
    )


def find_best_move(
    actor: Actor,
    target: Hex,
    state: WorldState,
    score: MoveScore | None = None,
) -> tuple[Hex, WorldState]:
    """Pick the best-scoring enterable neighbour, or stay put.

    Only neighbours scoring no worse than the current cell are considered;
    the actor stays where it is when none qualify. The target cell itself
    is never entered. Ties are broken with one draw over the tied
    neighbours, taken in direction order; no draw is consumed when the best
    neighbour is unique.

    Args:
        actor: Moving actor.
        target: Cell the actor is heading for.
        state: Current state.
        score: Lower-is-better scoring; defaults to distance to ``target``.

    Returns:
        Tuple of (chosen cell, state with any draw consumed).
    """
    if score is None:
        def score(cell: Hex) -> tuple[float, ...]:
            return (hex_distance(cell, target),)

    scored = [
        (score(c), c)
        for c in neighbors(actor.position)
        if c != target and can_enter(state, actor, c)
    ]
    if not scored:
        return actor.position, state
    best = min(s for s, _ in scored)
    if best > score(actor.position):
        return actor.position, state
    tied = [c for s, c in scored if s == best]
    if len(tied) == 1:
        return tied[0], state
    index, state = draw_index(state, len(tied))
    return tied[index], state


def step_towards(
    actor: Actor,
    target: Hex,
    state: WorldState,
    *,
    steps: int = 1,
    score: MoveScore | None = None,
) -> tuple[Actor, WorldState]:
    """Move up to ``steps`` cells, stopping once adjacent to ``target``."""
    for _ in range(steps):
        if hex_distance(actor.position, target) <= 1:
            break
        cell, state = find_best_move(actor, target, state, score)
        if cell == actor.position:
            break
        actor = actor.model_copy(update={"position": cell})
    return actor, state


def telegraph(actor: Actor, intent: Intent, target: Hex) -> Actor:
    """Return ``actor`` declaring ``intent`` against ``target``."""
    return actor.model_copy(update={"intent": intent, "intent_position": target})


def _clear_line(state: WorldState, a: Hex, b: Hex) -> bool:
    return is_straight_line(a, b) and not any(state.is_wall(c) for c in cells_between(a, b))


# =============================================================================
# Policies
# =============================================================================


def melee_policy(
    actor: Actor, player_destination: Hex, state: WorldState
) -> tuple[Actor, WorldState]:
    """Attack when adjacent, otherwise close in."""
    if hex_distance(actor.position, player_destination) == 1:
        return telegraph(actor, Intent.ATTACKING, player_destination), state
    speed = get_stats(actor.archetype).speed
    return step_towards(actor, player_destination, state, steps=speed)


def archer_policy(
    actor: Actor, player_destination: Hex, state: WorldState
) -> tuple[Actor, WorldState]:
    """Aim along a clear line at range 2-4, otherwise seek alignment."""
    dist = hex_distance(actor.position, player_destination)
    if RANGED_MIN_DISTANCE <= dist <= RANGED_MAX_DISTANCE and _clear_line(
        state, actor.position, player_destination
    ):
        return telegraph(actor, Intent.AIMING, player_destination), state

    def score(cell: Hex) -> tuple[float, ...]:
        d = hex_distance(cell, player_destination)
        aligned = is_straight_line(cell, player_destination) and d >= RANGED_MIN_DISTANCE
        return (0 if aligned else 1, d)

    cell, state = find_best_move(actor, player_destination, state, score)
    return actor.model_copy(update={"position": cell}), state


def bomber_policy(
    actor: Actor, player_destination: Hex, state: WorldState
) -> tuple[Actor, WorldState]:
    """Hold distance 2-3 and lob bombs; a telegraphed bomb lands this turn."""
    if actor.intent == Intent.BOMBING and actor.intent_position is not None:
        aim = actor.intent_position
        spots = [aim, *neighbors(aim)]
        spot = next((c for c in spots if can_enter(state, actor, c) and c != actor.position), None)
        if spot is None:
            state = state.with_message("The bomb fizzles.")
        else:
            state = place_bomb(state, spot)
            state = add_juice(state, "bomb_land", spot)
        return actor.clear_intent(), state

    dist = hex_distance(actor.position, player_destination)
    if RANGED_MIN_DISTANCE <= dist <= 3:
        return telegraph(actor, Intent.BOMBING, player_destination), state

    def score(cell: Hex) -> tuple[float, ...]:
        return (abs(hex_distance(cell, player_destination) - BOMBER_PREFERRED_DISTANCE),)

    cell, state = find_best_move(actor, player_destination, state, score)
    return actor.model_copy(update={"position": cell}), state


def shield_bearer_policy(
    actor: Actor, player_destination: Hex, state: WorldState
) -> tuple[Actor, WorldState]:
    """Advance like a footman while always facing the player."""
    actor, state = melee_policy(actor, player_destination, state)
    facing = facing_towards(actor.position, player_destination)
    return actor.model_copy(update={"facing": facing}), state


def warlock_policy(
    actor: Actor, player_destination: Hex, state: WorldState
) -> tuple[Actor, WorldState]:
    """Blink away when threatened or on a whim, then cast at range 2-4."""
    roll, state = draw(state)
    dist = hex_distance(actor.position, player_destination)
    teleported = False
    if dist <= 2 or roll < WARLOCK_TELEPORT_CHANCE:
        direction, state = draw_index(state, len(DIRECTIONS))
        span = WARLOCK_TELEPORT_MAX - WARLOCK_TELEPORT_MIN + 1
        offset, state = draw_index(state, span)
        landing = actor.position + DIRECTIONS[direction].scale(WARLOCK_TELEPORT_MIN + offset)
        if can_enter(state, actor, landing) and landing != player_destination:
            actor = actor.model_copy(update={"position": landing})
            teleported = True
            state = add_juice(state, "teleport", landing)
    if not teleported and hex_distance(actor.position, player_destination) > RANGED_MAX_DISTANCE:
        actor, state = step_towards(actor, player_destination, state)
    dist = hex_distance(actor.position, player_destination)
    if RANGED_MIN_DISTANCE <= dist <= RANGED_MAX_DISTANCE:
        actor = telegraph(actor, Intent.CASTING, player_destination)
    return actor, state


def assassin_policy(
    actor: Actor, player_destination: Hex, state: WorldState
) -> tuple[Actor, WorldState]:
    """Stalk unseen; reveal and telegraph a backstab once adjacent."""
    if hex_distance(actor.position, player_destination) == 1:
        actor = telegraph(actor, Intent.BACKSTAB, player_destination)
        return actor.model_copy(update={"is_visible": True}), state
    actor, state = step_towards(actor, player_destination, state)
    visible = hex_distance(actor.position, player_destination) <= 1
    return actor.model_copy(update={"is_visible": visible}), state


def golem_policy(
    actor: Actor, player_destination: Hex, state: WorldState
) -> tuple[Actor, WorldState]:
    """Smash along a line, then rest without moving for two turns."""
    if actor.action_cooldown > 0:
        return actor.model_copy(update={"action_cooldown": actor.action_cooldown - 1}), state
    dist = hex_distance(actor.position, player_destination)
    if 1 <= dist <= GOLEM_ATTACK_RANGE and _clear_line(state, actor.position, player_destination):
        actor = telegraph(actor, Intent.SMASHING, player_destination)
        return actor.model_copy(update={"action_cooldown": GOLEM_ATTACK_COOLDOWN}), state
    return step_towards(actor, player_destination, state)


def bomb_policy(
    actor: Actor, player_destination: Hex, state: WorldState
) -> tuple[Actor, WorldState]:
    """Burn the fuse; at zero, damage every actor within one hex."""
    fuse = max(0, (actor.fuse or 0) - 1)
    actor = actor.model_copy(update={"fuse": fuse})
    if fuse > 0:
        return actor, state

    state = kill_enemy(state, actor).with_message("A bomb explodes!")
    state = add_juice(state, "explosion", actor.position)
    for cell in neighbors(actor.position):
        victim = state.actor_at(cell)
        if victim is not None:
            state = apply_damage(state, victim, BOMB_DAMAGE)
    return actor, state


POLICIES: dict[Archetype, Policy] = {
    Archetype.FOOTMAN: melee_policy,
    Archetype.SPRINTER: melee_policy,
    Archetype.ARCHER: archer_policy,
    Archetype.BOMBER: bomber_policy,
    Archetype.SHIELD_BEARER: shield_bearer_policy,
    Archetype.WARLOCK: warlock_policy,
    Archetype.ASSASSIN: assassin_policy,
    Archetype.GOLEM: golem_policy,
    Archetype.BOMB: bomb_policy,
}
"""Policy lookup table keyed by archetype."""


def tick_stun(actor: Actor) -> Actor:
    """Return ``actor`` with its stun reduced by one turn and its intent cleared."""
    statuses = []
    for status in actor.statuses:
        if status.type == StatusType.STUNNED:
            if status.duration > 1:
                statuses.append(StatusEffect(type=status.type, duration=status.duration - 1))
        else:
            statuses.append(status)
    return actor.model_copy(update={"statuses": statuses, "intent": None, "intent_position": None})


def decide(actor: Actor, player_destination: Hex, state: WorldState) -> tuple[Actor, WorldState]:
    """Run the policy for ``actor``'s archetype.

    Stunned actors skip their policy and tick the stun instead.
    """
    if actor.has_status(StatusType.STUNNED) and not actor.is_bomb:
        logger.debug("Enemy stunned", enemy_id=actor.id)
        return tick_stun(actor), state
    policy = POLICIES.get(actor.archetype, melee_policy)
    next_actor, state = policy(actor, player_destination, state)
    if next_actor.intent is not None and next_actor.intent != actor.intent:
        logger.debug(
            "Enemy telegraphed",
            enemy=display_name(next_actor),
            enemy_id=next_actor.id,
            intent=str(next_actor.intent),
        )
    return next_actor, state


__all__ = [
    "Policy",
    "POLICIES",
    "can_enter",
    "find_best_move",
    "step_towards",
    "telegraph",
    "melee_policy",
    "archer_policy",
    "bomber_policy",
    "shield_bearer_policy",
    "warlock_policy",
    "assassin_policy",
    "golem_policy",
    "bomb_policy",
    "tick_stun",
    "decide",
]
