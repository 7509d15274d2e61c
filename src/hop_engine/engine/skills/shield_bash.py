"""SHIELD_BASH: shove enemies one cell away from the user.

A shove into a wall, another actor or the edge of the arena stuns the
victim instead of moving it. A shove into lava kills it.
"""

from __future__ import annotations

from hop_engine.core.constants import STUN_DURATION
from hop_engine.engine.skills.registry import SkillId, SkillResult, skill
from hop_engine.models.actors import Actor, StatusType
from hop_engine.models.effects import ApplyStatus, Damage, Displacement, Effect, Juice, Message
from hop_engine.models.hex import (
    DIRECTIONS,
    Hex,
    cells_between,
    direction_between,
    hex_distance,
    is_straight_line,
)
from hop_engine.models.state import WorldState


def _bash_targets(
    state: WorldState,
    actor: Actor,
    primary: Hex,
    active_upgrades: frozenset[str],
) -> list[Hex]:
    """Cells whose occupants get shoved, in direction order."""
    if "BASH_360" in active_upgrades:
        return [actor.position + d for d in DIRECTIONS]
    if "ARC_BASH" in active_upgrades and hex_distance(actor.position, primary) == 1:
        centre = direction_between(actor.position, primary)
        if centre is not None:
            return [actor.position + DIRECTIONS[(centre + k) % 6] for k in (-1, 0, 1)]
    return [primary]


def _shove(
    state: WorldState,
    actor: Actor,
    victim: Actor,
    active_upgrades: frozenset[str],
) -> list[Effect]:
    direction = direction_between(actor.position, victim.position)
    if direction is None:
        return []
    destination = victim.position + DIRECTIONS[direction]
    blocked = (
        not state.in_grid(destination)
        or state.is_wall(destination)
        or state.is_occupied(destination)
    )
    if not blocked:
        return [
            Displacement(target=victim.position, destination=destination),
            Juice(hint="push", target=destination),
        ]
    effects: list[Effect] = [
        ApplyStatus(target=victim.position, status=StatusType.STUNNED, duration=STUN_DURATION),
        Message(text="Slammed into an obstacle!"),
        Juice(hint="shake", target=victim.position),
    ]
    if "WALL_SLAM" in active_upgrades:
        effects.insert(0, Damage(target=victim.position, amount=1, reason="wall_slam"))
    return effects


@skill(
    skill_id=SkillId.SHIELD_BASH,
    name="Shield Bash",
    description="Shove an adjacent enemy one cell; obstacles stun, lava kills.",
    range=1,
    cooldown=2,
    upgrades=(
        "SHIELD_RANGE",
        "SHIELD_COOLDOWN",
        "ARC_BASH",
        "BASH_360",
        "WALL_SLAM",
        "PASSIVE_PROTECTION",
    ),
    cooldown_modifiers={"SHIELD_COOLDOWN": -1, "ARC_BASH": 1, "BASH_360": 1},
)
def shield_bash(
    state: WorldState,
    actor: Actor,
    target: Hex | None,
    active_upgrades: frozenset[str],
) -> SkillResult:
    if target is None:
        return SkillResult.reject("Shield Bash needs a target.")
    reach = 2 if "SHIELD_RANGE" in active_upgrades else 1
    dist = hex_distance(actor.position, target)
    if dist < 1 or dist > reach:
        return SkillResult.reject("Target out of range.")
    if not is_straight_line(actor.position, target):
        return SkillResult.reject("Target is not in a straight line.")
    if any(state.is_wall(c) or state.is_occupied(c) for c in cells_between(actor.position, target)):
        return SkillResult.reject("Something is in the way.")
    primary = state.actor_at(target)
    if primary is None or primary.role == actor.role:
        return SkillResult.reject("There is nothing to bash there.")

    effects: list[Effect] = []
    for cell in _bash_targets(state, actor, target, active_upgrades):
        victim = state.actor_at(cell)
        if victim is None or victim.role == actor.role:
            continue
        effects.extend(_shove(state, actor, victim, active_upgrades))
    return SkillResult(effects=effects)
