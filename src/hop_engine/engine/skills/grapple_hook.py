"""GRAPPLE_HOOK: drag an enemy in a straight line to the user's side.

An enemy dragged across lava is lost in it. HOOK_AND_BASH stuns the
enemy once it arrives.
"""

from __future__ import annotations

from hop_engine.core.constants import STUN_DURATION
from hop_engine.engine.skills.registry import SkillId, SkillResult, skill
from hop_engine.models.actors import Actor, StatusType
from hop_engine.models.effects import ApplyStatus, Displacement, Effect, Juice
from hop_engine.models.hex import (
    DIRECTIONS,
    Hex,
    cells_between,
    direction_between,
    hex_distance,
)
from hop_engine.models.state import WorldState


@skill(
    skill_id=SkillId.GRAPPLE_HOOK,
    name="Grapple Hook",
    description="Pull an enemy two or three hexes away to your side.",
    range=3,
    cooldown=3,
    upgrades=("HOOK_AND_BASH",),
)
def grapple_hook(
    state: WorldState,
    actor: Actor,
    target: Hex | None,
    active_upgrades: frozenset[str],
) -> SkillResult:
    if target is None:
        return SkillResult.reject("Grapple Hook needs a target.")
    dist = hex_distance(actor.position, target)
    if dist < 2:
        return SkillResult.reject("Too close to grapple.")
    if dist > 3:
        return SkillResult.reject("Target out of range.")
    direction = direction_between(actor.position, target)
    if direction is None:
        return SkillResult.reject("Target is not in a straight line.")
    path = cells_between(actor.position, target)
    if any(state.is_wall(c) or state.is_occupied(c) for c in path):
        return SkillResult.reject("Something is in the way.")
    victim = state.actor_at(target)
    if victim is None or victim.role == actor.role:
        return SkillResult.reject("There is nothing to hook there.")

    # Path runs from the user outward; the victim travels it in reverse.
    arrival = actor.position + DIRECTIONS[direction]
    destination = arrival
    for cell in reversed(path):
        if state.is_hazard(cell):
            destination = cell
            break

    effects: list[Effect] = [
        Juice(hint="hook_chain", target=target),
        Displacement(target="target_actor", destination=destination),
    ]
    if "HOOK_AND_BASH" in active_upgrades and destination == arrival:
        effects.append(
            ApplyStatus(target=arrival, status=StatusType.STUNNED, duration=STUN_DURATION)
        )
    return SkillResult(effects=effects)
