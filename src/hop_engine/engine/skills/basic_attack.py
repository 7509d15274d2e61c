"""BASIC_ATTACK: strike an adjacent actor."""

from __future__ import annotations

from hop_engine.engine.skills.registry import SkillId, SkillResult, skill
from hop_engine.models.actors import Actor
from hop_engine.models.effects import Damage, Juice
from hop_engine.models.hex import Hex, cells_between, hex_distance, is_straight_line
from hop_engine.models.state import WorldState


@skill(
    skill_id=SkillId.BASIC_ATTACK,
    name="Basic Attack",
    description="Strike an adjacent enemy for 1 damage.",
    range=1,
    upgrades=("EXTENDED_REACH",),
)
def basic_attack(
    state: WorldState,
    actor: Actor,
    target: Hex | None,
    active_upgrades: frozenset[str],
) -> SkillResult:
    if target is None:
        return SkillResult.reject("Basic Attack needs a target.")
    reach = 2 if "EXTENDED_REACH" in active_upgrades else 1
    dist = hex_distance(actor.position, target)
    if dist < 1 or dist > reach:
        return SkillResult.reject("Target out of reach.")
    if dist > 1:
        if not is_straight_line(actor.position, target):
            return SkillResult.reject("Target is not in a straight line.")
        path = cells_between(actor.position, target)
        if any(state.is_wall(c) or state.is_occupied(c) for c in path):
            return SkillResult.reject("Something is in the way.")
    victim = state.actor_at(target)
    if victim is None or victim.role == actor.role:
        return SkillResult.reject("There is nothing to attack there.")
    return SkillResult(
        effects=[
            Damage(target=target, amount=1, source=actor.position, reason="basic_attack"),
            Juice(hint="impact", target=target),
        ],
    )
