"""JUMP: leap to a free cell within range."""

from __future__ import annotations

from hop_engine.core.constants import STUN_DURATION
from hop_engine.engine.skills.registry import SkillId, SkillResult, skill
from hop_engine.models.actors import Actor, StatusType
from hop_engine.models.effects import ApplyStatus, Damage, Displacement, Effect, Juice
from hop_engine.models.hex import Hex, hex_distance, neighbors
from hop_engine.models.state import WorldState


METEOR_DAMAGE = 999
"""Damage dealt to an enemy landed on with METEOR_IMPACT."""


@skill(
    skill_id=SkillId.JUMP,
    name="Jump",
    description="Leap to an empty cell up to two hexes away.",
    range=2,
    cooldown=2,
    upgrades=("JUMP_RANGE", "JUMP_COOLDOWN", "STUNNING_LANDING", "METEOR_IMPACT", "FREE_JUMP"),
    cooldown_modifiers={"JUMP_COOLDOWN": -1},
)
def jump(
    state: WorldState,
    actor: Actor,
    target: Hex | None,
    active_upgrades: frozenset[str],
) -> SkillResult:
    if target is None:
        return SkillResult.reject("Jump needs a target.")
    reach = 3 if "JUMP_RANGE" in active_upgrades else 2
    dist = hex_distance(actor.position, target)
    if dist < 1 or dist > reach:
        return SkillResult.reject("Target out of range.")
    if not state.is_walkable(target):
        return SkillResult.reject("You can't land there.")
    if state.is_hazard(target):
        return SkillResult.reject("You can't land in lava.")

    effects: list[Effect] = []
    occupant = state.actor_at(target)
    if occupant is not None:
        if "METEOR_IMPACT" not in active_upgrades or occupant.role == actor.role:
            return SkillResult.reject("That cell is occupied.")
        effects.append(Damage(target=target, amount=METEOR_DAMAGE, reason="meteor_impact"))

    effects.append(Displacement(target="self", destination=target))
    effects.append(Juice(hint="jump", target=target))
    if "STUNNING_LANDING" in active_upgrades:
        for cell in neighbors(target):
            other = state.actor_at(cell)
            if other is not None and other.role != actor.role and other.id != actor.id:
                effects.append(
                    ApplyStatus(target=cell, status=StatusType.STUNNED, duration=STUN_DURATION)
                )
    return SkillResult(effects=effects, consumes_turn="FREE_JUMP" not in active_upgrades)
