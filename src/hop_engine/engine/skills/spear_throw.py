"""SPEAR_THROW: throw the spear along a straight line.

The spear kills whatever it hits and stays where it lands until the
player walks onto it. With RECALL, using the skill while the spear is on
the ground pulls it back along the line, and RECALL_DAMAGE makes the
return flight hit everything in between.
"""

from __future__ import annotations

from hop_engine.engine.skills.registry import SkillId, SkillResult, skill
from hop_engine.models.actors import Actor
from hop_engine.models.effects import (
    Damage,
    Effect,
    ItemKind,
    Juice,
    Message,
    ModifyCooldown,
    SpawnItem,
)
from hop_engine.models.hex import Hex, cells_between, hex_distance, is_straight_line
from hop_engine.models.state import WorldState


SPEAR_DAMAGE = 999
"""Damage of a spear hit; always lethal."""


def _recall(state: WorldState, actor: Actor, active_upgrades: frozenset[str]) -> SkillResult:
    spear = state.spear_position
    if spear is None or "RECALL" not in active_upgrades:
        return SkillResult.reject("You don't have your spear.")
    if spear == actor.position:
        return SkillResult.reject("The spear is already at your feet.")
    if not is_straight_line(actor.position, spear):
        return SkillResult.reject("The spear is not in a straight line.")

    effects: list[Effect] = [Juice(hint="spear_recall", target=actor.position)]
    if "RECALL_DAMAGE" in active_upgrades:
        for cell in cells_between(spear, actor.position):
            victim = state.actor_at(cell)
            if victim is not None and victim.role != actor.role:
                effects.append(
                    Damage(target=cell, amount=SPEAR_DAMAGE, source=spear, reason="spear_recall")
                )
    effects.append(SpawnItem(item=ItemKind.SPEAR, position=actor.position))
    effects.append(Message(text="The spear flies back to you."))
    return SkillResult(effects=effects)


@skill(
    skill_id=SkillId.SPEAR_THROW,
    name="Spear Throw",
    description="Throw your spear in a straight line, killing the first thing it hits.",
    range=2,
    upgrades=("SPEAR_RANGE", "RECALL", "RECALL_DAMAGE", "DEEP_BREATH"),
)
def spear_throw(
    state: WorldState,
    actor: Actor,
    target: Hex | None,
    active_upgrades: frozenset[str],
) -> SkillResult:
    if not state.has_spear:
        return _recall(state, actor, active_upgrades)
    if target is None:
        return SkillResult.reject("Spear Throw needs a target.")

    reach = 3 if "SPEAR_RANGE" in active_upgrades else 2
    dist = hex_distance(actor.position, target)
    if dist < 1 or dist > reach:
        return SkillResult.reject("Target out of range.")
    if not is_straight_line(actor.position, target):
        return SkillResult.reject("Target is not in a straight line.")
    if not state.in_grid(target) or state.is_wall(target):
        return SkillResult.reject("The spear can't land there.")

    landing = target
    for cell in cells_between(actor.position, target):
        if state.is_wall(cell):
            return SkillResult.reject("Something is in the way.")
        if state.is_occupied(cell):
            landing = cell
            break

    effects: list[Effect] = [Juice(hint="spear_trail", target=landing)]
    victim = state.actor_at(landing)
    if victim is not None and victim.role != actor.role:
        effects.append(
            Damage(target=landing, amount=SPEAR_DAMAGE, source=actor.position, reason="spear")
        )
        if "DEEP_BREATH" in active_upgrades:
            effects.append(ModifyCooldown(skill_id=SkillId.JUMP.value, set_exact=0))
    effects.append(SpawnItem(item=ItemKind.SPEAR, position=landing))
    return SkillResult(effects=effects)
