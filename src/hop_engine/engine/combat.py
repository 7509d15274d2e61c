"""World phases that follow the player's action.

Each function takes and returns a :class:`WorldState`; the reducer chains
them in a fixed order:

1. :func:`resolve_telegraphs` - last turn's telegraphed attacks land.
2. :func:`run_enemy_phase` - every enemy acts, in list order.
3. :func:`resolve_player_passives` - the player's passive strikes.
4. :func:`apply_hazards` - lava burns whoever ends the turn on it.
5. :func:`end_of_turn` - cooldowns and statuses tick, the turn advances.
"""

from __future__ import annotations

from hop_engine.core.constants import HAZARD_PLAYER_DAMAGE
from hop_engine.core.logging import get_logger
from hop_engine.engine.bestiary import get_stats
from hop_engine.engine.enemy_ai import decide
from hop_engine.engine.interpreter import (
    add_juice,
    apply_damage,
    apply_effects,
    display_name,
    kill_enemy,
)
from hop_engine.engine.skills import SkillId, get_skill
from hop_engine.models.actors import DAMAGING_INTENTS, Actor, StatusEffect
from hop_engine.models.effects import EffectContext
from hop_engine.models.state import GameStatus, WorldState


logger = get_logger(__name__)


def mark_turn_start(state: WorldState) -> WorldState:
    """Record every actor's current cell as its turn-start position."""
    player = state.player.model_copy(update={"previous_position": state.player.position})
    enemies = [e.model_copy(update={"previous_position": e.position}) for e in state.enemies]
    return state.model_copy(update={"player": player, "enemies": enemies})


def pick_up_spear(state: WorldState) -> WorldState:
    """Return the spear to hand if the player stands on it."""
    if state.has_spear or state.spear_position != state.player.position:
        return state
    return state.model_copy(update={"has_spear": True, "spear_position": None}).with_message(
        "Picked up your spear."
    )


def resolve_telegraphs(state: WorldState) -> WorldState:
    """Land every damaging intent declared on the previous turn.

    An intent hits only if the player still stands on its target cell.
    Damaging intents are cleared whether they hit or not.
    """
    for enemy_id in [e.id for e in state.enemies]:
        enemy = state.get_actor(enemy_id)
        if enemy is None or enemy.intent not in DAMAGING_INTENTS:
            continue
        target = enemy.intent_position
        state = state.with_actor(enemy.clear_intent())
        if target is None or target != state.player.position:
            logger.debug("Telegraph missed", enemy_id=enemy.id, intent=str(enemy.intent))
            continue
        damage = get_stats(enemy.archetype).damage
        state = add_juice(state, "impact", target)
        state = apply_damage(state, state.player, damage, source=enemy.position)
        if state.status == GameStatus.LOST:
            break
    return state


def _apply_passive(state: WorldState, actor: Actor) -> WorldState:
    slot = actor.get_skill(SkillId.AUTO_ATTACK)
    if slot is None:
        return state
    definition = get_skill(SkillId.AUTO_ATTACK)
    result = definition.function(state, actor, None, frozenset(slot.upgrades))
    return apply_effects(state, result.effects, EffectContext(source_id=actor.id))


def run_enemy_phase(state: WorldState) -> WorldState:
    """Let every enemy act once, in list order.

    The order is fixed by the enemy list at the start of the phase. Enemies
    removed mid-phase (killed by a bomb, say) are skipped, and a policy's
    result is only written back if its actor is still alive.
    """
    for enemy_id in [e.id for e in state.enemies]:
        enemy = state.get_actor(enemy_id)
        if enemy is None:
            continue
        acted, state = decide(enemy, state.player.position, state)
        if state.get_actor(enemy_id) is None:
            continue
        state = state.with_actor(acted)
        if state.status == GameStatus.LOST:
            break
    return state


def resolve_player_passives(state: WorldState) -> WorldState:
    """Trigger the player's passive skills."""
    return _apply_passive(state, state.player)


def apply_hazards(state: WorldState) -> WorldState:
    """Burn the player and kill enemies left standing on lava."""
    for enemy in list(state.enemies):
        if state.is_hazard(enemy.position):
            state = kill_enemy(state, enemy, environmental=True).with_message(
                f"{display_name(enemy)} fell into lava!"
            )
    if state.is_hazard(state.player.position):
        state = state.with_message("The lava burns you!")
        state = apply_damage(state, state.player, HAZARD_PLAYER_DAMAGE)
    return state


def _tick_statuses(statuses: list[StatusEffect]) -> list[StatusEffect]:
    return [
        s.model_copy(update={"duration": s.duration - 1}) for s in statuses if s.duration > 1
    ]


def end_of_turn(state: WorldState) -> WorldState:
    """Tick the player's cooldowns and statuses and advance the turn counter."""
    player = state.player
    skills = [s.model_copy(update={"cooldown": max(0, s.cooldown - 1)}) for s in player.skills]
    player = player.model_copy(
        update={
            "skills": skills,
            "statuses": _tick_statuses(player.statuses),
            "temporary_armor": 1 if player.has_upgrade("PASSIVE_PROTECTION") else 0,
        }
    )
    return state.with_actor(player).model_copy(update={"turn": state.turn + 1})


__all__ = [
    "mark_turn_start",
    "pick_up_spear",
    "resolve_telegraphs",
    "run_enemy_phase",
    "resolve_player_passives",
    "apply_hazards",
    "end_of_turn",
]
