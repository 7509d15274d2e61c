"""Effect interpreter.

Folds an effect list over a world state strictly left to right. Each
effect observes the result of every effect before it: an actor killed by
the first Damage in a list is gone when the second one resolves.
"""

from __future__ import annotations

from collections.abc import Iterable

from hop_engine.core.logging import get_logger
from hop_engine.engine.bestiary import create_enemy
from hop_engine.engine.rng import draw_id
from hop_engine.models.actors import Actor, Archetype, StatusEffect
from hop_engine.models.effects import (
    ApplyStatus,
    Damage,
    Displacement,
    Effect,
    EffectContext,
    EffectTarget,
    ItemKind,
    Juice,
    Message,
    ModifyCooldown,
    SpawnItem,
)
from hop_engine.models.hex import Hex, facing_towards
from hop_engine.models.state import GameStatus, WorldState


logger = get_logger(__name__)


def display_name(actor: Actor) -> str:
    """Human-readable name used in messages."""
    if actor.is_player:
        return "You"
    return actor.archetype.replace("_", " ").title()


def resolve_target(
    state: WorldState, target: EffectTarget, context: EffectContext
) -> Actor | None:
    """Resolve a symbolic or positional effect target to a live actor."""
    if isinstance(target, Hex):
        return state.actor_at(target)
    if target == "self":
        return state.get_actor(context.source_id)
    if context.target_id is None:
        return None
    return state.get_actor(context.target_id)


def shield_blocks(defender: Actor, source: Hex | None) -> bool:
    """Check whether a blow from ``source`` lands on the defender's shield.

    The shield covers the facing direction and the two directions beside it.
    """
    if defender.archetype != Archetype.SHIELD_BEARER or defender.facing is None:
        return False
    if source is None or source == defender.position:
        return False
    diff = abs(facing_towards(defender.position, source) - defender.facing)
    return diff <= 1 or diff >= 5


def kill_enemy(state: WorldState, enemy: Actor, *, environmental: bool = False) -> WorldState:
    """Remove ``enemy`` and record the death.

    Bombs are removed without counting as kills.
    """
    dead = enemy.model_copy(update={"hp": 0})
    state = state.without_enemy(enemy.id).model_copy(
        update={"dying_entities": [*state.dying_entities, dead]}
    )
    if enemy.is_bomb:
        return state
    if environmental:
        return state.model_copy(update={"environmental_kills": state.environmental_kills + 1})
    return state.model_copy(update={"kills": state.kills + 1})


def apply_damage(
    state: WorldState,
    target: Actor,
    amount: int,
    *,
    source: Hex | None = None,
) -> WorldState:
    """Apply ``amount`` damage to ``target``, removing it if it drops to zero."""
    if amount <= 0:
        return state
    if shield_blocks(target, source):
        return state.with_message(f"{display_name(target)} blocked the blow!")

    if target.is_player:
        absorbed = min(target.temporary_armor, amount)
        remaining = amount - absorbed
        hp = max(0, target.hp - remaining)
        player = target.model_copy(
            update={"hp": hp, "temporary_armor": target.temporary_armor - absorbed}
        )
        state = state.with_actor(player)
        if remaining > 0:
            state = state.with_message(f"You take {remaining} damage.")
        if hp <= 0 and state.status != GameStatus.LOST:
            logger.info("Player died", floor=state.floor, turn=state.turn)
            state = state.model_copy(update={"status": GameStatus.LOST}).with_message(
                "You died."
            )
        return state

    hp = max(0, target.hp - amount)
    if hp > 0:
        return state.with_actor(target.model_copy(update={"hp": hp}))
    state = kill_enemy(state, target)
    if target.is_bomb:
        return state.with_message("A bomb was destroyed.")
    return state.with_message(f"Killed {display_name(target)}!")


def add_juice(state: WorldState, hint: str, target: Hex | None = None) -> WorldState:
    """Record a presentation hint."""
    return state.model_copy(update={"juice": [*state.juice, Juice(hint=hint, target=target)]})


def place_bomb(state: WorldState, position: Hex) -> WorldState:
    """Spawn a fused bomb on ``position`` if the cell can hold it."""
    if not state.is_walkable(position) or state.is_hazard(position) or state.is_occupied(position):
        return state.with_message("The bomb fizzles.")
    suffix, state = draw_id(state)
    bomb = create_enemy(Archetype.BOMB, f"bomb_{suffix}", position, floor=state.floor)
    return state.model_copy(update={"enemies": [*state.enemies, bomb]})


def _apply_displacement(
    state: WorldState, effect: Displacement, context: EffectContext
) -> WorldState:
    actor = resolve_target(state, effect.target, context)
    if actor is None or actor.position == effect.destination:
        return state
    destination = effect.destination
    if not state.is_walkable(destination) or state.is_occupied(destination, exclude_id=actor.id):
        logger.debug("Displacement blocked", actor_id=actor.id, destination=destination)
        return state
    state = state.with_actor(actor.model_copy(update={"position": destination}))
    if not actor.is_player and state.is_hazard(destination):
        moved = state.get_actor(actor.id)
        if moved is not None:
            state = kill_enemy(state, moved, environmental=True)
            state = state.with_message(f"{display_name(actor)} fell into lava!")
    return state


def _apply_status(state: WorldState, effect: ApplyStatus, context: EffectContext) -> WorldState:
    actor = resolve_target(state, effect.target, context)
    if actor is None:
        return state
    statuses = [s for s in actor.statuses if s.type != effect.status]
    existing = next((s for s in actor.statuses if s.type == effect.status), None)
    duration = max(effect.duration, existing.duration if existing else 0)
    statuses.append(StatusEffect(type=effect.status, duration=duration))
    update: dict[str, object] = {"statuses": statuses}
    if not actor.is_player:
        update.update({"intent": None, "intent_position": None})
    return state.with_actor(actor.model_copy(update=update))


def _apply_spawn(state: WorldState, effect: SpawnItem) -> WorldState:
    if effect.item == ItemKind.SPEAR:
        return state.model_copy(update={"has_spear": False, "spear_position": effect.position})
    return place_bomb(state, effect.position)


def _apply_cooldown(
    state: WorldState, effect: ModifyCooldown, context: EffectContext
) -> WorldState:
    actor = state.get_actor(context.source_id)
    if actor is None:
        return state
    slot = actor.get_skill(effect.skill_id)
    if slot is None:
        return state
    if effect.set_exact is not None:
        cooldown = effect.set_exact
    else:
        cooldown = max(0, slot.cooldown + effect.amount)
    return state.with_actor(actor.replace_skill(slot.model_copy(update={"cooldown": cooldown})))


def apply_effect(state: WorldState, effect: Effect, context: EffectContext) -> WorldState:
    """Apply a single effect."""
    if isinstance(effect, Displacement):
        return _apply_displacement(state, effect, context)
    if isinstance(effect, Damage):
        target = resolve_target(state, effect.target, context)
        if target is None:
            return state
        return apply_damage(state, target, effect.amount, source=effect.source)
    if isinstance(effect, ApplyStatus):
        return _apply_status(state, effect, context)
    if isinstance(effect, SpawnItem):
        return _apply_spawn(state, effect)
    if isinstance(effect, Message):
        return state.with_message(effect.text)
    if isinstance(effect, Juice):
        return state.model_copy(update={"juice": [*state.juice, effect]})
    if isinstance(effect, ModifyCooldown):
        return _apply_cooldown(state, effect, context)
    raise TypeError(f"Unsupported effect: {effect!r}")


def apply_effects(
    state: WorldState,
    effects: Iterable[Effect],
    context: EffectContext,
) -> WorldState:
    """Fold ``effects`` over ``state`` from left to right.

    Args:
        state: Starting snapshot.
        effects: Effects in application order.
        context: Resolution context for symbolic targets.

    Returns:
        The resulting snapshot.
    """
    for effect in effects:
        state = apply_effect(state, effect, context)
    return state


__all__ = [
    "display_name",
    "resolve_target",
    "shield_blocks",
    "kill_enemy",
    "apply_damage",
    "add_juice",
    "place_bomb",
    "apply_effect",
    "apply_effects",
]
