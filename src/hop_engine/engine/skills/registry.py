"""Skill registry and execution.

Skills register themselves with the :func:`skill` decorator. A skill
function is pure: ``(state, actor, target, active_upgrades) -> SkillResult``.
It validates its target and returns a declarative effect list; it never
mutates state. :func:`execute_skill` adds the cross-cutting rules
(ownership, cooldown, setting the cooldown on success).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TypeVar

from hop_engine.core.exceptions import UnknownSkillError, UpgradeError
from hop_engine.core.logging import get_logger
from hop_engine.models.actors import Actor
from hop_engine.models.effects import Effect, ModifyCooldown
from hop_engine.models.hex import Hex
from hop_engine.models.state import WorldState


logger = get_logger(__name__)


class SkillId(StrEnum):
    """Identifiers of every registered skill."""

    BASIC_ATTACK = "BASIC_ATTACK"
    AUTO_ATTACK = "AUTO_ATTACK"
    SPEAR_THROW = "SPEAR_THROW"
    SHIELD_BASH = "SHIELD_BASH"
    JUMP = "JUMP"
    GRAPPLE_HOOK = "GRAPPLE_HOOK"


@dataclass(frozen=True)
class SkillResult:
    """Outcome of a skill invocation.

    Attributes:
        effects: Effects to apply, in order.
        messages: Messages to append (rejection reasons included).
        consumes_turn: Whether the world advances after this skill.
        ok: False when the skill rejected its target.
    """

    effects: list[Effect] = field(default_factory=list)
    messages: list[str] = field(default_factory=list)
    consumes_turn: bool = True
    ok: bool = True

    @classmethod
    def reject(cls, message: str) -> SkillResult:
        """Build a rejection: no effects, no turn consumed."""
        return cls(effects=[], messages=[message], consumes_turn=False, ok=False)


SkillFunction = Callable[[WorldState, Actor, Hex | None, frozenset[str]], SkillResult]
F = TypeVar("F", bound=SkillFunction)


@dataclass(frozen=True)
class SkillDefinition:
    """Registered skill metadata.

    Attributes:
        id: Skill identifier.
        name: Display name.
        description: Human-readable description.
        range: Base range in hexes.
        cooldown: Base cooldown in turns.
        upgrades: Fixed, ordered set of upgrades this skill accepts.
        cooldown_modifiers: Cooldown delta contributed by each upgrade.
        passive: Passive skills are triggered by the reducer, never by actions.
        function: The skill implementation.
    """

    id: str
    name: str
    description: str
    range: int
    cooldown: int
    upgrades: tuple[str, ...]
    cooldown_modifiers: dict[str, int]
    passive: bool
    function: SkillFunction

    def effective_cooldown(self, active_upgrades: frozenset[str]) -> int:
        """Return the cooldown after upgrade modifiers, never negative."""
        delta = sum(v for k, v in self.cooldown_modifiers.items() if k in active_upgrades)
        return max(0, self.cooldown + delta)


_skill_registry: dict[str, SkillDefinition] = {}


def skill(
    *,
    skill_id: SkillId,
    name: str,
    description: str,
    range: int = 1,
    cooldown: int = 0,
    upgrades: tuple[str, ...] = (),
    cooldown_modifiers: dict[str, int] | None = None,
    passive: bool = False,
) -> Callable[[F], F]:
    """Decorator to register a function as a skill.

    Args:
        skill_id: Identifier the skill is registered under.
        name: Display name.
        description: Human-readable description.
        range: Base range in hexes.
        cooldown: Base cooldown in turns.
        upgrades: Upgrades the skill accepts.
        cooldown_modifiers: Cooldown delta per upgrade.
        passive: Whether the reducer triggers the skill itself.

    Returns:
        Decorator returning the function unchanged.
    """

    def decorator(func: F) -> F:
        definition = SkillDefinition(
            id=str(skill_id),
            name=name,
            description=description,
            range=range,
            cooldown=cooldown,
            upgrades=upgrades,
            cooldown_modifiers=dict(cooldown_modifiers or {}),
            passive=passive,
            function=func,
        )
        _skill_registry[definition.id] = definition
        func._skill_definition = definition  # type: ignore[attr-defined]
        return func

    return decorator


def get_skill(skill_id: str) -> SkillDefinition:
    """Get a skill definition by id.

    Raises:
        UnknownSkillError: If no skill is registered under ``skill_id``.
    """
    try:
        return _skill_registry[skill_id]
    except KeyError:
        raise UnknownSkillError(f"Unknown skill: {skill_id}", skill_id=skill_id) from None


def get_all_skills() -> list[SkillDefinition]:
    """Get all registered skills in registration order."""
    return list(_skill_registry.values())


def skill_for_upgrade(upgrade_id: str) -> str | None:
    """Return the id of the skill owning ``upgrade_id``, if any."""
    return next((d.id for d in _skill_registry.values() if upgrade_id in d.upgrades), None)


def add_upgrade(actor: Actor, skill_id: str, upgrade_id: str) -> Actor:
    """Return ``actor`` with ``upgrade_id`` acquired on ``skill_id``.

    Raises:
        UnknownSkillError: If the skill is not registered.
        UpgradeError: If the actor lacks the skill or the upgrade is not
            part of the skill's fixed upgrade set.
    """
    definition = get_skill(skill_id)
    if upgrade_id not in definition.upgrades:
        raise UpgradeError(
            f"{upgrade_id} is not an upgrade of {skill_id}",
            skill_id=skill_id,
            upgrade_id=upgrade_id,
        )
    slot = actor.get_skill(skill_id)
    if slot is None:
        raise UpgradeError(
            f"Actor does not have {skill_id}",
            skill_id=skill_id,
            upgrade_id=upgrade_id,
        )
    if upgrade_id in slot.upgrades:
        return actor
    return actor.replace_skill(slot.model_copy(update={"upgrades": [*slot.upgrades, upgrade_id]}))


def execute_skill(
    state: WorldState,
    actor: Actor,
    skill_id: str,
    target: Hex | None,
) -> SkillResult:
    """Validate ownership and cooldown, then run the skill.

    On success a ModifyCooldown effect setting the effective cooldown is
    appended to the skill's own effects.

    Raises:
        UnknownSkillError: If the skill is not registered.
    """
    definition = get_skill(skill_id)
    slot = actor.get_skill(skill_id)
    if slot is None:
        return SkillResult.reject(f"You don't have {definition.name}.")
    if definition.passive:
        return SkillResult.reject(f"{definition.name} is passive.")
    if slot.cooldown > 0:
        return SkillResult.reject(f"{definition.name} is on cooldown ({slot.cooldown}).")

    active_upgrades = frozenset(slot.upgrades)
    result = definition.function(state, actor, target, active_upgrades)
    if not result.ok:
        logger.debug("Skill rejected", skill_id=skill_id, reason=result.messages)
        return result

    cooldown = definition.effective_cooldown(active_upgrades)
    if cooldown == 0:
        return result
    return SkillResult(
        effects=[*result.effects, ModifyCooldown(skill_id=skill_id, set_exact=cooldown)],
        messages=result.messages,
        consumes_turn=result.consumes_turn,
        ok=True,
    )


__all__ = [
    "SkillId",
    "SkillResult",
    "SkillDefinition",
    "SkillFunction",
    "skill",
    "get_skill",
    "get_all_skills",
    "skill_for_upgrade",
    "add_upgrade",
    "execute_skill",
]
