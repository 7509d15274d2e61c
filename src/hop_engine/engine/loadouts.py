"""Starting loadouts.

A loadout names the skills and upgrades a fresh run begins with. Upgrades
are applied through :func:`add_upgrade`, so a loadout listing an upgrade
its skill does not accept fails at construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from hop_engine.core.constants import INITIAL_PLAYER_HP, INITIAL_PLAYER_MAX_HP, PLAYER_ID
from hop_engine.core.exceptions import ValidationError
from hop_engine.engine.skills import SkillId, add_upgrade, get_skill
from hop_engine.models.actors import Actor, ActorRole, Archetype, SkillSlot
from hop_engine.models.hex import Hex


class LoadoutId(StrEnum):
    """Available starting loadouts."""

    SKIRMISHER = "SKIRMISHER"
    VANGUARD = "VANGUARD"
    SNIPER = "SNIPER"


@dataclass(frozen=True)
class Loadout:
    """Skills and upgrades granted at the start of a run.

    Attributes:
        id: Loadout identifier.
        name: Display name.
        skills: Skill ids, in slot order.
        upgrades: (skill id, upgrade id) pairs applied after equipping.
    """

    id: LoadoutId
    name: str
    skills: tuple[str, ...]
    upgrades: tuple[tuple[str, str], ...] = ()


LOADOUTS: dict[LoadoutId, Loadout] = {
    LoadoutId.SKIRMISHER: Loadout(
        id=LoadoutId.SKIRMISHER,
        name="Skirmisher",
        skills=(
            SkillId.BASIC_ATTACK,
            SkillId.AUTO_ATTACK,
            SkillId.SPEAR_THROW,
            SkillId.SHIELD_BASH,
            SkillId.JUMP,
        ),
    ),
    LoadoutId.VANGUARD: Loadout(
        id=LoadoutId.VANGUARD,
        name="Vanguard",
        skills=(
            SkillId.BASIC_ATTACK,
            SkillId.AUTO_ATTACK,
            SkillId.SHIELD_BASH,
            SkillId.GRAPPLE_HOOK,
            SkillId.JUMP,
        ),
        upgrades=((SkillId.SHIELD_BASH, "PASSIVE_PROTECTION"),),
    ),
    LoadoutId.SNIPER: Loadout(
        id=LoadoutId.SNIPER,
        name="Sniper",
        skills=(SkillId.BASIC_ATTACK, SkillId.SPEAR_THROW, SkillId.JUMP),
        upgrades=((SkillId.SPEAR_THROW, "SPEAR_RANGE"), (SkillId.SPEAR_THROW, "RECALL")),
    ),
}
"""Loadout definitions keyed by id."""

DEFAULT_LOADOUT = LoadoutId.SKIRMISHER


def get_loadout(loadout_id: str) -> Loadout:
    """Return the loadout named ``loadout_id``.

    Raises:
        ValidationError: If no such loadout exists.
    """
    try:
        return LOADOUTS[LoadoutId(loadout_id)]
    except ValueError:
        raise ValidationError(
            f"Unknown loadout: {loadout_id}",
            field_name="loadout",
            invalid_value=loadout_id,
        ) from None


def build_player(
    loadout_id: str,
    position: Hex,
    *,
    hp: int = INITIAL_PLAYER_HP,
    max_hp: int = INITIAL_PLAYER_MAX_HP,
) -> Actor:
    """Create a player actor equipped with a loadout.

    Args:
        loadout_id: Loadout to equip.
        position: Spawn cell.
        hp: Starting hit points.
        max_hp: Starting maximum hit points.

    Returns:
        The player actor.

    Raises:
        ValidationError: If the loadout is unknown.
        UpgradeError: If a loadout upgrade does not fit its skill.
    """
    loadout = get_loadout(loadout_id)
    skills = [SkillSlot(id=get_skill(skill_id).id) for skill_id in loadout.skills]
    player = Actor(
        id=PLAYER_ID,
        role=ActorRole.PLAYER,
        archetype=Archetype.PLAYER,
        position=position,
        previous_position=position,
        hp=hp,
        max_hp=max_hp,
        skills=skills,
    )
    for skill_id, upgrade_id in loadout.upgrades:
        player = add_upgrade(player, skill_id, upgrade_id)
    return player


__all__ = [
    "LoadoutId",
    "Loadout",
    "LOADOUTS",
    "DEFAULT_LOADOUT",
    "get_loadout",
    "build_player",
]
