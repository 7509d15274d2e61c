"""Enemy archetype statistics and construction.

Stats are plain data keyed by archetype. Behaviour lives in the policy
table of :mod:`hop_engine.engine.enemy_ai`.
"""

from __future__ import annotations

from dataclasses import dataclass

from hop_engine.core.constants import BOMB_FUSE, ENEMY_HP_SCALING_FLOORS
from hop_engine.models.actors import Actor, ActorRole, Archetype
from hop_engine.models.hex import Hex, facing_towards


@dataclass(frozen=True)
class EnemyStats:
    """Static statistics of an archetype.

    Attributes:
        archetype: Archetype described.
        hp: Base hit points.
        cost: Spawn budget cost.
        damage: Damage dealt when a telegraph resolves.
        speed: Steps taken per move.
        spawnable: Whether the arena generator may place it.
    """

    archetype: Archetype
    hp: int
    cost: int
    damage: int = 1
    speed: int = 1
    spawnable: bool = True


BESTIARY: dict[Archetype, EnemyStats] = {
    Archetype.FOOTMAN: EnemyStats(Archetype.FOOTMAN, hp=1, cost=1),
    Archetype.SPRINTER: EnemyStats(Archetype.SPRINTER, hp=1, cost=1, speed=2),
    Archetype.ARCHER: EnemyStats(Archetype.ARCHER, hp=1, cost=1),
    Archetype.BOMBER: EnemyStats(Archetype.BOMBER, hp=1, cost=1),
    Archetype.SHIELD_BEARER: EnemyStats(Archetype.SHIELD_BEARER, hp=2, cost=2),
    Archetype.WARLOCK: EnemyStats(Archetype.WARLOCK, hp=1, cost=2),
    Archetype.ASSASSIN: EnemyStats(Archetype.ASSASSIN, hp=1, cost=3),
    Archetype.GOLEM: EnemyStats(Archetype.GOLEM, hp=4, cost=4, damage=2),
    Archetype.BOMB: EnemyStats(Archetype.BOMB, hp=1, cost=0, spawnable=False),
}


def get_stats(archetype: Archetype | str) -> EnemyStats:
    """Return the stats for ``archetype``.

    Raises:
        KeyError: If the archetype has no stats (the player).
    """
    return BESTIARY[Archetype(archetype)]


def scaled_hp(archetype: Archetype, floor: int) -> int:
    """Return the hit points of ``archetype`` on ``floor``."""
    base = get_stats(archetype).hp
    if archetype == Archetype.BOMB:
        return base
    return base + max(floor, 1) // ENEMY_HP_SCALING_FLOORS


def create_enemy(
    archetype: Archetype,
    enemy_id: str,
    position: Hex,
    *,
    floor: int = 1,
    face: Hex | None = None,
) -> Actor:
    """Build a fresh enemy actor.

    Args:
        archetype: Archetype to build.
        enemy_id: Identifier to assign.
        position: Spawn cell.
        floor: Floor number, used for hp scaling.
        face: Cell a shield bearer should initially face.

    Returns:
        The new enemy.
    """
    hp = scaled_hp(archetype, floor)
    facing = None
    if archetype == Archetype.SHIELD_BEARER:
        facing = facing_towards(position, face) if face is not None else 5
    return Actor(
        id=enemy_id,
        role=ActorRole.ENEMY,
        archetype=archetype,
        position=position,
        previous_position=position,
        hp=hp,
        max_hp=hp,
        facing=facing,
        is_visible=archetype != Archetype.ASSASSIN,
        fuse=BOMB_FUSE if archetype == Archetype.BOMB else None,
    )


__all__ = [
    "EnemyStats",
    "BESTIARY",
    "get_stats",
    "scaled_hp",
    "create_enemy",
]
