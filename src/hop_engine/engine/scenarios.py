"""Hand-built scenario states.

Scenarios place the player, enemies and terrain explicitly instead of
generating a floor. They are used to exercise a single mechanic in
isolation and can be fed to the reducer via ``load_state``.

Example:
    >>> from hop_engine.models.hex import Hex
    >>> state = build_scenario_state(
    ...     enemies=[("footman", Hex(q=3, r=6))],
    ...     hazards=[Hex(q=2, r=7)],
    ... )
"""

from __future__ import annotations

from collections.abc import Iterable

from hop_engine.core.constants import GRID_HEIGHT, GRID_WIDTH
from hop_engine.core.exceptions import ValidationError
from hop_engine.core.logging import get_logger
from hop_engine.engine.bestiary import create_enemy
from hop_engine.engine.loadouts import DEFAULT_LOADOUT, build_player, get_loadout
from hop_engine.models.actors import Actor, Archetype
from hop_engine.models.hex import Hex, diamond_spawn, diamond_stairs_default, in_diamond
from hop_engine.models.state import WorldState


logger = get_logger(__name__)

EnemySpec = tuple[str, Hex] | Actor
"""An enemy given as ``(archetype, position)`` or as a ready-made actor."""


def _enemy(spec: EnemySpec, index: int, floor: int, face: Hex) -> Actor:
    if isinstance(spec, Actor):
        return spec
    archetype, position = spec
    enemy_id = f"{archetype}_{index}"
    return create_enemy(Archetype(archetype), enemy_id, position, floor=floor, face=face)


def build_scenario_state(
    *,
    player_position: Hex | None = None,
    enemies: Iterable[EnemySpec] = (),
    hazards: Iterable[Hex] = (),
    walls: Iterable[Hex] = (),
    floor: int = 1,
    seed: str = "test-seed",
    loadout: str = DEFAULT_LOADOUT,
    player_hp: int | None = None,
    stairs_position: Hex | None = None,
    shrine_position: Hex | None = None,
) -> WorldState:
    """Build a playing state with an explicit layout.

    Args:
        player_position: Player cell; defaults to the arena spawn.
        enemies: Enemies in evaluation order.
        hazards: Lava cells.
        walls: Wall cells.
        floor: Floor number.
        seed: Run seed.
        loadout: Player loadout.
        player_hp: Starting hit points; defaults to full.
        stairs_position: Exit cell; defaults to the arena default.
        shrine_position: Optional shrine cell.

    Returns:
        The scenario state.

    Raises:
        ValidationError: If an actor is placed off the grid, on a wall, or
            on top of another actor.
    """
    position = player_position or diamond_spawn(GRID_WIDTH, GRID_HEIGHT)
    player = build_player(loadout, position)
    if player_hp is not None:
        player = player.model_copy(update={"hp": max(0, min(player_hp, player.max_hp))})

    wall_set = frozenset(walls)
    placed = [_enemy(spec, i, floor, position) for i, spec in enumerate(enemies)]
    occupied = {position}
    for actor in [player, *placed]:
        cell = actor.position
        if not in_diamond(cell, GRID_WIDTH, GRID_HEIGHT) or cell in wall_set:
            raise ValidationError(
                f"{actor.id} cannot stand on {cell}",
                field_name="position",
                invalid_value=cell,
            )
        if actor is not player and cell in occupied:
            raise ValidationError(
                f"{actor.id} overlaps another actor",
                field_name="position",
                invalid_value=cell,
            )
        occupied.add(cell)

    logger.debug("Scenario built", enemies=len(placed), floor=floor, seed=seed)
    return WorldState(
        floor=floor,
        player=player,
        enemies=placed,
        hazards=frozenset(hazards),
        walls=wall_set,
        stairs_position=stairs_position or diamond_stairs_default(GRID_WIDTH, GRID_HEIGHT),
        shrine_position=shrine_position,
        rng_seed=seed,
        initial_seed=seed,
        loadout_id=str(loadout),
        upgrades=[upgrade for _, upgrade in get_loadout(loadout).upgrades],
    )


__all__ = [
    "EnemySpec",
    "build_scenario_state",
]
