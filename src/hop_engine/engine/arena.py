"""Procedural arena generation.

An arena is a function of ``(floor, seed)`` alone. Generation draws from a
detached stream keyed on the floor seed, so it never disturbs the run's
in-play draw counter and never depends on container iteration order:
every candidate list is sorted before a draw picks from it.
"""

from __future__ import annotations

import math
from collections import deque

from pydantic import BaseModel, ConfigDict, Field

from hop_engine.core.config import get_settings
from hop_engine.core.constants import (
    ENEMY_SPAWN_MIN_DISTANCE,
    FINAL_FLOOR,
    FLOOR_ENEMY_BUDGET,
    FLOOR_ENEMY_POOLS,
    GRID_HEIGHT,
    GRID_WIDTH,
    HAZARD_PERCENTAGE,
    SHRINE_MIN_DISTANCE,
    STAIRS_MIN_DISTANCE,
    WALL_PERCENTAGE,
)
from hop_engine.core.logging import get_logger
from hop_engine.engine.bestiary import create_enemy, get_stats
from hop_engine.engine.rng import DrawCursor, draw_id, draw_index, shuffle
from hop_engine.models.actors import Actor, Archetype
from hop_engine.models.hex import (
    Hex,
    diamond_grid,
    diamond_spawn,
    diamond_stairs_default,
    hex_distance,
    neighbors,
)


logger = get_logger(__name__)

MAX_LAYOUT_ATTEMPTS = 5
"""Terrain reshuffles tried before falling back to an open arena."""


class ArenaLayout(BaseModel):
    """One generated floor.

    Attributes:
        floor: Floor number the layout was generated for.
        seed: Seed the layout was generated from.
        width: Grid width.
        height: Grid height.
        cells: Every cell of the arena in stable order.
        player_spawn: Player start cell.
        stairs: Exit cell.
        shrine: Shrine cell on eligible floors.
        hazards: Lava cells.
        walls: Wall cells.
        spawn_candidates: Cells where enemies may be placed.
        enemies: Enemies placed by the point budget.
        draws: Number of draws generation consumed.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    floor: int
    seed: str
    width: int = GRID_WIDTH
    height: int = GRID_HEIGHT
    cells: list[Hex]
    player_spawn: Hex
    stairs: Hex
    shrine: Hex | None = None
    hazards: frozenset[Hex] = Field(default_factory=frozenset)
    walls: frozenset[Hex] = Field(default_factory=frozenset)
    spawn_candidates: list[Hex] = Field(default_factory=list)
    enemies: list[Actor] = Field(default_factory=list)
    draws: int = 0


def shrine_floor(floor: int) -> bool:
    """Check whether ``floor`` carries a shrine."""
    return 1 < floor < FINAL_FLOOR


def _pick(cursor: DrawCursor, candidates: list[Hex]) -> tuple[Hex | None, DrawCursor]:
    if not candidates:
        return None, cursor
    ordered = sorted(candidates, key=Hex.sort_key)
    index, cursor = draw_index(cursor, len(ordered))
    return ordered[index], cursor


def _reachable(start: Hex, goal: Hex, cells: set[Hex], blocked: set[Hex]) -> bool:
    """Breadth-first check that ``goal`` can be walked to from ``start``."""
    seen = {start}
    queue = deque([start])
    while queue:
        cell = queue.popleft()
        if cell == goal:
            return True
        for nxt in neighbors(cell):
            if nxt in cells and nxt not in blocked and nxt not in seen:
                seen.add(nxt)
                queue.append(nxt)
    return False


def _place_terrain(
    cursor: DrawCursor,
    cells: list[Hex],
    reserved: set[Hex],
    spawn: Hex,
    stairs: Hex,
) -> tuple[frozenset[Hex], frozenset[Hex], DrawCursor]:
    """Draw hazard and wall cells by quota, keeping the stairs reachable."""
    hazard_count = math.floor(len(cells) * HAZARD_PERCENTAGE)
    wall_count = math.floor(len(cells) * WALL_PERCENTAGE)
    remainder = sorted((c for c in cells if c not in reserved), key=Hex.sort_key)
    cell_set = set(cells)

    for attempt in range(MAX_LAYOUT_ATTEMPTS):
        shuffled, cursor = shuffle(cursor, remainder)
        hazards = frozenset(shuffled[:hazard_count])
        walls = frozenset(shuffled[hazard_count : hazard_count + wall_count])
        if _reachable(spawn, stairs, cell_set, set(hazards | walls)):
            return hazards, walls, cursor
        logger.debug("Arena layout blocked stairs, reshuffling", attempt=attempt)

    logger.warning("Arena layout fell back to open terrain", attempts=MAX_LAYOUT_ATTEMPTS)
    return frozenset(), frozenset(), cursor


def _populate(
    cursor: DrawCursor,
    floor: int,
    candidates: list[Hex],
    spawn: Hex,
) -> tuple[list[Actor], DrawCursor]:
    """Spend the floor's point budget on enemies."""
    table_floor = min(max(floor, 1), len(FLOOR_ENEMY_BUDGET) - 1)
    budget = FLOOR_ENEMY_BUDGET[table_floor]
    pool = [Archetype(a) for a in FLOOR_ENEMY_POOLS.get(table_floor, ["footman"])]
    free = sorted(candidates, key=Hex.sort_key)
    enemies: list[Actor] = []

    while budget > 0 and free:
        affordable = [a for a in pool if get_stats(a).cost <= budget]
        if not affordable:
            break
        index, cursor = draw_index(cursor, len(affordable))
        archetype = affordable[index]
        slot, cursor = draw_index(cursor, len(free))
        position = free.pop(slot)
        suffix, cursor = draw_id(cursor)
        enemies.append(
            create_enemy(archetype, f"{archetype}_{suffix}", position, floor=floor, face=spawn)
        )
        budget -= get_stats(archetype).cost

    return enemies, cursor


def generate_arena(floor: int, seed: str) -> ArenaLayout:
    """Generate the layout and enemy population of one floor.

    Never raises: an empty seed falls back to the configured default, and
    a floor outside the tables is clamped to the nearest defined floor.

    Args:
        floor: Floor number.
        seed: Floor seed.

    Returns:
        The generated layout.
    """
    floor = max(floor, 1)
    seed = seed or get_settings().engine.default_seed
    width, height = GRID_WIDTH, GRID_HEIGHT
    cursor = DrawCursor(rng_seed=seed)

    cells = diamond_grid(width, height)
    spawn = diamond_spawn(width, height)
    half = (height - 1) // 2

    stairs_candidates = [
        c for c in cells if hex_distance(c, spawn) >= STAIRS_MIN_DISTANCE and c.r <= half
    ]
    stairs, cursor = _pick(cursor, stairs_candidates)
    if stairs is None:
        stairs = diamond_stairs_default(width, height)

    shrine = None
    if shrine_floor(floor):
        shrine_candidates = [
            c for c in cells if hex_distance(c, spawn) >= SHRINE_MIN_DISTANCE and c != stairs
        ]
        shrine, cursor = _pick(cursor, shrine_candidates)

    reserved = {spawn, stairs, *neighbors(spawn)}
    if shrine is not None:
        reserved.add(shrine)
    hazards, walls, cursor = _place_terrain(cursor, cells, reserved, spawn, stairs)

    spawn_candidates = sorted(
        (
            c
            for c in cells
            if c not in reserved
            and c not in hazards
            and c not in walls
            and hex_distance(c, spawn) >= ENEMY_SPAWN_MIN_DISTANCE
        ),
        key=Hex.sort_key,
    )
    enemies, cursor = _populate(cursor, floor, spawn_candidates, spawn)

    logger.debug(
        "Arena generated",
        floor=floor,
        seed=seed,
        hazards=len(hazards),
        walls=len(walls),
        enemies=len(enemies),
    )
    return ArenaLayout(
        floor=floor,
        seed=seed,
        width=width,
        height=height,
        cells=cells,
        player_spawn=spawn,
        stairs=stairs,
        shrine=shrine,
        hazards=hazards,
        walls=walls,
        spawn_candidates=spawn_candidates,
        enemies=enemies,
        draws=cursor.rng_counter,
    )


__all__ = [
    "ArenaLayout",
    "MAX_LAYOUT_ATTEMPTS",
    "shrine_floor",
    "generate_arena",
]
