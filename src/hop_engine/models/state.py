"""Pydantic V2 schema for the world state.

A WorldState is an immutable snapshot. Every reducer call produces a new
one via ``model_copy``; snapshots held by the undo history are never
modified afterwards.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from hop_engine.core.config import get_settings
from hop_engine.core.constants import GRID_HEIGHT, GRID_WIDTH
from hop_engine.models.actions import LoggedAction
from hop_engine.models.actors import Actor
from hop_engine.models.effects import Juice
from hop_engine.models.hex import Hex, in_diamond


class GameStatus(StrEnum):
    """Run status state machine."""

    PLAYING = "playing"
    CHOOSING_UPGRADE = "choosing_upgrade"
    WON = "won"
    LOST = "lost"


class CompletedRun(BaseModel):
    """Summary of a finished run.

    Attributes:
        seed: Initial seed of the run.
        score: Final score.
        floor: Floor reached.
        turns: Turns taken on the final floor.
        actions: Number of logged actions.
        kills: Enemies killed.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    seed: str
    score: int
    floor: int
    turns: int
    actions: int
    kills: int


class WorldState(BaseModel):
    """Complete simulation snapshot.

    Attributes:
        turn: Turns resolved on the current floor.
        floor: Current floor number.
        status: Run status.
        player: The player actor.
        enemies: Enemies in evaluation order.
        grid_width: Diamond grid width.
        grid_height: Diamond grid height.
        hazards: Lava cells.
        walls: Wall cells.
        stairs_position: Exit cell.
        shrine_position: Shrine cell, if the floor has one.
        shrine_options: Upgrades currently offered by a shrine.
        has_spear: Whether the player holds the spear.
        spear_position: Where the thrown spear lies.
        upgrades: Every upgrade acquired this run.
        loadout_id: Loadout the run started with.
        rng_seed: Seed of the current floor.
        initial_seed: Seed of the run, constant across floors.
        rng_counter: Number of draws consumed so far.
        messages: Bounded message log.
        action_log: Logged actions since the run began.
        kills: Enemies killed by damage.
        environmental_kills: Enemies killed by hazards.
        dying_entities: Actors removed during the last reducer call.
        juice: Presentation hints produced during the last reducer call.
        history: Bounded undo snapshots.
        completed_run: Summary once the run is won.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    turn: int = Field(default=0, ge=0, description="Turn counter")
    floor: int = Field(default=1, ge=1, description="Floor number")
    status: GameStatus = Field(default=GameStatus.PLAYING, description="Run status")
    player: Actor = Field(description="Player actor")
    enemies: list[Actor] = Field(default_factory=list, description="Enemies in order")
    grid_width: int = Field(default=GRID_WIDTH, ge=1, description="Grid width")
    grid_height: int = Field(default=GRID_HEIGHT, ge=1, description="Grid height")
    hazards: frozenset[Hex] = Field(default_factory=frozenset, description="Lava cells")
    walls: frozenset[Hex] = Field(default_factory=frozenset, description="Wall cells")
    stairs_position: Hex | None = Field(default=None, description="Stairs cell")
    shrine_position: Hex | None = Field(default=None, description="Shrine cell")
    shrine_options: list[str] = Field(default_factory=list, description="Offered upgrades")
    has_spear: bool = Field(default=True, description="Spear in hand")
    spear_position: Hex | None = Field(default=None, description="Dropped spear cell")
    upgrades: list[str] = Field(default_factory=list, description="Acquired upgrades")
    loadout_id: str = Field(default="SKIRMISHER", description="Starting loadout")
    rng_seed: str = Field(default="", description="Floor seed")
    initial_seed: str = Field(default="", description="Run seed")
    rng_counter: int = Field(default=0, ge=0, description="Draws consumed")
    messages: list[str] = Field(default_factory=list, description="Message log")
    action_log: list[LoggedAction] = Field(default_factory=list, description="Action log")
    kills: int = Field(default=0, ge=0, description="Kills")
    environmental_kills: int = Field(default=0, ge=0, description="Hazard kills")
    dying_entities: list[Actor] = Field(default_factory=list, description="Died this call")
    juice: list[Juice] = Field(default_factory=list, description="Presentation hints")
    history: list[WorldState] = Field(default_factory=list, description="Undo snapshots")
    completed_run: CompletedRun | None = Field(default=None, description="Run summary")

    @field_serializer("hazards", "walls")
    def serialize_cells(self, cells: frozenset[Hex]) -> list[dict[str, int]]:
        """Serialize cell sets in a stable order."""
        return [{"q": c.q, "r": c.r} for c in sorted(cells, key=Hex.sort_key)]

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def actors(self) -> list[Actor]:
        """The player followed by every enemy, in evaluation order."""
        return [self.player, *self.enemies]

    def get_actor(self, actor_id: str) -> Actor | None:
        """Return the actor with ``actor_id``, if present."""
        return next((a for a in self.actors if a.id == actor_id), None)

    def actor_at(self, cell: Hex) -> Actor | None:
        """Return the actor standing on ``cell``, if any."""
        return next((a for a in self.actors if a.position == cell), None)

    def enemy_at(self, cell: Hex) -> Actor | None:
        """Return the enemy standing on ``cell``, if any."""
        return next((e for e in self.enemies if e.position == cell), None)

    def in_grid(self, cell: Hex) -> bool:
        """Check whether ``cell`` is part of the arena."""
        return in_diamond(cell, self.grid_width, self.grid_height)

    def is_wall(self, cell: Hex) -> bool:
        return cell in self.walls

    def is_hazard(self, cell: Hex) -> bool:
        return cell in self.hazards

    def is_walkable(self, cell: Hex) -> bool:
        """Check whether an actor could stand on ``cell`` terrain-wise."""
        return self.in_grid(cell) and cell not in self.walls

    def is_occupied(self, cell: Hex, *, exclude_id: str | None = None) -> bool:
        """Check whether an actor other than ``exclude_id`` stands on ``cell``."""
        return any(a.position == cell and a.id != exclude_id for a in self.actors)

    # -------------------------------------------------------------------------
    # Copy-on-write helpers
    # -------------------------------------------------------------------------

    def with_actor(self, actor: Actor) -> WorldState:
        """Return a copy where the actor with ``actor.id`` is replaced."""
        if actor.id == self.player.id:
            return self.model_copy(update={"player": actor})
        enemies = [actor if e.id == actor.id else e for e in self.enemies]
        return self.model_copy(update={"enemies": enemies})

    def without_enemy(self, actor_id: str) -> WorldState:
        """Return a copy without the enemy ``actor_id``."""
        enemies = [e for e in self.enemies if e.id != actor_id]
        return self.model_copy(update={"enemies": enemies})

    def with_message(self, text: str, *, limit: int | None = None) -> WorldState:
        """Return a copy with ``text`` appended to the bounded message log."""
        if limit is None:
            limit = get_settings().engine.message_log_limit
        messages = [*self.messages, text][-limit:]
        return self.model_copy(update={"messages": messages})


WorldState.model_rebuild()


__all__ = [
    "GameStatus",
    "CompletedRun",
    "WorldState",
]
