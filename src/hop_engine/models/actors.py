"""Pydantic V2 schemas for actors.

The player and every enemy share one representation. Archetype is a plain
tag; behaviour is looked up from it by the enemy policy table rather than
by subclassing.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from hop_engine.models.hex import Hex


class ActorRole(StrEnum):
    """Which side an actor fights on."""

    PLAYER = "player"
    ENEMY = "enemy"


class Archetype(StrEnum):
    """Behavioural archetype of an actor."""

    PLAYER = "player"
    FOOTMAN = "footman"
    SPRINTER = "sprinter"
    ARCHER = "archer"
    BOMBER = "bomber"
    SHIELD_BEARER = "shield_bearer"
    WARLOCK = "warlock"
    ASSASSIN = "assassin"
    GOLEM = "golem"
    BOMB = "bomb"


class StatusType(StrEnum):
    """Status effects an actor can carry."""

    STUNNED = "stunned"


class Intent(StrEnum):
    """Telegraphed intents, visible one turn before they resolve."""

    ATTACKING = "attacking"
    AIMING = "aiming"
    CASTING = "casting"
    BOMBING = "bombing"
    BACKSTAB = "backstab"
    SMASHING = "smashing"


DAMAGING_INTENTS = frozenset(
    {Intent.ATTACKING, Intent.AIMING, Intent.CASTING, Intent.BACKSTAB, Intent.SMASHING}
)
"""Intents that resolve as damage against the telegraphed cell."""


class StatusEffect(BaseModel):
    """A timed status on an actor.

    Attributes:
        type: Status kind.
        duration: Remaining turns.
        stacks: Stack count.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: StatusType = Field(description="Status kind")
    duration: int = Field(ge=0, description="Remaining turns")
    stacks: int = Field(default=1, ge=1, description="Stack count")


class SkillSlot(BaseModel):
    """An equipped skill with its cooldown and acquired upgrades.

    Attributes:
        id: Skill identifier in the registry.
        cooldown: Turns remaining until usable again.
        upgrades: Acquired upgrade ids, in acquisition order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(description="Skill identifier")
    cooldown: int = Field(default=0, ge=0, description="Remaining cooldown")
    upgrades: list[str] = Field(default_factory=list, description="Acquired upgrades")


class Actor(BaseModel):
    """A combat unit on the grid.

    Attributes:
        id: Stable identifier.
        role: Player or enemy.
        archetype: Behaviour tag.
        position: Current cell.
        previous_position: Cell at the start of the last move.
        hp: Current hit points.
        max_hp: Maximum hit points.
        statuses: Ordered status effects.
        temporary_armor: Damage absorbed before hp, reset every turn.
        skills: Equipped skills.
        intent: Telegraphed intent, if any.
        intent_position: Cell the intent will strike.
        facing: Direction index the actor faces (shield bearers).
        is_visible: False while stealthed.
        action_cooldown: Turns before the actor may act again (golems).
        fuse: Turns before detonation (bombs).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1, description="Stable identifier")
    role: ActorRole = Field(description="Actor role")
    archetype: Archetype = Field(description="Behaviour archetype")
    position: Hex = Field(description="Current cell")
    previous_position: Hex | None = Field(default=None, description="Previous cell")
    hp: int = Field(description="Current HP")
    max_hp: int = Field(ge=1, description="Maximum HP")
    statuses: list[StatusEffect] = Field(default_factory=list, description="Status effects")
    temporary_armor: int = Field(default=0, ge=0, description="Temporary armor")
    skills: list[SkillSlot] = Field(default_factory=list, description="Equipped skills")
    intent: Intent | None = Field(default=None, description="Telegraphed intent")
    intent_position: Hex | None = Field(default=None, description="Intent target cell")
    facing: int | None = Field(default=None, ge=0, le=5, description="Facing direction")
    is_visible: bool = Field(default=True, description="Visibility flag")
    action_cooldown: int = Field(default=0, ge=0, description="Action lockout")
    fuse: int | None = Field(default=None, ge=0, description="Bomb fuse")

    @model_validator(mode="before")
    @classmethod
    def clamp_hp(cls, data: object) -> object:
        """Clamp incoming hp into [0, max_hp]."""
        if isinstance(data, dict) and "hp" in data and "max_hp" in data:
            data = dict(data)
            data["hp"] = max(0, min(int(data["hp"]), int(data["max_hp"])))
        return data

    @property
    def is_player(self) -> bool:
        """Check if this actor is the player."""
        return self.role == ActorRole.PLAYER

    @property
    def is_bomb(self) -> bool:
        """Check if this actor is a planted bomb."""
        return self.archetype == Archetype.BOMB

    def has_status(self, status: StatusType) -> bool:
        """Check whether a status with remaining duration is present."""
        return any(s.type == status and s.duration > 0 for s in self.statuses)

    def get_skill(self, skill_id: str) -> SkillSlot | None:
        """Return the equipped skill with ``skill_id``, if any."""
        return next((s for s in self.skills if s.id == skill_id), None)

    def has_upgrade(self, upgrade_id: str) -> bool:
        """Check whether any equipped skill carries ``upgrade_id``."""
        return any(upgrade_id in s.upgrades for s in self.skills)

    def replace_skill(self, slot: SkillSlot) -> Actor:
        """Return a copy with the skill of the same id replaced by ``slot``."""
        skills = [slot if s.id == slot.id else s for s in self.skills]
        return self.model_copy(update={"skills": skills})

    def clear_intent(self) -> Actor:
        """Return a copy with no telegraphed intent."""
        if self.intent is None and self.intent_position is None:
            return self
        return self.model_copy(update={"intent": None, "intent_position": None})


__all__ = [
    "ActorRole",
    "Archetype",
    "StatusType",
    "Intent",
    "DAMAGING_INTENTS",
    "StatusEffect",
    "SkillSlot",
    "Actor",
]
