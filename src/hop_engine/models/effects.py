"""Declarative effects emitted by skills and folded by the interpreter.

Skills never touch state directly. They return a list of these effects,
which :func:`hop_engine.engine.interpreter.apply_effects` applies strictly
left to right.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from hop_engine.models.actors import StatusType
from hop_engine.models.hex import Hex


ActorRef = Literal["self", "target_actor"]
"""Symbolic references resolved against an EffectContext."""

EffectTarget = Union[ActorRef, Hex]
"""An effect addresses either a symbolic actor or whoever stands on a cell."""


class ItemKind(StrEnum):
    """Things that can be spawned onto the grid."""

    SPEAR = "spear"
    BOMB = "bomb"


class EffectContext(BaseModel):
    """Resolution context for symbolic effect targets.

    Attributes:
        source_id: Actor whose skill produced the effects ("self").
        target_id: Actor the skill was aimed at ("target_actor").
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_id: str
    target_id: str | None = None


class Displacement(BaseModel):
    """Move an actor to ``destination``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["displacement"] = "displacement"
    target: EffectTarget
    destination: Hex


class Damage(BaseModel):
    """Deal ``amount`` damage.

    ``source`` is the cell the blow comes from; shield bearers use it to
    decide whether the hit lands on their shield.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["damage"] = "damage"
    target: EffectTarget
    amount: int = Field(ge=0)
    source: Hex | None = None
    reason: str = ""


class ApplyStatus(BaseModel):
    """Apply a timed status."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["apply_status"] = "apply_status"
    target: EffectTarget
    status: StatusType
    duration: int = Field(ge=1)


class SpawnItem(BaseModel):
    """Place an item (dropped spear, fused bomb) on a cell."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["spawn_item"] = "spawn_item"
    item: ItemKind
    position: Hex


class Message(BaseModel):
    """Append a line to the message log."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["message"] = "message"
    text: str


class Juice(BaseModel):
    """Presentation-only hint. The engine records it and never reads it."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["juice"] = "juice"
    hint: str
    target: Hex | None = None
    intensity: float = 1.0


class ModifyCooldown(BaseModel):
    """Adjust the source actor's cooldown on ``skill_id``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["modify_cooldown"] = "modify_cooldown"
    skill_id: str
    amount: int = 0
    set_exact: int | None = Field(default=None, ge=0)


Effect = Annotated[
    Union[Displacement, Damage, ApplyStatus, SpawnItem, Message, Juice, ModifyCooldown],
    Field(discriminator="type"),
]


__all__ = [
    "ActorRef",
    "EffectTarget",
    "ItemKind",
    "EffectContext",
    "Displacement",
    "Damage",
    "ApplyStatus",
    "SpawnItem",
    "Message",
    "Juice",
    "ModifyCooldown",
    "Effect",
]
