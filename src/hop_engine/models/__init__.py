"""Pydantic models for hexes, actors, effects, actions and world state."""

from __future__ import annotations

from hop_engine.models.actions import (
    Action,
    JumpAction,
    LoadStateAction,
    LoggedAction,
    MoveAction,
    ResetAction,
    SelectUpgradeAction,
    ThrowAction,
    UndoAction,
    UseSkillAction,
    WaitAction,
)
from hop_engine.models.actors import (
    Actor,
    ActorRole,
    Archetype,
    Intent,
    SkillSlot,
    StatusEffect,
    StatusType,
)
from hop_engine.models.effects import (
    ApplyStatus,
    Damage,
    Displacement,
    Effect,
    EffectContext,
    ItemKind,
    Juice,
    Message,
    ModifyCooldown,
    SpawnItem,
)
from hop_engine.models.hex import Hex
from hop_engine.models.state import CompletedRun, GameStatus, WorldState


__all__ = [
    # Geometry
    "Hex",
    # Actors
    "Actor",
    "ActorRole",
    "Archetype",
    "Intent",
    "SkillSlot",
    "StatusEffect",
    "StatusType",
    # Effects
    "ApplyStatus",
    "Damage",
    "Displacement",
    "Effect",
    "EffectContext",
    "ItemKind",
    "Juice",
    "Message",
    "ModifyCooldown",
    "SpawnItem",
    # Actions
    "Action",
    "LoggedAction",
    "MoveAction",
    "JumpAction",
    "UseSkillAction",
    "ThrowAction",
    "WaitAction",
    "SelectUpgradeAction",
    "ResetAction",
    "LoadStateAction",
    "UndoAction",
    # State
    "CompletedRun",
    "GameStatus",
    "WorldState",
]
