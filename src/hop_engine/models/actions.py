"""Player action vocabulary.

Actions are the only way to change a world state. Turn actions and
upgrade selection are appended to the action log and can be replayed;
``reset``, ``load_state`` and ``undo`` replace the state wholesale and are
never logged.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from hop_engine.models.hex import Hex


class MoveAction(BaseModel):
    """Step to an adjacent cell, attacking if an enemy stands there."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["move"] = "move"
    target: Hex


class JumpAction(BaseModel):
    """Shortcut for using the JUMP skill on ``target``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["jump"] = "jump"
    target: Hex


class UseSkillAction(BaseModel):
    """Use an equipped skill, optionally on a target cell."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["use_skill"] = "use_skill"
    skill_id: str
    target: Hex | None = None


class ThrowAction(BaseModel):
    """Legacy alias for using SPEAR_THROW on ``target``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["throw"] = "throw"
    target: Hex


class WaitAction(BaseModel):
    """Pass the turn."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["wait"] = "wait"


class SelectUpgradeAction(BaseModel):
    """Pick one of the options offered by a shrine."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["select_upgrade"] = "select_upgrade"
    upgrade_id: str


class ResetAction(BaseModel):
    """Start a fresh run, keeping the current seed unless one is given."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["reset"] = "reset"
    seed: str | None = None


class LoadStateAction(BaseModel):
    """Replace the state with a serialized snapshot.

    The payload is validated by the reducer; a malformed snapshot is
    rejected with a message rather than raised.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["load_state"] = "load_state"
    state: dict[str, Any]


class UndoAction(BaseModel):
    """Restore the most recent snapshot in the undo history."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: Literal["undo"] = "undo"


LoggedAction = Annotated[
    Union[MoveAction, JumpAction, UseSkillAction, ThrowAction, WaitAction, SelectUpgradeAction],
    Field(discriminator="type"),
]
"""Actions recorded in the action log."""

Action = Annotated[
    Union[
        MoveAction,
        JumpAction,
        UseSkillAction,
        ThrowAction,
        WaitAction,
        SelectUpgradeAction,
        ResetAction,
        LoadStateAction,
        UndoAction,
    ],
    Field(discriminator="type"),
]
"""Every action the reducer accepts."""

TURN_ACTION_TYPES = frozenset({"move", "jump", "use_skill", "throw", "wait"})
"""Action types that are only accepted while the run is playing."""

action_adapter: TypeAdapter[Any] = TypeAdapter(Action)
"""Validator for raw action payloads."""


__all__ = [
    "MoveAction",
    "JumpAction",
    "UseSkillAction",
    "ThrowAction",
    "WaitAction",
    "SelectUpgradeAction",
    "ResetAction",
    "LoadStateAction",
    "UndoAction",
    "LoggedAction",
    "Action",
    "TURN_ACTION_TYPES",
    "action_adapter",
]
