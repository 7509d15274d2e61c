"""Counter-indexed seeded draw source.

There is no generator object. Each value is a pure function of
``(seed, counter)``: the string ``"{seed}:{counter}"`` is hashed with
32-bit FNV-1a and the hash seeds a single Mulberry32 step. The counter is
stored on the world state, so serializing a state captures the random
stream exactly.

Example:
    >>> draw_value("test-seed", 0) == draw_value("test-seed", 0)
    True
"""

from __future__ import annotations

import math
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field

from hop_engine.core.config import get_settings
from hop_engine.core.constants import DEFAULT_ID_LENGTH, ID_ALPHABET
from hop_engine.models.state import WorldState


_MASK = 0xFFFFFFFF
_FNV_OFFSET = 2166136261
_FNV_PRIME = 16777619


class DrawCursor(BaseModel):
    """A detached position in a draw stream.

    Used where no world state exists yet, such as arena generation. It
    carries the same seed and counter fields as WorldState, so every draw
    helper accepts either.

    Attributes:
        rng_seed: Seed of the stream.
        initial_seed: Overriding seed, empty when unused.
        rng_counter: Next position in the stream.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    rng_seed: str = Field(default="", description="Stream seed")
    initial_seed: str = Field(default="", description="Overriding seed")
    rng_counter: int = Field(default=0, ge=0, description="Stream position")


S = TypeVar("S", WorldState, DrawCursor)


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK


def hash_seed(text: str) -> int:
    """Hash ``text`` to an unsigned 32-bit integer with FNV-1a.

    Characters are consumed as UTF-16 code units.
    """
    h = _FNV_OFFSET
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = _imul(h, _FNV_PRIME)
    return h


def mulberry32(seed: int) -> float:
    """Return the first Mulberry32 output for ``seed`` in [0, 1)."""
    a = ((seed & _MASK) + 0x6D2B79F5) & _MASK
    t = _imul(a ^ (a >> 15), a | 1)
    t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK
    return ((t ^ (t >> 14)) & _MASK) / 4294967296


def draw_value(seed: str, counter: int) -> float:
    """Return the value at position ``counter`` of the stream for ``seed``."""
    return mulberry32(hash_seed(f"{seed}:{counter}") or 1)


def stream_seed(state: WorldState | DrawCursor) -> str:
    """Return the seed a state draws from.

    The run's initial seed wins so that the stream continues across floors;
    an empty seed falls back to the configured default.
    """
    return state.initial_seed or state.rng_seed or get_settings().engine.default_seed


def draw(state: S) -> tuple[float, S]:
    """Consume one value from the state's stream.

    Returns:
        Tuple of (value in [0, 1), state with the counter advanced by one).
    """
    value = draw_value(stream_seed(state), state.rng_counter)
    return value, state.model_copy(update={"rng_counter": state.rng_counter + 1})


def draw_index(state: S, size: int) -> tuple[int, S]:
    """Draw an index in ``range(size)``.

    Args:
        state: State to draw from.
        size: Number of choices, at least one.

    Returns:
        Tuple of (index, advanced state).
    """
    value, state = draw(state)
    return min(math.floor(value * size), size - 1), state


def shuffle(state: S, items: list) -> tuple[list, S]:
    """Fisher-Yates shuffle driven by the draw source.

    Returns:
        Tuple of (new shuffled list, advanced state).
    """
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j, state = draw_index(state, i + 1)
        result[i], result[j] = result[j], result[i]
    return result, state


def draw_id(state: S, length: int = DEFAULT_ID_LENGTH) -> tuple[str, S]:
    """Compose ``length`` draws into an identifier over a fixed alphabet.

    Returns:
        Tuple of (identifier, state advanced by ``length`` draws).
    """
    chars = []
    for _ in range(length):
        value, state = draw(state)
        chars.append(ID_ALPHABET[math.floor(value * len(ID_ALPHABET)) % len(ID_ALPHABET)])
    return "".join(chars), state


__all__ = [
    "DrawCursor",
    "hash_seed",
    "mulberry32",
    "draw_value",
    "stream_seed",
    "draw",
    "draw_index",
    "shuffle",
    "draw_id",
]
