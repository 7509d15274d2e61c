"""AUTO_ATTACK: passive strike against opponents that stay adjacent.

Only opponents adjacent to the actor both at the start of the turn and at
the end of its movement are hit. ``previous_position`` on every actor
holds its turn-start cell while the turn resolves.
"""

from __future__ import annotations

from hop_engine.engine.skills.registry import SkillId, SkillResult, skill
from hop_engine.models.actors import Actor
from hop_engine.models.effects import Damage, Juice
from hop_engine.models.hex import Hex, hex_distance
from hop_engine.models.state import WorldState


def _opponents(state: WorldState, actor: Actor) -> list[Actor]:
    if actor.is_player:
        return [e for e in state.enemies if not e.is_bomb]
    return [state.player]


def persisted_adjacent(state: WorldState, actor: Actor) -> list[Actor]:
    """Return opponents adjacent to ``actor`` before and after its move."""
    start = actor.previous_position or actor.position
    hits = []
    for other in _opponents(state, actor):
        other_start = other.previous_position or other.position
        was_adjacent = hex_distance(start, other_start) == 1
        is_adjacent = hex_distance(actor.position, other.position) == 1
        if was_adjacent and is_adjacent:
            hits.append(other)
    return hits


@skill(
    skill_id=SkillId.AUTO_ATTACK,
    name="Auto Attack",
    description="Passively strike opponents that stay adjacent through a move.",
    range=1,
    upgrades=("HEAVY_HANDS", "CLEAVE"),
    passive=True,
)
def auto_attack(
    state: WorldState,
    actor: Actor,
    target: Hex | None,
    active_upgrades: frozenset[str],
) -> SkillResult:
    victims = persisted_adjacent(state, actor)
    if not victims:
        return SkillResult(effects=[], consumes_turn=False)
    if "CLEAVE" in active_upgrades:
        victims = [
            o for o in _opponents(state, actor) if hex_distance(actor.position, o.position) == 1
        ]
    amount = 2 if "HEAVY_HANDS" in active_upgrades else 1
    effects = []
    for victim in victims:
        effects.append(
            Damage(
                target=victim.position,
                amount=amount,
                source=actor.position,
                reason="auto_attack",
            )
        )
        effects.append(Juice(hint="slash", target=victim.position))
    return SkillResult(effects=effects, consumes_turn=False)
