"""Game rule constants for the hop engine.

These values define the rules of play. They are deliberately kept out of
the settings layer: two machines replaying the same action log must agree
on every one of them.
"""

from __future__ import annotations

# =============================================================================
# Grid
# =============================================================================

GRID_WIDTH = 7
"""Number of columns (axial q extent) of an arena."""

GRID_HEIGHT = 9
"""Number of rows (axial r extent) of an arena."""

HAZARD_PERCENTAGE = 0.17
"""Share of the free arena cells turned into lava."""

WALL_PERCENTAGE = 0.10
"""Share of the free arena cells turned into walls."""

STAIRS_MIN_DISTANCE = 8
"""Minimum hex distance between the player spawn and the stairs."""

SHRINE_MIN_DISTANCE = 3
"""Minimum hex distance between the player spawn and a shrine."""

ENEMY_SPAWN_MIN_DISTANCE = 3
"""Minimum hex distance between the player spawn and any enemy spawn."""

# =============================================================================
# Player
# =============================================================================

PLAYER_ID = "player"
"""Stable id of the player actor."""

INITIAL_PLAYER_HP = 3
"""Starting hit points of a fresh run."""

INITIAL_PLAYER_MAX_HP = 3
"""Starting maximum hit points of a fresh run."""

HAZARD_PLAYER_DAMAGE = 1
"""Damage dealt to the player for ending a turn on lava."""

FLOOR_TRANSITION_HEAL = 1
"""Hit points restored when the player descends the stairs."""

# =============================================================================
# Run Structure
# =============================================================================

FINAL_FLOOR = 10
"""Floor whose stairs complete the run."""

SCORE_PER_FLOOR = 100
"""Score awarded per floor reached in a completed run."""

SHRINE_OPTION_COUNT = 3
"""Number of upgrade options a shrine offers."""

EXTRA_HP_UPGRADE = "EXTRA_HP"
"""Fallback shrine upgrade when no skill upgrade remains."""

FLOOR_ENEMY_BUDGET = [0, 2, 3, 5, 7, 10, 12, 15, 18, 22, 24]
"""Enemy point budget indexed by floor number (index 0 unused)."""

FLOOR_ENEMY_POOLS: dict[int, list[str]] = {
    1: ["footman"],
    2: ["footman", "sprinter"],
    3: ["footman", "sprinter", "archer"],
    4: ["footman", "sprinter", "archer", "bomber"],
    5: ["footman", "archer", "bomber", "shield_bearer"],
    6: ["footman", "archer", "bomber", "shield_bearer", "warlock"],
    7: ["footman", "archer", "shield_bearer", "warlock", "assassin"],
    8: ["footman", "archer", "bomber", "shield_bearer", "warlock", "assassin", "golem"],
    9: ["sprinter", "archer", "bomber", "shield_bearer", "warlock", "assassin", "golem"],
    10: ["sprinter", "archer", "bomber", "shield_bearer", "warlock", "assassin", "golem"],
}
"""Archetypes eligible to spawn on each floor."""

ENEMY_HP_SCALING_FLOORS = 5
"""Enemies gain one hit point every this many floors."""

# =============================================================================
# Enemy Behaviour
# =============================================================================

BOMB_FUSE = 2
"""Turns before a planted bomb detonates."""

BOMB_DAMAGE = 1
"""Damage dealt by a detonating bomb to each actor within one hex."""

BOMBER_PREFERRED_DISTANCE = 2.5
"""Distance a bomber tries to hold from its target."""

RANGED_MIN_DISTANCE = 2
"""Closest distance at which archers and warlocks telegraph."""

RANGED_MAX_DISTANCE = 4
"""Farthest distance at which archers and warlocks telegraph."""

WARLOCK_TELEPORT_CHANCE = 0.3
"""Chance per turn that a warlock teleports even when not threatened."""

WARLOCK_TELEPORT_MIN = 3
"""Minimum teleport distance for a warlock."""

WARLOCK_TELEPORT_MAX = 5
"""Maximum teleport distance for a warlock."""

GOLEM_ATTACK_COOLDOWN = 2
"""Turns a golem rests after a smash."""

GOLEM_ATTACK_RANGE = 3
"""Reach of a golem smash along a straight line."""

STUN_DURATION = 1
"""Default stun duration applied by skills."""

# =============================================================================
# Bookkeeping
# =============================================================================

ID_ALPHABET = "abcdefghijklmnopqrstuvwxyz0123456789"
"""Alphabet used by seeded identifier generation."""

DEFAULT_ID_LENGTH = 6
"""Length of generated actor ids."""
