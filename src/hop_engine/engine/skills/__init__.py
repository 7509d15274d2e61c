"""Skill definitions.

Importing this package registers every skill with the registry.
"""

from __future__ import annotations

from hop_engine.engine.skills import (  # noqa: F401
    auto_attack,
    basic_attack,
    grapple_hook,
    jump,
    shield_bash,
    spear_throw,
)
from hop_engine.engine.skills.registry import (
    SkillDefinition,
    SkillId,
    SkillResult,
    add_upgrade,
    execute_skill,
    get_all_skills,
    get_skill,
    skill,
    skill_for_upgrade,
)


__all__ = [
    "SkillDefinition",
    "SkillId",
    "SkillResult",
    "add_upgrade",
    "execute_skill",
    "get_all_skills",
    "get_skill",
    "skill",
    "skill_for_upgrade",
]
