"""Skill tree engine — EV accounting and prerequisite-gated unlocks."""

from __future__ import annotations

from dataclasses import replace

from pokeclick.data.skill_trees import SkillNode
from pokeclick.engine.game_state import UnitState


def spent_ev(unit: UnitState, tree: tuple[SkillNode, ...]) -> int:
    """EV already sunk into unlocked skills."""
    return sum(node.cost for node in tree if node.id in unit.unlocked_skills)


def remaining_ev(unit: UnitState, tree: tuple[SkillNode, ...]) -> int:
    return unit.experience_value - spent_ev(unit, tree)


def unlock_blocker(skill: SkillNode, unit: UnitState, tree: tuple[SkillNode, ...]) -> str | None:
    """Why `skill` can't be unlocked right now, or None if it can."""
    if skill.id in unit.unlocked_skills:
        return "already_unlocked"
    if any(p not in unit.unlocked_skills for p in skill.prerequisites):
        return "missing_prerequisites"
    if remaining_ev(unit, tree) < skill.cost:
        return "not_enough_ev"
    return None


def can_unlock(skill: SkillNode, unit: UnitState, tree: tuple[SkillNode, ...]) -> bool:
    return unlock_blocker(skill, unit, tree) is None


def unlock(skill: SkillNode, unit: UnitState, tree: tuple[SkillNode, ...]) -> UnitState:
    """Unlock `skill` on `unit`.

    The checks run again here since the caller may be acting on a stale
    view; an invalid unlock returns `unit` itself, untouched.
    """
    if not can_unlock(skill, unit, tree):
        return unit
    return replace(unit, unlocked_skills=unit.unlocked_skills | {skill.id})
