"""Skill Matcher - picks a role's skill list and pairs it against the user's skills."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from .description_skills import extract_skills_from_description
from .models import (
    DEFAULT_MATCHING_CONFIG,
    SKILL_SOURCE_PRIORITY,
    MatchingConfig,
    Role,
    SkillMatch,
    SkillSource,
    UserSkill,
)
from .taxonomy import clean_skill_name, is_valid_skill_name, normalize, similarity

logger = logging.getLogger(__name__)


class RoleSkillSelection(BaseModel):
    """The skill list a role contributes to scoring."""

    skills: list[str] = Field(default_factory=list)
    source: SkillSource | None = None
    has_skills_listed: bool = False


def _usable_skills(names: list[str]) -> list[str]:
    """Drop invalid names, clean the rest, de-duplicate by normalized token."""
    seen: set[str] = set()
    result: list[str] = []
    for name in names:
        if not isinstance(name, str) or not is_valid_skill_name(name):
            continue
        cleaned = clean_skill_name(name)
        token = normalize(cleaned)
        if not token or token in seen:
            continue
        seen.add(token)
        result.append(cleaned)
    return result


def extract_role_skills(role: Role, config: MatchingConfig = DEFAULT_MATCHING_CONFIG) -> RoleSkillSelection:
    """Return the first non-empty skill list in source priority order.

    An explicitly attached ``DESCRIPTION_DERIVED`` list takes precedence over
    deriving one from ``role.description``; derivation only happens when
    ``config.derive_skills_from_description`` is set.
    """
    for tag in SKILL_SOURCE_PRIORITY:
        names = role.skills_for(tag)
        if not names and tag == SkillSource.DESCRIPTION_DERIVED and config.derive_skills_from_description:
            names = extract_skills_from_description(role.description)
        skills = _usable_skills(names)
        if skills:
            logger.debug("Role %s: %d skills from %s", role.id, len(skills), tag.value)
            return RoleSkillSelection(skills=skills, source=tag, has_skills_listed=True)

    logger.debug("Role %s: no skills listed in any source", role.id)
    return RoleSkillSelection()


def _pick_best(candidates: list[tuple[float, int, UserSkill]]) -> tuple[float, UserSkill] | None:
    """Highest score, then highest level, then earliest position."""
    if not candidates:
        return None
    score, _, skill = min(candidates, key=lambda c: (-c[0], -c[2].level.ordinal, c[1]))
    return score, skill


def match_skills(
    user_skills: list[UserSkill],
    role_skill_names: list[str],
    source: SkillSource,
    config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> list[SkillMatch]:
    """
    Compare the user's skills against each role skill.

    Args:
        user_skills: The user's skill inventory.
        role_skill_names: Skills listed by the role.
        source: Where the role's skill list came from.
        config: Matching thresholds.

    Returns:
        Exactly one ``SkillMatch`` per entry of *role_skill_names*, in order.
    """
    threshold = max(config.fuzzy_match_threshold, config.minimum_confidence)
    user_tokens = [us.normalized for us in user_skills]
    matches: list[SkillMatch] = []

    for role_skill in role_skill_names:
        token = normalize(role_skill)

        exact = [(1.0, i, us) for i, us in enumerate(user_skills) if token and user_tokens[i] == token]
        best = _pick_best(exact)
        if best is None and token:
            fuzzy = []
            for i, us in enumerate(user_skills):
                score = similarity(user_tokens[i], token)
                if score >= threshold:
                    fuzzy.append((score, i, us))
            best = _pick_best(fuzzy)

        if best is None:
            matches.append(SkillMatch(skill_name=role_skill, matched=False, source=source, confidence=0.0))
            continue

        confidence, user_skill = best
        matches.append(
            SkillMatch(
                skill_name=role_skill,
                user_level=user_skill.level,
                matched=True,
                source=source,
                confidence=confidence,
                matched_user_skill=user_skill.name,
            )
        )

    return matches
