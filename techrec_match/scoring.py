"""Score Calculator - turns per-skill matches into a 0-100 role score."""

from __future__ import annotations

import math
from enum import Enum

from pydantic import BaseModel

from .matcher import extract_role_skills, match_skills
from .models import (
    DEFAULT_MATCHING_CONFIG,
    MatchingConfig,
    MatchingStatistics,
    Role,
    RoleMatchScore,
    ScoreBreakdown,
    SkillLevel,
    SkillMatch,
    SkillSource,
    UserSkill,
)


class ScoreResult(BaseModel):
    overall_score: float
    breakdown: ScoreBreakdown
    has_skills_listed: bool
    skills_matched: int
    total_skills: int


class MatchTier(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    LIMITED = "limited"

    @property
    def label(self) -> str:
        return _TIER_LABELS[self]


_TIER_LABELS = {
    MatchTier.EXCELLENT: "Excellent fit!",
    MatchTier.GOOD: "Good potential match",
    MatchTier.LIMITED: "Limited match",
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def get_skill_level_multiplier(level: SkillLevel | None, config: MatchingConfig = DEFAULT_MATCHING_CONFIG) -> float:
    """Unit contribution of one matched skill at *level*."""
    if level is not None and level.is_high_level:
        return config.bonus_for_high_level_skills
    return 1.0


def calculate_score(matches: list[SkillMatch], config: MatchingConfig = DEFAULT_MATCHING_CONFIG) -> ScoreResult:
    """
    Aggregate skill matches into a single percentage.

    Each matched skill counts 1.0 toward the numerator, or
    ``bonus_for_high_level_skills`` for ADVANCED/EXPERT users. The result is
    clamped to [0, 100]. With no role skills the score is 0 and
    ``has_skills_listed`` is False; callers must not compare it with real scores.
    """
    total = len(matches)
    matched = [m for m in matches if m.matched]
    if total == 0:
        return ScoreResult(
            overall_score=0,
            breakdown=ScoreBreakdown(skills_score=0),
            has_skills_listed=False,
            skills_matched=0,
            total_skills=0,
        )

    numerator = sum(get_skill_level_multiplier(m.user_level, config) for m in matched)
    percentage = min(100.0, max(0.0, numerator / total * 100))
    skills_score = _round_half_up(min(100.0, percentage * config.skills_weight))

    return ScoreResult(
        overall_score=skills_score,
        breakdown=ScoreBreakdown(skills_score=skills_score),
        has_skills_listed=True,
        skills_matched=len(matched),
        total_skills=total,
    )


def calculate_role_match_score(
    user_skills: list[UserSkill],
    role: Role,
    config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> RoleMatchScore:
    """Score one role against the user's skills."""
    selection = extract_role_skills(role, config)
    source = selection.source or SkillSource.AI_KEY_SKILLS
    matches = match_skills(user_skills, selection.skills, source, config)
    result = calculate_score(matches, config)

    return RoleMatchScore(
        role_id=role.id,
        overall_score=result.overall_score,
        skills_matched=result.skills_matched,
        total_skills=result.total_skills,
        matched_skills=matches,
        has_skills_listed=result.has_skills_listed,
        breakdown=result.breakdown,
        source=selection.source,
    )


def sort_role_scores(scores: list[RoleMatchScore]) -> list[RoleMatchScore]:
    """Best first: overall score, then skills matched, then roles with skills listed."""
    return sorted(scores, key=lambda s: (-s.overall_score, -s.skills_matched, not s.has_skills_listed))


def filter_scores_by_min_score(
    scores: list[RoleMatchScore],
    min_score: float | None = None,
    config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> list[RoleMatchScore]:
    """Keep scores at or above *min_score* (default ``config.minimum_score_threshold``)."""
    threshold = config.minimum_score_threshold if min_score is None else min_score
    return [s for s in scores if s.overall_score >= threshold]


def get_matching_statistics(scores: list[RoleMatchScore]) -> MatchingStatistics:
    """Summary counters; averages and score bands only consider roles with skills listed."""
    with_skills = [s for s in scores if s.has_skills_listed]
    average = sum(s.overall_score for s in with_skills) / len(with_skills) if with_skills else 0

    return MatchingStatistics(
        total_roles=len(scores),
        roles_with_skills=len(with_skills),
        roles_without_skills=len(scores) - len(with_skills),
        average_score=_round_half_up(average),
        high_score_roles=sum(1 for s in with_skills if s.overall_score > 70),
        medium_score_roles=sum(1 for s in with_skills if 40 <= s.overall_score <= 70),
        low_score_roles=sum(1 for s in with_skills if s.overall_score < 40),
    )


def score_tier(score: float) -> MatchTier:
    if score >= 70:
        return MatchTier.EXCELLENT
    if score >= 40:
        return MatchTier.GOOD
    return MatchTier.LIMITED
