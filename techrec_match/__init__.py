"""TechRec role-skill matching engine."""

from .batch import score_batch, score_roles
from .filtering import apply_match_filters, get_filtering_stats
from .matcher import extract_role_skills, match_skills
from .models import (
    DEFAULT_MATCHING_CONFIG,
    BatchMatchRequest,
    BatchMatchResponse,
    Company,
    InvalidUserProfileError,
    MatchError,
    MatchErrorCode,
    MatchFilterOptions,
    MatchingConfig,
    Role,
    RoleMatchScore,
    RoleSkillSource,
    SkillLevel,
    SkillMatch,
    SkillSource,
    UserSkill,
    UserSkillProfile,
)
from .role_resolver import CombinedRoleResolver, InMemoryRoleResolver, RoleResolver
from .scoring import calculate_role_match_score, calculate_score
from .taxonomy import normalize

__all__ = [
    "DEFAULT_MATCHING_CONFIG",
    "BatchMatchRequest",
    "BatchMatchResponse",
    "CombinedRoleResolver",
    "Company",
    "InMemoryRoleResolver",
    "InvalidUserProfileError",
    "MatchError",
    "MatchErrorCode",
    "MatchFilterOptions",
    "MatchingConfig",
    "Role",
    "RoleMatchScore",
    "RoleResolver",
    "RoleSkillSource",
    "SkillLevel",
    "SkillMatch",
    "SkillSource",
    "UserSkill",
    "UserSkillProfile",
    "apply_match_filters",
    "calculate_role_match_score",
    "calculate_score",
    "extract_role_skills",
    "get_filtering_stats",
    "match_skills",
    "normalize",
    "score_batch",
    "score_roles",
]
