"""Pydantic models for TechRec role-skill matching data structures."""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from .taxonomy import normalize

MAX_BATCH_SIZE = 100


class SkillLevel(str, Enum):
    """Ordinal proficiency of a user's skill."""

    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"

    @property
    def ordinal(self) -> int:
        return _LEVEL_ORDER.index(self)

    @property
    def is_high_level(self) -> bool:
        return self in (SkillLevel.ADVANCED, SkillLevel.EXPERT)


_LEVEL_ORDER = [SkillLevel.BEGINNER, SkillLevel.INTERMEDIATE, SkillLevel.ADVANCED, SkillLevel.EXPERT]


class SkillSource(str, Enum):
    """Provenance of a role's skill list, most trusted first."""

    AI_KEY_SKILLS = "AI_KEY_SKILLS"
    ROLE_SKILLS = "ROLE_SKILLS"
    LINKEDIN_SPECIALTIES = "LINKEDIN_SPECIALTIES"
    DESCRIPTION_DERIVED = "DESCRIPTION_DERIVED"

    @property
    def priority(self) -> int:
        """0 for the most trusted source."""
        return SKILL_SOURCE_PRIORITY.index(self)


SKILL_SOURCE_PRIORITY: tuple[SkillSource, ...] = (
    SkillSource.AI_KEY_SKILLS,
    SkillSource.ROLE_SKILLS,
    SkillSource.LINKEDIN_SPECIALTIES,
    SkillSource.DESCRIPTION_DERIVED,
)


class MatchErrorCode(str, Enum):
    ROLE_NOT_FOUND = "ROLE_NOT_FOUND"
    NO_SKILLS_DATA = "NO_SKILLS_DATA"
    INVALID_USER_PROFILE = "INVALID_USER_PROFILE"
    PROCESSING_ERROR = "PROCESSING_ERROR"


class InvalidUserProfileError(ValueError):
    """Raised before any per-role work when the user's skill profile is unusable."""

    code = MatchErrorCode.INVALID_USER_PROFILE


# ---------------------------------------------------------------------------
# User side
# ---------------------------------------------------------------------------


class UserSkill(BaseModel):
    """A single skill from the user's inventory."""

    name: str = Field(description="Skill name as entered or extracted from the CV")
    level: SkillLevel = Field(default=SkillLevel.INTERMEDIATE, description="Self-assessed proficiency")
    category_id: str | None = Field(default=None, description="Skill category in the profile store")

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("skill name must not be blank")
        return value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def normalized(self) -> str:
        """Comparable token, always ``normalize(name)``."""
        return normalize(self.name)


class UserSkillProfile(BaseModel):
    """Snapshot of one user's skill inventory."""

    user_id: str
    skills: list[UserSkill] = Field(default_factory=list)
    last_updated: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_skill_names(
        cls, user_id: str, skills: list[tuple[str, SkillLevel | str]] | list[str]
    ) -> UserSkillProfile:
        """Build a profile from bare names or ``(name, level)`` pairs."""
        entries = []
        for item in skills:
            if isinstance(item, str):
                entries.append(UserSkill(name=item))
            else:
                name, level = item
                entries.append(UserSkill(name=name, level=SkillLevel(level)))
        return cls(user_id=user_id, skills=entries)

    def snapshot(self) -> list[UserSkill]:
        """Deep copy of the skill list, safe to hold for the length of a batch."""
        return copy.deepcopy(self.skills)


# ---------------------------------------------------------------------------
# Role side
# ---------------------------------------------------------------------------


class RoleSkillSource(BaseModel):
    """One tagged skill list attached to a role."""

    tag: SkillSource
    skills: list[str] = Field(default_factory=list)

    @field_validator("skills", mode="before")
    @classmethod
    def _accept_named_objects(cls, value: Any) -> Any:
        # Role-skill records arrive either as plain names or as {"name": ...} objects.
        if not isinstance(value, list):
            return value
        names = []
        for item in value:
            if isinstance(item, str):
                names.append(item)
            elif isinstance(item, dict) and isinstance(item.get("name"), str):
                names.append(item["name"])
            elif isinstance(getattr(item, "name", None), str):
                names.append(item.name)
        return names


class Company(BaseModel):
    name: str = ""
    specialties: list[str] = Field(default_factory=list, description="LinkedIn organisation specialties")


class Role(BaseModel):
    """A job posting as seen by the matching engine."""

    id: str
    title: str = ""
    company: Company | None = None
    description: str = ""
    posted_at: datetime | None = Field(default=None, description="When the role was published, if known")
    skill_sources: list[RoleSkillSource] = Field(default_factory=list)

    @classmethod
    def from_sources(
        cls,
        id: str,  # noqa: A002
        title: str = "",
        *,
        ai_key_skills: list[str] | None = None,
        skills: list[Any] | None = None,
        linkedin_specialties: list[str] | None = None,
        company: Company | None = None,
        description: str = "",
        posted_at: datetime | None = None,
    ) -> Role:
        """Build a role from the loosely-typed source fields ingestion produces.

        ``linkedin_specialties`` falls back to ``company.specialties``.
        """
        if linkedin_specialties is None and company is not None:
            linkedin_specialties = company.specialties
        sources = []
        for tag, values in (
            (SkillSource.AI_KEY_SKILLS, ai_key_skills),
            (SkillSource.ROLE_SKILLS, skills),
            (SkillSource.LINKEDIN_SPECIALTIES, linkedin_specialties),
        ):
            if values:
                sources.append(RoleSkillSource(tag=tag, skills=values))
        return cls(
            id=id,
            title=title,
            company=company,
            description=description,
            posted_at=posted_at,
            skill_sources=sources,
        )

    def skills_for(self, tag: SkillSource) -> list[str]:
        """All skill names listed under *tag*, in source order."""
        names: list[str] = []
        for source in self.skill_sources:
            if source.tag == tag:
                names.extend(source.skills)
        return names


# ---------------------------------------------------------------------------
# Matching results
# ---------------------------------------------------------------------------


class MatchingConfig(BaseModel):
    """Tunable weights for the matching engine. Passed explicitly, never mutated."""

    model_config = ConfigDict(frozen=True)

    skills_weight: float = Field(default=1.0, ge=0, le=1, description="Weight of the skills factor")
    minimum_confidence: float = Field(default=0.7, ge=0, le=1)
    fuzzy_match_threshold: float = Field(default=0.8, ge=0, le=1)
    minimum_score_threshold: float = Field(default=0, ge=0, le=100)
    bonus_for_high_level_skills: float = Field(default=1.2, ge=0)
    no_skills_as_error: bool = Field(
        default=False, description="Report roles without any skill list as NO_SKILLS_DATA errors"
    )
    derive_skills_from_description: bool = Field(
        default=True, description="Fall back to skills extracted from the role description"
    )


DEFAULT_MATCHING_CONFIG = MatchingConfig()


class SkillMatch(BaseModel):
    """Comparison result for one role skill."""

    skill_name: str = Field(description="Role skill as listed by the role")
    user_level: SkillLevel | None = Field(default=None, description="Level of the matching user skill")
    matched: bool
    source: SkillSource
    confidence: float = Field(ge=0, le=1)
    matched_user_skill: str | None = Field(default=None, description="User skill name that satisfied the match")


class ScoreBreakdown(BaseModel):
    skills_score: float = Field(ge=0, le=100)


class RoleMatchScore(BaseModel):
    """Scoring output for one (user, role) pair."""

    role_id: str
    overall_score: float = Field(ge=0, le=100)
    skills_matched: int = Field(ge=0)
    total_skills: int = Field(ge=0)
    matched_skills: list[SkillMatch] = Field(default_factory=list)
    has_skills_listed: bool
    breakdown: ScoreBreakdown
    source: SkillSource | None = Field(default=None, description="Skill source the score was computed from")

    @model_validator(mode="after")
    def _check_counts(self) -> RoleMatchScore:
        if self.skills_matched > self.total_skills:
            raise ValueError("skills_matched cannot exceed total_skills")
        return self


class MatchError(BaseModel):
    role_id: str
    error: str
    code: MatchErrorCode


class BatchMatchRequest(BaseModel):
    user_id: str
    role_ids: list[str] = Field(default_factory=list, max_length=MAX_BATCH_SIZE)
    user_skills: list[UserSkill] = Field(default_factory=list)


class BatchMatchResponse(BaseModel):
    user_id: str
    role_scores: list[RoleMatchScore] = Field(default_factory=list)
    total_processed: int = 0
    processing_time: float = Field(default=0.0, description="Wall-clock seconds for the whole batch")
    errors: list[MatchError] = Field(default_factory=list)

    def scores_by_role(self) -> dict[str, RoleMatchScore]:
        return {score.role_id: score for score in self.role_scores}


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------

SortBy = Literal["match", "date", "title", "company"]
SortDirection = Literal["asc", "desc"]


class MatchFilterOptions(BaseModel):
    """Filter and sort settings chosen in the role list."""

    min_score: float = Field(default=0, ge=0, le=100)
    max_score: float = Field(default=100, ge=0, le=100)
    require_skills_listed: bool = False
    sort_by: SortBy = "match"
    sort_direction: SortDirection = "desc"
    show_only_matches: bool = Field(default=False, description="Only show roles with skills listed")

    @model_validator(mode="after")
    def _check_range(self) -> MatchFilterOptions:
        if self.min_score > self.max_score:
            raise ValueError("min_score must not exceed max_score")
        return self


class MatchingStatistics(BaseModel):
    total_roles: int = 0
    roles_with_skills: int = 0
    roles_without_skills: int = 0
    average_score: int = 0
    high_score_roles: int = Field(default=0, description="Score above 70")
    medium_score_roles: int = Field(default=0, description="Score between 40 and 70")
    low_score_roles: int = Field(default=0, description="Score below 40")


class FilteringStats(BaseModel):
    total: int = 0
    filtered: int = 0
    with_skills: int = 0
    with_scores: int = 0
    average_score: int = 0
