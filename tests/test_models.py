"""Tests for techrec_match.models - Pydantic model validation."""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from freezegun import freeze_time
from pydantic import ValidationError

from techrec_match.models import (
    DEFAULT_MATCHING_CONFIG,
    BatchMatchResponse,
    Company,
    InvalidUserProfileError,
    MatchErrorCode,
    MatchFilterOptions,
    MatchingConfig,
    Role,
    RoleMatchScore,
    RoleSkillSource,
    ScoreBreakdown,
    SkillLevel,
    SkillMatch,
    SkillSource,
    UserSkill,
    UserSkillProfile,
)


class TestSkillLevel:
    def test_ordering(self):
        ordinals = [level.ordinal for level in SkillLevel]
        assert ordinals == [0, 1, 2, 3]

    def test_high_level(self):
        assert SkillLevel.ADVANCED.is_high_level
        assert SkillLevel.EXPERT.is_high_level
        assert not SkillLevel.INTERMEDIATE.is_high_level

    def test_from_string(self):
        assert UserSkill(name="Go", level="EXPERT").level == SkillLevel.EXPERT

    def test_unknown_level_rejected(self):
        with pytest.raises(ValidationError):
            UserSkill(name="Go", level="GURU")


class TestSkillSource:
    def test_priority(self):
        assert SkillSource.AI_KEY_SKILLS.priority == 0
        assert SkillSource.DESCRIPTION_DERIVED.priority == 3


class TestUserSkill:
    def test_defaults(self):
        skill = UserSkill(name="Python")
        assert skill.level == SkillLevel.INTERMEDIATE
        assert skill.category_id is None

    def test_normalized_is_derived(self):
        assert UserSkill(name="ReactJS").normalized == UserSkill(name="React").normalized

    def test_normalized_cannot_be_supplied(self):
        skill = UserSkill(name="Python", normalized="java")
        assert skill.normalized == "python"

    def test_normalized_in_dump(self):
        assert UserSkill(name=" K8s ").model_dump()["normalized"] == "kubernetes"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_rejected(self, name: str):
        with pytest.raises(ValidationError):
            UserSkill(name=name)


class TestUserSkillProfile:
    @freeze_time("2026-02-20")
    def test_last_updated_default(self):
        profile = UserSkillProfile(user_id="dev-1")
        assert profile.last_updated == datetime(2026, 2, 20, tzinfo=timezone.utc)
        assert profile.skills == []

    def test_from_skill_names(self):
        profile = UserSkillProfile.from_skill_names("dev-1", [("Python", "EXPERT"), ("Docker", SkillLevel.BEGINNER)])
        assert [(s.name, s.level) for s in profile.skills] == [
            ("Python", SkillLevel.EXPERT),
            ("Docker", SkillLevel.BEGINNER),
        ]

    def test_from_bare_names(self):
        profile = UserSkillProfile.from_skill_names("dev-1", ["Python", "Go"])
        assert all(s.level == SkillLevel.INTERMEDIATE for s in profile.skills)

    def test_snapshot_is_independent(self, sample_profile):
        snapshot = sample_profile.snapshot()
        sample_profile.skills.clear()
        snapshot[0].name = "Changed"
        assert len(snapshot) == 4
        assert sample_profile.skills == []


class TestRole:
    def test_from_sources(self):
        role = Role.from_sources(
            "r1",
            "Dev",
            ai_key_skills=["React"],
            skills=[{"name": "Python"}, SimpleNamespace(name="Docker"), "Go"],
            linkedin_specialties=["SaaS"],
        )
        assert [s.tag for s in role.skill_sources] == [
            SkillSource.AI_KEY_SKILLS,
            SkillSource.ROLE_SKILLS,
            SkillSource.LINKEDIN_SPECIALTIES,
        ]
        assert role.skills_for(SkillSource.ROLE_SKILLS) == ["Python", "Docker", "Go"]

    def test_company_specialties_fallback(self):
        role = Role.from_sources("r1", company=Company(name="Acme", specialties=["Cloud"]))
        assert role.skills_for(SkillSource.LINKEDIN_SPECIALTIES) == ["Cloud"]

    def test_explicit_specialties_override_company(self):
        role = Role.from_sources(
            "r1", linkedin_specialties=["AWS"], company=Company(name="Acme", specialties=["Cloud"])
        )
        assert role.skills_for(SkillSource.LINKEDIN_SPECIALTIES) == ["AWS"]

    def test_empty_sources_skipped(self):
        role = Role.from_sources("r1", ai_key_skills=[], skills=None)
        assert role.skill_sources == []
        assert role.skills_for(SkillSource.AI_KEY_SKILLS) == []

    def test_skill_source_drops_unnamed_records(self):
        source = RoleSkillSource(tag=SkillSource.ROLE_SKILLS, skills=[{"id": 3}, {"name": "Rust"}, 42])
        assert source.skills == ["Rust"]


class TestMatchingConfig:
    def test_defaults(self):
        config = MatchingConfig()
        assert config.skills_weight == 1.0
        assert config.minimum_confidence == 0.7
        assert config.fuzzy_match_threshold == 0.8
        assert config.minimum_score_threshold == 0
        assert config.bonus_for_high_level_skills == 1.2
        assert config.no_skills_as_error is False

    def test_frozen(self):
        with pytest.raises(ValidationError):
            DEFAULT_MATCHING_CONFIG.skills_weight = 0.5  # type: ignore[misc]

    def test_copy_with_update_leaves_default(self):
        custom = DEFAULT_MATCHING_CONFIG.model_copy(update={"bonus_for_high_level_skills": 2.0})
        assert custom.bonus_for_high_level_skills == 2.0
        assert DEFAULT_MATCHING_CONFIG.bonus_for_high_level_skills == 1.2

    @pytest.mark.parametrize("field", ["skills_weight", "minimum_confidence", "fuzzy_match_threshold"])
    def test_unit_interval(self, field: str):
        with pytest.raises(ValidationError):
            MatchingConfig(**{field: 1.5})


class TestRoleMatchScore:
    def _score(self, **overrides):
        data = {
            "role_id": "r1",
            "overall_score": 50,
            "skills_matched": 1,
            "total_skills": 2,
            "has_skills_listed": True,
            "breakdown": ScoreBreakdown(skills_score=50),
        }
        data.update(overrides)
        return RoleMatchScore(**data)

    def test_valid(self):
        assert self._score().overall_score == 50

    @pytest.mark.parametrize("overall", [-1, 101])
    def test_score_range(self, overall):
        with pytest.raises(ValidationError):
            self._score(overall_score=overall)

    def test_matched_cannot_exceed_total(self):
        with pytest.raises(ValidationError):
            self._score(skills_matched=3, total_skills=2)

    def test_confidence_range(self):
        with pytest.raises(ValidationError):
            SkillMatch(skill_name="Go", matched=True, source=SkillSource.AI_KEY_SKILLS, confidence=1.1)


class TestBatchMatchResponse:
    def test_scores_by_role(self):
        score = RoleMatchScore(
            role_id="r1",
            overall_score=0,
            skills_matched=0,
            total_skills=0,
            has_skills_listed=False,
            breakdown=ScoreBreakdown(skills_score=0),
        )
        response = BatchMatchResponse(user_id="dev-1", role_scores=[score], total_processed=1)
        assert response.scores_by_role() == {"r1": score}
        assert response.errors == []


class TestMatchFilterOptions:
    def test_defaults(self):
        options = MatchFilterOptions()
        assert (options.min_score, options.max_score) == (0, 100)
        assert options.sort_by == "match"
        assert options.sort_direction == "desc"
        assert options.require_skills_listed is False
        assert options.show_only_matches is False

    def test_min_above_max(self):
        with pytest.raises(ValidationError):
            MatchFilterOptions(min_score=80, max_score=20)

    def test_unknown_sort(self):
        with pytest.raises(ValidationError):
            MatchFilterOptions(sort_by="salary")


class TestInvalidUserProfileError:
    def test_is_value_error_with_code(self):
        err = InvalidUserProfileError("bad")
        assert isinstance(err, ValueError)
        assert err.code == MatchErrorCode.INVALID_USER_PROFILE
