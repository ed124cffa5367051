"""Shared pytest fixtures for techrec_match tests."""

from datetime import datetime, timezone

import pytest

from techrec_match.models import (
    Company,
    Role,
    SkillLevel,
    UserSkill,
    UserSkillProfile,
)


@pytest.fixture()
def user_skills() -> list[UserSkill]:
    return [
        UserSkill(name="JavaScript", level=SkillLevel.ADVANCED),
        UserSkill(name="TypeScript", level=SkillLevel.INTERMEDIATE),
        UserSkill(name="React", level=SkillLevel.EXPERT),
        UserSkill(name="Docker", level=SkillLevel.BEGINNER),
    ]


@pytest.fixture()
def sample_profile(user_skills: list[UserSkill]) -> UserSkillProfile:
    return UserSkillProfile(user_id="dev-1", skills=user_skills)


@pytest.fixture()
def frontend_role() -> Role:
    return Role.from_sources(
        "role-frontend",
        "Senior Frontend Engineer",
        ai_key_skills=["React", "TypeScript", "GraphQL"],
        company=Company(name="Acme", specialties=["SaaS"]),
        posted_at=datetime(2025, 3, 1, tzinfo=timezone.utc),
    )


@pytest.fixture()
def backend_role() -> Role:
    return Role.from_sources(
        "role-backend",
        "Backend Developer",
        skills=[{"name": "Python"}, {"name": "Django"}, {"name": "Docker"}],
        company=Company(name="Blue Bird"),
        posted_at=datetime(2025, 2, 1, tzinfo=timezone.utc),
    )


@pytest.fixture()
def no_skills_role() -> Role:
    return Role.from_sources("role-empty", "Office Manager", company=Company(name="Corp"))


@pytest.fixture()
def roles(frontend_role: Role, backend_role: Role, no_skills_role: Role) -> list[Role]:
    return [frontend_role, backend_role, no_skills_role]
