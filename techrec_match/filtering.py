"""Filter/Sort Pipeline - narrows and orders a role list by match scores.

Every function here is pure: inputs are never mutated and missing data never
raises. A role without a score entry is "unknown" - it sorts after scored
roles and is only dropped by the explicit skills-listed flags or by a score
floor above 0.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel

from .models import FilteringStats, MatchFilterOptions, Role, RoleMatchScore, SortBy, SortDirection

RoleScores = Mapping[str, RoleMatchScore]


class QuickFilterPreset(BaseModel):
    label: str
    min_score: float
    max_score: float


QUICK_FILTER_PRESETS: list[QuickFilterPreset] = [
    QuickFilterPreset(label="Excellent (70%+)", min_score=70, max_score=100),
    QuickFilterPreset(label="Good (40%+)", min_score=40, max_score=100),
    QuickFilterPreset(label="Limited (0-39%)", min_score=0, max_score=39),
]


def default_filter_options(user_has_skills: bool = True) -> MatchFilterOptions:
    """Reset state of the filter panel; without user skills, newest roles first."""
    return MatchFilterOptions(sort_by="match" if user_has_skills else "date", sort_direction="desc")


def score_range_label(min_score: float, max_score: float) -> str:
    if min_score == 0 and max_score == 100:
        return "All Scores"
    if min_score == 70:
        return "Excellent Match (70%+)"
    if min_score == 40:
        return "Good Match (40%+)"
    if max_score == 39:
        return "Limited Match (0-39%)"
    return f"{min_score:g}% - {max_score:g}%"


def _has_skills(role: Role, role_scores: RoleScores) -> bool:
    score = role_scores.get(role.id)
    return score is not None and score.has_skills_listed is True


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------


def filter_roles_by_match_score(
    roles: list[Role], role_scores: RoleScores, min_score: float, max_score: float
) -> list[Role]:
    """Keep roles scored within [min_score, max_score]; unscored roles only when min_score is 0."""
    kept = []
    for role in roles:
        score = role_scores.get(role.id)
        if score is None:
            if min_score == 0:
                kept.append(role)
        elif min_score <= score.overall_score <= max_score:
            kept.append(role)
    return kept


def filter_roles_by_skills_listed(
    roles: list[Role], role_scores: RoleScores, require_skills_listed: bool
) -> list[Role]:
    if not require_skills_listed:
        return list(roles)
    return [role for role in roles if _has_skills(role, role_scores)]


def filter_roles_by_match_potential(
    roles: list[Role], role_scores: RoleScores, show_only_matches: bool
) -> list[Role]:
    """Drop roles with no matching potential.

    Currently the same predicate as :func:`filter_roles_by_skills_listed`;
    kept as its own flag until product decides whether it should also
    require a positive score.
    """
    if not show_only_matches:
        return list(roles)
    return [role for role in roles if _has_skills(role, role_scores)]


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------


def _sort_present_first(
    roles: list[Role], key: Callable[[Role], Any], direction: SortDirection
) -> list[Role]:
    """Sort by *key*; roles whose key is None keep their order at the end."""
    present = [r for r in roles if key(r) is not None]
    missing = [r for r in roles if key(r) is None]
    return sorted(present, key=key, reverse=direction == "desc") + missing


def sort_roles_by_match_score(
    roles: list[Role], role_scores: RoleScores, direction: SortDirection = "desc"
) -> list[Role]:
    """Roles with skills listed always come first, whatever the direction."""
    listed = [r for r in roles if _has_skills(r, role_scores)]
    unlisted = [r for r in roles if not _has_skills(r, role_scores)]

    def score_of(role: Role) -> float:
        score = role_scores.get(role.id)
        return score.overall_score if score is not None else 0

    reverse = direction == "desc"
    return sorted(listed, key=score_of, reverse=reverse) + sorted(unlisted, key=score_of, reverse=reverse)


def sort_roles_by_date(roles: list[Role], direction: SortDirection = "desc") -> list[Role]:
    """Newest first by default; roles without ``posted_at`` go last."""

    def posted(role: Role) -> float | None:
        if role.posted_at is None:
            return None
        # Mixed naive/aware datetimes cannot be compared; compare on the timestamp.
        return role.posted_at.timestamp()

    return _sort_present_first(roles, posted, direction)


def sort_roles_by_title(roles: list[Role], direction: SortDirection = "asc") -> list[Role]:
    return _sort_present_first(roles, lambda r: r.title.casefold(), direction)


def sort_roles_by_company(roles: list[Role], direction: SortDirection = "asc") -> list[Role]:
    """Alphabetical by company name; roles without a company go last."""

    def company(role: Role) -> str | None:
        if role.company is None or not role.company.name:
            return None
        return role.company.name.casefold()

    return _sort_present_first(roles, company, direction)


def apply_sorting(
    roles: list[Role], role_scores: RoleScores, sort_by: SortBy, direction: SortDirection
) -> list[Role]:
    if sort_by == "match":
        return sort_roles_by_match_score(roles, role_scores, direction)
    if sort_by == "date":
        return sort_roles_by_date(roles, direction)
    if sort_by == "title":
        return sort_roles_by_title(roles, direction)
    if sort_by == "company":
        return sort_roles_by_company(roles, direction)
    return list(roles)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def apply_match_filters(roles: list[Role], role_scores: RoleScores, filters: MatchFilterOptions) -> list[Role]:
    """Score range, skills listed, match potential, then sort. Returns a new list."""
    result = filter_roles_by_match_score(roles, role_scores, filters.min_score, filters.max_score)
    result = filter_roles_by_skills_listed(result, role_scores, filters.require_skills_listed)
    result = filter_roles_by_match_potential(result, role_scores, filters.show_only_matches)
    return apply_sorting(result, role_scores, filters.sort_by, filters.sort_direction)


def get_filtering_stats(
    original_roles: list[Role], filtered_roles: list[Role], role_scores: RoleScores
) -> FilteringStats:
    with_skills = [r for r in original_roles if _has_skills(r, role_scores)]
    positive = [role_scores[r.id].overall_score for r in with_skills if role_scores[r.id].overall_score > 0]
    average = round(sum(positive) / len(positive)) if positive else 0

    return FilteringStats(
        total=len(original_roles),
        filtered=len(filtered_roles),
        with_skills=len(with_skills),
        with_scores=len(with_skills),
        average_score=average,
    )
