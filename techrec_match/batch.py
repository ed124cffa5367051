"""Batch Scorer - scores many roles for one user with per-role error isolation."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor

from pydantic import ValidationError

from .models import (
    DEFAULT_MATCHING_CONFIG,
    BatchMatchRequest,
    BatchMatchResponse,
    InvalidUserProfileError,
    MatchError,
    MatchErrorCode,
    MatchingConfig,
    Role,
    RoleMatchScore,
    UserSkill,
    UserSkillProfile,
)
from .role_resolver import RoleResolver, as_resolver
from .scoring import calculate_role_match_score

logger = logging.getLogger(__name__)


def _validated_skills(request: BatchMatchRequest) -> list[UserSkill]:
    """Re-validate and copy the user's skills; the copy is what the batch reads."""
    if not isinstance(request, BatchMatchRequest):
        raise InvalidUserProfileError(f"Expected a BatchMatchRequest, got {type(request).__name__}")
    if not isinstance(request.user_id, str) or not request.user_id.strip():
        raise InvalidUserProfileError("Batch request has no user_id")
    if not isinstance(request.user_skills, list):
        raise InvalidUserProfileError("User skills must be a list")
    try:
        return [
            UserSkill.model_validate(skill.model_dump() if isinstance(skill, UserSkill) else skill)
            for skill in request.user_skills
        ]
    except ValidationError as e:
        raise InvalidUserProfileError(f"Malformed user skill profile: {e}") from e


def _score_role(
    role_id: str,
    resolver: RoleResolver,
    user_skills: list[UserSkill],
    config: MatchingConfig,
) -> RoleMatchScore | MatchError:
    try:
        role = resolver.resolve(role_id)
        if role is None:
            logger.warning("Role %s not found", role_id)
            return MatchError(
                role_id=role_id,
                error=f"Role with ID {role_id} not found",
                code=MatchErrorCode.ROLE_NOT_FOUND,
            )

        score = calculate_role_match_score(user_skills, role, config)
        if not score.has_skills_listed and config.no_skills_as_error:
            logger.warning("Role %s has no skills in any source", role_id)
            return MatchError(
                role_id=role_id,
                error=f"Role with ID {role_id} has no skills listed",
                code=MatchErrorCode.NO_SKILLS_DATA,
            )
        return score
    except Exception as e:
        logger.exception("Scoring failed for role %s", role_id)
        return MatchError(role_id=role_id, error=str(e) or type(e).__name__, code=MatchErrorCode.PROCESSING_ERROR)


def score_batch(
    request: BatchMatchRequest,
    role_resolver: RoleResolver | Callable[[str], Role | None],
    config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
    *,
    max_workers: int = 1,
    progress_callback: Callable[[int, int], None] | None = None,
) -> BatchMatchResponse:
    """
    Score every role in *request* for the requesting user.

    Args:
        request: User ID, role IDs and the user's skills.
        role_resolver: Lookup for role IDs (``RoleResolver`` or plain callable).
        config: Matching weights and the no-skills policy.
        max_workers: Thread count; 1 scores roles inline.
        progress_callback: Optional callback(current, total) after each role.

    Returns:
        Response where every requested role ID appears exactly once, either
        in ``role_scores`` or in ``errors``, both in request order.

    Raises:
        InvalidUserProfileError: The user's profile is missing or malformed.
            Raised before any role is resolved.
    """
    start = time.perf_counter()
    user_skills = _validated_skills(request)
    resolver = as_resolver(role_resolver)
    role_ids = list(request.role_ids)
    total = len(role_ids)

    results: list[RoleMatchScore | MatchError | None] = [None] * total
    counter_lock = threading.Lock()
    completed_count = 0

    def _process(index: int) -> None:
        nonlocal completed_count
        results[index] = _score_role(role_ids[index], resolver, user_skills, config)
        if progress_callback:
            with counter_lock:
                completed_count += 1
                current = completed_count
            progress_callback(current, total)

    if max_workers <= 1 or total <= 1:
        for index in range(total):
            _process(index)
    else:
        with ThreadPoolExecutor(max_workers=min(max_workers, total)) as executor:
            # list() surfaces exceptions raised by the progress callback
            list(executor.map(_process, range(total)))

    role_scores = [r for r in results if isinstance(r, RoleMatchScore)]
    errors = [r for r in results if isinstance(r, MatchError)]
    processing_time = time.perf_counter() - start

    logger.info(
        "Scored %d/%d roles for user %s in %.3fs (%d errors)",
        len(role_scores),
        total,
        request.user_id,
        processing_time,
        len(errors),
    )

    return BatchMatchResponse(
        user_id=request.user_id,
        role_scores=role_scores,
        total_processed=len(role_scores) + len(errors),
        processing_time=processing_time,
        errors=errors,
    )


def score_roles(
    user_skills: UserSkillProfile | list[UserSkill],
    roles: Iterable[Role],
    config: MatchingConfig = DEFAULT_MATCHING_CONFIG,
) -> dict[str, RoleMatchScore]:
    """Score roles the caller already holds, keyed by role ID.

    Unlike :func:`score_batch` there is no resolver and no error collection;
    the result feeds straight into :func:`techrec_match.filtering.apply_match_filters`.
    """
    skills = user_skills.snapshot() if isinstance(user_skills, UserSkillProfile) else list(user_skills)
    return {role.id: calculate_role_match_score(skills, role, config) for role in roles}
