"""Form intake: raw application-form record -> assessment and submission payload."""

import logging
import os
import re
import secrets
import string
from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Any

from .models import Assessment, CandidateProfile, JobCategory
from .routing import classify
from .scoring import score_band, score_breakdown

logger = logging.getLogger(__name__)

DEFAULT_SUBMISSION_PREFIX = "ISR"
SUBMISSION_SUFFIX_LENGTH = 9
_ID_ALPHABET = string.digits + string.ascii_uppercase

# Values the category picker has used over time, keyed by normalised form
CATEGORY_ALIASES: dict[str, JobCategory] = {
    "construction": "construction",
    "caregiving": "caregiving",
    "care_giving": "caregiving",
    "agriculture": "agriculture",
    "manufacturing": "manufacturing",
    "hospitality": "hospitality",
    "expert_specialist": "expert_specialist",
    "expert": "expert_specialist",
    "specialist": "expert_specialist",
}


def normalize_category(value: Any) -> str:
    """Map a job-category value to its canonical form.

    ``"Care Giving"`` -> ``"caregiving"``, ``"Expert"`` -> ``"expert_specialist"``.
    Unknown values come back lower-cased with ``_`` for whitespace.
    """
    if not isinstance(value, str):
        return ""
    normalized = re.sub(r"\s+", "_", value.strip().lower())
    return CATEGORY_ALIASES.get(normalized, normalized)


def profile_from_form(form: Mapping[str, Any]) -> CandidateProfile:
    """Build a ``CandidateProfile`` from the camelCase form record; never raises."""
    return CandidateProfile.model_validate(dict(form))


def assess(form: Mapping[str, Any], now: date | datetime | None = None) -> Assessment:
    """Score and route one form snapshot."""
    profile = profile_from_form(form)
    category = normalize_category(form.get("jobCategory"))
    breakdown = score_breakdown(profile, now)
    routing = classify(category, profile.experience_years)
    logger.info(
        "Assessed application: score=%d route=%s priority=%s",
        breakdown.total,
        routing.route,
        routing.priority,
    )
    return Assessment(
        profile=profile,
        job_category=category,
        breakdown=breakdown,
        band=score_band(breakdown.total),
        routing=routing,
    )


def generate_submission_id(now_ms: int | None = None) -> str:
    """Return an id like ``ISR-1771545600000-7KQ2M0XZ4``."""
    if now_ms is None:
        now_ms = int(datetime.now(timezone.utc).timestamp() * 1000)
    prefix = os.getenv("WORKBRIDGE_SUBMISSION_PREFIX", DEFAULT_SUBMISSION_PREFIX)
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(SUBMISSION_SUFFIX_LENGTH))
    return f"{prefix}-{now_ms}-{suffix}"


def _serialize(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def build_submission(form: Mapping[str, Any], now: datetime | None = None) -> dict[str, Any]:
    """
    Build the payload for ``POST /applications/israel-skilled-worker``.

    Args:
        form: Raw form record. Not modified.
        now: Submission instant. Defaults to the current UTC time.

    Returns:
        The form fields (dates as ISO strings) plus ``autoScore``, ``routing``,
        ``submissionId``, ``submittedAt`` and ``status``.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    assessment = assess(form, now)

    payload = {key: _serialize(value) for key, value in form.items()}
    payload.update(
        {
            "jobCategory": assessment.job_category,
            "experienceYears": form.get("experienceYears", ""),
            "autoScore": assessment.score,
            "routing": assessment.routing.model_dump(by_alias=True),
            "submissionId": generate_submission_id(int(now.timestamp() * 1000)),
            "submittedAt": now.isoformat(),
            "status": "submitted",
        }
    )
    logger.info("Built submission %s", payload["submissionId"])
    return payload
