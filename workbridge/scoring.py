"""Eligibility scoring - the Auto-Score shown next to the application form.

Each factor is bucketed independently and the points are summed. With every
factor maxed out the sum is 105, so the reported score is capped at
``MAX_SCORE``; ``ScoreBreakdown.raw_total`` keeps the uncapped value.
"""

import logging
from calendar import monthrange
from datetime import date, datetime

from .models import CandidateProfile, ScoreBand, ScoreBreakdown, ScoreFactor, YesNo

logger = logging.getLogger(__name__)

MAX_SCORE = 100

# (threshold, points), highest threshold first
EXPERIENCE_POINTS = ((10, 20), (5, 15), (2, 10), (1, 5))
LANGUAGE_POINTS = ((3, 15), (2, 10), (1, 5))
PASSPORT_POINTS = ((18, 10), (12, 5))

WORKED_ABROAD_POINTS = 10
CERTIFICATE_POINTS = 15
MEDICAL_POINTS = 10
LEGAL_POINTS = 10

SUCCESS_THRESHOLD = 70
WARNING_THRESHOLD = 50


def _as_date(value: date | datetime | None) -> date:
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    return value


def _bucket(value: int, buckets: tuple[tuple[int, int], ...]) -> int:
    for threshold, points in buckets:
        if value >= threshold:
            return points
    return 0


def age_in_years(date_of_birth: date, now: date) -> int:
    """Completed years between *date_of_birth* and *now* (negative if born after *now*)."""
    years = now.year - date_of_birth.year
    if (now.month, now.day) < (date_of_birth.month, date_of_birth.day):
        years -= 1
    return years


def months_until(expiry: date, now: date) -> int:
    """Completed calendar months from *now* to *expiry*; negative once expired.

    A month counts once the same day-of-month is reached, clamped to the last
    day of shorter months (31 Jan -> 28 Feb is one month).
    """
    if expiry < now:
        return -months_until(now, expiry)
    months = (expiry.year - now.year) * 12 + (expiry.month - now.month)
    anchor_day = min(now.day, monthrange(expiry.year, expiry.month)[1])
    if expiry.day < anchor_day:
        months -= 1
    return months


def _age_points(age: int) -> int:
    if 21 <= age <= 45:
        return 15
    if 18 <= age <= 50:
        return 10
    return 5


def _age_factor(profile: CandidateProfile, now: date) -> ScoreFactor:
    if profile.date_of_birth is None:
        return ScoreFactor(name="Age", points=0, max_points=15, detail="date of birth not provided")
    age = age_in_years(profile.date_of_birth, now)
    return ScoreFactor(name="Age", points=_age_points(age), max_points=15, detail=f"{age} years old")


def _passport_factor(profile: CandidateProfile, now: date) -> ScoreFactor:
    if profile.passport_expiry_date is None:
        return ScoreFactor(name="Passport validity", points=0, max_points=10, detail="expiry date not provided")
    months = months_until(profile.passport_expiry_date, now)
    detail = f"valid for {months} more months" if months >= 0 else "expired"
    return ScoreFactor(
        name="Passport validity",
        points=_bucket(months, PASSPORT_POINTS),
        max_points=10,
        detail=detail,
    )


def _yes_no_factor(name: str, answer: YesNo, wanted: YesNo, points: int) -> ScoreFactor:
    return ScoreFactor(
        name=name,
        points=points if answer is wanted else 0,
        max_points=points,
        detail=f"answered {answer.value}",
    )


def score_breakdown(profile: CandidateProfile, now: date | datetime | None = None) -> ScoreBreakdown:
    """
    Score *profile* factor by factor.

    Args:
        profile: Candidate profile snapshot.
        now: Evaluation date for the age and passport factors. Defaults to today.

    Returns:
        Breakdown with per-factor points, the uncapped sum and the capped total.
    """
    today = _as_date(now)
    experience = profile.experience_years
    language_count = len(profile.languages)

    factors = [
        _age_factor(profile, today),
        ScoreFactor(
            name="Experience",
            points=_bucket(experience, EXPERIENCE_POINTS),
            max_points=20,
            detail=f"{experience} years",
        ),
        _yes_no_factor("Worked abroad", profile.worked_abroad, YesNo.YES, WORKED_ABROAD_POINTS),
        _yes_no_factor("Trade certificate", profile.has_certificate, YesNo.YES, CERTIFICATE_POINTS),
        ScoreFactor(
            name="Languages",
            points=_bucket(language_count, LANGUAGE_POINTS),
            max_points=15,
            detail=", ".join(sorted(profile.languages)) or "none listed",
        ),
        _passport_factor(profile, today),
        _yes_no_factor("No medical condition", profile.medical_condition, YesNo.NO, MEDICAL_POINTS),
        _yes_no_factor("No criminal case", profile.criminal_case, YesNo.NO, LEGAL_POINTS),
    ]

    raw_total = sum(f.points for f in factors)
    total = min(raw_total, MAX_SCORE)
    if raw_total > MAX_SCORE:
        logger.debug("Auto-score %d capped at %d", raw_total, MAX_SCORE)
    return ScoreBreakdown(factors=factors, raw_total=raw_total, total=total)


def compute_score(profile: CandidateProfile, now: date | datetime | None = None) -> int:
    """Return the Auto-Score (0-100) for *profile*."""
    return score_breakdown(profile, now).total


def score_band(score: int) -> ScoreBand:
    """Colour tier of the Auto-Score chip."""
    if score >= SUCCESS_THRESHOLD:
        return "success"
    if score >= WARNING_THRESHOLD:
        return "warning"
    return "error"
