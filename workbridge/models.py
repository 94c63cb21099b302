"""Pydantic models for WorkBridge data structures.

Form widgets hand us strings: ``"yes"``/``"no"``/``""`` for radio groups, ISO
date strings, free text for years of experience. The ``mode="before"``
validators below turn those into typed values and never raise; anything that
cannot be understood becomes the unset value for its field.
"""

import logging
import math
import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

JobCategory = Literal[
    "construction",
    "caregiving",
    "agriculture",
    "manufacturing",
    "hospitality",
    "expert_specialist",
]
Route = Literal["employer_sponsored", "g2g_specialist"]
Priority = Literal["standard", "high"]
ProcessingStream = Literal["specialist_stream", "priority_stream", "standard_stream"]
Timeline = Literal["4-6 weeks", "8-12 weeks"]
ScoreBand = Literal["success", "warning", "error"]

_LEADING_INT = re.compile(r"^\s*([+-]?)0*(\d+)")
# Digit runs longer than this are clamped to MAX_EXPERIENCE_YEARS
_MAX_YEAR_DIGITS = 9
MAX_EXPERIENCE_YEARS = 10**_MAX_YEAR_DIGITS - 1

# Shared by every model that crosses the form/API boundary (camelCase keys).
_FORM_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class YesNo(str, Enum):
    """Answer to a yes/no radio group; ``UNKNOWN`` when the group is unset."""

    YES = "yes"
    NO = "no"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> "YesNo":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            if text in (cls.YES.value, cls.NO.value):
                return cls(text)
        return cls.UNKNOWN


def parse_date(value: Any) -> date | None:
    """Coerce a form date value to ``date``; unparseable input gives ``None``."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            logger.debug("Ignoring unparseable date %r", text)
            return None
    logger.debug("Ignoring date of unsupported type %s", type(value).__name__)
    return None


def parse_years(value: Any) -> int:
    """Extract the leading integer from free-text experience (``"5 years"`` -> 5).

    Non-numeric and negative input give 0; absurdly long numbers are clamped
    to ``MAX_EXPERIENCE_YEARS``.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        return max(int(value), 0) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            sign, digits = match.groups()
            if sign == "-":
                return 0
            if len(digits) > _MAX_YEAR_DIGITS:
                logger.debug("Clamping %d-digit experience to %d", len(digits), MAX_EXPERIENCE_YEARS)
                return MAX_EXPERIENCE_YEARS
            return int(digits)
        if value.strip():
            logger.debug("Ignoring non-numeric experience %r", value)
    return 0


class CandidateProfile(BaseModel):
    """Snapshot of the application-form fields that feed the Auto-Score."""

    model_config = _FORM_CONFIG

    date_of_birth: date | None = Field(default=None, description="Applicant's date of birth")
    experience_years: int = Field(default=0, ge=0, description="Years of experience in the chosen trade")
    worked_abroad: YesNo = Field(default=YesNo.UNKNOWN, description="Has worked outside India before")
    has_certificate: YesNo = Field(default=YesNo.UNKNOWN, description="Holds a trade certificate")
    languages: frozenset[str] = Field(default_factory=frozenset, description="Spoken languages, lower-cased")
    passport_expiry_date: date | None = Field(default=None, description="Passport expiry date")
    medical_condition: YesNo = Field(default=YesNo.UNKNOWN, description="Declared a medical condition")
    criminal_case: YesNo = Field(default=YesNo.UNKNOWN, description="Declared a pending criminal case")

    @field_validator("date_of_birth", "passport_expiry_date", mode="before")
    @classmethod
    def _lenient_date(cls, value: Any) -> date | None:
        return parse_date(value)

    @field_validator("experience_years", mode="before")
    @classmethod
    def _lenient_years(cls, value: Any) -> int:
        return parse_years(value)

    @field_validator("worked_abroad", "has_certificate", "medical_condition", "criminal_case", mode="before")
    @classmethod
    def _lenient_yes_no(cls, value: Any) -> YesNo:
        return YesNo.parse(value)

    @field_validator("languages", mode="before")
    @classmethod
    def _lenient_languages(cls, value: Any) -> frozenset[str]:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple, set, frozenset)):
            return frozenset()
        return frozenset(item.strip().lower() for item in value if isinstance(item, str) and item.strip())


class ScoreFactor(BaseModel):
    """Points awarded for one scoring factor."""

    name: str
    points: int = Field(ge=0)
    max_points: int = Field(ge=0)
    detail: str = ""


class ScoreBreakdown(BaseModel):
    """Per-factor Auto-Score with both the uncapped sum and the reported score."""

    factors: list[ScoreFactor] = Field(default_factory=list)
    raw_total: int = Field(ge=0, description="Sum of all factor points before capping")
    total: int = Field(ge=0, le=100, description="Reported score, capped at 100")


class RoutingDecision(BaseModel):
    """Where an application goes and how fast it is expected to move."""

    model_config = _FORM_CONFIG

    route: Route = "employer_sponsored"
    priority: Priority = "standard"
    country_tag: str = Field(default="india", description="Source country of the applicant pool")
    processing_stream: ProcessingStream = "standard_stream"
    estimated_timeline: Timeline = "8-12 weeks"


class Assessment(BaseModel):
    """Everything the form shows or submits for one application snapshot."""

    profile: CandidateProfile
    job_category: str = ""
    breakdown: ScoreBreakdown
    band: ScoreBand
    routing: RoutingDecision

    @property
    def score(self) -> int:
        return self.breakdown.total
