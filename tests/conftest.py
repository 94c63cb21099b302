"""Shared pytest fixtures for WorkBridge tests."""

from datetime import date

import pytest

from workbridge.models import CandidateProfile, YesNo

# Fixed evaluation date for every age / passport-validity calculation
EVALUATION_DATE = date(2026, 2, 20)


@pytest.fixture()
def now() -> date:
    return EVALUATION_DATE


@pytest.fixture()
def sample_form() -> dict:
    """A complete form record as the UI submits it (camelCase, string answers)."""
    return {
        "fullName": "Ravi Kumar",
        "dateOfBirth": "1995-06-01",
        "hasPassport": "yes",
        "passportNumber": "Z1234567",
        "passportExpiryDate": "2027-10-20T00:00:00.000Z",
        "jobCategory": "Construction",
        "specificTrade": "Site Supervisor - Ashdod",
        "experienceYears": "12 years",
        "workedAbroad": "yes",
        "hasCertificate": "yes",
        "languages": ["hindi", "english", "arabic"],
        "medicalCondition": "no",
        "criminalCase": "no",
        "declaration": True,
    }


@pytest.fixture()
def strong_profile() -> CandidateProfile:
    """Profile that maxes out every factor at ``EVALUATION_DATE``."""
    return CandidateProfile(
        date_of_birth=date(1995, 6, 1),
        experience_years=12,
        worked_abroad=YesNo.YES,
        has_certificate=YesNo.YES,
        languages={"hindi", "english", "arabic"},
        passport_expiry_date=date(2027, 10, 20),
        medical_condition=YesNo.NO,
        criminal_case=YesNo.NO,
    )
