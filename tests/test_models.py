"""Tests for workbridge.models - lenient parsing of form values."""

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from workbridge.models import (
    CandidateProfile,
    RoutingDecision,
    ScoreBreakdown,
    MAX_EXPERIENCE_YEARS,
    YesNo,
    parse_date,
    parse_years,
)


class TestYesNo:
    @pytest.mark.parametrize("raw", ["yes", "YES", " Yes ", YesNo.YES])
    def test_yes(self, raw):
        assert YesNo.parse(raw) is YesNo.YES

    @pytest.mark.parametrize("raw", ["no", "No"])
    def test_no(self, raw):
        assert YesNo.parse(raw) is YesNo.NO

    @pytest.mark.parametrize("raw", ["", None, "maybe", 1, ["yes"], True, False])
    def test_unknown(self, raw):
        assert YesNo.parse(raw) is YesNo.UNKNOWN


class TestParseYears:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("5", 5),
            ("5 years", 5),
            ("  12yrs", 12),
            ("3.5", 3),
            (7, 7),
            (2.9, 2),
        ],
    )
    def test_leading_integer(self, raw, expected):
        assert parse_years(raw) == expected

    @pytest.mark.parametrize("raw", ["", "about five", "abc5", None, True, -3, "-2", float("nan")])
    def test_degrades_to_zero(self, raw):
        assert parse_years(raw) == 0

    def test_leading_zeros(self):
        assert parse_years("0007 years") == 7

    def test_huge_number_is_clamped(self):
        assert parse_years("1" * 5000) == MAX_EXPERIENCE_YEARS

    def test_huge_negative_number_is_zero(self):
        assert parse_years("-" + "9" * 5000) == 0

    def test_nine_digits_are_kept(self):
        assert parse_years("123456789") == 123456789


class TestParseDate:
    def test_iso_date(self):
        assert parse_date("1995-06-01") == date(1995, 6, 1)

    def test_iso_timestamp_with_zulu(self):
        assert parse_date("2027-10-20T00:00:00.000Z") == date(2027, 10, 20)

    def test_datetime_is_truncated(self):
        assert parse_date(datetime(2030, 1, 2, 15, 30, tzinfo=timezone.utc)) == date(2030, 1, 2)

    def test_date_passthrough(self):
        d = date(2000, 1, 1)
        assert parse_date(d) is d

    @pytest.mark.parametrize("raw", [None, "", "   ", "not a date", "2024-13-45", 20240101])
    def test_unparseable_is_absent(self, raw):
        assert parse_date(raw) is None


class TestCandidateProfile:
    def test_defaults(self):
        profile = CandidateProfile()
        assert profile.date_of_birth is None
        assert profile.experience_years == 0
        assert profile.worked_abroad is YesNo.UNKNOWN
        assert profile.languages == frozenset()
        assert profile.criminal_case is YesNo.UNKNOWN

    def test_from_camel_case_form(self, sample_form):
        profile = CandidateProfile.model_validate(sample_form)
        assert profile.date_of_birth == date(1995, 6, 1)
        assert profile.experience_years == 12
        assert profile.worked_abroad is YesNo.YES
        assert profile.languages == {"hindi", "english", "arabic"}
        assert profile.passport_expiry_date == date(2027, 10, 20)
        assert profile.medical_condition is YesNo.NO

    def test_languages_are_a_set(self):
        profile = CandidateProfile(languages=["Hindi", "hindi ", "English", "", 3])
        assert profile.languages == {"hindi", "english"}

    def test_single_language_string(self):
        assert CandidateProfile(languages="tamil").languages == {"tamil"}

    def test_garbage_never_raises(self):
        profile = CandidateProfile.model_validate(
            {
                "dateOfBirth": "yesterday",
                "experienceYears": "lots",
                "workedAbroad": 42,
                "languages": 5,
                "passportExpiryDate": {"year": 2030},
                "criminalCase": None,
            }
        )
        assert profile == CandidateProfile()

    def test_huge_experience_never_raises(self):
        profile = CandidateProfile.model_validate({"experienceYears": "1" * 5000})
        assert profile.experience_years == MAX_EXPERIENCE_YEARS

    def test_boolean_answers_are_unknown(self):
        profile = CandidateProfile(worked_abroad=True, medical_condition=False)
        assert profile.worked_abroad is YesNo.UNKNOWN
        assert profile.medical_condition is YesNo.UNKNOWN

    def test_frozen(self):
        profile = CandidateProfile()
        with pytest.raises(ValidationError):
            profile.experience_years = 3


class TestRoutingDecision:
    def test_defaults(self):
        decision = RoutingDecision()
        assert decision.route == "employer_sponsored"
        assert decision.country_tag == "india"

    def test_dumps_camel_case(self):
        dumped = RoutingDecision(priority="high", estimated_timeline="4-6 weeks").model_dump(by_alias=True)
        assert dumped == {
            "route": "employer_sponsored",
            "priority": "high",
            "countryTag": "india",
            "processingStream": "standard_stream",
            "estimatedTimeline": "4-6 weeks",
        }

    def test_invalid_route(self):
        with pytest.raises(ValidationError):
            RoutingDecision(route="fast_lane")


class TestScoreBreakdown:
    def test_total_is_bounded(self):
        with pytest.raises(ValidationError):
            ScoreBreakdown(raw_total=105, total=105)
