"""Tests for the alcohol check analysis"""

import re

import pytest

from cariot_mcp.alcohol import (
    analyze_report,
    analyze_reports,
    has_checked,
    percentage,
    today_in,
)
from cariot_mcp.models import AlcoholCheck, DailyReport

TODAY = "2025-06-10"


def make_report(
    no="DR-1",
    date="2025-06-09",
    distance=10.0,
    duration=3600,
    **checks,
) -> DailyReport:
    """Daily report with the given before/middle/after check fields"""
    return DailyReport.model_validate(
        {
            "daily_report_no": no,
            "driver_id": "d1",
            "driver_name": "Taro Yamada",
            "date": date,
            "distance": distance,
            "duration": duration,
            "alcohol_checks": checks or None,
        }
    )


BEFORE_OK = {"before_check_datetime": 1, "before_check_on_alcohol": False}
AFTER_OK = {"after_check_datetime": 3, "after_check_on_alcohol": False}
MIDDLE_BAD = {"middle_check_datetime": 2, "middle_check_on_alcohol": True}


class TestAnalyzeReport:
    """Test per-report classification"""

    def test_past_report_with_before_and_after_is_checked(self):
        result = analyze_report(make_report(**BEFORE_OK, **AFTER_OK), TODAY)

        assert result.has_driven
        assert result.has_checked
        assert not result.has_violation
        assert result.before_check == AlcoholCheck(datetime=1, on_alcohol=False)
        assert result.middle_check is None

    def test_past_report_missing_after_is_unchecked(self):
        result = analyze_report(make_report(**BEFORE_OK), TODAY)

        assert not result.has_checked

    def test_today_needs_only_before_check(self):
        result = analyze_report(make_report(date=TODAY, **BEFORE_OK), TODAY)

        assert result.has_checked

    def test_today_without_before_check_is_unchecked(self):
        result = analyze_report(make_report(date=TODAY, **AFTER_OK), TODAY)

        assert not result.has_checked

    def test_not_driven_counts_as_checked(self):
        result = analyze_report(make_report(distance=0, duration=0), TODAY)

        assert not result.has_driven
        assert result.has_checked

    def test_any_positive_check_is_a_violation(self):
        result = analyze_report(
            make_report(**BEFORE_OK, **MIDDLE_BAD, **AFTER_OK), TODAY
        )

        assert result.has_violation
        assert result.middle_check.on_alcohol

    def test_half_filled_check_is_ignored(self):
        """A check needs both its time and its result"""
        result = analyze_report(
            make_report(before_check_datetime=1, **AFTER_OK), TODAY
        )

        assert result.before_check is None
        assert not result.has_checked

    def test_has_checked_rules(self):
        check = AlcoholCheck(datetime=1, on_alcohol=False)

        assert has_checked(False, None, None, "2025-06-09", TODAY)
        assert has_checked(True, check, check, "2025-06-09", TODAY)
        assert not has_checked(True, check, None, "2025-06-09", TODAY)
        assert has_checked(True, check, None, TODAY, TODAY)


class TestAnalyzeReports:
    """Test the aggregate summary"""

    def test_rates(self):
        reports = [
            make_report("DR-1", **BEFORE_OK, **AFTER_OK),
            make_report("DR-2", **BEFORE_OK),
            make_report("DR-3", **BEFORE_OK, **MIDDLE_BAD, **AFTER_OK),
            make_report("DR-4", distance=0, duration=0),
        ]

        summary = analyze_reports(reports, TODAY)

        assert summary.total_reports == 4
        # DR-1, DR-3 and the undriven DR-4 are checked; 3 of 4 reports were driven
        assert summary.checked_reports == 3
        assert summary.check_rate == "100%"
        assert summary.total_violations == 1
        assert summary.violation_rate == "33%"
        assert [c.daily_report_no for c in summary.checks] == [
            "DR-1",
            "DR-2",
            "DR-3",
            "DR-4",
        ]

    def test_nothing_driven_has_no_check_rate(self):
        summary = analyze_reports([make_report(distance=0, duration=0)], TODAY)

        assert summary.check_rate == "N/A"
        assert summary.violation_rate == "0%"

    def test_report_without_alcohol_checks_field(self):
        report = DailyReport.model_validate(
            {"daily_report_no": "DR-9", "date": "2025-06-01", "distance": 5}
        )

        summary = analyze_reports([report], TODAY)

        assert summary.checked_reports == 0
        assert summary.check_rate == "0%"
        assert summary.violation_rate == "N/A"

    def test_null_fields_are_tolerated(self):
        """A report with null fields does not spoil the whole analysis"""
        reports = [
            DailyReport.model_validate(
                {
                    "daily_report_no": "DR-1",
                    "driver_id": None,
                    "driver_name": None,
                    "date": "2025-06-01",
                    "distance": None,
                    "duration": 5,
                    "alcohol_checks": None,
                }
            ),
            DailyReport.model_validate(
                {
                    "daily_report_no": "DR-2",
                    "driver_name": "Hanako Sato",
                    "date": "2025-06-01",
                    "distance": None,
                    "duration": None,
                }
            ),
        ]

        summary = analyze_reports(reports, TODAY)

        first, second = summary.checks
        assert first.driver_id == ""
        assert first.driver_name == ""
        assert first.has_driven is True
        assert first.has_checked is False
        assert second.has_driven is False
        assert second.has_checked is True
        assert summary.check_rate == "100%"


@pytest.mark.parametrize(
    "numerator,denominator,expected",
    [
        (0, 0, "N/A"),
        (0, 5, "0%"),
        (1, 8, "13%"),
        (2, 3, "67%"),
        (1, 3, "33%"),
        (5, 5, "100%"),
    ],
)
def test_percentage(numerator, denominator, expected):
    """Whole-number percentages rounded half up"""
    assert percentage(numerator, denominator) == expected


def test_today_in_timezone():
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", today_in("Asia/Tokyo"))
