"""Alcohol check analysis over daily reports.

A report counts as *checked* when the driver did not drive at all, when it is
today's report and the before-driving check exists, or when it is an older
report and both the before and after checks exist. Rates are computed over
driven reports (check rate) and checked reports (violation rate).
"""

import logging
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from zoneinfo import ZoneInfo

from .consts import NOT_APPLICABLE
from .models import (
    AlcoholCheck,
    AlcoholCheckAnalysis,
    AlcoholCheckSummary,
    AnalysisSummary,
    DailyReport,
)

logger = logging.getLogger("cariot-mcp.alcohol")


def today_in(timezone: str) -> str:
    """Today's date (``yyyy-MM-dd``) in the given IANA timezone."""
    return datetime.now(ZoneInfo(timezone)).date().isoformat()


def _check(
    summary: AlcoholCheckSummary | None, prefix: str
) -> AlcoholCheck | None:
    if summary is None:
        return None
    checked_at = getattr(summary, f"{prefix}_check_datetime")
    on_alcohol = getattr(summary, f"{prefix}_check_on_alcohol")
    if checked_at is None or on_alcohol is None:
        return None
    return AlcoholCheck(datetime=checked_at, on_alcohol=on_alcohol)


def has_driven(distance: float, duration: float) -> bool:
    return distance > 0 or duration > 0


def has_checked(
    driven: bool,
    before_check: AlcoholCheck | None,
    after_check: AlcoholCheck | None,
    report_date: str,
    today: str,
) -> bool:
    if not driven:
        return True
    if report_date == today:
        # the day is not over yet, only the before check can exist
        return before_check is not None
    return before_check is not None and after_check is not None


def analyze_report(report: DailyReport, today: str) -> AlcoholCheckAnalysis:
    """Classify a single daily report."""
    before = _check(report.alcohol_checks, "before")
    middle = _check(report.alcohol_checks, "middle")
    after = _check(report.alcohol_checks, "after")
    driven = has_driven(report.distance, report.duration)

    return AlcoholCheckAnalysis(
        driver_id=report.driver_id,
        driver_name=report.driver_name,
        date=report.date,
        daily_report_no=report.daily_report_no,
        before_check=before,
        middle_check=middle,
        after_check=after,
        has_violation=any(c is not None and c.on_alcohol for c in (before, middle, after)),
        has_checked=has_checked(driven, before, after, report.date, today),
        has_driven=driven,
    )


def percentage(numerator: int, denominator: int) -> str:
    """Whole-number percentage, rounded half up; ``N/A`` for a zero denominator."""
    if denominator == 0:
        return NOT_APPLICABLE
    value = (Decimal(numerator) * 100 / Decimal(denominator)).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP
    )
    return f"{value}%"


def analyze_reports(reports: list[DailyReport], today: str) -> AnalysisSummary:
    """Analyze every report and aggregate check and violation rates.

    Args:
        reports: Daily reports as returned by ``GET /daily_reports``.
        today: Today's date as ``yyyy-MM-dd``.

    Returns:
        Summary with per-report details in ``checks``.
    """
    checks = [analyze_report(report, today) for report in reports]
    driven = sum(1 for c in checks if c.has_driven)
    checked = sum(1 for c in checks if c.has_checked)
    violations = sum(1 for c in checks if c.has_violation)
    logger.debug(
        f"Analyzed {len(checks)} reports: {driven} driven, {checked} checked, "
        f"{violations} violations"
    )

    return AnalysisSummary(
        total_reports=len(reports),
        checked_reports=checked,
        check_rate=percentage(checked, driven),
        total_violations=violations,
        violation_rate=percentage(violations, checked),
        checks=checks,
    )
