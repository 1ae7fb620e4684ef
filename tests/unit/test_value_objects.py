"""
Unit tests for value objects.
"""

from datetime import date, datetime, timezone

import pytest

from subscheduler.domain.exceptions.validation_error import (
    InvalidFormatError,
    RequiredFieldError,
)
from subscheduler.domain.value_objects.assignment_status import (
    AssignmentDecision,
    AssignmentStatus,
)
from subscheduler.domain.value_objects.decline_reason import (
    DeclineReason,
    DeclineReasonCode,
)
from subscheduler.domain.value_objects.org_calendar import (
    day_equals,
    format_org_date,
    org_day_bounds,
    to_org_date,
)
from subscheduler.domain.value_objects.phase_bucket import (
    PhaseBucket,
    classify_phase,
    is_archived_phase,
    matches_phase,
    normalize_phase_label,
)
from subscheduler.domain.value_objects.working_days import (
    WorkingDays,
    availability_summary,
    available_weekday_names,
    is_available_on_date,
    next_available_date,
    parse_working_days,
    works_on_weekdays_only,
    works_on_weekends,
)

MONDAY = date(2024, 6, 17)
SATURDAY = date(2024, 6, 15)


class TestWorkingDays:
    """Test WorkingDays value object and availability helpers."""

    def test_missing_configuration_is_always_available(self):
        assert is_available_on_date(None, MONDAY) is True
        assert is_available_on_date(None, SATURDAY) is True

    def test_weekday_lookup(self):
        weekdays = WorkingDays.weekdays()

        assert is_available_on_date(weekdays, MONDAY) is True
        assert is_available_on_date(weekdays, SATURDAY) is False

    def test_all_false_is_never_available(self):
        nothing = WorkingDays()

        for offset in range(7):
            assert is_available_on_date(nothing, date(2024, 6, 16 + offset)) is False

    def test_from_mapping_treats_missing_days_as_off(self):
        days = WorkingDays.from_mapping({"monday": True, "friday": 1})

        assert available_weekday_names(days) == ["monday", "friday"]

    def test_from_day_names_accepts_abbreviations(self):
        days = WorkingDays.from_day_names(["Mon", " wednesday ", "sat", "x"])

        assert available_weekday_names(days) == ["monday", "wednesday", "saturday"]

    def test_parse_working_days(self):
        assert parse_working_days(None) is None
        assert parse_working_days("monday") is None
        assert parse_working_days({"sunday": True}).sunday is True
        assert parse_working_days(["Sunday"]).sunday is True

    def test_next_available_date(self):
        weekdays = WorkingDays.weekdays()

        assert next_available_date(weekdays, SATURDAY) == MONDAY
        assert next_available_date(WorkingDays(), SATURDAY) is None
        assert next_available_date(None, SATURDAY) is None

    def test_weekend_and_weekday_flags(self):
        assert works_on_weekdays_only(WorkingDays.weekdays()) is True
        assert works_on_weekends(WorkingDays.weekdays()) is False
        assert works_on_weekends(WorkingDays(saturday=True)) is True

    def test_availability_summary(self):
        every_day = WorkingDays.from_mapping(
            {name: True for name in WorkingDays().to_dict()}
        )

        assert availability_summary(None) == "No availability set"
        assert availability_summary(WorkingDays()) == "Not available any day"
        assert availability_summary(every_day) == "Available every day"
        assert availability_summary(WorkingDays.weekdays()) == "Weekdays only (Mon-Fri)"
        assert (
            availability_summary(WorkingDays(monday=True, friday=True))
            == "Available: Monday, Friday"
        )


class TestPhaseBucket:
    """Test phase label matching."""

    @pytest.mark.parametrize(
        "label,bucket",
        [
            ("Job Request", PhaseBucket.JOB_REQUEST),
            ("  job   requests ", PhaseBucket.JOB_REQUEST),
            ("Work Order", PhaseBucket.WORK_ORDER),
            ("Pending Work Order", PhaseBucket.PENDING_WORK_ORDER),
            ("Completed", PhaseBucket.COMPLETED),
            ("Canceled", PhaseBucket.CANCELLED),
            ("Cancelled", PhaseBucket.CANCELLED),
            ("Invoice", PhaseBucket.INVOICING),
        ],
    )
    def test_classify_phase(self, label, bucket):
        assert classify_phase(label) == bucket

    def test_pending_work_order_is_not_a_work_order(self):
        assert matches_phase(PhaseBucket.WORK_ORDER, "Pending Work Order") is False
        assert matches_phase(PhaseBucket.PENDING_WORK_ORDER, "Pending Work Order") is True

    def test_empty_label_matches_nothing(self):
        assert classify_phase(None) is None
        assert classify_phase("   ") is None
        assert PhaseBucket.JOB_REQUEST.matches("") is False

    def test_normalize_and_archived(self):
        assert normalize_phase_label("  Work\tOrder ") == "work order"
        assert is_archived_phase("Archived") is True
        assert is_archived_phase("Work Order") is False


class TestDeclineReason:
    """Test DeclineReason validation."""

    def test_missing_code(self):
        with pytest.raises(RequiredFieldError) as exc_info:
            DeclineReason.parse(None)

        assert str(exc_info.value) == "Please choose a reason to decline."

    def test_other_requires_text(self):
        with pytest.raises(RequiredFieldError) as exc_info:
            DeclineReason.parse("other", "   ")

        assert exc_info.value.field_name == "reason_text"

    def test_other_text_is_trimmed(self):
        reason = DeclineReason.parse("other", "  ladder broke ")

        assert reason.code == DeclineReasonCode.OTHER
        assert reason.text == "ladder broke"

    def test_text_dropped_for_fixed_codes(self):
        reason = DeclineReason.parse("too_far", "ignored")

        assert reason.code == DeclineReasonCode.TOO_FAR
        assert reason.text is None

    def test_unknown_code(self):
        with pytest.raises(InvalidFormatError):
            DeclineReason.parse("busy")


class TestAssignmentStatus:
    """Test assignment status helpers."""

    def test_awaiting_decision(self):
        assert AssignmentStatus.is_awaiting_decision(None) is True
        assert AssignmentStatus.is_awaiting_decision(AssignmentStatus.PENDING) is True
        assert AssignmentStatus.is_awaiting_decision("pending") is True
        assert AssignmentStatus.is_awaiting_decision(AssignmentStatus.ACCEPTED) is False

    def test_accepted_or_active(self):
        assert AssignmentStatus.is_accepted_or_active(AssignmentStatus.ACCEPTED) is True
        assert AssignmentStatus.is_accepted_or_active(AssignmentStatus.IN_PROGRESS) is True
        assert AssignmentStatus.is_accepted_or_active(AssignmentStatus.DECLINED) is False
        assert AssignmentStatus.is_accepted_or_active(None) is False

    def test_decision_maps_to_status(self):
        assert AssignmentDecision.ACCEPTED.to_status() == AssignmentStatus.ACCEPTED
        assert AssignmentDecision.DECLINED.to_status() == AssignmentStatus.DECLINED


class TestOrgCalendar:
    """Test organisation-zone day helpers."""

    def test_late_evening_utc_is_previous_org_day(self):
        # 02:30 UTC on the 16th is 22:30 on the 15th in New York (EDT)
        instant = datetime(2024, 6, 16, 2, 30, tzinfo=timezone.utc)

        assert to_org_date(instant) == date(2024, 6, 15)
        assert day_equals(instant, "2024-06-15") is True
        assert day_equals(instant, date(2024, 6, 16)) is False

    def test_date_only_strings_are_taken_as_is(self):
        assert to_org_date("2024-06-15") == date(2024, 6, 15)

    def test_naive_datetimes_are_utc(self):
        assert to_org_date(datetime(2024, 6, 16, 3, 0)) == date(2024, 6, 15)

    def test_day_bounds(self):
        start, end = org_day_bounds(date(2024, 6, 15))

        assert start == datetime(2024, 6, 15, 4, 0, tzinfo=timezone.utc)
        assert end == datetime(2024, 6, 16, 4, 0, tzinfo=timezone.utc)

    def test_day_bounds_across_dst_change(self):
        # 2024-11-03 is 25 hours long in New York
        start, end = org_day_bounds(date(2024, 11, 3))

        assert (end - start).total_seconds() == 25 * 3600

    def test_format_org_date(self):
        assert format_org_date(datetime(2024, 6, 15, 14, 0, tzinfo=timezone.utc)) == (
            "Jun 15, 2024"
        )
