"""Tests for turning medication-form input into a Schedule."""

from __future__ import annotations

from datetime import datetime, time

import pytest
from pydantic import ValidationError

from medschedule.schemas.models import DayOfWeek, ScheduleForm, ScheduleFrequency
from medschedule.services.schedule_form import (
    ScheduleFormError,
    build_schedule,
    normalize_frequency,
    schedule_problems,
)

PRESCRIBED = datetime(2026, 10, 1, 8, 15)


@pytest.mark.parametrize(
    "label, expected",
    [
        ("Once daily", ScheduleFrequency.ONCE_DAILY),
        ("  specific date (one-time) ", ScheduleFrequency.SPECIFIC_DATE_ONCE),
        ("EVERY_X_HOURS", ScheduleFrequency.EVERY_X_HOURS),
        ("OD", ScheduleFrequency.ONCE_DAILY),
        ("bid", ScheduleFrequency.TWICE_DAILY),
        ("TDS", ScheduleFrequency.THREE_TIMES_DAILY),
        ("QID", ScheduleFrequency.FOUR_TIMES_DAILY),
        ("q6h", ScheduleFrequency.EVERY_X_HOURS),
        ("every 8 hours", ScheduleFrequency.EVERY_X_HOURS),
        ("weekly", ScheduleFrequency.SPECIFIC_DAYS_OF_WEEK),
        ("PRN", ScheduleFrequency.AS_NEEDED),
        ("As needed (PRN)", ScheduleFrequency.AS_NEEDED),
        ("other", ScheduleFrequency.CUSTOM),
    ],
)
def test_normalize_frequency(label: str, expected: ScheduleFrequency) -> None:
    assert normalize_frequency(label) is expected


def test_normalize_frequency_unknown_label() -> None:
    with pytest.raises(ScheduleFormError) as exc:
        normalize_frequency("whenever I remember")
    assert "whenever I remember" in str(exc.value)


def test_no_schedule_type_means_no_schedule() -> None:
    assert build_schedule(ScheduleForm(), PRESCRIBED) is None
    assert build_schedule(ScheduleForm(schedule_type="   "), PRESCRIBED) is None


def test_only_relevant_fields_are_kept() -> None:
    form = ScheduleForm(
        schedule_type="Once daily",
        schedule_times=["08:00"],
        schedule_interval_hours=8,
        schedule_days_of_week=["Mon"],
        schedule_specific_date=datetime(2026, 12, 1, 9, 0),
    )
    schedule = build_schedule(form, PRESCRIBED)

    assert schedule.frequency is ScheduleFrequency.ONCE_DAILY
    assert schedule.times_of_day == (time(8, 0),)
    assert schedule.interval_hours is None
    assert schedule.days_of_week == frozenset()
    assert schedule.specific_date is None
    assert schedule.anchor_instant == PRESCRIBED


def test_specific_days_schedule() -> None:
    form = ScheduleForm(
        schedule_type="Specific days of week",
        schedule_times=["09:00", "21:30"],
        schedule_days_of_week=["Mon", "Thu", "Mon"],
    )
    schedule = build_schedule(form, PRESCRIBED)

    assert schedule.days_of_week == frozenset({DayOfWeek.MON, DayOfWeek.THU})
    assert schedule.times_of_day == (time(9, 0), time(21, 30))


def test_every_x_hours_interval_from_shorthand() -> None:
    schedule = build_schedule(ScheduleForm(schedule_type="q8h"), PRESCRIBED)

    assert schedule.frequency is ScheduleFrequency.EVERY_X_HOURS
    assert schedule.interval_hours == 8
    assert schedule.times_of_day == ()


def test_explicit_interval_wins_over_shorthand() -> None:
    schedule = build_schedule(ScheduleForm(schedule_type="q8h", schedule_interval_hours=12), PRESCRIBED)
    assert schedule.interval_hours == 12


def test_custom_instructions_kept_for_any_type() -> None:
    prn = build_schedule(
        ScheduleForm(schedule_type="PRN", schedule_custom_instructions="  Max 3 doses a day  "),
        PRESCRIBED,
    )
    daily = build_schedule(
        ScheduleForm(schedule_type="OD", schedule_times=["07:00"], schedule_custom_instructions="   "),
        PRESCRIBED,
    )

    assert prn.custom_instructions == "Max 3 doses a day"
    assert daily.custom_instructions is None


@pytest.mark.parametrize(
    "form, problem",
    [
        (ScheduleForm(schedule_type="Twice daily"), "Add at least one time (HH:MM) for this schedule."),
        (
            ScheduleForm(schedule_type="Specific days of week", schedule_times=["09:00"]),
            "Pick at least one day of the week.",
        ),
        (ScheduleForm(schedule_type="Every X hours"), "Interval (hours) must be between 1 and 24."),
        (ScheduleForm(schedule_type="q36h"), "Interval (hours) must be between 1 and 24."),
        (ScheduleForm(schedule_type="Specific date (one-time)"), "Pick the date for this one-time dose."),
    ],
)
def test_unusable_schedules_are_rejected(form: ScheduleForm, problem: str) -> None:
    with pytest.raises(ScheduleFormError) as exc:
        build_schedule(form, PRESCRIBED)
    assert problem in exc.value.problems


def test_schedule_problems_empty_for_as_needed() -> None:
    schedule = build_schedule(ScheduleForm(schedule_type="As needed (PRN)"), PRESCRIBED)
    assert schedule_problems(schedule) == []


@pytest.mark.parametrize("bad_time", ["24:00", "9:00", "12:60", "noon"])
def test_form_rejects_malformed_times(bad_time: str) -> None:
    with pytest.raises(ValidationError):
        ScheduleForm(schedule_type="Once daily", schedule_times=[bad_time])


@pytest.mark.parametrize("bad_interval", [0, 25])
def test_form_rejects_out_of_range_interval(bad_interval: int) -> None:
    with pytest.raises(ValidationError):
        ScheduleForm(schedule_type="Every X hours", schedule_interval_hours=bad_interval)


def test_form_rejects_unknown_weekday() -> None:
    with pytest.raises(ValidationError):
        ScheduleForm(schedule_type="Specific days of week", schedule_days_of_week=["Funday"])
