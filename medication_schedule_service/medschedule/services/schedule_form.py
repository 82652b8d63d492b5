# medschedule/services/schedule_form.py
import logging
import re
from datetime import datetime
from typing import List, Optional

from medschedule.schemas.models import (
    TIME_OF_DAY_FREQUENCIES,
    Schedule,
    ScheduleForm,
    ScheduleFrequency,
)
from medschedule.utils.time_format import parse_hhmm

logger = logging.getLogger(__name__)

class ScheduleFormError(ValueError):
    def __init__(self, problems: List[str]):
        self.problems = problems
        super().__init__("; ".join(problems))

_LABELS = {f.value.lower(): f for f in ScheduleFrequency}
_EVERY_N_HOURS_RE = re.compile(r"^(?:q\s?(\d+)\s?h|every\s+(\d+)\s+hours?)$")

def _interval_from_label(label: str) -> Optional[int]:
    m = _EVERY_N_HOURS_RE.match((label or "").strip().lower())
    if not m:
        return None
    return int(m.group(1) or m.group(2))

def normalize_frequency(label: str) -> ScheduleFrequency:
    f = (label or "").strip().lower()

    # form labels and enum names
    if f in _LABELS:
        return _LABELS[f]
    key = f.upper().replace(" ", "_")
    if key in ScheduleFrequency.__members__:
        return ScheduleFrequency[key]

    # shorthands seen on prescriptions
    if f in ("od", "qd", "once", "once a day", "daily", "1x"):
        return ScheduleFrequency.ONCE_DAILY
    if f in ("bd", "bid", "twice", "twice a day", "2x"):
        return ScheduleFrequency.TWICE_DAILY
    if f in ("tid", "tds", "thrice", "thrice daily", "three times a day", "3x"):
        return ScheduleFrequency.THREE_TIMES_DAILY
    if f in ("qid", "qds", "four times a day", "4x"):
        return ScheduleFrequency.FOUR_TIMES_DAILY
    if f in ("every x hours", "interval") or _EVERY_N_HOURS_RE.match(f):
        return ScheduleFrequency.EVERY_X_HOURS
    if f in ("weekly", "specific days", "days of week"):
        return ScheduleFrequency.SPECIFIC_DAYS_OF_WEEK
    if f in ("one-time", "one time", "once only", "specific date"):
        return ScheduleFrequency.SPECIFIC_DATE_ONCE
    if f in ("prn", "as needed", "sos"):
        return ScheduleFrequency.AS_NEEDED
    if f in ("custom", "other"):
        return ScheduleFrequency.CUSTOM

    raise ScheduleFormError([f"Unknown schedule type: {label!r}"])

def schedule_problems(schedule: Schedule) -> List[str]:
    """Reasons the schedule cannot produce any dose, phrased for the form."""
    f = schedule.frequency
    problems: List[str] = []
    if f in TIME_OF_DAY_FREQUENCIES and not schedule.times_of_day:
        problems.append("Add at least one time (HH:MM) for this schedule.")
    if f is ScheduleFrequency.SPECIFIC_DAYS_OF_WEEK and not schedule.days_of_week:
        problems.append("Pick at least one day of the week.")
    if f is ScheduleFrequency.EVERY_X_HOURS and not (1 <= (schedule.interval_hours or 0) <= 24):
        problems.append("Interval (hours) must be between 1 and 24.")
    if f is ScheduleFrequency.SPECIFIC_DATE_ONCE and schedule.specific_date is None:
        problems.append("Pick the date for this one-time dose.")
    return problems

def build_schedule(form: ScheduleForm, prescription_date: datetime) -> Optional[Schedule]:
    """
    Turns the submitted form into a Schedule.
    Only the fields relevant to the chosen type are kept; notes are always kept.
    No type selected => no schedule.
    """
    if not (form.schedule_type or "").strip():
        return None

    frequency = normalize_frequency(form.schedule_type)
    fields = {
        "frequency": frequency,
        "anchor_instant": prescription_date,
        "custom_instructions": (form.schedule_custom_instructions or "").strip() or None,
    }

    if frequency in TIME_OF_DAY_FREQUENCIES:
        fields["times_of_day"] = tuple(parse_hhmm(t) for t in form.schedule_times)
    if frequency is ScheduleFrequency.EVERY_X_HOURS:
        fields["interval_hours"] = form.schedule_interval_hours or _interval_from_label(form.schedule_type)
    if frequency is ScheduleFrequency.SPECIFIC_DAYS_OF_WEEK:
        fields["days_of_week"] = frozenset(form.schedule_days_of_week)
    if frequency is ScheduleFrequency.SPECIFIC_DATE_ONCE:
        fields["specific_date"] = form.schedule_specific_date

    schedule = Schedule(**fields)

    problems = schedule_problems(schedule)
    if problems:
        logger.info("Rejected %s schedule: %s", frequency.value, problems)
        raise ScheduleFormError(problems)

    return schedule
