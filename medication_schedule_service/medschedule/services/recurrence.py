# medschedule/services/recurrence.py
import logging
from datetime import datetime, timedelta
from typing import Callable, Dict, Iterator, List

from medschedule.schemas.models import (
    TIME_OF_DAY_FREQUENCIES,
    DayOfWeek,
    Medication,
    Schedule,
    ScheduleFrequency,
)
from medschedule.utils.time_format import wall_clock

logger = logging.getLogger(__name__)

DEFAULT_UPCOMING_COUNT = 5

# consecutive candidate days with no occurrence before the day walk gives up
MAX_EMPTY_SCAN_DAYS = 14

CandidateSource = Callable[[Schedule, datetime], Iterator[datetime]]

def _one_time_candidates(schedule: Schedule, now: datetime) -> Iterator[datetime]:
    if schedule.specific_date is not None:
        yield wall_clock(schedule.specific_date)

def _interval_candidates(schedule: Schedule, now: datetime) -> Iterator[datetime]:
    hours = schedule.interval_hours
    if not hours or hours < 1:
        return

    step = timedelta(hours=hours)
    seed = wall_clock(schedule.anchor_instant) if schedule.anchor_instant else now
    anchor = now.replace(hour=seed.hour, minute=seed.minute, second=0, microsecond=0)

    # establish phase without emitting past doses
    while anchor <= now:
        anchor += step

    while True:
        yield anchor
        anchor += step

def _day_walk_candidates(schedule: Schedule, now: datetime) -> Iterator[datetime]:
    slots = sorted({(t.hour, t.minute) for t in schedule.times_of_day})
    if not slots:
        return

    weekdays = None
    if schedule.frequency is ScheduleFrequency.SPECIFIC_DAYS_OF_WEEK:
        weekdays = schedule.days_of_week

    day = now.replace(hour=0, minute=0, second=0, microsecond=0)
    empty_days = 0
    while empty_days < MAX_EMPTY_SCAN_DAYS:
        found = False
        if weekdays is None or DayOfWeek.from_date(day) in weekdays:
            for hour, minute in slots:
                candidate = day.replace(hour=hour, minute=minute)
                if candidate > now:
                    found = True
                    yield candidate
        empty_days = 0 if found else empty_days + 1
        day += timedelta(days=1)

_CANDIDATE_SOURCES: Dict[ScheduleFrequency, CandidateSource] = {
    ScheduleFrequency.SPECIFIC_DATE_ONCE: _one_time_candidates,
    ScheduleFrequency.EVERY_X_HOURS: _interval_candidates,
    **{f: _day_walk_candidates for f in TIME_OF_DAY_FREQUENCIES},
}

def compute_upcoming(
    schedule: Schedule,
    now: datetime,
    count: int = DEFAULT_UPCOMING_COUNT,
) -> List[datetime]:
    """
    Next `count` dose instants strictly after `now`, soonest first.
      - As needed / custom schedules have no fixed recurrence => []
      - degenerate schedules (no times, no weekdays, bad interval) => []
      - never reads the clock; the same inputs always give the same output
    """
    if count < 1:
        return []

    source = _CANDIDATE_SOURCES.get(schedule.frequency)
    if source is None:
        return []

    now = wall_clock(now)
    upcoming: List[datetime] = []
    seen = set()

    try:
        for candidate in source(schedule, now):
            if candidate <= now or candidate in seen:
                continue
            seen.add(candidate)
            upcoming.append(candidate)
            if len(upcoming) >= count:
                break
    except OverflowError:
        # walked past datetime.max
        logger.debug("Recurrence for %s ran out of calendar range", schedule.frequency.value)

    if not upcoming:
        logger.debug("No upcoming doses for %s schedule", schedule.frequency.value)

    return sorted(upcoming)[:count]

def upcoming_for_medication(
    medication: Medication,
    now: datetime,
    count: int = DEFAULT_UPCOMING_COUNT,
) -> List[datetime]:
    if medication.schedule is None:
        return []
    return compute_upcoming(medication.schedule, now, count)
