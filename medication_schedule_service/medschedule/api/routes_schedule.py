# medschedule/api/routes_schedule.py
from datetime import datetime
from typing import Optional
from fastapi import APIRouter

from medschedule.schemas.models import (
    DoseOccurrence,
    Medication,
    Schedule,
    UpcomingDosesResponse,
    UpcomingRequest,
)
from medschedule.services.recurrence import compute_upcoming
from medschedule.utils.time_format import format_occurrence, wall_clock

router = APIRouter(prefix="/schedule", tags=["schedule"])

def resolve_now(now: Optional[datetime]) -> datetime:
    # the engine never reads the clock; the route does
    return wall_clock(now) if now is not None else datetime.now()

def build_upcoming_response(
    schedule: Optional[Schedule],
    now: datetime,
    count: int,
    medication: Optional[Medication] = None,
) -> UpcomingDosesResponse:
    doses = compute_upcoming(schedule, now, count) if schedule else []
    return UpcomingDosesResponse(
        medication_id=medication.id if medication else None,
        name=medication.name if medication else None,
        frequency=schedule.frequency if schedule else None,
        count=count,
        doses=[DoseOccurrence(at=d, label=format_occurrence(d)) for d in doses],
        instructions=schedule.custom_instructions if schedule else None,
    )

@router.post("/upcoming", response_model=UpcomingDosesResponse)
def upcoming(req: UpcomingRequest):
    return build_upcoming_response(req.schedule, resolve_now(req.now), req.count)
