# medschedule/api/routes_medications.py
import logging
from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, HTTPException, Query

from medschedule.api.routes_schedule import build_upcoming_response, resolve_now
from medschedule.core.config import UPCOMING_DEFAULT_COUNT, UPCOMING_MAX_COUNT
from medschedule.schemas.models import (
    AdherenceSummary,
    DoseLogEntry,
    DoseLogRequest,
    Medication,
    MedicationCreate,
    UpcomingDosesResponse,
)
from medschedule.services.adherence import summarize_adherence
from medschedule.services.medication_store import (
    add_medication,
    append_log_entry,
    delete_medication,
    get_medication,
    list_medications,
    new_medication_id,
    update_medication,
)
from medschedule.services.schedule_form import ScheduleFormError, build_schedule
from medschedule.utils.time_format import wall_clock

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/medications", tags=["medications"])

def _require(med_id: str) -> Medication:
    med = get_medication(med_id)
    if not med:
        raise HTTPException(status_code=404, detail="medication not found")
    return med

def _from_request(req: MedicationCreate, med_id: str, **kept) -> Medication:
    prescription_date = wall_clock(req.prescription_date)
    try:
        schedule = build_schedule(req, prescription_date)
    except ScheduleFormError as e:
        raise HTTPException(status_code=400, detail=e.problems)

    return Medication(
        id=med_id,
        name=req.name.strip(),
        dosage_strength=req.dosage_strength.strip(),
        form=req.form,
        route=req.route,
        prescription_date=prescription_date,
        reason=req.reason,
        prescribing_doctor=req.prescribing_doctor,
        duration=req.duration,
        instructions=req.instructions,
        quantity_per_prescription=req.quantity_per_prescription,
        personal_notes=req.personal_notes,
        schedule=schedule,
        **kept,
    )

@router.post("", response_model=Medication, status_code=201)
def create(req: MedicationCreate):
    med = _from_request(req, new_medication_id(), refill_info=req.refill_info)
    return add_medication(med)

@router.put("/{med_id}", response_model=Medication)
def update(med_id: str, req: MedicationCreate):
    existing = _require(med_id)
    # the dose log always survives an edit; stored refill details survive when none are sent
    med = _from_request(
        req,
        existing.id,
        refill_info=req.refill_info if req.refill_info is not None else existing.refill_info,
        log=existing.log,
    )
    return update_medication(med)

@router.get("", response_model=List[Medication])
def index():
    return list_medications()

@router.get("/{med_id}", response_model=Medication)
def show(med_id: str):
    return _require(med_id)

@router.delete("/{med_id}")
def remove(med_id: str):
    if not delete_medication(med_id):
        raise HTTPException(status_code=404, detail="medication not found")
    return {"ok": True, "id": med_id}

@router.get("/{med_id}/upcoming", response_model=UpcomingDosesResponse)
def upcoming(
    med_id: str,
    count: int = Query(default=UPCOMING_DEFAULT_COUNT, ge=1, le=UPCOMING_MAX_COUNT),
    now: Optional[datetime] = None,
):
    med = _require(med_id)
    return build_upcoming_response(med.schedule, resolve_now(now), count, medication=med)

@router.post("/{med_id}/log", response_model=DoseLogEntry, status_code=201)
def log_dose(med_id: str, req: DoseLogRequest):
    _require(med_id)
    entry = DoseLogEntry(date=resolve_now(req.date), status=req.status, notes=req.notes)
    append_log_entry(med_id, entry)
    logger.info("Logged %s dose for %s", entry.status, med_id)
    return entry

@router.get("/{med_id}/adherence", response_model=AdherenceSummary)
def adherence(
    med_id: str,
    days: int = Query(default=7, ge=1, le=365),
    now: Optional[datetime] = None,
):
    med = _require(med_id)
    return summarize_adherence(med.id, med.log, resolve_now(now), days)
