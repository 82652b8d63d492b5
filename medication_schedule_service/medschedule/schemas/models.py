from datetime import date, datetime, time
from enum import Enum
from typing import Annotated, FrozenSet, List, Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

from medschedule.core.config import UPCOMING_DEFAULT_COUNT, UPCOMING_MAX_COUNT

MedicationFormType = Literal[
    "Tablet", "Capsule", "Liquid", "Inhaler", "Injection", "Cream", "Ointment", "Drops", "Patch", "Other"
]
MedicationRouteType = Literal[
    "Oral", "Topical", "Inhaled", "Subcutaneous", "Intramuscular", "Intravenous",
    "Rectal", "Vaginal", "Otic", "Nasal", "Ophthalmic", "Other",
]
DoseStatus = Literal["taken", "skipped", "snoozed"]

HHMM_PATTERN = r"^([01]\d|2[0-3]):([0-5]\d)$"

class ScheduleFrequency(str, Enum):
    ONCE_DAILY = "Once daily"
    TWICE_DAILY = "Twice daily"
    THREE_TIMES_DAILY = "Three times daily"
    FOUR_TIMES_DAILY = "Four times daily"
    EVERY_X_HOURS = "Every X hours"
    SPECIFIC_DAYS_OF_WEEK = "Specific days of week"
    SPECIFIC_DATE_ONCE = "Specific date (one-time)"
    AS_NEEDED = "As needed (PRN)"
    CUSTOM = "Other (custom)"

# frequencies driven by times_of_day
TIME_OF_DAY_FREQUENCIES = frozenset({
    ScheduleFrequency.ONCE_DAILY,
    ScheduleFrequency.TWICE_DAILY,
    ScheduleFrequency.THREE_TIMES_DAILY,
    ScheduleFrequency.FOUR_TIMES_DAILY,
    ScheduleFrequency.SPECIFIC_DAYS_OF_WEEK,
})

class DayOfWeek(str, Enum):
    SUN = "Sun"
    MON = "Mon"
    TUE = "Tue"
    WED = "Wed"
    THU = "Thu"
    FRI = "Fri"
    SAT = "Sat"

    @classmethod
    def from_date(cls, d: date) -> "DayOfWeek":
        # date.weekday() counts from Monday == 0
        return _BY_PYTHON_WEEKDAY[d.weekday()]

_BY_PYTHON_WEEKDAY = (
    DayOfWeek.MON, DayOfWeek.TUE, DayOfWeek.WED, DayOfWeek.THU,
    DayOfWeek.FRI, DayOfWeek.SAT, DayOfWeek.SUN,
)

class Schedule(BaseModel):
    """
    When and how often one medication is taken.
    Only the fields relevant to `frequency` are read by the recurrence engine.
    """
    model_config = ConfigDict(frozen=True)

    frequency: ScheduleFrequency
    times_of_day: Tuple[time, ...] = ()
    interval_hours: Optional[int] = Field(default=None, description="Every X hours only")
    days_of_week: FrozenSet[DayOfWeek] = frozenset()
    specific_date: Optional[datetime] = None
    anchor_instant: Optional[datetime] = Field(
        default=None,
        description="Prescription timestamp; its time-of-day seeds the Every X hours phase.",
    )
    custom_instructions: Optional[str] = None

class DoseLogEntry(BaseModel):
    date: datetime
    status: DoseStatus
    notes: Optional[str] = Field(default=None, max_length=500)

class RefillInfo(BaseModel):
    last_refill_date: Optional[datetime] = None
    quantity_dispensed: Optional[int] = Field(default=None, gt=0)
    pharmacy: Optional[str] = Field(default=None, max_length=100)
    days_supply: Optional[int] = Field(default=None, gt=0)

class Medication(BaseModel):
    id: str
    name: str
    dosage_strength: str
    form: MedicationFormType
    route: MedicationRouteType
    prescription_date: datetime
    reason: Optional[str] = None
    prescribing_doctor: Optional[str] = None
    duration: Optional[str] = None  # e.g. "7 days", "Ongoing"
    instructions: Optional[str] = None
    quantity_per_prescription: Optional[int] = None
    personal_notes: Optional[str] = None
    schedule: Optional[Schedule] = None
    refill_info: Optional[RefillInfo] = None
    log: List[DoseLogEntry] = Field(default_factory=list)

class ScheduleForm(BaseModel):
    """Schedule section of the medication form, as submitted."""
    schedule_type: Optional[str] = None
    schedule_times: List[Annotated[str, Field(pattern=HHMM_PATTERN)]] = Field(default_factory=list)
    schedule_interval_hours: Optional[int] = Field(default=None, ge=1, le=24)
    schedule_days_of_week: List[DayOfWeek] = Field(default_factory=list)
    schedule_specific_date: Optional[datetime] = None
    schedule_custom_instructions: Optional[str] = Field(default=None, max_length=200)

class MedicationCreate(ScheduleForm):
    name: str = Field(..., min_length=2, max_length=100)
    dosage_strength: str = Field(..., min_length=1, max_length=50)
    form: MedicationFormType
    route: MedicationRouteType
    prescription_date: datetime
    reason: Optional[str] = Field(default=None, max_length=200)
    prescribing_doctor: Optional[str] = Field(default=None, max_length=100)
    duration: Optional[str] = Field(default=None, max_length=50)
    instructions: Optional[str] = Field(default=None, max_length=500)
    quantity_per_prescription: Optional[int] = Field(default=None, gt=0)
    personal_notes: Optional[str] = Field(default=None, max_length=1000)
    refill_info: Optional[RefillInfo] = None  # kept from the stored record on edit when omitted

class UpcomingRequest(BaseModel):
    schedule: Schedule
    now: Optional[datetime] = None  # server local clock when omitted
    count: int = Field(default=UPCOMING_DEFAULT_COUNT, ge=1, le=UPCOMING_MAX_COUNT)

class DoseOccurrence(BaseModel):
    at: datetime
    label: str  # e.g. "October 20th, 2026 at 9:00 AM (Tuesday)"

class UpcomingDosesResponse(BaseModel):
    medication_id: Optional[str] = None
    name: Optional[str] = None
    frequency: ScheduleFrequency | None = None
    count: int
    doses: List[DoseOccurrence]
    instructions: Optional[str] = None

class DoseLogRequest(BaseModel):
    status: DoseStatus
    date: Optional[datetime] = None  # defaults to now
    notes: Optional[str] = Field(default=None, max_length=500)

class AdherenceSummary(BaseModel):
    medication_id: str
    days: int
    total_events: int
    taken: int
    skipped: int
    snoozed: int
    adherence_rate: float
