import logging
import uuid
from typing import Dict, List, Optional
from medschedule.schemas.models import DoseLogEntry, Medication

logger = logging.getLogger(__name__)

MEDICATIONS: Dict[str, Medication] = {}

def new_medication_id() -> str:
    return "med_" + uuid.uuid4().hex[:10]

def add_medication(med: Medication) -> Medication:
    MEDICATIONS[med.id] = med
    logger.info("Stored medication %s (%s)", med.id, med.name)
    return med

def get_medication(med_id: str) -> Optional[Medication]:
    return MEDICATIONS.get(med_id)

def list_medications() -> List[Medication]:
    return sorted(MEDICATIONS.values(), key=lambda m: m.name.lower())

def update_medication(med: Medication) -> Optional[Medication]:
    if med.id not in MEDICATIONS:
        return None
    MEDICATIONS[med.id] = med
    logger.info("Updated medication %s (%s)", med.id, med.name)
    return med

def delete_medication(med_id: str) -> bool:
    return MEDICATIONS.pop(med_id, None) is not None

def append_log_entry(med_id: str, entry: DoseLogEntry) -> Optional[Medication]:
    med = MEDICATIONS.get(med_id)
    if med is None:
        return None
    med.log.append(entry)
    return med

def clear() -> None:
    MEDICATIONS.clear()
