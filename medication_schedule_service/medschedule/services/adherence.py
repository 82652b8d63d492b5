from datetime import datetime, timedelta
from typing import List
from medschedule.schemas.models import AdherenceSummary, DoseLogEntry

def summarize_adherence(medication_id: str, log: List[DoseLogEntry], now: datetime, days: int = 7) -> AdherenceSummary:
    cutoff = now - timedelta(days=days)
    events = [e for e in log if cutoff <= e.date <= now]

    taken = sum(1 for e in events if e.status == "taken")
    skipped = sum(1 for e in events if e.status == "skipped")
    snoozed = sum(1 for e in events if e.status == "snoozed")
    total = len(events)
    rate = (taken / total) if total else 0.0

    return AdherenceSummary(
        medication_id=medication_id,
        days=days,
        total_events=total,
        taken=taken,
        skipped=skipped,
        snoozed=snoozed,
        adherence_rate=round(rate, 3),
    )
