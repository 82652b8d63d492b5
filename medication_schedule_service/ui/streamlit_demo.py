import os
from datetime import datetime, time
from typing import Any, Dict, Optional

import pandas as pd
import requests
import streamlit as st
from dotenv import load_dotenv

load_dotenv()

st.set_page_config(page_title="Medication Schedule Demo", layout="wide")

# ---------------------------
# Config
# ---------------------------
DEFAULT_API_BASE = os.getenv("API_BASE", "http://127.0.0.1:8000")
API_BASE = st.sidebar.text_input("API Base URL", value=DEFAULT_API_BASE)

FREQUENCIES = [
    "Once daily",
    "Twice daily",
    "Three times daily",
    "Four times daily",
    "Every X hours",
    "As needed (PRN)",
    "Specific days of week",
    "Specific date (one-time)",
    "Other (custom)",
]
TIME_FREQUENCIES = FREQUENCIES[:4] + ["Specific days of week"]
DAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
FORMS = ["Tablet", "Capsule", "Liquid", "Inhaler", "Injection", "Cream", "Ointment", "Drops", "Patch", "Other"]
ROUTES = ["Oral", "Topical", "Inhaled", "Subcutaneous", "Intramuscular", "Intravenous",
          "Rectal", "Vaginal", "Otic", "Nasal", "Ophthalmic", "Other"]

# ---------------------------
# Helpers (API)
# ---------------------------
def api_post(path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    url = f"{API_BASE}{path}"
    r = requests.post(url, json=payload, timeout=20)
    if r.status_code >= 400:
        raise RuntimeError(f"{r.status_code} {r.text}")
    return r.json()

def api_get(path: str, params: Optional[Dict[str, Any]] = None) -> Any:
    url = f"{API_BASE}{path}"
    r = requests.get(url, params=params or {}, timeout=20)
    if r.status_code >= 400:
        raise RuntimeError(f"{r.status_code} {r.text}")
    return r.json()

# ---------------------------
# Session state
# ---------------------------
if "upcoming" not in st.session_state:
    st.session_state.upcoming = None

# ---------------------------
# UI
# ---------------------------
st.title("💊 Medication Schedule - Upcoming Doses Demo")

col_left, col_right = st.columns([1.2, 1])

with col_left:
    st.subheader("1) Add medication")

    name = st.text_input("Name", value="Amoxicillin")
    dosage_strength = st.text_input("Dosage / strength", value="500 mg")
    form = st.selectbox("Form", FORMS)
    route = st.selectbox("Route", ROUTES)
    prescribed_on = st.date_input("Prescription date", value=datetime.now().date())
    prescribed_at = st.time_input("Prescription time", value=time(8, 0))

    schedule_type = st.selectbox("Schedule type", FREQUENCIES)
    payload: Dict[str, Any] = {
        "name": name,
        "dosage_strength": dosage_strength,
        "form": form,
        "route": route,
        "prescription_date": datetime.combine(prescribed_on, prescribed_at).isoformat(),
        "schedule_type": schedule_type,
    }

    if schedule_type in TIME_FREQUENCIES:
        times_raw = st.text_input("Times (HH:MM, comma separated)", value="08:00, 20:00")
        payload["schedule_times"] = [t.strip() for t in times_raw.split(",") if t.strip()]
    if schedule_type == "Every X hours":
        payload["schedule_interval_hours"] = st.number_input("Interval (hours)", min_value=1, max_value=24, value=8)
    if schedule_type == "Specific days of week":
        payload["schedule_days_of_week"] = st.multiselect("Days", DAYS, default=["Mon", "Thu"])
    if schedule_type == "Specific date (one-time)":
        on = st.date_input("Date", key="specific_date")
        at = st.time_input("Time", value=time(9, 0), key="specific_time")
        payload["schedule_specific_date"] = datetime.combine(on, at).isoformat()

    notes = st.text_input("Schedule notes (optional)", value="")
    if notes.strip():
        payload["schedule_custom_instructions"] = notes.strip()

    if st.button("➕ Save (/medications)"):
        try:
            med = api_post("/medications", payload)
            st.success(f"Saved {med['name']} ({med['id']}).")
        except Exception as e:
            st.error(str(e))

with col_right:
    st.subheader("2) Medications")

    try:
        meds = api_get("/medications")
    except Exception as e:
        meds = []
        st.error(str(e))

    if meds:
        st.dataframe(
            pd.DataFrame(
                [
                    {
                        "id": m["id"],
                        "name": m["name"],
                        "dosage": m["dosage_strength"],
                        "schedule": (m.get("schedule") or {}).get("frequency", "n/a"),
                    }
                    for m in meds
                ]
            ),
            use_container_width=True,
        )
        options = {f"{m['name']} ({m['id']})": m["id"] for m in meds}
        selected = st.selectbox("Medication", list(options.keys()))
        count = st.slider("How many doses", min_value=1, max_value=20, value=5)

        if st.button("⏰ View reminders"):
            try:
                st.session_state.upcoming = api_get(
                    f"/medications/{options[selected]}/upcoming", {"count": count}
                )
            except Exception as e:
                st.error(str(e))
    else:
        st.caption("No medications yet.")

# ---------------------------
# Reminders
# ---------------------------
st.divider()
upcoming = st.session_state.upcoming
if upcoming:
    st.subheader(f"Upcoming Doses for {upcoming.get('name')}")
    st.caption("Conceptual upcoming scheduled times. Actual reminders need to be set up with your device.")
    doses = upcoming.get("doses", [])
    if doses:
        for d in doses:
            st.write(f"- {d['label']}")
    else:
        st.info("No upcoming scheduled doses calculable for this medication.")
        if upcoming.get("instructions"):
            st.write(f"**Instructions:** {upcoming['instructions']}")
