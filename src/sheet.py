"""Conversion between the board and the schedule sheet's formats.

Saving flattens the board to rows under ``HEADER``: one row per crew with
something on it, then a ``SUMMARY`` row carrying the day's absences and
out-of-service items. Loading reads the script's JSON payload, which lists
crews with name arrays.
"""
import logging
from typing import Any, Optional

import pandas as pd

from src.models import CREW_COUNT, Crew, ScheduleSnapshot

logger = logging.getLogger(__name__)

HEADER = [
    "Date", "Crew_Number", "Team_Members", "Crew_Leaders", "Managers", "Truck",
    "Equipment", "Job_Name", "Salesman_PM", "Last_Updated", "Absent_Today",
    "Out_Of_Service",
]

SUMMARY = "SUMMARY"
SEPARATOR = ", "


def _join(names) -> str:
    return SEPARATOR.join(names)


def _split(value) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [v.strip() for v in value.split(",") if v.strip()]
    if isinstance(value, (list, tuple)):
        return [str(v).strip() for v in value if v is not None and str(v).strip()]
    return []


def schedule_values(board, date: str, last_updated: str) -> list[list[str]]:
    """Header row, one row per non-empty crew, then the summary row."""
    rows = [list(HEADER)]
    for crew in board.crews.values():
        if crew.is_empty():
            continue
        by_role = {"member": [], "crew-leader": [], "manager": []}
        for name in crew.people:
            person = board.find(name, "person")
            by_role[person.role if person else "member"].append(name)
        rows.append([
            date,
            str(crew.number),
            _join(by_role["member"]),
            _join(by_role["crew-leader"]),
            _join(by_role["manager"]),
            _join(crew.vehicles),
            _join(crew.equipment),
            crew.job,
            crew.salesman,
            last_updated,
            "",
            "",
        ])
    rows.append([date, SUMMARY, "", "", "", "", "", "", "", last_updated,
                 _join(board.absent), _join(board.out_of_service)])
    return rows


def values_frame(values: list[list[str]]) -> pd.DataFrame:
    if not values:
        return pd.DataFrame(columns=HEADER)
    return pd.DataFrame(values[1:], columns=values[0])


def payload_from_values(values: list[list[str]]) -> dict:
    """Rebuild the load payload the script serves from saved rows."""
    df = values_frame(values).fillna("")
    crews = []
    absent: list[str] = []
    out_of_service: list[str] = []
    last_update = ""
    for _, row in df.iterrows():
        last_update = row.get("Last_Updated", "") or last_update
        if row["Crew_Number"] == SUMMARY:
            absent = _split(row.get("Absent_Today"))
            out_of_service = _split(row.get("Out_Of_Service"))
            continue
        job = row.get("Job_Name", "")
        crews.append({
            "number": row["Crew_Number"],
            "members": (_split(row.get("Team_Members")) + _split(row.get("Crew_Leaders"))
                        + _split(row.get("Managers"))),
            "vehicles": _split(row.get("Truck")),
            "equipment": _split(row.get("Equipment")),
            "jobs": [job] if job else [],
            "salesman": row.get("Salesman_PM", ""),
        })
    return {
        "schedule": {"crews": crews, "absent": absent, "outOfService": out_of_service},
        "lastUpdate": last_update,
    }


def _crew_number(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        return None
    return number if 1 <= number <= CREW_COUNT else None


def parse_schedule(payload: Any, date: str) -> ScheduleSnapshot:
    """Read a load payload into a snapshot. Missing fields become empty."""
    if not isinstance(payload, dict):
        raise ValueError("Schedule payload is not a JSON object")
    schedule = payload.get("schedule") or {}
    if not isinstance(schedule, dict):
        schedule = {}
    raw_crews = schedule.get("crews") or []
    if not isinstance(raw_crews, list):
        raise ValueError(f"Schedule crews for {date} is not a list")

    crews = []
    for raw in raw_crews:
        if not isinstance(raw, dict):
            continue
        number = _crew_number(raw.get("number"))
        if number is None:
            logger.warning("Ignoring crew number %r in schedule for %s", raw.get("number"), date)
            continue
        crews.append(Crew(
            number=number,
            people=_split(raw.get("members")),
            vehicles=_split(raw.get("vehicles")),
            equipment=_split(raw.get("equipment")),
            job=SEPARATOR.join(_split(raw.get("jobs"))),
            salesman=str(raw.get("salesman") or ""),
        ))

    absent = schedule.get("absent", payload.get("absent"))
    out_of_service = schedule.get("outOfService", payload.get("outOfService"))
    return ScheduleSnapshot(
        date=date,
        crews=crews,
        absent=_split(absent),
        out_of_service=_split(out_of_service),
        last_update=str(payload.get("lastUpdate") or ""),
    )
