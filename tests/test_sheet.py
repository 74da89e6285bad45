from __future__ import annotations

import pytest

from src import roster
from src.board import AssignmentBoard
from src.sheet import (
    HEADER,
    SUMMARY,
    parse_schedule,
    payload_from_values,
    schedule_values,
    values_frame,
)


def _load_sample(board: AssignmentBoard) -> None:
    people = {p.name: p for p in roster.PEOPLE}
    board.assign(people["Jacob"], 3, "person")
    board.assign(people["Adrian"], 3, "person")
    board.assign(people["Carlos"], 3, "person")
    board.assign(people["Mark"], 3, "person")
    board.assign(roster.TRUCKS[0], 3, "vehicle")
    board.assign(roster.EQUIPMENT[0], 3, "equipment")
    board.assign(roster.EQUIPMENT[4], 3, "equipment")
    board.set_crew_job(3, "Maple Ridge install")
    board.set_crew_salesman(3, "Travis")
    board.set_crew_job(6, "Bid walk")
    board.mark_absent(people["Nate"])
    board.mark_absent(people["Sam"])
    board.mark_out_of_service(roster.TRUCKS[3])


def test_values_layout(board: AssignmentBoard) -> None:
    _load_sample(board)
    values = schedule_values(board, "2024-04-15", "2024-04-15 07:30:00")

    assert values[0] == HEADER
    assert [row[1] for row in values[1:]] == ["3", "6", SUMMARY]

    crew_row = dict(zip(HEADER, values[1]))
    assert crew_row["Date"] == "2024-04-15"
    assert crew_row["Team_Members"] == "Adrian, Carlos"
    assert crew_row["Crew_Leaders"] == "Jacob"
    assert crew_row["Managers"] == "Mark"
    assert crew_row["Truck"] == "301 Big Metal"
    assert crew_row["Equipment"] == "16' Trailer, Skid Steer"
    assert crew_row["Job_Name"] == "Maple Ridge install"
    assert crew_row["Salesman_PM"] == "Travis"
    assert crew_row["Last_Updated"] == "2024-04-15 07:30:00"
    assert crew_row["Absent_Today"] == ""
    assert crew_row["Out_Of_Service"] == ""

    summary = dict(zip(HEADER, values[-1]))
    assert summary["Absent_Today"] == "Nate, Sam"
    assert summary["Out_Of_Service"] == "304 Dump Truck"
    assert summary["Team_Members"] == ""
    assert summary["Last_Updated"] == "2024-04-15 07:30:00"


def test_empty_board_is_header_and_summary(board: AssignmentBoard) -> None:
    values = schedule_values(board, "2024-04-15", "")
    assert len(values) == 2
    assert values[1][1] == SUMMARY
    assert all(len(row) == len(HEADER) for row in values)


def test_values_frame(board: AssignmentBoard) -> None:
    _load_sample(board)
    df = values_frame(schedule_values(board, "2024-04-15", ""))
    assert list(df.columns) == HEADER
    assert len(df) == 3
    assert values_frame([]).empty


def test_payload_from_values_round_trips_to_board(board: AssignmentBoard) -> None:
    _load_sample(board)
    values = schedule_values(board, "2024-04-15", "2024-04-15 07:30:00")

    snapshot = parse_schedule(payload_from_values(values), "2024-04-15")
    restored = AssignmentBoard()
    restored.apply_snapshot(snapshot)

    assert sorted(restored.crew(3).people) == sorted(board.crew(3).people)
    assert restored.crew(3).vehicles == board.crew(3).vehicles
    assert restored.crew(3).equipment == board.crew(3).equipment
    assert restored.crew(3).job == "Maple Ridge install"
    assert restored.crew(6).job == "Bid walk"
    assert restored.absent == board.absent
    assert restored.out_of_service == board.out_of_service
    assert snapshot.last_update == "2024-04-15 07:30:00"


def test_parse_schedule_defaults_missing_fields() -> None:
    snapshot = parse_schedule({}, "2024-04-15")
    assert snapshot.crews == []
    assert snapshot.absent == []
    assert snapshot.out_of_service == []
    assert snapshot.last_update == ""

    snapshot = parse_schedule({"schedule": {"crews": [{"number": 2}]}}, "2024-04-15")
    assert len(snapshot.crews) == 1
    assert snapshot.crews[0].people == []
    assert snapshot.crews[0].job == ""


def test_parse_schedule_ignores_out_of_range_crews() -> None:
    payload = {
        "schedule": {
            "crews": [
                {"number": 0, "members": ["Eli"]},
                {"number": "9", "members": ["Evan"]},
                {"number": "x", "members": ["Hector"]},
                {"number": "4", "members": ["Isaac"], "jobs": ["Pond", "Edging"], "salesman": "Dana"},
                "garbage",
            ],
        },
        "lastUpdate": "2024-04-14 16:00:00",
    }
    snapshot = parse_schedule(payload, "2024-04-15")
    assert [c.number for c in snapshot.crews] == [4]
    assert snapshot.crews[0].people == ["Isaac"]
    assert snapshot.crews[0].job == "Pond, Edging"
    assert snapshot.crews[0].salesman == "Dana"


def test_parse_schedule_reads_top_level_lists() -> None:
    payload = {"absent": ["Nate"], "outOfService": "Aerator, 309 Flatbed"}
    snapshot = parse_schedule(payload, "2024-04-15")
    assert snapshot.absent == ["Nate"]
    assert snapshot.out_of_service == ["Aerator", "309 Flatbed"]


def test_parse_schedule_rejects_non_object() -> None:
    with pytest.raises(ValueError):
        parse_schedule(["not", "a", "schedule"], "2024-04-15")


def test_parse_schedule_rejects_non_list_crews() -> None:
    with pytest.raises(ValueError, match="not a list"):
        parse_schedule({"schedule": {"crews": 5}}, "2024-04-15")
    with pytest.raises(ValueError):
        parse_schedule({"schedule": {"crews": {"number": 1}}}, "2024-04-15")


def test_parse_schedule_ignores_malformed_crew_numbers() -> None:
    payload = {
        "schedule": {
            "crews": [
                {"number": True, "members": ["Eli"]},
                {"number": 3.7, "members": ["Evan"]},
                {"number": None, "members": ["Hector"]},
                {"number": 6.0, "members": ["Isaac"]},
            ],
        },
    }
    snapshot = parse_schedule(payload, "2024-04-15")
    assert [c.number for c in snapshot.crews] == [6]
    assert snapshot.crews[0].people == ["Isaac"]
