from __future__ import annotations

from src import roster
from src.board import AssignmentBoard
from src.charts import build_crew_load_chart, build_utilization_chart, roster_status_counts


def test_roster_status_counts(board: AssignmentBoard) -> None:
    board.assign(roster.PEOPLE[0], 1, "person")
    board.assign(roster.PEOPLE[1], 2, "person")
    board.mark_absent(roster.PEOPLE[2])
    board.mark_out_of_service(roster.TRUCKS[0])
    board.assign(roster.EQUIPMENT[0], 1, "equipment")

    counts = {r["roster"]: r for r in roster_status_counts(board)}

    assert counts["People"] == {"roster": "People", "Assigned": 2, "Available": 27, "Unavailable": 1}
    assert counts["Trucks"]["Unavailable"] == 1
    assert counts["Trucks"]["Available"] == 9
    assert counts["Equipment"]["Assigned"] == 1


def test_crew_load_chart(board: AssignmentBoard) -> None:
    board.assign(roster.PEOPLE[5], 4, "person")
    fig = build_crew_load_chart(board)

    assert [t.name for t in fig.data] == ["People", "Trucks", "Equipment"]
    assert list(fig.data[0].y) == [0, 0, 0, 1, 0, 0, 0, 0]
    assert fig.layout.barmode == "stack"


def test_utilization_chart(board: AssignmentBoard) -> None:
    fig = build_utilization_chart(board)
    assert [t.name for t in fig.data] == ["Assigned", "Available", "Unavailable"]
    assert list(fig.data[1].x) == [30, 10, 11]
