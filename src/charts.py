"""Plotly chart builders for the Crew Board."""
import plotly.graph_objects as go

from src.models import CREW_COUNT

KIND_COLORS = {
    "People": "#4C78A8",
    "Trucks": "#E45756",
    "Equipment": "#54A24B",
}

STATUS_COLORS = {
    "Assigned": "#4C78A8",
    "Available": "#54A24B",
    "Unavailable": "#BABBBD",
}


def build_crew_load_chart(board) -> go.Figure:
    """Stacked bars: people, trucks and equipment on each crew."""
    labels = [f"Crew {n}" for n in range(1, CREW_COUNT + 1)]
    counts = {
        "People": [len(board.crew(n).people) for n in range(1, CREW_COUNT + 1)],
        "Trucks": [len(board.crew(n).vehicles) for n in range(1, CREW_COUNT + 1)],
        "Equipment": [len(board.crew(n).equipment) for n in range(1, CREW_COUNT + 1)],
    }

    fig = go.Figure()
    for name, values in counts.items():
        fig.add_trace(go.Bar(
            x=labels,
            y=values,
            name=name,
            marker_color=KIND_COLORS[name],
        ))

    fig.update_layout(
        barmode="stack",
        yaxis=dict(title="Assigned", dtick=1),
        height=350,
        margin=dict(l=10, r=10, t=40, b=40),
        title="Crew Load",
        legend=dict(orientation="h", y=-0.2),
    )
    return fig


def roster_status_counts(board) -> list[dict]:
    """Assigned / available / unavailable counts per roster."""
    rows = []
    for label, roster_items, kind, available in (
        ("People", board.people, "person", board.available_people()),
        ("Trucks", board.trucks, "vehicle", board.available_trucks()),
        ("Equipment", board.equipment, "equipment", board.available_equipment()),
    ):
        unavailable = sum(1 for i in roster_items if board.is_unavailable(i.name, kind))
        rows.append({
            "roster": label,
            "Assigned": len(roster_items) - len(available) - unavailable,
            "Available": len(available),
            "Unavailable": unavailable,
        })
    return rows


def build_utilization_chart(board) -> go.Figure:
    """Horizontal stacked bars of each roster's partition."""
    rows = roster_status_counts(board)
    fig = go.Figure()
    for status, color in STATUS_COLORS.items():
        fig.add_trace(go.Bar(
            y=[r["roster"] for r in rows],
            x=[r[status] for r in rows],
            name=status,
            orientation="h",
            marker_color=color,
            text=[r[status] for r in rows],
            textposition="inside",
        ))

    fig.update_layout(
        barmode="stack",
        height=260,
        margin=dict(l=10, r=10, t=40, b=40),
        title="Roster Utilization",
        legend=dict(orientation="h", y=-0.3),
    )
    return fig
