"""Crew Board: daily crew, truck and equipment assignments for landscaping operations."""
import streamlit as st
from datetime import date

from src import charts
from src.board import AssignmentError
from src.config import load_settings, setup_logging
from src.models import CREW_COUNT
from src.remote_store import ScheduleStore
from src.session import SchedulerSession
from src.sheet import schedule_values, values_frame

st.set_page_config(page_title="Crew Board", layout="wide")

setup_logging()

KIND_LABELS = {
    "person": "Person",
    "vehicle": "Truck",
    "equipment": "Equipment",
}
ROLE_BADGES = {
    "member": "",
    "crew-leader": " ★",
    "manager": " ◆",
}

# ---------------------------------------------------------------------------
# Session init
# ---------------------------------------------------------------------------

settings = load_settings()

if "scheduler" not in st.session_state:
    st.session_state.scheduler = SchedulerSession(
        ScheduleStore(settings.scheduler_url, timeout=settings.timeout)
    )

session: SchedulerSession = st.session_state.scheduler
board = session.board

# ---------------------------------------------------------------------------
# Sidebar: date, load / save, status
# ---------------------------------------------------------------------------

page = st.sidebar.radio("Navigation", ["Crew Board", "Daily Summary"])

selected_date = st.sidebar.date_input("Schedule Date", value=date.today())
date_key = selected_date.isoformat()

if not settings.scheduler_url:
    st.sidebar.warning("Scheduler API URL not configured. Set [scheduler] url in secrets.toml.")

# SchedulerSession refuses a second load or save while one is running.
lcol, scol = st.sidebar.columns(2)
with lcol:
    if st.button("Load", use_container_width=True):
        session.load(date_key)
with scol:
    if st.button("Save", type="primary", use_container_width=True):
        session.save(date_key)

if session.last_update:
    st.sidebar.caption(f"Last updated {session.last_update}")


@st.fragment(run_every=1)
def render_status():
    message = session.current_status()
    if message is None:
        return
    if message.level == "success":
        st.success(message.text)
    else:
        st.error(message.text)


with st.sidebar:
    render_status()


# ---------------------------------------------------------------------------
# Crew Board
# ---------------------------------------------------------------------------

def _item_label(item, kind: str) -> str:
    label = item.name + (ROLE_BADGES.get(item.role, "") if kind == "person" else "")
    crew_number = board.location_of(item.name, kind)
    if crew_number is not None:
        label += f" (Crew {crew_number})"
    return label


def render_assign_form():
    st.subheader("Assign")
    kind = st.radio("Type", list(KIND_LABELS), format_func=lambda k: KIND_LABELS[k],
                    horizontal=True, label_visibility="collapsed")
    candidates = [i for i in board.roster_for(kind) if not board.is_unavailable(i.name, kind)]
    if not candidates:
        st.info(f"Every {KIND_LABELS[kind].lower()} is marked unavailable.")
        return

    with st.form("assign_form", clear_on_submit=True):
        col1, col2 = st.columns([3, 1])
        with col1:
            item = st.selectbox(KIND_LABELS[kind], candidates,
                                format_func=lambda i: _item_label(i, kind))
        with col2:
            target = st.selectbox("Crew", list(range(1, CREW_COUNT + 1)),
                                  format_func=lambda n: f"Crew {n}")
        if st.form_submit_button("Assign", type="primary"):
            try:
                board.move(item, target, kind)
                st.rerun()
            except AssignmentError as e:
                st.error(str(e))


def render_availability():
    st.subheader("Unavailable Today")
    col1, col2 = st.columns(2)
    with col1:
        with st.form("absent_form"):
            chosen = st.multiselect("Absent", [p.name for p in board.people], default=board.absent)
            if st.form_submit_button("Update Absences"):
                for name in list(board.absent):
                    if name not in chosen:
                        board.unmark_absent(name)
                for name in chosen:
                    board.mark_absent(board.find(name, "person"))
                st.rerun()
    with col2:
        with st.form("oos_form"):
            options = [t.name for t in board.trucks] + [e.name for e in board.equipment]
            chosen = st.multiselect("Out of Service", options, default=board.out_of_service)
            if st.form_submit_button("Update Out of Service"):
                for name in list(board.out_of_service):
                    if name not in chosen:
                        board.unmark_out_of_service(name)
                for name in chosen:
                    item = board.find(name, "vehicle") or board.find(name, "equipment")
                    board.mark_out_of_service(item)
                st.rerun()


def render_crew_card(crew_number: int):
    crew = board.crew(crew_number)
    with st.container(border=True):
        st.markdown(f"**Crew {crew_number}**")

        with st.form(f"crew_text_{crew_number}"):
            job = st.text_input("Job", crew.job, key=f"job_{crew_number}_{crew.job}")
            salesman = st.text_input("Salesman / PM", crew.salesman,
                                     key=f"pm_{crew_number}_{crew.salesman}")
            if st.form_submit_button("Save Details"):
                board.set_crew_job(crew_number, job.strip())
                board.set_crew_salesman(crew_number, salesman.strip())
                st.rerun()

        for kind in KIND_LABELS:
            names = crew.names(kind)
            if not names:
                continue
            st.caption(f"{KIND_LABELS[kind]}s")
            for name in names:
                c1, c2 = st.columns([4, 1])
                with c1:
                    badge = ""
                    if kind == "person":
                        badge = ROLE_BADGES.get(board.find(name, kind).role, "")
                    st.text(name + badge)
                with c2:
                    if st.button("✕", key=f"rm_{crew_number}_{kind}_{name}"):
                        board.unassign(crew_number, name, kind)
                        st.rerun()

        if crew.has_assignments() or crew.job or crew.salesman:
            if st.button("Clear Crew", key=f"clear_{crew_number}"):
                board.clear_crew(crew_number)
                st.rerun()


def render_board():
    st.title("Crew Board")
    st.caption(f"Assignments for {selected_date.strftime('%A, %B %d, %Y')}")

    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Crews In Use", f"{board.crews_in_use()} / {CREW_COUNT}")
    m2.metric("Available People", len(board.available_people()))
    m3.metric("Available Trucks", len(board.available_trucks()))
    m4.metric("Available Equipment", len(board.available_equipment()))

    left, right = st.columns([2, 3])
    with left:
        render_assign_form()
    with right:
        render_availability()

    st.divider()

    for row_start in range(1, CREW_COUNT + 1, 4):
        cols = st.columns(4)
        for offset, col in enumerate(cols):
            with col:
                render_crew_card(row_start + offset)

    st.divider()
    st.subheader("Available")
    a1, a2, a3 = st.columns(3)
    with a1:
        st.markdown("**People**")
        for p in board.available_people():
            st.text(p.name + ROLE_BADGES.get(p.role, ""))
    with a2:
        st.markdown("**Trucks**")
        for t in board.available_trucks():
            st.text(t.name)
    with a3:
        st.markdown("**Equipment**")
        for e in board.available_equipment():
            st.text(f"{e.name} ({e.kind})")


# ---------------------------------------------------------------------------
# Daily Summary
# ---------------------------------------------------------------------------

def render_summary():
    st.title("Daily Summary")

    col1, col2 = st.columns([3, 2])
    with col1:
        st.plotly_chart(charts.build_crew_load_chart(board), use_container_width=True)
    with col2:
        st.plotly_chart(charts.build_utilization_chart(board), use_container_width=True)

    st.subheader("Sheet Rows")
    values = schedule_values(board, date_key, session.last_update)
    df = values_frame(values)
    if len(df) > 1:
        st.dataframe(df, use_container_width=True, hide_index=True)
    else:
        st.info("No crews assigned yet.")

    st.download_button(
        "Download CSV",
        df.to_csv(index=False).encode("utf-8-sig"),
        file_name=f"crew_schedule_{date_key}.csv",
        mime="text/csv",
    )


# ---------------------------------------------------------------------------
# Routing
# ---------------------------------------------------------------------------

if page == "Crew Board":
    render_board()
elif page == "Daily Summary":
    render_summary()
