"""Tab 1: Dashboard: occupancy, conflicts and running notices."""

import streamlit as st

from data.session_store import get_repository, is_data_loaded
from components.metrics_cards import render_metric_row, stats_metrics, render_alert_card
from components.charts import occupancy_donut, address_occupancy_bar
from components.tables import render_conflict_table, render_notice_table
from engine.stats import address_breakdown, collect_operators
from config.defaults import OPERATOR_NAMES


def render(sidebar_state):
    """Render the Dashboard tab."""
    st.header("Pulpit")

    if not is_data_loaded():
        st.info("Brak danych. Dodaj projekt lub wczytaj dane demonstracyjne w zakładce Ustawienia.")
        return

    repo = get_repository()

    st.subheader("Wszystkie projekty")
    portfolio = repo.portfolio_stats()
    render_metric_row(stats_metrics(portfolio))
    st.caption(f"Łączny koszt adresów: {portfolio.total_cost:,.2f} zł")

    if sidebar_state.project_id is None:
        return
    project = repo.get_project(sidebar_state.project_id)

    st.divider()
    st.subheader(project.name)
    stats = repo.project_stats(project.id)
    render_metric_row(stats_metrics(stats))

    operators = collect_operators(project)
    if operators:
        st.caption("Operatorzy: " + ", ".join(OPERATOR_NAMES.get(o, "Inny") for o in operators))

    col1, col2 = st.columns([3, 2])
    with col1:
        rows = address_breakdown(project)
        if rows:
            st.plotly_chart(address_occupancy_bar(rows), use_container_width=True)
        else:
            st.info("Projekt nie ma jeszcze adresów.")
    with col2:
        st.plotly_chart(occupancy_donut(stats), use_container_width=True)

    st.divider()
    st.subheader("Konflikty")
    conflicts = repo.conflicts(project.id)
    unassigned = sum(1 for c in conflicts if c.conflict_type == "no_room")
    if unassigned:
        render_alert_card(
            f"{unassigned} mieszkańca/ów bez przydzielonego miejsca. Przydziel im pokoje w zakładce Adresy.",
            level="warning",
        )
    render_conflict_table(conflicts)

    st.subheader("Wypowiedzenia")
    render_notice_table([n for n in repo.notices() if n["project_id"] == project.id])
