"""Tab 3: Calendar and archive of check-ins, notice ends, check-outs."""

from datetime import date

import streamlit as st
import pandas as pd

from data.session_store import get_repository
from data.exporter import archive_frame
from components.charts import checkout_reasons_bar
from components.tables import render_styled_table
from engine.calendar_events import filter_events, events_for_month
from config.defaults import CALENDAR_EVENT_LABELS


def render(sidebar_state):
    """Render the Calendar & Archive tab."""
    st.header("Kalendarz")
    repo = get_repository()

    project_names = [p.name for p in repo.projects]
    selected = st.multiselect("Projekty", options=project_names, key="calendar_projects")

    today = date.today()
    col1, col2 = st.columns(2)
    year = col1.number_input("Rok", min_value=2000, max_value=2100, value=today.year, step=1)
    month = col2.selectbox("Miesiąc", options=list(range(1, 13)), index=today.month - 1)

    events = filter_events(repo.calendar_events(), selected)
    month_events = events_for_month(events, int(year), int(month))
    if month_events:
        render_styled_table(pd.DataFrame([{
            "Data": e.event_date.isoformat(),
            "Zdarzenie": CALENDAR_EVENT_LABELS.get(e.event_type, e.event_type),
            "Mieszkaniec": e.tenant_name,
            "Projekt": e.project_name,
            "Adres": e.address_name,
            "Pokój": e.room_name or "",
        } for e in month_events]))
    else:
        st.info("Brak zdarzeń w wybranym miesiącu.")

    st.divider()
    st.subheader("Archiwum wymeldowań")
    df = archive_frame(repo.archive)
    if df.empty:
        st.info("Archiwum jest puste.")
        return
    render_styled_table(df)
    st.plotly_chart(checkout_reasons_bar(df), use_container_width=True)
