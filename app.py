"""Housing Management: Streamlit entry point."""

import streamlit as st
import sys
import os

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from components.sidebar import render_sidebar
from data.session_store import initialize_session_state
from tabs import (
    tab_dashboard,
    tab_addresses,
    tab_calendar,
    tab_settings,
)


def main():
    st.set_page_config(
        page_title="Zarządzanie kwaterami",
        page_icon="🏠",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    initialize_session_state()
    sidebar_state = render_sidebar()

    tab1, tab2, tab3, tab4 = st.tabs([
        "📊 Pulpit",
        "🏠 Adresy",
        "📅 Kalendarz",
        "⚙️ Ustawienia",
    ])

    with tab1:
        tab_dashboard.render(sidebar_state)
    with tab2:
        tab_addresses.render(sidebar_state)
    with tab3:
        tab_calendar.render(sidebar_state)
    with tab4:
        tab_settings.render(sidebar_state)


if __name__ == "__main__":
    main()
