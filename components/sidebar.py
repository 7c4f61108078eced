"""Global sidebar: project selection and data status."""

import streamlit as st
from dataclasses import dataclass
from typing import Optional
from data.session_store import get_repository, get_selected_project_id, set_selected_project_id
from engine.stats import compute_portfolio_stats


@dataclass
class SidebarState:
    project_id: Optional[str]


def render_sidebar() -> SidebarState:
    """Render the global sidebar controls and return current state."""
    repo = get_repository()
    with st.sidebar:
        st.title("Zarządzanie kwaterami")
        st.divider()

        project_names = {p.id: p.name for p in repo.projects}
        project_ids = list(project_names.keys())

        selected_id = None
        if project_ids:
            current_id = get_selected_project_id()
            selected_idx = project_ids.index(current_id) if current_id in project_ids else 0
            selected_id = st.selectbox(
                "Projekt",
                options=project_ids,
                format_func=lambda x: project_names.get(x, x),
                index=selected_idx,
                key="sidebar_project",
            )
            set_selected_project_id(selected_id)

            project = repo.get_project(selected_id)
            if project.city:
                st.caption(project.city)
            st.caption(f"Adresy: {len(project.addresses)}")
        else:
            st.warning("Brak projektów. Dodaj projekt w zakładce Ustawienia")

        st.divider()

        portfolio = compute_portfolio_stats(repo.projects)
        st.caption(f"Wszystkie projekty: {portfolio.occupancy_percent}% obłożenia")
        st.caption(f"Mieszkańcy: {portfolio.people_count}")
        if portfolio.conflict_count:
            st.error(f"Konflikty: {portfolio.conflict_count}")

    return SidebarState(project_id=selected_id)
