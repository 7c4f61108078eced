"""Tab 4: Settings for projects, reports, export/import and demo data."""

import io
from datetime import datetime

import streamlit as st

from data.session_store import get_repository, commit, set_selected_project_id, reload_repository
from data.exporter import export_json, tenant_report_csv, tenant_report_excel, report_filename
from data.loader import load_import_file
from data.sample_data import initialize_demo_data
from engine.errors import HousingError, InvalidImportStructureError
from engine.stats import compute_project_stats
from config.logging_setup import get_logger

logger = get_logger(__name__)


def _render_projects(repo):
    st.subheader("Projekty")
    with st.form("add_project"):
        col1, col2 = st.columns(2)
        name = col1.text_input("Nazwa projektu")
        city = col2.text_input("Miasto")
        if st.form_submit_button("Dodaj projekt", type="primary"):
            if not name.strip():
                st.error("Podaj nazwę projektu")
            else:
                project = repo.add_project(name, city.strip() or None)
                commit()
                set_selected_project_id(project.id)
                st.rerun()

    if repo.projects:
        with st.expander("Edytuj projekt"):
            names = {p.id: p.name for p in repo.projects}
            with st.form("edit_project"):
                project_id = st.selectbox("Projekt", options=list(names), format_func=lambda p: names[p])
                new_name = st.text_input("Nowa nazwa")
                new_city = st.text_input("Nowe miasto")
                if st.form_submit_button("Zapisz"):
                    repo.update_project(project_id, new_name.strip() or None, new_city.strip() or None)
                    commit()
                    st.rerun()

    for project in repo.projects:
        stats = compute_project_stats(project)
        col1, col2, col3, col4 = st.columns([3, 2, 2, 2])
        col1.write(f"**{project.name}** {project.city or ''}")
        col2.write(f"{stats.occupancy_percent}% · {stats.occupied}/{stats.total} zajęte")
        col3.download_button(
            "Pobierz CSV",
            data=tenant_report_csv(project),
            file_name=report_filename(project, "csv"),
            mime="text/csv",
            key=f"csv_{project.id}",
        )
        buffer = io.BytesIO()
        tenant_report_excel(project, buffer)
        col3.download_button(
            "Pobierz Excel",
            data=buffer.getvalue(),
            file_name=report_filename(project, "xlsx"),
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            key=f"xlsx_{project.id}",
        )
        if col4.button("Usuń", key=f"project_del_{project.id}"):
            try:
                repo.delete_project(project.id)
            except HousingError as e:
                st.error(str(e))
            else:
                commit()
                st.rerun()


def _render_data_transfer(repo):
    st.subheader("Eksport / import danych")
    st.download_button(
        "Eksportuj wszystkie dane (JSON)",
        data=export_json(repo.projects, repo.archive),
        file_name=f"housing-export-{datetime.now():%Y-%m-%d}.json",
        mime="application/json",
    )

    uploaded = st.file_uploader("Plik eksportu", type=["json"], key="import_file")
    confirm = st.checkbox("Rozumiem, że import zastąpi wszystkie obecne dane")
    if st.button("Importuj", type="primary", disabled=not (uploaded and confirm)):
        try:
            projects, archive = load_import_file(uploaded)
        except (InvalidImportStructureError, ValueError) as e:
            logger.warning("Import rejected: %s", e)
            st.error(f"Nieprawidłowy plik: {e}")
        else:
            repo.replace_all(projects, archive)
            commit()
            st.success(f"Zaimportowano {len(projects)} projektów i {len(archive)} wpisów archiwum")


def _render_maintenance(repo):
    st.subheader("Konserwacja")
    col1, col2 = st.columns(2)
    if col1.button("Wczytaj dane demonstracyjne"):
        if initialize_demo_data(repo):
            commit()
            st.rerun()
        else:
            st.info("Dane demonstracyjne wczytuje się tylko do pustej bazy.")
    if col2.button("Zwolnij wygasłe wypowiedzenia"):
        released = repo.release_expired_notices()
        commit()
        st.success(f"Zwolniono {released} miejsc")
    if st.button("Wczytaj ponownie z dysku"):
        reload_repository()
        st.rerun()


def render(sidebar_state):
    """Render the Settings tab."""
    st.header("Ustawienia")
    repo = get_repository()
    _render_projects(repo)
    st.divider()
    _render_data_transfer(repo)
    st.divider()
    _render_maintenance(repo)
