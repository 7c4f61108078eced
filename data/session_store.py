"""Typed wrapper around st.session_state for application data."""

import streamlit as st
from typing import Optional
from data.repository import HousingRepository
from data.storage import FileBlobStorage


def initialize_session_state():
    """Create the repository once per session and load the persisted snapshot."""
    if "repository" not in st.session_state:
        st.session_state["repository"] = HousingRepository(FileBlobStorage()).load()
    defaults = {
        "selected_project_id": None,
        "selected_address_id": None,
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default


# --- Getters ---

def get_repository() -> HousingRepository:
    return st.session_state["repository"]


def get_selected_project_id() -> Optional[str]:
    return st.session_state.get("selected_project_id")


def get_selected_address_id() -> Optional[str]:
    return st.session_state.get("selected_address_id")


def is_data_loaded() -> bool:
    return bool(get_repository().projects)


# --- Setters ---

def set_selected_project_id(project_id: Optional[str]):
    if project_id != st.session_state.get("selected_project_id"):
        st.session_state["selected_address_id"] = None
    st.session_state["selected_project_id"] = project_id


def set_selected_address_id(address_id: Optional[str]):
    st.session_state["selected_address_id"] = address_id


def set_flash_message(message: str):
    """Queue a success message for the next run (survives st.rerun)."""
    st.session_state["flash_message"] = message


def pop_flash_message() -> Optional[str]:
    return st.session_state.pop("flash_message", None)


# --- Persistence ---

def reload_repository():
    get_repository().load()


def commit():
    """Persist the whole snapshot after a successful mutation."""
    get_repository().save()
