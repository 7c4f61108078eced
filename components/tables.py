"""Styled dataframe display helpers."""

import streamlit as st
import pandas as pd
from typing import List, Optional
from models.conflict import Conflict
from config.defaults import CONFLICT_TYPE_LABELS


def render_styled_table(
    df: pd.DataFrame,
    title: Optional[str] = None,
    height: Optional[int] = None,
    use_container_width: bool = True,
):
    """Render a styled, non-editable dataframe."""
    if title:
        st.subheader(title)
    st.dataframe(df, height=height, use_container_width=use_container_width)


def render_conflict_table(conflicts: List[Conflict]):
    """Conflicts grouped visually by type, overdue notices highlighted."""
    if not conflicts:
        st.success("Brak konfliktów")
        return

    df = pd.DataFrame([{
        "Typ": CONFLICT_TYPE_LABELS.get(c.conflict_type, c.conflict_type),
        "Projekt": c.project_name,
        "Adres": c.address_name,
        "Mieszkaniec": f"{c.first_name} {c.last_name}",
        "Komunikat": c.message,
    } for c in conflicts])

    def color_type(val):
        if val == CONFLICT_TYPE_LABELS["notice_overdue"]:
            return "background-color: #ffcccc; color: #cc0000; font-weight: bold"
        return "background-color: #fff3cd; color: #856404; font-weight: bold"

    st.dataframe(df.style.map(color_type, subset=["Typ"]), use_container_width=True)


def render_notice_table(notices: List[dict]):
    """Active notices with their countdown; negative days are overdue."""
    if not notices:
        st.info("Brak aktywnych wypowiedzeń")
        return

    df = pd.DataFrame([{
        "Projekt": n["project_name"],
        "Adres": n["address_name"],
        "Pokój": n["room_name"],
        "Miejsce": n["space_number"],
        "Mieszkaniec": n["tenant"].full_name,
        "Koniec": n["end_date"].isoformat(),
        "Pozostało dni": n["days_remaining"],
    } for n in notices])

    def color_days(val):
        if val < 0:
            return "color: #cc0000; font-weight: bold"
        if val <= 3:
            return "color: #856404; font-weight: bold"
        return ""

    st.dataframe(df.style.map(color_days, subset=["Pozostało dni"]), use_container_width=True)
