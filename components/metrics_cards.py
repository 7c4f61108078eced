"""Reusable KPI metric card widgets."""

import streamlit as st
from models.stats import ProjectStats


def render_metric_row(metrics: list[dict]):
    """Render a row of metric cards.

    Each metric dict should have: label, value, and optionally delta, delta_color.
    """
    cols = st.columns(len(metrics))
    for col, m in zip(cols, metrics):
        with col:
            st.metric(
                label=m["label"],
                value=m["value"],
                delta=m.get("delta"),
                delta_color=m.get("delta_color", "normal"),
            )


def stats_metrics(stats: ProjectStats) -> list[dict]:
    """The six dashboard cards for a project or portfolio."""
    return [
        {"label": "Obłożenie", "value": f"{stats.occupancy_percent}%"},
        {"label": "Razem", "value": str(stats.total)},
        {"label": "Zajęte", "value": str(stats.occupied)},
        {"label": "Wolne", "value": str(stats.vacant)},
        {"label": "Wyp.", "value": str(stats.notice)},
        {"label": "Konflikty", "value": str(stats.conflict_count),
         "delta": "do wyjaśnienia" if stats.conflict_count else None,
         "delta_color": "inverse"},
    ]


def render_alert_card(message: str, level: str = "warning"):
    if level == "error":
        st.error(message, icon="🔴")
    elif level == "warning":
        st.warning(message, icon="🟡")
    else:
        st.info(message, icon="🔵")
