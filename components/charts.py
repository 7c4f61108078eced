"""Plotly chart builders for the housing dashboard."""

import plotly.express as px
import plotly.graph_objects as go
import pandas as pd
from typing import List
from models.stats import SpaceStats


def occupancy_donut(stats: SpaceStats, title: str = "Obłożenie miejsc") -> go.Figure:
    """Donut of occupied, on-notice and vacant spaces."""
    fig = go.Figure(data=[go.Pie(
        labels=["Zajęte", "Wypowiedzenie", "Wolne"],
        values=[stats.occupied, stats.notice, stats.vacant],
        hole=0.6,
        marker_colors=["#E8734A", "#F5C542", "#4A90D9"],
        textinfo="percent+label",
    )])
    fig.update_layout(
        title=title,
        height=350,
        showlegend=True,
        annotations=[dict(text=f"{stats.occupied + stats.notice}/{stats.total}",
                          x=0.5, y=0.5, font_size=16, showarrow=False)],
    )
    return fig


def address_occupancy_bar(rows: List[dict], title: str = "Miejsca według adresu") -> go.Figure:
    """Stacked bar of space states per address (rows from engine.stats.address_breakdown)."""
    df = pd.DataFrame(rows, columns=["address_name", "occupied", "notice", "vacant"])
    fig = px.bar(
        df, x="address_name", y=["occupied", "notice", "vacant"],
        labels={"value": "Miejsca", "address_name": "Adres", "variable": ""},
        title=title,
        color_discrete_map={"occupied": "#E8734A", "notice": "#F5C542", "vacant": "#4A90D9"},
    )
    fig.update_layout(legend_title_text="", height=400, barmode="stack")
    return fig


def checkout_reasons_bar(archive_df: pd.DataFrame) -> go.Figure:
    """Count of archived check-outs per reason."""
    counts = archive_df["Powód"].value_counts().reset_index()
    counts.columns = ["Powód", "Liczba"]
    fig = px.bar(counts, x="Powód", y="Liczba", title="Wymeldowania według powodu",
                 color_discrete_sequence=["#4A90D9"])
    fig.update_layout(height=350)
    return fig
