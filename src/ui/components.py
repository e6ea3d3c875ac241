"""Reusable UI components for LoadCombo."""

from html import escape
from typing import List

import plotly.graph_objects as go

from src.core.data_models import GoverningEnvelope, ScenarioEnvelope
from src.ui.theme import THEME_TOKENS


def get_load_badge(label: str, kind: str = "info") -> str:
    """Generate an HTML badge for a load flag.

    Args:
        label: Badge text (e.g. "PATTERN L", "IMPORTED")
        kind: "warning", "error" or anything else for info

    Returns:
        HTML span with styled badge
    """
    colors = THEME_TOKENS["colors"]

    if kind == "warning":
        bg = colors["warning"]
    elif kind == "error":
        bg = colors["error"]
    else:
        bg = colors["accent_blue"]

    return f'<span class="load-badge" style="background-color:{bg};">{escape(label)}</span>'


def governing_card(envelope: ScenarioEnvelope, unit: str) -> str:
    """HTML card with a scenario's governing max pressure and min uplift/suction."""
    def source(combo: str, pattern: bool) -> str:
        text = f"{combo} (0.75L)" if pattern else combo
        return escape(text)

    title = escape(envelope.title.replace(" Analysis", ""))
    return (
        f'<div class="governing-card">'
        f'<div class="governing-title">{title}</div>'
        f'<p class="governing-value max">{envelope.max.value:.2f} {unit}</p>'
        f'<div class="governing-source" title="{source(envelope.max.combo, envelope.max.pattern)}">'
        f'From: {source(envelope.max.combo, envelope.max.pattern)}</div>'
        f'<p class="governing-value min">{envelope.min.value:.2f} {unit}</p>'
        f'<div class="governing-source" title="{source(envelope.min.combo, envelope.min.pattern)}">'
        f'From: {source(envelope.min.combo, envelope.min.pattern)}</div>'
        f'</div>'
    )


def create_envelope_chart(envelope: GoverningEnvelope, titles: List[str], unit: str) -> go.Figure:
    """Grouped bar chart of governing max and min per scenario.

    Args:
        envelope: Envelope of a completed run
        titles: Scenario titles in display order
        unit: Pressure unit for the axis label
    """
    colors = THEME_TOKENS["colors"]
    present = [title for title in titles if title in envelope.per_scenario]
    labels = [title.replace(" Analysis", "") for title in present]
    maxima = [envelope.per_scenario[title].max for title in present]
    minima = [envelope.per_scenario[title].min for title in present]

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=labels,
        y=[value.value for value in maxima],
        name="Max Pressure",
        marker_color=colors["accent_red"],
        hovertext=[value.combo for value in maxima],
    ))
    fig.add_trace(go.Bar(
        x=labels,
        y=[value.value for value in minima],
        name="Min (Uplift/Suction)",
        marker_color=colors["accent_blue"],
        hovertext=[value.combo for value in minima],
    ))

    fig.update_layout(
        title=dict(text="Governing Loads by Scenario", font=dict(size=16)),
        barmode="group",
        yaxis=dict(title=f"Load ({unit})", zeroline=True),
        xaxis=dict(tickangle=-30),
        height=420,
        margin=dict(l=40, r=40, t=60, b=120),
        legend=dict(orientation="h", y=1.08),
    )
    return fig
