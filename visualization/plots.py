"""
Visualization module for the Urban CO2 Capture Twin.

Provides Plotly-based interactive plots for the Streamlit interface.
"""

import numpy as np
import plotly.graph_objects as go
from typing import Dict, List, Optional, Sequence

from config import DISPLAY_MIN_CONCENTRATION, DISPLAY_MAX_CONCENTRATION
from analysis.metrics import MitigationStats, breakdown_share_pct
from models.entities import CaptureDevice, DeviceSpec, EmissionSource, WindDirection, device_catalog
from data.city_layout import get_landmark_sources

_SOURCE_SYMBOLS = {"factory": "square", "commercial": "diamond"}


def concentration_color(
    value: float,
    min_value: float = DISPLAY_MIN_CONCENTRATION,
    max_value: float = DISPLAY_MAX_CONCENTRATION,
) -> str:
    """
    Map a concentration to an hsla() color string.

    Values at or below ``min_value`` are fully transparent.  Above it the
    hue slides from yellow (60) to red (0) while saturation and opacity
    grow, saturating at ``max_value``.
    """
    if value <= min_value:
        return "rgba(0, 0, 0, 0)"
    pct = min(value / max_value, 1.0)
    hue = (1 - pct) * 60
    saturation = pct * 100
    lightness = 40 + pct * 10
    alpha = 0.2 + pct * 0.6
    return f"hsla({hue:.1f}, {saturation:.1f}%, {lightness:.1f}%, {alpha:.2f})"


def _concentration_colorscale(max_value: float, min_value: float, steps: int = 11) -> list:
    """Plotly colorscale sampling concentration_color over [0, max_value]."""
    scale = []
    for frac in np.linspace(0.0, 1.0, steps):
        value = frac * max_value
        color = concentration_color(value, min_value=min_value, max_value=max_value)
        scale.append([float(frac), color])
    return scale


def create_concentration_figure(
    grid: np.ndarray,
    sources: Sequence[EmissionSource],
    devices: Sequence[CaptureDevice],
    wind: WindDirection = WindDirection.CALM,
    catalog: Optional[Dict[str, DeviceSpec]] = None,
    max_value: float = DISPLAY_MAX_CONCENTRATION,
) -> go.Figure:
    """Create the city concentration heatmap with sources and placed devices."""
    catalog = device_catalog() if catalog is None else catalog
    n_rows, n_cols = grid.shape
    fig = go.Figure()

    fig.add_trace(
        go.Heatmap(
            x=np.arange(n_cols),
            y=np.arange(n_rows),
            z=np.clip(grid, 0.0, max_value),
            zmin=0.0,
            zmax=max_value,
            colorscale=_concentration_colorscale(max_value, DISPLAY_MIN_CONCENTRATION),
            colorbar=dict(title="CO₂ units"),
            customdata=grid,
            name="CO₂",
            hovertemplate="x: %{x}<br>y: %{y}<br>CO₂: %{customdata:.1f}<extra></extra>",
        )
    )

    landmarks = get_landmark_sources(list(sources))
    if landmarks:
        fig.add_trace(
            go.Scatter(
                x=[s.x for s in landmarks],
                y=[s.y for s in landmarks],
                mode="markers",
                marker=dict(
                    size=14,
                    color="#fcd34d",
                    symbol=[_SOURCE_SYMBOLS.get(s.category, "circle") for s in landmarks],
                    line=dict(width=1, color="black"),
                ),
                text=[f"{s.id} ({s.base_rate:.0f})" for s in landmarks],
                name="Emission Sources",
                hovertemplate="%{text}<br>(%{x}, %{y})<extra></extra>",
            )
        )

    for kind, spec in catalog.items():
        placed = [d for d in devices if d.kind == kind]
        if not placed:
            continue
        fig.add_trace(
            go.Scatter(
                x=[d.x for d in placed],
                y=[d.y for d in placed],
                mode="markers",
                marker=dict(size=16, color=spec.color, symbol="circle",
                            line=dict(width=2, color="white")),
                name=spec.name,
                hovertemplate=f"{spec.name}<br>(%{{x}}, %{{y}})<extra></extra>",
            )
        )

    title = "Wind: calm" if wind is WindDirection.CALM else f"Wind: toward {wind.name.title()}"
    fig.update_layout(
        title=title,
        height=700,
        template="plotly_dark",
        legend=dict(
            orientation="h",
            yanchor="bottom",
            y=-0.12,
            xanchor="center",
            x=0.5,
        ),
        margin=dict(l=40, r=40, t=50, b=80),
    )

    # Row 0 is the northern edge
    fig.update_xaxes(title_text="x (cell)", range=[-0.5, n_cols - 0.5], constrain="domain")
    fig.update_yaxes(title_text="y (cell)", range=[n_rows - 0.5, -0.5],
                     scaleanchor="x", scaleratio=1)

    return fig


def create_breakdown_figure(
    stats: MitigationStats,
    catalog: Optional[Dict[str, DeviceSpec]] = None,
) -> go.Figure:
    """Horizontal bar chart of each placed kind's share of captured CO2."""
    catalog = device_catalog() if catalog is None else catalog
    shares = breakdown_share_pct(stats)

    kinds: List[str] = [k for k, c in stats.per_kind_counts.items() if c > 0]
    labels = [
        f"{catalog[k].name if k in catalog else k} ({stats.per_kind_counts[k]})"
        for k in kinds
    ]
    colors = [catalog[k].color if k in catalog else "#888888" for k in kinds]

    fig = go.Figure(
        go.Bar(
            x=[shares.get(k, 0.0) for k in kinds],
            y=labels,
            orientation="h",
            marker=dict(color=colors),
            text=[f"{shares.get(k, 0.0):.1f}%" for k in kinds],
            textposition="auto",
            hovertemplate="%{y}: %{x:.1f}%<extra></extra>",
        )
    )
    fig.update_layout(
        height=80 + 50 * max(len(kinds), 1),
        template="plotly_dark",
        margin=dict(l=20, r=20, t=20, b=30),
        showlegend=False,
    )
    # Shares can exceed 100 under wind
    x_max = max([100.0] + [shares.get(k, 0.0) for k in kinds])
    fig.update_xaxes(title_text="Share of captured CO₂ (%)", range=[0, x_max * 1.05])
    return fig
