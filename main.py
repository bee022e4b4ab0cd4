"""
Urban CO2 Capture Twin: Streamlit Interface.

Run with:  streamlit run main.py
"""

import sys
import os

# Ensure the project root is on the Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import streamlit as st
import streamlit.components.v1 as components

from data.interfaces import MockDataProvider
from models.entities import WindDirection
from models.placement import placement_error, place_device
from analysis.metrics import aggregate, summary_rows
from visualization.plots import create_concentration_figure, create_breakdown_figure
from visualization.compass_widget import compass_html
from config import GRID_SIZE

# ── Page Config ──────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Urban CO₂ Capture Twin",
    page_icon="🌳",
    layout="wide",
)

st.title("Urban CO₂ Capture Twin")
st.markdown(
    "A digital twin for simulating CO₂ capture in an urban setting. "
    "Place capture units on the city grid and see how much of the "
    "baseline emission they remove."
)

provider = MockDataProvider()
sources = provider.get_emission_sources()
catalog = provider.get_device_catalog()

if "devices" not in st.session_state:
    st.session_state.devices = []
if "wind" not in st.session_state:
    st.session_state.wind = WindDirection.CALM


def reset_simulation():
    st.session_state.devices = []
    st.session_state.wind = WindDirection.CALM


# ── Sidebar Controls ─────────────────────────────────────────────────────────

st.sidebar.header("Wind Conditions")

wind_options = [
    WindDirection.CALM,
    WindDirection.NORTH,
    WindDirection.SOUTH,
    WindDirection.EAST,
    WindDirection.WEST,
]
wind = st.sidebar.radio(
    "Prevailing Wind",
    wind_options,
    key="wind",
    format_func=lambda w: "Calm" if w is WindDirection.CALM else f"Toward {w.name.title()}",
    help="Wind boosts spreading in its direction and damps spreading against it. "
         "The efficiency baseline is always computed with calm wind.",
)
with st.sidebar:
    components.html(compass_html(wind), height=170)

st.sidebar.markdown("---")
st.sidebar.header("Capture Units")

kind = st.sidebar.selectbox(
    "Unit Type",
    list(catalog.keys()),
    format_func=lambda k: catalog[k].name,
)
spec = catalog[kind]
st.sidebar.caption(
    f"Capture: {spec.capture_rate:.0f} units | Radius: {spec.radius} cells | "
    f"Cost: ${spec.cost:,.0f}"
)

col_x, col_y = st.sidebar.columns(2)
cell_x = col_x.number_input("Column (x)", min_value=0, max_value=GRID_SIZE - 1, value=0, step=1)
cell_y = col_y.number_input("Row (y)", min_value=0, max_value=GRID_SIZE - 1, value=0, step=1)

col_place, col_reset = st.sidebar.columns(2)
if col_place.button("Place Unit", key="place"):
    reason = placement_error(int(cell_x), int(cell_y), st.session_state.devices, sources)
    if reason:
        st.sidebar.warning(reason)
    else:
        st.session_state.devices = place_device(
            st.session_state.devices, int(cell_x), int(cell_y), kind, sources,
            catalog=catalog,
        )

col_reset.button("Reset Simulation", key="reset", on_click=reset_simulation)

devices = st.session_state.devices
st.sidebar.caption(f"Placed units: {len(devices)}")

# ── Computation ──────────────────────────────────────────────────────────────

stats = aggregate(sources, devices, wind, catalog=catalog)

# ── Main Panel ───────────────────────────────────────────────────────────────

col_map, col_stats = st.columns([3, 2])

with col_map:
    fig = create_concentration_figure(stats.mitigated_field, sources, devices, wind, catalog=catalog)
    st.plotly_chart(fig, use_container_width=True)

with col_stats:
    st.subheader("Live Impact")
    st.metric("Total CO₂ Emitted (Baseline)", f"{stats.total_baseline:,.0f} units")
    st.metric("Total CO₂ Captured", f"{stats.total_captured:,.0f} units")
    st.metric("Overall Capture Efficiency", f"{stats.efficiency_pct:.1f}%")
    st.progress(min(stats.efficiency_pct / 100.0, 1.0))

    if devices:
        st.subheader("Analysis")
        c1, c2 = st.columns(2)
        c1.metric("Total Investment", f"${stats.total_investment:,.0f}")
        c2.metric("Cost per Unit of CO₂ Captured", f"${stats.cost_per_unit_captured:,.2f}")

        st.subheader("Breakdown")
        st.plotly_chart(create_breakdown_figure(stats, catalog=catalog), use_container_width=True)
        st.dataframe(
            [
                {
                    "Unit": row["name"],
                    "Count": row["count"],
                    "Captured": round(row["captured"], 1),
                    "Share (%)": round(row["share_pct"], 1),
                }
                for row in summary_rows(stats, catalog=catalog)
            ],
            use_container_width=True,
        )
        if wind is not WindDirection.CALM:
            st.caption(
                "Per-unit capture is measured against the current-wind field, "
                "while the baseline and efficiency use the calm-wind field."
            )
    else:
        st.info("Select a unit type in the sidebar and place it on the map.")
