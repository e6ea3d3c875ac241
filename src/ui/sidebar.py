"""Sidebar controls for the LoadCombo load combinator."""

import logging
from typing import Dict, Any

import streamlit as st

from src.combos.scenarios import COMBO_INPUT_IDS, SCENARIOS
from src.core.constants import COMBO_INPUTS_FILENAME, JURISDICTIONS
from src.core.data_models import DesignMethod, DesignStandard, LoadLevel, UnitSystem
from src.core.input_store import InputFileError, dump_inputs, parse_inputs
from src.ui.state import apply_form_values, form_values, get_state, set_state

logger = logging.getLogger(__name__)


def render_sidebar() -> Dict[str, Any]:
    """Render all sidebar controls and return the raw form values.

    Returns:
        Dictionary of every combinator input id -> widget value
    """
    with st.sidebar:
        st.header("Load Combinations")

        _render_design_basis()

        unit = UnitSystem(get_state("combo_unit_system")).pressure_unit
        _render_base_loads(unit)
        _render_snow_loads(unit)
        _render_wind_loads(unit)

        st.divider()
        _render_file_controls()

    return form_values(COMBO_INPUT_IDS)


def _render_design_basis() -> None:
    """Render standard, jurisdiction, method, load level and unit selectors."""
    st.markdown("##### Design Basis")

    st.selectbox(
        "ASCE Standard",
        options=[s.value for s in DesignStandard],
        key="combo_asce_standard",
    )
    st.selectbox(
        "Jurisdiction",
        options=JURISDICTIONS,
        key="combo_jurisdiction",
        help="NYCBC 2022 adopts ASCE 7-16; its formulas are used regardless of the selected standard."
    )
    col1, col2 = st.columns(2)
    with col1:
        st.selectbox("Design Method", options=[m.value for m in DesignMethod], key="combo_design_method")
    with col2:
        st.selectbox("Units", options=[u.value for u in UnitSystem], key="combo_unit_system")
    st.selectbox(
        "Input Load Level",
        options=[level.value for level in LoadLevel],
        key="combo_input_load_level",
        help="Level at which the snow and wind loads below were calculated."
    )


def _render_base_loads(unit: str) -> None:
    """Render loads shared by every scenario."""
    st.markdown("##### Base Loads")

    col1, col2 = st.columns(2)
    with col1:
        st.number_input(f"Dead Load D ({unit})", min_value=0.0, step=1.0, key="combo_dead_load_d")
        st.number_input(f"Roof Live Lr ({unit})", min_value=0.0, step=1.0, key="combo_roof_live_load_lr")
    with col2:
        st.number_input(f"Live Load L ({unit})", min_value=0.0, step=1.0, key="combo_live_load_l")
        st.number_input(f"Rain Load R ({unit})", min_value=0.0, step=1.0, key="combo_rain_load_r")
    st.number_input(f"Seismic Load E ({unit})", step=1.0, key="combo_seismic_load_e")


def _render_snow_loads(unit: str) -> None:
    """Render the four snow distributions."""
    st.markdown("##### Snow Loads")

    col1, col2 = st.columns(2)
    with col1:
        st.number_input(f"Balanced Sb ({unit})", min_value=0.0, step=1.0,
                        key="combo_balanced_snow_load_sb")
        st.number_input(f"Unbal. Leeward Sul ({unit})", min_value=0.0, step=1.0,
                        key="combo_unbalanced_leeward_snow_load_sul")
    with col2:
        st.number_input(f"Unbal. Windward Suw ({unit})", min_value=0.0, step=1.0,
                        key="combo_unbalanced_windward_snow_load_suw")
        st.number_input(f"Drift Surcharge Sd ({unit})", min_value=0.0, step=1.0,
                        key="combo_drift_surcharge_sd")


def _render_wind_loads(unit: str) -> None:
    """Render max/min wind per surface (positive toward the surface)."""
    st.markdown("##### Wind Loads")

    for scenario in SCENARIOS:
        if scenario.wind_ids is None:
            continue
        max_id, min_id = scenario.wind_ids
        col1, col2 = st.columns(2)
        with col1:
            st.number_input(f"{scenario.short_title} max ({unit})", step=1.0, key=max_id)
        with col2:
            st.number_input(f"{scenario.short_title} min ({unit})", step=1.0, key=min_id)


def _on_inputs_uploaded() -> None:
    uploaded = st.session_state.get("combo_inputs_upload")
    if uploaded is None:
        return
    try:
        values = parse_inputs(uploaded.getvalue().decode("utf-8"), COMBO_INPUT_IDS)
    except (InputFileError, UnicodeDecodeError) as e:
        logger.warning(f"Rejected input file {uploaded.name}: {e}")
        set_state("load_error", f"Could not load {uploaded.name}: {e}")
        return
    apply_form_values(values)
    set_state("load_error", "")
    logger.info(f"Loaded {len(values)} inputs from {uploaded.name}")


def _render_file_controls() -> None:
    """Render save/load of the flat input file."""
    st.markdown("##### Save / Load Inputs")

    st.download_button(
        label="Save Inputs",
        data=dump_inputs(form_values(COMBO_INPUT_IDS), COMBO_INPUT_IDS),
        file_name=COMBO_INPUTS_FILENAME,
        mime="text/plain",
        use_container_width=True,
    )
    st.file_uploader(
        "Load Inputs",
        type=["txt", "json"],
        key="combo_inputs_upload",
        on_change=_on_inputs_uploaded,
    )
    if get_state("load_error"):
        st.error(get_state("load_error"))
