"""Snow load calculator panel for LoadCombo."""

import logging
from typing import Any, Dict

import pandas as pd
import streamlit as st

from src.core.constants import JURISDICTION_NYCBC_2022, JURISDICTIONS, SNOW_INPUTS_FILENAME
from src.core.data_models import DesignStandard, SnowResult, UnitSystem
from src.core.input_store import InputFileError, dump_inputs, parse_inputs
from src.core.load_tables import (
    EXPOSURE_CONDITIONS,
    EXPOSURE_FACTOR_TABLE,
    SNOW_IMPORTANCE_FACTORS,
    THERMAL_FACTORS,
)
from src.engines.snow_engine import SNOW_INPUT_IDS
from src.ui.state import apply_form_values, form_values, get_state, set_state

logger = logging.getLogger(__name__)

YES_NO = ["Yes", "No"]


def render_snow_inputs() -> Dict[str, Any]:
    """Render the snow calculator form.

    Returns:
        Dictionary of every snow input id -> widget value
    """
    units = UnitSystem(get_state("snow_unit_system"))
    p_unit, l_unit = units.pressure_unit, units.length_unit

    col1, col2, col3 = st.columns(3)
    with col1:
        st.selectbox("ASCE Standard", options=[s.value for s in DesignStandard], key="snow_asce_standard")
        st.selectbox("Jurisdiction", options=JURISDICTIONS, key="snow_jurisdiction")
        st.selectbox("Units", options=[u.value for u in UnitSystem], key="snow_unit_system")
    with col2:
        st.selectbox("Risk Category", options=list(SNOW_IMPORTANCE_FACTORS), key="snow_risk_category")
        st.selectbox("Surface Roughness", options=list(EXPOSURE_FACTOR_TABLE), key="snow_surface_roughness_category")
        st.selectbox("Exposure", options=EXPOSURE_CONDITIONS, key="snow_exposure_condition")
    with col3:
        st.selectbox("Thermal Condition", options=list(THERMAL_FACTORS), key="snow_thermal_condition")
        st.number_input(f"Ground Snow Load pg ({p_unit})", min_value=0.0, step=1.0, key="snow_ground_snow_load")
        if get_state("snow_jurisdiction") == JURISDICTION_NYCBC_2022:
            st.number_input(f"NYCBC Min. Roof Snow ({p_unit})", min_value=0.0, step=1.0,
                            key="snow_nycbc_minimum_roof_snow_load")

    st.markdown("##### Roof Geometry")
    col1, col2, col3 = st.columns(3)
    with col1:
        st.number_input("Roof Slope (deg)", min_value=0.0, max_value=90.0, step=0.5, key="snow_roof_slope_degrees")
        st.selectbox("Slippery Roof Surface", options=YES_NO, key="snow_is_roof_slippery")
    with col2:
        st.number_input(f"Eave to Ridge W ({l_unit})", min_value=0.0, step=1.0, key="snow_eave_to_ridge_distance_W")
        st.number_input("Winter Wind Parameter W2", min_value=0.0, max_value=1.0, step=0.05,
                        key="snow_winter_wind_parameter_W2")
    with col3:
        st.selectbox("Simply Supported Prismatic Members", options=YES_NO, key="snow_is_simply_supported_prismatic")

    st.markdown("##### Optional Cases")
    col1, col2, col3 = st.columns(3)
    with col1:
        st.selectbox("Unbalanced Snow", options=YES_NO, key="snow_calculate_unbalanced")
    with col2:
        st.selectbox("Drift on Lower Roof", options=YES_NO, key="snow_calculate_drift")
    with col3:
        st.selectbox("Sliding Snow", options=YES_NO, key="snow_calculate_sliding")

    if get_state("snow_calculate_drift") == "Yes":
        col1, col2, col3 = st.columns(3)
        with col1:
            st.number_input(f"Upper Roof Length lu ({l_unit})", min_value=0.0, step=1.0, key="snow_upper_roof_length_lu")
        with col2:
            st.number_input(f"Height Difference hc ({l_unit})", min_value=0.0, step=0.5, key="snow_height_difference_hc")
        with col3:
            st.number_input(f"Lower Roof Length ll ({l_unit})", min_value=0.0, step=1.0, key="snow_lower_roof_length_ll")

    _render_snow_file_controls()

    return form_values(SNOW_INPUT_IDS)


def _on_snow_inputs_uploaded() -> None:
    uploaded = st.session_state.get("snow_inputs_upload")
    if uploaded is None:
        return
    try:
        values = parse_inputs(uploaded.getvalue().decode("utf-8"), SNOW_INPUT_IDS)
    except (InputFileError, UnicodeDecodeError) as e:
        logger.warning(f"Rejected snow input file {uploaded.name}: {e}")
        set_state("snow_load_error", f"Could not load {uploaded.name}: {e}")
        return
    apply_form_values(values)
    set_state("snow_load_error", "")
    logger.info(f"Loaded {len(values)} snow inputs from {uploaded.name}")


def _render_snow_file_controls() -> None:
    """Render save/load of the snow input file."""
    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            label="Save Snow Inputs",
            data=dump_inputs(form_values(SNOW_INPUT_IDS), SNOW_INPUT_IDS),
            file_name=SNOW_INPUTS_FILENAME,
            mime="text/plain",
            use_container_width=True,
        )
    with col2:
        st.file_uploader(
            "Load Snow Inputs",
            type=["txt", "json"],
            key="snow_inputs_upload",
            on_change=_on_snow_inputs_uploaded,
        )
    if get_state("snow_load_error"):
        st.error(get_state("snow_load_error"))


def snow_summary_dataframe(result: SnowResult) -> pd.DataFrame:
    """Nominal snow loads for display, in the input unit system."""
    unit = result.inputs.unit_system.pressure_unit
    rows = [
        {"Load": "Flat roof snow pf", "Value": result.pf, "Unit": unit},
        {"Load": "Sloped roof snow ps = Cs·pf", "Value": result.ps_calculated, "Unit": unit},
        {"Load": "Balanced snow (governing)", "Value": result.ps_balanced, "Unit": unit},
    ]
    if result.unbalanced is not None and result.unbalanced.applicable:
        rows.append({"Load": "Unbalanced windward", "Value": result.unbalanced.windward, "Unit": unit})
        rows.append({"Load": "Unbalanced leeward", "Value": result.unbalanced.leeward_total, "Unit": unit})
    if result.drift is not None and result.drift.applicable:
        rows.append({"Load": "Drift surcharge pd", "Value": result.drift.pd, "Unit": unit})
    if result.sliding is not None and result.sliding.applicable:
        rows.append({"Load": "Sliding snow load Ws", "Value": result.sliding.Ws,
                     "Unit": result.inputs.unit_system.line_load_unit})
        rows.append({"Load": "Sliding snow intensity", "Value": result.sliding.ps_sliding, "Unit": unit})
    if result.partial_load > 0:
        rows.append({"Load": "Partial load (adjacent span)", "Value": result.partial_load, "Unit": unit})
    return pd.DataFrame(rows, columns=["Load", "Value", "Unit"])


def render_snow_results(result: SnowResult) -> None:
    """Render snow factors, loads, notes and the calculation trail."""
    units = result.inputs.unit_system

    for warning in result.warnings:
        st.warning(warning)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Is", f"{result.Is:.2f}")
    col2.metric("Ce", f"{result.Ce:.2f}")
    col3.metric("Ct", f"{result.Ct:.2f}")
    col4.metric("Cs", f"{result.Cs:.3f}")

    st.dataframe(
        snow_summary_dataframe(result).style.format({"Value": "{:.2f}"}),
        hide_index=True,
        use_container_width=True,
    )

    if result.minimum_governs:
        st.info(f"Low-slope minimum governs: pm = {result.ps_minimum:.2f} {units.pressure_unit}.")
    if result.nycbc_minimum_governs:
        st.info("NYCBC 2022 minimum roof snow load governs the balanced snow load.")

    for label, case in (("Unbalanced", result.unbalanced), ("Drift", result.drift), ("Sliding", result.sliding)):
        if case is not None and not case.applicable:
            st.caption(f"{label}: {case.reason}")
    if result.drift is not None and result.drift.applicable:
        st.caption(
            f"Drift: hd = {result.drift.hd:.2f} {units.length_unit}, "
            f"w = {result.drift.w:.2f} {units.length_unit}"
        )

    for note in result.notes:
        st.caption(note)

    with st.expander("Calculation Steps"):
        for step in result.calculations:
            st.markdown(f"**{step['description']}**  \n_{step['reference']}_")
            st.code(step["calculation"], language=None)
