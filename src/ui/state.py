"""
Centralized session state management for the LoadCombo Streamlit application.

Form widgets use their input id (e.g. "combo_dead_load_d") as the session
state key, so the current form is always `st.session_state[id]` and saved
input files map straight onto widget state.
"""

from typing import Any, Dict, Iterable, Optional

import streamlit as st

from src.core.config import AppConfig
from src.core.constants import JURISDICTION_ASCE


# Default values for the load combinator form
COMBO_DEFAULTS: Dict[str, Any] = {
    "combo_asce_standard": "ASCE 7-16",
    "combo_jurisdiction": JURISDICTION_ASCE,
    "combo_design_method": "LRFD",
    "combo_input_load_level": "Nominal (Service/ASD)",
    "combo_unit_system": "imperial",
    "combo_dead_load_d": 20.0,
    "combo_live_load_l": 0.0,
    "combo_roof_live_load_lr": 0.0,
    "combo_rain_load_r": 0.0,
    "combo_balanced_snow_load_sb": 0.0,
    "combo_unbalanced_windward_snow_load_suw": 0.0,
    "combo_unbalanced_leeward_snow_load_sul": 0.0,
    "combo_drift_surcharge_sd": 0.0,
    "combo_wind_wall_ww_max": 0.0,
    "combo_wind_wall_ww_min": 0.0,
    "combo_wind_wall_lw_max": 0.0,
    "combo_wind_wall_lw_min": 0.0,
    "combo_wind_roof_ww_max": 0.0,
    "combo_wind_roof_ww_min": 0.0,
    "combo_wind_roof_lw_max": 0.0,
    "combo_wind_roof_lw_min": 0.0,
    "combo_wind_cc_max": 0.0,
    "combo_wind_cc_min": 0.0,
    "combo_wind_cc_wall_max": 0.0,
    "combo_wind_cc_wall_min": 0.0,
    "combo_seismic_load_e": 0.0,
}

# Default values for the snow calculator form
SNOW_DEFAULTS: Dict[str, Any] = {
    "snow_asce_standard": "ASCE 7-16",
    "snow_unit_system": "imperial",
    "snow_risk_category": "II",
    "snow_design_method": "LRFD",
    "snow_jurisdiction": JURISDICTION_ASCE,
    "snow_nycbc_minimum_roof_snow_load": 30.0,
    "snow_ground_snow_load": 25.0,
    "snow_surface_roughness_category": "C",
    "snow_exposure_condition": "Partially Exposed",
    "snow_thermal_condition": "Heated Structure",
    "snow_roof_slope_degrees": 5.0,
    "snow_is_roof_slippery": "No",
    "snow_calculate_unbalanced": "No",
    "snow_calculate_drift": "No",
    "snow_calculate_sliding": "No",
    "snow_eave_to_ridge_distance_W": 20.0,
    "snow_is_simply_supported_prismatic": "Yes",
    "snow_winter_wind_parameter_W2": 0.5,
    "snow_upper_roof_length_lu": 0.0,
    "snow_height_difference_hc": 0.0,
    "snow_lower_roof_length_ll": 0.0,
}

# Non-form state
STATE_DEFAULTS: Dict[str, Any] = {
    "config": None,           # AppConfig instance - initialized separately
    "import_banner": None,    # {"source", "type", "ids"} after a load hand-off
    "load_error": "",         # Message from a rejected input file
    "snow_load_error": "",    # Same, for the snow calculator
    "snow_result": None,      # Last SnowResult, for "send to combinator"
    "snapshots_restored": False,
}


def init_session_state(config: Optional[AppConfig] = None) -> None:
    """
    Initialize all session state keys with their default values.

    Call once at the start of each script run, before any widget is created.
    The configured default standard and unit system seed both forms.
    """
    config = config or AppConfig()

    for key, default in STATE_DEFAULTS.items():
        if key not in st.session_state:
            st.session_state[key] = default
    if st.session_state.config is None:
        st.session_state.config = config

    form_defaults = dict(COMBO_DEFAULTS)
    form_defaults.update(SNOW_DEFAULTS)
    form_defaults["combo_asce_standard"] = config.default_standard.value
    form_defaults["snow_asce_standard"] = config.default_standard.value
    form_defaults["combo_unit_system"] = config.default_unit_system.value
    form_defaults["snow_unit_system"] = config.default_unit_system.value

    for key, default in form_defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default


def get_state(key: str, default=None):
    """
    Get session state value with fallback to default.

    Args:
        key: Session state key to retrieve
        default: Fallback value if key not found

    Returns:
        Value from session state, the form/state defaults, or provided default
    """
    fallback = STATE_DEFAULTS.get(key, COMBO_DEFAULTS.get(key, SNOW_DEFAULTS.get(key, default)))
    return st.session_state.get(key, fallback)


def set_state(key: str, value) -> None:
    """Set session state value."""
    st.session_state[key] = value


def form_values(input_ids: Iterable[str]) -> Dict[str, Any]:
    """Current widget values for a list of input ids"""
    return {input_id: get_state(input_id) for input_id in input_ids}


def apply_form_values(values: Dict[str, Any]) -> None:
    """Write loaded values into widget state.

    Must run before the widgets are created in the current script run
    (e.g. from an on_change callback).
    """
    defaults = dict(COMBO_DEFAULTS)
    defaults.update(SNOW_DEFAULTS)
    for key, value in values.items():
        default = defaults.get(key)
        if isinstance(default, float):
            try:
                value = float(value)
            except (TypeError, ValueError):
                value = 0.0
        st.session_state[key] = value
