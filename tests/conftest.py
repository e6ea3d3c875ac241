import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.combos.scenarios import COMBO_INPUT_IDS, combo_inputs_from_form, run_combinations
from src.core.data_models import ComboInputs, DesignMethod, ScenarioLoads


@pytest.fixture
def combo_form():
    """Flat combinator form with every id present (7-16 LRFD, imperial)."""
    form = {input_id: 0.0 for input_id in COMBO_INPUT_IDS}
    form.update({
        "combo_asce_standard": "ASCE 7-16",
        "combo_jurisdiction": "ASCE 7 (No Local Amendments)",
        "combo_design_method": "LRFD",
        "combo_input_load_level": "Nominal (Service/ASD)",
        "combo_unit_system": "imperial",
        "combo_dead_load_d": 20.0,
        "combo_live_load_l": 40.0,
        "combo_roof_live_load_lr": 20.0,
        "combo_balanced_snow_load_sb": 30.0,
        "combo_unbalanced_windward_snow_load_suw": 9.0,
        "combo_unbalanced_leeward_snow_load_sul": 35.0,
        "combo_drift_surcharge_sd": 12.0,
        "combo_wind_wall_ww_max": 15.0,
        "combo_wind_wall_ww_min": 5.0,
        "combo_wind_wall_lw_max": -4.0,
        "combo_wind_wall_lw_min": -10.0,
        "combo_wind_roof_ww_max": 6.0,
        "combo_wind_roof_ww_min": -18.0,
        "combo_wind_roof_lw_max": -2.0,
        "combo_wind_roof_lw_min": -12.0,
        "combo_wind_cc_max": 16.0,
        "combo_wind_cc_min": -30.0,
        "combo_wind_cc_wall_max": 20.0,
        "combo_wind_cc_wall_min": -22.0,
    })
    return form


@pytest.fixture
def combo_inputs(combo_form) -> ComboInputs:
    return combo_inputs_from_form(combo_form)


@pytest.fixture
def run_result(combo_inputs):
    return run_combinations(combo_inputs)


@pytest.fixture
def single_scenario_inputs():
    """7-16 ASD inputs with only the base loads and one wind pair."""
    return ComboInputs(
        method=DesignMethod.ASD,
        D=20.0,
        Lr=20.0,
        scenarios={"windward_wall": ScenarioLoads(S=0.0, W_max=10.0, W_min=-10.0)},
    )
