"""
Input gathering and validation for the calculators.

Form values arrive as strings or numbers from the UI or from saved input
files. They are coerced here, before any calculation runs, so the
calculation engines only ever see finite floats.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List

from .constants import (
    DEAD_LOAD_WARNING_PSF,
    DEAD_LOAD_WARNING_KPA,
    JURISDICTIONS,
)


@dataclass
class ValidationResult:
    """Errors block the calculation; warnings are reported with the results."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0


# Rule keys: min, max, required, label, choices
VALIDATION_RULES: Dict[str, Dict[str, Dict[str, Any]]] = {
    "combo": {
        "combo_asce_standard": {"required": True, "choices": ["ASCE 7-16", "ASCE 7-22"], "label": "ASCE Standard"},
        "combo_jurisdiction": {"required": False, "choices": JURISDICTIONS, "label": "Jurisdiction"},
        "combo_design_method": {"required": True, "choices": ["LRFD", "ASD"], "label": "Design Method"},
        "combo_input_load_level": {
            "required": True,
            "choices": ["Nominal (Service/ASD)", "Strength (LRFD)"],
            "label": "Input Load Level",
        },
        "combo_unit_system": {"required": True, "choices": ["imperial", "metric"], "label": "Unit System"},
        "combo_dead_load_d": {"min": 0.001, "required": True, "label": "Dead Load (D)"},
        "combo_live_load_l": {"min": 0, "required": False, "label": "Live Load (L)"},
        "combo_roof_live_load_lr": {"min": 0, "required": False, "label": "Roof Live Load (Lr)"},
        "combo_rain_load_r": {"min": 0, "required": False, "label": "Rain Load (R)"},
        "combo_balanced_snow_load_sb": {"min": 0, "required": False, "label": "Balanced Snow (Sb)"},
        "combo_unbalanced_windward_snow_load_suw": {"min": 0, "required": False, "label": "Unbalanced Windward (Suw)"},
        "combo_unbalanced_leeward_snow_load_sul": {"min": 0, "required": False, "label": "Unbalanced Leeward (Sul)"},
        "combo_drift_surcharge_sd": {"min": 0, "required": False, "label": "Drift Surcharge (Sd)"},
        # Wind may be negative (suction)
        "combo_wind_wall_ww_max": {"required": False, "label": "Windward Wall W max"},
        "combo_wind_wall_ww_min": {"required": False, "label": "Windward Wall W min"},
        "combo_wind_wall_lw_max": {"required": False, "label": "Leeward Wall W max"},
        "combo_wind_wall_lw_min": {"required": False, "label": "Leeward Wall W min"},
        "combo_wind_roof_ww_max": {"required": False, "label": "Windward Roof W max"},
        "combo_wind_roof_ww_min": {"required": False, "label": "Windward Roof W min"},
        "combo_wind_roof_lw_max": {"required": False, "label": "Leeward Roof W max"},
        "combo_wind_roof_lw_min": {"required": False, "label": "Leeward Roof W min"},
        "combo_wind_cc_max": {"required": False, "label": "C&C Roof W max"},
        "combo_wind_cc_min": {"required": False, "label": "C&C Roof W min"},
        "combo_wind_cc_wall_max": {"required": False, "label": "C&C Wall W max"},
        "combo_wind_cc_wall_min": {"required": False, "label": "C&C Wall W min"},
        "combo_seismic_load_e": {"required": False, "label": "Seismic Load (E)"},
    },
    "snow": {
        "snow_asce_standard": {"required": True, "choices": ["ASCE 7-16", "ASCE 7-22"], "label": "ASCE Standard"},
        "snow_unit_system": {"required": True, "choices": ["imperial", "metric"], "label": "Unit System"},
        "snow_ground_snow_load": {"min": 0, "max": 300, "required": True, "label": "Ground Snow Load"},
        "snow_nycbc_minimum_roof_snow_load": {"min": 0, "required": False, "label": "NYCBC Minimum Roof Snow Load"},
        "snow_roof_slope_degrees": {"min": 0, "max": 90, "required": False, "label": "Roof Slope"},
        "snow_eave_to_ridge_distance_W": {"min": 0, "required": False, "label": "Eave to Ridge Distance (W)"},
        "snow_winter_wind_parameter_W2": {"min": 0, "max": 1, "required": False, "label": "Winter Wind Parameter (W2)"},
        "snow_upper_roof_length_lu": {"min": 0, "required": False, "label": "Upper Roof Length (lu)"},
        "snow_height_difference_hc": {"min": 0, "required": False, "label": "Height Difference (hc)"},
        "snow_lower_roof_length_ll": {"min": 0, "required": False, "label": "Lower Roof Length (ll)"},
    },
}


def coerce_number(value: Any) -> float:
    """Convert a form value to float; blanks, non-numeric text and NaN become 0.0.

    Infinite values pass through so validation can reject them.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return 0.0
    if math.isnan(number):
        return 0.0
    return number


def gather_inputs(raw: Dict[str, Any], input_ids: Iterable[str], text_ids: Iterable[str] = ()) -> Dict[str, Any]:
    """Build a clean input dict from raw form values.

    Args:
        raw: Raw values keyed by input id
        input_ids: All ids to gather
        text_ids: Ids whose values are kept as strings (selectors, flags)

    Returns:
        Dict with every id present; numeric ids coerced via coerce_number
    """
    text_set = set(text_ids)
    gathered: Dict[str, Any] = {}
    for input_id in input_ids:
        value = raw.get(input_id)
        if input_id in text_set:
            gathered[input_id] = "" if value is None else str(value)
        else:
            gathered[input_id] = coerce_number(value)
    return gathered


def validate_inputs(inputs: Dict[str, Any], rules: Dict[str, Dict[str, Any]]) -> ValidationResult:
    """Check inputs against a rule set.

    Args:
        inputs: Gathered inputs keyed by id
        rules: Rule set, e.g. VALIDATION_RULES["combo"]

    Returns:
        ValidationResult with human-readable error messages
    """
    result = ValidationResult()

    for key, rule in rules.items():
        value = inputs.get(key)
        label = rule.get("label", key)

        missing = value is None or value == "" or (isinstance(value, float) and math.isnan(value))
        if missing:
            if rule.get("required"):
                result.errors.append(f"{label} is required.")
            continue

        if "choices" in rule:
            if value not in rule["choices"]:
                result.errors.append(f"{label} must be one of: {', '.join(rule['choices'])}.")
            continue

        if isinstance(value, (int, float)) and not isinstance(value, bool):
            if math.isinf(value):
                result.errors.append(f"{label} must be a finite number.")
                continue
            if "min" in rule and value < rule["min"]:
                result.errors.append(f"{label} must be at least {rule['min']}.")
            if "max" in rule and value > rule["max"]:
                result.errors.append(f"{label} must be no more than {rule['max']}.")

    return result


def combo_warnings(inputs: Dict[str, Any], wind_pairs: Dict[str, tuple]) -> List[str]:
    """Non-fatal advisories for the combinator inputs.

    Args:
        inputs: Gathered combinator inputs
        wind_pairs: Surface label -> (max id, min id)
    """
    warnings: List[str] = []

    is_imperial = inputs.get("combo_unit_system", "imperial") == "imperial"
    dead_limit = DEAD_LOAD_WARNING_PSF if is_imperial else DEAD_LOAD_WARNING_KPA
    unit = "psf" if is_imperial else "kPa"
    dead_load = inputs.get("combo_dead_load_d", 0.0)
    if isinstance(dead_load, (int, float)) and dead_load > dead_limit:
        warnings.append(
            f"Dead Load (D) of {dead_load:.2f} {unit} is unusually large "
            f"(> {dead_limit:g} {unit}). Verify units."
        )

    for surface, (max_id, min_id) in wind_pairs.items():
        w_max = inputs.get(max_id, 0.0)
        w_min = inputs.get(min_id, 0.0)
        if w_max < w_min:
            warnings.append(
                f"{surface}: maximum wind ({w_max:.2f}) is less than minimum wind ({w_min:.2f})."
            )

    return warnings
