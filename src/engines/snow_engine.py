"""
Snow Load Calculator - ASCE 7-16 / ASCE 7-22 Chapter 7
Calculates balanced, unbalanced, drift and sliding roof snow loads and hands
them over to the load combinator.

The code formulas are empirical in psf/ft/pcf. Metric inputs are converted
to imperial before evaluation and results are converted back.
"""

import math
import logging
from typing import Any, Dict, List

from ..core.constants import (
    FT_PER_M,
    JURISDICTION_NYCBC_2022,
    NYCBC_MIN_GROUND_SNOW_LOAD,
    PSF_PER_KPA,
)
from ..core.data_models import (
    DesignStandard,
    DriftSnowResult,
    SlidingSnowResult,
    SnowInputs,
    SnowResult,
    UnbalancedSnowResult,
    UnitSystem,
)
from ..core.load_tables import (
    get_exposure_factor,
    get_importance_factor,
    get_thermal_factor,
)
from ..core.validation import coerce_number

logger = logging.getLogger(__name__)

# Sliding snow distribution width on the lower roof (Sec. 7.9)
SLIDING_WIDTH = {UnitSystem.IMPERIAL: 15.0, UnitSystem.METRIC: 4.6}

MIN_UNBALANCED_SLOPE_RATIO = 0.5 / 12
SURCHARGE_SLOPE_RATIO = 7 / 12
LOW_SLOPE_DEGREES = 15.0

SNOW_TEXT_IDS: List[str] = [
    "snow_asce_standard",
    "snow_unit_system",
    "snow_risk_category",
    "snow_design_method",
    "snow_jurisdiction",
    "snow_surface_roughness_category",
    "snow_exposure_condition",
    "snow_thermal_condition",
    "snow_is_roof_slippery",
    "snow_calculate_unbalanced",
    "snow_calculate_drift",
    "snow_calculate_sliding",
    "snow_is_simply_supported_prismatic",
]

SNOW_INPUT_IDS: List[str] = SNOW_TEXT_IDS + [
    "snow_nycbc_minimum_roof_snow_load",
    "snow_ground_snow_load",
    "snow_roof_slope_degrees",
    "snow_eave_to_ridge_distance_W",
    "snow_winter_wind_parameter_W2",
    "snow_upper_roof_length_lu",
    "snow_height_difference_hc",
    "snow_lower_roof_length_ll",
]


def snow_inputs_from_form(form: Dict[str, Any]) -> SnowInputs:
    """Build SnowInputs from a flat form dictionary ("Yes"/"No" flags)."""
    def flag(key: str, default: bool = False) -> bool:
        value = form.get(key)
        if value in (None, ""):
            return default
        return str(value) == "Yes"

    return SnowInputs(
        standard=DesignStandard(form.get("snow_asce_standard") or DesignStandard.ASCE7_16.value),
        unit_system=UnitSystem(form.get("snow_unit_system") or UnitSystem.IMPERIAL.value),
        jurisdiction=form.get("snow_jurisdiction") or "",
        risk_category=form.get("snow_risk_category") or "II",
        surface_roughness=form.get("snow_surface_roughness_category") or "C",
        exposure=form.get("snow_exposure_condition") or "Partially Exposed",
        thermal_condition=form.get("snow_thermal_condition") or "Heated Structure",
        ground_snow_load=coerce_number(form.get("snow_ground_snow_load")),
        nycbc_minimum_roof_snow_load=coerce_number(form.get("snow_nycbc_minimum_roof_snow_load")),
        roof_slope_degrees=coerce_number(form.get("snow_roof_slope_degrees")),
        is_roof_slippery=flag("snow_is_roof_slippery"),
        calculate_unbalanced=flag("snow_calculate_unbalanced"),
        calculate_drift=flag("snow_calculate_drift"),
        calculate_sliding=flag("snow_calculate_sliding"),
        is_simply_supported_prismatic=flag("snow_is_simply_supported_prismatic", default=True),
        eave_to_ridge_distance_W=coerce_number(form.get("snow_eave_to_ridge_distance_W")),
        winter_wind_parameter_W2=coerce_number(form.get("snow_winter_wind_parameter_W2")),
        upper_roof_length_lu=coerce_number(form.get("snow_upper_roof_length_lu")),
        height_difference_hc=coerce_number(form.get("snow_height_difference_hc")),
        lower_roof_length_ll=coerce_number(form.get("snow_lower_roof_length_ll")),
    )


def calculate_slope_factor(slope_deg: float, is_slippery: bool, Ct: float, standard: DesignStandard) -> float:
    """Roof slope factor Cs (ASCE 7-16 Fig. 7.4-1 / ASCE 7-22 Fig. 7.4-1).

    ASCE 7-16 distinguishes warm (Ct <= 1.0) and cold roofs; ASCE 7-22 uses
    the warm-roof curves throughout.
    """
    if standard == DesignStandard.ASCE7_16 and Ct > 1.0:
        start, span = (15.0, 55.0) if is_slippery else (45.0, 25.0)
    else:
        start, span = (5.0, 65.0) if is_slippery else (30.0, 40.0)

    if slope_deg < start:
        return 1.0
    if slope_deg > 70:
        return 0.0
    return 1.0 - (slope_deg - start) / span


def calculate_snow_density(pg: float) -> float:
    """Snow density gamma = 0.13 pg + 14 <= 30 pcf (Eq. 7.7-1)"""
    if not math.isfinite(pg) or pg <= 0:
        return 14.0
    return min(0.13 * pg + 14, 30.0)


def drift_height_7_16(length: float, pg: float, Is: float) -> float:
    """ASCE 7-16 drift height hd (Fig. 7.6-1), divided by sqrt(Is)"""
    if pg < 0 or length <= 0 or Is <= 0:
        return 0.0
    return max(0.0, 0.43 * length ** (1 / 3) * (pg + 10) ** 0.25 - 1.5) / math.sqrt(Is)


def drift_height_7_22(length: float, pg: float, W2: float, gamma: float) -> float:
    """ASCE 7-22 drift height hd = 1.5 (pg^0.74 lu^0.7 W2^1.7) / gamma (Eq. 7.6-1)"""
    if gamma <= 0 or W2 < 0 or pg <= 0 or length <= 0:
        return 0.0
    return 1.5 * (pg ** 0.74 * length ** 0.7 * W2 ** 1.7) / gamma


def drift_width(hd: float, hc: float) -> float:
    """Drift width w = 4 hd, or 4 hd^2 / hc when hd > hc; not more than 8 hc"""
    if hd <= hc:
        w = 4 * hd
    else:
        w = 4 * hd ** 2 / hc if hc > 0 else 0.0
    return min(w, 8 * hc)


def calculate_unbalanced_loads(
    ps_balanced: float,
    pg: float,
    slope_deg: float,
    standard: DesignStandard,
    W: float,
    W2: float,
    gamma: float,
    Is: float,
) -> UnbalancedSnowResult:
    """Unbalanced snow for hip and gable roofs (imperial units)."""
    slope_ratio = math.tan(math.radians(slope_deg))

    if slope_ratio < MIN_UNBALANCED_SLOPE_RATIO:
        return UnbalancedSnowResult(
            applicable=False,
            reason=f"Slope is less than 0.5:12, unbalanced loads are not required per {standard.value}.",
        )

    if slope_ratio > SURCHARGE_SLOPE_RATIO:
        S = 1 / slope_ratio
        if S <= 0 or gamma <= 0 or pg <= 0 or Is <= 0:
            return UnbalancedSnowResult(applicable=False, reason="Invalid inputs for surcharge calculation.")

        if standard == DesignStandard.ASCE7_22:
            hd = 1.5 * (pg ** 0.74 * max(W, 0.0) ** 0.7 * max(W2, 0.0) ** 1.7) / gamma
        else:
            # lu is the eave to ridge distance for this case
            hd = drift_height_7_16(W, pg, Is)

        return UnbalancedSnowResult(
            applicable=True,
            case="C: Slope > 7:12",
            windward=0.0,
            leeward=ps_balanced,
            surcharge_magnitude=hd * gamma / math.sqrt(S),
            surcharge_width=(8 / 3) * hd * math.sqrt(S),
            hd=hd,
        )

    return UnbalancedSnowResult(
        applicable=True,
        case="B: 0.5:12 < Slope <= 7:12",
        windward=0.3 * ps_balanced,
        leeward=ps_balanced,
    )


def calculate_drift_loads(
    pg: float,
    lu: float,
    hc: float,
    pf: float,
    standard: DesignStandard,
    W2: float,
    ll: float,
    Is: float,
) -> DriftSnowResult:
    """Drift surcharge on a lower roof (imperial units)."""
    gamma = calculate_snow_density(pg)
    hb = pf / gamma if gamma > 0 else 0.0
    if hc <= 0 or hb <= 0 or hc / hb <= 0.2:
        return DriftSnowResult(applicable=False, reason="Drift surcharge not required per h_c/h_b ≤ 0.2.")

    if standard == DesignStandard.ASCE7_22:
        hd_leeward = min(drift_height_7_22(lu, pg, W2, gamma), 0.6 * ll)
        w_leeward = drift_width(hd_leeward, hc)

        hd_windward_full = drift_height_7_22(ll, pg, W2, gamma)
        hd_windward = 0.75 * hd_windward_full
        w_windward = 6 * hd_windward_full

        hd = max(hd_leeward, hd_windward)
        w = w_leeward if hd_leeward >= hd_windward else w_windward
    else:
        hd_leeward = min(drift_height_7_16(lu, pg, Is), 0.6 * ll)
        hd_windward = 0.75 * drift_height_7_16(ll, pg, Is)
        hd = max(hd_leeward, hd_windward)
        w = drift_width(hd, hc)

    return DriftSnowResult(applicable=True, gamma=gamma, hb=hb, hd=hd, w=w, pd=hd * gamma)


def calculate_sliding_load(
    pf: float,
    W: float,
    Cs: float,
    is_slippery: bool,
    unit_system: UnitSystem,
) -> SlidingSnowResult:
    """Sliding snow Ws = 0.4 pf W spread uniformly over the distribution width."""
    if not is_slippery or Cs == 1.0:
        return SlidingSnowResult(
            applicable=False,
            reason="Sliding snow is only considered for slippery roofs where the slope factor Cs is less than 1.0.",
        )
    if not math.isfinite(W) or W <= 0:
        return SlidingSnowResult(
            applicable=False,
            reason="Eave-to-ridge distance (W) must be positive to calculate sliding snow.",
        )

    Ws = 0.4 * pf * W
    width = SLIDING_WIDTH[unit_system]
    return SlidingSnowResult(applicable=True, Ws=Ws, distribution_width=width, ps_sliding=Ws / width)


class SnowEngine:
    """
    Roof snow load calculator per ASCE 7-16 / ASCE 7-22 Chapter 7.
    Keeps an audit trail of calculation steps for the report.
    """

    PARTIAL_LOAD_NOTE = (
        "For continuous/cantilevered members, check a case with full balanced load on one "
        "span and 0.5 times the balanced load on the adjacent span (ASCE 7-16/22 Sec. 7.8)."
    )

    def __init__(self, inputs: SnowInputs):
        self.inputs = inputs
        self.calculations: List[Dict[str, Any]] = []

    def _add_calc_step(self, description: str, calculation: str, reference: str = ""):
        """Add a calculation step to the audit trail"""
        self.calculations.append({
            "description": description,
            "calculation": calculation,
            "reference": reference
        })

    @property
    def is_metric(self) -> bool:
        return self.inputs.unit_system == UnitSystem.METRIC

    def _to_psf(self, value: float) -> float:
        return value * PSF_PER_KPA if self.is_metric else value

    def _to_ft(self, value: float) -> float:
        return value * FT_PER_M if self.is_metric else value

    def _from_psf(self, value: float) -> float:
        return value / PSF_PER_KPA if self.is_metric else value

    def _from_ft(self, value: float) -> float:
        return value / FT_PER_M if self.is_metric else value

    def _from_pcf(self, value: float) -> float:
        return value * FT_PER_M / PSF_PER_KPA if self.is_metric else value

    def calculate(self) -> SnowResult:
        """
        Main calculation method for roof snow loads.
        Returns SnowResult with loads in the input unit system.
        """
        self.calculations = []
        inp = self.inputs
        warnings: List[str] = []
        notes: List[str] = []

        pg = self._to_psf(inp.ground_snow_load)
        slope = inp.roof_slope_degrees

        self._add_calc_step(
            f"SNOW LOAD CALCULATION - {inp.standard.value}",
            f"Ground snow load: pg = {pg:.2f} psf\n"
            f"Roof slope: {slope:.1f}°\n"
            f"Risk category: {inp.risk_category}",
            f"{inp.standard.value} Chapter 7"
        )
        if self.is_metric:
            notes.append("Metric inputs were converted to psf/ft for the ASCE 7 snow equations.")

        is_nycbc = inp.jurisdiction == JURISDICTION_NYCBC_2022
        if is_nycbc and pg < NYCBC_MIN_GROUND_SNOW_LOAD:
            warnings.append(
                f"The input ground snow load (p_g = {pg:.2f} psf) is less than the NYCBC 2022 "
                f"minimum of {NYCBC_MIN_GROUND_SNOW_LOAD:g} psf. Verify the correct jurisdictional value."
            )

        # Step 1: Factors
        Is = get_importance_factor(inp.risk_category)
        Ce = get_exposure_factor(inp.surface_roughness, inp.exposure)
        Ct = get_thermal_factor(inp.thermal_condition)
        Cs = calculate_slope_factor(slope, inp.is_roof_slippery, Ct, inp.standard)

        self._add_calc_step(
            "Snow load factors",
            f"Is = {Is:.2f} (Risk Category {inp.risk_category})\n"
            f"Ce = {Ce:.2f} ({inp.surface_roughness}, {inp.exposure})\n"
            f"Ct = {Ct:.2f} ({inp.thermal_condition})\n"
            f"Cs = {Cs:.3f} ({'slippery' if inp.is_roof_slippery else 'non-slippery'} surface)",
            "Tables 1.5-2, 7.3-1, 7.3-2; Fig. 7.4-1"
        )

        # Step 2: Flat and sloped roof snow load
        pf = 0.7 * Ce * Ct * Is * pg
        ps_calculated = Cs * pf

        self._add_calc_step(
            "Flat and sloped roof snow load",
            f"pf = 0.7 × Ce × Ct × Is × pg\n"
            f"pf = 0.7 × {Ce:.2f} × {Ct:.2f} × {Is:.2f} × {pg:.2f} = {pf:.2f} psf\n"
            f"ps = Cs × pf = {Cs:.3f} × {pf:.2f} = {ps_calculated:.2f} psf",
            "Eq. 7.3-1, 7.4-1"
        )

        # Step 3: Low-slope minimum
        is_low_slope = slope < LOW_SLOPE_DEGREES
        ps_minimum = 0.0
        if is_low_slope:
            ps_minimum = pg * Is if pg <= 20 else 20 * Is
            self._add_calc_step(
                "Minimum snow load for low-slope roofs",
                f"Slope {slope:.1f}° < 15°: pm = {ps_minimum:.2f} psf",
                "Sec. 7.3.4"
            )
        ps_asce7 = max(ps_calculated, ps_minimum) if is_low_slope else ps_calculated

        ps_balanced = ps_asce7
        nycbc_governs = False
        nycbc_minimum = self._to_psf(inp.nycbc_minimum_roof_snow_load)
        if is_nycbc and ps_balanced < nycbc_minimum:
            ps_balanced = nycbc_minimum
            nycbc_governs = True
            self._add_calc_step(
                "NYCBC minimum roof snow load",
                f"ps = {ps_asce7:.2f} psf < {nycbc_minimum:.2f} psf, minimum governs",
                "NYCBC 2022 Sec. 1608"
            )

        # Step 4: Unbalanced, drift and sliding loads
        unbalanced = None
        if inp.calculate_unbalanced:
            gamma = calculate_snow_density(pg)
            unbalanced = calculate_unbalanced_loads(
                ps_balanced, pg, slope, inp.standard,
                self._to_ft(inp.eave_to_ridge_distance_W), inp.winter_wind_parameter_W2, gamma, Is,
            )
            self._add_calc_step(
                "Unbalanced snow load",
                f"Case {unbalanced.case}: windward {unbalanced.windward:.2f} psf, "
                f"leeward {unbalanced.leeward_total:.2f} psf"
                if unbalanced.applicable else unbalanced.reason,
                "Sec. 7.6"
            )

        drift = None
        if inp.calculate_drift:
            drift = calculate_drift_loads(
                pg,
                self._to_ft(inp.upper_roof_length_lu),
                self._to_ft(inp.height_difference_hc),
                pf,
                inp.standard,
                inp.winter_wind_parameter_W2,
                self._to_ft(inp.lower_roof_length_ll),
                Is,
            )
            self._add_calc_step(
                "Drift surcharge load",
                f"γ = {drift.gamma:.2f} pcf, hb = {drift.hb:.2f} ft, hd = {drift.hd:.2f} ft, "
                f"w = {drift.w:.2f} ft\npd = hd × γ = {drift.pd:.2f} psf"
                if drift.applicable else drift.reason,
                "Sec. 7.7"
            )

        result = SnowResult(
            inputs=inp,
            Is=Is,
            Ce=Ce,
            Ct=Ct,
            Cs=Cs,
            pf=self._from_psf(pf),
            ps_calculated=self._from_psf(ps_calculated),
            ps_minimum=self._from_psf(ps_minimum),
            ps_balanced=self._from_psf(ps_balanced),
            is_low_slope=is_low_slope,
            nycbc_minimum_governs=nycbc_governs,
            unbalanced=self._convert_unbalanced(unbalanced),
            drift=self._convert_drift(drift),
            notes=notes,
            warnings=warnings,
        )

        if inp.calculate_sliding:
            # Linear in pf and W, so it is evaluated directly in the input units
            result.sliding = calculate_sliding_load(
                result.pf, inp.eave_to_ridge_distance_W, Cs, inp.is_roof_slippery, inp.unit_system
            )

        if not inp.is_simply_supported_prismatic:
            result.partial_load = 0.5 * result.ps_balanced
            notes.append(self.PARTIAL_LOAD_NOTE)

        result.calculations = list(self.calculations)
        logger.debug(f"Snow calculation complete: ps = {result.ps_balanced:.2f} {inp.unit_system.pressure_unit}")
        return result

    def _convert_unbalanced(self, unbalanced):
        if unbalanced is None or not self.is_metric or not unbalanced.applicable:
            return unbalanced
        return UnbalancedSnowResult(
            applicable=True,
            case=unbalanced.case,
            windward=self._from_psf(unbalanced.windward),
            leeward=self._from_psf(unbalanced.leeward),
            surcharge_magnitude=self._from_psf(unbalanced.surcharge_magnitude),
            surcharge_width=self._from_ft(unbalanced.surcharge_width),
            hd=self._from_ft(unbalanced.hd),
        )

    def _convert_drift(self, drift):
        if drift is None or not self.is_metric or not drift.applicable:
            return drift
        return DriftSnowResult(
            applicable=True,
            gamma=self._from_pcf(drift.gamma),
            hb=self._from_ft(drift.hb),
            hd=self._from_ft(drift.hd),
            w=self._from_ft(drift.w),
            pd=self._from_psf(drift.pd),
        )
