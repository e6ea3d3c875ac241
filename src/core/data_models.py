"""
Data Models for LoadCombo - ASCE 7 Load Combination Calculator
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, List, Dict, Any, Tuple

from .constants import (
    JURISDICTION_ASCE,
    JURISDICTION_NYCBC_2022,
    LIVE_LOAD_THRESHOLD_PSF,
    LIVE_LOAD_THRESHOLD_KPA,
)


class DesignStandard(Enum):
    """ASCE 7 code edition"""
    ASCE7_16 = "ASCE 7-16"
    ASCE7_22 = "ASCE 7-22"


class DesignMethod(Enum):
    """Design method selecting the combination sub-table"""
    LRFD = "LRFD"
    ASD = "ASD"


class LoadLevel(Enum):
    """Level at which the user entered snow and wind loads"""
    NOMINAL = "Nominal (Service/ASD)"
    STRENGTH = "Strength (LRFD)"


class UnitSystem(Enum):
    """Unit system for loads and lengths"""
    IMPERIAL = "imperial"
    METRIC = "metric"

    @property
    def pressure_unit(self) -> str:
        return "psf" if self is UnitSystem.IMPERIAL else "kPa"

    @property
    def length_unit(self) -> str:
        return "ft" if self is UnitSystem.IMPERIAL else "m"

    @property
    def line_load_unit(self) -> str:
        return "plf" if self is UnitSystem.IMPERIAL else "kN/m"

    @property
    def live_load_threshold(self) -> float:
        """Live load above which pattern live load is required (Sec. 4.3.5)"""
        if self is UnitSystem.IMPERIAL:
            return LIVE_LOAD_THRESHOLD_PSF
        return LIVE_LOAD_THRESHOLD_KPA


@dataclass
class LoadSet:
    """Loads for a single combination evaluation.

    Attributes:
        D: Dead load
        L: Live load
        Lr: Roof live load
        R: Rain load
        S: Snow load as entered (nominal or strength, see LoadLevel)
        W: Wind load as entered (nominal or strength, see LoadLevel)
        E: Seismic load, used directly
        unit_system: Selects the pattern live load threshold
    """
    D: float = 0.0
    L: float = 0.0
    Lr: float = 0.0
    R: float = 0.0
    S: float = 0.0
    W: float = 0.0
    E: float = 0.0
    unit_system: UnitSystem = UnitSystem.IMPERIAL


@dataclass(frozen=True)
class LoadScope:
    """Loads at the level each combination formula expects.

    ASCE 7-16 formulas read S_nominal and W_strength; ASCE 7-22 formulas read
    S_strength and W_nominal. The pair not used by the active standard is None.
    """
    D: float
    L: float
    Lr: float
    R: float
    E: float
    S_nominal: Optional[float] = None
    S_strength: Optional[float] = None
    W_nominal: Optional[float] = None
    W_strength: Optional[float] = None

    def with_live_load(self, live_load: float) -> "LoadScope":
        """Copy of this scope with L replaced"""
        return replace(self, L=live_load)


@dataclass
class NormalizedLoads:
    """Output of the load-level normalizer"""
    scope: LoadScope
    adjustment_notes: Dict[str, str] = field(default_factory=dict)


@dataclass
class ScenarioLoads:
    """Scenario-specific snow and wind pair"""
    S: float = 0.0
    W_max: float = 0.0
    W_min: float = 0.0


@dataclass
class ComboInputs:
    """Complete input set for one combinator run.

    Attributes:
        standard: User-selected ASCE 7 edition
        jurisdiction: Jurisdiction name; NYCBC 2022 forces ASCE 7-16
        method: LRFD or ASD
        input_load_level: Level at which S and W were entered
        unit_system: Imperial (psf) or metric (kPa)
        D, L, Lr, R, E: Base loads shared by every scenario
        scenarios: Scenario key -> ScenarioLoads
    """
    standard: DesignStandard = DesignStandard.ASCE7_16
    jurisdiction: str = JURISDICTION_ASCE
    method: DesignMethod = DesignMethod.LRFD
    input_load_level: LoadLevel = LoadLevel.NOMINAL
    unit_system: UnitSystem = UnitSystem.IMPERIAL
    D: float = 0.0
    L: float = 0.0
    Lr: float = 0.0
    R: float = 0.0
    E: float = 0.0
    scenarios: Dict[str, ScenarioLoads] = field(default_factory=dict)

    @property
    def effective_standard(self) -> DesignStandard:
        """Standard used for formula selection (NYCBC 2022 adopts ASCE 7-16)"""
        if self.jurisdiction == JURISDICTION_NYCBC_2022:
            return DesignStandard.ASCE7_16
        return self.standard

    def base_load_set(self, S: float = 0.0, W: float = 0.0, E: Optional[float] = None) -> LoadSet:
        """LoadSet with the shared base loads and the given S/W/E"""
        return LoadSet(
            D=self.D,
            L=self.L,
            Lr=self.Lr,
            R=self.R,
            S=S,
            W=W,
            E=self.E if E is None else E,
            unit_system=self.unit_system,
        )


@dataclass
class ComboResult:
    """Evaluated combinations for one load scope.

    Attributes:
        results: Combination label -> value
        pattern_results: Same labels evaluated with 0.75L (empty if not required)
        pattern_load_required: True when L exceeds the unit-system threshold
        final_formulas: Combination label -> equation text
        adjustment_notes: Load-level conversion notes keyed by load symbol
    """
    results: Dict[str, float] = field(default_factory=dict)
    pattern_results: Dict[str, float] = field(default_factory=dict)
    pattern_load_required: bool = False
    final_formulas: Dict[str, str] = field(default_factory=dict)
    adjustment_notes: Dict[str, str] = field(default_factory=dict)

    def governing(self) -> Tuple[Optional[str], float]:
        """Largest combination value; the first label wins ties"""
        label: Optional[str] = None
        value = float("-inf")
        for combo, combo_value in self.results.items():
            if combo_value > value:
                label, value = combo, combo_value
        return label, value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": dict(self.results),
            "pattern_results": dict(self.pattern_results),
            "pattern_load_required": self.pattern_load_required,
            "final_formulas": dict(self.final_formulas),
            "adjustment_notes": dict(self.adjustment_notes),
        }


@dataclass
class ScenarioResult:
    """Max-wind and min-wind evaluations for one scenario"""
    key: str
    title: str
    wmax: ComboResult
    wmin: ComboResult

    @property
    def short_title(self) -> str:
        return self.title.replace(" Analysis", "")

    @property
    def pattern_load_required(self) -> bool:
        return self.wmax.pattern_load_required


@dataclass
class GoverningValue:
    """A governing value with the combination and scenario it came from"""
    value: float
    combo: str
    title: str = ""
    pattern: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "combo": self.combo, "title": self.title, "pattern": self.pattern}


@dataclass
class ScenarioEnvelope:
    """Governing max pressure and min (uplift/suction) for one scenario"""
    title: str
    max: GoverningValue
    min: GoverningValue


@dataclass
class GoverningEnvelope:
    """Per-scenario and overall governing values"""
    per_scenario: Dict[str, ScenarioEnvelope] = field(default_factory=dict)
    overall_max: Optional[GoverningValue] = None
    overall_min: Optional[GoverningValue] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "perScenario": {
                title: {"max": env.max.to_dict(), "min": env.min.to_dict()}
                for title, env in self.per_scenario.items()
            },
            "overallMax": self.overall_max.to_dict() if self.overall_max else None,
            "overallMin": self.overall_min.to_dict() if self.overall_min else None,
        }


@dataclass
class ComboRunResult:
    """
    Complete result of one combinator run.
    Owned by the caller; nothing is cached between runs.
    """
    inputs: ComboInputs
    standard: DesignStandard
    base_combos: ComboResult
    scenarios: List[ScenarioResult] = field(default_factory=list)
    envelope: GoverningEnvelope = field(default_factory=GoverningEnvelope)
    warnings: List[str] = field(default_factory=list)

    @property
    def scenarios_data(self) -> Dict[str, ComboResult]:
        """Flat `<scenario>_wmax` / `<scenario>_wmin` map"""
        data: Dict[str, ComboResult] = {}
        for scenario in self.scenarios:
            data[f"{scenario.key}_wmax"] = scenario.wmax
            data[f"{scenario.key}_wmin"] = scenario.wmin
        return data

    @property
    def adjustment_notes(self) -> List[str]:
        """Distinct load-level notes across all scenario evaluations, in run order"""
        notes: List[str] = []
        for result in [self.base_combos] + list(self.scenarios_data.values()):
            for note in result.adjustment_notes.values():
                if note not in notes:
                    notes.append(note)
        return notes

    def to_dict(self) -> Dict[str, Any]:
        """Export run result as dictionary for JSON serialization"""
        return {
            "standard": self.standard.value,
            "method": self.inputs.method.value,
            "unit_system": self.inputs.unit_system.value,
            "base_combos": self.base_combos.to_dict(),
            "scenarios_data": {key: result.to_dict() for key, result in self.scenarios_data.items()},
            "envelope": self.envelope.to_dict(),
            "warnings": list(self.warnings),
        }


@dataclass
class SnowInputs:
    """Inputs for the flat/sloped roof snow calculator.

    Loads are in psf and lengths in ft for imperial, kPa and m for metric.
    """
    standard: DesignStandard = DesignStandard.ASCE7_16
    unit_system: UnitSystem = UnitSystem.IMPERIAL
    jurisdiction: str = JURISDICTION_ASCE
    risk_category: str = "II"
    surface_roughness: str = "C"
    exposure: str = "Partially Exposed"
    thermal_condition: str = "Heated Structure"
    ground_snow_load: float = 0.0           # pg
    nycbc_minimum_roof_snow_load: float = 0.0
    roof_slope_degrees: float = 0.0
    is_roof_slippery: bool = False
    calculate_unbalanced: bool = False
    calculate_drift: bool = False
    calculate_sliding: bool = False
    is_simply_supported_prismatic: bool = True
    eave_to_ridge_distance_W: float = 0.0
    winter_wind_parameter_W2: float = 0.0
    upper_roof_length_lu: float = 0.0
    height_difference_hc: float = 0.0
    lower_roof_length_ll: float = 0.0


@dataclass
class UnbalancedSnowResult:
    """Unbalanced roof snow (ASCE 7 Sec. 7.6)"""
    applicable: bool = False
    reason: str = ""
    case: str = ""
    windward: float = 0.0
    leeward: float = 0.0
    surcharge_magnitude: float = 0.0
    surcharge_width: float = 0.0
    hd: float = 0.0

    @property
    def leeward_total(self) -> float:
        return self.leeward + self.surcharge_magnitude


@dataclass
class DriftSnowResult:
    """Leeward/windward drift on a lower roof (ASCE 7 Sec. 7.7)"""
    applicable: bool = False
    reason: str = ""
    gamma: float = 0.0
    hb: float = 0.0
    hd: float = 0.0
    w: float = 0.0
    pd: float = 0.0


@dataclass
class SlidingSnowResult:
    """Sliding snow onto a lower roof (ASCE 7 Sec. 7.9)"""
    applicable: bool = False
    reason: str = ""
    Ws: float = 0.0
    distribution_width: float = 0.0
    ps_sliding: float = 0.0


@dataclass
class SnowResult:
    """Snow calculator output; all loads nominal, in the input unit system.

    Attributes:
        Is, Ce, Ct, Cs: Importance, exposure, thermal and slope factors
        pf: Flat roof snow load
        ps_calculated: Cs * pf
        ps_minimum: Low-slope minimum (0 when not low slope)
        ps_balanced: Governing balanced roof snow load
        nycbc_minimum_governs: NYCBC minimum roof snow load controls ps_balanced
        partial_load: Load on the adjacent span for partial loading (0 if not required)
    """
    inputs: SnowInputs
    Is: float = 1.0
    Ce: float = 1.0
    Ct: float = 1.0
    Cs: float = 1.0
    pf: float = 0.0
    ps_calculated: float = 0.0
    ps_minimum: float = 0.0
    ps_balanced: float = 0.0
    is_low_slope: bool = False
    nycbc_minimum_governs: bool = False
    unbalanced: Optional[UnbalancedSnowResult] = None
    drift: Optional[DriftSnowResult] = None
    sliding: Optional[SlidingSnowResult] = None
    partial_load: float = 0.0
    notes: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    calculations: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def minimum_governs(self) -> bool:
        return self.ps_minimum > self.ps_calculated

    def loads_for_combos(self) -> Dict[str, float]:
        """Snow values keyed by load combinator input ids"""
        loads = {"combo_balanced_snow_load_sb": self.ps_balanced}
        if self.unbalanced is not None and self.unbalanced.applicable:
            loads["combo_unbalanced_windward_snow_load_suw"] = self.unbalanced.windward
            loads["combo_unbalanced_leeward_snow_load_sul"] = self.unbalanced.leeward_total
        if self.drift is not None and self.drift.applicable:
            loads["combo_drift_surcharge_sd"] = self.drift.pd
        return loads
