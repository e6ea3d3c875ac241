"""
Scenario Evaluator for ASCE 7 load combinations.

Each scenario (a wind surface or a snow distribution) supplies its own S and
a (W_max, W_min) pair; D, L, Lr, R and E are shared by every scenario. Every
scenario is evaluated twice, once per wind extreme, against the active
formula table.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from src.core.constants import JURISDICTION_ASCE, PATTERN_LIVE_LOAD_FACTOR
from src.core.data_models import (
    ComboInputs,
    ComboResult,
    ComboRunResult,
    DesignMethod,
    DesignStandard,
    LoadLevel,
    LoadSet,
    ScenarioLoads,
    ScenarioResult,
    UnitSystem,
)
from src.core.validation import coerce_number

from .envelope import build_envelope, collect_governing_entries
from .formula_table import ComboFormulaLibrary, evaluate_formulas
from .load_level import normalize_loads

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScenarioDefinition:
    """Which form fields feed one scenario.

    Attributes:
        key: Scenario key used in `<key>_wmax` / `<key>_wmin`
        title: Report title
        snow_ids: Form ids summed into the scenario snow load
        wind_ids: (max id, min id), or None for snow-only scenarios
    """
    key: str
    title: str
    snow_ids: Tuple[str, ...]
    wind_ids: Optional[Tuple[str, str]] = None

    @property
    def short_title(self) -> str:
        return self.title.replace(" Analysis", "")

    def loads_from_inputs(self, inputs: Dict[str, Any]) -> ScenarioLoads:
        """Scenario S/W pair from gathered (already coerced) inputs."""
        snow = sum(coerce_number(inputs.get(snow_id)) for snow_id in self.snow_ids)
        if self.wind_ids is None:
            return ScenarioLoads(S=snow, W_max=0.0, W_min=0.0)
        max_id, min_id = self.wind_ids
        return ScenarioLoads(
            S=snow,
            W_max=coerce_number(inputs.get(max_id)),
            W_min=coerce_number(inputs.get(min_id)),
        )


SNOW_BALANCED = "combo_balanced_snow_load_sb"
SNOW_WINDWARD = "combo_unbalanced_windward_snow_load_suw"
SNOW_LEEWARD = "combo_unbalanced_leeward_snow_load_sul"
SNOW_DRIFT = "combo_drift_surcharge_sd"

SCENARIOS: List[ScenarioDefinition] = [
    ScenarioDefinition("windward_wall", "Windward Wall Analysis", (SNOW_BALANCED,),
                       ("combo_wind_wall_ww_max", "combo_wind_wall_ww_min")),
    ScenarioDefinition("leeward_wall", "Leeward Wall Analysis", (SNOW_WINDWARD,),
                       ("combo_wind_wall_lw_max", "combo_wind_wall_lw_min")),
    ScenarioDefinition("windward_roof", "Windward Roof Analysis", (SNOW_WINDWARD,),
                       ("combo_wind_roof_ww_max", "combo_wind_roof_ww_min")),
    ScenarioDefinition("leeward_roof", "Leeward Roof Analysis", (SNOW_LEEWARD,),
                       ("combo_wind_roof_lw_max", "combo_wind_roof_lw_min")),
    ScenarioDefinition("cc_roof", "Components & Cladding (C&C) Roof Analysis", (SNOW_BALANCED,),
                       ("combo_wind_cc_max", "combo_wind_cc_min")),
    ScenarioDefinition("cc_wall", "Components & Cladding (C&C) Wall Analysis", (SNOW_BALANCED,),
                       ("combo_wind_cc_wall_max", "combo_wind_cc_wall_min")),
    ScenarioDefinition("balanced_snow", "Balanced Snow Analysis", (SNOW_BALANCED,)),
    ScenarioDefinition("unbalanced_windward_snow", "Unbalanced Windward Snow Analysis", (SNOW_WINDWARD,)),
    ScenarioDefinition("unbalanced_leeward_snow", "Unbalanced Leeward Snow Analysis", (SNOW_LEEWARD,)),
    ScenarioDefinition("drift_surcharge", "Drift Surcharge Analysis", (SNOW_BALANCED, SNOW_DRIFT)),
]

SCENARIOS_BY_KEY: Dict[str, ScenarioDefinition] = {s.key: s for s in SCENARIOS}

# Governing summary order: snow cases first, then wind surfaces
SUMMARY_ORDER: List[str] = [
    "balanced_snow", "unbalanced_leeward_snow", "unbalanced_windward_snow", "drift_surcharge",
    "windward_wall", "leeward_wall", "windward_roof", "leeward_roof", "cc_roof", "cc_wall",
]

# Surface label -> (max id, min id), for the W_max < W_min warning
WIND_SURFACE_PAIRS: Dict[str, Tuple[str, str]] = {
    s.short_title: s.wind_ids for s in SCENARIOS if s.wind_ids is not None
}

COMBO_TEXT_IDS: List[str] = [
    "combo_asce_standard",
    "combo_jurisdiction",
    "combo_design_method",
    "combo_input_load_level",
    "combo_unit_system",
]

COMBO_LOAD_IDS: List[str] = [
    "combo_dead_load_d",
    "combo_live_load_l",
    "combo_roof_live_load_lr",
    "combo_rain_load_r",
    SNOW_BALANCED,
    SNOW_WINDWARD,
    SNOW_LEEWARD,
    SNOW_DRIFT,
]

COMBO_WIND_IDS: List[str] = [wind_id for pair in WIND_SURFACE_PAIRS.values() for wind_id in pair]

COMBO_INPUT_IDS: List[str] = COMBO_TEXT_IDS + COMBO_LOAD_IDS + COMBO_WIND_IDS + ["combo_seismic_load_e"]


def combo_inputs_from_form(form: Dict[str, Any]) -> ComboInputs:
    """Build ComboInputs from a flat form dictionary.

    Selectors must already hold valid enum values (see validate_inputs);
    numeric fields are coerced, so blanks and text count as 0.
    """
    scenarios = {s.key: s.loads_from_inputs(form) for s in SCENARIOS}
    return ComboInputs(
        standard=DesignStandard(form.get("combo_asce_standard") or DesignStandard.ASCE7_16.value),
        jurisdiction=form.get("combo_jurisdiction") or JURISDICTION_ASCE,
        method=DesignMethod(form.get("combo_design_method") or DesignMethod.LRFD.value),
        input_load_level=LoadLevel(form.get("combo_input_load_level") or LoadLevel.NOMINAL.value),
        unit_system=UnitSystem(form.get("combo_unit_system") or UnitSystem.IMPERIAL.value),
        D=coerce_number(form.get("combo_dead_load_d")),
        L=coerce_number(form.get("combo_live_load_l")),
        Lr=coerce_number(form.get("combo_roof_live_load_lr")),
        R=coerce_number(form.get("combo_rain_load_r")),
        E=coerce_number(form.get("combo_seismic_load_e")),
        scenarios=scenarios,
    )


def calculate_combinations(
    loads: LoadSet,
    standard: DesignStandard,
    level: LoadLevel,
    method: DesignMethod,
) -> ComboResult:
    """Evaluate the active formula table for one load set.

    When L exceeds the unit-system threshold (strictly), every formula is
    evaluated again with L replaced by 0.75L into `pattern_results`.

    Args:
        loads: Loads for this evaluation
        standard: Effective standard (after any jurisdiction override)
        level: Level at which S and W were entered
        method: LRFD or ASD

    Returns:
        ComboResult for this load set
    """
    normalized = normalize_loads(loads, standard, level)
    formulas = ComboFormulaLibrary.get_formulas(standard, method)

    results = evaluate_formulas(formulas, normalized.scope)

    pattern_load_required = loads.L > loads.unit_system.live_load_threshold
    pattern_results: Dict[str, float] = {}
    if pattern_load_required:
        pattern_scope = normalized.scope.with_live_load(PATTERN_LIVE_LOAD_FACTOR * loads.L)
        pattern_results = evaluate_formulas(formulas, pattern_scope)

    return ComboResult(
        results=results,
        pattern_results=pattern_results,
        pattern_load_required=pattern_load_required,
        final_formulas={formula.label: formula.expression for formula in formulas},
        adjustment_notes=dict(normalized.adjustment_notes),
    )


def run_combinations(inputs: ComboInputs, warnings: Optional[List[str]] = None) -> ComboRunResult:
    """Evaluate base combinations, every scenario at both wind extremes, and the envelope.

    Args:
        inputs: Complete input set
        warnings: Advisories to carry on the result

    Returns:
        ComboRunResult owned by the caller
    """
    standard = inputs.effective_standard
    if standard != inputs.standard:
        logger.debug(f"Jurisdiction {inputs.jurisdiction} forces {standard.value} formulas")

    def evaluate(loads: LoadSet) -> ComboResult:
        return calculate_combinations(loads, standard, inputs.input_load_level, inputs.method)

    base_combos = evaluate(inputs.base_load_set(S=0.0, W=0.0, E=0.0))

    scenario_results: List[ScenarioResult] = []
    for definition in SCENARIOS:
        scenario_loads = inputs.scenarios.get(definition.key, ScenarioLoads())
        scenario_results.append(ScenarioResult(
            key=definition.key,
            title=definition.title,
            wmax=evaluate(inputs.base_load_set(S=scenario_loads.S, W=scenario_loads.W_max)),
            wmin=evaluate(inputs.base_load_set(S=scenario_loads.S, W=scenario_loads.W_min)),
        ))

    if base_combos.pattern_load_required:
        logger.debug(f"Pattern live load required (L={inputs.L} {inputs.unit_system.pressure_unit})")

    envelope = build_envelope(collect_governing_entries(scenario_results))
    logger.debug(
        f"Evaluated {len(scenario_results)} scenarios with {standard.value} {inputs.method.value}"
    )

    return ComboRunResult(
        inputs=inputs,
        standard=standard,
        base_combos=base_combos,
        scenarios=scenario_results,
        envelope=envelope,
        warnings=list(warnings or []),
    )


def safe_calculation(
    func: Callable[..., Any],
    *args: Any,
    error_message: str = "An unexpected error occurred during the calculation.",
    **kwargs: Any,
) -> Tuple[Optional[Any], Optional[str]]:
    """Run a calculation, converting unexpected exceptions into a message.

    Returns:
        (result, None) on success, (None, error_message) on failure
    """
    try:
        return func(*args, **kwargs), None
    except Exception:
        logger.exception(f"Calculation failed in {getattr(func, '__name__', func)}")
        return None, error_message
