# ASCE 7 load combination engine
from .load_level import normalize_loads
from .formula_table import ComboFormula, ComboFormulaLibrary, evaluate_formulas
from .envelope import GoverningEntry, build_envelope, collect_governing_entries, is_scenario_combo
from .scenarios import (
    SCENARIOS,
    calculate_combinations,
    combo_inputs_from_form,
    run_combinations,
    safe_calculation,
)
