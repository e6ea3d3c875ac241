"""
Load-level normalization for ASCE 7 combinations.

ASCE 7-16 writes its combinations for nominal snow and strength-level wind;
ASCE 7-22 writes them for strength-level snow and nominal wind. Input snow
and wind are converted to the level the active standard's formulas expect.
"""

from src.core.constants import WIND_ASD_TO_STRENGTH, SNOW_NOMINAL_TO_STRENGTH
from src.core.data_models import (
    DesignStandard,
    LoadLevel,
    LoadScope,
    LoadSet,
    NormalizedLoads,
)


def normalize_loads(loads: LoadSet, standard: DesignStandard, level: LoadLevel) -> NormalizedLoads:
    """Build the formula scope for a load set.

    Args:
        loads: Loads as entered
        standard: Code edition whose formulas will be evaluated
        level: Level at which S and W were entered

    Returns:
        NormalizedLoads with the scope and any adjustment notes
    """
    notes = {}
    is_nominal_input = level == LoadLevel.NOMINAL

    if standard == DesignStandard.ASCE7_16:
        W_strength = loads.W / WIND_ASD_TO_STRENGTH if is_nominal_input else loads.W
        if is_nominal_input and loads.W != 0:
            notes["W"] = (
                f"Input W ({loads.W:.2f}) was ASD-level, converted to "
                f"Strength-level W={W_strength:.2f} for LRFD formulas."
            )
        scope = LoadScope(
            D=loads.D, L=loads.L, Lr=loads.Lr, R=loads.R, E=loads.E,
            S_nominal=loads.S,
            W_strength=W_strength,
        )
    else:
        S_strength = loads.S * SNOW_NOMINAL_TO_STRENGTH if is_nominal_input else loads.S
        if is_nominal_input and loads.S != 0:
            notes["S"] = (
                f"Input S ({loads.S:.2f}) was Nominal, converted to "
                f"Strength-level S={S_strength:.2f} for LRFD formulas."
            )
        scope = LoadScope(
            D=loads.D, L=loads.L, Lr=loads.Lr, R=loads.R, E=loads.E,
            S_strength=S_strength,
            W_nominal=loads.W,
        )

    return NormalizedLoads(scope=scope, adjustment_notes=notes)
