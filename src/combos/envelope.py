"""
Governing envelope over all scenario evaluations.

Only combinations that vary with the scenario (those mentioning W, S or E)
take part; base combinations are reported separately.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from src.core.data_models import (
    GoverningEnvelope,
    GoverningValue,
    ScenarioEnvelope,
    ScenarioResult,
)

from .formula_table import SCENARIO_LOAD_SYMBOLS


@dataclass(frozen=True)
class GoverningEntry:
    """One (scenario, combination, value) candidate for the envelope"""
    title: str
    combo: str
    value: float
    pattern: bool = False

    def to_governing_value(self) -> GoverningValue:
        return GoverningValue(value=self.value, combo=self.combo, title=self.title, pattern=self.pattern)


def is_scenario_combo(label: str) -> bool:
    """True if a combination label includes wind, snow or seismic load"""
    return any(symbol in label for symbol in SCENARIO_LOAD_SYMBOLS)


def collect_governing_entries(scenario_results: Iterable[ScenarioResult]) -> List[GoverningEntry]:
    """Flatten scenario results into envelope candidates.

    Per scenario: each varying combination contributes its max-wind value then
    its min-wind value; pattern live load rows follow the normal rows.
    """
    entries: List[GoverningEntry] = []
    for scenario in scenario_results:
        for combo, value_wmax in scenario.wmax.results.items():
            if not is_scenario_combo(combo):
                continue
            entries.append(GoverningEntry(scenario.title, combo, value_wmax))
            entries.append(GoverningEntry(scenario.title, combo, scenario.wmin.results[combo]))

        if scenario.pattern_load_required:
            for combo, value_wmax in scenario.wmax.pattern_results.items():
                if not is_scenario_combo(combo):
                    continue
                entries.append(GoverningEntry(scenario.title, combo, value_wmax, pattern=True))
                entries.append(GoverningEntry(
                    scenario.title, combo, scenario.wmin.pattern_results[combo], pattern=True
                ))
    return entries


def build_envelope(entries: Iterable[GoverningEntry]) -> GoverningEnvelope:
    """Per-scenario and overall max/min.

    Comparisons are strict, so on ties the first entry in enumeration order
    governs.
    """
    maxima: Dict[str, GoverningEntry] = {}
    minima: Dict[str, GoverningEntry] = {}
    overall_max: Optional[GoverningEntry] = None
    overall_min: Optional[GoverningEntry] = None

    for entry in entries:
        if entry.title not in maxima or entry.value > maxima[entry.title].value:
            maxima[entry.title] = entry
        if entry.title not in minima or entry.value < minima[entry.title].value:
            minima[entry.title] = entry
        if overall_max is None or entry.value > overall_max.value:
            overall_max = entry
        if overall_min is None or entry.value < overall_min.value:
            overall_min = entry

    per_scenario = {
        title: ScenarioEnvelope(
            title=title,
            max=maxima[title].to_governing_value(),
            min=minima[title].to_governing_value(),
        )
        for title in maxima
    }

    return GoverningEnvelope(
        per_scenario=per_scenario,
        overall_max=overall_max.to_governing_value() if overall_max else None,
        overall_min=overall_min.to_governing_value() if overall_min else None,
    )
