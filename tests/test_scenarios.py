"""
Unit tests for the scenario evaluator.

Tests cover:
- Pattern live load trigger and 0.75L re-evaluation
- Jurisdiction override
- Scenario load mapping from the form
- Max/min wind evaluations
- Run result shape, notes and determinism
- safe_calculation error conversion
"""

import logging

import pytest

from src.combos.formula_table import ComboFormulaLibrary
from src.combos.scenarios import (
    COMBO_INPUT_IDS,
    SCENARIOS,
    calculate_combinations,
    combo_inputs_from_form,
    run_combinations,
    safe_calculation,
)
from src.core.data_models import (
    ComboInputs,
    DesignMethod,
    DesignStandard,
    LoadLevel,
    LoadSet,
    ScenarioLoads,
    UnitSystem,
)


class TestPatternLiveLoad:
    """Pattern live load is required when L strictly exceeds the threshold."""

    def test_not_required_at_threshold(self):
        result = calculate_combinations(
            LoadSet(D=10, L=100.0), DesignStandard.ASCE7_16, LoadLevel.NOMINAL, DesignMethod.LRFD
        )

        assert result.pattern_load_required is False
        assert result.pattern_results == {}

    def test_required_above_threshold(self):
        result = calculate_combinations(
            LoadSet(D=10, L=100.01), DesignStandard.ASCE7_16, LoadLevel.NOMINAL, DesignMethod.LRFD
        )

        assert result.pattern_load_required is True
        assert list(result.pattern_results) == list(result.results)

    def test_metric_threshold(self):
        at = calculate_combinations(
            LoadSet(L=4.79, unit_system=UnitSystem.METRIC),
            DesignStandard.ASCE7_22, LoadLevel.NOMINAL, DesignMethod.ASD,
        )
        above = calculate_combinations(
            LoadSet(L=4.8, unit_system=UnitSystem.METRIC),
            DesignStandard.ASCE7_22, LoadLevel.NOMINAL, DesignMethod.ASD,
        )

        assert at.pattern_load_required is False
        assert above.pattern_load_required is True

    def test_pattern_results_use_0_75_live_load(self):
        result = calculate_combinations(
            LoadSet(L=200), DesignStandard.ASCE7_16, LoadLevel.NOMINAL, DesignMethod.LRFD
        )
        label = "2. 1.2D + 1.6L + 0.5(Lr|S|R)"

        assert result.results[label] == pytest.approx(320.0)
        assert result.pattern_results[label] == pytest.approx(240.0)


class TestCalculateCombinations:
    """Tests for a single evaluation."""

    def test_final_formulas_cover_every_label(self):
        result = calculate_combinations(
            LoadSet(D=10), DesignStandard.ASCE7_22, LoadLevel.NOMINAL, DesignMethod.LRFD
        )

        assert set(result.final_formulas) == set(result.results)
        assert result.final_formulas["1. 1.4D"] == "1.4*D"

    def test_wind_round_trip_asd(self):
        # 10 psf ASD wind -> 16.67 strength -> 0.6 x 16.67 = 10 back in ASD combo 5
        result = calculate_combinations(
            LoadSet(D=20, W=10), DesignStandard.ASCE7_16, LoadLevel.NOMINAL, DesignMethod.ASD
        )

        assert "16.67" in result.adjustment_notes["W"]
        assert result.results["5. D + 0.6W"] == pytest.approx(30.0)

    def test_seven_16_asd_base_example(self):
        result = calculate_combinations(
            LoadSet(D=20, Lr=20), DesignStandard.ASCE7_16, LoadLevel.NOMINAL, DesignMethod.ASD
        )

        assert result.results["1. D"] == 20
        assert result.results["3. D + (Lr|S|R)"] == 40
        assert result.governing() == ("3. D + (Lr|S|R)", 40)

    def test_seven_22_lrfd_example(self):
        result = calculate_combinations(
            LoadSet(D=50, L=40, S=30), DesignStandard.ASCE7_22, LoadLevel.NOMINAL, DesignMethod.LRFD
        )

        assert result.results["2. 1.2D + 1.6L + 0.5(Lr|S|R)"] == pytest.approx(148.0)
        assert "S" in result.adjustment_notes


class TestComboInputsFromForm:
    """Scenario mapping of the flat form."""

    def test_snow_mapping(self, combo_inputs):
        scenarios = combo_inputs.scenarios

        assert scenarios["windward_wall"].S == 30.0
        assert scenarios["leeward_wall"].S == 9.0
        assert scenarios["windward_roof"].S == 9.0
        assert scenarios["leeward_roof"].S == 35.0
        assert scenarios["cc_roof"].S == 30.0
        assert scenarios["cc_wall"].S == 30.0
        assert scenarios["balanced_snow"].S == 30.0
        assert scenarios["unbalanced_windward_snow"].S == 9.0
        assert scenarios["unbalanced_leeward_snow"].S == 35.0
        assert scenarios["drift_surcharge"].S == 42.0

    def test_wind_mapping(self, combo_inputs):
        scenarios = combo_inputs.scenarios

        assert (scenarios["windward_wall"].W_max, scenarios["windward_wall"].W_min) == (15.0, 5.0)
        assert (scenarios["cc_roof"].W_max, scenarios["cc_roof"].W_min) == (16.0, -30.0)
        assert (scenarios["cc_wall"].W_max, scenarios["cc_wall"].W_min) == (20.0, -22.0)

    def test_snow_only_scenarios_have_no_wind(self, combo_inputs):
        for key in ("balanced_snow", "unbalanced_windward_snow", "unbalanced_leeward_snow", "drift_surcharge"):
            assert combo_inputs.scenarios[key].W_max == 0.0
            assert combo_inputs.scenarios[key].W_min == 0.0

    def test_blank_and_text_values_coerced(self, combo_form):
        combo_form["combo_live_load_l"] = ""
        combo_form["combo_wind_cc_max"] = "abc"
        inputs = combo_inputs_from_form(combo_form)

        assert inputs.L == 0.0
        assert inputs.scenarios["cc_roof"].W_max == 0.0

    def test_selectors(self, combo_form):
        combo_form["combo_design_method"] = "ASD"
        combo_form["combo_unit_system"] = "metric"
        inputs = combo_inputs_from_form(combo_form)

        assert inputs.method == DesignMethod.ASD
        assert inputs.unit_system == UnitSystem.METRIC

    def test_input_ids_cover_all_scenario_fields(self):
        for scenario in SCENARIOS:
            for snow_id in scenario.snow_ids:
                assert snow_id in COMBO_INPUT_IDS
            if scenario.wind_ids:
                assert set(scenario.wind_ids) <= set(COMBO_INPUT_IDS)


class TestRunCombinations:
    """Tests for a complete run."""

    def test_scenarios_data_keys(self, run_result):
        keys = list(run_result.scenarios_data)

        assert len(keys) == 20
        assert keys[0] == "windward_wall_wmax"
        assert keys[1] == "windward_wall_wmin"
        assert keys[-1] == "drift_surcharge_wmin"

    def test_base_combos_ignore_scenario_loads(self, run_result):
        base = run_result.base_combos.results

        # 7-16 LRFD, D=20, L=40, Lr=20, S=W=E=0
        assert base["1. 1.4D"] == pytest.approx(28.0)
        assert base["6. 0.9D + 1.0W"] == pytest.approx(18.0)
        assert run_result.base_combos.adjustment_notes == {}

    def test_max_min_differ_only_in_wind_terms(self, run_result):
        for scenario in run_result.scenarios:
            for combo, value in scenario.wmax.results.items():
                if "W" not in combo:
                    assert value == scenario.wmin.results[combo]

    def test_snow_only_scenarios_identical_at_both_extremes(self, run_result):
        for scenario in run_result.scenarios[6:]:
            assert scenario.wmax.results == scenario.wmin.results

    def test_wind_term_difference(self, run_result):
        windward_wall = run_result.scenarios[0]
        label = "6. 0.9D + 1.0W"
        # 7-16 nominal input: W_strength = W / 0.6
        expected = (15.0 - 5.0) / 0.6

        assert windward_wall.wmax.results[label] - windward_wall.wmin.results[label] == pytest.approx(expected)

    def test_nycbc_forces_asce7_16(self, combo_form):
        combo_form["combo_asce_standard"] = "ASCE 7-22"
        combo_form["combo_jurisdiction"] = "NYCBC 2022"
        result = run_combinations(combo_inputs_from_form(combo_form))
        expected = [f.label for f in ComboFormulaLibrary.get_asce7_16_lrfd()]

        assert result.standard == DesignStandard.ASCE7_16
        assert list(result.base_combos.results) == expected

    def test_asce7_22_without_jurisdiction_override(self, combo_form):
        combo_form["combo_asce_standard"] = "ASCE 7-22"
        result = run_combinations(combo_inputs_from_form(combo_form))

        assert result.standard == DesignStandard.ASCE7_22
        assert "3b. 1.2D + 1.0S + (L|0.5W)" in result.base_combos.results

    def test_adjustment_notes_are_distinct(self, run_result):
        notes = run_result.adjustment_notes

        # Twelve distinct non-zero wind values in the fixture
        assert len(notes) == 12
        assert len(set(notes)) == len(notes)

    def test_deterministic(self, combo_inputs):
        first = run_combinations(combo_inputs).to_dict()
        second = run_combinations(combo_inputs).to_dict()

        assert first == second

    def test_to_dict_shape(self, run_result):
        data = run_result.to_dict()

        assert set(data["base_combos"]) >= {"results", "final_formulas", "adjustment_notes"}
        assert set(data["scenarios_data"]["cc_roof_wmin"]) >= {
            "results", "pattern_results", "pattern_load_required"
        }
        assert set(data["envelope"]) == {"perScenario", "overallMax", "overallMin"}

    def test_warnings_carried(self, combo_inputs):
        result = run_combinations(combo_inputs, warnings=["check units"])

        assert result.warnings == ["check units"]

    def test_missing_scenarios_evaluated_with_zero_loads(self, single_scenario_inputs):
        result = run_combinations(single_scenario_inputs)

        assert len(result.scenarios) == 10
        balanced = result.scenarios[6]
        assert balanced.wmax.results == result.base_combos.results

    def test_pattern_flag_on_every_scenario(self):
        inputs = ComboInputs(D=20, L=150, scenarios={"balanced_snow": ScenarioLoads(S=25)})
        result = run_combinations(inputs)

        assert result.base_combos.pattern_load_required
        assert all(s.pattern_load_required for s in result.scenarios)


class TestSafeCalculation:
    """Unexpected exceptions become a generic message."""

    def test_success(self):
        result, error = safe_calculation(lambda x: x * 2, 21)

        assert result == 42
        assert error is None

    def test_failure_logged(self, caplog):
        def broken():
            raise KeyError("boom")

        with caplog.at_level(logging.ERROR):
            result, error = safe_calculation(broken, error_message="Calculation failed.")

        assert result is None
        assert error == "Calculation failed."
        assert "broken" in caplog.text
