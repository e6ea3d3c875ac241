"""
Unit tests for the governing envelope.

Tests cover:
- Base combination exclusion
- Enumeration order of candidates (max wind, min wind, pattern rows)
- First-wins tie breaking
- Worked per-scenario and overall values
"""

import pytest

from src.combos.envelope import (
    GoverningEntry,
    build_envelope,
    collect_governing_entries,
    is_scenario_combo,
)
from src.combos.scenarios import run_combinations
from src.core.data_models import ComboInputs, ScenarioLoads


class TestIsScenarioCombo:

    @pytest.mark.parametrize("label", ["1. D", "2. D + L", "1. 1.4D"])
    def test_base_labels(self, label):
        assert is_scenario_combo(label) is False

    @pytest.mark.parametrize("label", [
        "3. D + (Lr|S|R)", "5. D + 0.6W", "7. D + 0.7E", "3a. 1.2D + 1.6(Lr|R) + (L|0.5W)",
    ])
    def test_varying_labels(self, label):
        assert is_scenario_combo(label) is True


class TestCollectGoverningEntries:

    def test_base_combos_excluded(self, single_scenario_inputs):
        result = run_combinations(single_scenario_inputs)
        entries = collect_governing_entries(result.scenarios)
        combos = {entry.combo for entry in entries}

        assert "1. D" not in combos
        assert "2. D + L" not in combos
        # 8 varying ASD combinations x 2 wind extremes x 10 scenarios
        assert len(entries) == 160

    def test_max_wind_entry_precedes_min_wind_entry(self, single_scenario_inputs):
        result = run_combinations(single_scenario_inputs)
        entries = collect_governing_entries(result.scenarios[:1])

        wind_entries = [e for e in entries if e.combo == "5. D + 0.6W"]
        assert [e.value for e in wind_entries] == [pytest.approx(30.0), pytest.approx(10.0)]

    def test_pattern_rows_follow_normal_rows(self):
        inputs = ComboInputs(D=10, L=120, scenarios={"windward_wall": ScenarioLoads(W_max=10, W_min=-5)})
        result = run_combinations(inputs)
        entries = collect_governing_entries(result.scenarios[:1])
        flags = [entry.pattern for entry in entries]

        assert any(flags)
        first_pattern = flags.index(True)
        assert not any(flags[:first_pattern])
        assert all(flags[first_pattern:])

    def test_no_pattern_rows_below_threshold(self, single_scenario_inputs):
        result = run_combinations(single_scenario_inputs)
        entries = collect_governing_entries(result.scenarios)

        assert not any(entry.pattern for entry in entries)


class TestBuildEnvelope:

    def test_first_entry_wins_ties(self):
        entries = [
            GoverningEntry("Windward Wall Analysis", "3. D + (Lr|S|R)", 40.0),
            GoverningEntry("Windward Wall Analysis", "4. D + 0.75L + 0.75(Lr|S|R)", 40.0),
            GoverningEntry("Balanced Snow Analysis", "3. D + (Lr|S|R)", 40.0),
        ]
        envelope = build_envelope(entries)

        assert envelope.per_scenario["Windward Wall Analysis"].max.combo == "3. D + (Lr|S|R)"
        assert envelope.per_scenario["Windward Wall Analysis"].min.combo == "3. D + (Lr|S|R)"
        assert envelope.overall_max.title == "Windward Wall Analysis"
        assert envelope.overall_min.title == "Windward Wall Analysis"

    def test_empty_entries(self):
        envelope = build_envelope([])

        assert envelope.per_scenario == {}
        assert envelope.overall_max is None
        assert envelope.overall_min is None

    def test_pattern_flag_carried(self):
        entries = [
            GoverningEntry("Balanced Snow Analysis", "5. 1.2D + 1.0E + L + 0.2S", 10.0),
            GoverningEntry("Balanced Snow Analysis", "5. 1.2D + 1.0E + L + 0.2S", 7.5, pattern=True),
        ]
        envelope = build_envelope(entries)

        assert envelope.overall_max.pattern is False
        assert envelope.overall_min.pattern is True
        assert envelope.overall_min.value == 7.5


class TestWorkedEnvelope:
    """7-16 ASD, D = Lr = 20, windward wall W = +/-10 (nominal)."""

    @pytest.fixture
    def envelope(self, single_scenario_inputs):
        return run_combinations(single_scenario_inputs).envelope

    def test_windward_wall(self, envelope):
        windward_wall = envelope.per_scenario["Windward Wall Analysis"]

        # D + 0.75(0.6W) + 0.75Lr = 20 + 7.5 + 15
        assert windward_wall.max.combo == "6. D + 0.75L + 0.75(0.6W) + 0.75(Lr|S|R)"
        assert windward_wall.max.value == pytest.approx(42.5)
        # 0.6D + 0.6W = 12 - 10
        assert windward_wall.min.combo == "9. 0.6D + 0.6W"
        assert windward_wall.min.value == pytest.approx(2.0)

    def test_zero_wind_scenario_ties(self, envelope):
        balanced = envelope.per_scenario["Balanced Snow Analysis"]

        assert balanced.max.combo == "3. D + (Lr|S|R)"
        assert balanced.max.value == 40
        # 0.6D + 0.6W and 0.6D + 0.7E both give 12; the earlier one governs
        assert balanced.min.combo == "9. 0.6D + 0.6W"
        assert balanced.min.value == pytest.approx(12.0)

    def test_overall(self, envelope):
        assert envelope.overall_max.title == "Windward Wall Analysis"
        assert envelope.overall_max.value == pytest.approx(42.5)
        assert envelope.overall_min.title == "Windward Wall Analysis"
        assert envelope.overall_min.value == pytest.approx(2.0)

    def test_every_scenario_present(self, envelope):
        assert len(envelope.per_scenario) == 10
