"""
Unit tests for the roof snow load calculator.

Tests cover:
- Slope factor curves and snow density
- Drift height and width
- Unbalanced, drift and sliding loads
- Low-slope and NYCBC minimums
- Metric conversion and the combinator hand-off
"""

import pytest

from src.core.constants import JURISDICTION_NYCBC_2022, PSF_PER_KPA
from src.core.data_models import DesignStandard, SnowInputs, UnitSystem
from src.engines.snow_engine import (
    SnowEngine,
    calculate_drift_loads,
    calculate_sliding_load,
    calculate_slope_factor,
    calculate_snow_density,
    calculate_unbalanced_loads,
    drift_height_7_16,
    drift_height_7_22,
    drift_width,
    snow_inputs_from_form,
)


class TestSlopeFactor:
    """Tests for Cs (Fig. 7.4-1)."""

    @pytest.mark.parametrize("slope, slippery, Ct, expected", [
        (20.0, False, 1.0, 1.0),
        (40.0, False, 1.0, 0.75),
        (37.5, True, 1.0, 0.5),
        (4.0, True, 1.0, 1.0),
        (75.0, False, 1.0, 0.0),
        (50.0, False, 1.2, 0.8),
        (42.5, True, 1.2, 0.5),
    ])
    def test_asce7_16(self, slope, slippery, Ct, expected):
        Cs = calculate_slope_factor(slope, slippery, Ct, DesignStandard.ASCE7_16)

        assert Cs == pytest.approx(expected)

    def test_asce7_22_uses_warm_roof_curve_for_cold_roofs(self):
        Cs = calculate_slope_factor(40.0, False, 1.2, DesignStandard.ASCE7_22)

        assert Cs == pytest.approx(0.75)


class TestSnowDensity:

    def test_typical(self):
        assert calculate_snow_density(30.0) == pytest.approx(17.9)

    def test_capped_at_30_pcf(self):
        assert calculate_snow_density(200.0) == 30.0

    @pytest.mark.parametrize("pg", [0.0, -5.0, float("inf")])
    def test_invalid_ground_load(self, pg):
        assert calculate_snow_density(pg) == 14.0


class TestDriftGeometry:

    def test_drift_height_7_16(self):
        # 0.43 (100)^(1/3) (40)^(1/4) - 1.5
        assert drift_height_7_16(100.0, 30.0, 1.0) == pytest.approx(3.519, abs=1e-3)

    def test_drift_height_7_16_importance_factor(self):
        base = drift_height_7_16(100.0, 30.0, 1.0)

        assert drift_height_7_16(100.0, 30.0, 1.21) == pytest.approx(base / 1.1)

    def test_drift_height_7_16_short_roof_not_negative(self):
        assert drift_height_7_16(1.0, 0.0, 1.0) == 0.0

    def test_drift_height_7_22(self):
        expected = 1.5 * (30.0 ** 0.74 * 100.0 ** 0.7 * 0.5 ** 1.7) / 17.9

        assert drift_height_7_22(100.0, 30.0, 0.5, 17.9) == pytest.approx(expected)

    @pytest.mark.parametrize("length, pg, W2, gamma", [
        (0.0, 30.0, 0.5, 17.9),
        (100.0, 0.0, 0.5, 17.9),
        (100.0, 30.0, -0.1, 17.9),
        (100.0, 30.0, 0.5, 0.0),
    ])
    def test_drift_height_7_22_degenerate(self, length, pg, W2, gamma):
        assert drift_height_7_22(length, pg, W2, gamma) == 0.0

    @pytest.mark.parametrize("hd, hc, expected", [
        (2.0, 5.0, 8.0),
        (3.0, 4.0, 12.0),
        (4.0, 2.0, 16.0),  # 4 hd^2 / hc = 32, capped at 8 hc
        (3.0, 0.0, 0.0),
    ])
    def test_drift_width(self, hd, hc, expected):
        assert drift_width(hd, hc) == pytest.approx(expected)


class TestUnbalancedLoads:
    """Tests for hip and gable roof unbalanced loads."""

    def test_flat_roof_not_required(self):
        result = calculate_unbalanced_loads(21.0, 30.0, 2.0, DesignStandard.ASCE7_16, 50.0, 0.5, 17.9, 1.0)

        assert result.applicable is False
        assert "0.5:12" in result.reason

    def test_case_b(self):
        result = calculate_unbalanced_loads(21.0, 30.0, 20.0, DesignStandard.ASCE7_16, 50.0, 0.5, 17.9, 1.0)

        assert result.applicable is True
        assert result.case.startswith("B")
        assert result.windward == pytest.approx(6.3)
        assert result.leeward == pytest.approx(21.0)
        assert result.leeward_total == pytest.approx(21.0)

    def test_case_c_asce7_16(self):
        result = calculate_unbalanced_loads(21.0, 30.0, 45.0, DesignStandard.ASCE7_16, 100.0, 0.5, 17.9, 1.0)
        hd = drift_height_7_16(100.0, 30.0, 1.0)

        assert result.case.startswith("C")
        assert result.windward == 0.0
        assert result.hd == pytest.approx(hd)
        assert result.surcharge_magnitude == pytest.approx(hd * 17.9)
        assert result.surcharge_width == pytest.approx(8 / 3 * hd)
        assert result.leeward_total == pytest.approx(21.0 + hd * 17.9)

    def test_case_c_asce7_22_uses_w2(self):
        result = calculate_unbalanced_loads(21.0, 30.0, 45.0, DesignStandard.ASCE7_22, 100.0, 0.0, 17.9, 1.0)

        assert result.applicable is True
        assert result.hd == 0.0
        assert result.surcharge_magnitude == 0.0


class TestDriftLoads:

    def test_not_required_without_step(self):
        result = calculate_drift_loads(30.0, 100.0, 0.0, 21.0, DesignStandard.ASCE7_16, 0.5, 50.0, 1.0)

        assert result.applicable is False
        assert "0.2" in result.reason

    def test_asce7_16_leeward_governs(self):
        result = calculate_drift_loads(30.0, 100.0, 5.0, 21.0, DesignStandard.ASCE7_16, 0.5, 50.0, 1.0)
        hd = drift_height_7_16(100.0, 30.0, 1.0)

        assert result.applicable is True
        assert result.gamma == pytest.approx(17.9)
        assert result.hb == pytest.approx(21.0 / 17.9)
        assert result.hd == pytest.approx(hd)
        assert result.w == pytest.approx(4 * hd)
        assert result.pd == pytest.approx(hd * 17.9)

    def test_asce7_16_leeward_limited_by_lower_roof(self):
        result = calculate_drift_loads(30.0, 100.0, 5.0, 21.0, DesignStandard.ASCE7_16, 0.5, 2.0, 1.0)

        # 0.6 ll = 1.2 ft; the windward drift from a 2 ft lower roof is zero
        assert result.hd == pytest.approx(1.2)

    def test_asce7_22(self):
        result = calculate_drift_loads(30.0, 100.0, 5.0, 21.0, DesignStandard.ASCE7_22, 0.5, 50.0, 1.0)
        hd_leeward = drift_height_7_22(100.0, 30.0, 0.5, 17.9)

        assert result.applicable is True
        assert result.hd == pytest.approx(hd_leeward)
        assert result.pd == pytest.approx(hd_leeward * 17.9)


class TestSlidingLoad:

    def test_non_slippery(self):
        result = calculate_sliding_load(21.0, 20.0, 0.6, False, UnitSystem.IMPERIAL)

        assert result.applicable is False

    def test_full_slope_factor(self):
        result = calculate_sliding_load(21.0, 20.0, 1.0, True, UnitSystem.IMPERIAL)

        assert result.applicable is False

    def test_missing_eave_to_ridge_distance(self):
        result = calculate_sliding_load(21.0, 0.0, 0.6, True, UnitSystem.IMPERIAL)

        assert result.applicable is False
        assert "positive" in result.reason

    def test_imperial(self):
        result = calculate_sliding_load(21.0, 20.0, 0.6, True, UnitSystem.IMPERIAL)

        assert result.Ws == pytest.approx(168.0)
        assert result.distribution_width == 15.0
        assert result.ps_sliding == pytest.approx(11.2)

    def test_metric_width(self):
        result = calculate_sliding_load(1.0, 6.0, 0.6, True, UnitSystem.METRIC)

        assert result.distribution_width == 4.6
        assert result.ps_sliding == pytest.approx(2.4 / 4.6)


class TestSnowEngine:
    """Tests for the complete calculation."""

    def test_balanced_flat_roof(self):
        result = SnowEngine(SnowInputs(ground_snow_load=30.0)).calculate()

        assert (result.Is, result.Ce, result.Ct, result.Cs) == (1.0, 1.0, 1.0, 1.0)
        assert result.pf == pytest.approx(21.0)
        assert result.is_low_slope is True
        assert result.ps_minimum == pytest.approx(20.0)
        assert result.ps_balanced == pytest.approx(21.0)
        assert result.minimum_governs is False
        assert result.calculations

    def test_low_slope_minimum_governs(self):
        result = SnowEngine(SnowInputs(ground_snow_load=15.0)).calculate()

        assert result.pf == pytest.approx(10.5)
        assert result.ps_balanced == pytest.approx(15.0)
        assert result.minimum_governs is True

    def test_steep_roof_has_no_minimum(self):
        result = SnowEngine(SnowInputs(ground_snow_load=15.0, roof_slope_degrees=20.0)).calculate()

        assert result.is_low_slope is False
        assert result.ps_minimum == 0.0
        assert result.ps_balanced == pytest.approx(10.5)

    def test_factors_from_tables(self):
        inputs = SnowInputs(
            ground_snow_load=40.0,
            risk_category="IV",
            surface_roughness="D",
            exposure="Fully Exposed",
            thermal_condition="Unheated Structure",
            roof_slope_degrees=20.0,
        )
        result = SnowEngine(inputs).calculate()

        assert (result.Is, result.Ce, result.Ct) == (1.2, 0.8, 1.2)
        assert result.pf == pytest.approx(0.7 * 0.8 * 1.2 * 1.2 * 40.0)

    def test_nycbc_minimum_governs(self):
        inputs = SnowInputs(
            jurisdiction=JURISDICTION_NYCBC_2022,
            ground_snow_load=20.0,
            nycbc_minimum_roof_snow_load=30.0,
        )
        result = SnowEngine(inputs).calculate()

        assert result.ps_balanced == pytest.approx(30.0)
        assert result.nycbc_minimum_governs is True
        assert len(result.warnings) == 1
        assert "NYCBC 2022" in result.warnings[0]

    def test_nycbc_ignored_elsewhere(self):
        inputs = SnowInputs(ground_snow_load=20.0, nycbc_minimum_roof_snow_load=30.0)
        result = SnowEngine(inputs).calculate()

        assert result.ps_balanced == pytest.approx(20.0)
        assert result.nycbc_minimum_governs is False
        assert result.warnings == []

    def test_metric_round_trip(self):
        inputs = SnowInputs(unit_system=UnitSystem.METRIC, ground_snow_load=30.0 / PSF_PER_KPA)
        result = SnowEngine(inputs).calculate()

        assert result.pf == pytest.approx(21.0 / PSF_PER_KPA)
        assert result.ps_balanced == pytest.approx(21.0 / PSF_PER_KPA)
        assert any("Metric" in note for note in result.notes)

    def test_partial_load(self):
        inputs = SnowInputs(ground_snow_load=30.0, is_simply_supported_prismatic=False)
        result = SnowEngine(inputs).calculate()

        assert result.partial_load == pytest.approx(10.5)
        assert SnowEngine.PARTIAL_LOAD_NOTE in result.notes

    def test_sliding_in_engine(self):
        inputs = SnowInputs(
            ground_snow_load=30.0,
            roof_slope_degrees=30.0,
            is_roof_slippery=True,
            calculate_sliding=True,
            eave_to_ridge_distance_W=20.0,
        )
        result = SnowEngine(inputs).calculate()

        assert result.sliding.applicable is True
        assert result.sliding.ps_sliding == pytest.approx(11.2)

    def test_optional_checks_skipped_by_default(self):
        result = SnowEngine(SnowInputs(ground_snow_load=30.0)).calculate()

        assert result.unbalanced is None
        assert result.drift is None
        assert result.sliding is None

    def test_metric_drift_converted(self):
        inputs = SnowInputs(
            unit_system=UnitSystem.METRIC,
            ground_snow_load=30.0 / PSF_PER_KPA,
            calculate_drift=True,
            upper_roof_length_lu=100.0 / 3.28084,
            height_difference_hc=5.0 / 3.28084,
            lower_roof_length_ll=50.0 / 3.28084,
        )
        result = SnowEngine(inputs).calculate()
        hd_ft = drift_height_7_16(100.0, 30.0, 1.0)

        assert result.drift.hd == pytest.approx(hd_ft / 3.28084, rel=1e-6)
        assert result.drift.pd == pytest.approx(hd_ft * 17.9 / PSF_PER_KPA, rel=1e-6)


class TestLoadsForCombos:
    """Tests for the hand-off to the load combinator."""

    def test_balanced_only(self):
        result = SnowEngine(SnowInputs(ground_snow_load=30.0)).calculate()

        assert result.loads_for_combos() == {"combo_balanced_snow_load_sb": pytest.approx(21.0)}

    def test_unbalanced_and_drift(self):
        inputs = SnowInputs(
            ground_snow_load=30.0,
            roof_slope_degrees=20.0,
            calculate_unbalanced=True,
            calculate_drift=True,
            upper_roof_length_lu=100.0,
            height_difference_hc=5.0,
            lower_roof_length_ll=50.0,
        )
        loads = SnowEngine(inputs).calculate().loads_for_combos()

        assert loads["combo_balanced_snow_load_sb"] == pytest.approx(21.0)
        assert loads["combo_unbalanced_windward_snow_load_suw"] == pytest.approx(6.3)
        assert loads["combo_unbalanced_leeward_snow_load_sul"] == pytest.approx(21.0)
        assert loads["combo_drift_surcharge_sd"] == pytest.approx(
            drift_height_7_16(100.0, 30.0, 1.0) * 17.9
        )

    def test_not_applicable_loads_omitted(self):
        inputs = SnowInputs(ground_snow_load=30.0, calculate_unbalanced=True, calculate_drift=True)
        loads = SnowEngine(inputs).calculate().loads_for_combos()

        assert list(loads) == ["combo_balanced_snow_load_sb"]


class TestSnowInputsFromForm:

    def test_flags_and_defaults(self):
        inputs = snow_inputs_from_form({
            "snow_asce_standard": "ASCE 7-22",
            "snow_ground_snow_load": "35",
            "snow_is_roof_slippery": "Yes",
            "snow_calculate_drift": "No",
        })

        assert inputs.standard == DesignStandard.ASCE7_22
        assert inputs.ground_snow_load == 35.0
        assert inputs.is_roof_slippery is True
        assert inputs.calculate_drift is False
        assert inputs.is_simply_supported_prismatic is True
        assert inputs.unit_system == UnitSystem.IMPERIAL

    def test_simply_supported_no(self):
        inputs = snow_inputs_from_form({"snow_is_simply_supported_prismatic": "No"})

        assert inputs.is_simply_supported_prismatic is False
