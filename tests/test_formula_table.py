"""
Unit tests for the ASCE 7 formula tables.

Tests cover:
- Table sizes, ordering and labels per standard and method
- Which snow/wind variant each edition reads
- Worked examples
- Scenario-varying vs base combinations
"""

import pytest

from src.combos.envelope import is_scenario_combo
from src.combos.formula_table import ComboFormulaLibrary, evaluate_formulas
from src.combos.load_level import normalize_loads
from src.core.data_models import (
    DesignMethod,
    DesignStandard,
    LoadLevel,
    LoadScope,
    LoadSet,
)


def scope_716(**loads) -> LoadScope:
    base = dict(D=0.0, L=0.0, Lr=0.0, R=0.0, E=0.0, S_nominal=0.0, W_strength=0.0)
    base.update(loads)
    return LoadScope(**base)


def scope_722(**loads) -> LoadScope:
    base = dict(D=0.0, L=0.0, Lr=0.0, R=0.0, E=0.0, S_strength=0.0, W_nominal=0.0)
    base.update(loads)
    return LoadScope(**base)


class TestTableStructure:
    """Tests for table sizes and labels."""

    @pytest.mark.parametrize("standard, method, count", [
        (DesignStandard.ASCE7_16, DesignMethod.LRFD, 7),
        (DesignStandard.ASCE7_16, DesignMethod.ASD, 10),
        (DesignStandard.ASCE7_22, DesignMethod.LRFD, 8),
        (DesignStandard.ASCE7_22, DesignMethod.ASD, 10),
    ])
    def test_table_sizes(self, standard, method, count):
        formulas = ComboFormulaLibrary.get_formulas(standard, method)

        assert len(formulas) == count
        assert all(f.standard == standard and f.method == method for f in formulas)

    def test_asce7_16_lrfd_labels(self):
        labels = [f.label for f in ComboFormulaLibrary.get_asce7_16_lrfd()]

        assert labels == [
            "1. 1.4D",
            "2. 1.2D + 1.6L + 0.5(Lr|S|R)",
            "3. 1.2D + 1.6(Lr|S|R) + (L|0.5W)",
            "4. 1.2D + 1.0W + L + 0.5(Lr|S|R)",
            "5. 1.2D + 1.0E + L + 0.2S",
            "6. 0.9D + 1.0W",
            "7. 0.9D + 1.0E",
        ]

    def test_asce7_22_lrfd_splits_case_3(self):
        ordinals = [f.ordinal for f in ComboFormulaLibrary.get_asce7_22_lrfd()]

        assert ordinals == ["1", "2", "3a", "3b", "4", "5", "6", "7"]

    def test_asce7_22_asd_labels_use_0_7_snow(self):
        labels = [f.label for f in ComboFormulaLibrary.get_asce7_22_asd()]

        assert labels[2] == "3. D + (Lr|0.7S|R)"
        assert labels[7] == "8. D + 0.75L + 0.75(0.7E) + 0.75(0.7S)"

    def test_labels_unique_within_table(self):
        for standard in DesignStandard:
            for method in DesignMethod:
                labels = [f.label for f in ComboFormulaLibrary.get_formulas(standard, method)]
                assert len(labels) == len(set(labels))

    def test_table_sizes_total(self):
        total = sum(
            len(ComboFormulaLibrary.get_formulas(standard, method))
            for standard in DesignStandard
            for method in DesignMethod
        )

        assert total == 35

    def test_to_equation_includes_reference(self):
        formula = ComboFormulaLibrary.get_asce7_16_lrfd()[0]

        assert formula.to_equation() == "1.4*D  [Eq. 2.3.2-1]"


class TestBaseCombinations:
    """Base combinations contain none of W, S or E."""

    def test_asce7_16_asd_base_combos(self):
        formulas = ComboFormulaLibrary.get_asce7_16_asd()
        base = [f.label for f in formulas if not is_scenario_combo(f.label)]

        assert base == ["1. D", "2. D + L"]

    def test_asce7_22_lrfd_base_combos(self):
        formulas = ComboFormulaLibrary.get_asce7_22_lrfd()
        base = [f.label for f in formulas if not is_scenario_combo(f.label)]

        assert base == ["1. 1.4D"]


class TestASCE716Values:
    """ASCE 7-16 tables use S_nominal and W_strength."""

    def test_lrfd_values(self):
        scope = scope_716(D=10, L=20, Lr=5, R=3, E=4, S_nominal=8, W_strength=30)
        results = evaluate_formulas(ComboFormulaLibrary.get_asce7_16_lrfd(), scope)
        values = list(results.values())

        assert values[0] == pytest.approx(14.0)                       # 1.4D
        assert values[1] == pytest.approx(12 + 32 + 4)                # 0.5 * max(5, 8, 3)
        assert values[2] == pytest.approx(12 + 12.8 + 20)             # max(L=20, 0.5W=15)
        assert values[3] == pytest.approx(12 + 30 + 20 + 4)
        assert values[4] == pytest.approx(12 + 4 + 20 + 1.6)
        assert values[5] == pytest.approx(9 + 30)
        assert values[6] == pytest.approx(9 + 4)

    def test_asd_base_example(self):
        scope = scope_716(D=20, Lr=20)
        results = evaluate_formulas(ComboFormulaLibrary.get_asce7_16_asd(), scope)

        assert results["1. D"] == 20
        assert results["3. D + (Lr|S|R)"] == 40

    def test_asd_wind_uses_0_6_strength(self):
        scope = scope_716(D=10, W_strength=50)
        results = evaluate_formulas(ComboFormulaLibrary.get_asce7_16_asd(), scope)

        assert results["5. D + 0.6W"] == pytest.approx(40.0)
        assert results["9. 0.6D + 0.6W"] == pytest.approx(36.0)


class TestASCE722Values:
    """ASCE 7-22 tables use S_strength and W_nominal."""

    def test_lrfd_example_148(self):
        loads = LoadSet(D=50, L=40, S=30)
        scope = normalize_loads(loads, DesignStandard.ASCE7_22, LoadLevel.NOMINAL).scope
        results = evaluate_formulas(ComboFormulaLibrary.get_asce7_22_lrfd(), scope)

        assert scope.S_strength == pytest.approx(48.0)
        assert results["2. 1.2D + 1.6L + 0.5(Lr|S|R)"] == pytest.approx(148.0)

    def test_lrfd_case_3b_and_case_5(self):
        scope = scope_722(D=10, L=5, S_strength=20, E=2, W_nominal=30)
        results = evaluate_formulas(ComboFormulaLibrary.get_asce7_22_lrfd(), scope)

        assert results["3b. 1.2D + 1.0S + (L|0.5W)"] == pytest.approx(12 + 20 + 15)
        assert results["4. 1.2D + 1.6W + L + 0.5(Lr|S|R)"] == pytest.approx(12 + 48 + 5 + 10)
        assert results["5. 1.2D + 1.0E + L + 1.0S"] == pytest.approx(12 + 2 + 5 + 20)
        assert results["6. 0.9D + 1.6W"] == pytest.approx(9 + 48)

    def test_asd_snow_uses_0_7(self):
        scope = scope_722(D=10, S_strength=40)
        results = evaluate_formulas(ComboFormulaLibrary.get_asce7_22_asd(), scope)

        assert results["3. D + (Lr|0.7S|R)"] == pytest.approx(38.0)
        assert results["8. D + 0.75L + 0.75(0.7E) + 0.75(0.7S)"] == pytest.approx(10 + 21)


def test_evaluation_is_deterministic():
    scope = scope_722(D=13.3, L=7.1, S_strength=9.9, W_nominal=-4.4)
    formulas = ComboFormulaLibrary.get_asce7_22_lrfd()

    assert evaluate_formulas(formulas, scope) == evaluate_formulas(formulas, scope)


def test_evaluation_preserves_table_order():
    formulas = ComboFormulaLibrary.get_asce7_16_asd()
    results = evaluate_formulas(formulas, scope_716(D=1))

    assert list(results) == [f.label for f in formulas]
