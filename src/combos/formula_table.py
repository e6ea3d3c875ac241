"""
Load Combination Formula Tables - ASCE 7-16 and ASCE 7-22

This module encodes the strength design (LRFD) and allowable stress design
(ASD) load combinations of both code editions as explicit formula records.

Design Code References:
- ASCE 7-16 Sec. 2.3.2 (LRFD, Eq. 2.3.2-1 to 2.3.2-7)
- ASCE 7-16 Sec. 2.4.1 (ASD, Eq. 2.4-1 to 2.4-10)
- ASCE 7-22 Sec. 2.3.1 (LRFD, Eq. 2.3.1-1 to 2.3.1-7)
- ASCE 7-22 Sec. 2.4.1 (ASD, Eq. 2.4.1-1 to 2.4.1-10)

The two editions are not parametrically identical: ASCE 7-22 splits LRFD
case 3 into 3a/3b, uses strength-level snow (0.7S in ASD) and nominal wind
(1.6W in LRFD). Each table is therefore written out in full.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List

from src.core.data_models import DesignMethod, DesignStandard, LoadScope

SCENARIO_LOAD_SYMBOLS = ("W", "S", "E")


@dataclass(frozen=True)
class ComboFormula:
    """Definition of a single load combination.

    Attributes:
        standard: Code edition the formula belongs to
        method: LRFD or ASD
        ordinal: Equation number within the table (e.g. "3a")
        label: Display label and result key (e.g. "2. 1.2D + 1.6L + 0.5(Lr|S|R)")
        equation: Code equation reference
        expression: Formula text naming the scope variables it reads
        func: Pure function of the load scope
    """
    standard: DesignStandard
    method: DesignMethod
    ordinal: str
    label: str
    equation: str
    expression: str
    func: Callable[[LoadScope], float]

    def evaluate(self, scope: LoadScope) -> float:
        """Evaluate the combination for a load scope."""
        return self.func(scope)

    def to_equation(self) -> str:
        """Equation string for reporting (e.g. "1.4*D  [Eq. 2.3.2-1]")."""
        return f"{self.expression}  [{self.equation}]"


def _formula(standard, method, ordinal, label, equation, expression, func) -> ComboFormula:
    return ComboFormula(
        standard=standard,
        method=method,
        ordinal=ordinal,
        label=f"{ordinal}. {label}",
        equation=equation,
        expression=expression,
        func=func,
    )


class ComboFormulaLibrary:
    """Library of ASCE 7 load combinations, keyed by standard and method."""

    @staticmethod
    def get_asce7_16_lrfd() -> List[ComboFormula]:
        """ASCE 7-16 strength design combinations (S nominal, W strength level)."""
        std, m = DesignStandard.ASCE7_16, DesignMethod.LRFD
        return [
            _formula(std, m, "1", "1.4D", "Eq. 2.3.2-1",
                     "1.4*D",
                     lambda s: 1.4 * s.D),
            _formula(std, m, "2", "1.2D + 1.6L + 0.5(Lr|S|R)", "Eq. 2.3.2-2",
                     "1.2*D + 1.6*L + 0.5*max(Lr, S_nominal, R)",
                     lambda s: 1.2 * s.D + 1.6 * s.L + 0.5 * max(s.Lr, s.S_nominal, s.R)),
            _formula(std, m, "3", "1.2D + 1.6(Lr|S|R) + (L|0.5W)", "Eq. 2.3.2-3",
                     "1.2*D + 1.6*max(Lr, S_nominal, R) + max(L, 0.5*W_strength)",
                     lambda s: 1.2 * s.D + 1.6 * max(s.Lr, s.S_nominal, s.R) + max(s.L, 0.5 * s.W_strength)),
            _formula(std, m, "4", "1.2D + 1.0W + L + 0.5(Lr|S|R)", "Eq. 2.3.2-4",
                     "1.2*D + 1.0*W_strength + L + 0.5*max(Lr, S_nominal, R)",
                     lambda s: 1.2 * s.D + 1.0 * s.W_strength + s.L + 0.5 * max(s.Lr, s.S_nominal, s.R)),
            _formula(std, m, "5", "1.2D + 1.0E + L + 0.2S", "Eq. 2.3.2-5",
                     "1.2*D + 1.0*E + L + 0.2*S_nominal",
                     lambda s: 1.2 * s.D + 1.0 * s.E + s.L + 0.2 * s.S_nominal),
            _formula(std, m, "6", "0.9D + 1.0W", "Eq. 2.3.2-6",
                     "0.9*D + 1.0*W_strength",
                     lambda s: 0.9 * s.D + 1.0 * s.W_strength),
            _formula(std, m, "7", "0.9D + 1.0E", "Eq. 2.3.2-7",
                     "0.9*D + 1.0*E",
                     lambda s: 0.9 * s.D + 1.0 * s.E),
        ]

    @staticmethod
    def get_asce7_16_asd() -> List[ComboFormula]:
        """ASCE 7-16 allowable stress design combinations (W strength level)."""
        std, m = DesignStandard.ASCE7_16, DesignMethod.ASD
        return [
            _formula(std, m, "1", "D", "Eq. 2.4-1",
                     "D",
                     lambda s: s.D),
            _formula(std, m, "2", "D + L", "Eq. 2.4-2",
                     "D + L",
                     lambda s: s.D + s.L),
            _formula(std, m, "3", "D + (Lr|S|R)", "Eq. 2.4-3",
                     "D + max(Lr, S_nominal, R)",
                     lambda s: s.D + max(s.Lr, s.S_nominal, s.R)),
            _formula(std, m, "4", "D + 0.75L + 0.75(Lr|S|R)", "Eq. 2.4-4",
                     "D + 0.75*L + 0.75*max(Lr, S_nominal, R)",
                     lambda s: s.D + 0.75 * s.L + 0.75 * max(s.Lr, s.S_nominal, s.R)),
            _formula(std, m, "5", "D + 0.6W", "Eq. 2.4-5",
                     "D + 0.6*W_strength",
                     lambda s: s.D + 0.6 * s.W_strength),
            _formula(std, m, "6", "D + 0.75L + 0.75(0.6W) + 0.75(Lr|S|R)", "Eq. 2.4-6",
                     "D + 0.75*L + 0.75*(0.6*W_strength) + 0.75*max(Lr, S_nominal, R)",
                     lambda s: s.D + 0.75 * s.L + 0.75 * (0.6 * s.W_strength) + 0.75 * max(s.Lr, s.S_nominal, s.R)),
            _formula(std, m, "7", "D + 0.7E", "Eq. 2.4-7",
                     "D + 0.7*E",
                     lambda s: s.D + 0.7 * s.E),
            _formula(std, m, "8", "D + 0.75L + 0.75(0.7E) + 0.75S", "Eq. 2.4-8",
                     "D + 0.75*L + 0.75*(0.7*E) + 0.75*S_nominal",
                     lambda s: s.D + 0.75 * s.L + 0.75 * (0.7 * s.E) + 0.75 * s.S_nominal),
            _formula(std, m, "9", "0.6D + 0.6W", "Eq. 2.4-9",
                     "0.6*D + 0.6*W_strength",
                     lambda s: 0.6 * s.D + 0.6 * s.W_strength),
            _formula(std, m, "10", "0.6D + 0.7E", "Eq. 2.4-10",
                     "0.6*D + 0.7*E",
                     lambda s: 0.6 * s.D + 0.7 * s.E),
        ]

    @staticmethod
    def get_asce7_22_lrfd() -> List[ComboFormula]:
        """ASCE 7-22 strength design combinations (S strength level, W nominal)."""
        std, m = DesignStandard.ASCE7_22, DesignMethod.LRFD
        return [
            _formula(std, m, "1", "1.4D", "Eq. 2.3.1-1",
                     "1.4*D",
                     lambda s: 1.4 * s.D),
            _formula(std, m, "2", "1.2D + 1.6L + 0.5(Lr|S|R)", "Eq. 2.3.1-2",
                     "1.2*D + 1.6*L + 0.5*max(Lr, S_strength, R)",
                     lambda s: 1.2 * s.D + 1.6 * s.L + 0.5 * max(s.Lr, s.S_strength, s.R)),
            _formula(std, m, "3a", "1.2D + 1.6(Lr|R) + (L|0.5W)", "Eq. 2.3.1-3a",
                     "1.2*D + 1.6*max(Lr, R) + max(L, 0.5*W_nominal)",
                     lambda s: 1.2 * s.D + 1.6 * max(s.Lr, s.R) + max(s.L, 0.5 * s.W_nominal)),
            _formula(std, m, "3b", "1.2D + 1.0S + (L|0.5W)", "Eq. 2.3.1-3b",
                     "1.2*D + 1.0*S_strength + max(L, 0.5*W_nominal)",
                     lambda s: 1.2 * s.D + 1.0 * s.S_strength + max(s.L, 0.5 * s.W_nominal)),
            _formula(std, m, "4", "1.2D + 1.6W + L + 0.5(Lr|S|R)", "Eq. 2.3.1-4",
                     "1.2*D + 1.6*W_nominal + L + 0.5*max(Lr, S_strength, R)",
                     lambda s: 1.2 * s.D + 1.6 * s.W_nominal + s.L + 0.5 * max(s.Lr, s.S_strength, s.R)),
            _formula(std, m, "5", "1.2D + 1.0E + L + 1.0S", "Eq. 2.3.1-5",
                     "1.2*D + 1.0*E + L + 1.0*S_strength",
                     lambda s: 1.2 * s.D + 1.0 * s.E + s.L + 1.0 * s.S_strength),
            _formula(std, m, "6", "0.9D + 1.6W", "Eq. 2.3.1-6",
                     "0.9*D + 1.6*W_nominal",
                     lambda s: 0.9 * s.D + 1.6 * s.W_nominal),
            _formula(std, m, "7", "0.9D + 1.0E", "Eq. 2.3.1-7",
                     "0.9*D + 1.0*E",
                     lambda s: 0.9 * s.D + 1.0 * s.E),
        ]

    @staticmethod
    def get_asce7_22_asd() -> List[ComboFormula]:
        """ASCE 7-22 allowable stress design combinations (S strength level, W nominal)."""
        std, m = DesignStandard.ASCE7_22, DesignMethod.ASD
        return [
            _formula(std, m, "1", "D", "Eq. 2.4.1-1",
                     "D",
                     lambda s: s.D),
            _formula(std, m, "2", "D + L", "Eq. 2.4.1-2",
                     "D + L",
                     lambda s: s.D + s.L),
            _formula(std, m, "3", "D + (Lr|0.7S|R)", "Eq. 2.4.1-3",
                     "D + max(Lr, 0.7*S_strength, R)",
                     lambda s: s.D + max(s.Lr, 0.7 * s.S_strength, s.R)),
            _formula(std, m, "4", "D + 0.75L + 0.75(Lr|0.7S|R)", "Eq. 2.4.1-4",
                     "D + 0.75*L + 0.75*max(Lr, 0.7*S_strength, R)",
                     lambda s: s.D + 0.75 * s.L + 0.75 * max(s.Lr, 0.7 * s.S_strength, s.R)),
            _formula(std, m, "5", "D + W", "Eq. 2.4.1-5",
                     "D + W_nominal",
                     lambda s: s.D + s.W_nominal),
            _formula(std, m, "6", "D + 0.75L + 0.75W + 0.75(Lr|0.7S|R)", "Eq. 2.4.1-6",
                     "D + 0.75*L + 0.75*W_nominal + 0.75*max(Lr, 0.7*S_strength, R)",
                     lambda s: s.D + 0.75 * s.L + 0.75 * s.W_nominal + 0.75 * max(s.Lr, 0.7 * s.S_strength, s.R)),
            _formula(std, m, "7", "D + 0.7E", "Eq. 2.4.1-7",
                     "D + 0.7*E",
                     lambda s: s.D + 0.7 * s.E),
            _formula(std, m, "8", "D + 0.75L + 0.75(0.7E) + 0.75(0.7S)", "Eq. 2.4.1-8",
                     "D + 0.75*L + 0.75*(0.7*E) + 0.75*(0.7*S_strength)",
                     lambda s: s.D + 0.75 * s.L + 0.75 * (0.7 * s.E) + 0.75 * (0.7 * s.S_strength)),
            _formula(std, m, "9", "0.6D + W", "Eq. 2.4.1-9",
                     "0.6*D + W_nominal",
                     lambda s: 0.6 * s.D + s.W_nominal),
            _formula(std, m, "10", "0.6D + 0.7E", "Eq. 2.4.1-10",
                     "0.6*D + 0.7*E",
                     lambda s: 0.6 * s.D + 0.7 * s.E),
        ]

    @staticmethod
    def get_formulas(standard: DesignStandard, method: DesignMethod) -> List[ComboFormula]:
        """Get the ordered formula table for a standard and method.

        Args:
            standard: ASCE 7 edition
            method: LRFD or ASD

        Returns:
            Formulas in equation-number order
        """
        tables = {
            (DesignStandard.ASCE7_16, DesignMethod.LRFD): ComboFormulaLibrary.get_asce7_16_lrfd,
            (DesignStandard.ASCE7_16, DesignMethod.ASD): ComboFormulaLibrary.get_asce7_16_asd,
            (DesignStandard.ASCE7_22, DesignMethod.LRFD): ComboFormulaLibrary.get_asce7_22_lrfd,
            (DesignStandard.ASCE7_22, DesignMethod.ASD): ComboFormulaLibrary.get_asce7_22_asd,
        }
        return tables[(standard, method)]()


def evaluate_formulas(formulas: List[ComboFormula], scope: LoadScope) -> Dict[str, float]:
    """Evaluate formulas over a scope, keyed by label in table order."""
    return {formula.label: formula.evaluate(scope) for formula in formulas}
