"""
Snow Load Factor Tables per ASCE 7-16/22 (Tables 1.5-2, 7.3-1, 7.3-2)
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ExposureFactorEntry:
    """Single row of ASCE 7 Table 7.3-1 (exposure factor Ce)"""
    surface_roughness: str
    fully_exposed: float
    partially_exposed: float
    sheltered: Optional[float] = None  # Not tabulated above treeline / Alaska

    def get_factor(self, exposure: str) -> Optional[float]:
        """Ce for an exposure condition name, or None if not tabulated"""
        return {
            "Fully Exposed": self.fully_exposed,
            "Partially Exposed": self.partially_exposed,
            "Sheltered": self.sheltered,
        }.get(exposure)


# Snow importance factor Is by risk category (Table 1.5-2)
SNOW_IMPORTANCE_FACTORS = {
    "I": 0.8,
    "II": 1.0,
    "III": 1.1,
    "IV": 1.2,
}

# Exposure factor Ce (Table 7.3-1)
EXPOSURE_FACTOR_TABLE = {
    "B": ExposureFactorEntry("B", 0.9, 1.0, 1.2),
    "C": ExposureFactorEntry("C", 0.9, 1.0, 1.1),
    "D": ExposureFactorEntry("D", 0.8, 0.9, 1.0),
    "Above treeline (windswept)": ExposureFactorEntry("Above treeline (windswept)", 0.7, 0.8),
    "Alaska (no trees)": ExposureFactorEntry("Alaska (no trees)", 0.7, 0.8),
}

EXPOSURE_CONDITIONS = ["Fully Exposed", "Partially Exposed", "Sheltered"]

# Thermal factor Ct (Table 7.3-2, simplified to heated/unheated)
THERMAL_FACTORS = {
    "Heated Structure": 1.0,
    "Unheated Structure": 1.2,
}


def get_importance_factor(risk_category: str) -> float:
    """Is for a risk category; unknown categories use 1.0"""
    return SNOW_IMPORTANCE_FACTORS.get(risk_category, 1.0)


def get_exposure_factor(surface_roughness: str, exposure: str) -> float:
    """Ce for a surface roughness / exposure pair; untabulated pairs use 1.0"""
    entry = EXPOSURE_FACTOR_TABLE.get(surface_roughness)
    if entry is None:
        return 1.0
    factor = entry.get_factor(exposure)
    return factor if factor is not None else 1.0


def get_thermal_factor(thermal_condition: str) -> float:
    """Ct for a thermal condition; unknown conditions use 1.0"""
    return THERMAL_FACTORS.get(thermal_condition, 1.0)
