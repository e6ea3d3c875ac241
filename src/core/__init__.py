# Core data models, constants and input handling
from .data_models import (
    DesignStandard,
    DesignMethod,
    LoadLevel,
    UnitSystem,
    LoadSet,
    LoadScope,
    ComboInputs,
    ComboResult,
    ComboRunResult,
)
from .constants import WIND_ASD_TO_STRENGTH, SNOW_NOMINAL_TO_STRENGTH, PATTERN_LIVE_LOAD_FACTOR
from .config import AppConfig, configure_logging
