"""
Engineering Constants for ASCE 7-16 / ASCE 7-22 Load Combinations
"""

# Load-level conversion factors
WIND_ASD_TO_STRENGTH = 0.6      # ASCE 7-16: W_strength = W_asd / 0.6
SNOW_NOMINAL_TO_STRENGTH = 1.6  # ASCE 7-22: S_strength = 1.6 S_nominal

# Pattern live load (ASCE 7-16/22 Sec. 4.3.5)
PATTERN_LIVE_LOAD_FACTOR = 0.75
LIVE_LOAD_THRESHOLD_PSF = 100.0
LIVE_LOAD_THRESHOLD_KPA = 4.79

# Jurisdictions
JURISDICTION_ASCE = "ASCE 7 (No Local Amendments)"
JURISDICTION_NYCBC_2022 = "NYCBC 2022"
JURISDICTIONS = [JURISDICTION_ASCE, JURISDICTION_NYCBC_2022]

# NYCBC 2022 Sec. 1608.2 minimum ground snow load (psf)
NYCBC_MIN_GROUND_SNOW_LOAD = 25.0

# Advisory limits for input warnings
DEAD_LOAD_WARNING_PSF = 300.0
DEAD_LOAD_WARNING_KPA = 14.4

# Unit conversions
PSF_PER_KPA = 20.885
FT_PER_M = 3.28084

# Storage keys / default file names
COMBO_STORAGE_KEY = "combo-calculator-inputs"
SNOW_STORAGE_KEY = "snow-calculator-inputs"
LOADS_FOR_COMBOS_KEY = "loadsForCombinator"
COMBO_INPUTS_FILENAME = "combo-inputs.txt"
SNOW_INPUTS_FILENAME = "snow-inputs.txt"
