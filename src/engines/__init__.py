# Engineering calculation engines
from .snow_engine import SnowEngine, snow_inputs_from_form
