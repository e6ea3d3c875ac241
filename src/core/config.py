"""
Application Configuration Module for LoadCombo.

Handles environment variable loading, default selections and logging setup.

Usage:
    config = AppConfig.from_env()
    configure_logging(config.log_level)
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import os
import logging

from .data_models import DesignStandard, UnitSystem

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class AppConfig:
    """Application configuration.

    Attributes:
        log_level: Root logging level name
        data_dir: Directory for input snapshots and the load hand-off file
        default_standard: Standard preselected in the UI
        default_unit_system: Unit system preselected in the UI
    """

    log_level: str = "INFO"
    data_dir: Path = Path.home() / ".loadcombo"
    default_standard: DesignStandard = DesignStandard.ASCE7_16
    default_unit_system: UnitSystem = UnitSystem.IMPERIAL

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.log_level = self.log_level.upper()
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log level: {self.log_level}. "
                f"Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )
        self.data_dir = Path(self.data_dir).expanduser()

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "AppConfig":
        """Load configuration from environment variables.

        Args:
            env_file: Optional path to .env file

        Returns:
            AppConfig instance with loaded configuration

        Raises:
            ValueError: If an environment variable holds an invalid value
            FileNotFoundError: If env_file is specified but doesn't exist

        Environment Variables:
            LOADCOMBO_LOG_LEVEL: Logging level (default INFO)
            LOADCOMBO_DATA_DIR: Snapshot directory (default ~/.loadcombo)
            LOADCOMBO_DEFAULT_STANDARD: "ASCE 7-16" or "ASCE 7-22"
            LOADCOMBO_DEFAULT_UNIT_SYSTEM: "imperial" or "metric"
        """
        if env_file:
            cls._load_env_file(env_file)

        standard_str = os.getenv("LOADCOMBO_DEFAULT_STANDARD", DesignStandard.ASCE7_16.value)
        try:
            default_standard = DesignStandard(standard_str)
        except ValueError:
            raise ValueError(
                f"Invalid LOADCOMBO_DEFAULT_STANDARD: {standard_str}. "
                f"Must be one of: ASCE 7-16, ASCE 7-22"
            )

        units_str = os.getenv("LOADCOMBO_DEFAULT_UNIT_SYSTEM", UnitSystem.IMPERIAL.value).lower()
        try:
            default_unit_system = UnitSystem(units_str)
        except ValueError:
            raise ValueError(
                f"Invalid LOADCOMBO_DEFAULT_UNIT_SYSTEM: {units_str}. "
                f"Must be one of: imperial, metric"
            )

        data_dir = os.getenv("LOADCOMBO_DATA_DIR") or str(Path.home() / ".loadcombo")

        return cls(
            log_level=os.getenv("LOADCOMBO_LOG_LEVEL", "INFO"),
            data_dir=Path(data_dir),
            default_standard=default_standard,
            default_unit_system=default_unit_system,
        )

    @staticmethod
    def _load_env_file(env_file: str) -> None:
        """Load environment variables from .env file.

        Raises:
            FileNotFoundError: If env_file doesn't exist
        """
        from dotenv import load_dotenv
        if not load_dotenv(env_file):
            raise FileNotFoundError(f".env file not found: {env_file}")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once; later calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    root.setLevel(level)
    logger.debug(f"Logging configured at {level}")
