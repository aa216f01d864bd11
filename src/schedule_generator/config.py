"""
Configuration for the Electrical Schedule Generator.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Tuple

DATA_DIR = Path(__file__).parent / "data"

DEFAULT_CATALOG_PATH = DATA_DIR / "master_list_structured.json"
DEFAULT_VOLTAGE_MAP_PATH = DATA_DIR / "voltage_mappings.json"
DEFAULT_COUNTRY = "USA"

# Non-electrical parts (pit molds, wear strips, chemical kits, ...) that never
# get a row in the schedule. Matched as substrings of the quoted part number.
EXCLUDED_PART_NUMBERS = (
    "RC3DG-UHMW",
    "FGPIT-MOLD-K-4X12",
    "FGPIT-CLM-K",
    "WA2F-0318",
    "WA1M-72-510-5220-CORE",
    "WA1M-00-510-5220-SS-CL-BL",
    "CB1AMA-50-13-S-CL",
    "CB1AMC-50-13",
    "CB1AMA-23-13-S-CL",
    "CB1AMC-23-13",
    "MC1E-12W79L-S-CL-AVW-BL",
    "MCC-460",
    "MCC-5-460-VFD",
    "DISPENSEIT-10-INJ-KIT",
    "COMP-FLTR-REG-3-4IN",
    "COMP-PRESS-GAUGE",
)

MOTOR_KEYWORDS = ("MOTOR", "GEARMOTOR")

# Environment overrides
ENV_CATALOG_PATH = "SCHEDULE_CATALOG_PATH"
ENV_VOLTAGE_MAP = "SCHEDULE_VOLTAGE_MAP"
ENV_DEFAULT_COUNTRY = "SCHEDULE_DEFAULT_COUNTRY"


@dataclass(frozen=True)
class ScheduleConfig:
    """Settings shared by every stage of the pipeline."""
    catalog_path: Path = DEFAULT_CATALOG_PATH
    voltage_map_path: Path = DEFAULT_VOLTAGE_MAP_PATH
    default_country: str = DEFAULT_COUNTRY
    excluded_part_numbers: Tuple[str, ...] = EXCLUDED_PART_NUMBERS
    motor_keywords: Tuple[str, ...] = MOTOR_KEYWORDS

    @classmethod
    def from_env(cls, **overrides) -> "ScheduleConfig":
        """Build a config from defaults, environment variables, then overrides."""
        config = cls()
        if os.environ.get(ENV_CATALOG_PATH):
            config = replace(config, catalog_path=Path(os.environ[ENV_CATALOG_PATH]))
        if os.environ.get(ENV_VOLTAGE_MAP):
            config = replace(config, voltage_map_path=Path(os.environ[ENV_VOLTAGE_MAP]))
        if os.environ.get(ENV_DEFAULT_COUNTRY):
            config = replace(config, default_country=os.environ[ENV_DEFAULT_COUNTRY])

        overrides = {key: value for key, value in overrides.items() if value is not None}
        if "catalog_path" in overrides:
            overrides["catalog_path"] = Path(overrides["catalog_path"])
        if "voltage_map_path" in overrides:
            overrides["voltage_map_path"] = Path(overrides["voltage_map_path"])
        return replace(config, **overrides)
