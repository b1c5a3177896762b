"""
Configuration loading for the Tenure Area Calculator.

This module loads the area configuration JSON file and resolves it once into
an immutable AreaSettings object that every processing stage receives.

Constants:
    PROJECT_ROOT: Root directory of the project
    CONFIG_DIR: Configuration files directory
    DEFAULT_AREA_SETTINGS: Values used when the config file omits a key

Functions:
    load_config: Load the configuration dictionary from JSON
    load_area_settings: Merge defaults and build AreaSettings
"""

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Optional

from utils.errors import ConfigError

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_DIR = PROJECT_ROOT / 'config'
CONFIG_FILE_NAME = 'area_config.json'

# CGCS2000 geographic for compartments, CGCS2000 / 3-degree Gauss-Kruger
# zone 39 for tenure parcels.
DEFAULT_AREA_SETTINGS = {
    'compartment_source_crs': 'EPSG:4490',
    'tenure_source_crs': 'EPSG:4527',
    'target_crs': 'EPSG:4326',
    'area_unit_divisor': 666.66,
    'ellipsoid': 'WGS84',
    'compartment_id_field': 'ZDDM',
    'tenure_id_field': 'XBNO',
    'archive_extension': '.zip',
    'output_extension': '.json',
    'output_dir': '.',
}


@dataclass(frozen=True)
class AreaSettings:
    """Process-wide settings resolved once at startup."""

    compartment_source_crs: str
    tenure_source_crs: str
    target_crs: str
    area_unit_divisor: float
    ellipsoid: str
    compartment_id_field: str
    tenure_id_field: str
    archive_extension: str
    output_extension: str
    output_dir: str

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)


def load_config(config_path: Optional[Path] = None) -> Dict:
    """
    Load configuration from JSON file.

    Parameters:
    -----------
    config_path : Optional[Path]
        Path to the JSON file. Defaults to CONFIG_DIR/area_config.json

    Returns:
    --------
    Dict
        Configuration dictionary with an 'area_settings' key

    Raises:
    -------
    ConfigError
        If the file is missing, is not valid JSON, or lacks 'area_settings'
    """
    if config_path is None:
        config_path = CONFIG_DIR / CONFIG_FILE_NAME

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Configuration file is not valid JSON: {config_path}: {e}") from e

    if not isinstance(config, dict) or 'area_settings' not in config:
        raise ConfigError("Configuration missing required 'area_settings' key")

    return config


def load_area_settings(config: Optional[Dict] = None) -> AreaSettings:
    """
    Build AreaSettings from the configuration dictionary.

    Args:
        config: Configuration dictionary (optional, will load if not provided)

    Returns:
        Frozen AreaSettings

    Raises:
        ConfigError: On unknown keys, empty CRS strings or a non-positive
            area unit divisor

    Note:
        Keys missing from 'area_settings' fall back to DEFAULT_AREA_SETTINGS.
    """
    if config is None:
        config = load_config()

    overrides = config.get('area_settings', {}) or {}
    known = {f.name for f in fields(AreaSettings)}
    unknown = set(overrides) - known
    if unknown:
        raise ConfigError(f"Unknown area settings: {sorted(unknown)}")

    merged = {**DEFAULT_AREA_SETTINGS, **overrides}

    for key in ('compartment_source_crs', 'tenure_source_crs', 'target_crs'):
        value = merged[key]
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"'{key}' must be a non-empty CRS identifier, got {value!r}")

    for key in ('compartment_id_field', 'tenure_id_field'):
        if not isinstance(merged[key], str) or not merged[key]:
            raise ConfigError(f"'{key}' must be a non-empty field name")

    try:
        divisor = float(merged['area_unit_divisor'])
    except (TypeError, ValueError) as e:
        raise ConfigError(f"'area_unit_divisor' must be numeric: {e}") from e
    if divisor <= 0:
        raise ConfigError(f"'area_unit_divisor' must be positive, got {divisor}")
    merged['area_unit_divisor'] = divisor

    return AreaSettings(**merged)
