"""
Configuration package for the Tenure Area Calculator.

This package contains configuration loading and validation.

Modules:
    config_loader: Load area_config.json and resolve AreaSettings
"""

__version__ = '1.0.0'
