"""
Utility modules for the Tenure Area Calculator.

This package contains helpers used throughout the application.

Modules:
    logger: Logging configuration and setup
    errors: Fatal error taxonomy
    geometry_converters: Shape classification and polygon normalisation
"""

__version__ = '1.0.0'
