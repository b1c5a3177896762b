"""
Error types for the Tenure Area Calculator.

Every failure in the batch run is fatal. Each class carries an error_code so
the entry point can report which stage gave up.
"""


class TenureAreaError(Exception):
    """Base class for tenure area failures."""

    error_code = "TENURE_AREA_ERROR"


class ConfigError(TenureAreaError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class ArchiveError(TenureAreaError):
    """Raised when an input directory or archive cannot be read."""

    error_code = "ARCHIVE_ERROR"


class SchemaError(TenureAreaError):
    """Raised when decoded attributes do not match the expected layout."""

    error_code = "SCHEMA_ERROR"


class ReprojectionError(TenureAreaError):
    """Raised when a geometry cannot be transformed between CRSs."""

    error_code = "GEOMETRY_ERROR"


class OutputError(TenureAreaError):
    """Raised when a Feature document cannot be written."""

    error_code = "OUTPUT_ERROR"
