"""
Core modules for the Tenure Area Calculator.

This package contains the main functional modules for the compartment /
tenure parcel area apportionment batch job.

Modules:
    archive_reader: Discover and decode zipped shapefile archives
    record_set: Pair decoded shapes with attribute rows and reproject them
    result_assembler: Build the tenure id -> area mapping for a compartment
    area_processor: Run matching over all compartments
    output_generator: Write GeoJSON Feature documents
"""

__version__ = '1.0.0'
