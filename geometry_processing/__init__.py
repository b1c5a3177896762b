"""
Geometry Processing Package

Coordinate and measurement operations used by the Tenure Area Calculator.

Modules:
    reprojection: Transform polygons from a source CRS into EPSG:4326
    intersection: Find tenure records intersecting a compartment polygon
    area: Geodesic area and mu conversion
"""
