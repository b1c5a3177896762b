"""
Geometry conversion utilities for the Tenure Area Calculator.

Shapefile readers hand back a mix of Polygon, MultiPolygon, 3D variants and
the occasional point, line or null shape. These helpers classify decoded
shapes and normalise kept polygons to a 2D MultiPolygon.

Functions:
    classify_shape: Map a decoded geometry to 'polygon', 'polygonz' or 'other'
    to_multipolygon: Promote a Polygon/MultiPolygon to a 2D MultiPolygon
    count_geometry_vertices: Count total vertices in a polygonal geometry
    has_finite_coordinates: Check that no coordinate is NaN or infinite
"""

from typing import Optional

import numpy as np
import shapely
from shapely.geometry import Polygon, MultiPolygon
from shapely.geometry.base import BaseGeometry

SHAPE_POLYGON = 'polygon'
SHAPE_POLYGON_Z = 'polygonz'
SHAPE_OTHER = 'other'

POLYGON_SHAPE_TYPES = (SHAPE_POLYGON, SHAPE_POLYGON_Z)


def classify_shape(geom: Optional[BaseGeometry]) -> str:
    """
    Classify a decoded shape by its shapefile-style type.

    Parameters:
    -----------
    geom : Optional[BaseGeometry]
        Decoded geometry, or None for a null shape

    Returns:
    --------
    str
        'polygon' for 2D polygons, 'polygonz' for polygons carrying
        elevation, 'other' for everything else (including null/empty shapes)

    Example:
        >>> classify_shape(Point(0, 0))
        'other'
    """
    if geom is None or geom.is_empty:
        return SHAPE_OTHER

    if geom.geom_type in ('Polygon', 'MultiPolygon'):
        return SHAPE_POLYGON_Z if geom.has_z else SHAPE_POLYGON

    return SHAPE_OTHER


def to_multipolygon(geom: BaseGeometry) -> MultiPolygon:
    """
    Drop elevation and promote a polygonal geometry to MultiPolygon.

    Ring order and winding are left exactly as decoded.

    Raises:
        ValueError: If geom is not a Polygon or MultiPolygon
    """
    geom = shapely.force_2d(geom)

    if isinstance(geom, MultiPolygon):
        return geom
    if isinstance(geom, Polygon):
        return MultiPolygon([geom])

    raise ValueError(f"Expected Polygon or MultiPolygon, got {geom.geom_type}")


def count_geometry_vertices(geom: BaseGeometry) -> int:
    """
    Count total vertices in a Polygon or MultiPolygon geometry.

    Parameters:
    -----------
    geom : BaseGeometry
        Shapely geometry (Polygon or MultiPolygon)

    Returns:
    --------
    int
        Total number of vertices in the geometry
    """
    if geom is None or geom.is_empty:
        return 0

    if geom.geom_type == 'Polygon':
        count = len(geom.exterior.coords)
        for interior in geom.interiors:
            count += len(interior.coords)
        return count

    elif geom.geom_type == 'MultiPolygon':
        return sum(count_geometry_vertices(polygon) for polygon in geom.geoms)

    return 0


def has_finite_coordinates(geom: BaseGeometry) -> bool:
    """Return True when every coordinate of geom is a finite number."""
    coords = shapely.get_coordinates(geom, include_z=False)
    return bool(np.isfinite(coords).all())
