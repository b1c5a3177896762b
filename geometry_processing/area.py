"""
Area Apportionment Module

Measures tenure polygons on the ellipsoid and converts square meters into
mu (亩), the land-area unit reported per compartment.

Note:
    The whole candidate polygon is measured, not the part overlapping the
    compartment.
"""

from functools import lru_cache

from pyproj import Geod
from shapely.geometry import MultiPolygon
from shapely.geometry.base import BaseGeometry
from shapely.geometry.polygon import orient

from config.config_loader import AreaSettings

DEFAULT_ELLIPSOID = 'WGS84'


@lru_cache(maxsize=None)
def get_geod(ellipsoid: str = DEFAULT_ELLIPSOID) -> Geod:
    return Geod(ellps=ellipsoid)


def unsigned_geodesic_area(polygon: BaseGeometry, ellipsoid: str = DEFAULT_ELLIPSOID) -> float:
    """
    Geodesic area of a lon/lat polygon in square meters.

    Holes are subtracted. Each part is oriented counter-clockwise before it
    is measured, so ring winding never changes the result.

    Args:
        polygon: Polygon or MultiPolygon in geographic degrees
        ellipsoid: pyproj ellipsoid name

    Returns:
        Area in square meters (>= 0)
    """
    geod = get_geod(ellipsoid)
    parts = polygon.geoms if isinstance(polygon, MultiPolygon) else [polygon]

    total = 0.0
    for part in parts:
        area, _perimeter = geod.geometry_area_perimeter(orient(part, sign=1.0))
        total += abs(area)
    return total


def apportion_area(polygon: BaseGeometry, settings: AreaSettings) -> float:
    """Area of polygon in the configured output unit (mu by default)."""
    return unsigned_geodesic_area(polygon, settings.ellipsoid) / settings.area_unit_divisor
