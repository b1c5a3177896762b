"""
Geometry Reprojection Module

Transforms polygon coordinates from a dataset's source CRS into the common
target CRS (EPSG:4326 by default) so compartments and tenure parcels can be
compared directly.
"""

from functools import lru_cache, partial

import shapely
from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError, ProjError
from shapely.geometry import MultiPolygon

from utils.errors import ReprojectionError
from utils.geometry_converters import has_finite_coordinates, to_multipolygon
from utils.logger import get_logger

logger = get_logger(__name__)

WGS84 = 'EPSG:4326'


@lru_cache(maxsize=None)
def get_transformer(source_crs: str, target_crs: str = WGS84) -> Transformer:
    """
    Build (and cache) a lon/lat-ordered transformer between two CRSs.

    Args:
        source_crs: CRS identifier of the input coordinates, e.g. 'EPSG:4527'
        target_crs: CRS identifier of the output coordinates

    Returns:
        pyproj Transformer with always_xy=True

    Raises:
        ReprojectionError: If either identifier cannot be resolved
    """
    try:
        transformer = Transformer.from_crs(
            CRS.from_user_input(source_crs),
            CRS.from_user_input(target_crs),
            always_xy=True
        )
    except (CRSError, ProjError) as e:
        raise ReprojectionError(
            f"Cannot build transform {source_crs} -> {target_crs}: {e}"
        ) from e

    logger.debug(f"Transformer ready: {source_crs} -> {target_crs}")
    return transformer


def reproject(polygon, source_crs: str, target_crs: str = WGS84) -> MultiPolygon:
    """
    Reproject a polygon into the target CRS.

    Only coordinate values change: part count, ring count and ring winding
    come out as they went in. Elevation is dropped.

    Args:
        polygon: Shapely Polygon or MultiPolygon in source_crs
        source_crs: CRS identifier of polygon's coordinates
        target_crs: CRS identifier to transform into

    Returns:
        MultiPolygon in target_crs

    Raises:
        ReprojectionError: If the transform cannot be built or applied, or
            produces non-finite coordinates
    """
    transformer = get_transformer(source_crs, target_crs)
    polygon = to_multipolygon(polygon)

    try:
        projected = shapely.transform(
            polygon, partial(transformer.transform, errcheck=True), interleaved=False
        )
    except ProjError as e:
        raise ReprojectionError(
            f"CRS transformation failed ({source_crs} -> {target_crs}): {e}"
        ) from e

    if not has_finite_coordinates(projected):
        raise ReprojectionError(
            f"CRS transformation produced non-finite coordinates ({source_crs} -> {target_crs})"
        )

    return projected
