"""
Record set construction for the Tenure Area Calculator.

Pairs each polygon decoded from an archive with its attribute row and
reprojects it into the target CRS, producing one record collection per
archive.

Functions:
    build_record_collection: Turn a DecodedArchive into DatasetRecords
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from shapely.geometry import MultiPolygon
from shapely.geometry.base import BaseGeometry

from geometry_processing.reprojection import reproject
from utils.errors import SchemaError
from utils.geometry_converters import POLYGON_SHAPE_TYPES, count_geometry_vertices
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ShapeEntry:
    """A decoded shape and its shapefile-style type ('polygon', 'polygonz', 'other')."""

    shape_type: str
    geometry: Optional[BaseGeometry]


@dataclass
class DecodedArchive:
    """Shapes and attribute rows decoded from one archive, in file order."""

    name: str
    shapes: List[ShapeEntry]
    rows: List[Dict[str, Any]]
    source_crs: str
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DatasetRecord:
    """A reprojected polygon and the attribute row it was decoded with."""

    polygon: MultiPolygon
    attributes: Dict[str, Any]


def build_record_collection(archive: DecodedArchive, target_crs: str) -> List[DatasetRecord]:
    """
    Build the record collection for one decoded archive.

    Shapes and rows are paired by their original position before any
    filtering, so a skipped non-polygon shape never shifts the rows attached
    to the polygons after it.

    Parameters:
    -----------
    archive : DecodedArchive
        Decoded shapes and rows of one archive
    target_crs : str
        CRS every kept polygon is reprojected into

    Returns:
    --------
    List[DatasetRecord]
        Kept polygons with their attribute rows, in archive order

    Raises:
    -------
    SchemaError
        If the archive's shape count differs from its row count
    ReprojectionError
        If any polygon cannot be reprojected

    Example:
        >>> shapes: [Polygon, Point, Polygon], rows: [R0, R1, R2]
        >>> result: [(Polygon, R0), (Polygon, R2)]
    """
    if len(archive.shapes) != len(archive.rows):
        raise SchemaError(
            f"{archive.name}: {len(archive.shapes)} shape(s) but "
            f"{len(archive.rows)} attribute row(s)"
        )

    records = []
    skipped = 0

    for shape, row in zip(archive.shapes, archive.rows):
        if shape.shape_type not in POLYGON_SHAPE_TYPES:
            skipped += 1
            continue

        polygon = reproject(shape.geometry, archive.source_crs, target_crs)
        records.append(DatasetRecord(polygon=polygon, attributes=row))

    logger.info(
        f"  - {archive.name}: {len(records)} polygon record(s)"
        + (f", {skipped} non-polygon shape(s) skipped" if skipped else "")
    )
    logger.debug(
        f"  - {archive.name}: {sum(count_geometry_vertices(r.polygon) for r in records)} "
        f"vertices reprojected {archive.source_crs} -> {target_crs}"
    )

    return records
