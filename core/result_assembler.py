"""
Result assembly for the Tenure Area Calculator.

For one compartment, collects the apportioned area of every intersecting
tenure parcel into a mapping keyed by the parcel identifier.

Functions:
    extract_identifier: Read a required string identifier from a record
    assemble_result: Build the tenure id -> area mapping for one compartment
"""

from typing import Any, Dict, Mapping, Sequence

from shapely.geometry.base import BaseGeometry

from config.config_loader import AreaSettings
from core.record_set import DatasetRecord
from geometry_processing.area import apportion_area
from geometry_processing.intersection import find_intersecting
from utils.errors import SchemaError
from utils.logger import get_logger

logger = get_logger(__name__)


def extract_identifier(attributes: Mapping[str, Any], field_name: str) -> str:
    """
    Return the identifier stored under field_name.

    Raises:
        SchemaError: If the field is absent, not a string, or empty
    """
    if field_name not in attributes:
        raise SchemaError(f"Missing identifier field '{field_name}'")

    value = attributes[field_name]
    if not isinstance(value, str):
        raise SchemaError(
            f"Identifier field '{field_name}' must be text, got {type(value).__name__}: {value!r}"
        )
    if not value:
        raise SchemaError(f"Identifier field '{field_name}' is empty")

    return value


def assemble_result(
    target: BaseGeometry,
    candidate_collections: Sequence[Sequence[DatasetRecord]],
    settings: AreaSettings
) -> Dict[str, float]:
    """
    Map each intersecting tenure parcel's identifier to its area in mu.

    Collections are scanned in order, each on its own. When two matches share
    an identifier the later one replaces the earlier; values are not summed.

    Parameters:
    -----------
    target : BaseGeometry
        Compartment polygon in the target CRS
    candidate_collections : Sequence[Sequence[DatasetRecord]]
        Tenure record collections, one per archive
    settings : AreaSettings
        Supplies the identifier field name, ellipsoid and unit divisor

    Returns:
    --------
    Dict[str, float]
        Tenure identifier -> apportioned area (empty when nothing intersects)

    Raises:
    -------
    SchemaError
        If a matched parcel lacks a valid identifier
    """
    result: Dict[str, float] = {}

    for candidates in candidate_collections:
        for match in find_intersecting(target, candidates):
            identifier = extract_identifier(match.attributes, settings.tenure_id_field)
            if identifier in result:
                logger.debug(f"  - Duplicate tenure id {identifier}, keeping later value")
            result[identifier] = apportion_area(match.polygon, settings)

    return result
