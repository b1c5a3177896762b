"""
Intersection Matching Module

Finds the tenure records whose polygons touch, overlap or contain a
compartment polygon. Both sides must already be in the target CRS.
"""

from typing import List, Sequence

from shapely.geometry.base import BaseGeometry
from shapely.prepared import prep

from core.record_set import DatasetRecord
from utils.logger import get_logger

logger = get_logger(__name__)


def find_intersecting(
    target: BaseGeometry,
    candidates: Sequence[DatasetRecord]
) -> List[DatasetRecord]:
    """
    Return the candidates whose polygon intersects target.

    Every candidate is tested (no spatial index). Boundary-only contact and
    containment in either direction both count as a match. Matches keep the
    candidates' insertion order.

    Args:
        target: Compartment polygon
        candidates: Records of one tenure archive

    Returns:
        List of matching DatasetRecord objects
    """
    prepared_target = prep(target)
    matches = [
        candidate for candidate in candidates
        if prepared_target.intersects(candidate.polygon)
    ]

    logger.debug(f"  - {len(matches)} of {len(candidates)} candidate(s) intersect")
    return matches
