"""
Output generation module for the Tenure Area Calculator.

Writes one GeoJSON Feature document per compartment: the compartment's
polygon as geometry, the tenure id -> mu mapping as properties.

Functions:
    build_feature: Build a GeoJSON Feature dictionary
    check_file_stem: Reject identifiers that would escape the output directory
    write_feature_document: Serialize a Feature to <identifier><extension>
"""

import json
from pathlib import Path
from typing import Dict, Mapping

from shapely.geometry import mapping
from shapely.geometry.base import BaseGeometry

from utils.errors import OutputError, SchemaError
from utils.logger import get_logger

logger = get_logger(__name__)

_UNSAFE_STEM_CHARS = ('/', '\\', '\0')


def build_feature(polygon: BaseGeometry, properties: Mapping[str, float]) -> Dict:
    """
    Build a GeoJSON Feature for a compartment.

    Parameters:
    -----------
    polygon : BaseGeometry
        Compartment polygon in EPSG:4326
    properties : Mapping[str, float]
        Tenure id -> area mapping (may be empty)

    Returns:
    --------
    Dict
        {'type': 'Feature', 'geometry': {...}, 'properties': {...}}
    """
    return {
        'type': 'Feature',
        'geometry': mapping(polygon),
        'properties': dict(properties)
    }


def check_file_stem(identifier: str) -> str:
    """
    Reject identifiers that cannot name a file inside the output directory.

    Raises:
        SchemaError: If the identifier holds a path separator or NUL, or is '.' / '..'
    """
    if any(char in identifier for char in _UNSAFE_STEM_CHARS) or identifier in ('.', '..'):
        raise SchemaError(f"Identifier {identifier!r} cannot be used as a file name")
    return identifier


def write_feature_document(
    polygon: BaseGeometry,
    properties: Mapping[str, float],
    identifier: str,
    output_dir: Path,
    extension: str = '.json'
) -> Path:
    """
    Write a compartment's Feature document, replacing any existing file.

    Args:
        polygon: Compartment polygon
        properties: Tenure id -> area mapping
        identifier: Compartment identifier, used as the file stem
        output_dir: Directory the document is written into
        extension: File extension including the dot

    Returns:
        Path of the written document

    Raises:
        SchemaError: If identifier is not usable as a file name
        OutputError: If the directory or the file cannot be written
    """
    output_dir = Path(output_dir)
    output_file = output_dir / f'{check_file_stem(identifier)}{extension}'
    feature = build_feature(polygon, properties)

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(feature, f, ensure_ascii=False)
    except OSError as e:
        raise OutputError(f"Could not write {output_file}: {e}") from e

    logger.debug(f"  - Wrote {output_file.name} ({len(feature['properties'])} tenure parcel(s))")
    return output_file
