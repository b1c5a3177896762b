"""
Archive reader module for the Tenure Area Calculator.

This module discovers zipped shapefile archives in an input directory and
decodes each one into ordered shapes and attribute rows.

Functions:
    discover_archives: List archive files in a directory
    read_archive: Decode one zipped shapefile archive
    load_record_collections: Discover, decode and build collections for one role
"""

import tempfile
import zipfile
from pathlib import Path
from typing import List

import geopandas as gpd
import numpy as np
import pandas as pd

from core.record_set import DatasetRecord, DecodedArchive, ShapeEntry, build_record_collection
from utils.errors import ArchiveError
from utils.geometry_converters import classify_shape
from utils.logger import get_logger

logger = get_logger(__name__)


def discover_archives(dir_path: str, extension: str = '.zip') -> List[Path]:
    """
    List the archive files in dir_path whose name ends with extension.

    Parameters:
    -----------
    dir_path : str
        Directory to scan (not recursive)
    extension : str
        File-name suffix identifying archives

    Returns:
    --------
    List[Path]
        Matching file paths, sorted by name

    Raises:
    -------
    ArchiveError
        If dir_path does not exist or is not a directory
    """
    directory = Path(dir_path)
    if not directory.is_dir():
        raise ArchiveError(f"Input directory not found: {dir_path}")

    archives = sorted(
        path for path in directory.iterdir()
        if path.is_file() and path.name.endswith(extension)
    )

    logger.info(f"Found {len(archives)} archive(s) in {directory}")
    return archives


def _find_member(names: List[str], suffix: str) -> str:
    # Last match wins when an archive carries several
    matches = [name for name in names if name.lower().endswith(suffix)]
    return matches[-1] if matches else ''


def _normalise_value(value):
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    if isinstance(value, np.generic):
        return value.item()
    return value


def read_archive(archive_path: Path, source_crs: str) -> DecodedArchive:
    """
    Decode a zipped shapefile into ordered shapes and attribute rows.

    The archive's own .prj is ignored: every archive of a dataset role is
    read in that role's configured source CRS.

    Args:
        archive_path: Path to the .zip archive
        source_crs: CRS identifier the archive's coordinates are expressed in

    Returns:
        DecodedArchive with one ShapeEntry and one row per shapefile record

    Raises:
        ArchiveError: If the zip is unreadable, lacks a .shp or .dbf member,
            or the shapefile cannot be decoded
    """
    archive_path = Path(archive_path)
    logger.info(f"Reading archive: {archive_path.name}")

    try:
        with tempfile.TemporaryDirectory() as tmpdir:
            with zipfile.ZipFile(archive_path, 'r') as zip_ref:
                names = zip_ref.namelist()
                shp_name = _find_member(names, '.shp')
                dbf_name = _find_member(names, '.dbf')

                if not shp_name:
                    raise ArchiveError(f"{archive_path.name}: no shapefile (.shp) found in archive")
                if not dbf_name:
                    raise ArchiveError(f"{archive_path.name}: no attribute table (.dbf) found in archive")

                zip_ref.extractall(tmpdir)

            shp_path = Path(tmpdir) / shp_name
            logger.debug(f"  - Shape payload: {shp_name}, attribute payload: {dbf_name}")

            try:
                gdf = gpd.read_file(shp_path)
            except Exception as e:
                raise ArchiveError(f"{archive_path.name}: failed to decode shapefile: {e}") from e

    except zipfile.BadZipFile as e:
        raise ArchiveError(f"{archive_path.name}: invalid ZIP file - file appears to be corrupted") from e
    except OSError as e:
        raise ArchiveError(f"{archive_path.name}: cannot read archive: {e}") from e

    geometry_column = gdf.geometry.name
    attributes = gdf.drop(columns=[geometry_column])

    shapes = [ShapeEntry(classify_shape(geom), geom) for geom in gdf.geometry]
    rows = [
        {key: _normalise_value(value) for key, value in row.items()}
        for row in attributes.to_dict(orient='records')
    ]

    logger.debug(f"  - Decoded {len(shapes)} shape(s), {len(rows)} row(s)")
    logger.debug(f"  - Fields: {list(attributes.columns)}")

    return DecodedArchive(
        name=archive_path.name,
        shapes=shapes,
        rows=rows,
        source_crs=source_crs,
        metadata={'declared_crs': str(gdf.crs) if gdf.crs is not None else None}
    )


def load_record_collections(
    dir_path: str,
    source_crs: str,
    target_crs: str,
    extension: str = '.zip'
) -> List[List[DatasetRecord]]:
    """
    Load every archive of one dataset role into its own record collection.

    Args:
        dir_path: Directory holding the role's archives
        source_crs: Fixed source CRS of the role
        target_crs: CRS every polygon is reprojected into
        extension: Archive file-name suffix

    Returns:
        One list of DatasetRecord per archive, in discovery order
    """
    collections = []
    for archive_path in discover_archives(dir_path, extension):
        archive = read_archive(archive_path, source_crs)
        collections.append(build_record_collection(archive, target_crs))
    return collections
