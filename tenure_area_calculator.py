#!/usr/bin/env python
"""
Tenure Area Calculator
======================
Reads zipped shapefiles of forest compartments and forest-tenure parcels,
reprojects both into EPSG:4326, and writes one GeoJSON Feature per compartment
listing the area (in mu) of every tenure parcel that intersects it.

Usage:
    tenure-area <compartment_dir> <tenure_dir>
"""

import argparse
import sys
import time
import warnings
from pathlib import Path
from typing import List, Optional

from utils.logger import setup_logging, get_logger

from config.config_loader import AreaSettings, load_area_settings, load_config

from core.archive_reader import load_record_collections
from core.area_processor import process_all_compartments
from utils.errors import TenureAreaError

# Suppress library warnings for cleaner output
warnings.filterwarnings('ignore')

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def parse_args(argv: List[str]) -> argparse.Namespace:
    """Exactly two positional directories; argparse exits with status 2 otherwise."""
    parser = argparse.ArgumentParser(
        prog='tenure-area',
        description='Apportion tenure parcel areas (mu) to forest compartments.'
    )
    parser.add_argument('compartment_dir', help='directory of compartment .zip archives')
    parser.add_argument('tenure_dir', help='directory of tenure parcel .zip archives')
    return parser.parse_args(argv)


def main(
    compartment_dir: str,
    tenure_dir: str,
    settings: Optional[AreaSettings] = None,
    log_dir: Optional[Path] = None
) -> Optional[dict]:
    """
    Main execution workflow for the Tenure Area Calculator.

    Workflow Steps:
    1. Setup logging to console and file
    2. Resolve area settings
    3. Load and reproject compartment archives
    4. Load and reproject tenure archives
    5. Match, apportion and write one document per compartment

    Parameters:
    -----------
    compartment_dir : str
        Directory of compartment archives
    tenure_dir : str
        Directory of tenure parcel archives
    settings : Optional[AreaSettings]
        Pre-resolved settings; loaded from config/area_config.json if omitted
    log_dir : Optional[Path]
        Log directory; defaults to PROJECT_ROOT/logs

    Returns:
    --------
    Optional[dict]
        Run summary if successful, None if the run was aborted
    """
    workflow_start_time = time.time()

    log_file = setup_logging(log_dir)
    logger = get_logger(__name__)

    logger.info("=" * 80)
    logger.info("TENURE AREA CALCULATOR - Compartment / Tenure Intersection")
    logger.info("=" * 80)
    logger.info(f"Log file: {log_file}")
    logger.info("")

    try:
        if settings is None:
            settings = load_area_settings(load_config())
        logger.info(
            f"Settings: compartments {settings.compartment_source_crs}, "
            f"tenure {settings.tenure_source_crs} -> {settings.target_crs}, "
            f"1 mu = {settings.area_unit_divisor} m²"
        )
        logger.info("")

        logger.info("Loading compartment archives")
        compartment_collections = load_record_collections(
            compartment_dir,
            settings.compartment_source_crs,
            settings.target_crs,
            settings.archive_extension
        )

        logger.info("Loading tenure archives")
        tenure_collections = load_record_collections(
            tenure_dir,
            settings.tenure_source_crs,
            settings.target_crs,
            settings.archive_extension
        )
        logger.info("")

        summary = process_all_compartments(compartment_collections, tenure_collections, settings)

        total_execution_time = time.time() - workflow_start_time
        summary['total_seconds'] = total_execution_time

        logger.info("✓ WORKFLOW COMPLETE")
        logger.info(f"✓ Total execution time: {total_execution_time:.2f} seconds")
        logger.info(f"✓ Output directory: {settings.output_path.resolve()}")
        logger.info("")

        return summary

    except TenureAreaError as e:
        elapsed_time = time.time() - workflow_start_time

        logger.error("=" * 80)
        logger.error(f"✗ WORKFLOW FAILED [{e.error_code}]")
        logger.error("=" * 80)
        logger.error(f"Error: {e}", exc_info=True)
        logger.error(f"Workflow failed after {elapsed_time:.2f} seconds")
        logger.error(f"See log file for details: {log_file}")
        return None


def cli(argv: Optional[List[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    summary = main(args.compartment_dir, args.tenure_dir)
    return EXIT_SUCCESS if summary is not None else EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(cli())
