"""
Area processing module for the Tenure Area Calculator.

This module runs the compartment x tenure matching over every loaded record
collection and hands each compartment's result to the document writer.

Functions:
    process_all_compartments: Match, apportion and write every compartment
"""

import time
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from config.config_loader import AreaSettings
from core.output_generator import write_feature_document
from core.record_set import DatasetRecord
from core.result_assembler import assemble_result, extract_identifier
from utils.logger import get_logger

logger = get_logger(__name__)


def process_all_compartments(
    compartment_collections: Sequence[Sequence[DatasetRecord]],
    tenure_collections: Sequence[Sequence[DatasetRecord]],
    settings: AreaSettings,
    output_dir: Optional[Path] = None
) -> Dict:
    """
    Write one Feature document per compartment record.

    Each compartment is handled on its own: its result mapping is built
    from every tenure collection, written, then discarded. A failure on any
    compartment stops the run; documents written before it stay on disk.

    Parameters:
    -----------
    compartment_collections : Sequence[Sequence[DatasetRecord]]
        Compartment records, one collection per archive
    tenure_collections : Sequence[Sequence[DatasetRecord]]
        Tenure records, one collection per archive
    settings : AreaSettings
        Identifier fields, unit divisor and output naming
    output_dir : Optional[Path]
        Where documents go. Defaults to settings.output_dir

    Returns:
    --------
    Dict
        Run summary: document count, paths written, compartments without
        matches and total matches

    Example:
        >>> summary = process_all_compartments(compartments, tenures, settings)
        >>> summary['documents_written']
        12
    """
    if output_dir is None:
        output_dir = settings.output_path

    logger.info("=" * 80)
    logger.info("Matching compartments against tenure parcels")
    logger.info("=" * 80)

    start_time = time.time()
    written: List[Path] = []
    unmatched: List[str] = []
    total_matches = 0
    tenure_count = sum(len(collection) for collection in tenure_collections)

    for compartments in compartment_collections:
        for compartment in compartments:
            compartment_id = extract_identifier(compartment.attributes, settings.compartment_id_field)
            logger.debug(f"Compartment {compartment_id}: scanning {tenure_count} tenure record(s)")

            properties = assemble_result(compartment.polygon, tenure_collections, settings)
            if not properties:
                unmatched.append(compartment_id)
            total_matches += len(properties)

            written.append(write_feature_document(
                compartment.polygon,
                properties,
                compartment_id,
                output_dir,
                settings.output_extension
            ))

    elapsed = time.time() - start_time

    logger.info(f"Documents written: {len(written)}")
    logger.info(f"Tenure parcels apportioned: {total_matches}")
    if unmatched:
        logger.warning(f"{len(unmatched)} compartment(s) had no intersecting tenure parcel")
        logger.debug(f"  Unmatched: {', '.join(unmatched)}")
    logger.info(f"Processing time: {elapsed:.2f} seconds")
    logger.info("")

    return {
        'documents_written': len(written),
        'output_files': written,
        'unmatched_compartments': unmatched,
        'total_matches': total_matches,
        'processing_seconds': elapsed
    }
