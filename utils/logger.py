"""
Logging for a tenure area batch run.

Each run gets its own log file named after the start time. The operator's
console shows the stage banners and counts; the file keeps the per-compartment
match lines and per-archive decode details needed to explain a document
after the run has finished.

Functions:
    setup_logging: Attach the console and run-file handlers, return the file path
    get_logger: Module logger under the tenure_area namespace
"""

import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Iterable, Optional

LOGGER_NAMESPACE = 'tenure_area'
LOG_FILE_PREFIX = 'tenure_area_run'

# Geometry I/O libraries that log per-file chatter at INFO/DEBUG
NOISY_LIBRARIES = ('pyogrio', 'fiona', 'pyproj')

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
FILE_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def _run_log_path(log_dir: Path) -> Path:
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return log_dir / f'{LOG_FILE_PREFIX}_{stamp}.log'


def setup_logging(
    log_dir: Optional[Path] = None,
    quiet_libraries: Iterable[str] = NOISY_LIBRARIES
) -> Path:
    """
    Route the tenure_area loggers to the console and a fresh run log file.

    Handlers left by an earlier run in the same process are closed first, so
    calling main() twice never double-logs or holds the old file open.

    Parameters:
    -----------
    log_dir : Optional[Path]
        Where run logs go. Defaults to <project>/logs
    quiet_libraries : Iterable[str]
        Third-party loggers capped at WARNING for the run

    Returns:
    --------
    Path
        The run's log file
    """
    log_dir = Path(log_dir) if log_dir is not None else Path(__file__).parent.parent / 'logs'
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = _run_log_path(log_dir)

    root = logging.getLogger(LOGGER_NAMESPACE)
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.INFO)
    console.setFormatter(logging.Formatter('%(message)s'))
    root.addHandler(console)

    run_file = logging.FileHandler(log_file, encoding='utf-8')
    run_file.setLevel(logging.DEBUG)
    run_file.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATE_FORMAT))
    root.addHandler(run_file)

    for name in quiet_libraries:
        logging.getLogger(name).setLevel(logging.WARNING)

    root.debug(f"Run log: {log_file}")
    return log_file


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, nested under the tenure_area namespace."""
    return logging.getLogger(f'{LOGGER_NAMESPACE}.{name}')
