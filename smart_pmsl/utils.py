"""Shared helpers for the viewer entry points"""

import logging
import sys
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s | %(levelname)s | %(message)s'


def setup_logging(debug: bool = False, output_dir: Optional[Path] = None) -> logging.Logger:
    """Configure root logging to stderr (and optionally a log file)"""
    handlers = [logging.StreamHandler(sys.stderr)]
    if output_dir is not None:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(output_dir / "pmsl_viewer.log"))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    # matplotlib font manager is chatty at DEBUG
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
    return logging.getLogger("pmsl_viewer")
