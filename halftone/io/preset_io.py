"""
Option Presets for Halftone

Saves and loads ProcessingOptions as small JSON files so a set of
print settings can be reused across batches.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from ..core.options import ProcessingOptions

logger = logging.getLogger(__name__)

PRESET_VERSION = "1.0"


def save_options(options: ProcessingOptions, filepath: Union[str, Path]) -> bool:
    """
    Save options to a preset file.

    Args:
        options: The options to save
        filepath: Path to save the file

    Returns:
        True if successful, False otherwise
    """
    try:
        data = options.to_dict()
        data['version'] = PRESET_VERSION
        data['saved_at'] = datetime.now().isoformat()

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        return True
    except (OSError, TypeError) as e:
        logger.error("Error saving preset %s: %s", filepath, e)
        return False


def load_options(filepath: Union[str, Path]) -> Optional[ProcessingOptions]:
    """
    Load options from a preset file.

    Returns:
        ProcessingOptions if successful, None otherwise. The options are
        not validated here.
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)

        if not isinstance(data, dict):
            logger.error("Preset %s is not a JSON object", filepath)
            return None

        return ProcessingOptions.from_dict(data)
    except (OSError, ValueError, TypeError) as e:
        logger.error("Error loading preset %s: %s", filepath, e)
        return None
