"""
Path helpers for locating the lifecycle data directory.
"""

import os
from pathlib import Path
from typing import Optional

from statusflow.constants import DATA_DIR_ENV_VAR, DEFAULT_DATA_DIR_NAME


def get_data_dir(override: Optional[str] = None) -> Path:
    """Get the absolute path to the data directory.

    Resolution order: explicit override, then the STATUSFLOW_DATA_DIR
    environment variable, then ``.statusflow`` under the working directory.

    Args:
        override: Optional directory supplied by the caller (e.g. --data-dir).

    Returns:
        Absolute Path to the data directory (not created).
    """
    if override:
        return Path(override).expanduser().resolve()

    from_env = os.environ.get(DATA_DIR_ENV_VAR)
    if from_env:
        return Path(from_env).expanduser().resolve()

    return (Path.cwd() / DEFAULT_DATA_DIR_NAME).resolve()
