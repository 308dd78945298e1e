"""
Environment-based settings.

Credentials and endpoints are read from the process environment. A ``.env``
file in the current working directory is loaded first, when present, so local
development does not require exporting variables by hand.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from openai_tools.config.constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


def load_env(env_path: Optional[Path] = None) -> bool:
    """
    Load variables from a ``.env`` file if one exists.

    Variables already present in the environment are not overridden.

    Args:
        env_path: Explicit path; defaults to ``./.env``

    Returns:
        bool: True if a file was found and loaded
    """
    env_path = env_path or Path(".") / ".env"
    if not env_path.exists():
        return False
    logger.debug(f"Loading environment from {env_path}")
    return load_dotenv(env_path)


def get_env(name: str) -> Optional[str]:
    """Return a non-empty environment variable, or None."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()
