"""Shared utility functions for the checkmaster package."""
import logging
import os
import random
import string
import time
from pathlib import Path

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 9


def new_id() -> str:
    """Return a short random base-36 identifier."""
    return "".join(random.choices(_ID_ALPHABET, k=ID_LENGTH))


def now_ms() -> int:
    """Current time as integer milliseconds since the Unix epoch."""
    return int(time.time() * 1000)


def get_config_value(key: str, default: str = "") -> str:
    """Get a configuration value from the environment, stripped of whitespace."""
    value = os.getenv(key)
    if value is None:
        return default
    value = value.strip()
    return value if value else default


def load_env_file(path: Path) -> None:
    """Load environment variables from a file if it exists.

    Variables already present in the environment win over the file.
    """
    if not path.exists():
        return

    try:
        with path.open(encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                key = key.strip()
                if not key or key in os.environ:
                    continue
                os.environ[key] = value.strip().strip('"').strip("'")
    except OSError as exc:
        logger.debug("Could not load env file %s: %s", path, exc)
