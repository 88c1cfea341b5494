import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def remove_quietly(path: Path) -> bool:
    """
    Best-effort unlink. Returns True if the file is gone afterwards.
    Never raises; failures are only logged.
    """
    try:
        path.unlink()
        return True
    except FileNotFoundError:
        return True
    except OSError as e:
        logger.warning(f"Could not delete temp file {path}: {e}")
        return False
