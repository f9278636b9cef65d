# topmark:header:start
#
#   file         : file.py
#   file_relpath : src/tokswap/utils/file.py
#   project      : TokSwap
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Filesystem helpers shared by the staged sink and the commit step."""

from __future__ import annotations

import os
from pathlib import Path

from tokswap.config.logging import get_logger

logger = get_logger(__name__)


def safe_unlink(path: Path | None) -> bool:
    """Attempt to delete a file, ignoring any errors.

    Args:
        path (Path | None): Path to delete, or None (no-op).

    Returns:
        bool: True if the file was removed, False otherwise.

    Notes:
        Errors during deletion are logged and suppressed.
    """
    if path is None:
        return False
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.error("Failed to delete %s: %s", path, e)
        return False
    logger.debug("Deleted %s", path)
    return True


def fsync_directory(directory: Path) -> None:
    """Flush a directory entry to disk so a completed rename survives a crash.

    Best effort: platforms that cannot open directories (Windows) are skipped.
    """
    try:
        dir_fd = os.open(str(directory), os.O_RDONLY)
    except OSError as e:
        logger.debug("Cannot open directory %s for fsync: %s", directory, e)
        return
    try:
        os.fsync(dir_fd)
    except OSError as e:
        logger.debug("fsync of directory %s failed: %s", directory, e)
    finally:
        os.close(dir_fd)

