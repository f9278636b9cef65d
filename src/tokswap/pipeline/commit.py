# topmark:header:start
#
#   project      : TokSwap
#   file         : commit.py
#   file_relpath : src/tokswap/pipeline/commit.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Atomic commit of a finalized staging file over the source document.

The commit is a single ``os.replace`` (a rename, never copy-then-delete): any
observer of the source path sees either the complete old content or the
complete new content. The source's permission bits are copied onto the
staging file first, so only the content changes. On failure the source is
untouched and the staging file stays in place for manual recovery.
"""

from __future__ import annotations

import os
import shutil
from typing import TYPE_CHECKING

from tokswap.config.logging import get_logger
from tokswap.core.errors import CommitFailureError
from tokswap.utils.file import fsync_directory

if TYPE_CHECKING:
    from pathlib import Path

    from tokswap.config.logging import TokswapLogger

logger: TokswapLogger = get_logger(__name__)


def commit(staging_path: Path, source_path: Path) -> None:
    """Atomically replace ``source_path`` with ``staging_path``, keeping its mode.

    Args:
        staging_path (Path): Finalized staging file.
        source_path (Path): Document to replace.

    Raises:
        CommitFailureError: If the rename cannot be performed (cross-device,
            permission denied, ...). The staging file is left intact.
    """
    try:
        shutil.copymode(source_path, staging_path)
        os.replace(staging_path, source_path)
    except OSError as e:
        raise CommitFailureError(
            f"Cannot replace {source_path} with {staging_path}: {e}. "
            f"The original document is unchanged; the transformed content is kept in "
            f"{staging_path}.",
            path=source_path,
            staging_path=staging_path,
        ) from e
    fsync_directory(source_path.parent)
    logger.info("Committed %s -> %s", staging_path, source_path)
