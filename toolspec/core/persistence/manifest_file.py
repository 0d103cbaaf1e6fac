"""
Manifest file persistence — exclusive, atomic create-if-absent.

Several processes may try to write the same runtime manifest at once.
Content is written to a temp file in the target directory, then
hard-linked into place. ``os.link`` fails if anything already occupies
the path, so exactly one writer wins and nobody ever observes a
partially written file.

Filesystems without hard links (FAT, exFAT, some network shares) fall
back to an exclusive ``open(path, "x")``: still one winner, but a
reader racing the winner may see a short file.
"""

from __future__ import annotations

import errno
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# errno values meaning "this filesystem cannot hard-link"
_NO_HARD_LINKS = frozenset(
    code for code in (
        errno.EPERM,
        getattr(errno, "ENOTSUP", None),
        getattr(errno, "EOPNOTSUPP", None),
        getattr(errno, "ENOSYS", None),
    )
    if code is not None
)


def _write_exclusive(path: Path, content: str) -> bool:
    try:
        with open(path, "x", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
    except FileExistsError:
        logger.debug("%s appeared concurrently — keeping existing file", path)
        return False
    return True


def write_json_exclusive(path: Path, data: dict[str, Any]) -> bool:
    """Create ``path`` with ``data`` as JSON unless something is already there.

    Args:
        path: Target file path. Parent directories are created.
        data: JSON-serializable document.

    Returns:
        True if this call created the file, False if it already existed.

    Raises:
        OSError: On any I/O failure other than "already exists".
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    fd, tmp_path = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    tmp = Path(tmp_path)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        try:
            os.link(tmp, path)
        except FileExistsError:
            logger.debug("%s appeared concurrently — keeping existing file", path)
            return False
        except OSError as e:
            if e.errno not in _NO_HARD_LINKS:
                raise
            logger.debug("No hard links under %s (%s), writing in place", path.parent, e)
            created = _write_exclusive(path, content)
        else:
            created = True
        if created:
            logger.debug("Wrote %s (%d bytes)", path, len(content))
        return created
    finally:
        tmp.unlink(missing_ok=True)
