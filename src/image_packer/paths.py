from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .errors import InputNotFoundError, InputUnreadableError

logger = logging.getLogger(__name__)


def require_input(path: str | Path) -> Path:
    """Return `path` as a `Path`, failing early if it is not a readable file."""

    p = Path(path).expanduser()
    if not p.exists():
        raise InputNotFoundError(f"input file not found: {p}")
    if not p.is_file():
        raise InputUnreadableError(f"input is not a regular file: {p}")
    if not os.access(p, os.R_OK):
        raise InputUnreadableError(f"input file is not readable: {p}")
    return p


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


@contextmanager
def atomic_output(path: str | Path, *, atomic: bool = True) -> Iterator[Path]:
    """Yield a path to write the output image to.

    With `atomic=True` the yielded path is a temporary file in the same
    directory (keeping the target's suffix, so format detection by extension
    still works). It replaces `path` only when the block exits cleanly and is
    removed otherwise.
    """

    target = Path(path).expanduser()
    if not atomic:
        yield target
        return

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=target.suffix, dir=target.parent)
    os.close(fd)
    tmp = Path(tmp_name)
    try:
        yield tmp
        # mkstemp creates 0600 files; give the result the usual umask-based mode.
        os.chmod(tmp, 0o666 & ~_current_umask())
        os.replace(tmp, target)
        logger.debug("moved %s -> %s", tmp, target)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
