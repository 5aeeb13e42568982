"""Line-oriented file helpers rooted at an install root.

Everything written here is staged below a caller supplied install root, so
paths such as ``/usr/lib/rpm/macros.d/...`` are always re-anchored beneath it
rather than touching the host filesystem.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Union

from .errors import MacroFileError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def resolve_under_root(install_root: PathLike, relative: PathLike) -> Path:
    """Join ``relative`` below ``install_root``, dropping any leading anchor."""
    rel = Path(relative)
    if rel.is_absolute():
        rel = rel.relative_to(rel.anchor)
    return Path(install_root) / rel


def write_lines(path: PathLike, lines: Iterable[str]) -> None:
    """Write ``lines`` to ``path``, one per line, replacing any existing file.

    Parent directories are created as needed.

    Raises:
        MacroFileError: If the parent directory or the file cannot be written
    """
    path = Path(path)
    directory = path.parent

    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("Failed to create directory %s: %s", directory, exc)
        raise MacroFileError(directory, "Failed to create directory", cause=exc)

    try:
        with open(path, "w", encoding="utf-8") as handle:
            for line in lines:
                handle.write(line)
                handle.write("\n")
    except OSError as exc:
        logger.error("Failed to write %s: %s", path, exc)
        raise MacroFileError(path, "Failed to write file", cause=exc)


def read_lines(path: PathLike) -> List[str]:
    """Return the lines of ``path`` without their line terminators."""
    with open(path, "r", encoding="utf-8") as handle:
        return handle.read().splitlines()
