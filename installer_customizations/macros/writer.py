"""Rendering and writing of RPM macro files.

A macro file consists of a fixed header, an optional block of custom comments
and one ``%name value`` line per macro. Macro lines are sorted by name so the
same input always produces the same bytes on disk.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from ..filesystem import PathLike, resolve_under_root, write_lines
from .comments import format_comments

logger = logging.getLogger(__name__)

MACRO_FILE_HEADER = (
    "# This macro file was dynamically generated by the Azure Linux Toolkit image generator",
    "# based on the configuration used at image creation time.",
    "",
)


def render_macro_file(
    macros: Mapping[str, str],
    custom_comments: Optional[Sequence[str]] = None,
) -> List[str]:
    """Build the lines of a macro file.

    Args:
        macros: Macro names (without ``%`` prefix) mapped to their values
        custom_comments: Optional raw comment lines placed after the header

    Returns:
        List of lines without terminators, or an empty list if there are no
        macros to define
    """
    if not macros:
        return []

    lines = list(MACRO_FILE_HEADER)

    comments = format_comments(custom_comments)
    if comments:
        lines.extend(comments)
        lines.append("")

    for name in sorted(macros):
        lines.append(f"%{name} {macros[name]}")

    return lines


def add_macro_file(
    install_root: PathLike,
    macros: Mapping[str, str],
    macro_file_name: PathLike,
    custom_comments: Optional[Sequence[str]] = None,
) -> Optional[Path]:
    """Write a macro file at ``macro_file_name`` below ``install_root``.

    Nothing is created, not even the parent directory, when ``macros`` is
    empty.

    Args:
        install_root: Root of the image being built
        macros: Macro names mapped to values
        macro_file_name: Destination path, relative to ``install_root``
        custom_comments: Optional comment lines to include in the file

    Returns:
        Path of the written file, or None if nothing was written

    Raises:
        MacroFileError: If the file or its directory cannot be written
    """
    if not macros:
        logger.debug("No macros for %s, skipping", macro_file_name)
        return None

    path = resolve_under_root(install_root, macro_file_name)
    write_lines(path, render_macro_file(macros, custom_comments))
    logger.info("Wrote %d macro(s) to %s", len(macros), path)
    return path
