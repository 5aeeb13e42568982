"""Image-configuration driven RPM macro customizations.

Decides which macro override files an image needs from its configuration and
writes them below the install root.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

from .. import config as ic_config
from ..filesystem import PathLike
from .writer import add_macro_file

logger = logging.getLogger(__name__)

RPM_MACROS_DIR = "/usr/lib/rpm/macros.d"
DISABLE_DOCS_MACRO_FILE = f"{RPM_MACROS_DIR}/macros.installercustomizations_disable_docs"
CUSTOMIZE_LOCALES_MACRO_FILE = f"{RPM_MACROS_DIR}/macros.installercustomizations_customize_locales"


@dataclass(frozen=True)
class CustomizationPaths:
    """Destination of each customization macro file, relative to the install root."""

    disable_docs: str = DISABLE_DOCS_MACRO_FILE
    customize_locales: str = CUSTOMIZE_LOCALES_MACRO_FILE


DEFAULT_PATHS = CustomizationPaths()


def customization_macros(
    disable_rpm_docs: bool,
    override_rpm_locales: str,
    paths: CustomizationPaths = DEFAULT_PATHS,
) -> List[Tuple[str, Dict[str, str]]]:
    """List the macro files the configuration calls for, with their macros.

    Entries are ``(relative path, macros)`` pairs in the order the files are
    written. Both entries are kept even if they share a path.
    """
    files: List[Tuple[str, Dict[str, str]]] = []
    if disable_rpm_docs:
        files.append((paths.disable_docs, {"_excludedocs": "1"}))
    if override_rpm_locales:
        files.append((paths.customize_locales, {"_install_langs": override_rpm_locales}))
    return files


def add_customization_macros(
    install_root: PathLike,
    disable_rpm_docs: bool,
    override_rpm_locales: str,
    paths: CustomizationPaths = DEFAULT_PATHS,
) -> List[Path]:
    """Write the macro files needed to disable docs and/or override locales.

    Stops at the first file that fails to write.

    Args:
        install_root: Root of the image being built
        disable_rpm_docs: Set ``%_excludedocs`` so packages skip documentation
        override_rpm_locales: Value for ``%_install_langs``; empty keeps the default
        paths: Destination paths of the macro files

    Returns:
        Paths of the files written

    Raises:
        MacroFileError: If a macro file cannot be written
    """
    written = []
    for macro_file, macros in customization_macros(
        disable_rpm_docs, override_rpm_locales, paths
    ):
        path = add_macro_file(install_root, macros, macro_file)
        if path is not None:
            written.append(path)

    if not written:
        logger.debug("No RPM macro customizations requested for %s", install_root)
    return written


def apply_configured_customizations(install_root: PathLike) -> List[Path]:
    """Write the customization macro files described by the configuration."""
    settings = ic_config.load_settings()
    return add_customization_macros(
        install_root, settings.disable_rpm_docs, settings.override_rpm_locales
    )
