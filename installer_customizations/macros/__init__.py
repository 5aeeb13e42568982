"""RPM macro file generation.

This module renders ``%name value`` macro files and decides which of them an
image build needs.
"""

from .comments import format_comments
from .writer import MACRO_FILE_HEADER, add_macro_file, render_macro_file
from .policy import (
    CUSTOMIZE_LOCALES_MACRO_FILE,
    DEFAULT_PATHS,
    DISABLE_DOCS_MACRO_FILE,
    RPM_MACROS_DIR,
    CustomizationPaths,
    add_customization_macros,
    apply_configured_customizations,
    customization_macros,
)

__all__ = [
    "CUSTOMIZE_LOCALES_MACRO_FILE",
    "DEFAULT_PATHS",
    "DISABLE_DOCS_MACRO_FILE",
    "MACRO_FILE_HEADER",
    "RPM_MACROS_DIR",
    "CustomizationPaths",
    "add_customization_macros",
    "add_macro_file",
    "apply_configured_customizations",
    "customization_macros",
    "format_comments",
    "render_macro_file",
]
