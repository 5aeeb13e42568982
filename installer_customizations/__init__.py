"""RPM macro customization files for image builds.

Generates the macro override files placed under ``/usr/lib/rpm/macros.d`` of an
install root so that package installation during image creation honours the
image configuration (documentation exclusion, locale restriction).
"""

from .errors import CustomizationError, MacroFileError
from .macros import (
    CUSTOMIZE_LOCALES_MACRO_FILE,
    DISABLE_DOCS_MACRO_FILE,
    MACRO_FILE_HEADER,
    CustomizationPaths,
    add_customization_macros,
    add_macro_file,
    format_comments,
    render_macro_file,
)

__version__ = "0.1.0"

__all__ = [
    "CUSTOMIZE_LOCALES_MACRO_FILE",
    "DISABLE_DOCS_MACRO_FILE",
    "MACRO_FILE_HEADER",
    "CustomizationError",
    "CustomizationPaths",
    "MacroFileError",
    "add_customization_macros",
    "add_macro_file",
    "format_comments",
    "render_macro_file",
]
