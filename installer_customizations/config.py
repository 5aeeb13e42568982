"""Configuration management for installer-customizations.

Three settings describe how an image's RPM macros are customized. Each one is
taken from its environment variable if set, otherwise from the
``[customizations]`` section of the config file, otherwise from its default.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

try:
    import koji
except ImportError:
    koji = None  # type: ignore[assignment]

logger = logging.getLogger(__name__)

CONFIG_SECTION = "customizations"
CONFIG_ENV_VAR = "INSTALLER_CUSTOMIZATIONS_CONFIG"

# [customizations] section of the config file, loaded on first use
_file_values: Optional[Dict[str, str]] = None


def _parse_bool(value: str) -> bool:
    """Parse a boolean setting.

    Accepts "true", "1", "yes", "on" as true and "false", "0", "no", "off" or
    an empty string as false, in any case. Anything else is invalid.
    """
    lowered = value.strip().lower()
    if lowered in ("true", "1", "yes", "on"):
        return True
    if lowered in ("false", "0", "no", "off", ""):
        return False
    raise ValueError(f"not a boolean: {value!r}")


@dataclass(frozen=True)
class _Setting:
    env_var: str
    default: Any
    converter: Callable[[str], Any] = str


_SETTINGS = {
    "disable_rpm_docs": _Setting(
        "INSTALLER_CUSTOMIZATIONS_DISABLE_RPM_DOCS", False, _parse_bool
    ),
    "override_rpm_locales": _Setting(
        "INSTALLER_CUSTOMIZATIONS_OVERRIDE_RPM_LOCALES", "", str.strip
    ),
    "install_root": _Setting("INSTALLER_CUSTOMIZATIONS_INSTALL_ROOT", "/"),
}


@dataclass(frozen=True)
class CustomizationSettings:
    """Resolved customization settings for one image build."""

    disable_rpm_docs: bool
    override_rpm_locales: str
    install_root: str


def _read_config_file(config_file: Optional[str]) -> Dict[str, str]:
    """Read the [customizations] section of ``config_file``.

    Values are read raw, so RPM macro text such as ``%_install_langs`` needs no
    escaping. Unknown keys are ignored.

    Returns:
        Section values, or an empty dict if there is no file, no koji library,
        no such section or the file cannot be parsed
    """
    if not config_file or koji is None:
        return {}

    try:
        parsed = koji.read_config_files([config_file], raw=True)
        if CONFIG_SECTION not in parsed:
            logger.debug("No [%s] section in %s", CONFIG_SECTION, config_file)
            return {}
        values = dict(parsed[CONFIG_SECTION])
    except Exception as exc:
        logger.warning("Failed to read config file %s: %s", config_file, exc)
        return {}

    unknown = sorted(set(values) - set(_SETTINGS))
    if unknown:
        logger.debug("Ignoring unknown keys in %s: %s", config_file, ", ".join(unknown))
    return values


def _config_file_values() -> Dict[str, str]:
    global _file_values
    if _file_values is None:
        _file_values = _read_config_file(os.environ.get(CONFIG_ENV_VAR))
    return _file_values


def _lookup(name: str) -> Any:
    """Resolve setting ``name``; invalid values log a warning and use the default."""
    setting = _SETTINGS[name]

    raw = os.environ.get(setting.env_var)
    source = setting.env_var
    if raw is None:
        raw = _config_file_values().get(name)
        source = f"[{CONFIG_SECTION}] {name}"
    if raw is None:
        return setting.default

    try:
        return setting.converter(raw)
    except ValueError:
        logger.warning(
            "Invalid value for %s: %r, using default %r", source, raw, setting.default
        )
        return setting.default


def disable_rpm_docs() -> bool:
    """Exclude package documentation from the image (``%_excludedocs``)."""
    return _lookup("disable_rpm_docs")


def override_rpm_locales() -> str:
    """Locales to install (``%_install_langs``), e.g. "en:de" or "NONE".

    Empty keeps the package manager default.
    """
    return _lookup("override_rpm_locales")


def install_root() -> str:
    """Root directory of the image being built (default: "/")."""
    return _lookup("install_root")


def load_settings() -> CustomizationSettings:
    """Resolve all customization settings at once."""
    settings = CustomizationSettings(
        disable_rpm_docs=disable_rpm_docs(),
        override_rpm_locales=override_rpm_locales(),
        install_root=install_root(),
    )
    logger.debug("Resolved settings: %s", settings)
    return settings


def load_config_file(config_file: str) -> None:
    """Use ``config_file`` instead of the one named by the environment."""
    global _file_values
    _file_values = _read_config_file(config_file)
    logger.debug("Loaded config file %s", config_file)


def reset_config() -> None:
    """Forget the loaded config file (useful for testing)."""
    global _file_values
    _file_values = None
