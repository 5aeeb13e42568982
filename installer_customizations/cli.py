"""
installer-customizations command line entry point.

Usage:
    installer-customizations apply --install-root /mnt/rootfs --disable-rpm-docs
    installer-customizations render _excludedocs=1
    installer-customizations show --install-root /mnt/rootfs
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, Tuple

import click

from . import __version__
from . import config as ic_config
from .errors import CustomizationError
from .filesystem import read_lines, resolve_under_root
from .macros import DEFAULT_PATHS, add_customization_macros, render_macro_file

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool, quiet: bool) -> None:
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-5s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _parse_macro(value: str) -> Tuple[str, str]:
    name, sep, macro_value = value.partition("=")
    if not sep or not name:
        raise click.BadParameter(f"expected NAME=VALUE, got {value!r}")
    return name, macro_value


@click.group()
@click.version_option(version=__version__, prog_name="installer-customizations")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Config file with a [customizations] section.",
)
def cli(verbose: bool, quiet: bool, config_path: Optional[str]) -> None:
    """Generate RPM macro customization files for image builds."""
    _setup_logging(verbose, quiet)
    if config_path:
        ic_config.load_config_file(config_path)


@cli.command()
@click.option("--install-root", type=click.Path(file_okay=False), default=None,
              help="Root of the image being built.")
@click.option("--disable-rpm-docs/--keep-rpm-docs", default=None,
              help="Exclude package documentation.")
@click.option("--override-rpm-locales", default=None, metavar="LOCALES",
              help='Locales to install, e.g. "en:de" or "NONE".')
def apply(
    install_root: Optional[str],
    disable_rpm_docs: Optional[bool],
    override_rpm_locales: Optional[str],
) -> None:
    """Write the customization macro files below the install root."""
    if install_root is None:
        install_root = ic_config.install_root()
    if disable_rpm_docs is None:
        disable_rpm_docs = ic_config.disable_rpm_docs()
    if override_rpm_locales is None:
        override_rpm_locales = ic_config.override_rpm_locales()

    logger.info(
        "Applying RPM customizations under %s: disable_rpm_docs=%s override_rpm_locales=%r",
        install_root,
        disable_rpm_docs,
        override_rpm_locales,
    )
    try:
        written = add_customization_macros(install_root, disable_rpm_docs, override_rpm_locales)
    except CustomizationError as exc:
        logger.debug("Customization of %s failed", install_root, exc_info=True)
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    for path in written:
        click.echo(str(path))


@cli.command()
@click.option("--comment", "comments", multiple=True, help="Comment line to include.")
@click.argument("macros", nargs=-1, required=True, metavar="NAME=VALUE...")
def render(comments: Sequence[str], macros: Sequence[str]) -> None:
    """Print a macro file without writing it."""
    parsed = dict(_parse_macro(item) for item in macros)
    for line in render_macro_file(parsed, list(comments)):
        click.echo(line)


@cli.command()
@click.option("--install-root", type=click.Path(file_okay=False), default=None,
              help="Root of the image being built.")
def show(install_root: Optional[str]) -> None:
    """Print the customization macro files present below the install root."""
    if install_root is None:
        install_root = ic_config.install_root()

    found = False
    for macro_file in (DEFAULT_PATHS.disable_docs, DEFAULT_PATHS.customize_locales):
        path = resolve_under_root(install_root, macro_file)
        if not path.is_file():
            continue
        found = True
        click.echo(f"==> {path} <==")
        for line in read_lines(path):
            click.echo(line)

    if not found:
        click.echo(f"No customization macro files under {Path(install_root)}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
