"""Unit tests for the RPM macro customization policy."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from installer_customizations import config as ic_config
from installer_customizations.errors import MacroFileError
from installer_customizations.filesystem import read_lines
from installer_customizations.macros import policy
from installer_customizations.macros.policy import (
    CUSTOMIZE_LOCALES_MACRO_FILE,
    DISABLE_DOCS_MACRO_FILE,
    RPM_MACROS_DIR,
    CustomizationPaths,
    add_customization_macros,
    apply_configured_customizations,
    customization_macros,
)

DOC_FILE = "/usr/lib/rpm/macros.d/macros.installercustomizations_disable_docs"
LOCALE_FILE = "/usr/lib/rpm/macros.d/macros.installercustomizations_customize_locales"


def _under(root: Path, path: str) -> Path:
    return root / path.lstrip("/")


class TestWellKnownPaths:
    """Test the fixed macro file locations."""

    def test_paths(self):
        """Paths match what the package manager looks for."""
        assert DISABLE_DOCS_MACRO_FILE == DOC_FILE
        assert CUSTOMIZE_LOCALES_MACRO_FILE == LOCALE_FILE
        assert RPM_MACROS_DIR == "/usr/lib/rpm/macros.d"

    def test_default_paths(self):
        """CustomizationPaths defaults to the well-known paths."""
        paths = CustomizationPaths()
        assert paths.disable_docs == DOC_FILE
        assert paths.customize_locales == LOCALE_FILE


class TestCustomizationMacros:
    """Test customization_macros()."""

    def test_nothing_requested(self):
        assert customization_macros(False, "") == []

    def test_both_requested_in_write_order(self):
        assert customization_macros(True, "en:de") == [
            (DOC_FILE, {"_excludedocs": "1"}),
            (LOCALE_FILE, {"_install_langs": "en:de"}),
        ]

    def test_shared_path_keeps_both_entries(self):
        paths = CustomizationPaths(disable_docs="etc/rpm.macros", customize_locales="etc/rpm.macros")

        assert customization_macros(True, "NONE", paths) == [
            ("etc/rpm.macros", {"_excludedocs": "1"}),
            ("etc/rpm.macros", {"_install_langs": "NONE"}),
        ]


class TestAddCustomizationMacros:
    """Test add_customization_macros()."""

    @pytest.mark.parametrize(
        "disable_docs,locales,doc_macro,locale_macro",
        [
            (True, "", "%_excludedocs 1", None),
            (False, "NONE", None, "%_install_langs NONE"),
            (True, "NONE", "%_excludedocs 1", "%_install_langs NONE"),
            (False, "en:de:fr", None, "%_install_langs en:de:fr"),
        ],
        ids=["disable-docs", "disable-locales", "docs-and-locales", "override-locales"],
    )
    def test_macro_files(self, tmp_path, disable_docs, locales, doc_macro, locale_macro):
        """Only the requested files exist and they set the expected macro."""
        written = add_customization_macros(tmp_path, disable_docs, locales)

        doc_path = _under(tmp_path, DOC_FILE)
        locale_path = _under(tmp_path, LOCALE_FILE)

        if doc_macro:
            assert doc_macro in read_lines(doc_path)
        else:
            assert not doc_path.exists()

        if locale_macro:
            assert locale_macro in read_lines(locale_path)
        else:
            assert not locale_path.exists()

        expected = [p for p, m in ((doc_path, doc_macro), (locale_path, locale_macro)) if m]
        assert written == expected

    def test_nothing_enabled_creates_nothing(self, tmp_path):
        """No file and no macros.d directory when nothing is requested."""
        assert add_customization_macros(tmp_path, False, "") == []

        assert not _under(tmp_path, RPM_MACROS_DIR).exists()
        assert list(tmp_path.iterdir()) == []

    def test_file_contents(self, tmp_path):
        """The disable-docs file holds the header followed by the macro."""
        add_customization_macros(tmp_path, True, "")

        assert read_lines(_under(tmp_path, DOC_FILE)) == [
            "# This macro file was dynamically generated by the Azure Linux Toolkit image generator",
            "# based on the configuration used at image creation time.",
            "",
            "%_excludedocs 1",
        ]

    def test_custom_paths(self, tmp_path):
        """Callers can redirect the macro files."""
        paths = CustomizationPaths(disable_docs="etc/docs.macros", customize_locales="etc/langs.macros")

        add_customization_macros(tmp_path, True, "C.UTF-8", paths=paths)

        assert read_lines(tmp_path / "etc" / "docs.macros")[-1] == "%_excludedocs 1"
        assert read_lines(tmp_path / "etc" / "langs.macros")[-1] == "%_install_langs C.UTF-8"
        assert not _under(tmp_path, RPM_MACROS_DIR).exists()

    def test_shared_path_written_twice_in_order(self, tmp_path):
        """Both writes happen; the locale file replaces the docs file."""
        paths = CustomizationPaths(disable_docs="etc/rpm.macros", customize_locales="etc/rpm.macros")

        with patch.object(policy, "add_macro_file", wraps=policy.add_macro_file) as mock_add:
            written = add_customization_macros(tmp_path, True, "NONE", paths=paths)

        assert [c.args[1] for c in mock_add.call_args_list] == [
            {"_excludedocs": "1"},
            {"_install_langs": "NONE"},
        ]
        assert written == [tmp_path / "etc" / "rpm.macros"] * 2
        assert read_lines(tmp_path / "etc" / "rpm.macros")[-1] == "%_install_langs NONE"

    def test_stops_after_first_failure(self, tmp_path):
        """The locale file is not attempted when the docs file fails."""
        error = MacroFileError(tmp_path / "docs", "Failed to write file")
        with patch.object(policy, "add_macro_file", side_effect=error) as mock_add:
            with pytest.raises(MacroFileError) as excinfo:
                add_customization_macros(tmp_path, True, "NONE")

        assert excinfo.value is error
        assert mock_add.call_count == 1
        assert mock_add.call_args.args[2] == DOC_FILE

    def test_unwritable_root(self, tmp_path):
        """A root that is a regular file surfaces as MacroFileError."""
        root = tmp_path / "rootfs"
        root.write_text("")

        with pytest.raises(MacroFileError):
            add_customization_macros(root, True, "")


class TestApplyConfiguredCustomizations:
    """Test apply_configured_customizations()."""

    @pytest.fixture(autouse=True)
    def _reset(self, monkeypatch):
        ic_config.reset_config()
        monkeypatch.delenv("INSTALLER_CUSTOMIZATIONS_CONFIG", raising=False)
        monkeypatch.delenv("INSTALLER_CUSTOMIZATIONS_DISABLE_RPM_DOCS", raising=False)
        monkeypatch.delenv("INSTALLER_CUSTOMIZATIONS_OVERRIDE_RPM_LOCALES", raising=False)
        yield
        ic_config.reset_config()

    def test_defaults_write_nothing(self, tmp_path):
        assert apply_configured_customizations(tmp_path) == []
        assert list(tmp_path.iterdir()) == []

    def test_uses_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("INSTALLER_CUSTOMIZATIONS_DISABLE_RPM_DOCS", "yes")
        monkeypatch.setenv("INSTALLER_CUSTOMIZATIONS_OVERRIDE_RPM_LOCALES", "en_US")

        written = apply_configured_customizations(tmp_path)

        assert written == [_under(tmp_path, DOC_FILE), _under(tmp_path, LOCALE_FILE)]
        assert "%_install_langs en_US" in read_lines(_under(tmp_path, LOCALE_FILE))
