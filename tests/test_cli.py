"""Tests for tinta_cli - the generate-css command."""
import re

import pytest

import tinta_cli
from __about__ import __version__, metadata_summary
from tinta_colorutils import argb_from_hex, hex_from_argb
from tinta_palettes import CorePalette, CorePaletteColors
from tinta_scheme import ROLES, Scheme

LINE = re.compile(r'^  --md-sys-color-([a-z-]+)-(light|dark): "#[0-9a-f]{6}";$')


class TestGenerateCss:
    """Output file format."""

    def test_writes_tokens(self, tmp_path):
        code = tinta_cli.main(["generate-css", "-p", "#6750a4", "-o", str(tmp_path)])
        assert code == 0

        lines = (tmp_path / "tokens.css").read_text(encoding="utf-8").splitlines()
        assert lines[0] == ":root {"
        assert lines[-1] == "}"
        body = lines[1:-1]
        assert len(body) == 2 * len(ROLES)
        for line in body:
            assert LINE.match(line), line

        light_roles = [LINE.match(line).group(1) for line in body[:len(ROLES)]]
        assert light_roles == [role.replace("_", "-") for role in ROLES]
        assert all(line.endswith('";') and "-light:" in line for line in body[:len(ROLES)])
        assert all("-dark:" in line for line in body[len(ROLES):])

    def test_values_match_scheme(self, tmp_path):
        tinta_cli.main([
            "generate-css", "--primary", "#6750a4", "--secondary", "#386a20",
            "--error", "#b3261e", "--output", str(tmp_path),
        ])
        core = CorePalette.from_colors(CorePaletteColors(
            primary=argb_from_hex("#6750a4"),
            secondary=argb_from_hex("#386a20"),
            error=argb_from_hex("#b3261e"),
        ))
        light = Scheme.light_from_core_palette(core)
        dark = Scheme.dark_from_core_palette(core)
        text = (tmp_path / "tokens.css").read_text(encoding="utf-8")
        assert f'  --md-sys-color-primary-light: "{hex_from_argb(light.primary)}";' in text
        assert f'  --md-sys-color-secondary-container-light: "{hex_from_argb(light.secondary_container)}";' in text
        assert f'  --md-sys-color-on-error-dark: "{hex_from_argb(dark.on_error)}";' in text

    def test_short_hex_accepted(self, tmp_path):
        assert tinta_cli.main(["generate-css", "-p", "#36c", "-t", "fa0", "-o", str(tmp_path)]) == 0
        assert (tmp_path / "tokens.css").exists()


class TestErrors:
    """Exit codes."""

    def test_missing_directory(self, tmp_path, caplog):
        target = tmp_path / "missing"
        code = tinta_cli.main(["generate-css", "-p", "#6750a4", "-o", str(target)])
        assert code == 1
        assert not target.exists()
        assert "Cannot write" in caplog.text

    def test_output_is_a_file(self, tmp_path):
        target = tmp_path / "plain.txt"
        target.write_text("x")
        assert tinta_cli.main(["generate-css", "-p", "#6750a4", "-o", str(target)]) == 1

    def test_bad_hex_is_usage_error(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            tinta_cli.main(["generate-css", "-p", "#12345g", "-o", str(tmp_path)])
        assert excinfo.value.code == 2
        assert "#12345g" in capsys.readouterr().err
        assert not (tmp_path / "tokens.css").exists()

    def test_missing_primary(self, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            tinta_cli.main(["generate-css", "-o", str(tmp_path)])
        assert excinfo.value.code == 2

    def test_no_subcommand_prints_help(self, capsys):
        assert tinta_cli.main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            tinta_cli.main(["--version"])
        assert excinfo.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestMetadata:
    """Project metadata."""

    def test_summary(self):
        summary = metadata_summary()
        assert summary["title"] == "Tinta"
        assert summary["version"] == __version__
        assert summary["license"] == "LGPL-3.0-or-later"
