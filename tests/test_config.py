"""Tests for TOML config file loading."""

from __future__ import annotations

import json
from pathlib import Path

from rixlex.cli import build_parser, load_config, main, resolve_options


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text('[output]\nformat = "json"\n')
        result = load_config(cfg, tmp_path)
        assert result["output"] == {"format": "json"}

    def test_auto_discover_rixlex_toml(self, tmp_path: Path) -> None:
        cfg = tmp_path / "rixlex.toml"
        cfg.write_text("[lexer]\nstrict = true\n")
        result = load_config(None, tmp_path)
        assert result["lexer"] == {"strict": True}


class TestConfigMerge:
    def _options(self, tmp_path: Path, config: str, *extra: str):
        (tmp_path / "rixlex.toml").write_text(config)
        doc = tmp_path / "doc.rix"
        doc.write_text("")
        ns = build_parser().parse_args([str(doc), *extra])
        return resolve_options(ns)

    def test_defaults(self, tmp_path: Path) -> None:
        opts = self._options(tmp_path, "")
        assert opts.format == "text"
        assert opts.spans is True
        assert opts.strict is False

    def test_config_values(self, tmp_path: Path) -> None:
        opts = self._options(
            tmp_path, '[output]\nformat = "json"\nspans = false\n[lexer]\nstrict = true\n'
        )
        assert opts.format == "json"
        assert opts.spans is False
        assert opts.strict is True

    def test_cli_overrides_config(self, tmp_path: Path) -> None:
        opts = self._options(tmp_path, '[output]\nformat = "json"\n', "--format", "text")
        assert opts.format == "text"

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "other.toml"
        cfg.write_text("[lexer]\nstrict = true\n")
        doc = tmp_path / "doc.rix"
        doc.write_text("")
        ns = build_parser().parse_args([str(doc), "--config", str(cfg)])
        assert resolve_options(ns).strict is True

    def test_config_drives_output(self, tmp_path: Path, capsys) -> None:
        (tmp_path / "rixlex.toml").write_text('[output]\nformat = "json"\n')
        doc = tmp_path / "doc.rix"
        doc.write_text("1")
        assert main([str(doc)]) == 0
        assert json.loads(capsys.readouterr().out)[0]["value"] == 1

    def test_invalid_format_returns_2(self, tmp_path: Path, capsys) -> None:
        (tmp_path / "rixlex.toml").write_text('[output]\nformat = "xml"\n')
        doc = tmp_path / "doc.rix"
        doc.write_text("1")
        assert main([str(doc)]) == 2
        assert "invalid output format" in capsys.readouterr().err

    def test_malformed_toml_returns_2(self, tmp_path: Path) -> None:
        (tmp_path / "rixlex.toml").write_text("[output\n")
        doc = tmp_path / "doc.rix"
        doc.write_text("1")
        assert main([str(doc)]) == 2
