from __future__ import annotations

from pathlib import Path
import textwrap

from callsite_edit import config


def test_rewrite_defaults_reads_toml(tmp_path: Path) -> None:
    config_path = tmp_path / "custom.toml"
    config_path.write_text(
        textwrap.dedent(
            """
            [rewrite]
            literal_name = false
            encoding = "latin-1"
            verbose = "yes"
            """
        ).strip()
        + "\n"
    )
    defaults = config.rewrite_defaults(root=tmp_path, config_path=config_path)
    assert config.literal_name_enabled(defaults) is False
    assert config.source_encoding(defaults) == "latin-1"
    assert config.verbose_enabled(defaults) is True


def test_load_config_default_path(tmp_path: Path) -> None:
    cfg = tmp_path / config.DEFAULT_CONFIG_NAME
    cfg.write_text("[rewrite]\nverbose = true\n", encoding="utf-8")
    data = config.load_config(root=tmp_path, config_path=None)
    assert data["rewrite"]["verbose"] is True


def test_load_toml_missing_and_invalid(tmp_path: Path) -> None:
    assert config._load_toml(tmp_path / "missing.toml") == {}

    invalid = tmp_path / "invalid.toml"
    invalid.write_text("not = [toml", encoding="utf-8")
    assert config._load_toml(invalid) == {}

    assert config._load_toml(tmp_path) == {}


def test_rewrite_defaults_ignores_non_table_section(tmp_path: Path) -> None:
    cfg = tmp_path / config.DEFAULT_CONFIG_NAME
    cfg.write_text("rewrite = 3\n", encoding="utf-8")
    assert config.rewrite_defaults(root=tmp_path) == {}


def test_setting_helpers_fall_back_to_defaults() -> None:
    assert config.literal_name_enabled(None) is False
    assert config.literal_name_enabled({}) is False
    assert config.literal_name_enabled({"literal_name": "yes"}) is True
    assert config.literal_name_enabled({"literal_name": 0}) is False
    assert config.verbose_enabled(None) is False
    assert config.verbose_enabled({"verbose": "off"}) is False
    assert config.source_encoding({"encoding": "  "}) == config.DEFAULT_ENCODING
    assert config.source_encoding(None) == "utf-8"


def test_merge_payload_prefers_explicit_values() -> None:
    defaults = {"literal_name": False, "encoding": "latin-1", "verbose": True}
    payload = {"literal_name": True, "encoding": None, "verbose": None}
    merged = config.merge_payload(payload, defaults)
    assert merged == {"literal_name": True, "encoding": "latin-1", "verbose": True}
