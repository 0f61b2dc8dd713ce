"""Tests for reporter configuration."""

from pathlib import Path

import pytest

from boostsec.step_reporter.config import ReporterConfig, load_config


@pytest.fixture(autouse=True)
def _no_color_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make sure NO_COLOR from the host doesn't leak into tests."""
    monkeypatch.delenv("NO_COLOR", raising=False)


def test_load_config_defaults() -> None:
    """load_config returns defaults without a file."""
    config = load_config()
    assert config == ReporterConfig()
    assert config.use_color is True
    assert config.slow == 75
    assert config.symbols == "auto"


def test_load_config_from_file(tmp_path: Path) -> None:
    """load_config reads settings from YAML."""
    path = tmp_path / "reporter.yaml"
    path.write_text("use_color: false\nslow: 200\nsymbols: windows\n")

    config = load_config(path)

    assert config.use_color is False
    assert config.slow == 200
    assert config.build_theme().symbol("ok") == "√"


def test_load_config_empty_file(tmp_path: Path) -> None:
    """An empty config file means defaults."""
    path = tmp_path / "reporter.yaml"
    path.write_text("")
    assert load_config(path) == ReporterConfig()


def test_load_config_missing(tmp_path: Path) -> None:
    """load_config raises when the file doesn't exist."""
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        load_config(tmp_path / "missing.yaml")


def test_load_config_not_mapping(tmp_path: Path) -> None:
    """load_config rejects documents that are not mappings."""
    path = tmp_path / "reporter.yaml"
    path.write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config(path)


def test_load_config_invalid_schema(tmp_path: Path) -> None:
    """load_config rejects invalid values."""
    path = tmp_path / "reporter.yaml"
    path.write_text("slow: 0\n")
    with pytest.raises(ValueError, match="Invalid config schema"):
        load_config(path)


def test_load_config_invalid_yaml(tmp_path: Path) -> None:
    """load_config raises ValueError for malformed YAML."""
    path = tmp_path / "reporter.yaml"
    path.write_text("slow: [unclosed")
    with pytest.raises(ValueError, match="Invalid YAML"):
        load_config(path)


def test_no_color_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """NO_COLOR turns colors off."""
    monkeypatch.setenv("NO_COLOR", "1")
    assert load_config().use_color is False
    assert load_config().build_theme().color("fail", "x") == "x"


def test_load_config_rejects_unknown_symbol_set(tmp_path: Path) -> None:
    """load_config only accepts the auto, unicode and windows symbol sets."""
    path = tmp_path / "reporter.yaml"
    path.write_text("symbols: ascii\n")
    with pytest.raises(ValueError, match="Invalid config schema"):
        load_config(path)
