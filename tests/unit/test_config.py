"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from portdetective.config import PortDetectiveConfig
from portdetective.net.models import ProtocolFilter


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    for var in ("PORTDETECTIVE_PROTOCOL", "PORTDETECTIVE_JSON", "PORTDETECTIVE_FORCE"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


def _write_config(tmp_path: Path, text: str) -> None:
    config_dir = tmp_path / "portdetective"
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "config.yaml").write_text(text, encoding="utf-8")


def test_defaults_without_file(tmp_path: Path):
    config = PortDetectiveConfig.load()
    assert config.config_dir == tmp_path / "portdetective"
    assert config.protocol_filter is ProtocolFilter.BOTH
    assert config.json_output is False
    assert config.force_kill is False


def test_home_fallback(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("XDG_CONFIG_HOME")
    config = PortDetectiveConfig()
    assert config.config_dir == Path.home() / ".config" / "portdetective"


def test_yaml_file_is_applied(tmp_path: Path):
    _write_config(tmp_path, "protocol: tcp\njson: true\nforce: true\n")
    config = PortDetectiveConfig.load()
    assert config.protocol_filter is ProtocolFilter.TCP_ONLY
    assert config.json_output is True
    assert config.force_kill is True


def test_empty_file_keeps_defaults(tmp_path: Path):
    _write_config(tmp_path, "")
    assert PortDetectiveConfig.load().protocol_filter is ProtocolFilter.BOTH


def test_non_mapping_file_is_rejected(tmp_path: Path):
    _write_config(tmp_path, "- tcp\n- udp\n")
    with pytest.raises(ValueError, match="YAML mapping"):
        PortDetectiveConfig.load()


def test_unknown_protocol_is_rejected(tmp_path: Path):
    _write_config(tmp_path, "protocol: sctp\n")
    with pytest.raises(ValueError):
        PortDetectiveConfig.load()


def test_env_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _write_config(tmp_path, "protocol: tcp\njson: true\n")
    monkeypatch.setenv("PORTDETECTIVE_PROTOCOL", "UDP")
    monkeypatch.setenv("PORTDETECTIVE_JSON", "no")
    monkeypatch.setenv("PORTDETECTIVE_FORCE", "yes")

    config = PortDetectiveConfig.load()

    assert config.protocol_filter is ProtocolFilter.UDP_ONLY
    assert config.json_output is False
    assert config.force_kill is True


def test_quoted_false_strings_stay_false(tmp_path: Path):
    _write_config(tmp_path, 'force: "no"\njson: "false"\n')
    config = PortDetectiveConfig.load()
    assert config.force_kill is False
    assert config.json_output is False


def test_quoted_true_strings(tmp_path: Path):
    _write_config(tmp_path, 'force: "Yes"\njson: "on"\n')
    config = PortDetectiveConfig.load()
    assert config.force_kill is True
    assert config.json_output is True


def test_non_boolean_flag_is_rejected(tmp_path: Path):
    _write_config(tmp_path, "force: 1\n")
    with pytest.raises(ValueError, match="'force' must be a boolean"):
        PortDetectiveConfig.load()
