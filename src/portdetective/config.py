"""Global configuration — XDG config file, env vars, defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from portdetective.net.models import ProtocolFilter

_TRUTHY = {"1", "true", "yes", "on"}


def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "portdetective"
    return Path.home() / ".config" / "portdetective"


@dataclass
class PortDetectiveConfig:
    """Application-wide defaults. Command-line flags override these."""

    config_dir: Path = field(default_factory=_default_config_dir)
    protocol_filter: ProtocolFilter = ProtocolFilter.BOTH
    json_output: bool = False
    force_kill: bool = False

    @property
    def config_file(self) -> Path:
        return self.config_dir / "config.yaml"

    @classmethod
    def load(cls) -> PortDetectiveConfig:
        """Load config.yaml if present, then apply environment overrides."""
        config = cls()

        if config.config_file.is_file():
            config._apply_file(config.config_file)

        env_protocol = os.environ.get("PORTDETECTIVE_PROTOCOL")
        if env_protocol:
            config.protocol_filter = ProtocolFilter(env_protocol.lower())

        env_json = os.environ.get("PORTDETECTIVE_JSON")
        if env_json:
            config.json_output = env_json.lower() in _TRUTHY

        env_force = os.environ.get("PORTDETECTIVE_FORCE")
        if env_force:
            config.force_kill = env_force.lower() in _TRUTHY

        return config

    def _apply_file(self, path: Path) -> None:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        if data is None:
            return
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a YAML mapping")

        if "protocol" in data:
            self.protocol_filter = ProtocolFilter(str(data["protocol"]).lower())
        if "json" in data:
            self.json_output = _as_bool("json", data["json"])
        if "force" in data:
            self.force_kill = _as_bool("force", data["force"])


def _as_bool(key: str, value: object) -> bool:
    """YAML booleans pass through; quoted strings follow the env-var rule."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in _TRUTHY
    raise ValueError(f"{key!r} must be a boolean, got {value!r}")
