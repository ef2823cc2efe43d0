"""Configuration management with YAML and JSON support."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from sirtiles.catalog.sidecar import SIDECAR_NAME


@dataclass
class ServerConfig:
    """Settings shared by the tile store, the catalog and the CLI."""

    repository_root: Path = field(default_factory=Path.cwd)
    sidecar_name: str = SIDECAR_NAME
    scan_timeout_seconds: Optional[float] = None
    create_missing: bool = False
    log_level: str = "INFO"
    json_logs: bool = False

    def resolve_relative_paths(self, base_dir: Path) -> None:
        """Resolve a relative repository root against ``base_dir``."""

        if not self.repository_root.is_absolute():
            self.repository_root = base_dir / self.repository_root


class ConfigLoader:
    """Load server configuration files in YAML or JSON format."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = base_dir or Path.cwd()

    def load(self, path: Path | str) -> ServerConfig:
        """Parse a configuration file and return a populated dataclass."""

        config_path = self._resolve_path(Path(path))
        payload = self._load_payload(config_path)
        config = self._build_config(payload)
        config.resolve_relative_paths(config_path.parent)
        return config

    def _resolve_path(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return (self._base_dir / path).resolve()

    def _load_payload(self, path: Path) -> Dict[str, Any]:
        suffix = path.suffix.lower()
        if suffix in {".yaml", ".yml"}:
            with path.open("r", encoding="utf-8") as handle:
                payload = yaml.safe_load(handle) or {}
        elif suffix == ".json":
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle) or {}
        else:
            raise ValueError(f"Unsupported configuration format: {suffix}")
        if not isinstance(payload, dict):
            raise ValueError("configuration root must be a mapping")
        return payload

    def _build_config(self, payload: Dict[str, Any]) -> ServerConfig:
        config = ServerConfig()
        if payload.get("repository_root") is not None:
            config.repository_root = Path(payload["repository_root"])
        if payload.get("sidecar_name") is not None:
            config.sidecar_name = str(payload["sidecar_name"])
        timeout = payload.get("scan_timeout_seconds")
        if timeout is not None:
            timeout = float(timeout)
            if timeout <= 0:
                raise ValueError("scan_timeout_seconds must be positive")
            config.scan_timeout_seconds = timeout
        if "create_missing" in payload:
            config.create_missing = bool(payload["create_missing"])

        logging_payload = payload.get("logging") or {}
        if not isinstance(logging_payload, dict):
            raise ValueError("logging section must be a mapping")
        if logging_payload.get("level") is not None:
            config.log_level = str(logging_payload["level"]).upper()
        if "json" in logging_payload:
            config.json_logs = bool(logging_payload["json"])
        return config


def load_config(path: Path | str, *, base_dir: Optional[Path] = None) -> ServerConfig:
    """Convenience wrapper around :class:`ConfigLoader`."""

    loader = ConfigLoader(base_dir=base_dir)
    return loader.load(path)
