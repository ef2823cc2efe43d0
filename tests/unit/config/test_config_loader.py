import json
from pathlib import Path

import pytest

from sirtiles.config import ConfigLoader, ServerConfig, load_config


def test_load_yaml_config(tmp_path: Path) -> None:
    config_path = tmp_path / "sirtiles.yaml"
    config_path.write_text(
        "\n".join(
            [
                "repository_root: repos",
                "scan_timeout_seconds: 30",
                "create_missing: true",
                "logging:",
                "  level: debug",
                "  json: true",
            ]
        ),
        encoding="utf-8",
    )

    config = load_config(config_path)

    assert config.repository_root == tmp_path / "repos"
    assert config.scan_timeout_seconds == 30.0
    assert config.create_missing is True
    assert config.log_level == "DEBUG"
    assert config.json_logs is True
    assert config.sidecar_name == "repository.json"


def test_load_json_config_relative_to_base_dir(tmp_path: Path) -> None:
    (tmp_path / "conf").mkdir()
    (tmp_path / "conf" / "server.json").write_text(
        json.dumps({"repository_root": "/srv/tiles", "sidecar_name": "meta.json"}),
        encoding="utf-8",
    )

    config = ConfigLoader(base_dir=tmp_path).load("conf/server.json")

    assert config.repository_root == Path("/srv/tiles")
    assert config.sidecar_name == "meta.json"
    assert config.scan_timeout_seconds is None


def test_empty_yaml_uses_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "empty.yml"
    config_path.write_text("", encoding="utf-8")

    config = load_config(config_path)

    assert config == ServerConfig(repository_root=Path.cwd())


@pytest.mark.parametrize(
    "filename, content",
    [
        ("bad.toml", "x = 1"),
        ("bad.yaml", "- a\n- b\n"),
        ("bad.yaml", "scan_timeout_seconds: 0\n"),
        ("bad.yaml", "logging: verbose\n"),
    ],
)
def test_invalid_configs_raise(tmp_path: Path, filename: str, content: str) -> None:
    config_path = tmp_path / filename
    config_path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(config_path)
