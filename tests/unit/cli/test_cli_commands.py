import importlib
import json
from pathlib import Path

import pytest

cli_main = importlib.import_module("sirtiles.cli.main")

PNG = b"\x89PNG\r\n\x1a\ncli-tile"


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


def test_list_prints_descriptors(make_repository, capsys: pytest.CaptureFixture[str]) -> None:
    repo = make_repository(name="city", tiles={(0, 0, 14): PNG})
    (repo.parent / "empty").mkdir()

    exit_code = cli_main.main(["--repo-root", str(repo.parent), "list"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert [entry["name"] for entry in payload] == ["city", "empty"]
    assert payload[0]["pared"] is True
    assert payload[1]["pared"] is False


def test_tile_writes_output_file(make_repository, tmp_path: Path) -> None:
    repo = make_repository(name="city", tiles={(300, 70, 10): PNG})
    output = tmp_path / "out" / "tile.png"

    exit_code = cli_main.main(
        ["--repo-root", str(repo.parent), "tile", "city", "10", "300", "70", "--output", str(output)]
    )

    assert exit_code == 0
    assert output.read_bytes() == PNG


def test_tile_missing_returns_error(make_repository, tmp_path: Path) -> None:
    repo = make_repository(name="city")

    exit_code = cli_main.main(
        ["--repo-root", str(repo.parent), "tile", "city", "12", "1", "1", "-o", str(tmp_path / "t.png")]
    )

    assert exit_code == 1
    assert not (tmp_path / "t.png").exists()


def test_unknown_repository_returns_error(tmp_path: Path) -> None:
    assert cli_main.main(["--repo-root", str(tmp_path), "tile", "nope", "12", "1", "1"]) == 2


def test_scan_uses_config_file(make_repository, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    repo = make_repository(name="city", tiles={(0, 0, 14): PNG})
    config_path = tmp_path / "server.yaml"
    config_path.write_text(f"repository_root: {repo.parent}\n", encoding="utf-8")

    exit_code = cli_main.main(["--config", str(config_path), "scan", "city"])

    assert exit_code == 0
    assert json.loads(capsys.readouterr().out)["pared"] is True
    assert (repo / "repository.json").exists()


def test_scan_failure_returns_error(tmp_path: Path) -> None:
    (tmp_path / "root" / "empty").mkdir(parents=True)

    assert cli_main.main(["--repo-root", str(tmp_path / "root"), "scan", "empty"]) == 1


def test_version_and_info(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli_main.main(["version"]) == 0
    assert capsys.readouterr().out.strip() == f"SirTiles version {cli_main.SERVER_INFO.version}"

    assert cli_main.main(["info"]) == 0
    assert json.loads(capsys.readouterr().out) == {"name": "SirTiles", "version": "0.1.0"}


def test_tile_with_create_missing_makes_directory(tmp_path: Path) -> None:
    root = tmp_path / "root"
    root.mkdir()
    config_path = tmp_path / "server.yaml"
    config_path.write_text(f"repository_root: {root}\ncreate_missing: true\n", encoding="utf-8")

    assert cli_main.main(["--config", str(config_path), "tile", "fresh", "12", "0", "0"]) == 2
    assert (root / "fresh").is_dir()
