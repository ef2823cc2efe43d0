"""Read and write the ``repository.json`` descriptor cache."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Optional

from sirtiles.core.errors import MalformedSidecar, ShardIOError
from sirtiles.core.models import RepositoryDescriptor
from sirtiles.logging import get_logger

LOGGER = get_logger(__name__)

SIDECAR_NAME = "repository.json"


def sidecar_path(repository_dir: Path, name: str = SIDECAR_NAME) -> Path:
    return Path(repository_dir) / name


def read_sidecar(repository_dir: Path, *, name: str = SIDECAR_NAME) -> Optional[RepositoryDescriptor]:
    """Return the cached descriptor, or None when no sidecar exists.

    Raises :class:`MalformedSidecar` when the file is present but unusable.
    """

    path = sidecar_path(repository_dir, name)
    if not path.is_file():
        return None
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedSidecar(f"failed to parse {path}: {exc}") from exc
    return RepositoryDescriptor.from_dict(payload, default_name=Path(repository_dir).name)


def write_sidecar(
    repository_dir: Path,
    descriptor: RepositoryDescriptor,
    *,
    name: str = SIDECAR_NAME,
    indent: int = 2,
) -> Path:
    """Persist ``descriptor`` via a temporary file so readers never see a partial write."""

    path = sidecar_path(repository_dir, name)
    temp_path = path.with_suffix(path.suffix + ".part")
    try:
        temp_path.write_text(json.dumps(descriptor.to_dict(), indent=indent), encoding="utf-8")
        os.replace(temp_path, path)
    except OSError as exc:
        temp_path.unlink(missing_ok=True)
        raise ShardIOError(f"failed to write {path}: {exc}") from exc
    LOGGER.debug("wrote %s", path)
    return path
