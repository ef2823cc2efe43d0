"""Dataclasses describing core SirTiles entities."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

from .errors import MalformedSidecar, RepositoryNotFoundError

MIN_SHARD_ZOOM = 9
DISPLAY_ZOOM = 14

DEFAULT_LNG = 113.0
DEFAULT_LAT = 40.0
DEFAULT_ZOOM = 10


@dataclass(frozen=True)
class TileCoordinate:
    """A tile in the XYZ scheme as requested by a client."""

    x: int
    y: int
    zoom: int

    @property
    def shard_zoom(self) -> int:
        """Zoom level used for partitioning; coarse levels share level 9."""

        return max(self.zoom, MIN_SHARD_ZOOM)


@dataclass(frozen=True)
class ShardAddress:
    """Location of a single tile inside a repository's shard hierarchy."""

    subdirectory: str
    shard_file: str
    table: str
    row: int

    @property
    def relative_path(self) -> Path:
        return Path(self.subdirectory) / self.shard_file

    def shard_path(self, repository_dir: Path | str) -> Path:
        return Path(repository_dir) / self.relative_path


@dataclass
class BoundingBox:
    """Longitude/latitude extent; the empty box is the identity for ``extend``."""

    min_x: float = math.inf
    min_y: float = math.inf
    max_x: float = -math.inf
    max_y: float = -math.inf

    @classmethod
    def empty(cls) -> "BoundingBox":
        return cls()

    @property
    def is_empty(self) -> bool:
        return (
            self.min_x == math.inf
            and self.min_y == math.inf
            and self.max_x == -math.inf
            and self.max_y == -math.inf
        )

    def extend(self, other: "BoundingBox") -> "BoundingBox":
        """Grow this box in place to cover ``other`` and return it."""

        self.min_x = min(self.min_x, other.min_x)
        self.min_y = min(self.min_y, other.min_y)
        self.max_x = max(self.max_x, other.max_x)
        self.max_y = max(self.max_y, other.max_y)
        return self

    @property
    def center(self) -> Tuple[float, float]:
        return (0.5 * (self.min_x + self.max_x), 0.5 * (self.min_y + self.max_y))


@dataclass
class RepositoryDescriptor:
    """Summary of one repository as returned by the catalog.

    ``zoom`` is a display hint for map clients, not a tile zoom level.
    """

    name: str
    lng: float = DEFAULT_LNG
    lat: float = DEFAULT_LAT
    zoom: int = DEFAULT_ZOOM
    size_bytes: float = 0.0
    url: str = ""
    analyzed: bool = False

    @classmethod
    def placeholder(cls, name: str) -> "RepositoryDescriptor":
        """Best-effort entry for a repository that could not be analysed."""

        return cls(name=name, url=name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "lng": self.lng,
            "lat": self.lat,
            "zoom": self.zoom,
            "size": self.size_bytes,
            "url": self.url,
            "pared": self.analyzed,
        }

    @classmethod
    def from_dict(cls, payload: Any, *, default_name: str = "") -> "RepositoryDescriptor":
        """Build a descriptor from the ``repository.json`` schema.

        Missing keys fall back to the placeholder values; present keys must
        carry the right JSON type or :class:`MalformedSidecar` is raised.
        """

        if not isinstance(payload, Mapping):
            raise MalformedSidecar("repository descriptor must be a JSON object")
        name = _typed(payload, "name", str, default_name)
        return cls(
            name=name,
            lng=float(_number(payload, "lng", DEFAULT_LNG)),
            lat=float(_number(payload, "lat", DEFAULT_LAT)),
            zoom=_integer(payload, "zoom", DEFAULT_ZOOM),
            size_bytes=float(_number(payload, "size", 0.0)),
            url=_typed(payload, "url", str, name),
            analyzed=_typed(payload, "pared", bool, False),
        )


@dataclass(frozen=True)
class ServerInfo:
    """Metadata describing the running server."""

    name: str
    version: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "version": self.version}


def _typed(payload: Mapping[str, Any], key: str, kind: type, default: Any) -> Any:
    if key not in payload:
        return default
    value = payload[key]
    if not isinstance(value, kind):
        raise MalformedSidecar(f"field '{key}' must be of type {kind.__name__}")
    return value


def _number(payload: Mapping[str, Any], key: str, default: float) -> float:
    if key not in payload:
        return default
    value = payload[key]
    # bool is an int subclass but not a JSON number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedSidecar(f"field '{key}' must be a number")
    return value


def _integer(payload: Mapping[str, Any], key: str, default: int) -> int:
    if key not in payload:
        return default
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedSidecar(f"field '{key}' must be an integer")
    return value


def repository_path(root: Path | str, name: str) -> Path:
    """Join ``name`` onto ``root``, refusing anything but a single path component."""

    if not name or name in {".", ".."} or Path(name).name != name:
        raise RepositoryNotFoundError(f"invalid repository name: {name!r}")
    return Path(root) / name
