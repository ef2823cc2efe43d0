"""Repository analysis and listing for SirTiles."""

from .lock import RepositoryLocks
from .manager import RepositoryCatalog
from .scanner import RepositoryScanner, ScanResult
from .sidecar import SIDECAR_NAME, read_sidecar, write_sidecar

__all__ = [
    "SIDECAR_NAME",
    "RepositoryCatalog",
    "RepositoryLocks",
    "RepositoryScanner",
    "ScanResult",
    "read_sidecar",
    "write_sidecar",
]
