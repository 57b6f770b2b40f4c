"""
Dungeonites simulation core.

Pure state transitions for a turn-based dungeon crawler: status effects,
the five-tier currency ledger, inventory capacity rules and floor
progression. Rendering, transport and storage live outside this package.
"""
from importlib.metadata import version, PackageNotFoundError

__all__ = ["__version__"]

try:
    __version__ = version("dungeonites")
except PackageNotFoundError:  # pragma: no cover - during tests without packaging
    __version__ = "0.0.0"
