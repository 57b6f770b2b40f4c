class DungeonitesError(Exception):
    """Base exception for the Dungeonites simulation core."""


class ConfigError(DungeonitesError):
    """Raised when simulation configuration is malformed."""


class SnapshotError(DungeonitesError):
    """Base exception for snapshot encode/decode errors."""


class SnapshotValidationError(SnapshotError):
    """Raised when snapshot data does not match the expected shape."""


class SnapshotVersionError(SnapshotError):
    """Raised when a snapshot was written by a newer schema version."""
