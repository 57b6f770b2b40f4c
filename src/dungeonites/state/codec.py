from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from ..clock import Clock
from ..config import SimulationConfig
from ..effects.catalog import EffectCatalog
from ..events import EventBus
from ..exceptions import SnapshotValidationError, SnapshotVersionError
from ..schemas import format_errors, validation_errors
from .player import PlayerSimulationState

logger = logging.getLogger(__name__)

# Increment when making breaking snapshot changes
SCHEMA_VERSION = 1


def encode_state(state: PlayerSimulationState) -> str:
    """Encode a player state to a JSON string with a schema version stamp."""
    data = state.to_dict()
    data["schema_version"] = SCHEMA_VERSION
    return json.dumps(data, ensure_ascii=False, sort_keys=True)


def decode_state(
    text: str,
    config: Optional[SimulationConfig] = None,
    catalog: Optional[EffectCatalog] = None,
    clock: Optional[Clock] = None,
    event_bus: Optional[EventBus] = None,
) -> PlayerSimulationState:
    """Decode JSON text into a player state, migrating and validating it first."""
    try:
        data: Dict[str, Any] = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotValidationError(f"Invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SnapshotValidationError("Snapshot must be a JSON object")

    try:
        version = int(data.get("schema_version", SCHEMA_VERSION))
    except (TypeError, ValueError) as e:
        raise SnapshotValidationError(f"Invalid schema_version: {data.get('schema_version')!r}") from e
    if version != SCHEMA_VERSION:
        data = migrate_data(data, from_version=version, to_version=SCHEMA_VERSION)

    errors = validation_errors("snapshot", data)
    if errors:
        for err in errors:
            logger.error("Snapshot validation error at %s: %s", list(err.path), err.message)
        raise SnapshotValidationError(f"Invalid snapshot: {format_errors(errors)}")

    try:
        return PlayerSimulationState.from_dict(
            data, config=config, catalog=catalog, clock=clock, event_bus=event_bus
        )
    except (KeyError, TypeError, ValueError) as e:
        raise SnapshotValidationError(f"Invalid snapshot: {e}") from e


def migrate_data(data: Dict[str, Any], from_version: int, to_version: int) -> Dict[str, Any]:
    """Migrate snapshot data between schema versions, one step at a time.

    Only version 1 exists so far, so there are no steps to run.
    """
    if from_version == to_version:
        return data
    if from_version > to_version:
        raise SnapshotVersionError(
            f"Snapshot schema version {from_version} is newer than supported {to_version}."
        )
    data["schema_version"] = to_version
    return data
