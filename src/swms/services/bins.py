"""Bin state updates: sensor reports, collections and administrative creation."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Any, Optional

from .. import events
from ..config import settings
from ..errors import InvalidInputError, NotFoundError
from ..models.domain import Bin, Coordinate
from ..persistence import bins as bin_store

logger = logging.getLogger(__name__)


def derive_status(fill_level: int) -> str:
    """Status category for a fill level. The only place status is decided."""
    if fill_level >= settings.bin_overflow_threshold:
        return "overflow"
    if fill_level >= settings.bin_full_threshold:
        return "full"
    return "normal"


def bin_from_record(record: dict) -> Bin:
    """Load a bin with its status derived from the current thresholds, not the stored column."""
    bin_ = Bin.from_record(record)
    bin_.status = derive_status(bin_.fill_level)
    return bin_


def validate_fill_level(level: Any) -> int:
    if isinstance(level, bool) or not isinstance(level, (int, float)):
        raise InvalidInputError("fillLevel must be a number")
    if not math.isfinite(level) or not 0 <= level <= 100:
        raise InvalidInputError("fillLevel must be within [0, 100]")
    return int(round(level))


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _should_alert(previous_level: int, level: int) -> bool:
    if level < settings.bin_full_threshold:
        return False
    if settings.bin_alert_mode == "edge":
        return previous_level < settings.bin_full_threshold
    return True


def _emit_update(bin_: Bin) -> None:
    events.emit(events.BIN_UPDATE, {"id": bin_.id, "fillLevel": bin_.fill_level, "status": bin_.status})


def list_bins() -> list[Bin]:
    return [bin_from_record(record) for record in bin_store.list_bins()]


def get_bin(bin_id: str) -> Bin:
    record = bin_store.get_bin(bin_id)
    if record is None:
        raise NotFoundError(f"Bin '{bin_id}' not found")
    return bin_from_record(record)


def create_bin(name: str, location: Optional[Coordinate], fill_level: Any = 0) -> Bin:
    if not name or not name.strip():
        raise InvalidInputError("name is required")
    level = validate_fill_level(fill_level)
    record = bin_store.create_bin(
        {
            "name": name.strip(),
            "location": location.to_record() if location else None,
            "fill_level": level,
            "status": derive_status(level),
        }
    )
    created = bin_from_record(record)
    logger.info(f"Created bin {created.id} ({created.name}) at {level}%")
    return created


def report_fill_level(bin_id: str, level: Any) -> Bin:
    """Apply a sensor reading to a bin.

    Always emits ``bin:update``. Emits ``bin:alert`` while the bin is at or above
    the full threshold; with ``bin_alert_mode='edge'`` only on the report that
    crosses it.
    """
    fill_level = validate_fill_level(level)
    current = get_bin(bin_id)

    record = bin_store.update_bin(
        bin_id,
        {
            "fill_level": fill_level,
            "status": derive_status(fill_level),
            "sensor_last_seen": _utcnow().isoformat(),
        },
    )
    if record is None:
        raise NotFoundError(f"Bin '{bin_id}' not found")
    updated = bin_from_record(record)
    logger.info(f"Bin {bin_id} reported {fill_level}% ({updated.status})")

    _emit_update(updated)
    if _should_alert(current.fill_level, fill_level):
        events.emit(events.BIN_ALERT, {"id": updated.id, "level": updated.fill_level, "status": updated.status})
    return updated


def mark_collected(bin_id: str) -> Bin:
    """Record a physical collection: empty the bin and stamp last_collected_at."""
    record = bin_store.update_bin(
        bin_id,
        {
            "fill_level": 0,
            "status": derive_status(0),
            "last_collected_at": _utcnow().isoformat(),
        },
    )
    if record is None:
        raise NotFoundError(f"Bin '{bin_id}' not found")
    collected = bin_from_record(record)
    logger.info(f"Bin {bin_id} collected")
    _emit_update(collected)
    return collected
