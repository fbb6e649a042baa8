"""Progress record model.

A ProgressRecord is the sync payload for one (user, document) pair. It is
stored as a flat Redis hash, so every field is serialized to a string on
write and parsed back on read. A missing hash parses into the zero record
(see ProgressRecord.empty) rather than an error.
"""

from __future__ import annotations

import time
from dataclasses import asdict, dataclass
from typing import Any, Mapping

from kosync.core.errors import InvalidFieldError
from kosync.utils.validators import is_valid_field, is_valid_key_field

# Hash field names, in storage order
RECORD_FIELDS = ("document", "progress", "percentage", "device", "device_id", "timestamp")

MIN_PERCENTAGE = 0.0
MAX_PERCENTAGE = 100.0


@dataclass
class ProgressRecord:
    """Reading position of one document as last reported by a device."""

    document: str = ""
    progress: str = ""
    percentage: float = 0.0
    device: str = ""
    device_id: str = ""
    timestamp: int = 0

    @classmethod
    def empty(cls) -> ProgressRecord:
        """Zero-valued record returned for documents never synced."""
        return cls()

    @classmethod
    def from_mapping(cls, data: Mapping[str, str]) -> ProgressRecord:
        """Parse a stored hash into a record.

        Absent fields take their zero value; unparsable numbers fall back to
        zero as well, so an empty mapping yields ProgressRecord.empty().
        """
        if not data:
            return cls.empty()
        return cls(
            document=data.get("document", ""),
            progress=data.get("progress", ""),
            percentage=_parse_float(data.get("percentage")),
            device=data.get("device", ""),
            device_id=data.get("device_id", ""),
            timestamp=_parse_timestamp(data.get("timestamp")),
        )

    def to_mapping(self) -> dict[str, str]:
        """Serialize to the string-valued hash written to the store."""
        return {
            "document": self.document,
            "progress": self.progress,
            "percentage": repr(float(self.percentage)),
            "device": self.device,
            "device_id": self.device_id,
            "timestamp": str(self.timestamp),
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return asdict(self)

    def validate(self) -> None:
        """Check the record is acceptable for a write.

        Fields are checked in order: document, percentage, progress, device.

        Raises:
            InvalidFieldError: Naming the first offending field
        """
        if not is_valid_key_field(self.document):
            raise InvalidFieldError("document")
        # also rejects NaN
        if not MIN_PERCENTAGE <= self.percentage <= MAX_PERCENTAGE:
            raise InvalidFieldError("percentage")
        if not is_valid_field(self.progress):
            raise InvalidFieldError("progress")
        if not is_valid_field(self.device):
            raise InvalidFieldError("device")

    def stamped(self, now: int | None = None) -> ProgressRecord:
        """Return a copy carrying the server time, discarding any client value."""
        if now is None:
            now = int(time.time())
        return ProgressRecord(
            document=self.document,
            progress=self.progress,
            percentage=self.percentage,
            device=self.device,
            device_id=self.device_id,
            timestamp=now,
        )


def _parse_float(value: str | None) -> float:
    try:
        return float(value) if value is not None else 0.0
    except ValueError:
        return 0.0


def _parse_timestamp(value: str | None) -> int:
    try:
        parsed = int(value) if value is not None else 0
    except ValueError:
        return 0
    return parsed if parsed >= 0 else 0
