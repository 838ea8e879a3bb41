from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional, Union

from ..common.validators import require_mapping
from ..core.enums import IntervalStatus

Timestamp = Union[str, datetime, None]


@dataclass(frozen=True)
class TimeEntry:
    """One attendance session (check-in with an optional check-out)."""

    check_in_time: Timestamp
    check_out_time: Timestamp = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "TimeEntry":
        data = require_mapping(data, "time_entries[]")
        return cls(
            check_in_time=data.get("check_in_time"),
            check_out_time=data.get("check_out_time"),
        )

    @property
    def is_open(self) -> bool:
        return not self.check_out_time


@dataclass(frozen=True)
class ParsedInterval:
    """Boundary read-model of a TimeEntry: VALID(hours), OPEN or INVALID."""

    status: IntervalStatus
    hours: float = 0.0
    date: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.status == IntervalStatus.VALID
