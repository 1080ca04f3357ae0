"""
Helpers shared by the domain records

Date parsing and formatting, human readable durations and the decoders
used for collections and error bodies.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, TypeVar

T = TypeVar('T')

# Fractional seconds with any precision, normalized to microseconds
_FRACTION_PATTERN = re.compile(r'\.(\d+)')


def parse_datetime(value: Any) -> datetime:
    """
    Parse an ISO-8601 date as sent by the API.

    Accepts a trailing "Z" or an offset and any fractional precision.
    Dates without offset are taken as UTC.

    Raises:
        ValueError: If the value is not a valid date
        TypeError: If the value is not a string
    """
    if not isinstance(value, str):
        raise TypeError(f"expected a date string, got {type(value).__name__}")

    text = value.strip()
    if text.endswith('Z') or text.endswith('z'):
        text = text[:-1] + '+00:00'

    text = _FRACTION_PATTERN.sub(lambda m: '.' + m.group(1)[:6].ljust(6, '0'), text, count=1)

    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_optional_datetime(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    return parse_datetime(value)


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    """Format a date back to the wire format (RFC 3339, UTC, "Z" suffix)."""
    if value is None:
        return None
    text = value.astimezone(timezone.utc).isoformat()
    return text.replace('+00:00', 'Z')


def human_duration(seconds: float) -> str:
    """
    Compact duration: seconds under 2 minutes, then minutes, hours, days.

    >>> human_duration(90)
    '90s'
    >>> human_duration(3 * 86400)
    '3d'
    """
    seconds = max(int(seconds), 0)
    if seconds < 2 * 60:
        return f"{seconds}s"
    if seconds < 2 * 3600:
        return f"{seconds // 60}m"
    if seconds < 2 * 24 * 3600:
        return f"{seconds // 3600}h"
    return f"{seconds // (24 * 3600)}d"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def age(value: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Time elapsed since the given date; a missing date counts as now."""
    now = now or _now()
    return human_duration((now - (value or now)).total_seconds())


def duration(started_at: Optional[datetime], ended_at: Optional[datetime],
             now: Optional[datetime] = None) -> str:
    """Run time between start and end, up to now while still running."""
    if started_at is None:
        return ""
    end = ended_at or now or _now()
    return human_duration((end - started_at).total_seconds())


def list_of(decoder: Callable[[Any], T]) -> Callable[[Any], List[T]]:
    """
    Build a decoder for a JSON array whose items use `decoder`.

    Raises:
        TypeError: If the value is not an array
    """
    def decode(value: Any) -> List[T]:
        if not isinstance(value, list):
            raise TypeError(f"expected a JSON array, got {type(value).__name__}")
        return [decoder(item) for item in value]
    return decode


def str_list(value: Any) -> List[str]:
    """Decode a JSON array of strings."""
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise TypeError("expected a JSON array of strings")
    return list(value)


def require_str(data: Dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"field '{key}' must be a string")
    return value


def require_bool(data: Dict[str, Any], key: str) -> bool:
    value = data[key]
    if not isinstance(value, bool):
        raise TypeError(f"field '{key}' must be a boolean")
    return value


def require_int(data: Dict[str, Any], key: str) -> int:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"field '{key}' must be an integer")
    return value


def require_object(value: Any) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise TypeError(f"expected a JSON object, got {type(value).__name__}")
    return value


@dataclass
class ResponseError:
    """Error body returned by the API"""
    message: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ResponseError':
        data = require_object(data)
        return cls(message=require_str(data, 'message'))

    def to_dict(self) -> Dict[str, Any]:
        return {'message': self.message}
