"""
Rendering of command results

Records are printed as json, yaml, a "Field: value" description or an
aligned table. Lists default to a table, single records to a description.
"""

import json
import re
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence

import yaml

from .models.utils import format_datetime


class OutputFormat(str, Enum):
    JSON = "json"
    YAML = "yaml"
    DESCRIPTION = "description"
    TABLE = "table"


_CAMEL_BOUNDARY = re.compile(r'(?<=[a-z0-9])(?=[A-Z])')


def to_plain(value: Any) -> Any:
    """Convert records, dates and containers to JSON-compatible values."""
    if hasattr(value, 'to_dict'):
        return to_plain(value.to_dict())
    if isinstance(value, datetime):
        return format_datetime(value)
    if isinstance(value, dict):
        return {key: to_plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(item) for item in value]
    return value


def field_label(key: str) -> str:
    """'sourceName' or 'source_name' -> 'Source Name'."""
    words = _CAMEL_BOUNDARY.sub(' ', key).replace('_', ' ').split()
    return ' '.join(word[:1].upper() + word[1:] for word in words)


def _scalar(value: Any) -> str:
    if value is None:
        return "~"
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def describe(value: Any) -> str:
    """Render one record as aligned "Field: value" lines."""
    data = to_plain(value)
    if not isinstance(data, dict):
        return _scalar(data)
    if not data:
        return ""

    labels = {key: field_label(key) + ":" for key in data}
    width = max(len(label) for label in labels.values())

    lines = []
    for key, item in data.items():
        label = labels[key]
        if isinstance(item, (dict, list)) and item:
            lines.append(label)
            nested = yaml.safe_dump(item, sort_keys=False, allow_unicode=True, default_flow_style=False)
            lines.extend(nested.rstrip('\n').split('\n'))
        elif isinstance(item, (dict, list)):
            lines.append(f"{label:<{width}} ~")
        else:
            lines.append(f"{label:<{width}} {_scalar(item)}")
    return '\n'.join(lines)


def table(rows: Sequence[Sequence[str]], headers: Sequence[str]) -> str:
    """Render rows as space separated, left aligned columns."""
    widths = [len(header) for header in headers]
    for row in rows:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell))

    def line(cells: Iterable[str]) -> str:
        return ' '.join(f"{cell:<{widths[index]}}" for index, cell in enumerate(cells)).rstrip()

    return '\n'.join([line(headers)] + [line(row) for row in rows])


def records_table(records: Sequence[Any]) -> str:
    if not records:
        return "No items found"

    first = records[0]
    if hasattr(first, 'TABLE_HEADERS') and hasattr(first, 'table_row'):
        return table([record.table_row() for record in records], first.TABLE_HEADERS)

    return '\n\n'.join(describe(record) if hasattr(record, 'to_dict') else _scalar(record) for record in records)


def sort_records(records: List[Any], field: Optional[str], desc: bool = False) -> List[Any]:
    """
    Sort records on one of their attributes. Missing values come first.

    Raises:
        ValueError: If the records have no such attribute
    """
    if not field or not records:
        return list(reversed(records)) if desc else list(records)

    attribute = field.replace('-', '_')
    if not hasattr(records[0], attribute):
        raise ValueError(f"Unknown sort field '{field}'")

    def key(record):
        value = getattr(record, attribute)
        return (value is not None, value if value is not None else 0)

    return sorted(records, key=key, reverse=desc)


def render(value: Any, output: Optional[str] = None) -> str:
    """
    Render a command result.

    Args:
        value: Record, list of records or plain value
        output: An OutputFormat value; defaults to table for lists and
            description otherwise

    Raises:
        ValueError: On an unknown format
    """
    is_list = isinstance(value, (list, tuple))
    fmt = OutputFormat(output) if output else (OutputFormat.TABLE if is_list else OutputFormat.DESCRIPTION)

    if fmt == OutputFormat.JSON:
        return json.dumps(to_plain(value), indent=2, ensure_ascii=False)
    if fmt == OutputFormat.YAML:
        return yaml.safe_dump(to_plain(value), sort_keys=False, allow_unicode=True).rstrip('\n')
    if fmt == OutputFormat.TABLE:
        return records_table(value if is_list else [value])
    if is_list:
        return '\n\n'.join(describe(item) for item in value)
    return describe(value)
