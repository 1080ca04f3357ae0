"""
Records shared by the data integration resources
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..utils import (
    format_datetime,
    parse_optional_datetime,
    require_object,
    require_str,
)


@dataclass
class Parameter:
    """Name/value pair configuring a source, destination or workflow"""
    name: str
    value: str

    TABLE_HEADERS = ('NAME', 'VALUE')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Parameter':
        data = require_object(data)
        return cls(name=require_str(data, 'name'), value=require_str(data, 'value'))

    @classmethod
    def parse(cls, text: str) -> 'Parameter':
        """
        Parse a "name=value" command-line parameter.

        Raises:
            ValueError: If there is no "=" or the name is empty
        """
        name, sep, value = text.partition('=')
        if not sep or not name.strip():
            raise ValueError(f"Invalid parameter '{text}', expected name=value")
        return cls(name=name.strip(), value=value)

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'value': self.value}

    def table_row(self) -> List[str]:
        return [self.name, self.value]


@dataclass
class Status:
    """Connection status of a source or destination"""
    status: str
    date: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Status':
        data = require_object(data)
        return cls(status=require_str(data, 'status'), date=parse_optional_datetime(data.get('date')))

    def to_dict(self) -> Dict[str, Any]:
        return {'status': self.status, 'date': format_datetime(self.date)}


@dataclass
class ErrorDetails:
    code: str
    description: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ErrorDetails':
        data = require_object(data)
        return cls(code=require_str(data, 'code'), description=require_str(data, 'description'))

    def to_dict(self) -> Dict[str, Any]:
        return {'code': self.code, 'description': self.description}


def parameters_from(data: Dict[str, Any], key: str = 'parameters') -> List[Parameter]:
    """Decode an optional list of parameters."""
    return [Parameter.from_dict(item) for item in data.get(key) or []]
