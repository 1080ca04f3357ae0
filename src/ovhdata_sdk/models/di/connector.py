"""
Source and destination connector records

A connector describes a kind of source or destination (database, object
storage...) and the parameters an instance of it needs.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..utils import require_bool, require_int, require_object, require_str

# Value the API uses for a parameter without default
NO_DEFAULT = "none"


def _default_to_str(value: Any) -> Optional[str]:
    if value is None or value == "" or value == NO_DEFAULT:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)):
        return json.dumps(value)
    raise TypeError(f"unsupported default value type {type(value).__name__}")


@dataclass
class ConnectorValidator:
    """Constraints on a connector parameter value"""
    min: int
    max: int
    regex: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConnectorValidator':
        data = require_object(data)
        return cls(min=require_int(data, 'min'), max=require_int(data, 'max'), regex=data.get('regex'))

    def to_dict(self) -> Dict[str, Any]:
        return {'min': self.min, 'max': self.max, 'regex': self.regex}


@dataclass
class ConnectorParameter:
    """
    Parameter a connector accepts

    Attributes:
        name: Parameter name
        type_name: Value type ("type" on the wire)
        mandatory: Whether the parameter must be set
        description: Human readable description
        default: Default value as a string, None when there is none
        validator: Optional value constraints
    """
    name: str
    type_name: str
    mandatory: bool
    description: str
    default: Optional[str] = None
    validator: Optional[ConnectorValidator] = None

    TABLE_HEADERS = ('NAME', 'TYPE', 'MANDATORY', 'DEFAULT', 'DESCRIPTION')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ConnectorParameter':
        data = require_object(data)
        validator = data.get('validator')
        return cls(
            name=require_str(data, 'name'),
            type_name=require_str(data, 'type'),
            mandatory=require_bool(data, 'mandatory'),
            description=require_str(data, 'description'),
            default=_default_to_str(data.get('default')),
            validator=ConnectorValidator.from_dict(validator) if validator is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'default': self.default if self.default is not None else NO_DEFAULT,
            'mandatory': self.mandatory,
            'type': self.type_name,
            'validator': self.validator.to_dict() if self.validator else None,
            'description': self.description,
        }

    def table_row(self) -> List[str]:
        return [
            self.name,
            self.type_name,
            str(self.mandatory).lower(),
            self.default if self.default is not None else "~",
            self.description,
        ]


@dataclass
class Connector:
    """Fields common to source and destination connectors"""
    id: str
    name: str
    version: str
    description: str
    documentation_url: Optional[str] = None
    parameters: List[ConnectorParameter] = field(default_factory=list)

    TABLE_HEADERS = ('NAME', 'ID', 'VERSION')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        data = require_object(data)
        return cls(
            id=require_str(data, 'id'),
            name=require_str(data, 'name'),
            version=require_str(data, 'version'),
            description=require_str(data, 'description'),
            documentation_url=data.get('documentationUrl'),
            parameters=[ConnectorParameter.from_dict(p) for p in data.get('parameters') or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'id': self.id,
            'name': self.name,
            'version': self.version,
            'description': self.description,
            'documentationUrl': self.documentation_url,
        }
        if self.parameters:
            result['parameters'] = [p.to_dict() for p in self.parameters]
        return result

    def table_row(self) -> List[str]:
        return [self.name, self.id, self.version]


class SourceConnector(Connector):
    """Connector usable as a workflow source"""


class DestinationConnector(Connector):
    """Connector usable as a workflow destination"""
