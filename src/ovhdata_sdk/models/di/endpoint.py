"""
Source, destination and source metadata records
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..utils import (
    age,
    format_datetime,
    parse_datetime,
    parse_optional_datetime,
    require_int,
    require_object,
    require_str,
)
from .common import Parameter, parameters_from


@dataclass
class Endpoint:
    """A configured source or destination"""
    id: str
    name: str
    status: str
    creation_date: datetime
    connector_id: str
    last_update_date: Optional[datetime] = None
    parameters: List[Parameter] = field(default_factory=list)

    TABLE_HEADERS = ('NAME', 'ID', 'CONNECTOR_ID', 'STATUS', 'AGE', 'LAST_UPDATE')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        data = require_object(data)
        return cls(
            id=require_str(data, 'id'),
            name=require_str(data, 'name'),
            status=require_str(data, 'status'),
            creation_date=parse_datetime(data['creationDate']),
            connector_id=require_str(data, 'connectorId'),
            last_update_date=parse_optional_datetime(data.get('lastUpdateDate')),
            parameters=parameters_from(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'id': self.id,
            'name': self.name,
            'status': self.status,
            'creationDate': format_datetime(self.creation_date),
            'lastUpdateDate': format_datetime(self.last_update_date),
            'connectorId': self.connector_id,
        }
        if self.parameters:
            result['parameters'] = [p.to_dict() for p in self.parameters]
        return result

    def table_row(self) -> List[str]:
        return [
            self.name,
            self.id,
            self.connector_id,
            self.status,
            age(self.creation_date),
            age(self.last_update_date),
        ]


class Source(Endpoint):
    """Where a workflow reads data from"""


class Destination(Endpoint):
    """Where a workflow writes data to"""


@dataclass
class EndpointSpec:
    """
    Body used to create or update a source or destination

    The connector can only be chosen at creation; it is left out of the
    body when None.
    """
    name: str
    connector_id: Optional[str] = None
    parameters: List[Parameter] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        data = require_object(data)
        return cls(
            name=require_str(data, 'name'),
            connector_id=data.get('connectorId'),
            parameters=parameters_from(data),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {'name': self.name}
        if self.connector_id is not None:
            result['connectorId'] = self.connector_id
        if self.parameters:
            result['parameters'] = [p.to_dict() for p in self.parameters]
        return result


class SourceSpec(EndpointSpec):
    pass


class DestinationSpec(EndpointSpec):
    pass


@dataclass
class Metadata:
    """Column statistics extracted from a source table"""
    name: str
    type_name: str
    cardinality: int
    min: int
    max: int

    TABLE_HEADERS = ('NAME', 'TYPE', 'CARDINALITY', 'MIN', 'MAX')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Metadata':
        data = require_object(data)
        return cls(
            name=require_str(data, 'name'),
            type_name=require_str(data, 'type'),
            cardinality=require_int(data, 'cardinality'),
            min=require_int(data, 'min'),
            max=require_int(data, 'max'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'type': self.type_name,
            'cardinality': self.cardinality,
            'min': self.min,
            'max': self.max,
        }

    def table_row(self) -> List[str]:
        return [self.name, self.type_name, str(self.cardinality), str(self.min), str(self.max)]


@dataclass
class TableMeta:
    """Metadata extraction result for one source table"""
    table_name: str
    status: str
    error: Optional[str] = None
    error_code: Optional[str] = None
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None
    metadata: List[Metadata] = field(default_factory=list)

    TABLE_HEADERS = ('TABLE_NAME', 'STATUS', 'ERROR_CODE', 'COLUMNS')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TableMeta':
        data = require_object(data)
        return cls(
            table_name=require_str(data, 'tableName'),
            status=require_str(data, 'status'),
            error=data.get('error'),
            error_code=data.get('errorCode'),
            started_at=parse_optional_datetime(data.get('startedAt')),
            ended_at=parse_optional_datetime(data.get('endedAt')),
            metadata=[Metadata.from_dict(m) for m in data.get('metadata') or []],
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'tableName': self.table_name,
            'status': self.status,
            'error': self.error,
            'errorCode': self.error_code,
            'startedAt': format_datetime(self.started_at),
            'endedAt': format_datetime(self.ended_at),
        }
        if self.metadata:
            result['metadata'] = [m.to_dict() for m in self.metadata]
        return result

    def table_row(self) -> List[str]:
        return [self.table_name, self.status, self.error_code or "", str(len(self.metadata))]
