"""
Workflow and job records
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..utils import (
    age,
    duration,
    format_datetime,
    parse_datetime,
    parse_optional_datetime,
    require_bool,
    require_object,
    require_str,
    str_list,
)
from .common import ErrorDetails, Parameter, parameters_from


@dataclass
class Workflow:
    """
    A scheduled copy from a source to a destination

    Attributes:
        id: Workflow id
        name: Workflow name
        region: Region the jobs run in
        enabled: Whether the schedule is active
        description: Optional description
        source_id / source_name: Source the data is read from
        destination_id / destination_name: Destination the data is written to
        parameters: Extra workflow parameters
        last_execution_date: Start of the last job, if any
        schedule: Cron expression, None for manual runs only
        status: Last known status
        error_details: Error of the last job, if any
    """
    id: str
    name: str
    region: str
    enabled: bool
    description: Optional[str] = None
    source_id: Optional[str] = None
    source_name: Optional[str] = None
    destination_id: Optional[str] = None
    destination_name: Optional[str] = None
    parameters: List[Parameter] = field(default_factory=list)
    last_execution_date: Optional[datetime] = None
    schedule: Optional[str] = None
    status: Optional[str] = None
    error_details: Optional[ErrorDetails] = None

    TABLE_HEADERS = (
        'NAME', 'ENABLED', 'ID', 'SOURCE_NAME', 'DESTINATION_NAME', 'SCHEDULE', 'LAST_EXECUTION', 'STATUS'
    )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Workflow':
        data = require_object(data)
        error_details = data.get('errorDetails')
        return cls(
            id=require_str(data, 'id'),
            name=require_str(data, 'name'),
            region=require_str(data, 'region'),
            enabled=require_bool(data, 'enabled'),
            description=data.get('description'),
            source_id=data.get('sourceId'),
            source_name=data.get('sourceName'),
            destination_id=data.get('destinationId'),
            destination_name=data.get('destinationName'),
            parameters=parameters_from(data),
            last_execution_date=parse_optional_datetime(data.get('lastExecutionDate')),
            schedule=data.get('schedule'),
            status=data.get('status'),
            error_details=ErrorDetails.from_dict(error_details) if error_details is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'region': self.region,
            'sourceId': self.source_id,
            'sourceName': self.source_name,
            'destinationId': self.destination_id,
            'destinationName': self.destination_name,
            'parameters': [p.to_dict() for p in self.parameters],
            'lastExecutionDate': format_datetime(self.last_execution_date),
            'schedule': self.schedule,
            'enabled': self.enabled,
            'status': self.status,
            'errorDetails': self.error_details.to_dict() if self.error_details else None,
        }

    def table_row(self) -> List[str]:
        return [
            self.name,
            str(self.enabled).lower(),
            self.id,
            self.source_name or "",
            self.destination_name or "",
            self.schedule or "",
            age(self.last_execution_date),
            self.status or "",
        ]


@dataclass
class WorkflowSpec:
    """Body used to create a workflow"""
    name: str
    region: str
    source_id: str
    destination_id: str
    enabled: bool = True
    description: Optional[str] = None
    schedule: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WorkflowSpec':
        data = require_object(data)
        return cls(
            name=require_str(data, 'name'),
            region=require_str(data, 'region'),
            source_id=require_str(data, 'sourceId'),
            destination_id=require_str(data, 'destinationId'),
            enabled=require_bool(data, 'enabled'),
            description=data.get('description'),
            schedule=data.get('schedule'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'region': self.region,
            'description': self.description,
            'sourceId': self.source_id,
            'destinationId': self.destination_id,
            'schedule': self.schedule,
            'enabled': self.enabled,
        }


@dataclass
class WorkflowPatch:
    """Partial workflow update, None fields are left unchanged"""
    name: Optional[str] = None
    description: Optional[str] = None
    schedule: Optional[str] = None
    enabled: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'WorkflowPatch':
        data = require_object(data)
        return cls(
            name=data.get('name'),
            description=data.get('description'),
            schedule=data.get('schedule'),
            enabled=data.get('enabled'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'description': self.description,
            'schedule': self.schedule,
            'enabled': self.enabled,
        }


@dataclass
class JobPost:
    """Body used to start a job"""
    parameters: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'JobPost':
        data = require_object(data)
        return cls(parameters=str_list(data['parameters']))

    def to_dict(self) -> Dict[str, Any]:
        return {'parameters': list(self.parameters)}


@dataclass
class Job:
    """One execution of a workflow"""
    id: str
    status: str
    created_at: datetime
    started_at: Optional[datetime] = None
    ended_at: Optional[datetime] = None

    TABLE_HEADERS = ('ID', 'STATUS', 'AGE', 'DURATION')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Job':
        data = require_object(data)
        return cls(
            id=require_str(data, 'id'),
            status=require_str(data, 'status'),
            created_at=parse_datetime(data['createdAt']),
            started_at=parse_optional_datetime(data.get('startedAt')),
            ended_at=parse_optional_datetime(data.get('endedAt')),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'status': self.status,
            'createdAt': format_datetime(self.created_at),
            'startedAt': format_datetime(self.started_at),
            'endedAt': format_datetime(self.ended_at),
        }

    def table_row(self) -> List[str]:
        return [self.id, self.status, age(self.created_at), duration(self.started_at, self.ended_at)]
