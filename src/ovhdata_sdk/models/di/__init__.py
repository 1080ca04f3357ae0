"""
Data integration records: connectors, sources, destinations, workflows, jobs
"""

from .common import Parameter, Status, ErrorDetails
from .connector import (
    ConnectorParameter,
    ConnectorValidator,
    Connector,
    SourceConnector,
    DestinationConnector,
)
from .endpoint import (
    Endpoint,
    Source,
    Destination,
    EndpointSpec,
    SourceSpec,
    DestinationSpec,
    TableMeta,
    Metadata,
)
from .workflow import Workflow, WorkflowSpec, WorkflowPatch, JobPost, Job

__all__ = [
    'Parameter',
    'Status',
    'ErrorDetails',
    'ConnectorParameter',
    'ConnectorValidator',
    'Connector',
    'SourceConnector',
    'DestinationConnector',
    'Endpoint',
    'Source',
    'Destination',
    'EndpointSpec',
    'SourceSpec',
    'DestinationSpec',
    'TableMeta',
    'Metadata',
    'Workflow',
    'WorkflowSpec',
    'WorkflowPatch',
    'JobPost',
    'Job',
]
