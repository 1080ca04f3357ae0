"""
Domain records exchanged with the OVH API

Each record converts from and to the JSON value the API uses with
`from_dict` / `to_dict`.
"""

from .auth import Me, AccessRule, CredentialDetails
from .project import Project
from .utils import (
    ResponseError,
    list_of,
    str_list,
    parse_datetime,
    format_datetime,
)
from .di import (
    Parameter,
    Status,
    ErrorDetails,
    ConnectorParameter,
    ConnectorValidator,
    SourceConnector,
    DestinationConnector,
    Source,
    Destination,
    SourceSpec,
    DestinationSpec,
    TableMeta,
    Metadata,
    Workflow,
    WorkflowSpec,
    WorkflowPatch,
    JobPost,
    Job,
)

# Public API exports
__all__ = [
    # Account
    'Me',
    'AccessRule',
    'CredentialDetails',
    'Project',
    # Helpers
    'ResponseError',
    'list_of',
    'str_list',
    'parse_datetime',
    'format_datetime',
    # Data integration
    'Parameter',
    'Status',
    'ErrorDetails',
    'ConnectorParameter',
    'ConnectorValidator',
    'SourceConnector',
    'DestinationConnector',
    'Source',
    'Destination',
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
