"""
OVH API calls grouped by domain
"""

from .auth import AuthApi
from .project import ProjectApi
from .data_integration import DataIntegrationApi, di_path
from .client import OvhDataClient, create_client

__all__ = [
    'AuthApi',
    'ProjectApi',
    'DataIntegrationApi',
    'di_path',
    'OvhDataClient',
    'create_client',
]
