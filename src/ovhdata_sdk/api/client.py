"""
Client combining every OVH API call the SDK knows about
"""

from typing import Optional

import requests

from ..http_client import OvhApiV6Client
from .auth import AuthApi
from .data_integration import DataIntegrationApi
from .project import ProjectApi


class OvhDataClient(AuthApi, ProjectApi, DataIntegrationApi, OvhApiV6Client):
    """
    OVH API v6 client with the account, project and data integration calls.

    Example:
        >>> client = OvhDataClient("https://eu.api.ovh.com/1.0", app_key, app_secret, consumer_key)
        >>> for workflow in client.di_workflows(service_name):
        ...     print(workflow.name)
    """


def create_client(
    endpoint_url: str,
    application_key: str,
    application_secret: str,
    consumer_key: str,
    timeout: Optional[float] = None,
    session: Optional[requests.Session] = None,
) -> OvhDataClient:
    """
    Create an OvhDataClient.

    Args:
        endpoint_url: Base URL of the API
        application_key: OVH application key
        application_secret: OVH application secret
        consumer_key: OVH consumer key
        timeout: Optional request timeout in seconds
        session: Optional requests session

    Returns:
        OvhDataClient: Configured client
    """
    return OvhDataClient(
        endpoint_url,
        application_key,
        application_secret,
        consumer_key,
        session=session,
        timeout=timeout,
    )
