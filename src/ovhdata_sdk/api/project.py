"""
Public cloud project endpoints
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from ..models import Project, str_list
from ..signing import HttpMethod

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


class ProjectApi:
    """Calls about cloud projects. Mixed into `OvhDataClient`."""

    def project_list(self) -> List[str]:
        """Service names of the projects the account can access."""
        return self.call(HttpMethod.GET, ["cloud", "project"], str_list)

    def project(self, service_name: str) -> Project:
        return self.call(HttpMethod.GET, ["cloud", "project", service_name], Project.from_dict)

    def projects(self, max_workers: Optional[int] = None) -> List[Project]:
        """
        Fetch every project.

        Lists the service names then fetches each project concurrently.
        Results keep the order of the list. The first failure is raised.

        The workers share this client's `requests.Session`, which requests
        does not document as thread-safe. Each call prepares its own request
        and signature, so what is shared is the adapter's urllib3 connection
        pool (thread-safe) and the session cookie jar, which the API never
        fills. A session passed in by the caller must not carry per-request
        state such as auth hooks.

        Args:
            max_workers: Thread pool size, defaults to DEFAULT_MAX_WORKERS
        """
        service_names = self.project_list()
        if not service_names:
            return []

        workers = min(max_workers or DEFAULT_MAX_WORKERS, len(service_names))
        logger.debug(f"Fetching {len(service_names)} projects with {workers} workers")

        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(self.project, service_names))
