"""
Data integration endpoints

All resources live under /cloud/project/{serviceName}/dataIntegration.
"""

from typing import List

from ..models import (
    DestinationConnector,
    Destination,
    DestinationSpec,
    Job,
    JobPost,
    SourceConnector,
    Source,
    SourceSpec,
    Status,
    TableMeta,
    Workflow,
    WorkflowPatch,
    WorkflowSpec,
    list_of,
)
from ..signing import HttpMethod


def di_path(service_name: str, *segments: str) -> List[str]:
    """Path segments of a data integration resource."""
    return ["cloud", "project", service_name, "dataIntegration", *segments]


class DataIntegrationApi:
    """Data integration calls. Mixed into `OvhDataClient`."""

    # Connectors

    def di_source_connectors(self, service_name: str) -> List[SourceConnector]:
        """List all available source connectors."""
        return self.call(
            HttpMethod.GET, di_path(service_name, "sourceConnectors"), list_of(SourceConnector.from_dict)
        )

    def di_source_connector(self, service_name: str, connector_id: str) -> SourceConnector:
        return self.call(
            HttpMethod.GET, di_path(service_name, "sourceConnectors", connector_id), SourceConnector.from_dict
        )

    def di_destination_connectors(self, service_name: str) -> List[DestinationConnector]:
        """List all available destination connectors."""
        return self.call(
            HttpMethod.GET,
            di_path(service_name, "destinationConnectors"),
            list_of(DestinationConnector.from_dict),
        )

    def di_destination_connector(self, service_name: str, connector_id: str) -> DestinationConnector:
        return self.call(
            HttpMethod.GET,
            di_path(service_name, "destinationConnectors", connector_id),
            DestinationConnector.from_dict,
        )

    # Sources

    def di_sources(self, service_name: str) -> List[Source]:
        return self.call(HttpMethod.GET, di_path(service_name, "sources"), list_of(Source.from_dict))

    def di_source(self, service_name: str, source_id: str) -> Source:
        return self.call(HttpMethod.GET, di_path(service_name, "sources", source_id), Source.from_dict)

    def di_source_status(self, service_name: str, source_id: str) -> Status:
        """Test the connection to a source."""
        return self.call(
            HttpMethod.GET, di_path(service_name, "sources", source_id, "connection"), Status.from_dict
        )

    def di_source_metadata(self, service_name: str, source_id: str) -> List[TableMeta]:
        """Metadata extracted from a source by the last extraction."""
        return self.call(
            HttpMethod.GET,
            di_path(service_name, "sources", source_id, "metadata"),
            list_of(TableMeta.from_dict),
        )

    def di_source_metadata_post(self, service_name: str, source_id: str) -> List[TableMeta]:
        """Trigger a metadata extraction on a source."""
        return self.call(
            HttpMethod.POST,
            di_path(service_name, "sources", source_id, "metadata"),
            list_of(TableMeta.from_dict),
        )

    def di_source_post(self, service_name: str, spec: SourceSpec) -> Source:
        return self.call(HttpMethod.POST, di_path(service_name, "sources"), Source.from_dict, body=spec)

    def di_source_update(self, service_name: str, source_id: str, spec: SourceSpec) -> Source:
        return self.call(
            HttpMethod.PUT, di_path(service_name, "sources", source_id), Source.from_dict, body=spec
        )

    def di_source_delete(self, service_name: str, source_id: str) -> None:
        self.call_no_content(HttpMethod.DELETE, di_path(service_name, "sources", source_id))

    # Destinations

    def di_destinations(self, service_name: str) -> List[Destination]:
        return self.call(HttpMethod.GET, di_path(service_name, "destinations"), list_of(Destination.from_dict))

    def di_destination(self, service_name: str, destination_id: str) -> Destination:
        return self.call(
            HttpMethod.GET, di_path(service_name, "destinations", destination_id), Destination.from_dict
        )

    def di_destination_status(self, service_name: str, destination_id: str) -> Status:
        """Test the connection to a destination."""
        return self.call(
            HttpMethod.GET,
            di_path(service_name, "destinations", destination_id, "connection"),
            Status.from_dict,
        )

    def di_destination_post(self, service_name: str, spec: DestinationSpec) -> Destination:
        return self.call(
            HttpMethod.POST, di_path(service_name, "destinations"), Destination.from_dict, body=spec
        )

    def di_destination_update(self, service_name: str, destination_id: str, spec: DestinationSpec) -> Destination:
        return self.call(
            HttpMethod.PUT,
            di_path(service_name, "destinations", destination_id),
            Destination.from_dict,
            body=spec,
        )

    def di_destination_delete(self, service_name: str, destination_id: str) -> None:
        self.call_no_content(HttpMethod.DELETE, di_path(service_name, "destinations", destination_id))

    # Workflows

    def di_workflows(self, service_name: str) -> List[Workflow]:
        return self.call(HttpMethod.GET, di_path(service_name, "workflows"), list_of(Workflow.from_dict))

    def di_workflow(self, service_name: str, workflow_id: str) -> Workflow:
        return self.call(HttpMethod.GET, di_path(service_name, "workflows", workflow_id), Workflow.from_dict)

    def di_workflow_post(self, service_name: str, spec: WorkflowSpec) -> Workflow:
        return self.call(HttpMethod.POST, di_path(service_name, "workflows"), Workflow.from_dict, body=spec)

    def di_workflow_put(self, service_name: str, workflow_id: str, patch: WorkflowPatch) -> Workflow:
        return self.call(
            HttpMethod.PUT, di_path(service_name, "workflows", workflow_id), Workflow.from_dict, body=patch
        )

    def di_workflow_delete(self, service_name: str, workflow_id: str) -> None:
        self.call_no_content(HttpMethod.DELETE, di_path(service_name, "workflows", workflow_id))

    # Jobs

    def di_jobs(self, service_name: str, workflow_id: str) -> List[Job]:
        return self.call(
            HttpMethod.GET, di_path(service_name, "workflows", workflow_id, "jobs"), list_of(Job.from_dict)
        )

    def di_job(self, service_name: str, workflow_id: str, job_id: str) -> Job:
        return self.call(
            HttpMethod.GET, di_path(service_name, "workflows", workflow_id, "jobs", job_id), Job.from_dict
        )

    def di_job_post(self, service_name: str, workflow_id: str) -> Job:
        """Start a job for a workflow."""
        return self.call(
            HttpMethod.POST,
            di_path(service_name, "workflows", workflow_id, "jobs"),
            Job.from_dict,
            body=JobPost(parameters=[]),
        )

    def di_job_delete(self, service_name: str, workflow_id: str, job_id: str) -> None:
        """Stop a running job."""
        self.call_no_content(HttpMethod.DELETE, di_path(service_name, "workflows", workflow_id, "jobs", job_id))
