"""
Test suite for the domain records
"""

from datetime import datetime, timedelta, timezone

import pytest

from ovhdata_sdk.models import (
    CredentialDetails,
    DestinationConnector,
    Job,
    JobPost,
    Me,
    Metadata,
    Parameter,
    Project,
    ResponseError,
    Source,
    SourceConnector,
    SourceSpec,
    Status,
    TableMeta,
    Workflow,
    WorkflowPatch,
    WorkflowSpec,
    format_datetime,
    list_of,
    parse_datetime,
    str_list,
)
from ovhdata_sdk.models.utils import age, duration, human_duration

NOW = datetime(2023, 7, 22, 12, 0, 0, tzinfo=timezone.utc)

CONNECTOR_BODY = {
    "id": "postgres",
    "name": "PostgreSQL",
    "version": "1.2.0",
    "description": "PostgreSQL database",
    "documentationUrl": "https://docs.example/postgres",
    "parameters": [
        {
            "name": "port",
            "type": "integer",
            "mandatory": True,
            "description": "Server port",
            "default": 5432,
            "validator": {"min": 1, "max": 65535, "regex": None},
        },
        {
            "name": "host",
            "type": "string",
            "mandatory": True,
            "description": "Server host",
            "default": "none",
            "validator": None,
        },
    ],
}

WORKFLOW_BODY = {
    "id": "wf-1",
    "name": "nightly",
    "description": "Nightly copy",
    "region": "GRA",
    "sourceId": "src-1",
    "sourceName": "pg",
    "destinationId": "dst-1",
    "destinationName": "s3",
    "parameters": [],
    "lastExecutionDate": "2023-07-21T12:00:00Z",
    "schedule": "0 0 * * *",
    "enabled": True,
    "status": "RUNNING",
    "errorDetails": None,
}


class TestDates:
    def test_nanosecond_precision(self):
        parsed = parse_datetime("2023-07-22T04:26:40.123456789Z")
        assert parsed == datetime(2023, 7, 22, 4, 26, 40, 123456, tzinfo=timezone.utc)

    def test_offset_converted_to_utc(self):
        parsed = parse_datetime("2023-07-22T06:26:40+02:00")
        assert parsed == datetime(2023, 7, 22, 4, 26, 40, tzinfo=timezone.utc)

    def test_short_fraction(self):
        assert parse_datetime("2023-07-22T04:26:40.5Z").microsecond == 500000

    def test_naive_date_is_utc(self):
        assert parse_datetime("2023-07-22T04:26:40").tzinfo == timezone.utc

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_datetime("yesterday")
        with pytest.raises(TypeError):
            parse_datetime(12)

    def test_format(self):
        assert format_datetime(datetime(2023, 7, 22, 4, 26, 40, tzinfo=timezone.utc)) == "2023-07-22T04:26:40Z"
        assert format_datetime(None) is None


class TestDurations:
    @pytest.mark.parametrize("seconds,expected", [
        (0, "0s"),
        (119, "119s"),
        (120, "2m"),
        (7199, "119m"),
        (7200, "2h"),
        (2 * 86400, "2d"),
        (-5, "0s"),
    ])
    def test_human_duration(self, seconds, expected):
        assert human_duration(seconds) == expected

    def test_age(self):
        assert age(NOW - timedelta(hours=3), now=NOW) == "3h"
        assert age(None, now=NOW) == "0s"

    def test_duration(self):
        start = NOW - timedelta(minutes=10)
        assert duration(start, NOW) == "10m"
        assert duration(start, None, now=NOW) == "10m"
        assert duration(None, NOW) == ""


class TestCollections:
    def test_list_of(self):
        decode = list_of(Parameter.from_dict)
        assert decode([{"name": "a", "value": "1"}]) == [Parameter("a", "1")]
        assert decode([]) == []

    def test_list_of_rejects_object(self):
        with pytest.raises(TypeError):
            list_of(Parameter.from_dict)({"name": "a", "value": "1"})

    def test_str_list(self):
        assert str_list(["a", "b"]) == ["a", "b"]
        with pytest.raises(TypeError):
            str_list(["a", 1])


class TestParameter:
    def test_parse(self):
        assert Parameter.parse("host=db.example") == Parameter("host", "db.example")

    def test_parse_keeps_equals_in_value(self):
        assert Parameter.parse("query=a=b") == Parameter("query", "a=b")

    def test_parse_empty_value(self):
        assert Parameter.parse("password=") == Parameter("password", "")

    @pytest.mark.parametrize("text", ["host", "=value", ""])
    def test_parse_invalid(self, text):
        with pytest.raises(ValueError):
            Parameter.parse(text)


class TestAccountRecords:
    def test_me(self):
        me = Me.from_dict({"user": "xx1234-ovh", "description": None, "roles": ["admin"]})
        assert me.user == "xx1234-ovh"
        assert me.to_dict() == {"user": "xx1234-ovh", "description": None, "roles": ["admin"]}

    def test_credential_details(self):
        body = {
            "applicationId": 42,
            "credentialId": 7,
            "creation": "2023-07-22T04:26:40+02:00",
            "status": "validated",
            "ovhSupport": False,
            "expiration": None,
            "lastUse": None,
            "rules": [{"method": "GET", "path": "/*"}],
        }
        details = CredentialDetails.from_dict(body)
        assert details.application_id == 42
        assert details.allowed_ips == []
        assert details.rules[0].path == "/*"

        result = details.to_dict()
        assert "allowedIps" not in result
        assert result["rules"] == [{"method": "GET", "path": "/*"}]

    def test_credential_id_must_be_integer(self):
        with pytest.raises(TypeError):
            CredentialDetails.from_dict({
                "applicationId": "42",
                "credentialId": 7,
                "creation": "x",
                "status": "validated",
                "ovhSupport": False,
            })

    def test_project_uses_snake_case(self):
        project = Project.from_dict({"project_id": "abc", "description": "my project"})
        assert project.to_dict() == {"project_id": "abc", "description": "my project"}
        assert project.table_row() == ["abc", "my project"]

    def test_response_error(self):
        assert ResponseError.from_dict({"message": "boom"}).message == "boom"


class TestConnectors:
    def test_default_values(self):
        connector = SourceConnector.from_dict(CONNECTOR_BODY)
        port, host = connector.parameters

        assert isinstance(connector, SourceConnector)
        assert port.default == "5432"
        assert port.validator.max == 65535
        assert host.default is None
        assert host.validator is None

    def test_missing_default_written_as_none(self):
        connector = DestinationConnector.from_dict(CONNECTOR_BODY)
        assert connector.to_dict()["parameters"][1]["default"] == "none"

    def test_boolean_default(self):
        body = dict(CONNECTOR_BODY["parameters"][1], default=False)
        connector = SourceConnector.from_dict(dict(CONNECTOR_BODY, parameters=[body]))
        assert connector.parameters[0].default == "false"

    def test_table_rows(self):
        connector = SourceConnector.from_dict(CONNECTOR_BODY)
        assert connector.table_row() == ["PostgreSQL", "postgres", "1.2.0"]
        assert connector.parameters[1].table_row() == ["host", "string", "true", "~", "Server host"]


class TestEndpoints:
    def test_source_round_trip(self):
        body = {
            "id": "src-1",
            "name": "pg",
            "status": "READY",
            "creationDate": "2023-07-22T04:26:40Z",
            "lastUpdateDate": None,
            "connectorId": "postgres",
            "parameters": [{"name": "host", "value": "db"}],
        }
        assert Source.from_dict(body).to_dict() == body

    def test_spec_leaves_out_empty_fields(self):
        assert SourceSpec(name="pg").to_dict() == {"name": "pg"}
        spec = SourceSpec(name="pg", connector_id="postgres", parameters=[Parameter("host", "db")])
        assert spec.to_dict() == {
            "name": "pg",
            "connectorId": "postgres",
            "parameters": [{"name": "host", "value": "db"}],
        }

    def test_status(self):
        status = Status.from_dict({"status": "OK", "date": "2023-07-22T04:26:40Z"})
        assert status.to_dict() == {"status": "OK", "date": "2023-07-22T04:26:40Z"}

    def test_table_meta(self):
        meta = TableMeta.from_dict({
            "tableName": "users",
            "status": "DONE",
            "metadata": [{"name": "id", "type": "integer", "cardinality": 10, "min": 1, "max": 10}],
        })
        assert meta.metadata == [Metadata("id", "integer", 10, 1, 10)]
        assert meta.table_row() == ["users", "DONE", "", "1"]


class TestWorkflows:
    def test_round_trip(self):
        workflow = Workflow.from_dict(WORKFLOW_BODY)
        assert workflow.enabled is True
        assert workflow.to_dict() == WORKFLOW_BODY

    def test_enabled_must_be_boolean(self):
        with pytest.raises(TypeError):
            Workflow.from_dict(dict(WORKFLOW_BODY, enabled="yes"))

    def test_error_details(self):
        workflow = Workflow.from_dict(dict(WORKFLOW_BODY, errorDetails={"code": "E1", "description": "failed"}))
        assert workflow.error_details.code == "E1"

    def test_spec(self):
        spec = WorkflowSpec(name="nightly", region="GRA", source_id="src-1", destination_id="dst-1")
        assert spec.to_dict() == {
            "name": "nightly",
            "region": "GRA",
            "description": None,
            "sourceId": "src-1",
            "destinationId": "dst-1",
            "schedule": None,
            "enabled": True,
        }

    def test_patch(self):
        assert WorkflowPatch(enabled=False).to_dict() == {
            "name": None,
            "description": None,
            "schedule": None,
            "enabled": False,
        }

    def test_job(self):
        job = Job.from_dict({
            "id": "job-1",
            "status": "COMPLETED",
            "createdAt": "2023-07-22T11:00:00Z",
            "startedAt": "2023-07-22T11:00:00Z",
            "endedAt": "2023-07-22T11:05:00Z",
        })
        assert job.to_dict()["endedAt"] == "2023-07-22T11:05:00Z"
        assert job.table_row()[3] == "5m"
        assert JobPost().to_dict() == {"parameters": []}
