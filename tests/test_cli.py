"""
Test suite for the command-line interface

Commands run through `main` against the in-memory fake API, with the
configuration directory moved to a temporary one.
"""

import json
import tempfile
from unittest.mock import patch

import pytest

from ovhdata_sdk.api import OvhDataClient
from ovhdata_sdk.cli import _parse_parameters, create_parser, main
from ovhdata_sdk.config import AllConfig, Context, REGION_CA, REGION_EU, StoredCredentials
from ovhdata_sdk.exceptions import ValidationError
from ovhdata_sdk.log import SESSION_ID, session_log_path

from .conftest import APPLICATION_KEY, APPLICATION_SECRET, BASE_URL, CONSUMER_KEY

SN = "abc123"
DI = f"/cloud/project/{SN}/dataIntegration"

SOURCE = {
    "id": "src-1",
    "name": "pg",
    "status": "READY",
    "creationDate": "2023-07-22T04:26:40Z",
    "lastUpdateDate": None,
    "connectorId": "postgres",
    "parameters": [{"name": "host", "value": "db"}],
}

WORKFLOW = {"id": "wf-1", "name": "nightly", "region": "GRA", "enabled": True}

CREDENTIAL = {
    "applicationId": 1,
    "credentialId": 2,
    "creation": "2023-07-22T04:26:40Z",
    "status": "validated",
    "ovhSupport": False,
}


@pytest.fixture
def cli_env(config_dir, session, tmp_path, monkeypatch):
    """Route every client the CLI creates to the fake API and keep logs under tmp_path."""
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path / "logs"))

    def fake_create_client(endpoint_url, application_key, application_secret, consumer_key, **kwargs):
        assert endpoint_url == BASE_URL
        return OvhDataClient(endpoint_url, application_key, application_secret, consumer_key, session=session)

    with patch("ovhdata_sdk.cli.create_client", side_effect=fake_create_client) as mock_create:
        yield mock_create


@pytest.fixture
def logged_in(cli_env):
    context = Context.load()
    context.set_credentials(REGION_EU, StoredCredentials(APPLICATION_KEY, APPLICATION_SECRET, CONSUMER_KEY))
    context.set_service_name(REGION_EU, SN)
    context.save()
    return context


class TestParser:
    def test_global_options(self):
        args = create_parser().parse_args(["-vv", "--service-name", "sn", "di", "source", "list"])
        assert args.verbose == 2
        assert args.service_name == "sn"

    def test_aliases(self):
        args = create_parser().parse_args(["di", "workflow", "ls", "--sort", "name", "--desc"])
        assert args.sort == "name"
        assert args.desc is True

    def test_job_requires_workflow(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["di", "job", "list"])

    def test_invalid_parameter_keeps_cause(self):
        with pytest.raises(ValidationError) as exc_info:
            _parse_parameters(["host=db", "port"])
        assert exc_info.value.error_code == "INVALID_PARAMETER"
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_output_choices(self):
        args = create_parser().parse_args(["di", "source", "list", "-o", "yaml"])
        assert args.output == "yaml"
        with pytest.raises(SystemExit):
            create_parser().parse_args(["di", "source", "list", "-o", "description"])

    def test_no_command(self, cli_env, capsys):
        assert main([]) == 1
        assert "usage:" in capsys.readouterr().out


class TestConfigCommands:
    def test_list_marks_current(self, cli_env, capsys):
        assert main(["config", "list"]) == 0
        lines = capsys.readouterr().out.strip().split('\n')
        assert lines[0].split() == ["NAME", "ENDPOINT"]
        current = [line for line in lines if line.startswith("*")]
        assert current[0].split() == ["*", REGION_EU, BASE_URL]

    def test_set(self, cli_env, capsys):
        assert main(["config", "set", REGION_CA]) == 0
        assert AllConfig.load().current_config_name == REGION_CA

    def test_set_unknown(self, cli_env, capsys):
        assert main(["config", "set", "nowhere"]) == 1
        err = capsys.readouterr().err
        assert "Error: Unable to find any config with name: nowhere" in err
        assert "-v" in err

    def test_service_name(self, cli_env):
        assert main(["config", "service-name", "sn-42"]) == 0
        assert Context.load().get_service_name(REGION_EU) == "sn-42"

    def test_get_hides_secret(self, logged_in, capsys):
        assert main(["config", "get", "-o", "json"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output["service_name"] == SN
        assert output["credentials"]["application_secret"] == "[hidden_secret]"


class TestAuthCommands:
    def test_login_with_flags(self, cli_env, server, capsys):
        server.add("GET", "/auth/currentCredential", 200, CREDENTIAL)

        code = main(["login", "-a", APPLICATION_KEY, "-s", APPLICATION_SECRET, "-c", CONSUMER_KEY])

        assert code == 0
        assert "You are now logged in." in capsys.readouterr().out
        stored = Context.load().get_credentials(REGION_EU)
        assert stored.application_secret == APPLICATION_SECRET
        assert server.last.headers["X-Ovh-Consumer"] == CONSUMER_KEY

    def test_login_prompts(self, cli_env, server):
        server.add("GET", "/auth/currentCredential", 200, CREDENTIAL)

        with patch("webbrowser.open", return_value=True), \
                patch("builtins.input", side_effect=[APPLICATION_KEY, CONSUMER_KEY]), \
                patch("getpass.getpass", return_value=APPLICATION_SECRET):
            assert main(["login"]) == 0

        assert Context.load().get_credentials(REGION_EU).consumer_key == CONSUMER_KEY

    def test_login_rejected(self, cli_env, server, capsys):
        server.add("GET", "/auth/currentCredential", 403, {"message": "Invalid application key"})

        code = main(["login", "-a", "bad", "-s", "bad", "-c", "bad"])

        assert code == 1
        assert "response error: 403: Invalid application key" in capsys.readouterr().err
        assert Context.load().get_credentials(REGION_EU) is None

    def test_login_opens_token_page(self, cli_env, server):
        server.add("GET", "/auth/currentCredential", 200, CREDENTIAL)

        with patch("webbrowser.open", return_value=True) as mock_open, \
                patch("builtins.input", side_effect=[APPLICATION_KEY, CONSUMER_KEY]), \
                patch("getpass.getpass", return_value=APPLICATION_SECRET):
            assert main(["login"]) == 0

        mock_open.assert_called_once_with(AllConfig.load().current_config().ovhapiv6.create_token_url)

    def test_login_with_flags_skips_browser(self, cli_env, server):
        server.add("GET", "/auth/currentCredential", 200, CREDENTIAL)
        with patch("webbrowser.open") as mock_open:
            assert main(["login", "-a", APPLICATION_KEY, "-s", APPLICATION_SECRET, "-c", CONSUMER_KEY]) == 0
        mock_open.assert_not_called()

    def test_relogin_reports_rejected_stored_credentials(self, logged_in, server, capsys):
        server.add("GET", "/auth/currentCredential", 403, {"message": "This credential is not valid"})

        with patch("webbrowser.open", return_value=True), \
                patch("builtins.input", side_effect=["y", "new-app", "new-consumer"]), \
                patch("getpass.getpass", return_value="new-secret"):
            code = main(["login"])

        # the new key pair is rejected too by the same route
        assert code == 1
        err = capsys.readouterr().err
        assert "You are not authenticated, status_code=403" in err
        assert "This credential is not valid" in err
        assert Context.load().get_credentials(REGION_EU).consumer_key == CONSUMER_KEY

    def test_relogin_declined_keeps_credentials(self, logged_in, server, capsys):
        server.add("GET", "/auth/currentCredential", 200, CREDENTIAL)

        with patch("webbrowser.open") as mock_open, patch("builtins.input", return_value="n"):
            code = main(["login"])

        assert code == 1
        captured = capsys.readouterr()
        assert "Current connection infos..." in captured.out
        assert "validated" in captured.out
        assert "Maybe another day" in captured.err
        mock_open.assert_not_called()
        assert Context.load().get_credentials(REGION_EU).application_key == APPLICATION_KEY

    def test_relogin_replaces_credentials(self, logged_in, server, capsys):
        server.add("GET", "/auth/currentCredential", 200, CREDENTIAL)

        with patch("webbrowser.open", return_value=False), \
                patch("builtins.input", side_effect=["yes", "new-app", "new-consumer"]), \
                patch("getpass.getpass", return_value="new-secret"):
            assert main(["login"]) == 0

        stored = Context.load().get_credentials(REGION_EU)
        assert stored.application_key == "new-app"
        assert stored.application_secret == "new-secret"
        assert stored.consumer_key == "new-consumer"

    def test_relogin_propagates_server_errors(self, logged_in, server, capsys):
        server.add("GET", "/auth/currentCredential", 500, {"message": "Internal server error"})

        with patch("webbrowser.open") as mock_open, patch("builtins.input") as mock_input:
            assert main(["login"]) == 1

        assert "response error: 500: Internal server error" in capsys.readouterr().err
        mock_input.assert_not_called()
        mock_open.assert_not_called()


    def test_logout(self, logged_in, capsys):
        assert main(["logout"]) == 0
        assert Context.load().get_credentials(REGION_EU) is None

    def test_not_logged_in(self, cli_env, capsys):
        assert main(["--service-name", SN, "di", "source", "list"]) == 1
        assert "not logged in" in capsys.readouterr().err

    def test_me(self, logged_in, server, capsys):
        server.add("GET", "/auth/details", 200, {"user": "xx1234-ovh", "roles": ["admin"]})
        assert main(["me", "-o", "yaml"]) == 0
        assert "user: xx1234-ovh" in capsys.readouterr().out


class TestSourceCommands:
    def test_no_service_name(self, cli_env, capsys):
        context = Context.load()
        context.set_credentials(REGION_EU, StoredCredentials(APPLICATION_KEY, APPLICATION_SECRET, CONSUMER_KEY))
        context.save()

        assert main(["di", "source", "list"]) == 1
        assert "No service name selected" in capsys.readouterr().err

    def test_list_json(self, logged_in, server, capsys):
        server.add("GET", DI + "/sources", 200, [SOURCE])
        assert main(["di", "source", "list", "-o", "json"]) == 0
        assert json.loads(capsys.readouterr().out)[0]["id"] == "src-1"

    def test_list_table(self, logged_in, server, capsys):
        server.add("GET", DI + "/sources", 200, [SOURCE, dict(SOURCE, id="src-2", name="a")])
        assert main(["di", "source", "ls", "--sort", "name"]) == 0
        lines = capsys.readouterr().out.strip().split('\n')
        assert lines[0].split()[:3] == ["NAME", "ID", "CONNECTOR_ID"]
        assert lines[1].split()[0] == "a"

    def test_service_name_option_wins(self, logged_in, server):
        server.add("GET", "/cloud/project/other/dataIntegration/sources", 200, [])
        assert main(["--service-name", "other", "di", "source", "list"]) == 0
        assert "/cloud/project/other/" in server.last.url

    def test_create(self, logged_in, server, capsys):
        server.add("POST", DI + "/sources", 200, SOURCE)
        code = main(["di", "source", "create", "pg", "--connector-id", "postgres", "-p", "host=db", "-o", "json"])
        assert code == 0
        assert json.loads(server.last.body) == {
            "name": "pg",
            "connectorId": "postgres",
            "parameters": [{"name": "host", "value": "db"}],
        }

    def test_create_invalid_parameter(self, logged_in, server, capsys):
        code = main(["di", "source", "create", "pg", "--connector-id", "postgres", "-p", "host"])
        assert code == 1
        assert "expected name=value" in capsys.readouterr().err
        assert server.signed_requests == []

    def test_update_keeps_name_and_parameters(self, logged_in, server):
        server.add("GET", DI + "/sources/src-1", 200, SOURCE)
        server.add("PUT", DI + "/sources/src-1", 200, SOURCE)
        assert main(["di", "source", "update", "src-1"]) == 0
        assert json.loads(server.last.body) == {"name": "pg", "parameters": [{"name": "host", "value": "db"}]}

    def test_delete_cancelled(self, logged_in, server, capsys):
        with patch("builtins.input", return_value="n"):
            assert main(["di", "source", "delete", "src-1"]) == 0
        assert "Operation cancelled" in capsys.readouterr().out
        assert server.signed_requests == []

    def test_delete_confirmed(self, logged_in, server, capsys):
        server.add("DELETE", DI + "/sources/src-1", 200, "")
        with patch("builtins.input", return_value="y"):
            assert main(["di", "source", "rm", "src-1"]) == 0
        assert server.last.method == "DELETE"
        assert "Source 'src-1' deleted" in capsys.readouterr().out

    def test_delete_script(self, logged_in, server):
        server.add("DELETE", DI + "/sources/src-1", 200, "")
        with patch("builtins.input") as mock_input:
            assert main(["di", "source", "delete", "src-1", "--script"]) == 0
        mock_input.assert_not_called()

    def test_interrupted(self, logged_in, server, capsys):
        with patch("builtins.input", side_effect=KeyboardInterrupt):
            assert main(["di", "source", "delete", "src-1"]) == 130

    def test_api_error(self, logged_in, server, capsys):
        server.add("GET", DI + "/sources/missing", 404, {"message": "Source not found"})
        assert main(["di", "source", "get", "missing"]) == 1
        assert "response error: 404: Source not found" in capsys.readouterr().err


class TestWorkflowCommands:
    def test_disable(self, logged_in, server, capsys):
        server.add("PUT", DI + "/workflows/wf-1", 200, dict(WORKFLOW, enabled=False))
        assert main(["di", "workflow", "disable", "wf-1", "-o", "json"]) == 0
        assert json.loads(server.last.body)["enabled"] is False
        assert json.loads(capsys.readouterr().out)["enabled"] is False

    def test_create(self, logged_in, server):
        server.add("POST", DI + "/workflows", 200, WORKFLOW)
        code = main([
            "di", "workflow", "create", "nightly",
            "--source-id", "src-1", "--destination-id", "dst-1", "-r", "GRA", "--disabled",
        ])
        assert code == 0
        body = json.loads(server.last.body)
        assert body["region"] == "GRA"
        assert body["enabled"] is False

    def test_run(self, logged_in, server, capsys):
        server.add("POST", DI + "/workflows/wf-1/jobs", 200,
                   {"id": "job-1", "status": "PENDING", "createdAt": "2023-07-22T04:26:40Z"})
        assert main(["di", "workflow", "run", "wf-1"]) == 0
        assert "job-1" in capsys.readouterr().out

    def test_job_stop(self, logged_in, server, capsys):
        server.add("DELETE", DI + "/workflows/wf-1/jobs/job-1", 200, "")
        assert main(["di", "job", "stop", "job-1", "--workflow-id", "wf-1", "--script"]) == 0
        assert server.last.url.endswith("/workflows/wf-1/jobs/job-1")

    def test_job_stop_dot_id_rejected(self, logged_in, server, capsys):
        server.add("DELETE", DI + "/workflows/wf-1", 200, "")
        assert main(["di", "job", "stop", "..", "--workflow-id", "wf-1", "--script"]) == 1
        assert "Invalid path segment" in capsys.readouterr().err
        assert server.signed_requests == []



class TestLogging:
    def test_session_log_file(self, logged_in, server, capsys):
        server.add("GET", "/auth/currentCredential", 200, CREDENTIAL)

        code = main(["-vv", "login", "-a", APPLICATION_KEY, "-s", APPLICATION_SECRET, "-c", CONSUMER_KEY])

        assert code == 0
        log_file = session_log_path(logged_in.uuid)
        content = log_file.read_text()
        assert "SEND GET" in content
        assert APPLICATION_SECRET not in content

    def test_json_log(self, logged_in, server, capsys):
        server.add("GET", DI + "/sources", 200, [])
        assert main(["-v", "--json-log", "di", "source", "list"]) == 0
        first = session_log_path(logged_in.uuid).read_text().strip().split('\n')[0]
        assert json.loads(first)["session_id"] == SESSION_ID

    def test_debug_hint_with_verbose(self, logged_in, server, capsys):
        server.add("GET", DI + "/sources/x", 500, {"message": "boom"})
        assert main(["-v", "di", "source", "get", "x"]) == 1
        assert f"ovhdata-cli debug {SESSION_ID}" in capsys.readouterr().err

    def test_debug_prints_log(self, logged_in, capsys):
        log_file = session_log_path(logged_in.uuid, "12345")
        log_file.parent.mkdir(parents=True, exist_ok=True)
        log_file.write_text("line one\nline two\n")

        assert main(["debug", "12345"]) == 0
        out = capsys.readouterr().out
        assert "line one\nline two" in out
        assert str(log_file) in out

    def test_debug_unknown_session(self, logged_in, capsys):
        assert main(["debug", "999"]) == 1
        assert "Unable to read log file" in capsys.readouterr().err
