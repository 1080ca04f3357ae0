"""
Shared fixtures: a fake OVH API answering prepared requests in memory
"""

import json
import logging
from urllib.parse import urlsplit

import pytest
import requests
from requests.utils import get_encoding_from_headers

from ovhdata_sdk.api import OvhDataClient

BASE_URL = "https://eu.api.ovh.com/1.0"
SERVER_TIME = 1690000000

APPLICATION_KEY = "app-key"
APPLICATION_SECRET = "app-secret"
CONSUMER_KEY = "consumer-key"


def make_response(status_code, body="", url=BASE_URL, content_type='application/json'):
    """Build a real requests.Response, with the encoding the HTTP adapter would set."""
    response = requests.Response()
    response.status_code = status_code
    if isinstance(body, bytes):
        response._content = body
    else:
        if not isinstance(body, str):
            body = json.dumps(body)
        response._content = body.encode('utf-8')
    response.url = url
    response.headers['Content-Type'] = content_type
    response.encoding = get_encoding_from_headers(response.headers)
    return response


class FakeServer:
    """
    Replaces Session.send. Answers /auth/time with `time_body` and other
    requests from registered routes keyed by (method, path).
    """

    def __init__(self, time_body=str(SERVER_TIME)):
        self.time_body = time_body
        self.time_status = 200
        self.routes = {}
        self.requests = []
        self.error = None

    def add(self, method, path, status=200, body="", content_type="application/json"):
        self.routes[(method, path)] = (status, body, content_type)

    def send(self, prepared, **kwargs):
        self.requests.append(prepared)
        if self.error is not None:
            raise self.error

        path = urlsplit(prepared.url).path
        if path.endswith("/auth/time"):
            return make_response(self.time_status, self.time_body, prepared.url)

        relative = path[len(urlsplit(BASE_URL).path):]
        status, body, content_type = self.routes.get(
            (prepared.method, relative), (404, {"message": "route not found"}, "application/json"))
        return make_response(status, body, prepared.url, content_type)

    @property
    def signed_requests(self):
        return [r for r in self.requests if not urlsplit(r.url).path.endswith("/auth/time")]

    @property
    def last(self):
        return self.signed_requests[-1]


@pytest.fixture
def server():
    return FakeServer()


@pytest.fixture
def session(server):
    http_session = requests.Session()
    http_session.send = server.send
    return http_session


@pytest.fixture
def client(session):
    return OvhDataClient(
        BASE_URL,
        APPLICATION_KEY,
        APPLICATION_SECRET,
        CONSUMER_KEY,
        session=session,
    )


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the configuration directory to a temporary one."""
    directory = tmp_path / "config"
    monkeypatch.setenv("OVHDATA_CONFIG_DIR", str(directory))
    return directory


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers installed by the CLI so caplog keeps seeing records."""
    yield
    for name in ("ovhdata_sdk", "urllib3"):
        target = logging.getLogger(name)
        for handler in list(target.handlers):
            target.removeHandler(handler)
            handler.close()
        target.setLevel(logging.NOTSET)
    logging.getLogger("ovhdata_sdk").propagate = True
