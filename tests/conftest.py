"""
Pytest configuration and fixtures for Powerlink node tests.
"""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Add the repository root to path for imports
# This allows `from powerlink_node... import ...` to work without installing
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from powerlink_node.config import NodeSettings  # noqa: E402
from powerlink_node.credentials import PowerlinkCredential  # noqa: E402
from powerlink_node.integrations.powerlink import PowerlinkConfig  # noqa: E402
from powerlink_node.nodes.context import NodeExecutionContext  # noqa: E402


class RecordingTransport(httpx.MockTransport):
    """Mock transport that records requests and replies with a canned response."""

    def __init__(self, response: httpx.Response | Exception | None = None):
        self.response = response if response is not None else httpx.Response(200, json={})
        self.requests: list[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        content = self.last_request.content
        return json.loads(content) if content else None


@pytest.fixture
def api_key():
    return "test-token-123"


@pytest.fixture
def credential(api_key):
    """Sample credential."""
    return PowerlinkCredential(api_key=api_key)


@pytest.fixture
def powerlink_config(api_key):
    return PowerlinkConfig(api_key=api_key)


@pytest.fixture
def settings():
    """Settings pinned to the public API, independent of the environment."""
    return NodeSettings()


@pytest.fixture
def transport():
    return RecordingTransport()


@pytest.fixture
def make_context(api_key):
    """Build an execution context from parameters."""

    def _make(**parameters):
        return NodeExecutionContext(
            parameters=parameters,
            credentials={"powerlinkApi": {"apiKey": api_key}},
        )

    return _make


@pytest.fixture
def sample_query_params():
    """Query parameters in the host's shape."""
    return [
        {"fieldId": "name", "fieldValue": "Bob"},
        {"fieldId": "age", "fieldValue": "5"},
    ]


@pytest.fixture
def make_transport():
    """Build a recording transport with a canned response or exception."""
    return RecordingTransport
