import asyncio
import json
import logging

import httpx
import pytest
from websockets.exceptions import ConnectionClosedOK

from openai_tools.config.constants import LOGGER_NAME
from openai_tools.core.auth import AuthProvider


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before each test"""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    logging.basicConfig(level=logging.NOTSET)

    library_logger = logging.getLogger(LOGGER_NAME)
    for handler in library_logger.handlers[:]:
        library_logger.removeHandler(handler)
    library_logger.propagate = True
    library_logger.setLevel(logging.NOTSET)
    yield


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run each test in an empty directory so no real .env file is picked up."""
    monkeypatch.chdir(tmp_path)
    yield tmp_path


class MockServer:
    """
    Records requests made through an ``httpx.MockTransport`` and answers them
    with queued responses (or ``200 {}`` when the queue is empty).
    """

    def __init__(self):
        self.requests = []
        self.responses = []

    def respond(self, status=200, json_body=None, content=None, headers=None):
        self.responses.append((status, json_body, content, headers))
        return self

    def fail(self, exc):
        self.responses.append(exc)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            return httpx.Response(200, json={})
        entry = self.responses.pop(0)
        if isinstance(entry, Exception):
            raise entry
        status, json_body, content, headers = entry
        if json_body is not None:
            return httpx.Response(status, json=json_body, headers=headers)
        return httpx.Response(status, content=content or b"", headers=headers)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def server():
    """Provide a recording mock HTTP server."""
    return MockServer()


@pytest.fixture
def openai_auth():
    """Provide an OpenAI provider with a test key."""
    return AuthProvider.openai("sk-test")


@pytest.fixture
def azure_auth():
    """Provide an Azure provider for an embeddings deployment."""
    return AuthProvider.azure(
        "azkey",
        "https://r.openai.azure.com/openai/deployments/te/embeddings?api-version=2024-08-01-preview",
    )


class FakeWebSocket:
    """
    Stand-in for a websockets client connection.

    ``frames`` are delivered by ``recv`` in order; once they run out the
    connection reports a normal close. ``reactions`` maps a client event type
    to server frames queued whenever that event is sent, which lets a test
    script a server conversation.
    """

    def __init__(self, frames=None, reactions=None):
        self.frames = list(frames or [])
        self.reactions = reactions or {}
        self.sent = []
        self.closed = False
        self.send_error = None
        self.active_sends = 0
        self.max_active_sends = 0

    async def send(self, data):
        if self.send_error is not None:
            raise self.send_error
        self.active_sends += 1
        self.max_active_sends = max(self.max_active_sends, self.active_sends)
        await asyncio.sleep(0)
        event = json.loads(data)
        self.sent.append(event)
        self.active_sends -= 1
        self.frames.extend(self.reactions.get(event["type"], []))

    async def recv(self):
        await asyncio.sleep(0)
        if self.closed or not self.frames:
            raise ConnectionClosedOK(None, None)
        frame = self.frames.pop(0)
        if isinstance(frame, BaseException):
            raise frame
        if isinstance(frame, (str, bytes)):
            return frame
        return json.dumps(frame)

    async def close(self):
        self.closed = True

    def sent_types(self):
        return [event["type"] for event in self.sent]


SESSION_CREATED = {
    "type": "session.created",
    "event_id": "event_0",
    "session": {
        "id": "sess_1",
        "object": "realtime.session",
        "model": "gpt-4o-realtime-preview",
        "modalities": ["text", "audio"],
        "voice": "alloy",
    },
}


@pytest.fixture
def fake_ws():
    """Factory for scripted fake websockets"""
    def factory(frames=None, reactions=None):
        return FakeWebSocket(frames, reactions)
    return factory


@pytest.fixture
def session_created():
    """The first frame a realtime server sends"""
    return json.loads(json.dumps(SESSION_CREATED))
