# -*- coding: utf-8 -*-
"""Location: ./tests/conftest.py
Copyright 2026
SPDX-License-Identifier: Apache-2.0
"""

# Standard
import logging
from typing import Any, Dict, List, Optional

# Third-Party
import httpx
import pytest
import pytest_asyncio

# First-Party
from twitch_oauth2.config import get_settings
from twitch_oauth2 import logging_service


class FakeTwitch:
    """Scripted ``id.twitch.tv`` for :class:`httpx.MockTransport`.

    Responses queued for a path are returned in order; the last one repeats.
    """

    def __init__(self):
        self.routes: Dict[str, List[Dict[str, Any]]] = {}
        self.requests: List[httpx.Request] = []

    def add(self, path: str, status: int = 200, json: Any = None, content: Optional[bytes] = None, headers: Optional[Dict[str, str]] = None) -> "FakeTwitch":
        self.routes.setdefault(path, []).append({"status": status, "json": json, "content": content, "headers": headers})
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queued = self.routes.get(request.url.path)
        if not queued:
            return httpx.Response(404, json={"status": 404, "message": "not found"})
        queued_response = queued.pop(0) if len(queued) > 1 else queued[0]
        if queued_response["json"] is not None:
            return httpx.Response(queued_response["status"], json=queued_response["json"], headers=queued_response["headers"])
        return httpx.Response(queued_response["status"], content=queued_response["content"] or b"", headers=queued_response["headers"])

    def requests_to(self, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    """Isolate tests from ``TWITCH_*`` variables of the environment."""
    for name in ("TWITCH_OAUTH2_URL", "TWITCH_MOCK_API", "TWITCH_LOG_LEVEL", "TWITCH_LOG_FORMAT", "TWITCH_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_twitch():
    return FakeTwitch()


@pytest_asyncio.fixture
async def http_client(fake_twitch):
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_twitch.handler)) as client:
        yield client


@pytest.fixture
def user_validation():
    return {
        "client_id": "wbmytr93xzw8zbg0p1izqyzzc5mbiz",
        "login": "twitchdev",
        "scopes": ["channel:read:subscriptions", "chat:read"],
        "user_id": "141981764",
        "expires_in": 5520838,
    }


@pytest.fixture(autouse=True)
def reset_library_logger():
    """Undo configure_logging so caplog sees library records in every test."""
    yield
    logger = logging.getLogger(logging_service.LOGGER_NAME)
    for handler in logging_service._handlers:
        logger.removeHandler(handler)
        handler.close()
    logging_service._handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
