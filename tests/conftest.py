from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from mongodb_atlas_util.atlas import AtlasClient

ENV_VARS = ("LOG_LEVEL", "MONGODB_ATLAS_BASE_URL", "MONGODB_ATLAS_PROFILE", "MONGODB_ATLAS_REQUEST_TIMEOUT")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def atlas_client():
    return MagicMock(spec=AtlasClient)


def make_request(model, previous=None):
    """Handler request stand-in carrying only the states the handlers read"""
    return SimpleNamespace(desiredResourceState=model, previousResourceState=previous)


class FakeResponse:
    def __init__(self, status_code, json_data=None, reason="OK", raw=None):
        self.status_code = status_code
        self._json = json_data
        self.reason = reason
        self.text = raw or ("" if json_data is None else str(json_data))
        self.content = self.text.encode()

    def json(self):
        if self._json is None:
            raise ValueError("No JSON body")
        return self._json


class FakeSession:
    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        self.calls.append({
            "method": method,
            "url": url,
            "params": params,
            "json": json,
            "headers": headers,
            "timeout": timeout,
        })
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response
