import json
from typing import Any, Dict, List, Optional

import pytest
import requests

from eideasy_sign.esign_eideasy import EIDEasyClient

BASE_URL = "https://id.eideasy.com"


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(body)

    def json(self) -> Any:
        return json.loads(self.text)


class FakeSession:
    """Stands in for requests.Session; records every POST."""

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self._responses: List[Any] = []

    def queue(self, response: Any) -> None:
        self._responses.append(response)

    def post(self, url: str, json: Any = None, headers: Any = None, timeout: Any = None) -> FakeResponse:
        self.calls.append({"url": url, "json": json, "headers": dict(headers or {}), "timeout": timeout})
        if not self._responses:
            raise AssertionError(f"unexpected POST {url}")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(fake_session: FakeSession) -> EIDEasyClient:
    return EIDEasyClient(base_url=BASE_URL, timeout=5, session=fake_session)


@pytest.fixture
def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection refused")
