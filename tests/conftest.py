import json
from typing import Any, Dict, List, Optional

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from ghissues.github.api import GithubAPI

BASE_URL = "https://api.github.test/"


class FakeSession(requests.Session):
    """
    Records every prepared request and answers with queued responses instead
    of going to the network. An empty queue answers 204 No Content.
    """

    def __init__(self):
        super().__init__()
        self.sent: List[requests.PreparedRequest] = []
        self.send_kwargs: List[Dict[str, Any]] = []
        self._queue: List[Any] = []

    def queue(
            self,
            status: int = 200,
            body: Any = None,
            headers: Optional[Dict[str, str]] = None,
            text: Optional[str] = None,
    ) -> None:
        self._queue.append((status, body, headers or {}, text))

    def queue_error(self, exc: Exception) -> None:
        self._queue.append(exc)

    @property
    def last(self) -> requests.PreparedRequest:
        return self.sent[-1]

    def send(self, request, **kwargs):
        self.sent.append(request)
        self.send_kwargs.append(kwargs)
        item = self._queue.pop(0) if self._queue else (204, None, {}, None)
        if isinstance(item, Exception):
            raise item

        status, body, headers, text = item
        response = requests.Response()
        response.status_code = status
        response.headers = CaseInsensitiveDict(headers)
        if body is not None:
            response._content = json.dumps(body).encode("utf-8")
            response.headers.setdefault("Content-Type", "application/json")
        elif text is not None:
            response._content = text.encode("utf-8")
        else:
            response._content = b""
        response.encoding = "utf-8"
        response.request = request
        response.url = request.url
        return response


def _sent_json(request: requests.PreparedRequest) -> Any:
    body = request.body
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    return json.loads(body)


@pytest.fixture
def sent_json():
    return _sent_json


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def gh(session) -> GithubAPI:
    return GithubAPI(token="test-token", base_url=BASE_URL, session=session)


@pytest.fixture
def issue_data() -> Dict[str, Any]:
    return {
        "id": 1,
        "node_id": "MDU6SXNzdWUx",
        "number": 1347,
        "state": "open",
        "title": "Found a bug",
        "body": "I'm having a problem with this.",
        "locked": False,
        "user": {"login": "octocat", "id": 1},
        "labels": [{"id": 208045946, "name": "bug", "color": "f29513", "default": True}],
        "assignee": {"login": "octocat", "id": 1},
        "assignees": [{"login": "octocat", "id": 1}],
        "milestone": {"number": 1, "title": "v1.0", "state": "open", "open_issues": 4},
        "comments": 0,
        "created_at": "2011-04-22T13:33:48Z",
        "updated_at": "2011-04-22T13:33:48Z",
        "closed_at": None,
        "reactions": {"total_count": 3, "+1": 2, "-1": 0, "heart": 1},
        "html_url": "https://github.com/octocat/Hello-World/issues/1347",
    }


@pytest.fixture
def milestone_data() -> Dict[str, Any]:
    return {
        "id": 1002604,
        "number": 1,
        "state": "open",
        "title": "v1.0",
        "description": "Tracking milestone for version 1.0",
        "creator": {"login": "octocat", "id": 1},
        "open_issues": 4,
        "closed_issues": 8,
        "created_at": "2011-04-10T20:09:31Z",
        "updated_at": "2014-03-03T18:58:10Z",
        "closed_at": None,
        "due_on": "2012-10-09T23:39:01Z",
    }
