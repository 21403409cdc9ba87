import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, TypeVar
from urllib.parse import parse_qs, urljoin, urlsplit

import requests

from ghissues import __version__
from ghissues.github.errors import ErrorResponse, RateLimitError, RequestError
from ghissues.github.issues import IssuesService
from ghissues.github.serialize import to_json_value
from ghissues.logger import get_logger

logger: logging.Logger

T = TypeVar("T")

DEFAULT_BASE_URL = "https://api.github.com/"
DEFAULT_MEDIA_TYPE = "application/vnd.github+json"
API_VERSION = "2022-11-28"

ENV_API_URL = "GHISSUES_API_URL"


@dataclass
class Rate:
    """
    Rate limit state reported in the headers of every response.
    """

    limit: Optional[int] = None
    remaining: Optional[int] = None
    reset: Optional[int] = None

    @classmethod
    def from_headers(cls, headers) -> "Rate":
        def _int(name: str) -> Optional[int]:
            value = headers.get(name)
            return int(value) if value is not None and value.isdigit() else None

        return cls(
            limit=_int("X-RateLimit-Limit"),
            remaining=_int("X-RateLimit-Remaining"),
            reset=_int("X-RateLimit-Reset"),
        )


class Response:
    """
    Wraps the raw requests response with the pagination links and rate
    limit information the API sends in its headers.
    """

    def __init__(self, http_response: requests.Response):
        self.http_response = http_response
        self.next_page = 0
        self.prev_page = 0
        self.first_page = 0
        self.last_page = 0
        self.next_page_token = ""
        self.cursor = ""
        self.before = ""
        self.after = ""
        self.rate = Rate.from_headers(http_response.headers)
        self._populate_page_values()

    @property
    def status_code(self) -> int:
        return self.http_response.status_code

    @property
    def headers(self):
        return self.http_response.headers

    def _populate_page_values(self) -> None:
        for rel, link in self.http_response.links.items():
            query = parse_qs(urlsplit(link.get("url", "")).query)

            if rel == "next":
                self.after = _first(query, "after")
                self.cursor = _first(query, "cursor")
                page = _first(query, "page")
                if page.isdigit():
                    self.next_page = int(page)
                else:
                    self.next_page_token = page
            elif rel == "prev":
                self.before = _first(query, "before")
                page = _first(query, "page")
                if page.isdigit():
                    self.prev_page = int(page)
            elif rel == "first":
                page = _first(query, "page")
                if page.isdigit():
                    self.first_page = int(page)
            elif rel == "last":
                page = _first(query, "page")
                if page.isdigit():
                    self.last_page = int(page)


def _first(query, name: str) -> str:
    values = query.get(name)
    return values[0] if values else ""


@dataclass
class GithubAPI:
    """
    Builds and sends REST API requests. Services such as `issues` call
    `new_request` and `do`; nothing else talks to the network.
    """

    token: str = None
    base_url: str = None
    user_agent: str = f"ghissues/{__version__}"
    timeout: float = 30
    session: requests.Session = None

    def __post_init__(self):
        global logger
        logger = get_logger()
        if not self.base_url:
            self.base_url = os.environ.get(ENV_API_URL, DEFAULT_BASE_URL)
        if not self.session:
            self.session = requests.Session()
        if not self.token:
            logger.warning("No Github access token set, requests will be unauthenticated")

        self.issues = IssuesService(self)

    def new_request(self, method: str, path: str, body: Any = None) -> requests.PreparedRequest:
        """
        Build a request for `path`, relative to the base URL. A body is sent
        as JSON; records are encoded with their `to_dict`.
        """
        if not self.base_url.endswith("/"):
            raise RequestError(f"base_url must have a trailing slash, but {self.base_url!r} does not")

        headers = {
            "Accept": DEFAULT_MEDIA_TYPE,
            "User-Agent": self.user_agent,
            "X-GitHub-Api-Version": API_VERSION,
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        data = None
        if body is not None:
            try:
                data = json.dumps(to_json_value(body))
            except (TypeError, ValueError) as e:
                raise RequestError(f"Can't encode request body for {method} {path}: {e}") from e
            headers["Content-Type"] = "application/json"

        request = requests.Request(method, urljoin(self.base_url, path), headers=headers, data=data)
        return self.session.prepare_request(request)

    def do(
            self,
            request: requests.PreparedRequest,
            decode: Optional[Callable[[Any], T]] = None,
    ) -> Tuple[Optional[T], Response]:
        """
        Send a request and decode the JSON body with `decode`. Any non-2xx
        status is raised as ErrorResponse. Transport errors are not caught.
        """
        logger.debug(f"{request.method} {request.url}")
        http_response = self.session.send(request, timeout=self.timeout)
        response = Response(http_response)

        rl = response.rate
        if rl.limit is not None:
            logger.info(
                f"Rate limit info after request: limit={rl.limit}, remaining={rl.remaining}, reset={rl.reset}"
            )

        check_response(response)

        if decode is None or not http_response.content:
            return None, response
        return decode(http_response.json()), response


def check_response(response: Response) -> None:
    if 200 <= response.status_code < 300:
        return

    http_response = response.http_response
    if response.status_code in (403, 429) and response.rate.remaining == 0:
        err = RateLimitError(http_response, response.rate)
    else:
        err = ErrorResponse(http_response)
    logger.error(f"Request failed: {err}")
    raise err
