from typing import Any, Dict, List, Optional

import requests


class GithubError(Exception):
    """
    Base class for everything raised by the client itself. Transport errors
    from requests are not wrapped and propagate as they are.
    """


class RequestError(GithubError):
    """
    The request could not be built, so nothing was sent.
    """


class ErrorResponse(GithubError):
    """
    The API answered with a non-2xx status.
    """

    def __init__(self, response: requests.Response):
        self.response = response
        self.status_code = response.status_code
        self.message: Optional[str] = None
        self.errors: List[Dict[str, Any]] = []
        self.documentation_url: Optional[str] = None

        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict):
            self.message = data.get("message")
            self.errors = data.get("errors") or []
            self.documentation_url = data.get("documentation_url")
        elif response.text:
            self.message = response.text

        super().__init__(str(self))

    def __str__(self) -> str:
        request = self.response.request
        method = request.method if request is not None else "?"
        url = request.url if request is not None else self.response.url
        text = f"{method} {url}: {self.status_code} {self.message or ''}".rstrip()
        if self.errors:
            text += f" {self.errors}"
        return text


class RateLimitError(ErrorResponse):
    """
    The API refused the request because the rate limit is used up.
    """

    def __init__(self, response: requests.Response, rate):
        self.rate = rate
        super().__init__(response)
