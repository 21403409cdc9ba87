"""Tests for request building and response handling in GithubAPI."""

import pytest

from ghissues.github.api import API_VERSION, GithubAPI, Response
from ghissues.github.errors import ErrorResponse, RateLimitError, RequestError
from ghissues.github.issue import IssueRequest


def test_new_request_sets_default_headers(gh):
    req = gh.new_request("GET", "repos/o/r/issues")

    assert req.url == "https://api.github.test/repos/o/r/issues"
    assert req.headers["Accept"] == "application/vnd.github+json"
    assert req.headers["Authorization"] == "Bearer test-token"
    assert req.headers["X-GitHub-Api-Version"] == API_VERSION
    assert req.headers["User-Agent"].startswith("ghissues/")
    assert req.body is None


def test_new_request_without_token_has_no_authorization(session):
    gh = GithubAPI(base_url="https://api.github.test/", session=session)

    req = gh.new_request("GET", "issues")

    assert "Authorization" not in req.headers


def test_new_request_encodes_records(gh, sent_json):
    req = gh.new_request("POST", "repos/o/r/issues", IssueRequest(title="t", labels=["a"]))

    assert req.headers["Content-Type"] == "application/json"
    assert sent_json(req) == {"title": "t", "labels": ["a"]}


def test_base_url_needs_trailing_slash(session):
    gh = GithubAPI(token="t", base_url="https://api.github.test", session=session)

    with pytest.raises(RequestError):
        gh.new_request("GET", "issues")
    assert session.sent == []


def test_base_url_from_environment(monkeypatch, session):
    monkeypatch.setenv("GHISSUES_API_URL", "https://ghe.example.test/api/v3/")

    gh = GithubAPI(token="t", session=session)

    assert gh.new_request("GET", "issues").url == "https://ghe.example.test/api/v3/issues"


def test_unencodable_body_raises_request_error(gh):
    with pytest.raises(RequestError):
        gh.new_request("POST", "repos/o/r/issues", {"title": object()})


def test_do_uses_timeout(gh, session):
    gh.do(gh.new_request("GET", "issues"))

    assert session.send_kwargs[-1]["timeout"] == gh.timeout


def test_do_without_decoder_returns_none(gh, session):
    session.queue(body={"id": 1})

    value, resp = gh.do(gh.new_request("GET", "issues"))

    assert value is None
    assert resp.status_code == 200


def test_error_response_carries_server_payload(gh, session):
    session.queue(
        status=422,
        body={
            "message": "Validation Failed",
            "errors": [{"resource": "Issue", "field": "title", "code": "missing_field"}],
            "documentation_url": "https://docs.github.com/rest/issues/issues#create-an-issue",
        },
    )

    with pytest.raises(ErrorResponse) as excinfo:
        gh.do(gh.new_request("POST", "repos/o/r/issues", IssueRequest()))

    err = excinfo.value
    assert err.status_code == 422
    assert err.message == "Validation Failed"
    assert err.errors[0]["field"] == "title"
    assert "422" in str(err)
    assert not isinstance(err, RateLimitError)


def test_error_response_with_plain_text_body(gh, session):
    session.queue(status=502, text="Bad Gateway")

    with pytest.raises(ErrorResponse) as excinfo:
        gh.do(gh.new_request("GET", "issues"))

    assert excinfo.value.message == "Bad Gateway"
    assert excinfo.value.errors == []


def test_rate_limit_error(gh, session):
    session.queue(
        status=403,
        body={"message": "API rate limit exceeded"},
        headers={
            "X-RateLimit-Limit": "60",
            "X-RateLimit-Remaining": "0",
            "X-RateLimit-Reset": "1372700873",
        },
    )

    with pytest.raises(RateLimitError) as excinfo:
        gh.do(gh.new_request("GET", "issues"))

    assert excinfo.value.rate.limit == 60
    assert excinfo.value.rate.reset == 1372700873


def test_response_rate(gh, session):
    session.queue(body=[], headers={"X-RateLimit-Limit": "5000", "X-RateLimit-Remaining": "4999"})

    _, resp = gh.do(gh.new_request("GET", "issues"))

    assert resp.rate.limit == 5000
    assert resp.rate.remaining == 4999
    assert resp.rate.reset is None


def test_response_offset_pagination(gh, session):
    link = (
        '<https://api.github.test/issues?page=3>; rel="next", '
        '<https://api.github.test/issues?page=1>; rel="prev", '
        '<https://api.github.test/issues?page=1>; rel="first", '
        '<https://api.github.test/issues?page=5>; rel="last"'
    )
    session.queue(body=[], headers={"Link": link})

    _, resp = gh.do(gh.new_request("GET", "issues"))

    assert isinstance(resp, Response)
    assert (resp.next_page, resp.prev_page, resp.first_page, resp.last_page) == (3, 1, 1, 5)
    assert resp.next_page_token == ""


def test_response_cursor_pagination(gh, session):
    link = (
        '<https://api.github.test/issues?after=abc&per_page=10>; rel="next", '
        '<https://api.github.test/issues?before=xyz&per_page=10>; rel="prev"'
    )
    session.queue(body=[], headers={"Link": link})

    _, resp = gh.do(gh.new_request("GET", "issues"))

    assert resp.after == "abc"
    assert resp.before == "xyz"
    assert resp.next_page == 0


def test_response_page_token(gh, session):
    session.queue(body=[], headers={"Link": '<https://api.github.test/issues?page=dG9rZW4>; rel="next"'})

    _, resp = gh.do(gh.new_request("GET", "issues"))

    assert resp.next_page == 0
    assert resp.next_page_token == "dG9rZW4"
