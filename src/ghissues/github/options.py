import dataclasses
import datetime
import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from ghissues.github.errors import RequestError
from ghissues.github.issue import LockReason
from ghissues.github.serialize import format_timestamp, record_to_dict


@dataclass
class ListOptions:
    """
    Offset pagination.
    """

    page: int = 0
    per_page: int = 0


@dataclass
class ListCursorOptions:
    """
    Cursor pagination. `page` is an opaque token here, unlike ListOptions.
    """

    page: str = ""
    per_page: int = 0
    first: int = 0
    last: int = 0
    after: str = ""
    before: str = ""
    cursor: str = ""


@dataclass
class IssueListOptions:
    """
    Query parameters for IssuesService.list and IssuesService.list_by_org.
    """

    # assigned, created, mentioned, subscribed or all. The API defaults to assigned.
    filter: str = ""
    # open, closed or all. The API defaults to open.
    state: str = ""
    labels: List[str] = field(default_factory=list)
    # created, updated or comments.
    sort: str = ""
    # asc or desc.
    direction: str = ""
    since: Optional[datetime.datetime] = None
    list_cursor_options: ListCursorOptions = field(default_factory=ListCursorOptions)
    list_options: ListOptions = field(default_factory=ListOptions)


@dataclass
class IssueListByRepoOptions:
    """
    Query parameters for IssuesService.list_by_repo.
    """

    # A milestone number, "none" or "*".
    milestone: str = ""
    state: str = ""
    # A login, "none" or "*".
    assignee: str = ""
    creator: str = ""
    mentioned: str = ""
    labels: List[str] = field(default_factory=list)
    sort: str = ""
    direction: str = ""
    since: Optional[datetime.datetime] = None
    list_cursor_options: ListCursorOptions = field(default_factory=ListCursorOptions)
    list_options: ListOptions = field(default_factory=ListOptions)


@dataclass
class MilestoneListOptions:
    # open, closed or all.
    state: str = ""
    # due_on or completeness.
    sort: str = ""
    direction: str = ""
    list_options: ListOptions = field(default_factory=ListOptions)


@dataclass
class LockIssueOptions:
    """
    Sent as the JSON body of IssuesService.lock, not as query parameters.
    """

    lock_reason: Optional[Union[LockReason, str]] = None

    def to_dict(self) -> Dict[str, Any]:
        return record_to_dict(self)


def _encode_value(name: str, value: Any) -> Optional[str]:
    if value is None or value == "" or value == [] or value is False:
        return None
    if isinstance(value, enum.Enum):
        return str(value.value)
    if isinstance(value, bool):
        return "true"
    if isinstance(value, int):
        return str(value) if value != 0 else None
    if isinstance(value, str):
        return value
    if isinstance(value, datetime.datetime):
        return format_timestamp(value)
    if isinstance(value, (list, tuple)):
        return ",".join(_encode_value(name, v) or "" for v in value)
    raise RequestError(f"Can't encode query parameter {name}={value!r}")


def encode_query(options: Any) -> List[Tuple[str, str]]:
    """
    Turn an options record into query parameters, one per non-empty field,
    sorted by name. Nested option records are flattened into the same query.
    """
    if not dataclasses.is_dataclass(options) or isinstance(options, type):
        raise RequestError(f"Options must be an options record, got {type(options).__name__}")

    params = []
    for f in dataclasses.fields(options):
        value = getattr(options, f.name)
        if dataclasses.is_dataclass(value):
            params.extend(encode_query(value))
            continue
        encoded = _encode_value(f.name, value)
        if encoded is not None:
            params.append((f.name, encoded))
    return sorted(params, key=lambda p: p[0])


def add_options(url: str, options: Any) -> str:
    """
    Append the query parameters for `options` to `url`. Parameters already
    on the url are kept.
    """
    if options is None:
        return url

    params = encode_query(options)
    if not params:
        return url

    scheme, netloc, path, query, fragment = urlsplit(url)
    merged = parse_qsl(query, keep_blank_values=True) + params
    return urlunsplit((scheme, netloc, path, urlencode(merged, safe=","), fragment))
