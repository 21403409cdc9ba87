import datetime
import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from ghissues.github.label import Label
from ghissues.github.milestone import Milestone
from ghissues.github.repo import GithubRepository
from ghissues.github.serialize import parse_timestamp, record_to_dict
from ghissues.github.user import User


class StateReason(str, enum.Enum):
    COMPLETED = "completed"
    NOT_PLANNED = "not_planned"
    REOPENED = "reopened"


class LockReason(str, enum.Enum):
    OFF_TOPIC = "off-topic"
    TOO_HEATED = "too heated"
    RESOLVED = "resolved"
    SPAM = "spam"


@dataclass
class Reactions:
    total_count: Optional[int] = None
    plus_one: Optional[int] = field(default=None, metadata={"json": "+1"})
    minus_one: Optional[int] = field(default=None, metadata={"json": "-1"})
    laugh: Optional[int] = None
    confused: Optional[int] = None
    heart: Optional[int] = None
    hooray: Optional[int] = None
    rocket: Optional[int] = None
    eyes: Optional[int] = None
    url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["Reactions"]:
        if data is None:
            return None
        return cls(
            total_count=data.get("total_count"),
            plus_one=data.get("+1"),
            minus_one=data.get("-1"),
            laugh=data.get("laugh"),
            confused=data.get("confused"),
            heart=data.get("heart"),
            hooray=data.get("hooray"),
            rocket=data.get("rocket"),
            eyes=data.get("eyes"),
            url=data.get("url"),
        )


@dataclass
class PullRequestLinks:
    """
    Links attached to an issue that is really a pull request.
    """

    url: Optional[str] = None
    html_url: Optional[str] = None
    diff_url: Optional[str] = None
    patch_url: Optional[str] = None
    merged_at: Optional[datetime.datetime] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["PullRequestLinks"]:
        if data is None:
            return None
        return cls(
            url=data.get("url"),
            html_url=data.get("html_url"),
            diff_url=data.get("diff_url"),
            patch_url=data.get("patch_url"),
            merged_at=parse_timestamp(data.get("merged_at")),
        )


@dataclass
class IssueType:
    id: Optional[int] = None
    node_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["IssueType"]:
        if data is None:
            return None
        return cls(
            id=data.get("id"),
            node_id=data.get("node_id"),
            name=data.get("name"),
            description=data.get("description"),
            color=data.get("color"),
            created_at=parse_timestamp(data.get("created_at")),
            updated_at=parse_timestamp(data.get("updated_at")),
        )


@dataclass
class Issue:
    """
    Represents an Issue or PR. The REST API returns the same shape for both:
    an issue carrying `pull_request` links is a pull request, see
    `is_pull_request`.
    """

    id: Optional[int] = None
    node_id: Optional[str] = None
    number: Optional[int] = None
    state: Optional[str] = None
    state_reason: Optional[str] = None
    locked: Optional[bool] = None
    title: Optional[str] = None
    body: Optional[str] = None
    author_association: Optional[str] = None
    user: Optional[User] = None
    labels: Optional[List[Label]] = None
    assignee: Optional[User] = None
    assignees: Optional[List[User]] = None
    comments: Optional[int] = None
    closed_at: Optional[datetime.datetime] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None
    closed_by: Optional[User] = None
    url: Optional[str] = None
    html_url: Optional[str] = None
    comments_url: Optional[str] = None
    events_url: Optional[str] = None
    labels_url: Optional[str] = None
    repository_url: Optional[str] = None
    milestone: Optional[Milestone] = None
    pull_request_links: Optional[PullRequestLinks] = field(
        default=None, metadata={"json": "pull_request"}
    )
    repository: Optional[GithubRepository] = None
    reactions: Optional[Reactions] = None
    draft: Optional[bool] = None
    type: Optional[IssueType] = None
    # Only set when the issue was locked with a reason.
    active_lock_reason: Optional[str] = None

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request_links is not None

    @property
    def label_names(self) -> List[str]:
        return [label.name for label in self.labels or [] if label.name]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Issue":
        i = data
        return cls(
            id=i.get("id"),
            node_id=i.get("node_id"),
            number=i.get("number"),
            state=i.get("state"),
            state_reason=i.get("state_reason"),
            locked=i.get("locked"),
            title=i.get("title"),
            body=i.get("body"),
            author_association=i.get("author_association"),
            user=User.from_dict(i.get("user")),
            labels=[Label.from_dict(lab) for lab in i["labels"]]
            if i.get("labels") is not None
            else None,
            assignee=User.from_dict(i.get("assignee")),
            assignees=[User.from_dict(u) for u in i["assignees"]]
            if i.get("assignees") is not None
            else None,
            comments=i.get("comments"),
            closed_at=parse_timestamp(i.get("closed_at")),
            created_at=parse_timestamp(i.get("created_at")),
            updated_at=parse_timestamp(i.get("updated_at")),
            closed_by=User.from_dict(i.get("closed_by")),
            url=i.get("url"),
            html_url=i.get("html_url"),
            comments_url=i.get("comments_url"),
            events_url=i.get("events_url"),
            labels_url=i.get("labels_url"),
            repository_url=i.get("repository_url"),
            milestone=Milestone.from_dict(i.get("milestone")),
            pull_request_links=PullRequestLinks.from_dict(i.get("pull_request")),
            repository=GithubRepository.from_dict(i.get("repository")),
            reactions=Reactions.from_dict(i.get("reactions")),
            draft=i.get("draft"),
            type=IssueType.from_dict(i.get("type")),
            active_lock_reason=i.get("active_lock_reason"),
        )


@dataclass
class IssueRequest:
    """
    The writable part of an issue, sent to create or edit one.

    Kept apart from Issue because labels, assignees and the milestone are
    written as plain names, logins and numbers rather than as the nested
    objects the API returns. Fields left as None are not sent, so an edit
    only touches what is set here. An empty list is sent and clears the
    field on the server.
    """

    title: Optional[str] = None
    body: Optional[str] = None
    labels: Optional[List[str]] = None
    assignee: Optional[str] = None
    state: Optional[str] = None
    state_reason: Optional[Union[StateReason, str]] = None
    milestone: Optional[int] = None
    assignees: Optional[List[str]] = None
    type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return record_to_dict(self)
