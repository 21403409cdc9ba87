import datetime
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ghissues.github.serialize import parse_timestamp, record_to_dict
from ghissues.github.user import User


@dataclass
class Milestone:
    """
    A repository milestone. The same record is sent as the body when creating
    or editing one; fields left as None are not sent.
    """

    url: Optional[str] = None
    html_url: Optional[str] = None
    labels_url: Optional[str] = None
    id: Optional[int] = None
    node_id: Optional[str] = None
    number: Optional[int] = None
    state: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    creator: Optional[User] = None
    open_issues: Optional[int] = None
    closed_issues: Optional[int] = None
    created_at: Optional[datetime.datetime] = None
    updated_at: Optional[datetime.datetime] = None
    closed_at: Optional[datetime.datetime] = None
    due_on: Optional[datetime.datetime] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["Milestone"]:
        if data is None:
            return None
        return cls(
            url=data.get("url"),
            html_url=data.get("html_url"),
            labels_url=data.get("labels_url"),
            id=data.get("id"),
            node_id=data.get("node_id"),
            number=data.get("number"),
            state=data.get("state"),
            title=data.get("title"),
            description=data.get("description"),
            creator=User.from_dict(data.get("creator")),
            open_issues=data.get("open_issues"),
            closed_issues=data.get("closed_issues"),
            created_at=parse_timestamp(data.get("created_at")),
            updated_at=parse_timestamp(data.get("updated_at")),
            closed_at=parse_timestamp(data.get("closed_at")),
            due_on=parse_timestamp(data.get("due_on")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return record_to_dict(self)
