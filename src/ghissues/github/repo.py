from dataclasses import dataclass
from typing import Any, Dict, Optional

from ghissues.github.user import User


@dataclass
class GithubRepository:
    """
    The repository an issue belongs to. Only filled in by the endpoints that
    list issues across several repositories.
    """

    id: Optional[int] = None
    node_id: Optional[str] = None
    name: Optional[str] = None
    full_name: Optional[str] = None
    owner: Optional[User] = None
    private: Optional[bool] = None
    description: Optional[str] = None
    html_url: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["GithubRepository"]:
        if data is None:
            return None
        return cls(
            id=data.get("id"),
            node_id=data.get("node_id"),
            name=data.get("name"),
            full_name=data.get("full_name"),
            owner=User.from_dict(data.get("owner")),
            private=data.get("private"),
            description=data.get("description"),
            html_url=data.get("html_url"),
            url=data.get("url"),
        )
