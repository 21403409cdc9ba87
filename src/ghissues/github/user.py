from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class User:
    """
    A GitHub account as embedded in issues and milestones.
    """

    login: Optional[str] = None
    id: Optional[int] = None
    node_id: Optional[str] = None
    avatar_url: Optional[str] = None
    html_url: Optional[str] = None
    url: Optional[str] = None
    type: Optional[str] = None
    site_admin: Optional[bool] = None
    name: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["User"]:
        if data is None:
            return None
        return cls(
            login=data.get("login"),
            id=data.get("id"),
            node_id=data.get("node_id"),
            avatar_url=data.get("avatar_url"),
            html_url=data.get("html_url"),
            url=data.get("url"),
            type=data.get("type"),
            site_admin=data.get("site_admin"),
            name=data.get("name"),
            email=data.get("email"),
        )
