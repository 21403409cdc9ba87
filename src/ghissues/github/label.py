from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class Label:
    id: Optional[int] = None
    node_id: Optional[str] = None
    url: Optional[str] = None
    name: Optional[str] = None
    color: Optional[str] = None
    description: Optional[str] = None
    default: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["Label"]:
        if data is None:
            return None
        return cls(
            id=data.get("id"),
            node_id=data.get("node_id"),
            url=data.get("url"),
            name=data.get("name"),
            color=data.get("color"),
            description=data.get("description"),
            default=data.get("default"),
        )
