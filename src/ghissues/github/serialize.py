import dataclasses
import datetime
import enum
from typing import Any, Dict, Optional

from dateutil.parser import parse as dateutil_parse

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def parse_timestamp(value: Optional[str]) -> Optional[datetime.datetime]:
    if value is None:
        return None
    return dateutil_parse(value)


def format_timestamp(value: datetime.datetime) -> str:
    # Naive datetimes are taken to already be in UTC.
    if value.tzinfo is not None:
        value = value.astimezone(datetime.timezone.utc)
    return value.strftime(TIMESTAMP_FORMAT)


def record_to_dict(record: Any) -> Dict[str, Any]:
    """
    Encode a dataclass record as a JSON object, leaving out fields that are
    None. A field can name its wire key with `metadata={"json": ...}`.
    """
    data = {}
    for f in dataclasses.fields(record):
        value = getattr(record, f.name)
        if value is None:
            continue
        data[f.metadata.get("json", f.name)] = to_json_value(value)
    return data


def to_json_value(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        if hasattr(value, "to_dict"):
            return value.to_dict()
        return record_to_dict(value)
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, datetime.datetime):
        return format_timestamp(value)
    if isinstance(value, (list, tuple)):
        return [to_json_value(v) for v in value]
    if isinstance(value, dict):
        return {k: to_json_value(v) for k, v in value.items()}
    return value
