"""Serialization utilities."""

from dataclasses import asdict
from datetime import date, datetime


def serialize_dataclass(obj) -> dict:
    """Serialize a dataclass to dict, converting dates and datetimes to ISO strings."""
    data = asdict(obj)
    for key, value in data.items():
        if isinstance(value, (datetime, date)):
            data[key] = value.isoformat()
    return data
