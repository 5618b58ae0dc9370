"""Coercion rules shared by every response mapping.

ids are integers, timestamps and dates are ISO strings, numeric columns
become floats, and absent values stay ``None``.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Iterable, Optional

from pydantic import BaseModel


def to_iso(value: Any) -> Optional[str]:
    """ISO-8601 string for a date/datetime, pass-through for strings, None for None."""
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def to_json_value(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def serialize_row(row: Any, fields: Iterable[str]) -> dict[str, Any]:
    """Admin view of a content row: ``id``, the listed columns, and its timestamps."""
    data = {"id": int(row.id)}
    for name in fields:
        data[name] = to_json_value(getattr(row, name))
    data["created_at"] = to_iso(row.created_at)
    data["updated_at"] = to_iso(row.updated_at)
    return data


def dump(model: BaseModel) -> dict[str, Any]:
    """JSON-ready dict of a response schema, using serialization aliases."""
    return model.model_dump(mode="json", by_alias=True)
