"""
Entity <-> JSON payload conversion.

Payload keys are the camelCase form of attribute names (``company_website``
-> ``companyWebsite``). Dates travel as ISO-8601 strings, identifiers as
UUID strings, money as numbers and binary columns as base64 text.
``timeStamp`` is written out but ignored on input: the store owns it.
"""

import base64
import binascii
import uuid
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List

from sqlalchemy import Boolean, DateTime, Integer, LargeBinary, Numeric, String, Uuid, inspect

from .database import TIME_STAMP_COLUMN
from .errors import PayloadError


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _columns(poco_cls):
    """(attribute key, Column) pairs in table order."""
    mapper = inspect(poco_cls)
    return [(prop.key, prop.columns[0]) for prop in mapper.column_attrs]


def _dump_value(value: Any) -> Any:
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(value)).decode("ascii")
    return value


def to_dict(poco) -> Dict[str, Any]:
    return {camel_case(attr): _dump_value(getattr(poco, attr)) for attr, _ in _columns(type(poco))}


def to_list(pocos) -> List[Dict[str, Any]]:
    return [to_dict(p) for p in pocos]


def parse_datetime(value: str) -> datetime:
    """Parse ISO-8601 text; values with an offset come back as naive UTC."""
    # fromisoformat rejects a trailing "Z" before Python 3.11.
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def _load_value(column, value: Any) -> Any:
    if value is None:
        return None
    col_type = column.type
    if isinstance(col_type, Boolean):
        if not isinstance(value, bool):
            raise ValueError("expected true or false")
        return value
    if isinstance(col_type, Integer):
        if isinstance(value, bool):
            raise ValueError("expected an integer")
        if isinstance(value, float) and not value.is_integer():
            raise ValueError("expected an integer")
        return int(value)
    if isinstance(col_type, Numeric):
        if isinstance(value, bool):
            raise ValueError("expected a number")
        return Decimal(str(value))
    if isinstance(col_type, DateTime):
        if not isinstance(value, str):
            raise ValueError("expected an ISO-8601 date string")
        return parse_datetime(value)
    if isinstance(col_type, Uuid):
        return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))
    if isinstance(col_type, LargeBinary):
        return base64.b64decode(value, validate=True)
    if isinstance(col_type, String) and not isinstance(value, str):
        raise ValueError("expected a string")
    return value


def parse_key(poco_cls, raw: str) -> Any:
    """Convert a path segment to the entity's key type."""
    mapper = inspect(poco_cls)
    column = mapper.primary_key[0]
    try:
        return _load_value(column, raw)
    except (ValueError, TypeError) as e:
        raise PayloadError(column.name, f"invalid key {raw!r}") from e


def from_dict(poco_cls, data: Dict[str, Any]):
    """
    Build a transient entity from a payload.

    Unknown keys are ignored. Absent or null values on columns with a
    constant default (boolean flags) take that default, so a full-replace
    update never writes null into them. Generated keys are left unset.
    Snake-case keys are accepted as well as camelCase.

    Raises:
        PayloadError: a value cannot be converted to its column type
    """
    if not isinstance(data, dict):
        raise PayloadError("body", "expected a JSON object")
    poco = poco_cls()
    for attr, column in _columns(poco_cls):
        if column.name == TIME_STAMP_COLUMN:
            continue
        key = camel_case(attr)
        raw = data.get(key, data.get(attr))
        if raw is None and column.default is not None:
            if column.default.is_scalar:
                setattr(poco, attr, column.default.arg)
            continue
        try:
            value = _load_value(column, raw)
        except (ValueError, TypeError, InvalidOperation, binascii.Error) as e:
            raise PayloadError(key, f"cannot convert {raw!r}: {e}") from e
        setattr(poco, attr, value)
    return poco
