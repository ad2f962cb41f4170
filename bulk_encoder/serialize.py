"""Compact JSON line encoding used for every bulk record."""

import dataclasses
import datetime
import json

from bulk_encoder.errors import SerializationError


def _default(value):
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (datetime.datetime, datetime.date)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def encode_line(value) -> bytes:
    """Serialize *value* to compact JSON + newline, encoded as UTF-8.

    Non-ASCII characters are written as-is; NaN and Infinity are rejected.

    Raises:
        SerializationError: If *value* holds an unsupported type, a circular
            reference, a non-finite float, or text that is not valid UTF-8.
    """
    try:
        text = json.dumps(
            value,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
            default=_default,
        )
        return (text + "\n").encode("utf-8")
    except (TypeError, ValueError, RecursionError) as exc:
        raise SerializationError(f"Cannot encode {type(value).__name__}: {exc}") from exc
