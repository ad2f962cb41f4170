"""Bulk body encoder that can pass pre-rendered documents through verbatim.

A document that is a mapping with a truthy ``send_direct_flag`` is not
encoded as JSON: its ``message`` string is written to the body as-is,
followed by a newline. Every other document goes through the plain JSON
encoder.
"""

from collections.abc import Mapping

from bulk_encoder.buffer import BodyBuffer
from bulk_encoder.encoder import JSONBodyEncoder
from bulk_encoder.errors import MissingMessageFieldError, SerializationError
from bulk_encoder.serialize import encode_line

DIRECT_FLAG_FIELD = "send_direct_flag"
MESSAGE_FIELD = "message"


def direct_message(doc) -> tuple[bool, object]:
    """Return ``(direct, message)`` for *doc*.

    *direct* is True only for mappings with a truthy direct flag; *message*
    is the raw ``message`` value (None when absent).
    """
    if not isinstance(doc, Mapping) or not doc.get(DIRECT_FLAG_FIELD):
        return False, None
    return True, doc.get(MESSAGE_FIELD)


def _message_line(message) -> bytes:
    if message is None:
        raise MissingMessageFieldError(f"no '{MESSAGE_FIELD}' field in object")
    if not isinstance(message, str):
        raise SerializationError(
            f"'{MESSAGE_FIELD}' must be a string for direct send, got {type(message).__name__}"
        )
    try:
        return message.encode("utf-8") + b"\n"
    except UnicodeEncodeError as exc:
        raise SerializationError(f"Cannot encode '{MESSAGE_FIELD}': {exc}") from exc


class DirectJSONBodyEncoder:
    """Plain JSON encoder whose documents may carry a pre-rendered line."""

    def __init__(self, buf: BodyBuffer | None = None):
        self._json = JSONBodyEncoder(buf)

    @property
    def buffer(self) -> BodyBuffer:
        return self._json.buffer

    @property
    def finalized(self) -> bool:
        return self._json.finalized

    def __len__(self) -> int:
        return len(self._json)

    def reset(self):
        self._json.reset()

    def content_headers(self) -> list[tuple[str, str]]:
        return self._json.content_headers()

    def add_headers(self, headers):
        self._json.add_headers(headers)

    def reader(self):
        return self._json.reader()

    def getvalue(self) -> bytes:
        return self._json.getvalue()

    def add_raw(self, entry):
        self._json.add_raw(entry)

    def _doc_line(self, doc) -> bytes:
        direct, message = direct_message(doc)
        if direct:
            return _message_line(message)
        return encode_line(doc)

    def add(self, meta, doc):
        self._json.check_writable()
        buf = self._json.buffer
        pos = len(buf)
        try:
            buf.write(encode_line(meta))
            buf.write(self._doc_line(doc))
        except Exception:
            # Drops the metadata line too.
            buf.truncate(pos)
            raise

    def marshal(self, doc):
        self._json.reset()
        self._json.buffer.write(self._doc_line(doc))
        self._json.finalize()
