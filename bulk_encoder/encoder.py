"""Bulk body encoder capability and the plain JSON encoder.

A bulk body is newline-delimited JSON: each record is a metadata line
followed by a document line. Encoders append records into a BodyBuffer
and roll the buffer back to its previous length when a record fails, so
the body only ever holds complete records.
"""

import io
from typing import Protocol, runtime_checkable

from bulk_encoder.buffer import BodyBuffer
from bulk_encoder.errors import EncoderStateError
from bulk_encoder.serialize import encode_line

CONTENT_TYPE_JSON = "application/json; charset=UTF-8"


def apply_headers(headers, pairs):
    """Set each (name, value) in *pairs* on a mutable header mapping."""
    for name, value in pairs:
        headers[name] = value


def ensure_writable(finalized: bool):
    if finalized:
        raise EncoderStateError("Encoder body was already read; call reset() first")


@runtime_checkable
class BodyEncoder(Protocol):
    def add(self, meta, doc) -> None: ...

    def add_raw(self, entry) -> None: ...

    def marshal(self, doc) -> None: ...

    def reset(self) -> None: ...

    def content_headers(self) -> list[tuple[str, str]]: ...

    def add_headers(self, headers) -> None: ...

    def reader(self) -> io.BytesIO: ...

    def getvalue(self) -> bytes: ...


class JSONBodyEncoder:
    """Writes records as uncompressed newline-delimited JSON."""

    def __init__(self, buf: BodyBuffer | None = None):
        self._buf = buf if buf is not None else BodyBuffer()
        self._finalized = False

    @property
    def buffer(self) -> BodyBuffer:
        return self._buf

    @property
    def finalized(self) -> bool:
        return self._finalized

    def __len__(self) -> int:
        return len(self._buf)

    def reset(self):
        self._buf.reset()
        self._finalized = False

    def content_headers(self) -> list[tuple[str, str]]:
        return [("Content-Type", CONTENT_TYPE_JSON)]

    def add_headers(self, headers):
        """Set this encoder's content headers on a mutable header mapping."""
        apply_headers(headers, self.content_headers())

    def finalize(self):
        """Mark the body complete; records cannot be added until reset()."""
        self._finalized = True

    def reader(self) -> io.BytesIO:
        self.finalize()
        return self._buf.reader()

    def getvalue(self) -> bytes:
        self.finalize()
        return self._buf.getvalue()

    def check_writable(self):
        ensure_writable(self._finalized)

    def marshal(self, doc):
        """Replace the body with the single JSON value *doc*.

        The encoder is finalized afterwards; call reset() before adding records.
        """
        self.reset()
        self._buf.write(encode_line(doc))
        self.finalize()

    def add_raw(self, entry):
        self.check_writable()
        self._buf.write(encode_line(entry))

    def add(self, meta, doc):
        self.check_writable()
        pos = len(self._buf)
        try:
            self._buf.write(encode_line(meta))
            self._buf.write(encode_line(doc))
        except Exception:
            self._buf.truncate(pos)
            raise
