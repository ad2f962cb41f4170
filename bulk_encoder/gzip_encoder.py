"""Gzip-compressed bulk body encoder.

Records are streamed through a single zlib compressor (gzip container)
that writes into the body buffer. Each successful add() ends with a sync
flush, so every record added so far can be decompressed from the buffer
before the stream is finished. reader() writes the gzip trailer once.
"""

import io
import logging
import zlib

from bulk_encoder.buffer import BodyBuffer
from bulk_encoder.encoder import CONTENT_TYPE_JSON, apply_headers, ensure_writable
from bulk_encoder.errors import CompressorInitializationError
from bulk_encoder.serialize import encode_line

logger = logging.getLogger(__name__)

# wbits offset that makes zlib emit a gzip header and trailer
GZIP_WBITS = 16 + zlib.MAX_WBITS
DEFAULT_COMPRESSION = zlib.Z_DEFAULT_COMPRESSION


class GzipBodyEncoder:
    """Writes newline-delimited JSON records through a streaming gzip compressor."""

    def __init__(self, compression_level: int = DEFAULT_COMPRESSION, buf: BodyBuffer | None = None):
        if isinstance(compression_level, bool) or not isinstance(compression_level, int):
            raise CompressorInitializationError(
                f"Compression level must be an integer, got {compression_level!r}"
            )
        if not -1 <= compression_level <= 9:
            raise CompressorInitializationError(
                f"Invalid gzip compression level {compression_level}: expected -1..9"
            )
        self._level = compression_level
        self._buf = buf if buf is not None else BodyBuffer()
        self._stream = self._new_stream()
        self._closed = False
        self._finalized = False

    def _new_stream(self):
        try:
            return zlib.compressobj(self._level, zlib.DEFLATED, GZIP_WBITS)
        except (ValueError, zlib.error) as exc:
            raise CompressorInitializationError(
                f"Cannot create gzip compressor at level {self._level}: {exc}"
            ) from exc

    @property
    def compression_level(self) -> int:
        return self._level

    @property
    def buffer(self) -> BodyBuffer:
        return self._buf

    @property
    def finalized(self) -> bool:
        return self._finalized

    def __len__(self) -> int:
        return len(self._buf)

    def reset(self):
        # The compressor is bound to the buffer it writes into, so the
        # buffer must be emptied before a fresh stream is attached.
        self._buf.reset()
        self._stream = self._new_stream()
        self._closed = False
        self._finalized = False

    def content_headers(self) -> list[tuple[str, str]]:
        return [
            ("Content-Type", CONTENT_TYPE_JSON),
            ("Content-Encoding", "gzip"),
        ]

    def add_headers(self, headers):
        apply_headers(headers, self.content_headers())

    def _write(self, data: bytes):
        self._buf.write(self._stream.compress(data))

    def _flush(self):
        self._buf.write(self._stream.flush(zlib.Z_SYNC_FLUSH))

    def _close(self):
        if self._closed:
            return
        self._buf.write(self._stream.flush(zlib.Z_FINISH))
        self._closed = True
        logger.debug("Finished gzip body: %d bytes", len(self._buf))

    def reader(self) -> io.BytesIO:
        """Finish the gzip stream and return the complete body.

        Only the first call writes the trailer; later calls return the
        same bytes. add() and add_raw() need a reset() afterwards.
        """
        self._close()
        self._finalized = True
        return self._buf.reader()

    def getvalue(self) -> bytes:
        self._close()
        self._finalized = True
        return self._buf.getvalue()

    def check_writable(self):
        ensure_writable(self._finalized)

    def marshal(self, doc):
        self.reset()
        self._write(encode_line(doc))
        self._finalized = True

    def add_raw(self, entry):
        self.check_writable()
        pos = len(self._buf)
        try:
            self._write(encode_line(entry))
        except Exception:
            self._buf.truncate(pos)
            raise

    def add(self, meta, doc):
        self.check_writable()
        pos = len(self._buf)
        try:
            # Both values are encoded before anything reaches the compressor.
            record = encode_line(meta) + encode_line(doc)
            self._write(record)
            self._flush()
        except Exception:
            self._buf.truncate(pos)
            raise
