"""Growable byte buffer shared by the body encoders."""

import io


class BodyBuffer:
    """Append-only byte buffer with cheap truncate-to-length.

    Encoders record ``len(buffer)`` before writing a record and call
    ``truncate(pos)`` to discard it on failure. ``write`` and ``flush`` let
    the buffer stand in for any writable binary stream.
    """

    def __init__(self, initial: bytes = b""):
        self._data = bytearray(initial)

    def __len__(self) -> int:
        return len(self._data)

    def write(self, data) -> int:
        self._data += data
        return len(data)

    def flush(self):
        pass

    def truncate(self, pos: int):
        """Drop everything after *pos*."""
        if pos < 0 or pos > len(self._data):
            raise ValueError(f"Cannot truncate buffer of {len(self._data)} bytes to {pos}")
        del self._data[pos:]

    def reset(self):
        self.truncate(0)

    def getvalue(self) -> bytes:
        return bytes(self._data)

    def reader(self) -> io.BytesIO:
        """Return a fresh readable stream over the current content."""
        return io.BytesIO(self._data)
