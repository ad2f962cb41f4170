"""Bounded pool handing out exclusive, reusable encoders."""

import contextlib
import logging
import queue
import threading

logger = logging.getLogger(__name__)


class EncoderPool:
    """Hands out one encoder per caller and takes it back after a reset.

    Encoders are created lazily by *factory* until *size* exist; after
    that acquire() waits for a released one. An encoder is owned by a
    single caller between acquire() and release().
    """

    def __init__(self, factory, size: int):
        if size < 1:
            raise ValueError(f"Pool size must be positive, got {size}")
        self._factory = factory
        self.size = size
        self._pool: queue.Queue = queue.Queue(maxsize=size)
        self._created = 0
        self._lock = threading.Lock()

    @property
    def created(self) -> int:
        with self._lock:
            return self._created

    @property
    def idle(self) -> int:
        return self._pool.qsize()

    def acquire(self, timeout: float | None = None):
        """Return an idle encoder, creating one while under the size limit.

        Raises:
            queue.Empty: If *timeout* elapses with every encoder in use.
        """
        try:
            return self._pool.get_nowait()
        except queue.Empty:
            pass

        with self._lock:
            create = self._created < self.size
            if create:
                self._created += 1
                count = self._created
        if create:
            logger.debug("Creating pooled encoder %d/%d", count, self.size)
            try:
                return self._factory()
            except Exception:
                with self._lock:
                    self._created -= 1
                raise

        return self._pool.get(timeout=timeout)

    def release(self, encoder):
        """Reset *encoder* and make it available to the next caller."""
        encoder.reset()
        try:
            self._pool.put_nowait(encoder)
        except queue.Full:
            logger.warning("Encoder pool full, dropping released encoder")

    @contextlib.contextmanager
    def encoder(self, timeout: float | None = None):
        enc = self.acquire(timeout=timeout)
        try:
            yield enc
        finally:
            self.release(enc)
