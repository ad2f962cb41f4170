"""Shared pytest fixtures for the bulk encoder test suite."""

from __future__ import annotations

import pytest

from bulk_encoder.direct import DirectJSONBodyEncoder
from bulk_encoder.encoder import JSONBodyEncoder
from bulk_encoder.gzip_encoder import GzipBodyEncoder


@pytest.fixture()
def json_encoder() -> JSONBodyEncoder:
    return JSONBodyEncoder()


@pytest.fixture()
def gzip_encoder() -> GzipBodyEncoder:
    return GzipBodyEncoder(compression_level=6)


@pytest.fixture()
def direct_encoder() -> DirectJSONBodyEncoder:
    return DirectJSONBodyEncoder()


@pytest.fixture()
def sample_records() -> list[tuple[dict, dict]]:
    """Return three realistic (meta, doc) pairs."""
    return [
        (
            {"index": {"_index": "logs-2026.10.19"}},
            {"@timestamp": "2026-10-19T12:00:00Z", "level": "INFO", "message": "server started"},
        ),
        (
            {"index": {"_index": "logs-2026.10.19", "_id": "req-000042"}},
            {
                "@timestamp": "2026-10-19T12:00:01Z",
                "level": "ERROR",
                "message": "connection refused",
                "fields": {"host": "db.local", "port": 5432},
            },
        ),
        (
            {"create": {"_index": "metrics"}},
            {"service": "auth-service", "latency_ms": 12.5, "ok": True, "tags": ["a", "b"]},
        ),
    ]
