"""Tests for encoder selection from configuration."""

import pytest

from bulk_encoder.buffer import BodyBuffer
from bulk_encoder.config import EncoderConfig
from bulk_encoder.direct import DirectJSONBodyEncoder
from bulk_encoder.encoder import JSONBodyEncoder
from bulk_encoder.errors import CompressorInitializationError
from bulk_encoder.factory import new_encoder, new_pool
from bulk_encoder.gzip_encoder import GzipBodyEncoder


class TestNewEncoder:
    def test_default_is_plain_json(self):
        assert type(new_encoder(EncoderConfig())) is JSONBodyEncoder

    def test_compression_selects_gzip(self):
        encoder = new_encoder(EncoderConfig(compression_level=3))
        assert isinstance(encoder, GzipBodyEncoder)
        assert encoder.compression_level == 3

    def test_default_level_selects_gzip(self):
        encoder = new_encoder(EncoderConfig(compression_level=-1))
        assert isinstance(encoder, GzipBodyEncoder)
        assert encoder.compression_level == -1
        assert ("Content-Encoding", "gzip") in encoder.content_headers()

    def test_default_level_with_direct_send_rejected(self):
        with pytest.raises(CompressorInitializationError):
            new_encoder(EncoderConfig(compression_level=-1, direct_send=True))

    def test_direct_send(self):
        assert isinstance(new_encoder(EncoderConfig(direct_send=True)), DirectJSONBodyEncoder)

    def test_direct_send_with_compression_rejected(self):
        with pytest.raises(CompressorInitializationError):
            new_encoder(EncoderConfig(compression_level=6, direct_send=True))

    @pytest.mark.parametrize(
        "config",
        [EncoderConfig(), EncoderConfig(compression_level=1), EncoderConfig(direct_send=True)],
    )
    def test_uses_given_buffer(self, config):
        buf = BodyBuffer()
        encoder = new_encoder(config, buf)
        encoder.add({"index": {}}, {"a": 1})
        assert encoder.buffer is buf
        assert len(buf) > 0


class TestNewPool:
    def test_pool_size_from_config(self):
        pool = new_pool(EncoderConfig(pool_size=3))
        assert pool.size == 3

    def test_pool_builds_configured_variant(self):
        pool = new_pool(EncoderConfig(compression_level=2))
        with pool.encoder() as encoder:
            assert isinstance(encoder, GzipBodyEncoder)
            assert encoder.compression_level == 2
