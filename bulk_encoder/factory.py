"""Build the bulk body encoder selected by an EncoderConfig."""

import logging

from bulk_encoder.buffer import BodyBuffer
from bulk_encoder.config import EncoderConfig
from bulk_encoder.direct import DirectJSONBodyEncoder
from bulk_encoder.encoder import BodyEncoder, JSONBodyEncoder
from bulk_encoder.errors import CompressorInitializationError
from bulk_encoder.gzip_encoder import GzipBodyEncoder
from bulk_encoder.pool import EncoderPool

logger = logging.getLogger(__name__)


def new_encoder(config: EncoderConfig, buf: BodyBuffer | None = None) -> BodyEncoder:
    """Return a gzip, direct-send or plain JSON encoder for *config*.

    Any non-zero compression level selects gzip; direct send is only
    available on the uncompressed path.
    """
    if config.compress:
        if config.direct_send:
            raise CompressorInitializationError(
                "direct_send cannot be combined with gzip compression"
            )
        logger.debug("Creating gzip encoder (level=%d)", config.compression_level)
        return GzipBodyEncoder(config.compression_level, buf)
    if config.direct_send:
        logger.debug("Creating direct-send JSON encoder")
        return DirectJSONBodyEncoder(buf)
    logger.debug("Creating JSON encoder")
    return JSONBodyEncoder(buf)


def new_pool(config: EncoderConfig) -> EncoderPool:
    """Return a pool of up to ``config.pool_size`` encoders built from *config*."""
    return EncoderPool(lambda: new_encoder(config), config.pool_size)
