"""Entry point — encode NDJSON documents into a bulk request body."""

import json
import logging
import sys

from bulk_encoder.bulk import encode_bulk, index_action
from bulk_encoder.config import load_config
from bulk_encoder.factory import new_pool

logger = logging.getLogger(__name__)


def read_documents(stream):
    """Yield parsed documents from an NDJSON stream, skipping bad lines."""
    for lineno, line in enumerate(stream, start=1):
        stripped = line.strip()
        if not stripped:
            continue
        try:
            yield json.loads(stripped)
        except json.JSONDecodeError as exc:
            logger.warning("Skipping line %d: invalid JSON (%s)", lineno, exc)


def run(config, in_stream, out_stream, pool=None) -> int:
    pool = pool or new_pool(config)
    records = (
        (index_action(config.index), doc) for doc in read_documents(in_stream)
    )
    with pool.encoder() as encoder:
        result = encode_bulk(encoder, records)
        headers = {}
        encoder.add_headers(headers)
        body = encoder.getvalue()

    out_stream.write(body)
    out_stream.flush()

    for name, value in headers.items():
        logger.info("Header %s: %s", name, value)
    logger.info(
        "Encoded %d records into %d bytes (%d dropped)",
        result.encoded, len(body), len(result.failed),
    )

    if result.total and not result.encoded:
        return 1
    return 0


def main(argv=None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = load_config(argv)
    logger.info(
        "Encoding %s -> %s (index=%s, compression=%d, direct=%s)",
        config.input_file, config.output_file, config.index,
        config.compression_level, config.direct_send,
    )

    in_stream = sys.stdin if config.input_file == "-" else open(config.input_file, "r", encoding="utf-8")
    out_stream = sys.stdout.buffer if config.output_file == "-" else open(config.output_file, "wb")
    try:
        return run(config, in_stream, out_stream)
    finally:
        if in_stream is not sys.stdin:
            in_stream.close()
        if out_stream is not sys.stdout.buffer:
            out_stream.close()


if __name__ == "__main__":
    sys.exit(main())
