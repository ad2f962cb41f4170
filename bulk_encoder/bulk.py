"""Helpers for assembling a bulk request body from (meta, doc) records."""

import logging
from dataclasses import dataclass, field

from bulk_encoder.errors import EncoderError

logger = logging.getLogger(__name__)


@dataclass
class BulkResult:
    encoded: int = 0
    failed: list[tuple[int, EncoderError]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.encoded + len(self.failed)


def index_action(index: str, doc_id: str | None = None, pipeline: str | None = None,
                 op_type: str = "index") -> dict:
    """Build the metadata line for one bulk record."""
    if op_type not in ("index", "create"):
        raise ValueError(f"Unsupported bulk op_type: {op_type}")
    action = {"_index": index}
    if doc_id is not None:
        action["_id"] = doc_id
    if pipeline:
        action["pipeline"] = pipeline
    return {op_type: action}


def encode_bulk(encoder, records) -> BulkResult:
    """Reset *encoder* and add every ``(meta, doc)`` pair from *records*.

    A record that fails to encode is logged and skipped; the encoder's
    rollback keeps the body free of partial records, so the remaining
    records are still added.
    """
    encoder.reset()
    result = BulkResult()
    for position, (meta, doc) in enumerate(records):
        try:
            encoder.add(meta, doc)
        except EncoderError as exc:
            logger.warning("Failed to encode record %d, dropping it: %s", position, exc)
            result.failed.append((position, exc))
            continue
        result.encoded += 1
    logger.debug("Encoded %d records (%d dropped)", result.encoded, len(result.failed))
    return result
