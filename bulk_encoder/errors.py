"""Exceptions raised by the bulk body encoders."""


class EncoderError(Exception):
    """Base class for every error raised while building a bulk body."""


class SerializationError(EncoderError):
    """Raised when a metadata or document value cannot be encoded as JSON."""


class MissingMessageFieldError(EncoderError):
    """Raised when a document asks for direct send but carries no 'message'."""


class CompressorInitializationError(EncoderError):
    """Raised when a compressing encoder is built with an invalid configuration."""


class EncoderStateError(EncoderError):
    """Raised when records are added to a finalized encoder without a reset."""
