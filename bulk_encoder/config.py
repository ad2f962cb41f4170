"""Configuration module — frozen dataclass loaded from YAML, env vars and CLI args."""

import argparse
import logging
import os
from dataclasses import dataclass

import yaml

logger = logging.getLogger(__name__)


def _parse_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class EncoderConfig:
    compression_level: int = 0
    direct_send: bool = False
    pool_size: int = 4
    index: str = "logs"
    input_file: str = "-"
    output_file: str = "-"
    config_file: str | None = None

    @property
    def compress(self) -> bool:
        # 0 disables compression; -1 is gzip at zlib's default level
        return self.compression_level != 0

    def validate(self):
        """Raise ValueError if the settings cannot build an encoder."""
        if not -1 <= self.compression_level <= 9:
            raise ValueError(
                f"compression_level must be between -1 and 9, got {self.compression_level}"
            )
        if self.pool_size < 1:
            raise ValueError(f"pool_size must be positive, got {self.pool_size}")
        if self.compress and self.direct_send:
            raise ValueError("direct_send cannot be combined with gzip compression")
        if not self.index:
            raise ValueError("index must not be empty")


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        logger.info("Loaded YAML config from %s", path)
        return data
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Bulk request body encoder")
    parser.add_argument("--config", type=str, default=None, help="YAML config file")
    parser.add_argument("--input", type=str, default=None, help="NDJSON documents ('-' for stdin)")
    parser.add_argument("--output", type=str, default=None, help="Body output file ('-' for stdout)")
    parser.add_argument("--index", type=str, default=None)
    parser.add_argument("--compression-level", type=int, default=None)
    parser.add_argument("--pool-size", type=int, default=None)
    parser.add_argument("--direct-send", action="store_true", default=False)
    return parser


def load_config(argv: list[str] | None = None) -> EncoderConfig:
    """Build EncoderConfig from defaults <- YAML <- env vars <- CLI args.

    Pass argv for testability; when None, argparse reads sys.argv.
    """
    args = _build_parser().parse_args(argv)

    config_file = args.config or os.environ.get("ENCODER_CONFIG")
    yaml_data = load_yaml_config(config_file)
    encoder_section = yaml_data.get("encoder") or {}
    output_section = yaml_data.get("output") or {}

    # YAML values on top of dataclass defaults
    compression_level = int(encoder_section.get("compression_level", EncoderConfig.compression_level))
    direct_send = _parse_bool(encoder_section.get("direct_send", EncoderConfig.direct_send))
    pool_size = int(encoder_section.get("pool_size", EncoderConfig.pool_size))
    index = str(output_section.get("index", EncoderConfig.index))

    # Env vars override YAML
    compression_level = int(os.environ.get("COMPRESSION_LEVEL", compression_level))
    if "DIRECT_SEND" in os.environ:
        direct_send = _parse_bool(os.environ["DIRECT_SEND"])
    pool_size = int(os.environ.get("POOL_SIZE", pool_size))
    index = os.environ.get("BULK_INDEX", index)

    config = EncoderConfig(
        compression_level=args.compression_level if args.compression_level is not None else compression_level,
        direct_send=True if args.direct_send else direct_send,
        pool_size=args.pool_size if args.pool_size is not None else pool_size,
        index=args.index if args.index is not None else index,
        input_file=args.input if args.input is not None else EncoderConfig.input_file,
        output_file=args.output if args.output is not None else EncoderConfig.output_file,
        config_file=config_file,
    )
    config.validate()
    return config
