"""Runtime configuration, assembled from the CLI flags and the environment.

Environment variables:
  METAGEN_METADATA_URL  metadata endpoint (http(s):// or file://)
  METAGEN_FORMATTER     command the generated Go source is piped through
  METAGEN_TIMEOUT       HTTP timeout in seconds
  METAGEN_LOG_LEVEL     DEBUG, INFO, WARNING or ERROR
"""

from __future__ import annotations

import argparse
import os
import shlex
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigError
from .loader import DEFAULT_TIMEOUT, METADATA_URL

DEFAULT_FORMATTER = ("goimports",)
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}


@dataclass(frozen=True)
class GeneratorConfig:
    output_root: Path
    metadata_url: str = METADATA_URL
    formatter: tuple[str, ...] = DEFAULT_FORMATTER
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="metagen",
        description="Generate the Go datatypes and service packages from the SoftLayer metadata API",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("."),
        help="the root of the go project to be refreshed (default: current directory)",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_argument_parser().parse_args(argv)


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError as err:
        raise ConfigError(f"METAGEN_TIMEOUT must be a number, got {raw!r}") from err
    if timeout <= 0:
        raise ConfigError(f"METAGEN_TIMEOUT must be positive, got {raw!r}")
    return timeout


def load_config(
    args: argparse.Namespace,
    environ: Mapping[str, str] | None = None,
) -> GeneratorConfig:
    """Combine parsed arguments with METAGEN_* environment variables."""
    env = os.environ if environ is None else environ

    formatter = DEFAULT_FORMATTER
    raw_formatter = env.get("METAGEN_FORMATTER")
    if raw_formatter is not None:
        formatter = tuple(shlex.split(raw_formatter))
        if not formatter:
            raise ConfigError("METAGEN_FORMATTER must not be empty")

    timeout = DEFAULT_TIMEOUT
    if env.get("METAGEN_TIMEOUT"):
        timeout = _parse_timeout(env["METAGEN_TIMEOUT"])

    log_level = env.get("METAGEN_LOG_LEVEL", "INFO").upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigError(
            f"METAGEN_LOG_LEVEL must be one of {', '.join(sorted(_LOG_LEVELS))}, got {log_level!r}"
        )

    return GeneratorConfig(
        output_root=args.output,
        metadata_url=env.get("METAGEN_METADATA_URL") or METADATA_URL,
        formatter=formatter,
        timeout=timeout,
        log_level=log_level,
    )
