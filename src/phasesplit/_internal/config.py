"""Configuration loading for phasesplit."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from phasesplit._internal.errors import ConfigError

if TYPE_CHECKING:
    from phasesplit._internal.types import OutputFormat

_OUTPUT_FORMATS = ("yaml", "json")


def _default_workers() -> int:
    """Return one worker per CPU, leaving one CPU for the coordinating process."""
    return max((os.cpu_count() or 1) - 1, 1)


@dataclass(frozen=True)
class PhaseSplitConfig:
    """Global phasesplit configuration.

    Attributes:
        default_workers: Worker count used when the caller does not pass one.
        output_format: File format for written worker scripts, ``yaml`` or ``json``.
    """

    default_workers: int = field(default_factory=_default_workers)
    output_format: OutputFormat = "yaml"


def load_config() -> PhaseSplitConfig:
    """Load configuration from environment variables with defaults.

    Environment variables:
        PHASESPLIT_WORKERS: Default worker count (default: CPU count - 1, at least 1).
        PHASESPLIT_OUTPUT_FORMAT: ``yaml`` or ``json`` (default: ``yaml``).

    Returns:
        Populated PhaseSplitConfig instance.

    Raises:
        ConfigError: If an environment variable has an invalid value.
    """
    workers_str = os.environ.get("PHASESPLIT_WORKERS")
    output_format = os.environ.get("PHASESPLIT_OUTPUT_FORMAT", "yaml").strip().lower()

    if workers_str is None:
        workers = _default_workers()
    else:
        try:
            workers = int(workers_str)
        except ValueError:
            msg = f"PHASESPLIT_WORKERS must be an integer, got: {workers_str!r}"
            raise ConfigError(msg) from None

        if workers < 1:
            msg = f"PHASESPLIT_WORKERS must be >= 1, got: {workers}"
            raise ConfigError(msg)

    if output_format not in _OUTPUT_FORMATS:
        msg = f"PHASESPLIT_OUTPUT_FORMAT must be one of {', '.join(_OUTPUT_FORMATS)}, got: {output_format!r}"
        raise ConfigError(msg)

    return PhaseSplitConfig(
        default_workers=workers,
        output_format=output_format,  # type: ignore[arg-type]
    )
