"""Shared type aliases for phasesplit."""

from __future__ import annotations

from typing import Any, Literal

# A test script as parsed from YAML or JSON.
Script = dict[str, Any]

# A single raw entry of ``config.phases``.
RawPhase = dict[str, Any]

# Arrival rates and counts after coercion.
Number = int | float

# Serialisation format for worker script files.
OutputFormat = Literal["yaml", "json"]
