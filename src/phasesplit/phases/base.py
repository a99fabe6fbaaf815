"""Abstract base class for all phase kinds."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from phasesplit._internal.errors import SpecError

if TYPE_CHECKING:
    from phasesplit._internal.types import Number, RawPhase


class Phase(ABC):
    """Abstract base for the entries of a script's ``config.phases`` list.

    Each concrete subclass is one phase kind.  A phase knows how to split
    itself into one copy per worker (:meth:`split`), whether it generates any
    arrivals (:meth:`is_idle`) and how to render itself back into the raw
    mapping a worker receives (:meth:`to_dict`).

    Keys a subclass does not interpret are kept in ``extra`` and written back
    untouched, so a worker's phase differs from the original only in the
    fields the split rewrites.

    Example::

        phase = classify_phase({"name": "warm up", "duration": 60, "arrivalRate": 8})
        for worker_phase in phase.split(num_workers=3):
            print(worker_phase.describe())
    """

    @abstractmethod
    def split(self, num_workers: int) -> list[Phase]:
        """Return one phase per worker, in worker order.

        Args:
            num_workers: Number of workers sharing this phase.  Must be >= 1.

        Returns:
            A list of *num_workers* phases whose combined load equals this
            phase's load.
        """

    @abstractmethod
    def is_idle(self) -> bool:
        """Return True if this phase generates no arrivals."""

    @abstractmethod
    def to_dict(self) -> RawPhase:
        """Render the phase as a fresh raw mapping.

        Returns:
            A new dict that shares no mutable state with this phase.
        """

    @abstractmethod
    def describe(self) -> str:
        """Return a human-readable description of this phase.

        Returns:
            A short string suitable for logs and CLI tables.
        """


def _label(raw: RawPhase) -> str:
    name = raw.get("name")
    return repr(name) if name is not None else "<unnamed>"


def _coerce_number(raw: RawPhase, key: str) -> Number:
    """Read *key* from *raw* as an int or float.

    Numeric strings are accepted since templated scripts often carry them.
    Integral floats are narrowed to ``int``.

    Args:
        raw: The raw phase mapping.
        key: Field to read.  Must be present.

    Returns:
        The numeric value.

    Raises:
        SpecError: If the value is not numeric.
    """
    value = raw[key]
    if isinstance(value, bool):
        msg = f"phase {_label(raw)}: {key} must be a number, got {value!r}"
        raise SpecError(msg)
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            msg = f"phase {_label(raw)}: {key} must be a number, got {value!r}"
            raise SpecError(msg) from None
    if not isinstance(value, int | float):
        msg = f"phase {_label(raw)}: {key} must be a number, got {value!r}"
        raise SpecError(msg)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _optional_number(raw: RawPhase, key: str) -> Number | None:
    if raw.get(key) is None:
        return None
    return _coerce_number(raw, key)


def _extra(raw: RawPhase, known: tuple[str, ...]) -> dict[str, Any]:
    return {k: v for k, v in raw.items() if k not in known}


def _compact(value: Number) -> Number:
    """Render integral floats such as ``2.0`` as ``2``."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _render(fields: dict[str, Any], extra: dict[str, Any]) -> RawPhase:
    """Merge interpreted *fields* with deep-copied *extra* keys, dropping None values."""
    rendered = {k: v for k, v in fields.items() if v is not None}
    rendered.update(copy.deepcopy(extra))
    return rendered
