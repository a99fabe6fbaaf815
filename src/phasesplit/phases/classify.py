"""Map raw phase entries onto their phase kind."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from phasesplit._internal.errors import SpecError
from phasesplit.phases.constant import ConstantRate
from phasesplit.phases.fixed_count import FixedCount
from phasesplit.phases.pause import Pause
from phasesplit.phases.ramping import RampingRate
from phasesplit.phases.unknown import UnknownPhase

if TYPE_CHECKING:
    from phasesplit._internal.types import RawPhase
    from phasesplit.phases.base import Phase


def _has(raw: RawPhase, key: str) -> bool:
    return raw.get(key) is not None


def classify_phase(raw: RawPhase) -> Phase:
    """Build the phase object for a raw ``config.phases`` entry.

    The first matching rule wins:

    1. ``rampTo`` present: :class:`RampingRate`
    2. ``arrivalRate`` present: :class:`ConstantRate`
    3. ``arrivalCount`` present: :class:`FixedCount`
    4. ``pause`` present: :class:`Pause`
    5. otherwise: :class:`UnknownPhase`

    Args:
        raw: The raw phase mapping.

    Returns:
        A concrete :class:`Phase`.

    Raises:
        SpecError: If *raw* is not a mapping or a numeric field is malformed.
    """
    if not isinstance(raw, Mapping):
        msg = f"phase must be a mapping, got {type(raw).__name__}: {raw!r}"
        raise SpecError(msg)
    if _has(raw, "rampTo"):
        return RampingRate.from_dict(raw)
    if _has(raw, "arrivalRate"):
        return ConstantRate.from_dict(raw)
    if _has(raw, "arrivalCount"):
        return FixedCount.from_dict(raw)
    if _has(raw, "pause"):
        return Pause.from_dict(raw)
    return UnknownPhase.from_dict(raw)
