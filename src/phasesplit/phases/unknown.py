"""Fallback for phase entries that match no known phase kind."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from phasesplit._internal.logging import get_logger
from phasesplit.phases.base import Phase

if TYPE_CHECKING:
    from phasesplit._internal.types import RawPhase

logger = get_logger("phases")


@dataclass(frozen=True)
class UnknownPhase(Phase):
    """A phase with none of ``rampTo``, ``arrivalRate``, ``arrivalCount`` or ``pause``.

    Such a phase means the script slipped past validation upstream.  It is
    passed to every worker unchanged and reported with a warning; it is never
    treated as idle.

    Attributes:
        raw: The phase mapping as it appeared in the script.
    """

    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: RawPhase) -> UnknownPhase:
        return cls(raw=dict(raw))

    def split(self, num_workers: int) -> list[Phase]:
        """Copy the phase to every worker and log the anomaly."""
        logger.warning(
            "Unknown phase definition, copying it to all %d workers unchanged: %r",
            num_workers,
            self.raw,
            extra={"context": {"phase": self.raw}},
        )
        return [self] * num_workers

    def is_idle(self) -> bool:
        return False

    def to_dict(self) -> RawPhase:
        return copy.deepcopy(self.raw)

    def describe(self) -> str:
        name = self.raw.get("name")
        return f"Unknown phase {name!r}" if name is not None else "Unknown phase"
