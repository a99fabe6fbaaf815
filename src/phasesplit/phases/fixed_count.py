"""Fixed-count phase: a set number of arrivals spread over the phase."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from phasesplit.phases.base import Phase, _coerce_number, _extra, _optional_number, _render
from phasesplit.phases.pause import Pause

if TYPE_CHECKING:
    from phasesplit._internal.types import Number, RawPhase

_KNOWN_KEYS = ("name", "duration", "arrivalCount", "maxVusers")


@dataclass(frozen=True)
class FixedCount(Phase):
    """Start exactly *arrival_count* virtual users over *duration*.

    A count is not a rate, so it is not divided: the first worker runs the
    whole phase and every other worker pauses for the same duration.  This
    keeps phase boundaries aligned across workers.

    Attributes:
        arrival_count: Total arrivals for the phase.
        duration: Phase length, copied through as given.
        name: Optional phase name.
        max_vusers: Optional cap on concurrent virtual users.
        extra: Keys of the raw phase that are not interpreted.
    """

    arrival_count: Number
    duration: Any = None
    name: str | None = None
    max_vusers: Number | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: RawPhase) -> FixedCount:
        """Build a FixedCount from a raw phase carrying ``arrivalCount``."""
        return cls(
            arrival_count=_coerce_number(raw, "arrivalCount"),
            duration=raw.get("duration"),
            name=raw.get("name"),
            max_vusers=_optional_number(raw, "maxVusers"),
            extra=_extra(raw, _KNOWN_KEYS),
        )

    def split(self, num_workers: int) -> list[Phase]:
        """Keep the phase on the first worker and pause the others."""
        pause = Pause(duration=self.duration, name=self.name)
        return [self, *([pause] * (num_workers - 1))]

    def is_idle(self) -> bool:
        return self.arrival_count == 0

    def to_dict(self) -> RawPhase:
        return _render(
            {
                "name": self.name,
                "duration": self.duration,
                "arrivalCount": self.arrival_count,
                "maxVusers": self.max_vusers,
            },
            self.extra,
        )

    def describe(self) -> str:
        desc = f"Fixed count: {self.arrival_count} arrivals over {self.duration}s"
        if self.max_vusers is not None:
            desc += f" (max {self.max_vusers} vusers)"
        return desc
