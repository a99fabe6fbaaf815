"""Constant-rate phase: a fixed number of arrivals per second."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from phasesplit.distribute import count_positive, distribute, distribute_among_active
from phasesplit.phases.base import (
    Phase,
    _coerce_number,
    _compact,
    _extra,
    _optional_number,
    _render,
)

if TYPE_CHECKING:
    from phasesplit._internal.types import Number, RawPhase

_KNOWN_KEYS = ("name", "duration", "arrivalRate", "maxVusers")


@dataclass(frozen=True)
class ConstantRate(Phase):
    """Start *arrival_rate* virtual users every second for *duration*.

    The rate is split as whole arrivals: a rate of 2 across 4 workers gives
    ``[1, 1, 0, 0]`` rather than four workers at 0.5.  The optional
    *max_vusers* cap is then split only among workers with a non-zero rate.

    Attributes:
        arrival_rate: Arrivals per second.
        duration: Phase length, copied through as given.
        name: Optional phase name.
        max_vusers: Optional cap on concurrent virtual users.
        extra: Keys of the raw phase that are not interpreted.
    """

    arrival_rate: Number
    duration: Any = None
    name: str | None = None
    max_vusers: Number | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: RawPhase) -> ConstantRate:
        """Build a ConstantRate from a raw phase carrying ``arrivalRate``."""
        return cls(
            arrival_rate=_coerce_number(raw, "arrivalRate"),
            duration=raw.get("duration"),
            name=raw.get("name"),
            max_vusers=_optional_number(raw, "maxVusers"),
            extra=_extra(raw, _KNOWN_KEYS),
        )

    def split(self, num_workers: int) -> list[Phase]:
        """Split the rate with whole-number shares, then the cap among active workers."""
        rates = distribute(self.arrival_rate, num_workers)
        caps: list[int] | None = None
        if self.max_vusers is not None:
            caps = distribute_among_active(self.max_vusers, count_positive(rates), num_workers)
        return [
            replace(
                self,
                arrival_rate=rates[i],
                max_vusers=caps[i] if caps is not None else None,
            )
            for i in range(num_workers)
        ]

    def is_idle(self) -> bool:
        return self.arrival_rate == 0

    def to_dict(self) -> RawPhase:
        return _render(
            {
                "name": self.name,
                "duration": self.duration,
                "arrivalRate": _compact(self.arrival_rate),
                "maxVusers": self.max_vusers,
            },
            self.extra,
        )

    def describe(self) -> str:
        desc = f"Constant: {_compact(self.arrival_rate)}/s for {self.duration}s"
        if self.max_vusers is not None:
            desc += f" (max {self.max_vusers} vusers)"
        return desc
