"""Ramping-rate phase: arrival rate changes linearly over the phase."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

from phasesplit.distribute import count_positive, distribute_among_active, distribute_even
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

_KNOWN_KEYS = ("name", "duration", "arrivalRate", "rampTo", "maxVusers")


@dataclass(frozen=True)
class RampingRate(Phase):
    """Move the arrival rate linearly from *arrival_rate* to *ramp_to*.

    Both endpoints are split into equal fractional shares, so every worker
    ramps over the same shape at ``1/n`` of the height.  The optional
    *max_vusers* cap is split as whole users among the workers that have a
    non-zero start or end rate.

    Attributes:
        ramp_to: Arrival rate at the end of the phase.
        arrival_rate: Arrival rate at the start of the phase.  Defaults to 0.
        duration: Phase length, copied through as given.
        name: Optional phase name.
        max_vusers: Optional cap on concurrent virtual users.
        extra: Keys of the raw phase that are not interpreted.
    """

    ramp_to: Number
    arrival_rate: Number = 0
    duration: Any = None
    name: str | None = None
    max_vusers: Number | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: RawPhase) -> RampingRate:
        """Build a RampingRate from a raw phase carrying ``rampTo``."""
        arrival_rate = _optional_number(raw, "arrivalRate")
        return cls(
            ramp_to=_coerce_number(raw, "rampTo"),
            arrival_rate=arrival_rate if arrival_rate is not None else 0,
            duration=raw.get("duration"),
            name=raw.get("name"),
            max_vusers=_optional_number(raw, "maxVusers"),
            extra=_extra(raw, _KNOWN_KEYS),
        )

    def split(self, num_workers: int) -> list[Phase]:
        """Split both rate endpoints evenly, then the cap among active workers."""
        rates = distribute_even(self.arrival_rate, num_workers)
        ramps = distribute_even(self.ramp_to, num_workers)
        caps: list[int] | None = None
        if self.max_vusers is not None:
            # A ramp carries load if either endpoint is non-zero.
            active = max(count_positive(rates), count_positive(ramps))
            caps = distribute_among_active(self.max_vusers, active, num_workers)
        return [
            replace(
                self,
                arrival_rate=rates[i],
                ramp_to=ramps[i],
                max_vusers=caps[i] if caps is not None else None,
            )
            for i in range(num_workers)
        ]

    def is_idle(self) -> bool:
        return self.arrival_rate == 0 and self.ramp_to == 0

    def to_dict(self) -> RawPhase:
        return _render(
            {
                "name": self.name,
                "duration": self.duration,
                "arrivalRate": _compact(self.arrival_rate),
                "rampTo": _compact(self.ramp_to),
                "maxVusers": self.max_vusers,
            },
            self.extra,
        )

    def describe(self) -> str:
        desc = (
            f"Ramp: {_compact(self.arrival_rate)}/s -> {_compact(self.ramp_to)}/s "
            f"over {self.duration}s"
        )
        if self.max_vusers is not None:
            desc += f" (max {self.max_vusers} vusers)"
        return desc
