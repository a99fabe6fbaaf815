"""Pause phase: no arrivals for a period of time."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from phasesplit.phases.base import Phase, _extra, _render

if TYPE_CHECKING:
    from phasesplit._internal.types import RawPhase

_KNOWN_KEYS = ("name", "pause")


@dataclass(frozen=True)
class Pause(Phase):
    """Hold the test for *duration* without starting any virtual users.

    Written to scripts as ``{"name": ..., "pause": duration}``.

    Attributes:
        duration: How long the pause lasts, copied through as given.
        name: Optional phase name.
        extra: Keys of the raw phase that are not interpreted.
    """

    duration: Any
    name: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: RawPhase) -> Pause:
        """Build a Pause from a raw phase carrying a ``pause`` key."""
        return cls(duration=raw["pause"], name=raw.get("name"), extra=_extra(raw, _KNOWN_KEYS))

    def split(self, num_workers: int) -> list[Phase]:
        """Give every worker the same pause."""
        return [self] * num_workers

    def is_idle(self) -> bool:
        return True

    def to_dict(self) -> RawPhase:
        return _render({"name": self.name, "pause": self.duration}, self.extra)

    def describe(self) -> str:
        return f"Pause: {self.duration}s"
