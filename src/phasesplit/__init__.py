"""phasesplit: split load-test scripts across worker processes."""

from __future__ import annotations

from phasesplit.distribute import distribute, distribute_even
from phasesplit.loader import dump_script, load_script
from phasesplit.partition import divide_work, is_idle_script, split_phases
from phasesplit.phases import (
    ConstantRate,
    FixedCount,
    Pause,
    Phase,
    RampingRate,
    UnknownPhase,
    classify_phase,
)

__version__ = "0.1.0"

__all__ = [
    "ConstantRate",
    "FixedCount",
    "Pause",
    "Phase",
    "RampingRate",
    "UnknownPhase",
    "classify_phase",
    "distribute",
    "distribute_even",
    "divide_work",
    "dump_script",
    "is_idle_script",
    "load_script",
    "split_phases",
]
