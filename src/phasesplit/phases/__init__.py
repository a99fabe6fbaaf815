"""Phase kinds of a load-test script.

Every entry of a script's ``config.phases`` list is exactly one of four
phase kinds, or an :class:`UnknownPhase` when it matches none of them.  Use
:func:`classify_phase` to turn a raw mapping into its phase object.
"""

from __future__ import annotations

from phasesplit.phases.base import Phase
from phasesplit.phases.classify import classify_phase
from phasesplit.phases.constant import ConstantRate
from phasesplit.phases.fixed_count import FixedCount
from phasesplit.phases.pause import Pause
from phasesplit.phases.ramping import RampingRate
from phasesplit.phases.unknown import UnknownPhase

__all__ = [
    "ConstantRate",
    "FixedCount",
    "Pause",
    "Phase",
    "RampingRate",
    "UnknownPhase",
    "classify_phase",
]
