"""Split one load-test script into per-worker scripts."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from phasesplit._internal.errors import SpecError
from phasesplit._internal.logging import get_logger
from phasesplit.distribute import _validate_workers
from phasesplit.phases.classify import classify_phase

if TYPE_CHECKING:
    from collections.abc import Sequence

    from phasesplit._internal.types import Script
    from phasesplit.phases.base import Phase

logger = get_logger("partition")

# Hooks run once by the coordinating process, never by workers.
_COORDINATOR_ONLY_KEYS = ("before", "after")


def _raw_phases(script: Mapping[str, Any]) -> list[Any]:
    """Return the ``config.phases`` list of *script*.

    Raises:
        SpecError: If the script, its ``config`` or its ``phases`` have the wrong shape.
    """
    if not isinstance(script, Mapping):
        msg = f"script must be a mapping, got {type(script).__name__}"
        raise SpecError(msg)
    config = script.get("config")
    if not isinstance(config, Mapping):
        msg = "script has no 'config' section"
        raise SpecError(msg)
    phases = config.get("phases")
    if not isinstance(phases, list):
        msg = "script has no 'config.phases' list"
        raise SpecError(msg)
    return phases


def split_phases(phases: Sequence[Phase], num_workers: int) -> list[list[Phase]]:
    """Split every phase and regroup the pieces per worker.

    Args:
        phases: Classified phases, in script order.
        num_workers: Number of workers.  Must be >= 1.

    Returns:
        *num_workers* phase lists, each as long as *phases* and in the same
        order.

    Raises:
        ConfigError: If *num_workers* < 1.
        DistributionError: If a phase total cannot be split without loss.
    """
    _validate_workers(num_workers)
    per_worker: list[list[Phase]] = [[] for _ in range(num_workers)]
    for phase in phases:
        for worker_phases, piece in zip(per_worker, phase.split(num_workers), strict=True):
            worker_phases.append(piece)
    return per_worker


def is_idle_script(script: Mapping[str, Any]) -> bool:
    """Return True if no phase of *script* generates any arrivals.

    Raises:
        SpecError: If the script has no well-formed ``config.phases`` list.
    """
    return all(classify_phase(raw).is_idle() for raw in _raw_phases(script))


def _build_worker_script(script: Mapping[str, Any], phases: Sequence[Phase]) -> Script:
    worker_script = copy.deepcopy(dict(script))
    worker_script["config"]["phases"] = [phase.to_dict() for phase in phases]
    for key in _COORDINATOR_ONLY_KEYS:
        worker_script.pop(key, None)
    return worker_script


def divide_work(script: Mapping[str, Any], num_workers: int) -> list[Script]:
    """Partition *script* into at most *num_workers* worker scripts.

    Each worker script is a deep copy of *script* with its own share of every
    phase and without the ``before`` / ``after`` hooks.  Running all returned
    scripts side by side produces the same total load as running *script*
    alone.  Workers whose share is idle in every phase are left out, and the
    phases of each remaining script are tagged with ``totalWorkers`` (number
    of scripts returned) and ``worker`` (1-based position).

    *script* itself is never modified.

    Args:
        script: The parsed test script.  Must contain ``config.phases``.
        num_workers: Number of workers to split across.  Must be >= 1.

    Returns:
        The worker scripts, in worker order.  May be shorter than
        *num_workers*, and is empty only when nothing in *script* generates
        load.

    Raises:
        ConfigError: If *num_workers* is not a positive integer.
        SpecError: If the script is malformed.
        DistributionError: If a phase total cannot be split without loss.

    Example::

        script = {"config": {"phases": [{"duration": 60, "arrivalRate": 2}]}}
        workers = divide_work(script, 4)
        assert len(workers) == 2
        assert workers[1]["config"]["phases"][0]["worker"] == 2
    """
    _validate_workers(num_workers)
    phases = [classify_phase(raw) for raw in _raw_phases(script)]
    per_worker = split_phases(phases, num_workers)

    survivors = [
        _build_worker_script(script, worker_phases)
        for worker_phases in per_worker
        if not all(phase.is_idle() for phase in worker_phases)
    ]

    dropped = num_workers - len(survivors)
    if dropped:
        logger.info(
            "Dropped %d of %d workers with no load to generate",
            dropped,
            num_workers,
        )

    total = len(survivors)
    for index, worker_script in enumerate(survivors, start=1):
        for phase in worker_script["config"]["phases"]:
            phase["totalWorkers"] = total
            phase["worker"] = index

    logger.debug(
        "Split %d phases across %d workers (%d requested)",
        len(phases),
        total,
        num_workers,
    )
    return survivors
