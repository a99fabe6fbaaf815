"""Numeric primitives for splitting load totals across workers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from phasesplit._internal.errors import ConfigError, DistributionError

if TYPE_CHECKING:
    from phasesplit._internal.types import Number


def _validate_workers(num_workers: int) -> None:
    """Raise :class:`ConfigError` unless *num_workers* is a positive integer.

    Args:
        num_workers: Worker count to validate.

    Raises:
        ConfigError: If *num_workers* is not an ``int`` or is < 1.
    """
    if isinstance(num_workers, bool) or not isinstance(num_workers, int):
        msg = f"num_workers must be an integer, got {num_workers!r}"
        raise ConfigError(msg)
    if num_workers < 1:
        msg = f"num_workers must be >= 1, got {num_workers}"
        raise ConfigError(msg)


def distribute_even(total: Number, num_workers: int) -> list[float]:
    """Split a continuous quantity into *num_workers* equal shares.

    Used for arrival rates whose fractional part is meaningful, such as the
    endpoints of a ramp.  Small totals are not special-cased: 1 split across
    4 workers is four shares of 0.25.

    Args:
        total: Quantity to split.
        num_workers: Number of shares.  Must be >= 1.

    Returns:
        A list of *num_workers* values, each ``total / num_workers``.

    Raises:
        ConfigError: If *num_workers* < 1.

    Example::

        distribute_even(10, 4)  # [2.5, 2.5, 2.5, 2.5]
    """
    _validate_workers(num_workers)
    share = total / num_workers
    return [share] * num_workers


def distribute(total: Number, num_workers: int) -> list[int]:
    """Split a whole-number total across *num_workers* as evenly as possible.

    When the total is smaller than the worker count, the first *total*
    workers receive one each and the rest receive nothing.  Otherwise every
    worker receives ``total // num_workers`` and the first
    ``total % num_workers`` workers receive one extra.

    Args:
        total: Non-negative whole number to split.  Integral floats such as
            ``10.0`` are accepted.
        num_workers: Number of shares.  Must be >= 1.

    Returns:
        A list of *num_workers* non-negative integers summing to *total*.

    Raises:
        ConfigError: If *num_workers* < 1.
        DistributionError: If *total* is negative or fractional, or if the
            shares do not add back up to *total*.

    Example::

        distribute(20, 3)  # [7, 7, 6]
        distribute(1, 4)   # [1, 0, 0, 0]
    """
    _validate_workers(num_workers)
    if isinstance(total, float):
        if not total.is_integer():
            msg = f"cannot split fractional total {total} into whole shares"
            raise DistributionError(msg)
        total = int(total)
    if total < 0:
        msg = f"cannot split negative total {total}"
        raise DistributionError(msg)

    if total < num_workers:
        shares = [1 if i < total else 0 for i in range(num_workers)]
    else:
        base, remainder = divmod(total, num_workers)
        shares = [base + 1 if i < remainder else base for i in range(num_workers)]

    if sum(shares) != total:
        msg = f"split of {total} across {num_workers} workers sums to {sum(shares)}"
        raise DistributionError(msg)
    return shares


def distribute_among_active(
    total: Number,
    active_workers: int,
    num_workers: int,
) -> list[int]:
    """Split *total* across the first *active_workers* of *num_workers*.

    Workers past the active prefix get 0.  When no worker is active nothing
    is split and every worker gets 0.

    Args:
        total: Non-negative whole number to split.
        active_workers: Number of workers carrying load, ``0 <= active_workers <= num_workers``.
        num_workers: Total number of workers.

    Returns:
        A list of *num_workers* integers.
    """
    _validate_workers(num_workers)
    if active_workers == 0:
        return [0] * num_workers
    shares = distribute(total, active_workers)
    return shares + [0] * (num_workers - active_workers)


def count_positive(values: list[float] | list[int]) -> int:
    """Return how many of *values* are strictly greater than zero."""
    return sum(1 for v in values if v > 0)
