"""Custom exception hierarchy for phasesplit."""

from __future__ import annotations


class PhaseSplitError(Exception):
    """Base exception for all phasesplit errors.

    All custom exceptions in phasesplit inherit from this class, making it
    easy to catch any library-specific error with a single except clause.
    """


class ConfigError(PhaseSplitError):
    """Raised when configuration or caller arguments are invalid.

    Examples:
        - The requested worker count is zero or negative.
        - An environment variable has an invalid value.
    """


class SpecError(PhaseSplitError):
    """Raised when a test script document is malformed.

    Examples:
        - The script has no ``config.phases`` list.
        - A phase entry is not a mapping.
        - A numeric phase field holds a non-numeric value.
        - A script file cannot be read or parsed.
    """


class DistributionError(PhaseSplitError):
    """Raised when a total cannot be split across workers without loss.

    This is fatal: the partitioner never continues with a load total that
    differs from the one the script asked for.
    """
