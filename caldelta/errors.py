"""Exceptions raised by caldelta.

Validation errors surface at construction or at the public call boundary.
Nothing in the package retries or logs-and-continues; the computations are
pure, so a second attempt would fail the same way.
"""

from dataclasses import FrozenInstanceError


class InvalidArgument(ValueError):
    """A caller handed in values that violate a documented precondition.

    Raised for spans whose start is later than their end, spans or span
    comparisons mixing timezones, negative interval magnitudes and unknown
    diff regimes.
    """


# Assigning to any attribute of a TimeInterval, CalendarComponents or
# TimeSpan raises this (all three are frozen dataclasses).
ReadOnlyViolation = FrozenInstanceError


class InvariantBroken(RuntimeError):
    """Internal logic defect; not a usage error and must not be swallowed."""


__all__ = ["InvalidArgument", "ReadOnlyViolation", "InvariantBroken"]
