import logging

from .diff import DiffRegime, diff, subtract
from .errors import InvalidArgument, InvariantBroken, ReadOnlyViolation
from .interval import CalendarComponents, TimeInterval
from .moment import at_tz, epoch_micros, relabel, rezone, zone_name
from .span import OverlapKind, TimeSpan

# Library logging: silent unless the application configures handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "TimeInterval",
    "CalendarComponents",
    "TimeSpan",
    "OverlapKind",
    "DiffRegime",
    "diff",
    "subtract",
    "at_tz",
    "epoch_micros",
    "zone_name",
    "rezone",
    "relabel",
    "InvalidArgument",
    "InvariantBroken",
    "ReadOnlyViolation",
]
