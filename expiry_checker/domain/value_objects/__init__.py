"""Domain value objects - Immutable objects defined by their attributes."""

from .alert_kind import AlertKind
from .alert_severity import AlertSeverity
from .thresholds import AlarmThresholds

__all__ = [
    "AlarmThresholds",
    "AlertKind",
    "AlertSeverity",
]
