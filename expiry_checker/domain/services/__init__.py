"""Domain services - Stateless operations on domain objects."""

from .alarm_policy import AlarmPolicy, should_alert
from .hostnames import normalize_hostname, to_root_domain

__all__ = [
    "AlarmPolicy",
    "normalize_hostname",
    "should_alert",
    "to_root_domain",
]
