"""Domain source adapter implementations."""

from .file import FileDomainSource
from .selectel import SelectelConfig, SelectelDomainSource

__all__ = [
    "FileDomainSource",
    "SelectelConfig",
    "SelectelDomainSource",
]
