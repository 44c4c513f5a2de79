"""Application use cases."""

from .check_expirations import CheckExpirations, CheckResult
from .evaluate_expiry import ExpiryEvaluator

__all__ = [
    "CheckExpirations",
    "CheckResult",
    "ExpiryEvaluator",
]
