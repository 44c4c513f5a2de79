"""Alarm thresholds value object."""

from dataclasses import dataclass

from ..exceptions import InvalidThresholdsError


@dataclass(frozen=True, slots=True)
class AlarmThresholds:
    """Days before expiry at which alerting begins."""

    alarm_days: int = 7
    ssl_alarm_days: int = 7

    def __post_init__(self) -> None:
        """Validate thresholds are non-negative."""
        if self.alarm_days < 0 or self.ssl_alarm_days < 0:
            msg = (
                f"Thresholds must be non-negative: alarm_days({self.alarm_days}), "
                f"ssl_alarm_days({self.ssl_alarm_days})"
            )
            raise InvalidThresholdsError(msg)
