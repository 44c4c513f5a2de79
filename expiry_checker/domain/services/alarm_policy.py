"""Domain service deciding which expiry results become alerts."""

from collections.abc import Iterable

from ..entities import Alert, HostEvaluation
from ..value_objects import AlarmThresholds


def should_alert(days_remaining: int, threshold: int) -> bool:
    """Alert when the days remaining are at or below the threshold."""
    return days_remaining <= threshold


def _urgency(alert: Alert) -> tuple[int, str]:
    return alert.days_remaining, alert.hostname


class AlarmPolicy:
    """Domain service applying alarm thresholds to evaluation results."""

    def __init__(self, thresholds: AlarmThresholds) -> None:
        """Initialize policy with thresholds."""
        self._thresholds = thresholds

    @property
    def thresholds(self) -> AlarmThresholds:
        """Thresholds this policy applies."""
        return self._thresholds

    def decide(self, evaluations: Iterable[HostEvaluation]) -> list[Alert]:
        """
        Turn evaluation results into alerts.

        Certificates are compared against ``ssl_alarm_days`` and domain
        registrations against ``alarm_days``. Missing statuses never alert.
        Several hosts under one registrable domain share a domain status,
        so each domain is alerted at most once.

        Args:
            evaluations: Results for every host in the cycle.

        Returns:
            Alerts ordered by urgency (fewest days remaining first).
        """
        certificate_alerts: list[Alert] = []
        domain_alerts: dict[str, Alert] = {}

        for evaluation in evaluations:
            certificate = evaluation.certificate
            if certificate and should_alert(
                certificate.days_remaining, self._thresholds.ssl_alarm_days
            ):
                certificate_alerts.append(Alert.for_certificate(certificate))

            domain = evaluation.domain
            if (
                domain
                and domain.hostname not in domain_alerts
                and should_alert(domain.days_remaining, self._thresholds.alarm_days)
            ):
                domain_alerts[domain.hostname] = Alert.for_domain(domain)

        return sorted(domain_alerts.values(), key=_urgency) + sorted(
            certificate_alerts, key=_urgency
        )
