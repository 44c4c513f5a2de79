"""Use case running one check-and-notify cycle."""

import logging
from dataclasses import dataclass, field

from ...domain.entities import Alert, HostEvaluation
from ...domain.services import AlarmPolicy, to_root_domain
from ...domain.value_objects import AlarmThresholds
from ..exceptions import DeliveryFailedError, SourceUnavailableError
from ..ports import DomainSource, NotificationSender
from .evaluate_expiry import ExpiryEvaluator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Result of a single check cycle."""

    hosts_checked: int = 0
    alerts: tuple[Alert, ...] = ()
    alerts_sent: int = 0
    deliveries_failed: int = 0
    certificate_failures: int = 0
    domain_failures: int = 0
    source_error: str | None = None
    dry_run: bool = False
    errors: tuple[str, ...] = field(default=(), repr=False)

    @property
    def success(self) -> bool:
        """Check if the cycle completed, i.e. the host list was fetched."""
        return self.source_error is None

    def get_summary(self) -> str:
        """Generate a human-readable summary of the cycle."""
        if self.source_error:
            return f"Cycle aborted: {self.source_error}"
        return (
            f"{self.hosts_checked} hosts checked, {len(self.alerts)} alerts, "
            f"{self.alerts_sent} deliveries, {self.deliveries_failed} failed deliveries, "
            f"{self.certificate_failures} certificate failures, "
            f"{self.domain_failures} domain failures"
        )


def _failed_domains(evaluations: list[HostEvaluation]) -> list[str]:
    """Registrable domains whose registration lookup failed."""
    return sorted(
        {to_root_domain(e.hostname) or e.hostname for e in evaluations if e.domain_failed}
    )


def _format_failures(title: str, names: list[str]) -> str:
    """Format a list of failed names as a single report entry."""
    if len(names) == 1:
        return f"{title}: {names[0]}"
    lines = "\n".join(f"- {name}" for name in names)
    return f"{title} ({len(names)}):\n{lines}"


class CheckExpirations:
    """
    Use case for checking host expirations and sending notifications.

    This is the main application service. One ``execute`` call is one
    cycle: fetch hosts, evaluate them all, decide which results alert, and
    fan every alert out to every configured sender.
    """

    def __init__(
        self,
        source: DomainSource,
        evaluator: ExpiryEvaluator,
        notification_senders: list[NotificationSender],
        thresholds: AlarmThresholds,
        *,
        dry_run: bool = False,
    ) -> None:
        """
        Initialize the use case.

        Args:
            source: Adapter listing the hostnames to check.
            evaluator: Evaluates expiry for each hostname.
            notification_senders: List of notification adapters.
            thresholds: Alarm thresholds configuration.
            dry_run: If True, log alerts instead of sending them.
        """
        self._source = source
        self._evaluator = evaluator
        self._senders = [s for s in notification_senders if s.is_configured()]
        self._policy = AlarmPolicy(thresholds)
        self._dry_run = dry_run

    async def execute(self) -> CheckResult:
        """
        Execute one check cycle.

        Returns:
            CheckResult with counts of hosts, alerts and failures.
        """
        logger.info("Starting expiry check using source %s...", self._source.name)

        try:
            hostnames = await self._source.list_hostnames()
        except SourceUnavailableError as e:
            logger.error("Failed to load hostnames from %s: %s", self._source.name, e)
            errors = [f"Failed to load hostnames from source {self._source.name}: {e}"]
            await self._send_errors(errors)
            return CheckResult(source_error=str(e), dry_run=self._dry_run, errors=tuple(errors))

        if not hostnames:
            logger.warning("Source %s returned no hostnames", self._source.name)
            return CheckResult(dry_run=self._dry_run)

        logger.info("Loaded %d hostnames", len(hostnames))

        evaluations = await self._evaluator.evaluate_all(hostnames)
        alerts = self._policy.decide(evaluations)
        errors = self._collect_errors(evaluations)

        certificate_failures = sum(1 for e in evaluations if e.certificate_failed)
        domain_failures = len(_failed_domains(evaluations))
        logger.info(
            "Evaluation complete: %d hosts, %d alerts, %d certificate failures",
            len(evaluations),
            len(alerts),
            certificate_failures,
        )

        sent = 0
        failed = 0

        if self._dry_run:
            self._log_dry_run(alerts, errors)
        elif not self._senders:
            logger.warning("No notification senders configured")
        else:
            sent, failed = await self._send_alerts(alerts)
            await self._send_errors(errors)

        result = CheckResult(
            hosts_checked=len(evaluations),
            alerts=tuple(alerts),
            alerts_sent=sent,
            deliveries_failed=failed,
            certificate_failures=certificate_failures,
            domain_failures=domain_failures,
            dry_run=self._dry_run,
            errors=tuple(errors),
        )
        logger.info("Check complete: %s", result.get_summary())
        return result

    async def _send_alerts(self, alerts: list[Alert]) -> tuple[int, int]:
        """Send every alert through every configured sender."""
        sent = 0
        failed = 0

        for alert in alerts:
            for sender in self._senders:
                name = sender.__class__.__name__
                try:
                    await sender.send(alert)
                except DeliveryFailedError as e:
                    failed += 1
                    logger.error("Alert for %s not delivered via %s: %s", alert.hostname, name, e)
                except Exception:
                    failed += 1
                    logger.exception("Error sending alert for %s via %s", alert.hostname, name)
                else:
                    sent += 1

        return sent, failed

    async def _send_errors(self, errors: list[str]) -> None:
        """Send the cycle's error report through every configured sender."""
        if not errors or self._dry_run:
            return

        for sender in self._senders:
            name = sender.__class__.__name__
            try:
                await sender.send_errors(errors)
            except DeliveryFailedError as e:
                logger.error("Error report not delivered via %s: %s", name, e)
            except Exception:
                logger.exception("Error sending error report via %s", name)

    @staticmethod
    def _collect_errors(evaluations: list[HostEvaluation]) -> list[str]:
        """Build error report entries for unexpected failures."""
        errors: list[str] = []

        domain_failed = _failed_domains(evaluations)
        if domain_failed:
            errors.append(_format_failures("Domain check failed", domain_failed))

        certificate_failed = sorted(
            e.hostname
            for e in evaluations
            if e.certificate_failed and not e.certificate_error_expected
        )
        if certificate_failed:
            errors.append(_format_failures("Certificate check failed", certificate_failed))

        return errors

    def _log_dry_run(self, alerts: list[Alert], errors: list[str]) -> None:
        """Log alerts and errors in dry run mode."""
        logger.info("DRY RUN: Would send %d alerts", len(alerts))
        for alert in alerts:
            logger.info("  %s %s", alert.severity.emoji, alert.message)
        for error in errors:
            logger.info("  error: %s", error)
