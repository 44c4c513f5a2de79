"""Use case for evaluating certificate and registration expiry of hosts."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ...domain.entities import DomainStatus, HostEvaluation
from ...domain.services import normalize_hostname, to_root_domain
from ..exceptions import CertificateUnreachableError, RegistrationLookupError

if TYPE_CHECKING:
    from ..ports import CertificateInspector, RegistrationLookup

logger = logging.getLogger(__name__)

# Failures that routinely happen for hosts without HTTPS; not worth reporting.
EXPECTED_ERRORS: tuple[str, ...] = (
    "timed out",
    "connection refused",
    "tlsv1 unrecognized name",
    "tlsv1 alert internal error",
    "name or service not known",
    "no address associated with hostname",
    "nodename nor servname provided",
    "temporary failure in name resolution",
    "host is unreachable",
    "no route to host",
)


def is_expected_error(reason: str) -> bool:
    """Check if a certificate failure is one of the routine ones."""
    lowered = reason.lower()
    return any(expected in lowered for expected in EXPECTED_ERRORS)


class ExpiryEvaluator:
    """
    Evaluates certificate and (optionally) registration expiry per host.

    Evaluations run concurrently, bounded by ``max_concurrency``. A failure
    for one host is recorded on its ``HostEvaluation`` and never affects
    the others.
    """

    def __init__(
        self,
        inspector: CertificateInspector,
        registration_lookup: RegistrationLookup | None = None,
        *,
        max_concurrency: int = 20,
        tls_timeout: float = 5.0,
        lookup_timeout: float = 30.0,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            inspector: Adapter reading certificates over TLS.
            registration_lookup: Adapter for domain registration expiry, or
                None to skip registration checks.
            max_concurrency: Upper bound on simultaneous checks.
            tls_timeout: Seconds allowed for one certificate check.
            lookup_timeout: Seconds allowed for one registration lookup.
        """
        if max_concurrency < 1:
            msg = f"max_concurrency must be positive, got {max_concurrency}"
            raise ValueError(msg)
        self._inspector = inspector
        self._lookup = registration_lookup
        self._max_concurrency = max_concurrency
        self._tls_timeout = tls_timeout
        self._lookup_timeout = lookup_timeout

    @property
    def checks_domains(self) -> bool:
        """Whether registration expiry is evaluated."""
        return self._lookup is not None

    async def evaluate(self, hostname: str) -> HostEvaluation | None:
        """
        Evaluate a single hostname.

        Returns:
            The evaluation, or None if the name is skipped like in
            ``evaluate_all``.
        """
        normalized = normalize_hostname(hostname)
        if normalized is None:
            logger.debug("Skipping hostname %r", hostname)
            return None
        hostname = normalized

        domain: DomainStatus | None = None
        domain_error: str | None = None
        if self._lookup is not None:
            root = to_root_domain(hostname)
            if root:
                domain, domain_error = await self._lookup_domain(root)

        return await self._check_certificate(
            hostname, domain=domain, domain_error=domain_error
        )

    async def evaluate_all(self, hostnames: Iterable[str]) -> list[HostEvaluation]:
        """
        Evaluate every hostname and wait for all of them to finish.

        Hostnames that cannot serve HTTPS (service records, single labels)
        are skipped. Registration lookups are made once per registrable
        domain and shared by all of its hosts.

        Returns:
            One evaluation per checked hostname.
        """
        checked: list[str] = []
        for raw in hostnames:
            hostname = normalize_hostname(raw)
            if hostname is None:
                logger.debug("Skipping hostname %r", raw)
            elif hostname not in checked:
                checked.append(hostname)

        semaphore = asyncio.Semaphore(self._max_concurrency)

        domains: dict[str, tuple[DomainStatus | None, str | None]] = {}
        if self._lookup is not None:
            roots = sorted({root for h in checked if (root := to_root_domain(h))})

            async def lookup(root: str) -> tuple[DomainStatus | None, str | None]:
                async with semaphore:
                    return await self._lookup_domain(root)

            results = await asyncio.gather(*(lookup(root) for root in roots))
            domains = dict(zip(roots, results, strict=True))

        async def check(hostname: str) -> HostEvaluation:
            domain, domain_error = domains.get(to_root_domain(hostname) or "", (None, None))
            async with semaphore:
                return await self._check_certificate(
                    hostname, domain=domain, domain_error=domain_error
                )

        return list(await asyncio.gather(*(check(h) for h in checked)))

    async def _check_certificate(
        self,
        hostname: str,
        *,
        domain: DomainStatus | None,
        domain_error: str | None,
    ) -> HostEvaluation:
        """Fetch the certificate of ``hostname`` and wrap the outcome."""
        try:
            certificate = await asyncio.wait_for(
                self._inspector.inspect(hostname), timeout=self._tls_timeout
            )
        except TimeoutError:
            reason = f"timed out after {self._tls_timeout:g}s"
        except CertificateUnreachableError as e:
            reason = e.reason
        else:
            logger.debug(
                "Certificate for %s expires %s (%d days)",
                hostname,
                certificate.expiry_date.isoformat(),
                certificate.days_remaining,
            )
            return HostEvaluation(
                hostname=hostname,
                certificate=certificate,
                domain=domain,
                domain_error=domain_error,
            )

        expected = is_expected_error(reason)
        if expected:
            logger.debug("Expected certificate error for %s: %s", hostname, reason)
        else:
            logger.warning("Certificate check failed for %s: %s", hostname, reason)

        return HostEvaluation(
            hostname=hostname,
            certificate_error=reason,
            certificate_error_expected=expected,
            domain=domain,
            domain_error=domain_error,
        )

    async def _lookup_domain(self, root: str) -> tuple[DomainStatus | None, str | None]:
        """Look up registration expiry, returning (status, error)."""
        if self._lookup is None:
            return None, None
        try:
            status = await asyncio.wait_for(
                self._lookup.lookup(root), timeout=self._lookup_timeout
            )
        except TimeoutError:
            error = f"timed out after {self._lookup_timeout:g}s"
        except RegistrationLookupError as e:
            error = str(e)
        else:
            return status, None

        logger.warning("Registration lookup failed for %s: %s", root, error)
        return None, error
