#!/usr/bin/env python3
"""
Certificate & Domain Expiry Checker

Composition root and application entry point.
Wires together all layers following hexagonal architecture principles.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
import sys
from typing import TYPE_CHECKING

from . import __version__
from .application.exceptions import ConfigurationError
from .application.use_cases import CheckExpirations, ExpiryEvaluator
from .infrastructure.adapters import (
    ConsoleNotificationSender,
    FileDomainSource,
    SelectelDomainSource,
    TelegramNotificationSender,
    TlsCertificateInspector,
    WhoisRegistrationLookup,
)
from .infrastructure.config import Settings, configure_logging, load_settings

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .application.ports import DomainSource, NotificationSender
    from .application.use_cases import CheckResult

logger = logging.getLogger(__name__)

SINGLE_SHOT_ARG = "single_shot"


class ApplicationContainer:
    """
    Dependency injection container.

    Responsible for creating and wiring all application components.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize container with settings."""
        self._settings = settings

    def create_domain_source(self) -> DomainSource:
        """Create the configured domain source adapter."""
        selectel_config = self._settings.selectel_config
        if selectel_config is not None:
            return SelectelDomainSource(selectel_config)

        filename = self._settings.sources.filename
        if filename is None:
            msg = "No domain source configured"
            raise ConfigurationError(msg)
        return FileDomainSource(filename)

    def create_notification_senders(self) -> list[NotificationSender]:
        """Create all configured notification sender adapters."""
        senders: list[NotificationSender] = []

        if self._settings.notifiers.console_enabled:
            senders.append(ConsoleNotificationSender())

        telegram_config = self._settings.telegram_config
        if telegram_config is not None:
            senders.append(TelegramNotificationSender(telegram_config))

        logger.info(
            "Configured notification senders: %s",
            [s.__class__.__name__ for s in senders] or "None",
        )
        return senders

    def create_evaluator(self) -> ExpiryEvaluator:
        """Create the expiry evaluator with its TLS and WHOIS adapters."""
        timeout = self._settings.tls_timeout_seconds
        return ExpiryEvaluator(
            TlsCertificateInspector(timeout=timeout),
            WhoisRegistrationLookup() if self._settings.check_domains else None,
            max_concurrency=self._settings.max_concurrency,
            tls_timeout=timeout,
        )

    def create_check_use_case(self) -> CheckExpirations:
        """Create the main use case with all dependencies."""
        return CheckExpirations(
            source=self.create_domain_source(),
            evaluator=self.create_evaluator(),
            notification_senders=self.create_notification_senders(),
            thresholds=self._settings.thresholds,
            dry_run=self._settings.dry_run,
        )


class Application:
    """
    Main application orchestrator.

    Handles run modes (single-shot or continuous) and lifecycle.
    """

    def __init__(
        self,
        settings: Settings,
        container: ApplicationContainer | None = None,
    ) -> None:
        """Initialize application with settings."""
        self._settings = settings
        self._container = container or ApplicationContainer(settings)
        self._use_case: CheckExpirations | None = None

    def _get_use_case(self) -> CheckExpirations:
        if self._use_case is None:
            self._use_case = self._container.create_check_use_case()
        return self._use_case

    async def run_once(self) -> CheckResult:
        """Execute a single check cycle."""
        return await self._get_use_case().execute()

    async def run_scheduled(self) -> None:
        """
        Run cycles forever, pausing the check interval after each one.

        The pause starts when a cycle has finished notifying, so cycles
        never overlap. A failing cycle is logged and does not stop the loop.
        """
        interval = self._settings.check_interval
        logger.info("Starting continuous mode, checking every %s", interval)

        while True:
            try:
                await self.run_once()
            except Exception:
                logger.exception("Scheduled check failed")

            logger.info("Next check in %s", interval)
            await asyncio.sleep(interval.total_seconds())

    async def run(self, *, single_shot: bool = False) -> int:
        """
        Run the application in the requested mode.

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        # Configuration errors must surface before the first cycle.
        self._get_use_case()

        if single_shot:
            logger.info("Running in single-shot mode")
            result = await self.run_once()
            return 0 if result.success else 1

        await self.run_scheduled()
        return 0  # Never reached in continuous mode


def _install_signal_handlers() -> None:
    """Cancel the running task on SIGINT/SIGTERM for a clean shutdown."""
    task = asyncio.current_task()
    if task is None:
        return

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        # Not available on Windows event loops.
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, task.cancel)


async def async_main(argv: Sequence[str] | None = None) -> int:
    """Async entry point."""
    args = list(sys.argv[1:] if argv is None else argv)
    configure_logging()

    try:
        logger.info("Expiry checker %s starting...", __version__)

        settings = load_settings()
        configure_logging(settings.log_config)

        app = Application(settings)
        _install_signal_handlers()
        return await app.run(single_shot=SINGLE_SHOT_ARG in args)

    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return 1
    except (KeyboardInterrupt, asyncio.CancelledError):
        logger.info("Shutting down...")
        return 0
    except Exception:
        logger.exception("Unexpected error")
        return 1


def main() -> None:
    """Main entry point."""
    exit_code = asyncio.run(async_main())
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
