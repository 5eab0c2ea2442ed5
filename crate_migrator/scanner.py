"""Dependency scanner — turns a provider's installed packages into migration pairs."""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor

from crate_migrator.exceptions import ExternalToolError, MetadataParseError
from crate_migrator.models import MigrationPair, PackageOutcome, ScanResult
from crate_migrator.providers.base import PackageManager

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 8


class DependencyScanner:
    """
    Evaluate every installed package of one provider with bounded concurrency.

    Per package, in order:
        has_target_dependency -> (if True) resolve_version -> (if a version) MigrationPair

    Tool and metadata failures are scoped to the package they occur in.
    NotImplementedCapability and failures of list_installed abort the scan.
    """

    def __init__(
        self,
        provider: PackageManager,
        concurrency: int = DEFAULT_CONCURRENCY,
        run_timeout: float | None = None,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.provider = provider
        self.concurrency = concurrency
        self.run_timeout = run_timeout

    def evaluate(self, package: str) -> PackageOutcome:
        """Run the detection/resolution protocol for a single package (blocking)."""
        outcome = PackageOutcome(package=package)
        try:
            outcome.flagged = self.provider.has_target_dependency(package)
            if not outcome.flagged:
                return outcome
            outcome.version = self.provider.resolve_version(package)
        except (ExternalToolError, MetadataParseError) as e:
            logger.debug("Skipping %s: %s", package, e)
            outcome.error = str(e)
            outcome.version = None
            return outcome

        if outcome.version:
            outcome.pair = MigrationPair(
                uninstall_command=self.provider.format_uninstall_command(package),
                install_command=self.provider.format_install_command(
                    f"{package}@{outcome.version}"
                ),
            )
        return outcome

    async def scan(self) -> ScanResult:
        """List installed packages and evaluate them concurrently.

        Outcomes are returned in listing order.
        """
        loop = asyncio.get_running_loop()
        # Shutdown drops queued evaluations and does not join running ones.
        executor = ThreadPoolExecutor(
            max_workers=self.concurrency, thread_name_prefix="crate-migrator-scan"
        )
        try:
            return await self._scan(loop, executor)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

    async def _scan(
        self,
        loop: asyncio.AbstractEventLoop,
        executor: ThreadPoolExecutor,
    ) -> ScanResult:
        packages = await loop.run_in_executor(executor, self.provider.list_installed)
        logger.debug("%s reports %d installed packages", self.provider.name, len(packages))
        result = ScanResult(manager=self.provider.name)
        if not packages:
            return result

        sem = asyncio.Semaphore(self.concurrency)

        async def _run_one(package: str) -> PackageOutcome:
            async with sem:
                return await loop.run_in_executor(executor, self.evaluate, package)

        tasks = [asyncio.ensure_future(_run_one(p)) for p in packages]
        try:
            gathered = asyncio.gather(*tasks)
            if self.run_timeout is not None:
                outcomes = await asyncio.wait_for(gathered, timeout=self.run_timeout)
            else:
                outcomes = await gathered
        except BaseException:
            for t in tasks:
                t.cancel()
            raise

        result.outcomes = list(outcomes)
        return result

    def scan_sync(self) -> ScanResult:
        return asyncio.run(self.scan())
