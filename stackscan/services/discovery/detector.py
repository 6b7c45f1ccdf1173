"""
StackDetector - technology stack detection for a project directory.

Runs the scanners, deduplicates by category, confirms candidates
concurrently and aggregates the confirmed records. A scan never raises:
any filesystem condition degrades to an emptier result.
"""

import asyncio
import logging
import os
import time
from dataclasses import replace
from pathlib import Path

from stackscan.config import Settings
from stackscan.config import settings as default_settings
from stackscan.services.discovery.aggregator import aggregate
from stackscan.services.discovery.categories import deduplicate
from stackscan.services.discovery.confirmation import confirm_record
from stackscan.services.discovery.scanner import scan_directories, scan_source_files
from stackscan.services.discovery.types import AnalysisResult, DiscoveryRecord
from stackscan.services.knowledge import KnowledgeBase, load_knowledge_base

logger = logging.getLogger(__name__)


class StackDetector:
    """
    Detects a project's technology stack from its files.

    The knowledge base is loaded once at construction and shared, read-only,
    by every scan. Each call to ``analyze`` builds its result from scratch,
    so one detector can serve concurrent scans.
    """

    def __init__(
        self,
        knowledge_base: KnowledgeBase | None = None,
        settings: Settings | None = None,
    ) -> None:
        """
        Args:
            knowledge_base: Format table; loaded from settings (or the packaged default) if None
            settings: Scan settings; the module-level defaults if None

        Raises:
            KnowledgeBaseError: If the configured knowledge base can't be loaded
        """
        self.settings = settings if settings is not None else default_settings
        if knowledge_base is None:
            knowledge_base = load_knowledge_base(self.settings.knowledge_base_path)
        self.knowledge_base = knowledge_base

    async def analyze(self, root: str | os.PathLike[str]) -> AnalysisResult:
        """
        Analyze the project rooted at ``root``.

        Args:
            root: Scan root directory

        Returns:
            AnalysisResult; empty (score 0, "unknown-stack") for a missing root
        """
        started = time.perf_counter()
        scan_root = Path(root)

        try:
            scan_root = Path(os.path.abspath(scan_root))
            is_directory = scan_root.is_dir()
        except OSError:
            is_directory = False
        if not is_directory:
            logger.info(f"Scan root {scan_root} is not a readable directory, returning empty result")
            return AnalysisResult(scan_root=scan_root)

        candidates = await asyncio.to_thread(self._discover, scan_root)
        records = await self._confirm_all(candidates)

        result = aggregate(scan_root, records)
        result.duration_ms = (time.perf_counter() - started) * 1000

        logger.info(
            f"Analyzed {scan_root}: {len(result.confirmed_discoveries)}/{len(result.discoveries)} "
            f"confirmed, score {result.total_score}, stack {result.stack_signature} "
            f"({result.duration_ms:.0f}ms)"
        )
        return result

    def _discover(self, scan_root: Path) -> list[DiscoveryRecord]:
        """Run both scanners and deduplicate by category."""
        try:
            found = scan_directories(scan_root, self.knowledge_base, self.settings)
            seen_paths = {record.file_path for record in found}
            found.extend(
                scan_source_files(scan_root, self.knowledge_base, self.settings, exclude=seen_paths)
            )
        except OSError as e:
            logger.warning(f"Scan of {scan_root} aborted: {e}")
            return []

        candidates = deduplicate(found)
        logger.debug(f"{len(found)} candidates under {scan_root}, {len(candidates)} after dedup")
        return candidates

    async def _confirm_all(self, candidates: list[DiscoveryRecord]) -> list[DiscoveryRecord]:
        """
        Confirm candidates concurrently, bounded by a semaphore.

        Results are collected in input order; a confirmation that raises
        leaves its record unconfirmed.
        """
        if not candidates:
            return []

        semaphore = asyncio.Semaphore(self.settings.max_concurrent_confirmations)

        async def confirm_with_limit(record: DiscoveryRecord) -> DiscoveryRecord:
            async with semaphore:
                return await asyncio.to_thread(confirm_record, record, self.settings)

        tasks = [confirm_with_limit(record) for record in candidates]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        confirmed: list[DiscoveryRecord] = []
        for record, result in zip(candidates, results):
            if isinstance(result, BaseException):
                logger.warning(f"Confirmation failed for {record.file_path}: {result}")
                confirmed.append(replace(record, confirmed=False))
            else:
                confirmed.append(result)
        return confirmed


def detect_stack(
    root: str | os.PathLike[str],
    knowledge_base: KnowledgeBase | None = None,
    settings: Settings | None = None,
) -> AnalysisResult:
    """Synchronous convenience wrapper around ``StackDetector.analyze``."""
    detector = StackDetector(knowledge_base=knowledge_base, settings=settings)
    return asyncio.run(detector.analyze(root))
