"""Puppet last run summary collector."""

import logging
import threading
from typing import List, Sequence

from ..report.loader import ReportLoader
from ..utils.metrics import MetricDescriptor, Sample
from .base import BaseCollector, ON_ERROR_SKIP, safe_collect


class PuppetSummaryCollector(BaseCollector):
    """
    Expose last_run_summary.yaml as a fixed set of gauges and one counter.

    Each scrape reads the report afresh; nothing is cached between scrapes.
    The instance lock is held for the whole load-map-emit cycle, so
    concurrent scrapes run one after another and each sees one report.
    """

    def __init__(
        self,
        descriptors: Sequence[MetricDescriptor],
        loader: ReportLoader,
        logger: logging.Logger,
        on_error: str = ON_ERROR_SKIP,
    ):
        """
        Initialize summary collector.

        Args:
            descriptors: Fixed descriptor set from build_descriptors()
            loader: Report loader invoked once per scrape
            logger: Logger instance
            on_error: Report error policy ("skip" or "raise")
        """
        super().__init__(descriptors, logger, on_error)
        self.loader = loader
        self._lock = threading.Lock()

    @safe_collect
    def collect_samples(self) -> List[Sample]:
        """
        Load the report and map it onto the descriptor set.

        Returns:
            List[Sample]: One sample per descriptor, in descriptor order

        Raises:
            ReportError: Only when on_error is "raise"
        """
        with self._lock:
            report = self.loader.load()
            samples = [
                Sample(descriptor=descriptor, kind=descriptor.kind, value=descriptor.read(report))
                for descriptor in self._descriptors
            ]

        self.logger.debug(f"Collected {len(samples)} samples from {self.loader.report_path}")
        return samples
