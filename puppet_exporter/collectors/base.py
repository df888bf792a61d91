"""Base collector abstract class for prometheus_client custom collectors."""

from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Sequence
import logging
from functools import wraps

from prometheus_client.core import CounterMetricFamily, GaugeMetricFamily, Metric

from ..report.errors import ReportError
from ..utils.kinds import ValueKind
from ..utils.metrics import MetricDescriptor, Sample


ON_ERROR_SKIP = "skip"
ON_ERROR_RAISE = "raise"


class BaseCollector(ABC):
    """
    Abstract base class for descriptor-driven collectors.

    Subclasses produce plain samples; this class turns them into the
    describe/collect contract prometheus_client's registry calls on every
    scrape.
    """

    def __init__(
        self,
        descriptors: Sequence[MetricDescriptor],
        logger: logging.Logger,
        on_error: str = ON_ERROR_SKIP,
    ):
        """
        Initialize base collector.

        Args:
            descriptors: Fixed descriptor set, built once at startup
            logger: Logger instance
            on_error: "skip" to log and emit nothing on report errors,
                "raise" to propagate them to the scrape handler
        """
        if on_error not in (ON_ERROR_SKIP, ON_ERROR_RAISE):
            raise ValueError(f"on_error must be '{ON_ERROR_SKIP}' or '{ON_ERROR_RAISE}', got {on_error!r}")
        self._descriptors = tuple(descriptors)
        self._described = tuple(self._family(descriptor) for descriptor in self._descriptors)
        self.on_error = on_error
        self.logger = logger.getChild(self.__class__.__name__)

    def descriptors(self) -> tuple:
        """Return the fixed descriptor tuple (same object on every call)."""
        return self._descriptors

    @abstractmethod
    def collect_samples(self) -> List[Sample]:
        """
        Run one collection cycle.

        Returns:
            List[Sample]: One sample per descriptor, or [] for a skipped cycle

        Note:
            Implementations should use @safe_collect for error handling.
        """
        pass

    def describe(self) -> List[Metric]:
        """Sample-less metric families, one per descriptor, for registration checks."""
        return list(self._described)

    def collect(self) -> Iterator[Metric]:
        """Scrape hook called by CollectorRegistry.collect()."""
        for sample in self.collect_samples():
            yield self._family(sample.descriptor, sample.kind, sample.value)

    @staticmethod
    def _family(descriptor: MetricDescriptor, kind: Optional[ValueKind] = None, value: Optional[float] = None) -> Metric:
        """
        Build a metric family for a descriptor, empty when value is None.

        Counter families expose their sample as "<name>_total".
        """
        kind = kind or descriptor.kind
        if kind is ValueKind.COUNTER:
            return CounterMetricFamily(descriptor.name, descriptor.help, value=value)
        return GaugeMetricFamily(descriptor.name, descriptor.help, value=value)


def safe_collect(func):
    """
    Decorator to handle report failures according to the collector's on_error policy.

    With "skip" the failure is logged and the cycle yields no samples, so
    the next scrape starts fresh. With "raise" the error propagates.

    Args:
        func: Collector method to wrap

    Returns:
        Wrapped function
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except ReportError as e:
            self.logger.error(
                f"Error scraping last run report: {e}",
                extra={
                    "error_type": type(e).__name__,
                    "report_path": str(e.path),
                },
            )
            if self.on_error == ON_ERROR_RAISE:
                raise
            return []
    return wrapper
