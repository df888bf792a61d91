"""Metric descriptors and samples for the last-run summary collector."""

from dataclasses import dataclass
from typing import Any, Tuple

from .kinds import ValueKind


DEFAULT_NAMESPACE = "puppet_last_run_exporter"


def build_fq_name(namespace: str, subsystem: str, name: str) -> str:
    """
    Join namespace, subsystem and name with underscores, skipping empty parts.

    Args:
        namespace: Metric namespace (e.g. "puppet_last_run_exporter")
        subsystem: Optional subsystem (e.g. "resources"), may be empty
        name: Metric name

    Returns:
        str: Fully qualified metric name, or "" if name is empty
    """
    if not name:
        return ""
    return "_".join(part for part in (namespace, subsystem, name) if part)


@dataclass(frozen=True)
class MetricDescriptor:
    """Static metadata for one exposed metric series."""

    name: str  # Fully qualified name
    help: str
    kind: ValueKind
    section: str  # Report section, e.g. "resources"
    field: str  # Attribute inside the section, e.g. "total"

    def read(self, report: Any) -> float:
        """Extract this descriptor's value from a decoded report."""
        return float(getattr(getattr(report, self.section), self.field))


@dataclass(frozen=True)
class Sample:
    """One constant-value sample produced by a collection cycle."""

    descriptor: MetricDescriptor
    kind: ValueKind
    value: float


# (subsystem, name, help, kind, section, field)
_DESCRIPTOR_TABLE = (
    ("resources", "ResourcesChanged", "Number of changed resources", ValueKind.GAUGE, "resources", "changed"),
    ("resources", "ResourcesCorrectiveChange", "Number of corrective changes", ValueKind.GAUGE, "resources", "corrective_change"),
    ("resources", "ResourcesFailed", "Number of failed resources", ValueKind.GAUGE, "resources", "failed"),
    ("resources", "ResourcesFailedRestart", "Number of resources failed to restart", ValueKind.GAUGE, "resources", "failed_to_restart"),
    ("resources", "ResourcesOutOfSync", "Number of resources out of sync", ValueKind.GAUGE, "resources", "out_of_sync"),
    ("resources", "ResourcesRestarted", "Number of restarted resources", ValueKind.GAUGE, "resources", "restarted"),
    ("resources", "ResourcesScheduled", "Number of scheduled resources", ValueKind.GAUGE, "resources", "scheduled"),
    ("resources", "ResourcesSkipped", "Number of skipped resources", ValueKind.GAUGE, "resources", "skipped"),
    ("resources", "ResourcesTotal", "Total number of resources", ValueKind.GAUGE, "resources", "total"),
    ("", "TimeCatalogApplication", "Catalog application time", ValueKind.GAUGE, "time", "catalog_application"),
    ("", "TimeConfigRetrieval", "Config retrieval time", ValueKind.GAUGE, "time", "config_retrieval"),
    ("", "TimeConvertCatalog", "Catalog conversion time", ValueKind.GAUGE, "time", "convert_catalog"),
    ("", "TimeFactGeneration", "Fact generation time", ValueKind.GAUGE, "time", "fact_generation"),
    ("", "TimeFileBucket", "Filebucket time", ValueKind.GAUGE, "time", "filebucket"),
    ("", "TimeNodeRetrieval", "Node retrieval time", ValueKind.GAUGE, "time", "node_retrieval"),
    ("", "TimePluginSync", "Plugin sync time", ValueKind.GAUGE, "time", "plugin_sync"),
    ("", "TimeTransactionEvaluation", "Transaction evaluation time", ValueKind.GAUGE, "time", "transaction_evaluation"),
    ("", "TimeTotal", "Total time", ValueKind.GAUGE, "time", "total"),
    # Epoch seconds of the last run, counter kind
    ("", "TimeLastRun", "Last puppet run", ValueKind.COUNTER, "time", "last_run"),
)


def build_descriptors(namespace: str = DEFAULT_NAMESPACE) -> Tuple[MetricDescriptor, ...]:
    """
    Build the fixed set of live descriptors.

    Call once at startup and hand the result to the collector; the tuple
    and its descriptors are never mutated afterwards.

    Args:
        namespace: Metric namespace prefix

    Returns:
        Tuple[MetricDescriptor, ...]: The 19 live descriptors in exposition order
    """
    return tuple(
        MetricDescriptor(
            name=build_fq_name(namespace, subsystem, name),
            help=help_text,
            kind=kind,
            section=section,
            field=field,
        )
        for subsystem, name, help_text, kind, section, field in _DESCRIPTOR_TABLE
    )
