"""Pydantic models for the decoded last_run_summary.yaml report."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


def _number(name: str, *legacy: str) -> Any:
    """Numeric field defaulting to 0, accepting legacy camelCase key spellings."""
    return Field(default=0.0, validation_alias=AliasChoices(name, *legacy))


class _Section(BaseModel):
    """Base for report sections: unknown keys ignored, instances immutable."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        """Treat `key:` with no value the same as an absent key."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class VersionSection(_Section):
    """Puppet and catalog version strings."""
    config: str = Field(default="", validation_alias=AliasChoices("config", "version_config"))
    puppet: str = Field(default="", validation_alias=AliasChoices("puppet", "version_puppet"))

    @field_validator("config", "puppet", mode="before")
    @classmethod
    def stringify(cls, v: Any) -> str:
        """Catalog versions are usually written as bare integers."""
        if isinstance(v, (dict, list)):
            raise ValueError("version fields must be scalars")
        return str(v)


class ResourcesSection(_Section):
    """Resource counters from the last run."""
    changed: float = _number("changed", "resources_changed")
    corrective_change: float = _number("corrective_change", "resources_corrective_change")
    failed: float = _number("failed", "resources_failed")
    failed_to_restart: float = _number("failed_to_restart", "resources_failed_to_restart")
    out_of_sync: float = _number("out_of_sync", "resources_out_of_sync")
    restarted: float = _number("restarted", "resources_restarted")
    scheduled: float = _number("scheduled", "resources_scheduled")
    skipped: float = _number("skipped", "resources_skipped")
    total: float = _number("total", "resources_total")


class TimeSection(_Section):
    """Timing measurements (seconds) and the last run epoch."""
    anchor: float = _number("anchor", "timeAnchor")
    archive: float = _number("archive", "timeArchive")
    catalog_application: float = _number("catalog_application", "timeCatalogApplication")
    config_retrieval: float = _number("config_retrieval", "timeConfigRetrieval")
    convert_catalog: float = _number("convert_catalog", "timeConvertCatalog")
    exec: float = _number("exec", "timeExec")
    fact_generation: float = _number("fact_generation", "timeFactGeneration")
    file: float = _number("file", "timeFile")
    filebucket: float = _number("filebucket", "timeFileBucket")
    group: float = _number("group", "timeGroup")
    node_retrieval: float = _number("node_retrieval", "timeNodeRetrieval")
    package: float = _number("package", "timePackage")
    plugin_sync: float = _number("plugin_sync", "timePluginSync")
    schedule: float = _number("schedule", "timeSchedule")
    service: float = _number("service", "timeService")
    total: float = _number("total", "timeTotal")
    transaction_evaluation: float = _number("transaction_evaluation", "timeTransactionEvaluation")
    user: float = _number("user", "timeUser")
    yumrepo: float = _number("yumrepo", "timeYumrepo")
    last_run: float = _number("last_run", "timeLastRunEpoch")


class ChangesSection(_Section):
    """Aggregate change counters."""
    changes: float = _number("changes")
    total: float = _number("total")


class EventsSection(_Section):
    """Aggregate event counters."""
    failure: float = _number("failure")
    success: float = _number("success")
    total: float = _number("total")


class Report(_Section):
    """
    Immutable snapshot of one last_run_summary.yaml document.

    Every section and field is optional; anything absent decodes to zero
    so reports from older agents still load.
    """
    version: VersionSection = Field(default_factory=VersionSection)
    resources: ResourcesSection = Field(default_factory=ResourcesSection)
    time: TimeSection = Field(default_factory=TimeSection)
    changes: ChangesSection = Field(default_factory=ChangesSection)
    events: EventsSection = Field(default_factory=EventsSection)

    @model_validator(mode="before")
    @classmethod
    def require_mapping(cls, data: Any) -> Any:
        """An empty document is an empty report; any other non-mapping is invalid."""
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"report must be a mapping, got {type(data).__name__}")
        return data
