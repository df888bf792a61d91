"""Pydantic configuration models for the exporter."""

from typing import Literal, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..report.loader import DEFAULT_REPORT_PATH
from ..utils.metrics import DEFAULT_NAMESPACE


def parse_listen_address(address: str) -> Tuple[str, int]:
    """
    Split a "host:port" listen address.

    An empty host (":9309") binds all interfaces. IPv6 hosts may be
    bracketed ("[::1]:9309").

    Raises:
        ValueError: If the port is missing or out of range
    """
    host, sep, port = address.rpartition(":")
    if not sep:
        raise ValueError(f"Listen address must be host:port, got {address!r}")
    if not port.isdigit() or not 0 <= int(port) < 65536:
        raise ValueError(f"Invalid port in listen address: {address!r}")
    return host.strip("[]"), int(port)


class ExporterConfig(BaseModel):
    """Root configuration model for the exporter."""

    model_config = ConfigDict(extra="forbid")

    listen_address: str = ":9309"
    metrics_path: str = "/metrics"
    report_path: str = DEFAULT_REPORT_PATH
    namespace: str = DEFAULT_NAMESPACE
    on_report_error: Literal["skip", "raise"] = "skip"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")

    @field_validator("listen_address")
    @classmethod
    def validate_listen_address(cls, v: str) -> str:
        """Validate host:port format."""
        parse_listen_address(v)
        return v

    @field_validator("metrics_path")
    @classmethod
    def validate_metrics_path(cls, v: str) -> str:
        """Metrics path must be absolute and not the landing page."""
        if not v.startswith("/"):
            raise ValueError("metrics_path must start with /")
        if v == "/":
            raise ValueError("metrics_path cannot be /")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        """Accept lowercase level names."""
        return v.upper() if isinstance(v, str) else v

    @property
    def bind(self) -> Tuple[str, int]:
        """Listen address as (host, port)."""
        return parse_listen_address(self.listen_address)
