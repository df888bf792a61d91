"""Metric value kind enumeration."""

from enum import Enum


class ValueKind(Enum):
    """Prometheus value kind a descriptor is exposed as."""

    GAUGE = "gauge"
    COUNTER = "counter"

    def to_type_string(self) -> str:
        """
        Convert kind to the exposition format TYPE keyword.

        Returns:
            str: "gauge" or "counter"
        """
        return self.value
