"""Exceptions raised while loading a last-run summary report."""

from pathlib import Path
from typing import Union


class ReportError(Exception):
    """Base class for report loading failures."""

    def __init__(self, path: Union[str, Path], message: str):
        self.path = Path(path)
        super().__init__(f"{message}: {self.path}")


class ReportNotFoundError(ReportError):
    """The report path does not exist."""


class ReportReadError(ReportError):
    """The report path exists but could not be read."""


class ReportDecodeError(ReportError):
    """The report content is not valid YAML or does not fit the report schema."""
