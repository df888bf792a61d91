"""Report loader: reads and decodes last_run_summary.yaml."""

import logging
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from .errors import ReportDecodeError, ReportNotFoundError, ReportReadError
from .models import Report


DEFAULT_REPORT_PATH = "./last_run_summary.yaml"


class ReportLoader:
    """Load the Puppet agent's last run summary from a fixed path."""

    def __init__(
        self,
        report_path: Union[str, Path] = DEFAULT_REPORT_PATH,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize report loader.

        Args:
            report_path: Path to last_run_summary.yaml
            logger: Optional logger instance
        """
        self.report_path = Path(report_path)
        self.logger = (logger or logging.getLogger(__name__)).getChild(self.__class__.__name__)

    def load(self) -> Report:
        """
        Read and decode the report.

        Returns:
            Report: Decoded report, with absent fields set to zero

        Raises:
            ReportNotFoundError: If the report file doesn't exist
            ReportReadError: If the path can't be read (directory, permissions)
            ReportDecodeError: If YAML parsing or schema validation fails
        """
        try:
            content = self.report_path.read_bytes()
        except FileNotFoundError as e:
            raise ReportNotFoundError(self.report_path, "Report file not found") from e
        except OSError as e:
            raise ReportReadError(self.report_path, f"Cannot read report ({e.strerror or e})") from e

        self.logger.debug(f"Read {len(content)} bytes from {self.report_path}")
        return self.decode(content, self.report_path)

    @staticmethod
    def decode(content: Union[bytes, str], source: Union[str, Path] = "<string>") -> Report:
        """
        Decode report content.

        Args:
            content: Raw YAML document
            source: Path used in error messages

        Returns:
            Report: Decoded report

        Raises:
            ReportDecodeError: If YAML parsing or schema validation fails
        """
        try:
            raw = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ReportDecodeError(source, f"Invalid YAML ({e})") from e

        try:
            return Report.model_validate(raw)
        except ValidationError as e:
            errors = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise ReportDecodeError(source, f"Report does not match schema ({errors})") from e
