"""Shared pytest configuration and fixtures."""

import logging

import pytest

from puppet_exporter.collectors.summary_collector import PuppetSummaryCollector
from puppet_exporter.report.loader import ReportLoader
from puppet_exporter.utils.logger import setup_logger
from puppet_exporter.utils.metrics import build_descriptors


FULL_REPORT = """---
version:
  config: 1600000000
  puppet: 6.18.0
resources:
  changed: 2
  corrective_change: 1
  failed: 0
  failed_to_restart: 0
  out_of_sync: 3
  restarted: 1
  scheduled: 0
  skipped: 4
  total: 42
time:
  anchor: 0.000123
  catalog_application: 1.2345
  config_retrieval: 2.5
  convert_catalog: 0.75
  exec: 0.1
  fact_generation: 3.125
  file: 0.4
  filebucket: 0.000166
  node_retrieval: 0.33
  package: 0.05
  plugin_sync: 0.9
  service: 0.07
  transaction_evaluation: 1.1
  total: 8.9
  last_run: 1600000000
changes:
  total: 2
events:
  failure: 0
  success: 2
  total: 2
"""


@pytest.fixture
def logger():
    """Create logger for tests."""
    return setup_logger("test")


@pytest.fixture
def plain_logger():
    """Propagating logger so caplog sees records."""
    return logging.getLogger("test_plain")


@pytest.fixture
def report_file(tmp_path):
    """A complete last_run_summary.yaml in a temp directory."""
    path = tmp_path / "last_run_summary.yaml"
    path.write_text(FULL_REPORT)
    return path


@pytest.fixture
def descriptors():
    """Default descriptor set."""
    return build_descriptors()


@pytest.fixture
def collector(descriptors, report_file, logger):
    """Summary collector reading the temp report."""
    return PuppetSummaryCollector(descriptors, ReportLoader(report_file, logger), logger)
