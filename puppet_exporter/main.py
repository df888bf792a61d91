"""Main application entry point for the Puppet last run exporter."""

import argparse
import signal
import sys
from typing import List, Optional

from .config.loader import ConfigLoader
from .config.models import ExporterConfig
from .config.settings import Settings
from .server import ExporterServer
from .utils.logger import setup_logger
from .version import __version__


class ExporterApp:
    """
    Main exporter application.

    Loads configuration, binds the HTTP server and serves scrapes until
    SIGTERM/SIGINT.
    """

    def __init__(self, config: ExporterConfig):
        """
        Initialize exporter application.

        Args:
            config: Validated exporter configuration
        """
        self.config = config
        self.logger = setup_logger("puppet_exporter", config.log_level)
        self.server = None

        signal.signal(signal.SIGTERM, self._signal_handler)
        signal.signal(signal.SIGINT, self._signal_handler)

        self.logger.info(f"Starting Puppet last run exporter {__version__}")

    def _signal_handler(self, signum, frame):
        """
        Handle shutdown signals.

        Args:
            signum: Signal number
            frame: Current stack frame
        """
        signal_name = signal.Signals(signum).name
        self.logger.info(f"Received {signal_name}, shutting down")
        sys.exit(0)

    def run(self) -> int:
        """
        Bind and serve until interrupted.

        Returns:
            int: Process exit code
        """
        try:
            self.server = ExporterServer(self.config, self.logger)
        except OSError as e:
            self.logger.error(
                f"Cannot listen on {self.config.listen_address}: {e}",
                extra={"error_type": type(e).__name__},
            )
            return 1

        self.logger.info(f"Starting Server: {self.config.listen_address}")
        self.server.serve_forever()
        return 0


def build_parser() -> argparse.ArgumentParser:
    """Command-line flags. Unset flags are None so config file values win."""
    parser = argparse.ArgumentParser(
        description='Prometheus exporter for the Puppet agent last_run_summary.yaml',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Serve ./last_run_summary.yaml on :9309/metrics
  puppet-last-run-exporter

  # Read the agent's summary in place
  puppet-last-run-exporter --report-path /opt/puppetlabs/puppet/cache/state/last_run_summary.yaml

  # Use a config file
  puppet-last-run-exporter --config /etc/puppet-exporter.yaml
        """
    )

    parser.add_argument(
        '--telemetry.address',
        dest='listen_address',
        help='Address on which to expose metrics (default: :9309)'
    )

    parser.add_argument(
        '--telemetry.endpoint',
        dest='metrics_path',
        help='Path under which to expose metrics (default: /metrics)'
    )

    parser.add_argument(
        '--report-path',
        help='Path to last_run_summary.yaml (default: ./last_run_summary.yaml)'
    )

    parser.add_argument(
        '--on-report-error',
        choices=['skip', 'raise'],
        help='On unreadable reports: skip the scrape samples, or fail the scrape (default: skip)'
    )

    parser.add_argument(
        '--config',
        default=Settings.config_path(),
        help='Path to YAML configuration file (default: PUPPET_EXPORTER_CONFIG env var)'
    )

    parser.add_argument(
        '--log-level',
        type=str.upper,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: INFO or LOG_LEVEL env var)'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}',
        help='Print version information'
    )

    return parser


def load_config(args: argparse.Namespace) -> ExporterConfig:
    """
    Resolve configuration: CLI flags, then config file, then environment, then defaults.

    Raises:
        FileNotFoundError: If --config points at a missing file
        yaml.YAMLError: If the config file isn't valid YAML
        pydantic.ValidationError: If a value is invalid
    """
    overrides = {
        "listen_address": args.listen_address,
        "metrics_path": args.metrics_path,
        "report_path": args.report_path,
        "on_report_error": args.on_report_error,
        "log_level": args.log_level,
    }

    if args.config:
        return ConfigLoader.load_from_file(args.config, overrides)

    return ConfigLoader.build({"log_level": Settings.log_level()}, overrides)


def main(argv: Optional[List[str]] = None):
    """
    CLI entry point.

    Parses command-line arguments and serves metrics.
    """
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except Exception as e:
        logger = setup_logger("puppet_exporter")
        logger.error(f"Failed to load configuration: {e}", exc_info=True)
        sys.exit(1)

    sys.exit(ExporterApp(config).run())


if __name__ == '__main__':
    main()
