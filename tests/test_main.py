"""Tests for command-line parsing and startup."""

import signal
import socket

import pytest

from puppet_exporter.config.models import ExporterConfig
from puppet_exporter.config.settings import Settings
from puppet_exporter.main import ExporterApp, build_parser, load_config, main


@pytest.fixture(autouse=True)
def no_signal_handlers(monkeypatch):
    """Keep ExporterApp from replacing pytest's signal handlers."""
    monkeypatch.setattr(signal, "signal", lambda *args: None)


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.delenv("PUPPET_EXPORTER_CONFIG", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)


class TestParser:
    def test_flags_map_to_config_fields(self, clean_env):
        args = build_parser().parse_args([
            "--telemetry.address", ":9100",
            "--telemetry.endpoint", "/probe",
            "--report-path", "/tmp/summary.yaml",
            "--on-report-error", "raise",
            "--log-level", "debug",
        ])

        assert args.listen_address == ":9100"
        assert args.metrics_path == "/probe"
        assert args.report_path == "/tmp/summary.yaml"
        assert args.on_report_error == "raise"
        assert args.log_level == "DEBUG"

    def test_unset_flags_are_none(self, clean_env):
        args = build_parser().parse_args([])

        assert args.listen_address is None
        assert args.metrics_path is None
        assert args.config is None

    def test_version_exits_zero(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--version"])

        assert exc_info.value.code == 0
        assert "0.2.0" in capsys.readouterr().out


class TestLoadConfig:
    def test_defaults(self, clean_env):
        config = load_config(build_parser().parse_args([]))

        assert config == ExporterConfig()

    def test_env_log_level(self, clean_env, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")

        config = load_config(build_parser().parse_args([]))

        assert config.log_level == "WARNING"

    def test_flag_beats_config_file(self, clean_env, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text('listen_address: ":9100"\nreport_path: /from/file.yaml\n')

        config = load_config(build_parser().parse_args([
            "--config", str(path), "--telemetry.address", ":9200",
        ]))

        assert config.listen_address == ":9200"
        assert config.report_path == "/from/file.yaml"

    def test_config_from_env(self, clean_env, monkeypatch, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("metrics_path: /probe\n")
        monkeypatch.setenv("PUPPET_EXPORTER_CONFIG", str(path))

        config = load_config(build_parser().parse_args([]))

        assert config.metrics_path == "/probe"


class TestMain:
    def test_missing_config_exits_one(self, clean_env, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            main(["--config", str(tmp_path / "missing.yaml")])

        assert exc_info.value.code == 1

    def test_invalid_flag_value_exits_one(self, clean_env):
        with pytest.raises(SystemExit) as exc_info:
            main(["--telemetry.address", "nowhere"])

        assert exc_info.value.code == 1

    def test_bind_failure_returns_one(self, report_file):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as busy:
            busy.bind(("127.0.0.1", 0))
            busy.listen(1)
            port = busy.getsockname()[1]

            app = ExporterApp(ExporterConfig(
                listen_address=f"127.0.0.1:{port}", report_path=str(report_file)
            ))

            assert app.run() == 1


def test_settings_get_default(monkeypatch):
    monkeypatch.delenv("PUPPET_EXPORTER_UNSET", raising=False)

    assert Settings.get("PUPPET_EXPORTER_UNSET") == ""
    assert Settings.get("PUPPET_EXPORTER_UNSET", "x") == "x"
