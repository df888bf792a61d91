"""HTTP exposition of the collector registry."""

import logging
import platform
import socket
from html import escape
from socketserver import ThreadingMixIn
from typing import Callable, Iterable, Tuple
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from prometheus_client import CollectorRegistry, Info, PlatformCollector, ProcessCollector, make_wsgi_app

from .collectors.summary_collector import PuppetSummaryCollector
from .config.models import ExporterConfig
from .report.loader import ReportLoader
from .utils.metrics import build_descriptors
from .version import __version__


LANDING_PAGE = """<html>
<head><title>Puppet Last Run Exporter</title></head>
<body>
<h1>Puppet Last Run Exporter</h1>
<p><a href="{path}">Metrics</a></p>
</body>
</html>
"""


def build_registry(config: ExporterConfig, logger: logging.Logger) -> Tuple[CollectorRegistry, PuppetSummaryCollector]:
    """
    Create a registry holding the summary collector and build metadata.

    Descriptors are built here, once, and handed to the collector.

    Args:
        config: Exporter configuration
        logger: Logger instance

    Returns:
        Tuple of the registry and the registered summary collector
    """
    registry = CollectorRegistry()

    collector = PuppetSummaryCollector(
        descriptors=build_descriptors(config.namespace),
        loader=ReportLoader(config.report_path, logger),
        logger=logger,
        on_error=config.on_report_error,
    )
    registry.register(collector)

    build_info = Info("build", "Build information of the exporter", namespace=config.namespace, registry=registry)
    build_info.info({
        "version": __version__,
        "python_version": platform.python_version(),
        "implementation": platform.python_implementation(),
    })

    ProcessCollector(registry=registry)
    PlatformCollector(registry=registry)

    return registry, collector


def make_app(registry: CollectorRegistry, metrics_path: str = "/metrics") -> Callable:
    """
    WSGI app serving metrics on metrics_path and a landing page on /.

    Args:
        registry: Registry to expose
        metrics_path: Path scrapes are served on

    Returns:
        WSGI application
    """
    metrics_app = make_wsgi_app(registry)
    landing = LANDING_PAGE.format(path=escape(metrics_path, quote=True)).encode("utf-8")

    def app(environ, start_response) -> Iterable[bytes]:
        path = environ.get("PATH_INFO") or "/"

        if path == metrics_path:
            return metrics_app(environ, start_response)

        if path == "/":
            start_response("200 OK", [("Content-Type", "text/html; charset=utf-8")])
            return [landing]

        start_response("404 Not Found", [("Content-Type", "text/plain; charset=utf-8")])
        return [b"Not Found\n"]

    return app


class ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    """WSGI server handling each scrape on its own thread."""
    daemon_threads = True


class _LoggingRequestHandler(WSGIRequestHandler):
    """Route wsgiref's access log to the exporter logger instead of stderr."""

    logger = logging.getLogger("puppet_exporter.http")

    def log_message(self, format, *args):
        self.logger.debug(format % args, extra={"client": self.address_string()})


def _server_class(host: str, port: int) -> type:
    """Pick an IPv4 or IPv6 server class for the bind host."""
    try:
        infos = socket.getaddrinfo(host or None, port, type=socket.SOCK_STREAM, flags=socket.AI_PASSIVE)
    except socket.gaierror:
        return ThreadingWSGIServer
    family = infos[0][0] if infos else socket.AF_INET

    class _Server(ThreadingWSGIServer):
        address_family = family

    return _Server


class ExporterServer:
    """Threaded HTTP server exposing the exporter registry."""

    def __init__(self, config: ExporterConfig, logger: logging.Logger):
        """
        Build the registry and bind the listening socket.

        Args:
            config: Exporter configuration
            logger: Logger instance

        Raises:
            OSError: If the listen address can't be bound
        """
        self.config = config
        self.logger = logger.getChild(self.__class__.__name__)
        self.registry, self.collector = build_registry(config, logger)

        host, port = config.bind
        self.httpd = make_server(
            host,
            port,
            make_app(self.registry, config.metrics_path),
            server_class=_server_class(host, port),
            handler_class=type("RequestHandler", (_LoggingRequestHandler,), {"logger": self.logger}),
        )

    @property
    def server_port(self) -> int:
        return self.httpd.server_port

    def serve_forever(self) -> None:
        """Serve scrapes until shutdown() or an exception unwinds the loop."""
        self.logger.info(
            f"Serving {self.config.metrics_path} on {self.config.listen_address}",
            extra={"report_path": self.config.report_path},
        )
        try:
            self.httpd.serve_forever()
        finally:
            self.httpd.server_close()

    def shutdown(self) -> None:
        """Stop serve_forever() from another thread."""
        self.httpd.shutdown()
