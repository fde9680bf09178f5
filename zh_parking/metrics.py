"""
Author: Ziv P.H
Date: 2026-10-17
Description:
Prometheus metrics for the exporter.

Defines the frame counter and the per-lot free spaces gauge in a registry owned by
ParkingMetrics, and the HTTP server that exposes that registry on /metrics.
"""

import logging
import threading
from socketserver import ThreadingMixIn
from typing import Optional
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    disable_created_metrics,
    generate_latest,
    make_wsgi_app,
)

logger = logging.getLogger(__name__)

NAMESPACE = "zurich_parking"
METRICS_PATH = "/metrics"

# only the _total series of the frame counter is exported, no _created companion
disable_created_metrics()


class ParkingMetrics:
    """
    Registry holding the parking metrics.

    Written by the fetch cycle, read by the /metrics endpoint. prometheus_client
    locks every value, so no extra synchronisation is needed here.
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        """
        Args:
            registry (Optional[CollectorRegistry]): Registry to register into; a private one is
                created when omitted.
        """
        self.registry = registry if registry is not None else CollectorRegistry()
        # exposed as zurich_parking_frames_total
        self.frames = Counter(
            "frames",
            "Increments whenever new data is pulled from the open data platform. "
            "Zeroes on server restart.",
            namespace=NAMESPACE,
            registry=self.registry,
        )
        self.free_spaces = Gauge(
            "free_spaces",
            "Number of free parking spaces per parking lot in Zurich",
            ["lot"],
            namespace=NAMESPACE,
            registry=self.registry,
        )

    def increment_frame(self) -> None:
        self.frames.inc()

    def set_free_spaces(self, lot: str, value: int) -> None:
        """Set the gauge for *lot*. Lots missing from later cycles keep their last value."""
        self.free_spaces.labels(lot=lot).set(value)

    def frame_count(self) -> float:
        return self.registry.get_sample_value(f"{NAMESPACE}_frames_total") or 0.0

    def free_spaces_for(self, lot: str) -> Optional[float]:
        """Current gauge value for *lot*, or None if it was never set."""
        return self.registry.get_sample_value(f"{NAMESPACE}_free_spaces", {"lot": lot})

    def snapshot(self) -> bytes:
        """Render the registry in the Prometheus text exposition format."""
        return generate_latest(self.registry)


class _ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    daemon_threads = True


class _QuietHandler(WSGIRequestHandler):
    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


def _metrics_only(app):
    """Serve *app* on METRICS_PATH and 404 everything else."""
    def dispatch(environ, start_response):
        if environ.get("PATH_INFO") != METRICS_PATH:
            start_response("404 Not Found", [("Content-Type", "text/plain; charset=utf-8")])
            return [b"Not Found\n"]
        return app(environ, start_response)
    return dispatch


def start_metrics_server(metrics: ParkingMetrics, port: int = 4277, addr: str = "0.0.0.0"):
    """
    Serve *metrics* on GET /metrics from a daemon thread.
    Returns:
        The (server, thread) pair; call server.shutdown() to stop it.
    """
    logger.info("Starting metrics server on %s:%d%s", addr, port, METRICS_PATH)
    app = _metrics_only(make_wsgi_app(metrics.registry))
    server = make_server(addr, port, app, _ThreadingWSGIServer, handler_class=_QuietHandler)
    thread = threading.Thread(target=server.serve_forever, name="metrics-server", daemon=True)
    thread.start()
    return server, thread
