"""
Author: Ziv P.H
Date: 2026-10-17
Description:
Main entry point for the Zurich parking exporter.

Handles configuration loading, logging setup, metrics server startup, and the polling schedule.
"""

import logging
import sys
import threading

from zh_parking.config import get_config
from zh_parking.feed_client import FeedClient
from zh_parking.metrics import ParkingMetrics, start_metrics_server
from zh_parking.pipeline import FetchCycle
from zh_parking.scheduler import Scheduler


def setup_logging(level: str):
    root = logging.getLogger()
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    # Remove default handlers
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    # Console handler
    ch = logging.StreamHandler(sys.stdout)
    ch.setFormatter(logging.Formatter("%(asctime)s %(levelname)-5s %(name)s: %(message)s"))
    root.addHandler(ch)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


def main():
    try:
        cfg = get_config()
    except ValueError:
        logging.exception("Could not load configuration")
        sys.exit(1)

    setup_logging(cfg.logging.level)
    logging.info("Starting Zurich parking exporter")

    metrics = ParkingMetrics()
    cycle = FetchCycle(FeedClient(cfg.feed.url, timeout=cfg.feed.timeout), metrics)
    if cfg.schedule.fetch_on_startup:
        cycle.run()

    # Start Prometheus metrics server
    start_metrics_server(metrics, port=cfg.server.port, addr=cfg.server.addr)

    scheduler = Scheduler()
    scheduler.start(cfg.schedule.cron, cycle.run)
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        logging.info("Exporter interrupted by user, shutting down")
    finally:
        scheduler.stop(timeout=5)


if __name__ == '__main__':
    main()
