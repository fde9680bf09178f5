"""Prometheus exporter for the Zurich parking guidance RSS feed."""

__version__ = "0.1.0"
