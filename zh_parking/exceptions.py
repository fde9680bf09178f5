"""
Author: Ziv P.H
Date: 2026-10-17
Description:
Exception classes for the parking exporter.

Defines the errors raised while fetching the feed, decoding its XML, splitting item
descriptions and parsing the cron schedule.
"""


class ExporterError(Exception):
    """Base class for all exporter errors – makes catching easy."""
    pass


class FetchError(ExporterError):
    """The feed could not be retrieved (bad URL, transport error, bad status, unreadable body)."""
    pass


class FeedDecodeError(ExporterError):
    """The feed body is not a well-formed XML document."""
    pass


class DescriptionFormatError(ExporterError):
    """Item description does not contain the status / spaces delimiter."""
    pass


class ScheduleError(ExporterError, ValueError):
    """Cron expression could not be parsed."""
    pass
