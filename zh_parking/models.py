"""
Records passed between the decoder, the extractor and the metrics store.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FeedItem:
    """One <item> of the RSS channel; missing elements decode to ""."""
    title: str = ""
    link: str = ""
    description: str = ""
    pub_date: str = ""


@dataclass(frozen=True)
class ParkingRecord:
    """Status of one parking lot. spaces_left is never negative."""
    name: str
    url: str
    status: str
    spaces_left: int
