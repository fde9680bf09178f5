"""
Author: Ziv P.H
Date: 2026-10-17
Description:

Turn a FeedItem's free-text description into a ParkingRecord.

The public surface is extract(item) and extract_all(items).
Descriptions look like "open / 43": a status, the delimiter " / ", and the
number of free spaces. Internally: split ➜ parse count ➜ assemble.
"""

import logging
import re
from typing import Iterable, List, Tuple

from zh_parking.exceptions import DescriptionFormatError
from zh_parking.models import FeedItem, ParkingRecord

logger = logging.getLogger(__name__)

DELIMITER = " / "

# optional whitespace, then a signed decimal integer; trailing text is ignored
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _split_description(description: str) -> Tuple[str, str]:
    """
    Split *description* into its status and count parts.
    Args:
        description (str): The item description, e.g. "open / 43".
    Returns:
        Tuple[str, str]: The status and the raw count text.
    Raises:
        DescriptionFormatError: If the delimiter does not occur.
    """
    parts = description.split(DELIMITER)
    if len(parts) < 2:
        raise DescriptionFormatError(f"Expected '{DELIMITER.strip()}' in description, got '{description}'")
    return parts[0], parts[1]


def parse_spaces(text: str) -> int:
    """
    Read the leading integer of *text*.
    Returns 0 when there is none ("???", "abc", "") and clamps negatives to 0.
    """
    match = _LEADING_INT.match(text)
    if match is None:
        return 0
    return max(int(match.group(1)), 0)


def extract(item: FeedItem) -> ParkingRecord:
    """
    Build a ParkingRecord from one feed item.
    Args:
        item (FeedItem): The decoded feed item.
    Returns:
        ParkingRecord: name from the title, url from the link, status and free spaces
        from the description.
    Raises:
        DescriptionFormatError: If the description has no status / count delimiter.
    """
    status, count = _split_description(item.description)
    return ParkingRecord(
        name=item.title,
        url=item.link,
        status=status,
        spaces_left=parse_spaces(count),
    )


def extract_all(items: Iterable[FeedItem]) -> List[ParkingRecord]:
    """
    Extract a record from every item, skipping malformed ones.
    Args:
        items (Iterable[FeedItem]): Decoded feed items.
    Returns:
        List[ParkingRecord]: One record per well-formed item, in input order.
    """
    records = []
    for item in items:
        try:
            records.append(extract(item))
        except DescriptionFormatError as e:
            logger.warning("Skipping item '%s': %s", item.title, e)
    return records
