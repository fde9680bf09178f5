"""
Author: Ziv P.H
Date: 2026-10-17
Description:
Decode the RSS document into FeedItem objects.

Only channel/item elements and their title, link, description and pubDate
children are read; everything else in the document is ignored.
"""

import logging
import xml.etree.ElementTree as ET
from typing import List, Union

from zh_parking.exceptions import FeedDecodeError
from zh_parking.models import FeedItem

logger = logging.getLogger(__name__)


def _child_text(element: ET.Element, tag: str) -> str:
    child = element.find(tag)
    if child is None or child.text is None:
        return ""
    return child.text


def decode(raw: Union[str, bytes]) -> List[FeedItem]:
    """
    Parse an RSS document into its items, in document order.
    Args:
        raw (Union[str, bytes]): The feed body as returned by the feed client.
    Returns:
        List[FeedItem]: One entry per channel/item; empty if the channel has no items.
    Raises:
        FeedDecodeError: If the body is empty or not well-formed XML.
    """
    if not raw or not raw.strip():
        raise FeedDecodeError("Feed body is empty")

    try:
        root = ET.fromstring(raw)
    except ET.ParseError as e:
        logger.error("Could not parse feed XML: %s", e)
        raise FeedDecodeError(f"Malformed feed XML: {e}") from e

    channel = root if root.tag == "channel" else root.find("channel")
    if channel is None:
        logger.warning("Feed document <%s> has no channel element", root.tag)
        return []

    items = [
        FeedItem(
            title=_child_text(el, "title"),
            link=_child_text(el, "link"),
            description=_child_text(el, "description"),
            pub_date=_child_text(el, "pubDate"),
        )
        for el in channel.findall("item")
    ]
    logger.debug("Decoded %d feed items", len(items))
    return items
