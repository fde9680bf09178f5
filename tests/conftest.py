import pytest

from zh_parking.metrics import ParkingMetrics

FEED_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0" xmlns:dc="http://purl.org/dc/elements/1.1/">
  <channel>
    <title>Parkleitsystem Stadt Zuerich</title>
    <link>https://www.pls-zh.ch</link>
    <description>Freie Parkplaetze in Zuerich</description>
    <item>
      <title>Parkhaus Accu / Otto-Schuetz-Weg</title>
      <link>https://www.pls-zh.ch/parkhaus/accu.jsp?pid=accu</link>
      <description>open / 112</description>
      <pubDate>Sat, 17 Oct 2026 14:55:03 +0200</pubDate>
    </item>
    <item>
      <title>Parkhaus Albisriederplatz / Badenerstrasse 380</title>
      <link>https://www.pls-zh.ch/parkhaus/albisriederplatz.jsp?pid=albisriederplatz</link>
      <description>open / 0</description>
      <pubDate>Sat, 17 Oct 2026 14:55:03 +0200</pubDate>
    </item>
    <item>
      <title>Parkhaus Bleicherweg / Beethovenstrasse 35</title>
      <link>https://www.pls-zh.ch/parkhaus/bleicherweg.jsp?pid=bleicherweg</link>
      <description>closed / ???</description>
      <pubDate>Sat, 17 Oct 2026 14:55:03 +0200</pubDate>
    </item>
  </channel>
</rss>
"""


def feed_document(*items):
    """Build an RSS document from (title, description) pairs."""
    body = "".join(
        f"<item><title>{title}</title><link>https://www.pls-zh.ch/{i}</link>"
        f"<description>{description}</description><pubDate>Sat, 17 Oct 2026 14:55:03 +0200</pubDate></item>"
        for i, (title, description) in enumerate(items)
    )
    return f"<rss version=\"2.0\"><channel><title>PLS</title>{body}</channel></rss>".encode("utf-8")


@pytest.fixture
def feed_xml():
    return FEED_XML


@pytest.fixture
def metrics():
    return ParkingMetrics()
