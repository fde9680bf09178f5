import logging
import threading

from zh_parking.exceptions import FeedDecodeError, FetchError
from zh_parking.feed_client import FeedClient
from zh_parking.feed_decoder import decode
from zh_parking.metrics import ParkingMetrics
from zh_parking.records_parser import extract_all

logger = logging.getLogger(__name__)


class FetchCycle:
    """
    One fetch ➜ decode ➜ extract ➜ publish pass over the parking feed.
    """

    def __init__(self, client: FeedClient, metrics: ParkingMetrics):
        """
        Initialize the cycle with the client it fetches through and the metrics it publishes to.

        Args:
            client (FeedClient): Client for the upstream feed.
            metrics (ParkingMetrics): Registry updated after every successful fetch.
        """
        self.client = client
        self.metrics = metrics
        self._running = threading.Lock()

    def run(self) -> bool:
        """
        Run one cycle unless another one is still in progress.

        A failed fetch or an undecodable body leaves the metrics untouched.

        Returns:
            bool: True if the metrics were updated.
        """
        if not self._running.acquire(blocking=False):
            logger.warning("Previous fetch cycle still running, skipping this tick")
            return False
        try:
            return self._run()
        finally:
            self._running.release()

    def _run(self) -> bool:
        logger.debug("Updating parking data...")
        try:
            items = decode(self.client.fetch())
        except (FetchError, FeedDecodeError) as e:
            logger.error("Fetch cycle aborted, keeping previous values: %s", e)
            return False

        records = extract_all(items)
        self.metrics.increment_frame()
        for record in records:
            self.metrics.set_free_spaces(record.name, record.spaces_left)
        logger.info("Published %d of %d feed items", len(records), len(items))
        return True
