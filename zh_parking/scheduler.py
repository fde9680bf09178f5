"""
Author: Ziv P.H
Date: 2026-10-17
Description:
Wall-clock scheduler for the fetch cycle.

Parses seconds-first cron expressions ("15 */5 * * *" fires at second 15 of every
fifth minute) and runs a job on a background thread at each matching instant.
"""

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Union

from zh_parking.exceptions import ScheduleError

logger = logging.getLogger(__name__)

# (name, lowest, highest) for the fields that may carry values
_TIME_FIELDS = (
    ("second", 0, 59),
    ("minute", 0, 59),
    ("hour", 0, 23),
)
_WILDCARDS = {"*", "?"}


def _parse_int(text: str, field: str) -> int:
    try:
        return int(text)
    except ValueError as e:
        raise ScheduleError(f"Invalid {field} value '{text}'") from e


def _parse_field(text: str, field: str, low: int, high: int) -> List[int]:
    """
    Expand one cron field into the sorted list of values it matches.
    Args:
        text (str): The field, e.g. "*", "15", "*/5", "10-20/2" or "0,30".
        field (str): Field name, used in error messages.
        low (int): Smallest allowed value.
        high (int): Largest allowed value.
    Returns:
        List[int]: Sorted matching values.
    Raises:
        ScheduleError: If the field is malformed or out of range.
    """
    values = set()
    for part in text.split(","):
        if not part:
            raise ScheduleError(f"Empty entry in {field} field '{text}'")

        step = 1
        stepped = "/" in part
        if stepped:
            part, step_text = part.split("/", 1)
            step = _parse_int(step_text, field)
            if step < 1:
                raise ScheduleError(f"Step must be positive in {field} field '{text}'")

        if part in _WILDCARDS:
            start, end = low, high
        elif "-" in part:
            start_text, end_text = part.split("-", 1)
            start, end = _parse_int(start_text, field), _parse_int(end_text, field)
        else:
            start = _parse_int(part, field)
            # "N/step" runs from N to the end of the range
            end = high if stepped else start

        if start < low or end > high or start > end:
            raise ScheduleError(f"{field} field '{text}' is outside {low}-{high}")
        values.update(range(start, end + 1, step))
    return sorted(values)


class CronSpec:
    """
    A parsed cron expression of the form ``second minute hour day-of-month month [day-of-week]``.

    Only the second, minute and hour fields may restrict the schedule; the date fields
    must be wildcards. That covers "every N minutes at second S", which is what the
    feed poller needs.
    """

    def __init__(self, seconds: List[int], minutes: List[int], hours: List[int], expression: str = ""):
        self.seconds = seconds
        self.minutes = minutes
        self.hours = hours
        self.expression = expression

    def __repr__(self):
        return f"CronSpec({self.expression!r})"

    @classmethod
    def parse(cls, expression: str) -> "CronSpec":
        """
        Parse a seconds-first cron expression.
        Args:
            expression (str): e.g. "15 */5 * * *".
        Returns:
            CronSpec: The parsed schedule.
        Raises:
            ScheduleError: If the expression is malformed or restricts a date field.
        """
        fields = expression.split()
        if len(fields) not in (5, 6):
            raise ScheduleError(f"Expected 5 or 6 fields, got {len(fields)}: '{expression}'")

        for name, value in zip(("day-of-month", "month", "day-of-week"), fields[3:]):
            if value not in _WILDCARDS:
                raise ScheduleError(f"Unsupported {name} field '{value}', only '*' is allowed")

        seconds, minutes, hours = (
            _parse_field(value, name, low, high)
            for value, (name, low, high) in zip(fields[:3], _TIME_FIELDS)
        )
        return cls(seconds, minutes, hours, expression)

    def next_after(self, moment: datetime) -> datetime:
        """
        Return the first instant matching this schedule strictly after *moment*.
        Sub-second precision is dropped; tzinfo is preserved.
        """
        start = moment.replace(microsecond=0) + timedelta(seconds=1)
        current = (start.hour, start.minute, start.second)
        midnight = start.replace(hour=0, minute=0, second=0)

        for h in self.hours:
            if h < start.hour:
                continue
            for m in self.minutes:
                if (h, m) < current[:2]:
                    continue
                for s in self.seconds:
                    if (h, m, s) >= current:
                        return midnight.replace(hour=h, minute=m, second=s)

        tomorrow = midnight + timedelta(days=1)
        return tomorrow.replace(hour=self.hours[0], minute=self.minutes[0], second=self.seconds[0])


class Scheduler:
    """
    Runs a job on a daemon thread every time the cron schedule fires.

    Exceptions escaping the job are logged and the loop keeps going; the next tick
    is the only retry.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None, name: str = "fetch-scheduler"):
        """
        Args:
            clock (Optional[Callable[[], datetime]]): Source of the current time, defaults to datetime.now.
            name (str): Name of the background thread.
        """
        self._clock = clock or datetime.now
        self._name = name
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, cron_spec: Union[str, CronSpec], job: Callable[[], object]) -> None:
        """
        Start running *job* on the given schedule.
        Args:
            cron_spec (Union[str, CronSpec]): Cron expression or parsed schedule.
            job (Callable[[], object]): Zero-argument callable; its return value is ignored.
        Raises:
            ScheduleError: If the expression cannot be parsed.
            RuntimeError: If the scheduler is already running.
        """
        spec = cron_spec if isinstance(cron_spec, CronSpec) else CronSpec.parse(cron_spec)
        if self.running:
            raise RuntimeError("Scheduler is already running")

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._loop, args=(spec, job), name=self._name, daemon=True)
        self._thread.start()
        logger.info("Scheduler started with schedule '%s'", spec.expression)

    def stop(self, timeout: Optional[float] = None) -> None:
        """Signal the loop to exit and wait for the thread to finish."""
        logger.debug("Stopping scheduler")
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.info("Scheduler stopped")

    def _loop(self, spec: CronSpec, job: Callable[[], object]) -> None:
        while not self._stop_event.is_set():
            now = self._clock()
            fire_at = spec.next_after(now)
            delay = max((fire_at - now).total_seconds(), 0.0)
            logger.debug("Next run at %s (in %.1fs)", fire_at, delay)
            if self._stop_event.wait(delay):
                break
            self._run_job(job)

    @staticmethod
    def _run_job(job: Callable[[], object]) -> None:
        try:
            job()
        except Exception:
            logger.exception("Scheduled job raised, waiting for the next tick")
