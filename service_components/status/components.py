"""
Application launch time and uptime tracking.
"""

import time
from datetime import datetime, timedelta
from typing import Optional

DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.%f"


def format_date(value: datetime) -> str:
    """Format as ``yyyy-MM-ddTHH:mm:ss.SSS`` (millisecond precision)."""
    return value.strftime(DATE_FORMAT)[:-3]


class ApplicationStatusComponents:
    """Records when the application started and reports how long it has been up."""

    def __init__(self):
        self._launch_monotonic: Optional[float] = None
        self._launch_date: Optional[datetime] = None

    def application_launch_time(self) -> None:
        """Record the launch instant used by application_up_time()."""
        self._launch_monotonic = time.monotonic()

    def application_up_time(self) -> float:
        """Seconds since application_launch_time(), or 0.0 if it was never called."""
        if self._launch_monotonic is None:
            return 0.0
        return time.monotonic() - self._launch_monotonic

    def application_launch_date(self) -> None:
        """Record the wall-clock launch date used by application_up_date()."""
        self._launch_date = datetime.now()

    @property
    def launch_date(self) -> str:
        """The recorded launch date, or ``"0"`` when not recorded."""
        if self._launch_date is None:
            return "0"
        return format_date(self._launch_date)

    def application_up_date(self) -> str:
        """Elapsed time since application_launch_date() as ``D day(s), H:MM:SS``, or ``"0"``."""
        if self._launch_date is None:
            return "0"
        elapsed = datetime.now() - self._launch_date
        return str(timedelta(seconds=int(elapsed.total_seconds())))

    def mark_launched(self) -> None:
        """Record both the launch instant and the launch date."""
        self.application_launch_time()
        self.application_launch_date()
