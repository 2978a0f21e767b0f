"""Age of a syslog timestamp that carries no year"""
import logging
import re
from datetime import datetime

from analyzers.exceptions import LogDataError, LogFormatError

logger = logging.getLogger(__name__)

MONTHS = {
    "Jan": 1, "Feb": 2, "Mar": 3, "Apr": 4,
    "May": 5, "Jun": 6, "Jul": 7, "Aug": 8,
    "Sep": 9, "Oct": 10, "Nov": 11, "Dec": 12,
}

TIMESTAMP_RE = re.compile(r"^(\w+)\s+(\d+)\s+(\d+):(\d+):(\d+)$")

FUTURE_TOLERANCE_SECONDS = 3600  # Beyond this, the event belongs to last year
MIN_AGE_MINUTES = -60
MAX_AGE_MINUTES = 525600  # One year


def _epoch(year, month, day, hour, minute, second, tzinfo):
    """Epoch seconds of a wall clock time, None if the date does not exist"""
    try:
        candidate = datetime(year, month, day, hour, minute, second, tzinfo=tzinfo)
    except (ValueError, OverflowError):
        return None
    return int(candidate.timestamp())


def resolve_age_minutes(timestamp_text, now):
    """
    Age in whole minutes of a "Mon DD HH:MM:SS" timestamp

    The log has no year: the current year of `now` is assumed, and the
    previous one when that puts the event more than an hour in the future
    (log written before New Year, read after it). The timestamp is read on
    the same clock as `now`: a naive `now` means local time.

    Args:
        timestamp_text (str): e.g. "Jan 15 11:10:38"
        now (datetime): read once per run by the caller

    Returns:
        int: age in minutes, never negative

    Raises:
        LogFormatError: unparsable timestamp, unknown month, impossible date
        LogDataError: age outside [-60 min, 1 year]
    """
    match = TIMESTAMP_RE.match(timestamp_text.strip())
    if not match:
        raise LogFormatError(
            f"Invalid date format: '{timestamp_text}' (expected 'Mon DD HH:MM:SS')"
        )

    month_name = match.group(1)
    if month_name not in MONTHS:
        raise LogFormatError(f"Invalid month: {month_name}")

    month = MONTHS[month_name]
    day, hour, minute, second = (int(g) for g in match.groups()[1:])

    now_epoch = int(now.timestamp())
    log_epoch = _epoch(now.year, month, day, hour, minute, second, now.tzinfo)
    diff_seconds = None if log_epoch is None else now_epoch - log_epoch

    logger.debug(f"Parsed date: month={month_name}({month}), day={day}, "
                 f"time={hour:02d}:{minute:02d}:{second:02d}, year={now.year}")
    logger.debug(f"Age before year correction: {diff_seconds} seconds")

    if diff_seconds is None or diff_seconds < -FUTURE_TOLERANCE_SECONDS:
        logger.debug("Log is in the future, trying previous year")
        log_epoch = _epoch(now.year - 1, month, day, hour, minute, second, now.tzinfo)
        if log_epoch is None:
            raise LogFormatError(f"Invalid date: '{timestamp_text}'")
        diff_seconds = now_epoch - log_epoch
        logger.debug(f"Age after year correction: {diff_seconds} seconds")

    # Truncate toward zero
    diff_minutes = int(diff_seconds / 60)

    if diff_minutes < MIN_AGE_MINUTES:
        raise LogDataError(
            f"Log age is too negative ({diff_minutes} min). System clock problem?"
        )
    if diff_minutes > MAX_AGE_MINUTES:
        raise LogDataError(f"Log age exceeds one year ({diff_minutes} min)")

    # Slightly in the future: clock skew between probe and device
    return max(diff_minutes, 0)
