"""Bandwidth overutilization analyzer"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal

from analyzers.age_resolver import resolve_age_minutes
from analyzers.exceptions import ProbeError
from scoring.status import Status
from utils.formatting import format_age
from utils.parsers import BandwidthLogParser, DataError, FormatError, Matched, NoEvent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationResult:
    status: Status
    message: str
    graph_percent: Decimal | int | None  # None is published as "U"
    details: dict = field(default_factory=dict, compare=False)


def unknown_result(detail):
    """UNKNOWN result for any error that ends the check"""
    return ClassificationResult(Status.UNKNOWN, f"Error: {detail}", None)


class BandwidthAnalyzer:
    """Classifies the last 01010045 log event against thresholds and age"""

    @staticmethod
    def classify(event, thresholds, age_minutes=None):
        """
        Classify an event, or its absence

        Args:
            event (BandwidthEvent | None): parsed event, None if no log line
            thresholds (Thresholds): validated thresholds
            age_minutes (int): resolved age of the event

        Returns:
            ClassificationResult
        """
        if event is None:
            return ClassificationResult(
                Status.OK, "No bandwidth overutilization history found in logs", 0
            )

        percent = event.percent
        usage = f"{event.used_mbps}/{event.licensed_mbps} Mbps"
        age = format_age(age_minutes)
        details = {
            "used_mbps": event.used_mbps,
            "licensed_mbps": event.licensed_mbps,
            "percent": percent,
            "age_minutes": age_minutes,
        }

        if age_minutes > thresholds.age_no_alert:
            # Too old to matter, keep it off the graph
            return ClassificationResult(
                Status.OK,
                f"No recent bandwidth overutilization (last: {percent}% [{usage}] {age} ago)",
                0,
                details,
            )

        if age_minutes > thresholds.age_alert:
            return ClassificationResult(
                Status.OK,
                f"Last bandwidth overutilization at {percent}% ({usage}) {age} ago",
                0,
                details,
            )

        if percent >= thresholds.critical:
            status = Status.CRITICAL
        elif percent >= thresholds.warning:
            status = Status.WARNING
        else:
            return ClassificationResult(
                Status.OK, f"Bandwidth at {percent}% ({usage})", percent, details
            )

        return ClassificationResult(
            status, f"Bandwidth at {percent}% ({usage}) - alert {age} ago", percent, details
        )

    @staticmethod
    def analyze(raw_output, thresholds, now):
        """Parse, age and classify the output of the log retrieval command"""
        parsed = BandwidthLogParser.parse(raw_output)

        if isinstance(parsed, NoEvent):
            logger.debug("No bandwidth overutilization line (01010045) found")
            return BandwidthAnalyzer.classify(None, thresholds)

        if isinstance(parsed, (FormatError, DataError)):
            logger.debug(f"Unusable log line: {parsed.reason}")
            return unknown_result(parsed.reason)

        if not isinstance(parsed, Matched):
            raise TypeError(f"Unexpected parse result: {parsed!r}")

        event = parsed.event
        logger.debug(f"Extracted date: '{event.timestamp_text}'")
        logger.debug(f"Usage: {event.used_mbps} Mbps / {event.licensed_mbps} Mbps")
        logger.debug(f"Computed percentage: {event.percent}%")

        try:
            age_minutes = resolve_age_minutes(event.timestamp_text, now)
        except ProbeError as e:
            return unknown_result(e)

        logger.debug(f"Log age: {age_minutes} minutes "
                     f"(age_alert={thresholds.age_alert}, age_no_alert={thresholds.age_no_alert})")

        return BandwidthAnalyzer.classify(event, thresholds, age_minutes)
