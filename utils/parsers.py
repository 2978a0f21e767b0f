"""Parser for BIG-IP bandwidth utilization log lines"""
import re
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from config.commands import BANDWIDTH_LOG_SIGNATURE

PERCENT_PRECISION = Decimal("0.01")


@dataclass(frozen=True)
class BandwidthEvent:
    """One overutilization event read from /var/log/ltm"""

    used_mbps: int
    licensed_mbps: int
    timestamp_text: str
    percent: Decimal = field(init=False)

    def __post_init__(self):
        if self.licensed_mbps <= 0:
            raise ValueError("licensed bandwidth must be positive")
        percent = (Decimal(100) * self.used_mbps / self.licensed_mbps).quantize(
            PERCENT_PRECISION, rounding=ROUND_HALF_UP
        )
        object.__setattr__(self, "percent", percent)


@dataclass(frozen=True)
class Matched:
    event: BandwidthEvent


@dataclass(frozen=True)
class NoEvent:
    pass


@dataclass(frozen=True)
class FormatError:
    reason: str


@dataclass(frozen=True)
class DataError:
    reason: str


class BandwidthLogParser:
    """Manual parser for the 01010045 tmm log line"""

    # Jan 15 11:10:38 BIGIP-CLOUD notice tmm[126422]: 01010045:5: Bandwidth utilization
    # is 1070 Mbps, exceeded 75% of Licensed 1000 Mbps.
    SIGNATURE_RE = re.compile(re.escape(BANDWIDTH_LOG_SIGNATURE), re.IGNORECASE)
    PAYLOAD_RE = re.compile(
        re.escape(BANDWIDTH_LOG_SIGNATURE) + r" is (\d+) Mbps.*Licensed (\d+) Mbps"
    )
    TIMESTAMP_RE = re.compile(r"^(\w+\s+\d+\s+\d+:\d+:\d+)")

    @staticmethod
    def parse(raw_output):
        """
        Parse the output of the log retrieval command

        Returns:
            Matched | NoEvent | FormatError | DataError
        """
        if raw_output is None:
            return NoEvent()

        line = raw_output.strip()
        if not line or not BandwidthLogParser.SIGNATURE_RE.search(line):
            return NoEvent()

        match = BandwidthLogParser.PAYLOAD_RE.search(line)
        if not match:
            return FormatError(f"Unexpected log line format: {line}")

        used, licensed = int(match.group(1)), int(match.group(2))
        if licensed == 0:
            return DataError("Licensed bandwidth is 0, cannot compute percentage")

        date_match = BandwidthLogParser.TIMESTAMP_RE.match(line)
        if not date_match:
            return FormatError(f"Cannot extract date from log line: {line}")

        return Matched(BandwidthEvent(used, licensed, date_match.group(1)))
