"""Plugin status and exit codes"""
from enum import IntEnum


class Status(IntEnum):
    """Nagios/Icinga service states, the value is the process exit code"""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    @property
    def exit_code(self):
        return int(self)
