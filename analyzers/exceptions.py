"""Errors raised while checking bandwidth utilization"""


class ProbeError(Exception):
    """Base class for every error that ends a check as UNKNOWN"""


class ConfigError(ProbeError):
    """Thresholds or settings are inconsistent"""


class TransportFailure(ProbeError):
    """SSH connection, authentication or command execution failed"""


class LogFormatError(ProbeError):
    """The log line or its timestamp could not be parsed"""


class LogDataError(ProbeError):
    """The log line parsed but its values cannot be trusted"""
