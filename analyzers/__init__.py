"""Bandwidth analyzers package"""
from .age_resolver import resolve_age_minutes
from .bandwidth_analyzer import BandwidthAnalyzer, ClassificationResult
from .exceptions import (ConfigError, LogDataError, LogFormatError,
                         ProbeError, TransportFailure)

__all__ = [
    'BandwidthAnalyzer',
    'ClassificationResult',
    'resolve_age_minutes',
    'ProbeError',
    'ConfigError',
    'TransportFailure',
    'LogFormatError',
    'LogDataError'
]
