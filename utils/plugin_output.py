"""Monitoring plugin output line with perfdata"""
from config.thresholds import GRAPH_MAX, GRAPH_MIN

UNKNOWN_VALUE = "U"


def format_perfdata(graph_percent, thresholds):
    """bandwidth_percent=value%;warning;critical;min;max"""
    value = UNKNOWN_VALUE if graph_percent is None else graph_percent
    return (f"bandwidth_percent={value}%;{thresholds.warning};{thresholds.critical};"
            f"{GRAPH_MIN};{GRAPH_MAX}")


def format_plugin_output(result, thresholds):
    """
    Render a ClassificationResult as the single plugin output line

    e.g. "CRITICAL - Bandwidth at 107.00% (1070/1000 Mbps) - alert 00d:00h:02m:00s ago
    | bandwidth_percent=107.00%;75;80;0;150"
    """
    return (f"{result.status.name} - {result.message} | "
            f"{format_perfdata(result.graph_percent, thresholds)}")
