"""Command definitions"""

LTM_LOG_PATH = "/var/log/ltm"

# Log id emitted by tmm when traffic exceeds the licensed throughput
BANDWIDTH_LOG_SIGNATURE = "01010045:5: Bandwidth utilization"

BANDWIDTH_LOG_COMMAND = (
    f"tac {LTM_LOG_PATH} 2>/dev/null | grep -m1 '{BANDWIDTH_LOG_SIGNATURE}' || true"
)

# grep exits 1 when no line was selected
NO_MATCH_EXIT_CODES = frozenset({1})
