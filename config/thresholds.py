"""Bandwidth check thresholds"""

# Utilization
WARNING_THRESHOLD = 75  # Percentage
CRITICAL_THRESHOLD = 80  # Percentage

# Event age
AGE_ALERT_MINUTES = 5  # Events this recent raise WARNING/CRITICAL
AGE_NO_ALERT_MINUTES = 10  # Events older than this are ignored

# Perfdata range, above 100 so overutilization stays visible on graphs
GRAPH_MIN = 0
GRAPH_MAX = 150
