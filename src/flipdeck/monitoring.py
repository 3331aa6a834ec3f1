"""Monitoring configuration for the bot."""
from prometheus_client import Counter, Gauge, start_http_server

# Dataset metrics
dataset_entries = Gauge(
    "flipdeck_dataset_entries",
    "Number of entries in the loaded dataset",
)

dataset_load_failures = Counter(
    "flipdeck_dataset_load_failures_total",
    "Total number of failed dataset loads",
)

# Review metrics
cards_graded = Counter(
    "flipdeck_cards_graded_total",
    "Total number of graded cards",
    ["outcome"],
)

card_navigations = Counter(
    "flipdeck_card_navigations_total",
    "Total number of navigation actions",
    ["direction"],
)

card_flips = Counter(
    "flipdeck_card_flips_total",
    "Total number of card flips",
)

sessions_opened = Counter(
    "flipdeck_sessions_opened_total",
    "Total number of review sessions opened with /start",
)

# Persistence metrics
progress_writes = Counter(
    "flipdeck_progress_writes_total",
    "Total number of progress store writes",
)

progress_load_failures = Counter(
    "flipdeck_progress_load_failures_total",
    "Total number of unreadable progress slots reset to empty",
)

# Error metrics
error_count = Counter(
    "flipdeck_errors_total",
    "Total number of errors encountered",
    ["error_type"],
)


def start_monitoring(port: int = 9090) -> None:
    """Start the Prometheus metrics server."""
    start_http_server(port)
