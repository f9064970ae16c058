"""Utility modules."""

from inbox_triage.utils.logger import configure_logging, get_logger, log_context
from inbox_triage.utils.timeparse import EPOCH_MIN, ensure_utc, parse_timestamp, utc_now

__all__ = [
    "configure_logging",
    "get_logger",
    "log_context",
    "EPOCH_MIN",
    "ensure_utc",
    "parse_timestamp",
    "utc_now",
]
