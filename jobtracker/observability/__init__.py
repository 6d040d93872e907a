"""
Observability module.

Logging configuration, correlation ID propagation and request logging
middleware.
"""

from jobtracker.observability.correlation import (
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from jobtracker.observability.logger import configure_logging

__all__ = [
    "clear_correlation_id",
    "configure_logging",
    "get_correlation_id",
    "set_correlation_id",
]
