"""Timestamp formatting utilities."""

from datetime import datetime


def now() -> str:
    """
    Current local time formatted for directory and file names.

    Returns:
        Timestamp like "20251114_123456"

    Example:
        log_dir = LOGS_PATH / f"paginate_{now()}"
    """
    return datetime.now().strftime("%Y%m%d_%H%M%S")
