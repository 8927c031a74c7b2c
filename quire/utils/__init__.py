"""
Shared utilities for QUIRE.

Common functionality used across contexts:
- Logger setup with provenance tracking
- Timestamps for log directories
"""

from quire.utils.timestamp import now

__all__ = ["now"]
