"""
Timestamps
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Naive UTC now, matching what the database hands back"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
