"""
Small helpers shared by the route modules.
"""
from datetime import datetime, timezone


def get_timestamp() -> str:
    """Get ISO format timestamp."""
    return datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%S.%f') + 'Z'
