"""
Timezone-aware timestamps for stored rows
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
