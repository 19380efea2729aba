"""Clock used for every stored timestamp (created, handled, last reacted)."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Timezone-aware "now" in UTC; column defaults and counter touches share it."""
    return datetime.now(UTC)
