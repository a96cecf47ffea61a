"""Shared utilities: datetime and generators."""

from shiptrack.shared.utils.datetime import ensure_utc, now_ms, utc_now
from shiptrack.shared.utils.generators import (
    generate_cuid,
    generate_tracking_number,
)

__all__ = [
    "generate_cuid",
    "generate_tracking_number",
    "utc_now",
    "ensure_utc",
    "now_ms",
]
