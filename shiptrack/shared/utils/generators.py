"""ID and value generators (CUID primary keys, shipment tracking numbers)."""

import secrets
import string
import time

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()

TRACKING_NUMBER_PREFIX = "TRK"
_BASE36_ALPHABET = string.digits + string.ascii_uppercase
_TRACKING_RANDOM_LENGTH = 6


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Returns:
        A new CUID string.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def to_base36(value: int) -> str:
    """Encode a non-negative integer as uppercase base36."""
    if value < 0:
        raise ValueError("to_base36 expects a non-negative integer")
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36_ALPHABET[rem])
    return "".join(reversed(digits))


def generate_tracking_number() -> str:
    """Return a new tracking number: TRK-<base36 epoch millis>-<6 random base36 chars>.

    Not checked against the store; uniqueness relies on time + randomness.
    """
    timestamp = to_base36(time.time_ns() // 1_000_000)
    random_part = "".join(
        secrets.choice(_BASE36_ALPHABET) for _ in range(_TRACKING_RANDOM_LENGTH)
    )
    return f"{TRACKING_NUMBER_PREFIX}-{timestamp}-{random_part}"
