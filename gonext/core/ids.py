"""Record identifiers, timestamps and the 0/1 flag codec."""
import secrets
import string
import time
from datetime import datetime, timezone

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_SUFFIX_LENGTH = 9


def generate_id() -> str:
    """Return a new record id: epoch milliseconds plus a random base36 suffix."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LENGTH))
    return f"{int(time.time() * 1000)}-{suffix}"


def current_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. 2024-06-15T10:30:00.000Z"""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def current_date() -> str:
    """Timestamp used as the default visit date."""
    return current_timestamp()


def bool_to_int(value) -> int:
    return 1 if value else 0


def int_to_bool(value) -> bool:
    return value == 1
