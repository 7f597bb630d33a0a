"""
Identifier Generation

Entity ids are opaque strings built from a millisecond timestamp and random
base36 characters. Nothing in RexOS parses them; only equality matters.
"""

import secrets
import string
import time


_BASE36 = string.digits + string.ascii_lowercase


def generate_id() -> str:
    """
    Generate a new entity id.

    Example:
        generate_id()  # "1705312345678-k3j9x0q2m"
    """
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"{millis}-{suffix}"
