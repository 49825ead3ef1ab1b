"""Human-readable order numbers: ``ORD-{UTC yyyyMMddHHmmss}-{4 digits}``."""

import random
from datetime import UTC, datetime

from protean.exceptions import ValidationError

MAX_ATTEMPTS = 5


def generate_order_number(now=None, rng=random) -> str:
    now = now or datetime.now(UTC)
    return f"ORD-{now.strftime('%Y%m%d%H%M%S')}-{rng.randint(1000, 9999)}"


def unique_order_number(is_taken, now=None, rng=random, attempts=MAX_ATTEMPTS) -> str:
    """Generate numbers until ``is_taken`` reports a free one."""
    for _ in range(attempts):
        number = generate_order_number(now=now, rng=rng)
        if not is_taken(number):
            return number
    raise ValidationError({"order_number": [f"Could not allocate a unique order number after {attempts} attempts"]})
