import random
import re
from datetime import UTC, datetime

import pytest
from protean.exceptions import ValidationError

from petshop.ordering.numbering import generate_order_number, unique_order_number

NOW = datetime(2025, 3, 9, 14, 5, 7, tzinfo=UTC)


def test_format():
    number = generate_order_number(now=NOW, rng=random.Random(7))
    assert re.fullmatch(r"ORD-20250309140507-\d{4}", number)


class _ScriptedRng:
    def __init__(self, *values):
        self.values = list(values)

    def randint(self, low, high):
        return self.values.pop(0)


def test_retries_until_free():
    taken = {"ORD-20250309140507-1111"}

    number = unique_order_number(lambda n: n in taken, now=NOW, rng=_ScriptedRng(1111, 2222))
    assert number == "ORD-20250309140507-2222"


def test_gives_up_after_max_attempts():
    calls = []

    def always_taken(number):
        calls.append(number)
        return True

    with pytest.raises(ValidationError):
        unique_order_number(always_taken, now=NOW, attempts=3)
    assert len(calls) == 3
