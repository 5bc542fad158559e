"""Unit tests for order number generation."""

import re

import pytest

from eggstand.domain.exceptions import ValidationError
from eggstand.domain.service.order_numbers import new_order_number


def test_format():
    number = new_order_number(lambda n: False)
    assert re.fullmatch(r"ORD-[A-Z0-9]{6}", number)


def test_skips_taken_numbers():
    taken = []

    def is_taken(candidate):
        taken.append(candidate)
        return len(taken) < 3

    number = new_order_number(is_taken)
    assert number == taken[-1]
    assert len(taken) == 3


def test_gives_up_when_everything_is_taken():
    with pytest.raises(ValidationError, match="unique order number"):
        new_order_number(lambda n: True)
