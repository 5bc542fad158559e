"""Order number generation: ``ORD-`` plus six upper-case alphanumerics."""

from __future__ import annotations

import secrets
import string
from typing import Callable

from eggstand.domain.exceptions import ValidationError

PREFIX = "ORD-"
_ALPHABET = string.ascii_uppercase + string.digits
_LENGTH = 6
_MAX_TRIES = 20


def new_order_number(is_taken: Callable[[str], bool]) -> str:
    """Draw random codes until one is not taken."""
    for _ in range(_MAX_TRIES):
        candidate = PREFIX + "".join(secrets.choice(_ALPHABET) for _ in range(_LENGTH))
        if not is_taken(candidate):
            return candidate
    raise ValidationError("Could not allocate a unique order number")
