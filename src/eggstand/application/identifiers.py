"""Sequential string IDs for catalog and bookkeeping records."""

from __future__ import annotations

from typing import Iterable


def next_id(existing: Iterable[str]) -> str:
    """One past the highest numeric ID in use, starting at "1"."""
    numeric = [int(i) for i in existing if str(i).isdigit()]
    return str(max(numeric) + 1) if numeric else "1"
