"""StockLevel: the single shared counter of sellable cartons.

There is exactly one stock row.  It is only ever replaced through the
repository's atomic ``set_quantity``; this class validates targets and
answers availability questions on a snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

from eggstand.domain.exceptions import InsufficientStockError, ValidationError


@dataclass(frozen=True)
class StockLevel:
    """Snapshot of the stock row.

    Invariant: ``0 <= current_quantity <= max_quantity``.
    """

    current_quantity: int
    max_quantity: int
    updated_at: datetime | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.max_quantity < 0:
            raise ValidationError("Maximum stock cannot be negative")
        self.validate_target(self.current_quantity)

    @property
    def percent_full(self) -> float:
        if self.max_quantity == 0:
            return 0.0
        return self.current_quantity / self.max_quantity * 100

    def validate_target(self, new_quantity: int) -> None:
        """Reject a target outside ``[0, max_quantity]``."""
        if isinstance(new_quantity, bool) or not isinstance(new_quantity, int):
            raise ValidationError(
                f"Stock quantity must be an integer, got {type(new_quantity).__name__}"
            )
        if new_quantity < 0:
            raise ValidationError(f"Stock cannot be negative (got {new_quantity})")
        if new_quantity > self.max_quantity:
            raise ValidationError(
                f"Stock cannot exceed maximum of {self.max_quantity} (got {new_quantity})"
            )

    def target_for(self, delta: int) -> int:
        """Quantity after applying *delta*.

        A reservation that would drive stock below zero is reported as
        insufficient stock rather than a generic validation error.
        """
        target = self.current_quantity + delta
        if target < 0:
            raise InsufficientStockError(requested=-delta, available=self.current_quantity)
        self.validate_target(target)
        return target

    def replenished(self, amount: int) -> int:
        """Target for a top-up of *amount*, capped at the maximum."""
        if amount <= 0:
            raise ValidationError("Replenish amount must be positive")
        return min(self.current_quantity + amount, self.max_quantity)

    def with_quantity(self, new_quantity: int) -> StockLevel:
        self.validate_target(new_quantity)
        return replace(
            self,
            current_quantity=new_quantity,
            updated_at=datetime.now(timezone.utc),
        )
