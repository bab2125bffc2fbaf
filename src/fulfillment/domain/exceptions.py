"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Every error names the line item or transition that caused it.
"""

from __future__ import annotations

from dataclasses import dataclass


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EmptyCartError(ValidationError):
    """Checkout was attempted with zero lines in the cart."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class PersistenceError(DomainException):
    """The record store failed (network, lock timeout, constraint violation).

    The operation had no observable effect and may be retried by the caller.
    """


@dataclass(frozen=True)
class StockShortage:
    """One cart line that cannot be satisfied by current stock."""

    product_id: str
    requested: int
    available: int

    def __str__(self) -> str:
        return (
            f"product '{self.product_id}' "
            f"(requested {self.requested}, available {self.available})"
        )


class InsufficientStockError(DomainException):
    """One or more lines exceed the stock available at checkout time.

    Expected outcome of a stale cart or a lost stock race, not a bug.
    ``product_id``, ``requested`` and ``available`` describe the first
    shortage; ``shortages`` holds all of them.
    """

    def __init__(self, shortages: list[StockShortage]) -> None:
        if not shortages:
            raise ValueError("InsufficientStockError needs at least one shortage")
        self.shortages = tuple(shortages)
        details = "; ".join(str(s) for s in self.shortages)
        super().__init__(f"Insufficient stock for {details}")

    @property
    def product_id(self) -> str:
        return self.shortages[0].product_id

    @property
    def requested(self) -> int:
        return self.shortages[0].requested

    @property
    def available(self) -> int:
        return self.shortages[0].available


class InvalidTransitionError(DomainException):
    """A status change outside the allowed transition table was requested."""

    def __init__(self, from_status, to_status) -> None:
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Cannot change order status from {_status_name(from_status)} "
            f"to {_status_name(to_status)}"
        )


def _status_name(status) -> str:
    return getattr(status, "value", str(status))
