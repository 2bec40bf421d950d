"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input was malformed or a business invariant was violated."""


class EntityNotFoundError(DomainException):
    """A repository lookup by id found nothing."""


class EntityReferenceError(DomainException):
    """A record refers to another entity that does not exist."""


class ProductNotFoundError(EntityReferenceError):

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product with Id {product_id} not found")
        self.product_id = product_id


class InvalidTransitionError(DomainException):
    """An order status change would move the workflow backwards."""


class BackendUnavailableError(DomainException):
    """The record store cannot be reached."""


class PartialApplyError(DomainException):
    """A stock adjustment was recorded but the product stock was not updated.

    Carries everything needed to retry the stock write on its own without
    recording the adjustment a second time.
    """

    def __init__(
        self,
        adjustment_id: int,
        product_id: int,
        delta: int,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            f"Stock adjustment #{adjustment_id} was recorded but product "
            f"{product_id} stock was not updated by {delta:+d}"
            + (f": {cause}" if cause else "")
        )
        self.adjustment_id = adjustment_id
        self.product_id = product_id
        self.delta = delta
        self.cause = cause
