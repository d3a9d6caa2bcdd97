"""Domain errors raised by policies, use cases and persistence adapters."""

from __future__ import annotations


class FulfillmentError(Exception):
    """Base class for every engine error."""


class NotFound(FulfillmentError):
    """Referenced order, assignment or print center does not exist."""


class DuplicateAssignment(FulfillmentError):
    """An assignment already exists for the order (unique order_id)."""

    def __init__(self, order_id: str):
        super().__init__(f"Order {order_id} already has an assignment")
        self.order_id = order_id


class InvalidTransition(FulfillmentError):
    """Requested status change is not an edge of the lifecycle graph."""


class StaleTransition(InvalidTransition):
    """Stored status changed between validation and write."""


class NotAuthorized(FulfillmentError):
    """Actor is not allowed to perform the operation."""


class NoEligibleCenters(FulfillmentError):
    """No active print center can receive assignments."""


class StoreFailure(FulfillmentError):
    """Underlying persistence error; aborts the current unit of work."""
