"""
Domain exceptions for the stock ledger.

These represent outcomes of ledger operations and are independent of the
storage engine. SQLAlchemy errors are translated into PersistenceError at the
transaction boundary; nothing else is converted on the way up.
"""

from typing import Any, Dict, Optional


class InventoryError(Exception):
    """Base exception for all ledger errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(InventoryError, ValueError):
    """Raised for malformed, missing or non-positive input. Nothing was read or written."""

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message=message, details={"errors": errors or []})

    @property
    def errors(self) -> list:
        return self.details["errors"]


class MedicineNotFoundError(InventoryError):
    """Raised when the referenced medicine does not exist."""

    def __init__(self, medicine_id: Any):
        self.medicine_id = medicine_id
        super().__init__(
            message=f"Medicine not found: {medicine_id}",
            details={"medicine_id": medicine_id},
        )


class SaleNotFoundError(InventoryError):
    """Raised when a sale lookup matches no record."""

    def __init__(self, sale_id: Any):
        self.sale_id = sale_id
        super().__init__(
            message=f"Sale not found: {sale_id}", details={"sale_id": sale_id}
        )


class InsufficientStockError(InventoryError):
    """
    Raised when the requested quantity exceeds the quantity-on-hand.

    This is an expected business outcome; no mutation occurred.
    """

    def __init__(self, medicine_id: Any, requested: int, available: int):
        self.medicine_id = medicine_id
        self.requested = requested
        self.available = available
        super().__init__(
            message=(
                f"Insufficient stock for medicine {medicine_id}. "
                f"Requested: {requested}, Available: {available}"
            ),
            details={
                "medicine_id": medicine_id,
                "requested": requested,
                "available": available,
            },
        )


class PersistenceError(InventoryError):
    """
    Raised when the store failed mid-transaction. The unit of work was rolled
    back in full; callers may retry.
    """

    def __init__(self, operation: str, reason: Optional[str] = None, transient: bool = False):
        message = f"Persistence failure during {operation}"
        if reason:
            message += f": {reason}"
        self.operation = operation
        self.transient = transient
        super().__init__(
            message=message,
            details={"operation": operation, "reason": reason, "transient": transient},
        )
