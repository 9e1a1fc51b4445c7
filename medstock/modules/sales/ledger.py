"""
Stock ledger: the reservation primitive sales are built on.
"""

import logging

from sqlalchemy.orm import Session

from medstock.core.exceptions import InsufficientStockError, MedicineNotFoundError
from medstock.core.validators import require_positive_int
from medstock.modules.medicines.repository import MedicineRepository

logger = logging.getLogger(__name__)


class StockLedger:
    """
    View over quantity-on-hand inside the caller's transaction.

    Reservations go through a single conditional UPDATE, so two concurrent
    reservations against one medicine can never both pass the stock check on
    the same quantity.
    """

    def __init__(self, db: Session):
        self.db = db
        self.medicines = MedicineRepository(db)

    def reserve(self, medicine_id: int, quantity: int) -> int:
        """
        Take `quantity` units of `medicine_id` out of stock.

        Returns the remaining quantity-on-hand. Raises ValidationError for a
        non-positive quantity (before touching the store),
        MedicineNotFoundError for an unknown medicine and
        InsufficientStockError when stock is short; in the last two cases
        nothing was changed.
        """
        require_positive_int(quantity)

        if self.medicines.decrement_stock(medicine_id, quantity):
            remaining = self.medicines.get_stock_level(medicine_id)
            logger.debug(f"Reserved {quantity} of medicine {medicine_id}, {remaining} left")
            return remaining

        # Nothing matched: find out which failure it was
        available = self.medicines.get_stock_level(medicine_id)
        if available is None:
            raise MedicineNotFoundError(medicine_id)
        raise InsufficientStockError(medicine_id, requested=quantity, available=available)
