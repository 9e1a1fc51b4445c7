import logging
import time
from typing import Any, List

from medstock.core.context import AppContext
from medstock.core.exceptions import (
    InsufficientStockError,
    MedicineNotFoundError,
    PersistenceError,
    SaleNotFoundError,
)
from medstock.core.clock import as_utc
from medstock.core.money import line_total, to_money
from medstock.core.transaction import read_scope, transaction_scope
from medstock.core.validators import parse_model
from medstock.modules.medicines.repository import MedicineRepository
from medstock.shared.database.models import Sale

from .ledger import StockLedger
from .repository import SaleRepository
from .schemas import SaleCreateRequest, SaleListItem, SaleRecord

logger = logging.getLogger(__name__)


class SaleService:
    """
    Sale processor.

    Each sale is one unit of work: price lookup, stock reservation and the
    sale insert commit together or not at all, so the stock figure and the
    sale log cannot drift apart.
    """

    def __init__(self, context: AppContext):
        self.context = context
        self.settings = context.settings
        self.clock = context.clock

    # ==================== SALE PROCESSING ====================

    def process_sale(self, request: Any) -> SaleRecord:
        """
        Record a sale and take its units out of stock.

        `request` is a SaleCreateRequest or a mapping with the same fields.

        Raises:
            ValidationError: malformed request; nothing was read.
            MedicineNotFoundError: unknown medicine; nothing was written.
            InsufficientStockError: not enough stock; nothing was written.
            PersistenceError: the store failed (or lock conflicts outlasted
                the retry budget); the unit of work was rolled back.
        """
        sale_request = parse_model(SaleCreateRequest, request)
        max_attempts = self.settings.sale_max_attempts

        for attempt in range(1, max_attempts + 1):
            try:
                return self._process_once(sale_request)
            except InsufficientStockError as e:
                logger.warning(
                    f"Sale rejected for medicine {e.medicine_id}: "
                    f"requested {e.requested}, available {e.available}"
                )
                raise
            except PersistenceError as e:
                if not e.transient or attempt == max_attempts:
                    raise
                logger.warning(
                    f"Lock conflict on medicine {sale_request.medicine_id}, "
                    f"retrying sale (attempt {attempt}/{max_attempts})"
                )
                time.sleep(self.settings.sale_retry_backoff_seconds * attempt)

        # range() above always returns or raises
        raise PersistenceError("process_sale", "retry budget exhausted", transient=True)

    def _process_once(self, sale_request: SaleCreateRequest) -> SaleRecord:
        with transaction_scope(
            self.context.session_factory,
            "process_sale",
            lock_timeout_seconds=self.settings.lock_timeout_seconds
        ) as db:
            medicine = MedicineRepository(db).get_for_update(sale_request.medicine_id)
            if medicine is None:
                raise MedicineNotFoundError(sale_request.medicine_id)

            # Snapshot the price before the reservation; it is never caller-supplied
            unit_price = to_money(medicine.unit_price)

            remaining = StockLedger(db).reserve(medicine.id, sale_request.quantity)

            sale = SaleRepository(db).insert(Sale(
                medicine_id=medicine.id,
                quantity=sale_request.quantity,
                unit_price=unit_price,
                total_price=line_total(sale_request.quantity, unit_price),
                sale_date=as_utc(self.clock.now()),
                customer_name=sale_request.customer_name,
                customer_phone=sale_request.customer_phone,
                notes=sale_request.notes,
                sold_by=sale_request.sold_by
            ))
            record = SaleRecord.model_validate(sale)

        logger.info(
            f"Sale {record.id}: {record.quantity} x medicine {record.medicine_id} "
            f"@ {record.unit_price} = {record.total_price} ({remaining} left)"
        )
        return record

    # ==================== QUERIES ====================

    def get_sale(self, sale_id: int) -> SaleListItem:
        with read_scope(self.context.session_factory, "get_sale") as db:
            row = SaleRepository(db).get_by_id(sale_id)
            if row is None:
                raise SaleNotFoundError(sale_id)
            return SaleListItem.from_row(*row)

    def list_sales(self) -> List[SaleListItem]:
        """All sales, newest first, with the medicine's current name"""
        with read_scope(self.context.session_factory, "list_sales") as db:
            return [SaleListItem.from_row(*row) for row in SaleRepository(db).list_all()]
