import logging
from typing import List, Optional

from medstock.core.clock import day_window, resolve_timezone
from medstock.core.context import AppContext
from medstock.core.transaction import read_scope
from medstock.core.validators import require_positive_int
from medstock.modules.medicines.repository import MedicineRepository
from medstock.modules.medicines.schemas import MedicineRecord
from medstock.modules.sales.repository import SaleRepository
from medstock.modules.sales.schemas import SaleListItem

from .schemas import DashboardStats

logger = logging.getLogger(__name__)

class AggregationEngine:
    """
    Read-only statistics over current medicine and sale records.

    Nothing here takes locks or writes. Reads are not wrapped in a shared
    snapshot, so a report assembled while sales are being processed can mix
    instants: e.g. total_sales may already count a sale that total_revenue
    does not yet include.
    """

    def __init__(self, context: AppContext):
        self.context = context
        self.settings = context.settings

    def get_dashboard_stats(self) -> DashboardStats:
        # One "today" window for the whole report
        today_start, today_end = day_window(
            self.context.clock.now(),
            resolve_timezone(self.settings.business_timezone)
        )

        with read_scope(self.context.session_factory, "get_dashboard_stats") as db:
            medicines = MedicineRepository(db)
            sales = SaleRepository(db)

            return DashboardStats(
                total_medicines=medicines.count_all(),
                total_sales=sales.count_all(),
                total_revenue=sales.sum_totals(),
                today_sales=sales.sum_totals_since(today_start, today_end),
                today_transactions=sales.count_since(today_start, today_end),
                low_stock_count=medicines.count_below_reorder(),
                total_inventory_value=medicines.total_inventory_value()
            )

    def get_recent_sales(self, limit: Optional[int] = None) -> List[SaleListItem]:
        """Most recent sales first"""
        limit = require_positive_int(
            self.settings.recent_sales_limit if limit is None else limit, "limit"
        )
        with read_scope(self.context.session_factory, "get_recent_sales") as db:
            return [
                SaleListItem.from_row(sale, name)
                for sale, name in SaleRepository(db).list_recent(limit)
            ]

class LowStockMonitor(AggregationEngine):
    """Ranked view of medicines at or below their reorder level"""

    def list_low_stock(self, limit: Optional[int] = None) -> List[MedicineRecord]:
        """
        Medicines with quantity_in_stock <= reorder_level, most depleted
        first. Ties are ordered by id so repeated calls agree.
        """
        limit = require_positive_int(
            self.settings.low_stock_limit if limit is None else limit, "limit"
        )
        with read_scope(self.context.session_factory, "list_low_stock") as db:
            medicines = MedicineRepository(db).list_below_reorder(limit)
            if medicines:
                logger.debug(f"{len(medicines)} medicines at or below reorder level")
            return [MedicineRecord.model_validate(m) for m in medicines]
