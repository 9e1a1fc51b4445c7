"""
Wiring: build the AppContext once and hand it to every service.
"""

import logging
from typing import Any, List, Optional

from medstock.config.database import create_db_engine, create_session_factory, init_db
from medstock.config.settings import Settings, get_settings
from medstock.core.clock import Clock, SystemClock
from medstock.core.context import AppContext
from medstock.core.logging_config import setup_logging
from medstock.modules.dashboard import AggregationEngine, DashboardStats, LowStockMonitor
from medstock.modules.medicines import MedicineRecord, MedicineService
from medstock.modules.sales import SaleRecord, SaleService

logger = logging.getLogger(__name__)


def create_context(
    settings: Optional[Settings] = None,
    clock: Optional[Clock] = None,
    create_schema: bool = True
) -> AppContext:
    settings = settings or get_settings()
    setup_logging(settings)

    engine = create_db_engine(settings)
    if create_schema:
        init_db(engine)

    logger.info(f"{settings.app_name} v{settings.version} ready")
    return AppContext(
        settings=settings,
        engine=engine,
        session_factory=create_session_factory(engine),
        clock=clock or SystemClock()
    )


class MedStock:
    """
    The operations exposed to outer layers (an HTTP API, a CLI).
    """

    def __init__(self, context: AppContext):
        self.context = context
        self.medicines = MedicineService(context)
        self.sales = SaleService(context)
        self.aggregation = AggregationEngine(context)
        self.low_stock = LowStockMonitor(context)

    def process_sale(self, request: Any) -> SaleRecord:
        return self.sales.process_sale(request)

    def get_dashboard_stats(self) -> DashboardStats:
        return self.aggregation.get_dashboard_stats()

    def get_low_stock(self, limit: Optional[int] = None) -> List[MedicineRecord]:
        return self.low_stock.list_low_stock(limit)

    def close(self) -> None:
        self.context.dispose()


def create_medstock(settings: Optional[Settings] = None, clock: Optional[Clock] = None) -> MedStock:
    return MedStock(create_context(settings, clock))
