"""
Dashboard module

- service.py: AggregationEngine (dashboard statistics, recent sales) and
  LowStockMonitor (ranked low-stock list)
- schemas.py: DashboardStats
"""

from .service import AggregationEngine, LowStockMonitor
from .schemas import DashboardStats

__all__ = [
    "AggregationEngine",
    "LowStockMonitor",
    "DashboardStats",
]
