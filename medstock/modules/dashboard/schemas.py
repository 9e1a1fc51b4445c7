from pydantic import BaseModel, Field, ConfigDict
from decimal import Decimal

class DashboardStats(BaseModel):
    """
    Dashboard figures as of the call.

    Each field comes from its own query; with sales landing concurrently two
    fields of one report may describe slightly different instants.
    """
    model_config = ConfigDict(frozen=True)

    total_medicines: int = Field(..., ge=0)
    total_sales: int = Field(..., ge=0, description="Number of sale records")
    total_revenue: Decimal = Field(..., description="Sum of total_price across all sales")
    today_sales: Decimal = Field(..., description="Revenue since local midnight in the business timezone")
    today_transactions: int = Field(..., ge=0)
    low_stock_count: int = Field(..., ge=0)
    total_inventory_value: Decimal = Field(..., description="Sum of stock x current unit price")
