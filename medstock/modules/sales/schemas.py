from pydantic import BaseModel, Field, ConfigDict, StrictInt, field_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal

from medstock.core.clock import as_utc

# ==================== BASE CLASS FOR RECORDS ====================

class SalesBaseModel(BaseModel):
    """
    Base for sale records: built from ORM attributes and frozen, since a
    sale never changes after it is written.
    """
    model_config = ConfigDict(from_attributes=True, frozen=True)

# ==================== REQUEST SCHEMAS ====================

class SaleCreateRequest(BaseModel):
    """
    A sale request. There is no price field: the unit price is always read
    from the medicine inside the transaction.
    """
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    medicine_id: int = Field(..., description="Medicine being sold")
    quantity: StrictInt = Field(..., gt=0, description="Units sold")
    customer_name: Optional[str] = Field(None, max_length=255)
    customer_phone: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = Field(None, description="Free-form notes")
    sold_by: Optional[str] = Field(None, max_length=255, description="Actor issuing the sale")

# ==================== RESPONSE SCHEMAS ====================

class SaleRecord(SalesBaseModel):
    id: int
    medicine_id: int
    quantity: int
    unit_price: Decimal
    total_price: Decimal
    sale_date: datetime
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    notes: Optional[str] = None
    sold_by: Optional[str] = None

    @field_validator("sale_date")
    @classmethod
    def _sale_date_utc(cls, v: datetime):
        return as_utc(v)

class SaleListItem(SaleRecord):
    # Current display name of the medicine, joined at read time
    medicine_name: Optional[str] = None

    @classmethod
    def from_row(cls, sale, medicine_name: Optional[str]) -> "SaleListItem":
        return cls(**SaleRecord.model_validate(sale).model_dump(), medicine_name=medicine_name)
