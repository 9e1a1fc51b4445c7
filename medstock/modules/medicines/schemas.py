from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from typing import Optional, Dict, Any
from datetime import date, datetime
from decimal import Decimal

from medstock.core.clock import as_utc

# ==================== BASE CLASS FOR RECORDS ====================

class MedicineBaseModel(BaseModel):
    """
    Base for records handed back to callers: read from ORM attributes,
    immutable once built.
    """
    model_config = ConfigDict(from_attributes=True, frozen=True)

# ==================== REQUEST SCHEMAS ====================

class MedicineCreate(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    generic_name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    manufacturer: Optional[str] = Field(None, max_length=255)
    category_id: Optional[int] = Field(None, description="Opaque category reference")
    batch_number: Optional[str] = Field(None, max_length=100)
    expiry_date: Optional[date] = None
    quantity_in_stock: int = Field(0, ge=0, description="Opening quantity-on-hand")
    reorder_level: int = Field(10, ge=0, description="Low-stock threshold")
    unit_price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, description="Current unit price")

class MedicineUpdate(BaseModel):
    """
    Whitelisted patch for a medicine.

    Only the fields below may change; anything else (quantity_in_stock
    included, which moves only through sales and restocks) is rejected.
    """
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    generic_name: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    manufacturer: Optional[str] = Field(None, max_length=255)
    category_id: Optional[int] = None
    batch_number: Optional[str] = Field(None, max_length=100)
    expiry_date: Optional[date] = None
    reorder_level: Optional[int] = Field(None, ge=0)
    unit_price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)

    @model_validator(mode="after")
    def _required_fields_not_cleared(self):
        for field in ("name", "reorder_level", "unit_price"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be cleared")
        return self

    def changes(self) -> Dict[str, Any]:
        """Fields the caller actually supplied"""
        return self.model_dump(exclude_unset=True)

# ==================== RESPONSE SCHEMAS ====================

class MedicineRecord(MedicineBaseModel):
    id: int
    name: str
    generic_name: Optional[str] = None
    description: Optional[str] = None
    manufacturer: Optional[str] = None
    category_id: Optional[int] = None
    batch_number: Optional[str] = None
    expiry_date: Optional[date] = None
    quantity_in_stock: int
    reorder_level: int
    unit_price: Decimal
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def _to_utc(cls, v: Optional[datetime]):
        return as_utc(v) if v is not None else None

    @property
    def is_low_stock(self) -> bool:
        return self.quantity_in_stock <= self.reorder_level
