from sqlalchemy import Column, Integer, String, DateTime, Date, Text, ForeignKey, Numeric, CheckConstraint, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from medstock.config.database import Base

class TimestampMixin:
    """Automatic created/updated timestamps"""
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

# ===== MEDICINES =====

class Medicine(Base, TimestampMixin):
    """Medicine with its quantity-on-hand"""
    __tablename__ = "medicines"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    generic_name = Column(String(255))
    description = Column(Text)
    manufacturer = Column(String(255))
    # Category bookkeeping lives outside the ledger; the reference is opaque here
    category_id = Column(Integer)
    batch_number = Column(String(100))
    expiry_date = Column(Date)
    quantity_in_stock = Column(Integer, nullable=False, default=0)
    reorder_level = Column(Integer, nullable=False, default=10)
    unit_price = Column(Numeric(10, 2), nullable=False)

    __table_args__ = (
        CheckConstraint('quantity_in_stock >= 0', name='ck_medicines_stock_non_negative'),
        CheckConstraint('reorder_level >= 0', name='ck_medicines_reorder_non_negative'),
        CheckConstraint('unit_price >= 0', name='ck_medicines_price_non_negative'),
        Index('ix_medicines_stock_level', 'quantity_in_stock', 'id'),
    )

    # Relationships
    sales = relationship("Sale", back_populates="medicine")

# ===== SALES =====

class Sale(Base):
    """Append-only sale record; prices are a snapshot taken at sale time"""
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)
    medicine_id = Column(Integer, ForeignKey("medicines.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(12, 2), nullable=False)
    sale_date = Column(DateTime(timezone=True), nullable=False, index=True)
    customer_name = Column(String(255))
    customer_phone = Column(String(50))
    notes = Column(Text)
    sold_by = Column(String(255))

    __table_args__ = (
        CheckConstraint('quantity > 0', name='ck_sales_quantity_positive'),
    )

    # Relationships
    medicine = relationship("Medicine", back_populates="sales")
