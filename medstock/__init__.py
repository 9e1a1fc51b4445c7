"""
MedStock: stock ledger and sale-transaction engine for a retail pharmacy.
"""

__version__ = "1.0.0"
