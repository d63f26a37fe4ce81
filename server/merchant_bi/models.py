from datetime import datetime

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship, validates

from .db import Base

TRANSACTION_RESULTS = ("success", "failed")


class Merchant(Base):
    __tablename__ = "merchants"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    items = relationship("Item", back_populates="merchant")
    invoices = relationship("Invoice", back_populates="merchant")

    @property
    def customers(self):
        by_id = {}
        for invoice in self.invoices:
            by_id.setdefault(invoice.customer_id, invoice.customer)
        return [by_id[customer_id] for customer_id in sorted(by_id)]

    @property
    def invoice_items(self):
        return [line for invoice in self.invoices for line in invoice.invoice_items]

    @validates("name")
    def validate_name(self, key: str, name: str) -> str:
        if name is None or not name.strip():
            raise ValueError("Merchant name cannot be blank.")
        return name


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    invoices = relationship("Invoice", back_populates="customer")


class Item(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    # minor currency units (cents)
    unit_price = Column(Integer, nullable=False, default=0)
    merchant_id = Column(Integer, ForeignKey("merchants.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    merchant = relationship("Merchant", back_populates="items")
    invoice_items = relationship("InvoiceItem", back_populates="item")


class Invoice(Base):
    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True)
    merchant_id = Column(Integer, ForeignKey("merchants.id"), nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    status = Column(String(50), nullable=False, default="shipped")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    merchant = relationship("Merchant", back_populates="invoices")
    customer = relationship("Customer", back_populates="invoices")
    invoice_items = relationship("InvoiceItem", back_populates="invoice", cascade="all, delete-orphan")
    transactions = relationship("Transaction", back_populates="invoice", cascade="all, delete-orphan")


class InvoiceItem(Base):
    __tablename__ = "invoice_items"
    __table_args__ = (CheckConstraint("quantity >= 0", name="ck_invoice_items_quantity_non_negative"),)

    id = Column(Integer, primary_key=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.id"), nullable=True)
    # minor currency units (cents)
    unit_price = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    invoice = relationship("Invoice", back_populates="invoice_items")
    item = relationship("Item", back_populates="invoice_items")

    @property
    def line_total(self) -> int:
        return (self.unit_price or 0) * (self.quantity or 0)

    @validates("quantity")
    def validate_quantity(self, key: str, quantity: int) -> int:
        if quantity is not None and quantity < 0:
            raise ValueError("Invoice item quantity cannot be negative.")
        return quantity


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False, index=True)
    credit_card_number = Column(String(32), nullable=True)
    result = Column(String(20), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    invoice = relationship("Invoice", back_populates="transactions")

    @validates("result")
    def normalize_result(self, key: str, result: str) -> str:
        normalized = (result or "").strip().lower()
        if normalized not in TRANSACTION_RESULTS:
            raise ValueError(f"Unknown transaction result: {result!r}.")
        return normalized
