from datetime import date
from decimal import Decimal
import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from merchant_bi.models import Invoice, InvoiceItem
from merchant_bi.sql_expressions import created_on, has_successful_transaction, line_total
from merchant_bi.utils import to_major_units


logger = logging.getLogger(__name__)


def _successful_revenue_query(db: Session, on_date: Optional[date] = None):
    query = (
        db.query(func.coalesce(func.sum(line_total()), 0))
        .select_from(InvoiceItem)
        .join(Invoice, Invoice.id == InvoiceItem.invoice_id)
        .filter(has_successful_transaction())
    )
    if on_date is not None:
        query = query.filter(created_on(Invoice.created_at, on_date))
    return query


def merchant_revenue_minor_units(db: Session, merchant_id: int, on_date: Optional[date] = None) -> int:
    total = _successful_revenue_query(db, on_date).filter(Invoice.merchant_id == merchant_id).scalar()
    return int(total or 0)


def merchant_revenue(db: Session, merchant_id: int, on_date: Optional[date] = None) -> Decimal:
    """Successful revenue for one merchant, optionally limited to a calendar day.

    Unknown merchants simply have no matching invoices and report zero.
    """
    minor_units = merchant_revenue_minor_units(db, merchant_id, on_date)
    revenue = to_major_units(minor_units)
    logger.debug("Revenue for merchant_id=%s on_date=%s: %s", merchant_id, on_date, revenue)
    return revenue


def total_revenue_for_date(db: Session, on_date: date) -> Decimal:
    total = _successful_revenue_query(db, on_date).scalar()
    revenue = to_major_units(total)
    logger.debug("Total revenue on_date=%s: %s", on_date, revenue)
    return revenue
