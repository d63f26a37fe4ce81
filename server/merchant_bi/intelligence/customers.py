import logging
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from merchant_bi.models import Customer, Invoice, Merchant, Transaction
from merchant_bi.sql_expressions import has_successful_transaction, is_successful


logger = logging.getLogger(__name__)


def favorite_customer(db: Session, merchant_id: int) -> Optional[Customer]:
    """Customer with the most successful transactions on this merchant's invoices.

    Ties go to the lowest customer id. Returns ``None`` when no customer has a
    successful transaction with the merchant.
    """
    success_count = func.count(Transaction.id)
    customer = (
        db.query(Customer)
        .join(Invoice, Invoice.customer_id == Customer.id)
        .join(Transaction, Transaction.invoice_id == Invoice.id)
        .filter(Invoice.merchant_id == merchant_id, is_successful(Transaction.result))
        .group_by(Customer.id)
        .order_by(success_count.desc(), Customer.id.asc())
        .first()
    )
    logger.debug("Favorite customer for merchant_id=%s: %s", merchant_id, customer.id if customer else None)
    return customer


def favorite_merchant(db: Session, customer_id: int) -> Optional[Merchant]:
    """Merchant with the most successful transactions for this customer; ties go to the lowest merchant id."""
    success_count = func.count(Transaction.id)
    return (
        db.query(Merchant)
        .join(Invoice, Invoice.merchant_id == Merchant.id)
        .join(Transaction, Transaction.invoice_id == Invoice.id)
        .filter(Invoice.customer_id == customer_id, is_successful(Transaction.result))
        .group_by(Merchant.id)
        .order_by(success_count.desc(), Merchant.id.asc())
        .first()
    )


def customers_with_pending_invoices(db: Session, merchant_id: int) -> List[Customer]:
    """Customers holding at least one invoice with this merchant that never succeeded.

    The check is made per invoice: a customer with one paid and one unpaid
    invoice is still listed. Invoices with no transactions at all count as
    pending. Results are unique and ordered by customer id.
    """
    pending_invoice_customers = select(Invoice.customer_id).where(
        Invoice.merchant_id == merchant_id,
        ~has_successful_transaction(),
    )
    customers = (
        db.query(Customer)
        .filter(Customer.id.in_(pending_invoice_customers))
        .order_by(Customer.id.asc())
        .all()
    )
    logger.debug("Merchant_id=%s has %s customers with pending invoices", merchant_id, len(customers))
    return customers
