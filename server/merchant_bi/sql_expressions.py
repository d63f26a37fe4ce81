from datetime import date, datetime, time, timedelta
from typing import Tuple

from sqlalchemy import and_, exists, func

from merchant_bi.models import Invoice, InvoiceItem, Transaction

SUCCESS_RESULT = "success"


def is_successful(result_column):
    """Case-insensitive ``result == 'success'`` comparison."""
    return func.lower(result_column) == SUCCESS_RESULT


def has_successful_transaction(invoice_id_column=Invoice.id):
    """EXISTS clause that is true when the invoice has at least one successful transaction.

    Filtering invoices with EXISTS instead of joining transactions keeps one row
    per invoice, so line items are never multiplied by the transaction count.
    """
    return exists().where(
        Transaction.invoice_id == invoice_id_column,
        is_successful(Transaction.result),
    )


def line_total():
    return InvoiceItem.unit_price * InvoiceItem.quantity


def day_bounds(on_date: date) -> Tuple[datetime, datetime]:
    start = datetime.combine(on_date, time.min)
    return start, start + timedelta(days=1)


def created_on(column, on_date: date):
    start, end = day_bounds(on_date)
    return and_(column >= start, column < end)
