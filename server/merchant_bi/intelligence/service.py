"""Entry points for merchant business-intelligence queries.

Every function recomputes from the current session; nothing is cached.
Merchant-scoped calls check that the merchant exists first and raise
``MerchantNotFoundError`` otherwise. Empty results are returned as-is.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
import re
from typing import List, Optional

from sqlalchemy.orm import Session

from merchant_bi.exceptions import CustomerNotFoundError, InvalidArgumentError, MerchantNotFoundError
from merchant_bi.intelligence import customers, ranking, revenue
from merchant_bi.models import Customer, Merchant
from merchant_bi.search.service import parse_timestamp

_QUERY_DATE = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})(?:[ T](.+?))?\s*$")


def parse_query_date(value: str | date | None) -> Optional[date]:
    """Parse ``2017-06-30``, ``2017-6-30`` or ``2017-06-30 10:45:00 UTC`` to a date.

    Timestamps must carry a valid ISO time and are shifted to UTC before being
    truncated to the calendar day.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    match = _QUERY_DATE.match(value)
    if not match:
        raise InvalidArgumentError(f"Invalid date: {value!r}.")
    year, month, day, time_part = match.groups()
    try:
        day_value = date(int(year), int(month), int(day))
    except ValueError as exc:
        raise InvalidArgumentError(f"Invalid date: {value!r}.") from exc
    if time_part is None:
        return day_value
    try:
        return parse_timestamp(f"{day_value.isoformat()}T{time_part}").date()
    except InvalidArgumentError as exc:
        raise InvalidArgumentError(f"Invalid date: {value!r}.") from exc


def get_merchant(db: Session, merchant_id: int) -> Merchant:
    merchant = db.query(Merchant).filter(Merchant.id == merchant_id).first()
    if not merchant:
        raise MerchantNotFoundError(merchant_id)
    return merchant


def get_customer(db: Session, customer_id: int) -> Customer:
    customer = db.query(Customer).filter(Customer.id == customer_id).first()
    if not customer:
        raise CustomerNotFoundError(customer_id)
    return customer


def get_merchant_revenue(db: Session, merchant_id: int, on_date: str | date | None = None) -> Decimal:
    on_date = parse_query_date(on_date)
    get_merchant(db, merchant_id)
    return revenue.merchant_revenue(db, merchant_id, on_date)


def get_total_revenue_for_date(db: Session, on_date: str | date) -> Decimal:
    parsed = parse_query_date(on_date)
    if parsed is None:
        raise InvalidArgumentError("A date is required.")
    return revenue.total_revenue_for_date(db, parsed)


def get_top_merchants_by_revenue(db: Session, limit: int) -> List[Merchant]:
    return ranking.top_merchants_by_revenue(db, limit)


def get_top_merchants_by_quantity(db: Session, limit: int) -> List[Merchant]:
    return ranking.top_merchants_by_quantity(db, limit)


def get_favorite_customer(db: Session, merchant_id: int) -> Optional[Customer]:
    get_merchant(db, merchant_id)
    return customers.favorite_customer(db, merchant_id)


def get_customers_with_pending_invoices(db: Session, merchant_id: int) -> List[Customer]:
    get_merchant(db, merchant_id)
    return customers.customers_with_pending_invoices(db, merchant_id)


def get_customer_favorite_merchant(db: Session, customer_id: int) -> Optional[Merchant]:
    get_customer(db, customer_id)
    return customers.favorite_merchant(db, customer_id)
