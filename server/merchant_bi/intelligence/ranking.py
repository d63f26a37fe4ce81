import logging
from typing import List, Literal, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from merchant_bi.exceptions import InvalidArgumentError
from merchant_bi.models import Invoice, InvoiceItem, Merchant
from merchant_bi.sql_expressions import has_successful_transaction, line_total


logger = logging.getLogger(__name__)

RankingMetric = Literal["revenue", "quantity"]

_METRIC_EXPRESSIONS = {
    "revenue": line_total,
    "quantity": lambda: InvoiceItem.quantity,
}


def validate_limit(limit) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidArgumentError("Limit must be a positive integer.")
    if limit <= 0:
        raise InvalidArgumentError("Limit must be greater than zero.")
    return limit


def merchant_rankings(db: Session, metric: RankingMetric, limit: int) -> List[Tuple[Merchant, int]]:
    """Rank merchants by a successful-invoice total, highest first.

    Totals are in the metric's raw unit (cents for revenue, units for quantity).
    Merchants without eligible invoices rank with a total of zero; equal totals
    fall back to merchant id ascending.
    """
    if metric not in _METRIC_EXPRESSIONS:
        raise InvalidArgumentError(f"Unknown ranking metric: {metric}.")
    limit = validate_limit(limit)

    totals = (
        db.query(
            Invoice.merchant_id.label("merchant_id"),
            func.sum(_METRIC_EXPRESSIONS[metric]()).label("total"),
        )
        .join(InvoiceItem, InvoiceItem.invoice_id == Invoice.id)
        .filter(has_successful_transaction())
        .group_by(Invoice.merchant_id)
        .subquery()
    )
    total = func.coalesce(totals.c.total, 0)

    rows = (
        db.query(Merchant, total.label("total"))
        .outerjoin(totals, totals.c.merchant_id == Merchant.id)
        .order_by(total.desc(), Merchant.id.asc())
        .limit(limit)
        .all()
    )
    logger.debug("Ranked %s merchants by %s (limit=%s)", len(rows), metric, limit)
    return [(merchant, int(row_total or 0)) for merchant, row_total in rows]


def top_merchants_by_revenue(db: Session, limit: int) -> List[Merchant]:
    return [merchant for merchant, _ in merchant_rankings(db, "revenue", limit)]


def top_merchants_by_quantity(db: Session, limit: int) -> List[Merchant]:
    return [merchant for merchant, _ in merchant_rankings(db, "quantity", limit)]
