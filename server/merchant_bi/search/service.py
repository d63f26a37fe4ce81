from datetime import datetime, timezone
from typing import Mapping, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from merchant_bi.exceptions import InvalidArgumentError
from merchant_bi.models import InvoiceItem, Merchant

MERCHANT_SEARCH_FIELDS = ("id", "name", "created_at", "updated_at")
INVOICE_ITEM_SEARCH_FIELDS = ("id", "quantity", "unit_price", "item_id", "invoice_id", "created_at", "updated_at")


def parse_timestamp(value: str) -> datetime:
    text = value.strip()
    if text.upper().endswith(" UTC"):
        text = text[:-4]
    elif text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise InvalidArgumentError(f"Invalid timestamp: {value!r}.") from exc
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _coerce(column, value: str):
    python_type = column.type.python_type
    if python_type is datetime:
        return parse_timestamp(value)
    if python_type is int:
        try:
            return int(value)
        except ValueError as exc:
            raise InvalidArgumentError(f"Invalid value for {column.key}: {value!r}.") from exc
    return value


def build_filters(model, fields: Sequence[str], params: Mapping[str, Optional[str]]) -> list:
    """Equality filters for the whitelisted fields present in ``params``.

    Text columns are compared lower-cased on both sides; other parameters are
    ignored.
    """
    filters = []
    for field in fields:
        value = params.get(field)
        if value is None:
            continue
        column = getattr(model, field)
        if column.type.python_type is str:
            filters.append(func.lower(column) == value.strip().lower())
        else:
            filters.append(column == _coerce(column, value))
    return filters


def find_merchants(db: Session, params: Mapping[str, Optional[str]]) -> Sequence[Merchant]:
    filters = build_filters(Merchant, MERCHANT_SEARCH_FIELDS, params)
    return db.query(Merchant).filter(*filters).order_by(Merchant.id).all()


def find_merchant(db: Session, params: Mapping[str, Optional[str]]) -> Optional[Merchant]:
    filters = build_filters(Merchant, MERCHANT_SEARCH_FIELDS, params)
    return db.query(Merchant).filter(*filters).order_by(Merchant.id).first()


def find_invoice_items(db: Session, params: Mapping[str, Optional[str]]) -> Sequence[InvoiceItem]:
    filters = build_filters(InvoiceItem, INVOICE_ITEM_SEARCH_FIELDS, params)
    return db.query(InvoiceItem).filter(*filters).order_by(InvoiceItem.id).all()


def find_invoice_item(db: Session, params: Mapping[str, Optional[str]]) -> Optional[InvoiceItem]:
    filters = build_filters(InvoiceItem, INVOICE_ITEM_SEARCH_FIELDS, params)
    return db.query(InvoiceItem).filter(*filters).order_by(InvoiceItem.id).first()
