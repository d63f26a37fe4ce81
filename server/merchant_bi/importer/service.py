import csv
from dataclasses import dataclass, field
from decimal import InvalidOperation
import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Set, Tuple, Union

from sqlalchemy.orm import Session

from merchant_bi.models import Customer, Invoice, InvoiceItem, Item, Merchant, Transaction
from merchant_bi.search.service import parse_timestamp
from merchant_bi.utils import to_minor_units


logger = logging.getLogger(__name__)


@dataclass
class LedgerImportWarning:
    message: str
    severity: str = "warning"


@dataclass
class ImportResult:
    created: Dict[str, int] = field(default_factory=dict)
    warnings: List[LedgerImportWarning] = field(default_factory=list)

    @property
    def total_created(self) -> int:
        return sum(self.created.values())


def _text(value: str):
    return value.strip() or None


def _optional_int(value: str):
    return int(value) if value.strip() else None


def _timestamp(value: str):
    return parse_timestamp(value) if value.strip() else None


def _price_in_cents(value: str) -> int:
    """Prices arrive as cents (``13635``) or as currency (``136.35``)."""
    text = value.strip()
    if "." not in text:
        return int(text)
    try:
        return to_minor_units(text)
    except InvalidOperation as exc:
        raise ValueError(f"invalid price {value!r}") from exc


Converters = Dict[str, Callable[[str], object]]

TIMESTAMPS: Converters = {"created_at": _timestamp, "updated_at": _timestamp}

# Load order follows foreign keys.
LEDGER_TABLES: List[Tuple[str, type, Converters]] = [
    ("merchants.csv", Merchant, {"id": int, "name": str.strip, **TIMESTAMPS}),
    ("customers.csv", Customer, {"id": int, "first_name": _text, "last_name": _text, **TIMESTAMPS}),
    (
        "items.csv",
        Item,
        {"id": int, "name": str.strip, "description": _text, "unit_price": _price_in_cents, "merchant_id": int, **TIMESTAMPS},
    ),
    ("invoices.csv", Invoice, {"id": int, "customer_id": int, "merchant_id": int, "status": str.strip, **TIMESTAMPS}),
    (
        "invoice_items.csv",
        InvoiceItem,
        {"id": int, "item_id": _optional_int, "invoice_id": int, "quantity": int, "unit_price": _price_in_cents, **TIMESTAMPS},
    ),
    (
        "transactions.csv",
        Transaction,
        {"id": int, "invoice_id": int, "credit_card_number": _text, "result": str, **TIMESTAMPS},
    ),
]


def _build_record(model, converters: Converters, row: Dict[str, str]):
    values = {}
    for column, convert in converters.items():
        raw = row.get(column)
        if raw is None:
            continue
        value = convert(raw)
        if value is not None:
            values[column] = value
    return model(**values)


def _reference_problem(record, known_ids: Dict[str, Set[int]]) -> Optional[str]:
    """Describe a missing required value, a duplicate id or a dangling foreign key."""
    table = record.__table__
    for column in table.columns:
        if column.primary_key or column.nullable or column.default is not None:
            continue
        if getattr(record, column.key) is None:
            return f"missing {column.key}"
    if record.id is not None and record.id in known_ids[table.name]:
        return f"duplicate {table.name} id {record.id}"
    for foreign_key in table.foreign_keys:
        value = getattr(record, foreign_key.parent.key)
        target = foreign_key.column.table.name
        if value is not None and value not in known_ids[target]:
            return f"{foreign_key.parent.key} {value} has no matching {target} row"
    return None


def import_ledger(db: Session, directory: Union[str, Path]) -> ImportResult:
    """Load the sales-engine CSV export in ``directory`` into the ledger tables.

    Rows that fail conversion or validation, repeat an id, or point at a
    missing parent row are skipped with a warning. The caller owns the
    transaction and must commit.
    """
    directory = Path(directory)
    result = ImportResult()
    known_ids = {
        model.__tablename__: {record_id for (record_id,) in db.query(model.id)}
        for _, model, _ in LEDGER_TABLES
    }

    for filename, model, converters in LEDGER_TABLES:
        path = directory / filename
        if not path.exists():
            result.warnings.append(LedgerImportWarning(message=f"{filename} not found; skipped", severity="error"))
            continue

        created = 0
        with path.open(newline="", encoding="utf-8") as handle:
            for line_number, row in enumerate(csv.DictReader(handle), start=2):
                try:
                    record = _build_record(model, converters, row)
                except ValueError as exc:
                    result.warnings.append(LedgerImportWarning(message=f"{filename}:{line_number}: {exc}"))
                    continue
                problem = _reference_problem(record, known_ids)
                if problem:
                    result.warnings.append(LedgerImportWarning(message=f"{filename}:{line_number}: {problem}"))
                    continue
                db.add(record)
                if record.id is not None:
                    known_ids[model.__tablename__].add(record.id)
                created += 1
        db.flush()
        result.created[model.__tablename__] = created
        logger.info("Imported %s rows from %s", created, filename)

    return result
