from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import insert

from merchant_bi.intelligence.revenue import merchant_revenue, total_revenue_for_date
from merchant_bi.models import Transaction
from merchant_bi.tests.factories import (
    create_invoice,
    create_invoice_item,
    create_merchant,
    create_transactions,
)


def build_three_invoice_merchant(db, second_created_at=None):
    """Two successful $10,000 invoices and one failed invoice."""
    merchant = create_merchant(db)
    invoices = [
        create_invoice(db, merchant),
        create_invoice(db, merchant, created_at=second_created_at),
        create_invoice(db, merchant),
    ]
    create_transactions(db, invoices[0], "Success")
    create_transactions(db, invoices[1], "Success")
    create_transactions(db, invoices[2], "Failed")
    create_invoice_item(db, invoices[0], unit_price=10000, quantity=100)
    create_invoice_item(db, invoices[1], unit_price=10000, quantity=100)
    create_invoice_item(db, invoices[2], unit_price=123400, quantity=1345)
    return merchant


def test_merchant_revenue_counts_only_successful_invoices(db):
    merchant = build_three_invoice_merchant(db)

    assert merchant_revenue(db, merchant.id) == Decimal("20000.00")


def test_merchant_revenue_is_in_major_units(db):
    merchant = create_merchant(db)
    invoice = create_invoice(db, merchant)
    create_transactions(db, invoice, "success")
    create_invoice_item(db, invoice, unit_price=100, quantity=100)
    create_invoice_item(db, invoice, unit_price=333, quantity=1)

    assert merchant_revenue(db, merchant.id) == Decimal("103.33")


def test_merchant_revenue_filtered_by_date(db):
    merchant = build_three_invoice_merchant(db, second_created_at=datetime(2017, 6, 30, 10, 45))

    assert merchant_revenue(db, merchant.id, date(2017, 6, 30)) == Decimal("10000.00")
    assert merchant_revenue(db, merchant.id, date(2017, 7, 1)) == Decimal("0.00")


def test_date_filter_covers_the_whole_day(db):
    merchant = create_merchant(db)
    for created_at in (datetime(2017, 6, 30, 0, 0), datetime(2017, 6, 30, 23, 59, 59), datetime(2017, 7, 1, 0, 0)):
        invoice = create_invoice(db, merchant, created_at=created_at)
        create_transactions(db, invoice, "success")
        create_invoice_item(db, invoice, unit_price=100, quantity=1)

    assert merchant_revenue(db, merchant.id, date(2017, 6, 30)) == Decimal("2.00")


def test_failed_invoice_contributes_nothing(db):
    merchant = create_merchant(db)
    invoice = create_invoice(db, merchant)
    create_transactions(db, invoice, "failed", number=3)
    create_invoice_item(db, invoice, unit_price=5000, quantity=10)
    create_invoice_item(db, invoice, unit_price=2500, quantity=4)

    assert merchant_revenue(db, merchant.id) == Decimal("0.00")


def test_invoice_without_transactions_contributes_nothing(db):
    merchant = create_merchant(db)
    invoice = create_invoice(db, merchant)
    create_invoice_item(db, invoice, unit_price=5000, quantity=10)

    assert merchant_revenue(db, merchant.id) == Decimal("0.00")


def test_invoice_with_many_successful_transactions_is_counted_once(db):
    merchant = create_merchant(db)
    invoice = create_invoice(db, merchant)
    create_transactions(db, invoice, "success", number=3)
    create_transactions(db, invoice, "failed", number=2)
    create_invoice_item(db, invoice, unit_price=1000, quantity=2)
    create_invoice_item(db, invoice, unit_price=500, quantity=1)

    assert merchant_revenue(db, merchant.id) == Decimal("25.00")


def test_result_comparison_ignores_case_of_stored_values(db):
    merchant = create_merchant(db)
    invoice = create_invoice(db, merchant)
    create_invoice_item(db, invoice, unit_price=1000, quantity=1)
    db.execute(
        insert(Transaction).values(
            invoice_id=invoice.id,
            result="SUCCESS",
            created_at=datetime.utcnow(),
            updated_at=datetime.utcnow(),
        )
    )

    assert merchant_revenue(db, merchant.id) == Decimal("10.00")


def test_revenue_is_the_sum_of_daily_revenue(db):
    merchant = create_merchant(db)
    days = [datetime(2017, 6, 28, 9), datetime(2017, 6, 29, 14), datetime(2017, 6, 29, 18), datetime(2017, 6, 30, 1)]
    for offset, created_at in enumerate(days, start=1):
        invoice = create_invoice(db, merchant, created_at=created_at)
        create_transactions(db, invoice, "success" if offset != 3 else "failed")
        create_invoice_item(db, invoice, unit_price=1234 * offset, quantity=offset)

    daily_total = sum(
        (merchant_revenue(db, merchant.id, day) for day in {created_at.date() for created_at in days}),
        Decimal("0"),
    )
    assert daily_total == merchant_revenue(db, merchant.id)


def test_unknown_merchant_has_zero_revenue(db):
    assert merchant_revenue(db, 9999) == Decimal("0.00")


def test_total_revenue_for_date_spans_all_merchants(db):
    for _ in range(2):
        merchant = create_merchant(db)
        invoice_rows = [
            (datetime(2017, 6, 30, 10, 45), "success", 1000, 10),
            (datetime(2017, 6, 30, 10, 45), "success", 1000, 10),
            (datetime(2017, 6, 30, 10, 45), "failed", 123400, 1345),
            (datetime(2017, 6, 29, 10, 45), "success", 1000, 10),
        ]
        for created_at, result, unit_price, quantity in invoice_rows:
            invoice = create_invoice(db, merchant, created_at=created_at)
            create_transactions(db, invoice, result)
            create_invoice_item(db, invoice, unit_price=unit_price, quantity=quantity)

    assert total_revenue_for_date(db, date(2017, 6, 30)) == Decimal("400.00")
    assert total_revenue_for_date(db, date(2017, 6, 29)) == Decimal("200.00")
    assert total_revenue_for_date(db, date(2017, 6, 28)) == Decimal("0.00")
