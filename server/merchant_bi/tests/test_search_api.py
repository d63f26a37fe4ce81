from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from merchant_bi.search.service import parse_timestamp
from merchant_bi.tests.factories import create_invoice, create_invoice_item, create_merchant


@pytest.fixture()
def merchants(db):
    schroeder = create_merchant(db, name="Schroeder-Jerde", created_at=datetime(2012, 3, 27, 14, 53, 59))
    klein = create_merchant(db, name="Klein, Rempel and Jones")
    other_klein = create_merchant(db, name="klein, rempel and jones")
    db.commit()
    return schroeder, klein, other_klein


def test_merchant_find_is_case_insensitive(client: TestClient, merchants):
    schroeder, _, _ = merchants

    response = client.get("/api/v1/merchants/find", params={"name": "SCHROEDER-jerde"})

    assert response.status_code == 200
    assert response.json()["id"] == schroeder.id


def test_merchant_find_all_matches_every_casing(client: TestClient, merchants):
    _, klein, other_klein = merchants

    response = client.get("/api/v1/merchants/find_all", params={"name": "Klein, Rempel And Jones"})

    assert [merchant["id"] for merchant in response.json()] == [klein.id, other_klein.id]


def test_merchant_find_by_timestamp(client: TestClient, merchants):
    schroeder, _, _ = merchants

    response = client.get("/api/v1/merchants/find", params={"created_at": "2012-03-27 14:53:59 UTC"})

    assert response.json()["name"] == schroeder.name


def test_merchant_find_ignores_unknown_parameters(client: TestClient, merchants):
    response = client.get("/api/v1/merchants/find_all", params={"favorite_color": "blue"})

    assert len(response.json()) == len(merchants)


def test_merchant_find_not_found(client: TestClient, merchants):
    response = client.get("/api/v1/merchants/find", params={"name": "Nobody"})

    assert response.status_code == 404


def test_invoice_item_search(client: TestClient, db):
    merchant = create_merchant(db)
    invoice = create_invoice(db, merchant)
    first = create_invoice_item(db, invoice, unit_price=13635, quantity=5)
    second = create_invoice_item(db, invoice, unit_price=23324, quantity=5)
    create_invoice_item(db, invoice, unit_price=13635, quantity=9)
    db.commit()

    by_quantity = client.get("/api/v1/invoice_items/find_all", params={"quantity": "5"})
    by_price = client.get("/api/v1/invoice_items/find", params={"unit_price": "13635", "quantity": "5"})
    bad_value = client.get("/api/v1/invoice_items/find", params={"quantity": "five"})

    assert [item["id"] for item in by_quantity.json()] == [first.id, second.id]
    assert by_price.json()["id"] == first.id
    assert by_price.json()["unit_price"] == 13635
    assert bad_value.status_code == 422


def test_parse_timestamp_normalizes_to_naive_utc():
    assert parse_timestamp("2012-03-27T16:53:59+02:00") == datetime(2012, 3, 27, 14, 53, 59)
    assert parse_timestamp("2012-03-27 14:53:59 UTC") == datetime(2012, 3, 27, 14, 53, 59)
