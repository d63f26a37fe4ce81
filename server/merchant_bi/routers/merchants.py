import os
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from merchant_bi.db import get_db
from merchant_bi.intelligence import schemas
from merchant_bi.intelligence.ranking import merchant_rankings
from merchant_bi.intelligence.service import (
    get_customers_with_pending_invoices,
    get_favorite_customer,
    get_merchant_revenue,
    get_top_merchants_by_quantity,
    get_top_merchants_by_revenue,
    get_total_revenue_for_date,
)
from merchant_bi.routers.errors import http_error
from merchant_bi.utils import format_amount, to_major_units

DEFAULT_RANKING_SIZE = int(os.getenv("DEFAULT_RANKING_SIZE", "5"))

router = APIRouter(prefix="/api/v1/merchants", tags=["merchants"])


@router.get("/most_revenue", response_model=List[schemas.MerchantResponse])
def most_revenue(quantity: int = Query(DEFAULT_RANKING_SIZE), db: Session = Depends(get_db)):
    try:
        return get_top_merchants_by_revenue(db, quantity)
    except ValueError as exc:
        raise http_error(exc)


@router.get("/most_items", response_model=List[schemas.MerchantResponse])
def most_items(quantity: int = Query(DEFAULT_RANKING_SIZE), db: Session = Depends(get_db)):
    try:
        return get_top_merchants_by_quantity(db, quantity)
    except ValueError as exc:
        raise http_error(exc)


@router.get("/rankings", response_model=List[schemas.RankedMerchantResponse])
def rankings(
    metric: str = Query("revenue", pattern="^(revenue|quantity)$"),
    quantity: int = Query(DEFAULT_RANKING_SIZE),
    db: Session = Depends(get_db),
):
    try:
        rows = merchant_rankings(db, metric, quantity)
    except ValueError as exc:
        raise http_error(exc)
    return [
        {
            "id": merchant.id,
            "name": merchant.name,
            "total": format_amount(to_major_units(total)) if metric == "revenue" else str(total),
        }
        for merchant, total in rows
    ]


@router.get("/revenue", response_model=schemas.TotalRevenueResponse)
def total_revenue(on_date: str = Query(..., alias="date"), db: Session = Depends(get_db)):
    try:
        revenue = get_total_revenue_for_date(db, on_date)
    except ValueError as exc:
        raise http_error(exc)
    return {"total_revenue": format_amount(revenue)}


@router.get("/{merchant_id}/revenue", response_model=schemas.MerchantRevenueResponse)
def merchant_revenue(
    merchant_id: int,
    on_date: Optional[str] = Query(None, alias="date"),
    db: Session = Depends(get_db),
):
    try:
        revenue = get_merchant_revenue(db, merchant_id, on_date)
    except ValueError as exc:
        raise http_error(exc)
    return {"revenue": format_amount(revenue)}


@router.get("/{merchant_id}/favorite_customer", response_model=schemas.CustomerResponse)
def favorite_customer(merchant_id: int, db: Session = Depends(get_db)):
    try:
        customer = get_favorite_customer(db, merchant_id)
    except ValueError as exc:
        raise http_error(exc)
    if not customer:
        raise HTTPException(status_code=404, detail="Favorite customer not found.")
    return customer


@router.get("/{merchant_id}/customers_with_pending_invoices", response_model=List[schemas.CustomerResponse])
def customers_with_pending_invoices(merchant_id: int, db: Session = Depends(get_db)):
    try:
        return get_customers_with_pending_invoices(db, merchant_id)
    except ValueError as exc:
        raise http_error(exc)
