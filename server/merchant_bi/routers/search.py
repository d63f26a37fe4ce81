from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from merchant_bi.db import get_db
from merchant_bi.routers.errors import http_error
from merchant_bi.search import schemas
from merchant_bi.search.service import find_invoice_item, find_invoice_items, find_merchant, find_merchants

router = APIRouter(prefix="/api/v1", tags=["search"])


@router.get("/merchants/find", response_model=schemas.MerchantSearchResult)
def merchant_find(request: Request, db: Session = Depends(get_db)):
    try:
        merchant = find_merchant(db, request.query_params)
    except ValueError as exc:
        raise http_error(exc)
    if not merchant:
        raise HTTPException(status_code=404, detail="Merchant not found.")
    return merchant


@router.get("/merchants/find_all", response_model=List[schemas.MerchantSearchResult])
def merchant_find_all(request: Request, db: Session = Depends(get_db)):
    try:
        return find_merchants(db, request.query_params)
    except ValueError as exc:
        raise http_error(exc)


@router.get("/invoice_items/find", response_model=schemas.InvoiceItemSearchResult)
def invoice_item_find(request: Request, db: Session = Depends(get_db)):
    try:
        invoice_item = find_invoice_item(db, request.query_params)
    except ValueError as exc:
        raise http_error(exc)
    if not invoice_item:
        raise HTTPException(status_code=404, detail="Invoice item not found.")
    return invoice_item


@router.get("/invoice_items/find_all", response_model=List[schemas.InvoiceItemSearchResult])
def invoice_item_find_all(request: Request, db: Session = Depends(get_db)):
    try:
        return find_invoice_items(db, request.query_params)
    except ValueError as exc:
        raise http_error(exc)
