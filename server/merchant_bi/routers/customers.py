from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from merchant_bi.db import get_db
from merchant_bi.intelligence import schemas
from merchant_bi.intelligence.service import get_customer_favorite_merchant
from merchant_bi.routers.errors import http_error

router = APIRouter(prefix="/api/v1/customers", tags=["customers"])


@router.get("/{customer_id}/favorite_merchant", response_model=schemas.MerchantResponse)
def favorite_merchant(customer_id: int, db: Session = Depends(get_db)):
    try:
        merchant = get_customer_favorite_merchant(db, customer_id)
    except ValueError as exc:
        raise http_error(exc)
    if not merchant:
        raise HTTPException(status_code=404, detail="Favorite merchant not found.")
    return merchant
