from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class MerchantSearchResult(BaseModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class InvoiceItemSearchResult(BaseModel):
    id: int
    invoice_id: int
    item_id: Optional[int] = None
    quantity: int
    unit_price: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
