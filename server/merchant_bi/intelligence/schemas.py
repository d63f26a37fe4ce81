from typing import Optional

from pydantic import BaseModel, ConfigDict


class MerchantResponse(BaseModel):
    id: int
    name: str

    model_config = ConfigDict(from_attributes=True)


class RankedMerchantResponse(MerchantResponse):
    total: str


class CustomerResponse(BaseModel):
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class MerchantRevenueResponse(BaseModel):
    revenue: str


class TotalRevenueResponse(BaseModel):
    total_revenue: str
