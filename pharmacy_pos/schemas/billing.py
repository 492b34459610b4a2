from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from pharmacy_pos.schemas.cart import CheckoutStatus
from pharmacy_pos.schemas.state import BillItem


class CartItemAdd(BaseModel):
    medicine_id: str

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class QuantityUpdate(BaseModel):
    quantity: int


class CheckoutRequest(BaseModel):
    cash_received: Decimal = Field(..., ge=0)
    customer_name: str = ""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class CartView(BaseModel):
    items: List[BillItem]
    total: Decimal
    status: CheckoutStatus
    cash_received: Optional[Decimal] = None
    balance: Optional[Decimal] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
