"""
Entities persisted inside the application state document.

Field names serialize in camelCase (billNo, cashReceived, ...) so the stored
document keeps its established shape; snake_case names are accepted on input.
"""
from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, Field
from pydantic.alias_generators import to_camel

from pharmacy_pos.core.money import to_money

Money = Annotated[Decimal, AfterValidator(to_money)]


class Medicine(BaseModel):
    id: str
    name: str
    generic_name: Optional[str] = None
    category: str = ""
    price: Money = Field(..., ge=0, description="Sale unit price")
    cost_price: Money = Field(Decimal("0"), ge=0)
    stock: int = Field(0, ge=0)
    expiry_date: date
    supplier_id: str = ""  # soft reference, may dangle

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class Supplier(BaseModel):
    id: str
    name: str
    phone: str = ""
    email: Optional[str] = None
    address: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class Customer(BaseModel):
    id: str
    name: str
    phone: str = ""
    address: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class BillItem(BaseModel):
    """One line: name and unit price are snapshots taken when the line was added."""
    medicine_id: str
    name: str
    quantity: int = Field(..., ge=1)
    unit_price: Money = Field(..., ge=0)
    subtotal: Money = Field(..., ge=0)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True


class Bill(BaseModel):
    bill_no: str
    date: datetime
    customer_id: str
    customer_name: str
    items: List[BillItem] = Field(..., min_length=1)
    total: Money
    cash_received: Money
    balance: Money

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True


class UserSession(BaseModel):
    username: str
    is_logged_in: bool = True

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class AppState(BaseModel):
    """The single unit of persistence. Bills are stored newest first."""
    medicines: List[Medicine] = Field(default_factory=list)
    suppliers: List[Supplier] = Field(default_factory=list)
    customers: List[Customer] = Field(default_factory=list)
    bills: List[Bill] = Field(default_factory=list)
    user: Optional[UserSession] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True
