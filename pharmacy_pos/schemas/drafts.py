"""
Form drafts: partially filled entities as typed into the management screens.

A draft is never stored. `to_entity` validates it and produces the canonical
entity, filling the same defaults the forms always used (empty text, zero).
"""
from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from pharmacy_pos.core.exceptions import ValidationError
from pharmacy_pos.core.money import to_money
from pharmacy_pos.schemas.state import Customer, Medicine, Supplier


def _required(value: Optional[str], label: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{label} cannot be empty")
    return value.strip()


def _optional(value: Optional[str]) -> str:
    return (value or "").strip()


class MedicineDraft(BaseModel):
    name: Optional[str] = None
    generic_name: Optional[str] = None
    category: Optional[str] = None
    price: Optional[Decimal] = None
    cost_price: Optional[Decimal] = None
    stock: Optional[int] = None
    expiry_date: Optional[date] = None
    supplier_id: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def to_entity(self, id: str) -> Medicine:
        name = _required(self.name, "Medicine name")
        price = self.price if self.price is not None else Decimal("0")
        cost_price = self.cost_price if self.cost_price is not None else Decimal("0")
        stock = self.stock if self.stock is not None else 0
        if price < 0:
            raise ValidationError("Price cannot be negative", limit=0)
        if cost_price < 0:
            raise ValidationError("Cost price cannot be negative", limit=0)
        if stock < 0:
            raise ValidationError("Stock cannot be negative", limit=0)
        if self.expiry_date is None:
            raise ValidationError("Expiry date is required")
        return Medicine(
            id=id,
            name=name,
            generic_name=_optional(self.generic_name),
            category=_optional(self.category),
            price=to_money(price),
            cost_price=to_money(cost_price),
            stock=stock,
            expiry_date=self.expiry_date,
            supplier_id=_optional(self.supplier_id),
        )


class SupplierDraft(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def to_entity(self, id: str) -> Supplier:
        return Supplier(
            id=id,
            name=_required(self.name, "Supplier name"),
            phone=_optional(self.phone),
            email=_optional(self.email),
            address=_optional(self.address),
        )


class CustomerDraft(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    def to_entity(self, id: str) -> Customer:
        return Customer(
            id=id,
            name=_required(self.name, "Customer name"),
            phone=_optional(self.phone),
            address=_optional(self.address),
        )
