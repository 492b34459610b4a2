from pharmacy_pos.schemas.state import (
    AppState,
    Bill,
    BillItem,
    Customer,
    Medicine,
    Supplier,
    UserSession,
)
from pharmacy_pos.schemas.cart import Cart, CheckoutStatus
from pharmacy_pos.schemas.drafts import CustomerDraft, MedicineDraft, SupplierDraft

__all__ = [
    "AppState",
    "Bill",
    "BillItem",
    "Cart",
    "CheckoutStatus",
    "Customer",
    "CustomerDraft",
    "Medicine",
    "MedicineDraft",
    "Supplier",
    "SupplierDraft",
    "UserSession",
]
