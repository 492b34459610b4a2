"""Point of sale: cart, checkout and the invoice list."""
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse, StreamingResponse

from pharmacy_pos.api.deps import require_login
from pharmacy_pos.core.exceptions import BusinessError
from pharmacy_pos.schemas.billing import CartItemAdd, CartView, CheckoutRequest, QuantityUpdate
from pharmacy_pos.schemas.cart import Cart
from pharmacy_pos.schemas.state import Bill, Medicine
from pharmacy_pos.services import checkout_service, inventory_service, receipt_service
from pharmacy_pos.services.state_store import StateStore

router = APIRouter()


def _cart_view(store: StateStore, cart: Cart, cash_received: Optional[Decimal] = None) -> CartView:
    total = checkout_service.cart_total(cart)
    return CartView(
        items=cart.items,
        total=total,
        status=checkout_service.cart_status(cart, cash_received, store.state.medicines),
        cash_received=cash_received,
        balance=checkout_service.compute_balance(cash_received, total) if cash_received is not None else None,
    )


def _get_bill(store: StateStore, bill_no: str) -> Bill:
    bill = next((b for b in store.state.bills if b.bill_no == bill_no), None)
    if not bill:
        raise BusinessError.not_found("Bill", reason=bill_no)
    return bill


@router.get("/search", response_model=List[Medicine])
def search_for_sale(q: str = Query(""), store: StateStore = Depends(require_login)):
    """Medicines that can be added to the cart right now."""
    return inventory_service.searchable_for_sale(store.state.medicines, q)


@router.get("/cart", response_model=CartView)
def get_cart(
    cash_received: Optional[Decimal] = Query(None, ge=0),
    store: StateStore = Depends(require_login),
):
    """Cart with totals; pass cash_received to preview the change due."""
    return _cart_view(store, store.cart, cash_received)


@router.post("/cart/items", response_model=CartView)
def add_cart_item(data: CartItemAdd, store: StateStore = Depends(require_login)):
    return _cart_view(store, store.add_to_cart(data.medicine_id))


@router.patch("/cart/items/{medicine_id}", response_model=CartView)
def update_cart_item(medicine_id: str, data: QuantityUpdate, store: StateStore = Depends(require_login)):
    return _cart_view(store, store.set_cart_quantity(medicine_id, data.quantity))


@router.delete("/cart/items/{medicine_id}", response_model=CartView)
def remove_cart_item(medicine_id: str, store: StateStore = Depends(require_login)):
    return _cart_view(store, store.remove_from_cart(medicine_id))


@router.delete("/cart", response_model=CartView)
def clear_cart(store: StateStore = Depends(require_login)):
    return _cart_view(store, store.clear_cart())


@router.post("/checkout", response_model=Bill)
def checkout(data: CheckoutRequest, store: StateStore = Depends(require_login)):
    """Complete the transaction. Stock and the invoice list change together."""
    return store.complete_sale(data.cash_received, data.customer_name)


@router.get("/bills", response_model=List[Bill])
def list_bills(search: str | None = Query(None), store: StateStore = Depends(require_login)):
    """Invoices, newest first. Search matches bill number or customer name."""
    bills = store.state.bills
    if search:
        term = search.lower()
        bills = [b for b in bills if term in b.bill_no.lower() or term in b.customer_name.lower()]
    return bills


@router.get("/bills/{bill_no}", response_model=Bill)
def get_bill(bill_no: str, store: StateStore = Depends(require_login)):
    return _get_bill(store, bill_no)


@router.get("/bills/{bill_no}/receipt", response_class=PlainTextResponse)
def get_receipt_text(bill_no: str, store: StateStore = Depends(require_login)):
    receipt = receipt_service.build_receipt(_get_bill(store, bill_no))
    return receipt_service.format_receipt_text(receipt)


@router.get("/bills/{bill_no}/receipt.pdf")
def get_receipt_pdf(bill_no: str, store: StateStore = Depends(require_login)):
    receipt = receipt_service.build_receipt(_get_bill(store, bill_no))
    return StreamingResponse(
        receipt_service.generate_receipt_pdf(receipt),
        media_type="application/pdf",
        headers={"Content-Disposition": f"inline; filename={bill_no}.pdf"},
    )
