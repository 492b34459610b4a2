"""
Checkout engine: builds a cart against the medicine ledger and commits sales.

Every function is pure. Carts and medicine collections are never mutated in
place; a rejected request raises a ValidationError and the caller keeps the
cart it already had.

Cart lifecycle:
    EMPTY -> BUILDING -> (INVALID | READY) -> committed, then EMPTY again
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple

from pharmacy_pos.core.config import settings
from pharmacy_pos.core.exceptions import (
    EmptyCartError,
    InsufficientCashError,
    InsufficientStockError,
)
from pharmacy_pos.core.money import ZERO, to_money
from pharmacy_pos.schemas.cart import Cart, CheckoutStatus
from pharmacy_pos.schemas.state import Bill, BillItem, Medicine
from pharmacy_pos.services.invoice_service import next_bill_no

logger = logging.getLogger(__name__)


def _with_quantity(item: BillItem, quantity: int) -> BillItem:
    return item.model_copy(update={
        "quantity": quantity,
        "subtotal": to_money(item.unit_price * quantity),
    })


def _find_medicine(medicines: Iterable[Medicine], medicine_id: str) -> Optional[Medicine]:
    return next((m for m in medicines if m.id == medicine_id), None)


def add_item(medicine: Medicine, cart: Cart) -> Cart:
    """Add one unit of `medicine`, creating its line if needed.

    Raises InsufficientStockError when the line would exceed current stock.
    """
    existing = cart.line_for(medicine.id)
    quantity = existing.quantity + 1 if existing else 1
    if quantity > medicine.stock:
        logger.warning(f"[Checkout] Not enough stock for {medicine.name}: {medicine.stock} available")
        raise InsufficientStockError(medicine.id, medicine.name, medicine.stock)

    if existing:
        items = [_with_quantity(i, quantity) if i.medicine_id == medicine.id else i for i in cart.items]
    else:
        items = list(cart.items) + [BillItem(
            medicine_id=medicine.id,
            name=medicine.name,
            quantity=1,
            unit_price=medicine.price,
            subtotal=medicine.price,
        )]
    return cart.model_copy(update={"items": items})


def set_quantity(medicine_id: str, quantity: int, cart: Cart, medicines: Sequence[Medicine]) -> Cart:
    """Replace the quantity on a line.

    Quantities of zero or less, and medicines no longer in the ledger, are
    ignored. More than the available stock is rejected as a whole.
    """
    medicine = _find_medicine(medicines, medicine_id)
    if medicine is None or quantity <= 0:
        return cart
    if quantity > medicine.stock:
        logger.warning(f"[Checkout] Requested {quantity} of {medicine.name}, only {medicine.stock} available")
        raise InsufficientStockError(medicine.id, medicine.name, medicine.stock)

    items = [_with_quantity(i, quantity) if i.medicine_id == medicine_id else i for i in cart.items]
    return cart.model_copy(update={"items": items})


def remove_item(medicine_id: str, cart: Cart) -> Cart:
    return cart.model_copy(update={"items": [i for i in cart.items if i.medicine_id != medicine_id]})


def cart_total(cart: Cart) -> Decimal:
    return to_money(sum((i.quantity * i.unit_price for i in cart.items), ZERO))


def compute_balance(cash_received: Decimal, total: Decimal) -> Decimal:
    return to_money(max(ZERO, to_money(cash_received) - to_money(total)))


def stock_shortage(cart: Cart, medicines: Sequence[Medicine]) -> Optional[Medicine]:
    """First medicine whose current stock is below its cart quantity, if any."""
    sold = {i.medicine_id: i.quantity for i in cart.items}
    return next((m for m in medicines if m.id in sold and m.stock < sold[m.id]), None)


def cart_status(
    cart: Cart,
    cash_received: Optional[Decimal] = None,
    medicines: Optional[Sequence[Medicine]] = None,
) -> CheckoutStatus:
    """INVALID when stock or cash would block commit; pass `medicines` to check stock."""
    if not cart.items:
        return CheckoutStatus.EMPTY
    if medicines is not None and stock_shortage(cart, medicines) is not None:
        return CheckoutStatus.INVALID
    if cash_received is None:
        return CheckoutStatus.BUILDING
    if to_money(cash_received) < cart_total(cart):
        return CheckoutStatus.INVALID
    return CheckoutStatus.READY


def commit(
    cart: Cart,
    cash_received: Decimal,
    customer_name: str,
    existing_bills: Sequence[Bill],
    medicines: Sequence[Medicine],
    now: Optional[datetime] = None,
) -> Tuple[Bill, List[Medicine]]:
    """Turn the cart into a Bill and the stock ledger after the sale.

    Nothing is returned unless every check passes, so the caller either gets
    both results or neither. The caller must store the bill and the medicines
    in one step.
    """
    if not cart.items:
        raise EmptyCartError()

    total = cart_total(cart)
    cash = to_money(cash_received)
    if cash < total:
        raise InsufficientCashError(total, cash)

    # Stock may have been edited since the lines were added
    short = stock_shortage(cart, medicines)
    if short is not None:
        raise InsufficientStockError(short.id, short.name, short.stock)

    sold = {i.medicine_id: i.quantity for i in cart.items}

    now = now or datetime.now()
    bill = Bill(
        bill_no=next_bill_no(existing_bills, now),
        date=now,
        customer_id=settings.WALK_IN_CUSTOMER_ID,
        customer_name=(customer_name or "").strip() or settings.DEFAULT_CUSTOMER_NAME,
        items=list(cart.items),
        total=total,
        cash_received=cash,
        balance=compute_balance(cash, total),
    )
    updated = [
        m.model_copy(update={"stock": m.stock - sold[m.id]}) if m.id in sold else m
        for m in medicines
    ]
    logger.info(f"[Checkout] Committed {bill.bill_no}: {len(bill.items)} lines, total {bill.total}")
    return bill, updated
