from datetime import datetime
from decimal import Decimal

import pytest

from pharmacy_pos.core.exceptions import EmptyCartError, InsufficientCashError, InsufficientStockError
from pharmacy_pos.schemas.cart import Cart, CheckoutStatus
from pharmacy_pos.services import checkout_service as checkout


@pytest.fixture
def paracetamol(make_medicine):
    return make_medicine("MED-1", "Paracetamol", price="2.50", stock=10)


@pytest.fixture
def amoxicillin(make_medicine):
    return make_medicine("MED-2", "Amoxicillin", price="8.00", stock=3)


def test_add_item_creates_line_with_price_snapshot(paracetamol):
    cart = checkout.add_item(paracetamol, Cart())
    line = cart.line_for("MED-1")
    assert line.quantity == 1
    assert line.unit_price == Decimal("2.50")
    assert line.subtotal == Decimal("2.50")
    assert line.name == "Paracetamol"


def test_add_item_three_times_increments_quantity(paracetamol):
    cart = Cart()
    for _ in range(3):
        cart = checkout.add_item(paracetamol, cart)
    assert len(cart.items) == 1
    assert cart.items[0].quantity == 3
    assert cart.items[0].subtotal == Decimal("7.50")


def test_add_item_beyond_stock_is_rejected(amoxicillin):
    cart = Cart()
    for _ in range(3):
        cart = checkout.add_item(amoxicillin, cart)
    with pytest.raises(InsufficientStockError) as exc:
        checkout.add_item(amoxicillin, cart)
    assert exc.value.available == 3
    assert exc.value.limit == 3
    assert cart.items[0].quantity == 3


def test_add_out_of_stock_medicine_is_rejected(make_medicine):
    empty = make_medicine("MED-9", "Cough Syrup", stock=0)
    with pytest.raises(InsufficientStockError):
        checkout.add_item(empty, Cart())


def test_set_quantity_over_stock_leaves_cart_unchanged(paracetamol):
    cart = checkout.add_item(paracetamol, Cart())
    with pytest.raises(InsufficientStockError) as exc:
        checkout.set_quantity("MED-1", 11, cart, [paracetamol])
    assert "Only 10" in str(exc.value)
    assert cart.items[0].quantity == 1


def test_set_quantity_replaces_quantity_and_subtotal(paracetamol):
    cart = checkout.add_item(paracetamol, Cart())
    cart = checkout.set_quantity("MED-1", 4, cart, [paracetamol])
    assert cart.items[0].quantity == 4
    assert cart.items[0].subtotal == Decimal("10.00")


@pytest.mark.parametrize("quantity", [0, -2])
def test_set_quantity_non_positive_is_noop(paracetamol, quantity):
    cart = checkout.add_item(paracetamol, Cart())
    assert checkout.set_quantity("MED-1", quantity, cart, [paracetamol]) == cart


def test_set_quantity_unknown_medicine_is_noop(paracetamol):
    cart = checkout.add_item(paracetamol, Cart())
    assert checkout.set_quantity("MED-404", 2, cart, [paracetamol]) == cart


def test_remove_item(paracetamol, amoxicillin):
    cart = checkout.add_item(amoxicillin, checkout.add_item(paracetamol, Cart()))
    cart = checkout.remove_item("MED-1", cart)
    assert [i.medicine_id for i in cart.items] == ["MED-2"]
    assert checkout.remove_item("MED-404", cart) == cart


def test_total_is_sum_of_lines(paracetamol, amoxicillin):
    cart = checkout.add_item(paracetamol, Cart())
    cart = checkout.add_item(amoxicillin, cart)
    cart = checkout.set_quantity("MED-1", 3, cart, [paracetamol, amoxicillin])
    assert checkout.cart_total(cart) == Decimal("15.50")
    assert checkout.cart_total(Cart()) == Decimal("0")


def test_repeated_cent_additions_do_not_drift(make_medicine):
    cheap = make_medicine("MED-3", "ORS", price="0.10", stock=100)
    cart = Cart()
    for _ in range(30):
        cart = checkout.add_item(cheap, cart)
    assert checkout.cart_total(cart) == Decimal("3.00")


def test_quantity_never_exceeds_stock(amoxicillin):
    cart = Cart()
    for _ in range(10):
        try:
            cart = checkout.add_item(amoxicillin, cart)
        except InsufficientStockError:
            pass
    assert 0 < cart.items[0].quantity <= amoxicillin.stock


def test_balance_never_negative():
    assert checkout.compute_balance(Decimal("10"), Decimal("7.50")) == Decimal("2.50")
    assert checkout.compute_balance(Decimal("5"), Decimal("7.50")) == Decimal("0")


def test_cart_status(paracetamol):
    assert checkout.cart_status(Cart()) == CheckoutStatus.EMPTY
    cart = checkout.add_item(paracetamol, Cart())
    assert checkout.cart_status(cart) == CheckoutStatus.BUILDING
    assert checkout.cart_status(cart, Decimal("1.00")) == CheckoutStatus.INVALID
    assert checkout.cart_status(cart, Decimal("2.50")) == CheckoutStatus.READY


def test_cart_status_invalid_when_stock_drops_below_cart(paracetamol):
    cart = Cart()
    for _ in range(5):
        cart = checkout.add_item(paracetamol, cart)
    assert checkout.cart_status(cart, Decimal("100"), [paracetamol]) == CheckoutStatus.READY

    restocked = [paracetamol.model_copy(update={"stock": 2})]
    assert checkout.cart_status(cart, None, restocked) == CheckoutStatus.INVALID
    assert checkout.cart_status(cart, Decimal("100"), restocked) == CheckoutStatus.INVALID
    assert checkout.stock_shortage(cart, restocked).id == "MED-1"


def test_commit_scenario(paracetamol, amoxicillin):
    cart = Cart()
    for _ in range(3):
        cart = checkout.add_item(paracetamol, cart)

    bill, medicines = checkout.commit(
        cart, Decimal("10.00"), "Ali Khan", [], [paracetamol, amoxicillin],
        now=datetime(2024, 5, 10, 9, 30),
    )

    assert bill.bill_no == "BILL-2024-05-001"
    assert bill.total == Decimal("7.50")
    assert bill.cash_received == Decimal("10.00")
    assert bill.balance == Decimal("2.50")
    assert bill.customer_name == "Ali Khan"
    assert bill.customer_id == "WALK-IN"
    assert bill.date == datetime(2024, 5, 10, 9, 30)
    stock = {m.id: m.stock for m in medicines}
    assert stock == {"MED-1": 7, "MED-2": 3}
    # inputs untouched
    assert paracetamol.stock == 10


def test_commit_blank_customer_name_uses_default(paracetamol):
    cart = checkout.add_item(paracetamol, Cart())
    bill, _ = checkout.commit(cart, Decimal("5"), "   ", [], [paracetamol])
    assert bill.customer_name == "Walk-in Customer"


def test_commit_empty_cart_fails(paracetamol):
    with pytest.raises(EmptyCartError):
        checkout.commit(Cart(), Decimal("10"), "", [], [paracetamol])


def test_commit_insufficient_cash_fails(paracetamol):
    cart = checkout.set_quantity("MED-1", 3, checkout.add_item(paracetamol, Cart()), [paracetamol])
    with pytest.raises(InsufficientCashError) as exc:
        checkout.commit(cart, Decimal("7.49"), "", [], [paracetamol])
    assert exc.value.limit == Decimal("7.50")


def test_commit_rechecks_stock_against_current_ledger(paracetamol):
    cart = checkout.set_quantity("MED-1", 5, checkout.add_item(paracetamol, Cart()), [paracetamol])
    edited = paracetamol.model_copy(update={"stock": 4})
    with pytest.raises(InsufficientStockError):
        checkout.commit(cart, Decimal("100"), "", [], [edited])


def test_commit_tolerates_deleted_medicine(paracetamol, amoxicillin):
    cart = checkout.add_item(amoxicillin, checkout.add_item(paracetamol, Cart()))
    bill, medicines = checkout.commit(cart, Decimal("20"), "", [], [paracetamol])
    assert len(bill.items) == 2
    assert [m.stock for m in medicines] == [9]


def test_commit_numbers_follow_existing_bills(paracetamol, make_bill):
    cart = checkout.add_item(paracetamol, Cart())
    existing = [make_bill("BILL-2024-05-002"), make_bill("BILL-2024-05-001")]
    bill, _ = checkout.commit(cart, Decimal("5"), "", existing, [paracetamol], now=datetime(2024, 5, 31))
    assert bill.bill_no == "BILL-2024-05-003"
