"""
State container: owns the AppState and the in-progress checkout cart.

Every mutation replaces whole fields of the state and persists the result
through the storage gateway. Readers get deep snapshots. A lock serializes
mutations so a sale (bill appended, stock decremented, cart emptied) is one
indivisible step even when requests arrive on different worker threads.
"""
import logging
import threading
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pharmacy_pos.core.exceptions import NotFoundError, ValidationError
from pharmacy_pos.schemas.cart import Cart
from pharmacy_pos.schemas.state import AppState, Bill, UserSession
from pharmacy_pos.services import checkout_service
from pharmacy_pos.services.collection_service import find_by_id
from pharmacy_pos.services.storage_service import StorageService

logger = logging.getLogger(__name__)


class StateStore:
    def __init__(self, gateway: StorageService):
        self._gateway = gateway
        self._lock = threading.RLock()
        self._state = gateway.load()
        self._cart = Cart()

    @property
    def state(self) -> AppState:
        with self._lock:
            return self._state.model_copy(deep=True)

    @property
    def cart(self) -> Cart:
        with self._lock:
            return self._cart

    @property
    def is_logged_in(self) -> bool:
        with self._lock:
            user = self._state.user
            return bool(user and user.is_logged_in)

    def replace(self, **fields) -> AppState:
        """Swap whole fields of the state (e.g. medicines=[...]) and persist."""
        unknown = set(fields) - set(AppState.model_fields)
        if unknown:
            raise ValueError(f"Unknown state fields: {sorted(unknown)}")
        with self._lock:
            self._state = self._state.model_copy(update=fields)
            self._gateway.save(self._state)
            return self.state

    def update(self, field: str, fn):
        """
        Read-modify-write of one state field under the lock.

        fn receives the current value and returns (result, new_value); the new
        value is persisted and result is handed back to the caller.
        """
        if field not in AppState.model_fields:
            raise ValueError(f"Unknown state field: {field}")
        with self._lock:
            result, value = fn(getattr(self.state, field))
            self.replace(**{field: value})
            return result

    # -- session ---------------------------------------------------------

    def login(self, username: str, password: str) -> UserSession:
        """Any non-empty username and password pair is accepted."""
        username = (username or "").strip()
        if not username or not (password or "").strip():
            raise ValidationError("Username and password are required")
        session = UserSession(username=username, is_logged_in=True)
        self.replace(user=session)
        logger.info(f"[Session] {username} logged in")
        return session

    def logout(self) -> None:
        with self._lock:
            self._cart = Cart()
            self.replace(user=None)
        logger.info("[Session] Logged out")

    # -- checkout --------------------------------------------------------

    def add_to_cart(self, medicine_id: str) -> Cart:
        with self._lock:
            medicine = find_by_id(self._state.medicines, medicine_id)
            if medicine is None:
                raise NotFoundError("Medicine", medicine_id)
            self._cart = checkout_service.add_item(medicine, self._cart)
            return self._cart

    def set_cart_quantity(self, medicine_id: str, quantity: int) -> Cart:
        with self._lock:
            self._cart = checkout_service.set_quantity(medicine_id, quantity, self._cart, self._state.medicines)
            return self._cart

    def remove_from_cart(self, medicine_id: str) -> Cart:
        with self._lock:
            self._cart = checkout_service.remove_item(medicine_id, self._cart)
            return self._cart

    def clear_cart(self) -> Cart:
        with self._lock:
            self._cart = Cart()
            return self._cart

    def complete_sale(self, cash_received: Decimal, customer_name: str = "", now: Optional[datetime] = None) -> Bill:
        with self._lock:
            bill, medicines = checkout_service.commit(
                self._cart,
                cash_received,
                customer_name,
                self._state.bills,
                self._state.medicines,
                now=now,
            )
            self.replace(bills=[bill] + list(self._state.bills), medicines=medicines)
            self._cart = Cart()
            return bill

    # -- maintenance -----------------------------------------------------

    def reset(self) -> None:
        """Wipe stored data. The current session stays logged in."""
        with self._lock:
            user = self._state.user
            self._gateway.clear()
            self._state = AppState(user=user)
            self._cart = Cart()
            if user is not None:
                self._gateway.save(self._state)
        logger.warning("[Storage] All stored data cleared")
