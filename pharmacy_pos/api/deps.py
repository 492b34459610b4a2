"""FastAPI dependencies: the state container and the session gate."""
from typing import Optional

from fastapi import Depends

from pharmacy_pos.core.exceptions import BusinessError
from pharmacy_pos.db.session import SessionLocal
from pharmacy_pos.services.state_store import StateStore
from pharmacy_pos.services.storage_service import StorageService

_store: Optional[StateStore] = None


def get_store() -> StateStore:
    """Process-wide state container, loaded from storage on first use."""
    global _store
    if _store is None:
        _store = StateStore(StorageService(SessionLocal))
    return _store


def require_login(store: StateStore = Depends(get_store)) -> StateStore:
    if not store.is_logged_in:
        raise BusinessError.unauthorized("no active session")
    return store
