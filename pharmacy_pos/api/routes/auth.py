"""Auth: the login screen gate.

There is no credential store. Any non-empty username and password opens a
session; the session lives in the persisted state until logout.
"""
from fastapi import APIRouter, Depends

from pharmacy_pos.api.deps import get_store, require_login
from pharmacy_pos.schemas.session import LoginRequest
from pharmacy_pos.schemas.state import UserSession
from pharmacy_pos.services.state_store import StateStore

router = APIRouter()


@router.post("/login", response_model=UserSession)
def login(data: LoginRequest, store: StateStore = Depends(get_store)):
    return store.login(data.username, data.password)


@router.post("/logout")
def logout(store: StateStore = Depends(require_login)):
    store.logout()
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserSession)
def me(store: StateStore = Depends(require_login)):
    """Get the current session."""
    return store.state.user
