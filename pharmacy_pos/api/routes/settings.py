"""Maintenance: wipe the stored state."""
import logging

from fastapi import APIRouter, Depends

from pharmacy_pos.api.deps import require_login
from pharmacy_pos.services.state_store import StateStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/reset")
def reset_data(store: StateStore = Depends(require_login)):
    logger.info(f"[SETTINGS] Reset requested by {store.state.user.username}")
    store.reset()
    return {"message": "All stored data cleared"}
