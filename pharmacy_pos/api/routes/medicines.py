"""Inventory screen: medicine list with add / edit / delete."""
from typing import List

from fastapi import APIRouter, Depends, Query

from pharmacy_pos.api.deps import require_login
from pharmacy_pos.schemas.drafts import MedicineDraft
from pharmacy_pos.schemas.state import Medicine
from pharmacy_pos.services import inventory_service
from pharmacy_pos.services.state_store import StateStore

router = APIRouter()


@router.get("", response_model=List[Medicine])
def list_medicines(
    search: str | None = Query(None),
    store: StateStore = Depends(require_login),
):
    """Inventory list, searchable by brand or generic name."""
    return inventory_service.search_medicines(store.state.medicines, search)


@router.post("", response_model=Medicine)
def create_medicine(draft: MedicineDraft, store: StateStore = Depends(require_login)):
    return store.update("medicines", lambda medicines: inventory_service.add_medicine(medicines, draft))


@router.put("/{medicine_id}", response_model=Medicine)
def update_medicine(medicine_id: str, draft: MedicineDraft, store: StateStore = Depends(require_login)):
    return store.update(
        "medicines", lambda medicines: inventory_service.update_medicine(medicines, medicine_id, draft)
    )


@router.delete("/{medicine_id}")
def delete_medicine(medicine_id: str, store: StateStore = Depends(require_login)):
    store.update("medicines", lambda medicines: (None, inventory_service.delete_medicine(medicines, medicine_id)))
    return {"message": f"Deleted {medicine_id}", "id": medicine_id}
