"""Suppliers screen."""
from typing import List

from fastapi import APIRouter, Depends, Query

from pharmacy_pos.api.deps import require_login
from pharmacy_pos.schemas.drafts import SupplierDraft
from pharmacy_pos.schemas.state import Supplier
from pharmacy_pos.services import contact_service
from pharmacy_pos.services.state_store import StateStore

router = APIRouter()


@router.get("", response_model=List[Supplier])
def list_suppliers(search: str | None = Query(None), store: StateStore = Depends(require_login)):
    return contact_service.search_contacts(store.state.suppliers, search)


@router.post("", response_model=Supplier)
def create_supplier(draft: SupplierDraft, store: StateStore = Depends(require_login)):
    return store.update("suppliers", lambda suppliers: contact_service.add_supplier(suppliers, draft))


@router.put("/{supplier_id}", response_model=Supplier)
def update_supplier(supplier_id: str, draft: SupplierDraft, store: StateStore = Depends(require_login)):
    return store.update("suppliers", lambda suppliers: contact_service.update_supplier(suppliers, supplier_id, draft))


@router.delete("/{supplier_id}")
def delete_supplier(supplier_id: str, store: StateStore = Depends(require_login)):
    store.update("suppliers", lambda suppliers: (None, contact_service.delete_supplier(suppliers, supplier_id)))
    return {"message": f"Deleted {supplier_id}", "id": supplier_id}
