"""Customers screen."""
from typing import List

from fastapi import APIRouter, Depends, Query

from pharmacy_pos.api.deps import require_login
from pharmacy_pos.schemas.drafts import CustomerDraft
from pharmacy_pos.schemas.state import Customer
from pharmacy_pos.services import contact_service
from pharmacy_pos.services.state_store import StateStore

router = APIRouter()


@router.get("", response_model=List[Customer])
def list_customers(search: str | None = Query(None), store: StateStore = Depends(require_login)):
    return contact_service.search_contacts(store.state.customers, search)


@router.post("", response_model=Customer)
def create_customer(draft: CustomerDraft, store: StateStore = Depends(require_login)):
    return store.update("customers", lambda customers: contact_service.add_customer(customers, draft))


@router.put("/{customer_id}", response_model=Customer)
def update_customer(customer_id: str, draft: CustomerDraft, store: StateStore = Depends(require_login)):
    return store.update("customers", lambda customers: contact_service.update_customer(customers, customer_id, draft))


@router.delete("/{customer_id}")
def delete_customer(customer_id: str, store: StateStore = Depends(require_login)):
    store.update("customers", lambda customers: (None, contact_service.delete_customer(customers, customer_id)))
    return {"message": f"Deleted {customer_id}", "id": customer_id}
