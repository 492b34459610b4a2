"""Suppliers and customers: plain add / edit / delete on their lists."""
import logging
from typing import List, Optional, Sequence, Tuple

from pharmacy_pos.schemas.drafts import CustomerDraft, SupplierDraft
from pharmacy_pos.schemas.state import Customer, Supplier
from pharmacy_pos.services.collection_service import new_id, remove_by_id, replace_by_id

logger = logging.getLogger(__name__)


def add_supplier(suppliers: List[Supplier], draft: SupplierDraft) -> Tuple[Supplier, List[Supplier]]:
    supplier = draft.to_entity(new_id("SUP", suppliers))
    logger.info(f"[Contacts] Added supplier {supplier.id} {supplier.name}")
    return supplier, list(suppliers) + [supplier]


def update_supplier(suppliers: List[Supplier], supplier_id: str, draft: SupplierDraft) -> Tuple[Supplier, List[Supplier]]:
    supplier = draft.to_entity(supplier_id)
    return supplier, replace_by_id(suppliers, supplier, "Supplier")


def delete_supplier(suppliers: List[Supplier], supplier_id: str) -> List[Supplier]:
    # Medicines keep their supplier_id; lookups fall back to "Unknown Supplier"
    logger.info(f"[Contacts] Deleted supplier {supplier_id}")
    return remove_by_id(suppliers, supplier_id, "Supplier")


def add_customer(customers: List[Customer], draft: CustomerDraft) -> Tuple[Customer, List[Customer]]:
    customer = draft.to_entity(new_id("CUS", customers))
    logger.info(f"[Contacts] Added customer {customer.id} {customer.name}")
    return customer, list(customers) + [customer]


def update_customer(customers: List[Customer], customer_id: str, draft: CustomerDraft) -> Tuple[Customer, List[Customer]]:
    customer = draft.to_entity(customer_id)
    return customer, replace_by_id(customers, customer, "Customer")


def delete_customer(customers: List[Customer], customer_id: str) -> List[Customer]:
    logger.info(f"[Contacts] Deleted customer {customer_id}")
    return remove_by_id(customers, customer_id, "Customer")


def search_contacts(contacts: Sequence, search: Optional[str] = None) -> list:
    """Name or phone, case-insensitive. Works for suppliers and customers."""
    if not search:
        return list(contacts)
    term = search.lower()
    return [c for c in contacts if term in c.name.lower() or term in (c.phone or "").lower()]
