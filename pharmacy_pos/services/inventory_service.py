"""Medicine inventory: list replacement for the inventory screen and lookups."""
import logging
from typing import List, Optional, Sequence, Tuple

from pharmacy_pos.core.config import settings
from pharmacy_pos.schemas.drafts import MedicineDraft
from pharmacy_pos.schemas.state import Medicine, Supplier
from pharmacy_pos.services.collection_service import find_by_id, new_id, remove_by_id, replace_by_id

logger = logging.getLogger(__name__)

UNKNOWN_SUPPLIER = "Unknown Supplier"


def add_medicine(medicines: List[Medicine], draft: MedicineDraft) -> Tuple[Medicine, List[Medicine]]:
    """New medicines go to the top of the list."""
    medicine = draft.to_entity(new_id("MED", medicines))
    logger.info(f"[Inventory] Added {medicine.id} {medicine.name}")
    return medicine, [medicine] + list(medicines)


def update_medicine(medicines: List[Medicine], medicine_id: str, draft: MedicineDraft) -> Tuple[Medicine, List[Medicine]]:
    medicine = draft.to_entity(medicine_id)
    updated = replace_by_id(medicines, medicine, "Medicine")
    logger.info(f"[Inventory] Updated {medicine_id}")
    return medicine, updated


def delete_medicine(medicines: List[Medicine], medicine_id: str) -> List[Medicine]:
    updated = remove_by_id(medicines, medicine_id, "Medicine")
    logger.info(f"[Inventory] Deleted {medicine_id}")
    return updated


def _matches(medicine: Medicine, term: str) -> bool:
    term = term.lower()
    return term in medicine.name.lower() or term in (medicine.generic_name or "").lower()


def search_medicines(medicines: Sequence[Medicine], search: Optional[str] = None) -> List[Medicine]:
    """Case-insensitive match on brand or generic name."""
    if not search:
        return list(medicines)
    return [m for m in medicines if _matches(m, search)]


def searchable_for_sale(medicines: Sequence[Medicine], search: str, limit: int = None) -> List[Medicine]:
    """Checkout picker: in-stock medicines only, capped."""
    if not search:
        return []
    limit = limit or settings.SEARCH_RESULT_LIMIT
    return [m for m in medicines if m.stock > 0 and _matches(m, search)][:limit]


def supplier_name(suppliers: Sequence[Supplier], supplier_id: str) -> str:
    supplier = find_by_id(suppliers, supplier_id) if supplier_id else None
    return supplier.name if supplier else UNKNOWN_SUPPLIER
