from datetime import date
from decimal import Decimal

import pytest

from pharmacy_pos.core.exceptions import NotFoundError, ValidationError
from pharmacy_pos.schemas.drafts import CustomerDraft, MedicineDraft, SupplierDraft
from pharmacy_pos.schemas.state import Supplier
from pharmacy_pos.services import contact_service, inventory_service
from pharmacy_pos.services.collection_service import new_id


def _draft(**kwargs):
    fields = dict(name="Panadol", generic_name="Paracetamol", price=Decimal("2.5"), stock=20, expiry_date=date(2027, 1, 31))
    fields.update(kwargs)
    return MedicineDraft(**fields)


def test_new_id_is_unique(make_medicine):
    first = new_id("MED", [])
    existing = [make_medicine(id=first)]
    assert new_id("MED", existing) != first
    assert first.startswith("MED-")


def test_add_medicine_prepends(make_medicine):
    existing = [make_medicine()]
    medicine, medicines = inventory_service.add_medicine(existing, _draft())
    assert medicines[0] == medicine
    assert medicine.price == Decimal("2.50")
    assert medicine.category == ""
    assert len(medicines) == 2


def test_draft_requires_name_and_expiry():
    with pytest.raises(ValidationError):
        _draft(name="  ").to_entity("MED-1")
    with pytest.raises(ValidationError):
        _draft(expiry_date=None).to_entity("MED-1")


def test_draft_rejects_negative_numbers():
    with pytest.raises(ValidationError):
        _draft(stock=-1).to_entity("MED-1")
    with pytest.raises(ValidationError):
        _draft(price=Decimal("-0.01")).to_entity("MED-1")


def test_draft_defaults_missing_numbers():
    medicine = MedicineDraft(name="Gauze", expiry_date=date(2030, 1, 1)).to_entity("MED-7")
    assert medicine.price == Decimal("0")
    assert medicine.stock == 0
    assert medicine.supplier_id == ""


def test_update_medicine_keeps_id(make_medicine):
    medicines = [make_medicine("MED-1"), make_medicine("MED-2", "Brufen")]
    medicine, updated = inventory_service.update_medicine(medicines, "MED-2", _draft(name="Brufen 400", stock=5))
    assert medicine.id == "MED-2"
    assert [m.name for m in updated] == ["Paracetamol", "Brufen 400"]


def test_update_and_delete_unknown_medicine(make_medicine):
    with pytest.raises(NotFoundError):
        inventory_service.update_medicine([make_medicine()], "MED-404", _draft())
    with pytest.raises(NotFoundError):
        inventory_service.delete_medicine([make_medicine()], "MED-404")


def test_delete_medicine(make_medicine):
    medicines = [make_medicine("MED-1"), make_medicine("MED-2")]
    assert [m.id for m in inventory_service.delete_medicine(medicines, "MED-1")] == ["MED-2"]


def test_search_matches_generic_name_case_insensitive(make_medicine):
    medicines = [make_medicine("MED-1", "Panadol", generic_name="Paracetamol"), make_medicine("MED-2", "Brufen")]
    assert [m.id for m in inventory_service.search_medicines(medicines, "PARACET")] == ["MED-1"]
    assert len(inventory_service.search_medicines(medicines, None)) == 2


def test_searchable_for_sale_skips_out_of_stock_and_caps(make_medicine):
    medicines = [make_medicine(f"MED-{n}", f"Vitamin {n}", stock=n % 2) for n in range(30)]
    found = inventory_service.searchable_for_sale(medicines, "vitamin")
    assert len(found) == 8
    assert all(m.stock > 0 for m in found)
    assert inventory_service.searchable_for_sale(medicines, "") == []


def test_supplier_name_falls_back_for_dangling_reference():
    suppliers = [Supplier(id="SUP-1", name="Getz")]
    assert inventory_service.supplier_name(suppliers, "SUP-1") == "Getz"
    assert inventory_service.supplier_name(suppliers, "SUP-2") == "Unknown Supplier"
    assert inventory_service.supplier_name(suppliers, "") == "Unknown Supplier"


def test_supplier_crud_appends_and_replaces():
    first, suppliers = contact_service.add_supplier([], SupplierDraft(name="Getz", phone="111"))
    second, suppliers = contact_service.add_supplier(suppliers, SupplierDraft(name="Searle"))
    assert [s.name for s in suppliers] == ["Getz", "Searle"]
    assert first.email == ""

    _, suppliers = contact_service.update_supplier(suppliers, first.id, SupplierDraft(name="Getz Pharma", phone="222"))
    assert suppliers[0].name == "Getz Pharma"
    assert [s.id for s in contact_service.delete_supplier(suppliers, first.id)] == [second.id]


def test_customer_crud_and_search():
    ali, customers = contact_service.add_customer([], CustomerDraft(name="Ali", phone="0300-111"))
    _, customers = contact_service.add_customer(customers, CustomerDraft(name="Sara", phone="0321-999"))
    assert [c.name for c in contact_service.search_contacts(customers, "0321")] == ["Sara"]
    assert [c.name for c in contact_service.search_contacts(customers, "ali")] == ["Ali"]
    with pytest.raises(ValidationError):
        contact_service.update_customer(customers, ali.id, CustomerDraft(name=""))
    with pytest.raises(NotFoundError):
        contact_service.delete_customer(customers, "CUS-404")
