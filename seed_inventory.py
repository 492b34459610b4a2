"""Seed the pharmacy with demo suppliers and medicines.

Usage: python seed_inventory.py
Replaces the current supplier and medicine lists; bills are left alone.
"""
from datetime import date

from pharmacy_pos.api.deps import get_store
from pharmacy_pos.db.init_db import init_db
from pharmacy_pos.schemas.drafts import MedicineDraft, SupplierDraft
from pharmacy_pos.services import contact_service, inventory_service

SUPPLIERS = [
    {"name": "Getz Pharma Distribution", "phone": "+92 21 111 111 222", "email": "orders@getz.example"},
    {"name": "Searle Medical Supplies", "phone": "+92 42 3571 0000", "address": "Ferozepur Road, Lahore"},
]

MEDICINES = [
    {"name": "Panadol 500mg", "generic_name": "Paracetamol", "category": "Analgesic",
     "price": "2.50", "cost_price": "1.80", "stock": 200, "expiry_date": date(2027, 6, 30), "supplier": 0},
    {"name": "Brufen 400mg", "generic_name": "Ibuprofen", "category": "Analgesic",
     "price": "4.00", "cost_price": "2.90", "stock": 120, "expiry_date": date(2027, 3, 31), "supplier": 0},
    {"name": "Augmentin 625mg", "generic_name": "Amoxicillin/Clavulanate", "category": "Antibiotic",
     "price": "18.00", "cost_price": "14.50", "stock": 40, "expiry_date": date(2026, 12, 31), "supplier": 1},
    {"name": "Azomax 500mg", "generic_name": "Azithromycin", "category": "Antibiotic",
     "price": "15.00", "cost_price": "11.00", "stock": 8, "expiry_date": date(2027, 1, 31), "supplier": 1},
    {"name": "Risek 20mg", "generic_name": "Omeprazole", "category": "Antacid",
     "price": "6.50", "cost_price": "4.75", "stock": 60, "expiry_date": date(2027, 9, 30), "supplier": 0},
    {"name": "Ventolin Inhaler", "generic_name": "Salbutamol", "category": "Respiratory",
     "price": "9.00", "cost_price": "7.20", "stock": 4, "expiry_date": date(2026, 11, 30), "supplier": 1},
    {"name": "Glucophage 500mg", "generic_name": "Metformin", "category": "Antidiabetic",
     "price": "3.20", "cost_price": "2.10", "stock": 150, "expiry_date": date(2028, 2, 29), "supplier": 0},
    {"name": "ORS Sachet", "generic_name": "Oral Rehydration Salts", "category": "Electrolyte",
     "price": "0.75", "cost_price": "0.40", "stock": 300, "expiry_date": date(2027, 12, 31), "supplier": 1},
]


def seed_inventory():
    init_db()
    store = get_store()

    suppliers = []
    for s in SUPPLIERS:
        _, suppliers = contact_service.add_supplier(suppliers, SupplierDraft(**s))

    medicines = []
    for med in MEDICINES:
        fields = {k: v for k, v in med.items() if k != "supplier"}
        draft = MedicineDraft(**fields, supplier_id=suppliers[med["supplier"]].id)
        _, medicines = inventory_service.add_medicine(medicines, draft)

    store.replace(suppliers=suppliers, medicines=medicines)
    print(f"\n✅ Added {len(suppliers)} suppliers and {len(medicines)} medicines")

    print(f"\n📦 MEDICINE INVENTORY ({len(medicines)} items):")
    print("=" * 80)
    for m in medicines:
        print(f"  📌 {m.name} ({m.generic_name})")
        print(f"     💰 Price: ${m.price:.2f} | 📦 Stock: {m.stock} units | Expires {m.expiry_date}")
        print()


if __name__ == "__main__":
    seed_inventory()
