from datetime import date, datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from pharmacy_pos.api.deps import get_store
from pharmacy_pos.db.init_db import init_db
from pharmacy_pos.db.session import make_engine
from pharmacy_pos.main import app
from pharmacy_pos.schemas.state import Bill, BillItem, Medicine
from pharmacy_pos.services.state_store import StateStore
from pharmacy_pos.services.storage_service import StorageService


@pytest.fixture
def session_factory(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'kmc_test.db'}")
    init_db(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def gateway(session_factory):
    return StorageService(session_factory, key="TEST_STATE")


@pytest.fixture
def store(gateway):
    return StateStore(gateway)


@pytest.fixture
def make_medicine():
    def _make(id="MED-1", name="Paracetamol", price="2.50", stock=10, **kwargs):
        fields = dict(
            id=id,
            name=name,
            generic_name=kwargs.pop("generic_name", None),
            category=kwargs.pop("category", "Analgesic"),
            price=Decimal(price),
            cost_price=Decimal(kwargs.pop("cost_price", "1.00")),
            stock=stock,
            expiry_date=kwargs.pop("expiry_date", date(2030, 1, 31)),
            supplier_id=kwargs.pop("supplier_id", ""),
        )
        fields.update(kwargs)
        return Medicine(**fields)
    return _make


@pytest.fixture
def make_bill():
    def _make(bill_no="BILL-2024-05-001", total="5.00", when=None, customer_name="Walk-in Customer"):
        amount = Decimal(total)
        return Bill(
            bill_no=bill_no,
            date=when or datetime(2024, 5, 10, 12, 0),
            customer_id="WALK-IN",
            customer_name=customer_name,
            items=[BillItem(medicine_id="MED-1", name="Paracetamol", quantity=1, unit_price=amount, subtotal=amount)],
            total=amount,
            cash_received=amount,
            balance=Decimal("0"),
        )
    return _make


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def logged_in(client):
    response = client.post("/auth/login", json={"username": "admin", "password": "secret"})
    assert response.status_code == 200
    return client
