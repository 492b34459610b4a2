"""Create all tables. Run on app startup."""
from pharmacy_pos.db.base import Base
from pharmacy_pos.db.session import engine
from pharmacy_pos.models import storage_slot  # noqa: F401 - register models


def init_db(bind=None):
    Base.metadata.create_all(bind=bind or engine)
