"""
Persistence gateway: the whole AppState as one JSON document under one key.

load() never fails. Missing, unreadable or malformed data is logged and
replaced with an empty state.
"""
import json
import logging
from typing import Callable

import pydantic
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pharmacy_pos.core.config import settings
from pharmacy_pos.core.exceptions import PersistenceReadError
from pharmacy_pos.models.storage_slot import StorageSlot
from pharmacy_pos.schemas.state import AppState

logger = logging.getLogger(__name__)


def serialize_state(state: AppState) -> str:
    return json.dumps(state.model_dump(mode="json", by_alias=True))


def deserialize_state(raw: str) -> AppState:
    try:
        return AppState.model_validate(json.loads(raw))
    except (ValueError, pydantic.ValidationError) as e:
        raise PersistenceReadError(f"Stored state is malformed: {e}") from e


class StorageService:
    def __init__(self, session_factory: Callable[[], Session], key: str = None):
        self.session_factory = session_factory
        self.key = key or settings.STORAGE_KEY

    def load(self) -> AppState:
        db = self.session_factory()
        try:
            slot = db.get(StorageSlot, self.key)
            if slot is None:
                return AppState()
            return deserialize_state(slot.value)
        except PersistenceReadError as e:
            logger.warning(f"[Storage] {e}; starting from empty state")
            return AppState()
        except SQLAlchemyError as e:
            logger.warning(f"[Storage] Failed to read state: {type(e).__name__}: {e}; starting from empty state")
            return AppState()
        finally:
            db.close()

    def save(self, state: AppState) -> None:
        db = self.session_factory()
        try:
            payload = serialize_state(state)
            slot = db.get(StorageSlot, self.key)
            if slot is None:
                db.add(StorageSlot(key=self.key, value=payload))
            else:
                slot.value = payload
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def clear(self) -> None:
        db = self.session_factory()
        try:
            db.query(StorageSlot).filter(StorageSlot.key == self.key).delete()
            db.commit()
        finally:
            db.close()
