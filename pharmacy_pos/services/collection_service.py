"""List-replacement helpers shared by the CRUD managers.

Collections are plain lists of entities with an `id`. Nothing is mutated;
each helper returns the replacement list.
"""
import time
from typing import Iterable, List, Optional, TypeVar

from pharmacy_pos.core.exceptions import NotFoundError

T = TypeVar("T")


def new_id(prefix: str, existing: Iterable) -> str:
    """`{prefix}-{epoch millis}`, bumped until unused in `existing`."""
    taken = {e.id for e in existing}
    stamp = int(time.time() * 1000)
    while f"{prefix}-{stamp}" in taken:
        stamp += 1
    return f"{prefix}-{stamp}"


def find_by_id(items: Iterable[T], item_id: str) -> Optional[T]:
    return next((i for i in items if i.id == item_id), None)


def replace_by_id(items: List[T], item: T, resource: str) -> List[T]:
    if find_by_id(items, item.id) is None:
        raise NotFoundError(resource, item.id)
    return [item if i.id == item.id else i for i in items]


def remove_by_id(items: List[T], item_id: str, resource: str) -> List[T]:
    if find_by_id(items, item_id) is None:
        raise NotFoundError(resource, item_id)
    return [i for i in items if i.id != item_id]
