from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from pharmacy_pos.schemas.state import BillItem


class CheckoutStatus(str, Enum):
    EMPTY = "empty"
    BUILDING = "building"
    INVALID = "invalid"
    READY = "ready"


class Cart(BaseModel):
    """Transient, uncommitted line items. Every operation returns a new Cart."""
    items: List[BillItem] = Field(default_factory=list)

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        frozen = True

    def line_for(self, medicine_id: str) -> Optional[BillItem]:
        return next((i for i in self.items if i.medicine_id == medicine_id), None)
