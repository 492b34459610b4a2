"""Invoice numbering. Used by the checkout engine at commit time."""
from datetime import datetime
from typing import Iterable

from pharmacy_pos.schemas.state import Bill


def bill_no_prefix(now: datetime) -> str:
    return f"BILL-{now.year}-{now.month:02d}-"


def next_bill_no(existing_bills: Iterable[Bill], now: datetime) -> str:
    """Next sequential bill number within the year-month bucket of `now`.

    The sequence is the count of existing bills carrying the same prefix,
    plus one, so it restarts at 001 every month. Not guarded against two
    commits racing inside one process; the state store serializes commits.

    Example:
        BILL-2024-05-001, BILL-2024-05-002 and now=May 2024 -> BILL-2024-05-003
    """
    prefix = bill_no_prefix(now)
    count = sum(1 for b in existing_bills if b.bill_no.startswith(prefix))
    return f"{prefix}{count + 1:03d}"
