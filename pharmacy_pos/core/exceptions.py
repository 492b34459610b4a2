"""
Domain errors and their HTTP translation.

Validation errors are raised before any state changes, so a caller that sees
one can rely on the State being exactly as it was. Persistence read errors are
recovered by the storage gateway and never reach the user.
"""
from decimal import Decimal
from typing import Any, Optional

from fastapi import HTTPException, status
import logging

logger = logging.getLogger(__name__)


class PharmacyError(Exception):
    """Base class for all application errors."""


class ValidationError(PharmacyError):
    """A user action was rejected; `limit` carries the limiting value if any."""

    def __init__(self, message: str, limit: Any = None):
        super().__init__(message)
        self.message = message
        self.limit = limit


class InsufficientStockError(ValidationError):
    def __init__(self, medicine_id: str, name: str, available: int):
        super().__init__(f"Only {available} units of {name} available", limit=available)
        self.medicine_id = medicine_id
        self.available = available


class InsufficientCashError(ValidationError):
    def __init__(self, total: Decimal, cash_received: Decimal):
        super().__init__(
            f"Received amount {cash_received} is less than total {total}",
            limit=total,
        )
        self.total = total
        self.cash_received = cash_received


class EmptyCartError(ValidationError):
    def __init__(self):
        super().__init__("Cannot complete a sale with no items")


class NotFoundError(PharmacyError):
    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} {identifier} not found")
        self.resource = resource
        self.identifier = identifier


class PersistenceReadError(PharmacyError):
    """Stored state could not be read or parsed."""


class BusinessError:
    """HTTP exceptions for request-level problems."""

    @staticmethod
    def not_found(resource: str = "Resource", reason: str = "") -> HTTPException:
        if reason:
            logger.warning(f"Not found: {resource} - {reason}")
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found",
        )

    @staticmethod
    def unauthorized(reason: str = "") -> HTTPException:
        """Every view is gated on the logged-in session."""
        logger.warning(f"Unauthorized access attempt: {reason}")
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not logged in",
        )

    @staticmethod
    def bad_request(detail: str, limit: Optional[Any] = None) -> HTTPException:
        """
        400 for input validation / business rule errors.

        The message names the limiting value so the cashier can correct it.
        Examples: "Only 10 units of Paracetamol available"
        """
        logger.info(f"Bad request: {detail}")
        body = {"message": detail}
        if limit is not None:
            body["limit"] = str(limit) if isinstance(limit, Decimal) else limit
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=body,
        )
