"""Centralized message codes and default messages for API responses."""

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel


class MessageCode(str, Enum):
    """Centralized message codes for API responses."""

    # Success codes
    SUCCESS = "SUCCESS"
    CREATED = "CREATED"
    UPDATED = "UPDATED"
    DELETED = "DELETED"

    # Authentication & Authorization
    INVALID_API_KEY = "INVALID_API_KEY"
    WALLET_ADDRESS_REQUIRED = "WALLET_ADDRESS_REQUIRED"
    WALLET_ADDRESS_MISMATCH = "WALLET_ADDRESS_MISMATCH"

    # Users
    USER_SAVED = "USER_SAVED"

    # Requests & bids
    REQUEST_SAVED = "REQUEST_SAVED"
    REQUEST_NOT_FOUND = "REQUEST_NOT_FOUND"
    BID_SAVED = "BID_SAVED"
    BID_NOT_FOUND = "BID_NOT_FOUND"
    DEADLINE_NOT_IN_FUTURE = "DEADLINE_NOT_IN_FUTURE"

    # Coverage
    COVERAGE_AREA_CREATED = "COVERAGE_AREA_CREATED"
    COVERAGE_AREA_UPDATED = "COVERAGE_AREA_UPDATED"
    COVERAGE_AREA_DELETED = "COVERAGE_AREA_DELETED"
    COVERAGE_AREA_NOT_FOUND = "COVERAGE_AREA_NOT_FOUND"
    COVERAGE_AREA_LIMIT_EXCEEDED = "COVERAGE_AREA_LIMIT_EXCEEDED"
    AREA_OF_INTEREST_SAVED = "AREA_OF_INTEREST_SAVED"
    AREA_OF_INTEREST_DELETED = "AREA_OF_INTEREST_DELETED"

    # Profiles
    PROFILE_CREATED = "PROFILE_CREATED"
    PROFILE_UPDATED = "PROFILE_UPDATED"
    PROFILE_ALREADY_EXISTS = "PROFILE_ALREADY_EXISTS"

    # Ratings
    RATING_CREATED = "RATING_CREATED"

    # Chain / reconciliation
    RECONCILED = "RECONCILED"
    CHAIN_CONFIRMED_MIRROR_FAILED = "CHAIN_CONFIRMED_MIRROR_FAILED"
    CHAIN_NOT_CONFIGURED = "CHAIN_NOT_CONFIGURED"
    CHAIN_TX_REJECTED = "CHAIN_TX_REJECTED"
    CHAIN_INSUFFICIENT_FUNDS = "CHAIN_INSUFFICIENT_FUNDS"
    CHAIN_TX_REVERTED = "CHAIN_TX_REVERTED"
    CHAIN_TX_TIMEOUT = "CHAIN_TX_TIMEOUT"
    CHAIN_TX_FAILED = "CHAIN_TX_FAILED"

    # Rate limiting
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"

    # Generic errors
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    BAD_REQUEST = "BAD_REQUEST"
    NOT_FOUND = "NOT_FOUND"


# Default messages for each message code
DEFAULT_MESSAGES = {
    # Success messages
    MessageCode.SUCCESS: "Operation completed successfully",
    MessageCode.CREATED: "Resource created successfully",
    MessageCode.UPDATED: "Resource updated successfully",
    MessageCode.DELETED: "Resource deleted successfully",
    # Authentication & Authorization
    MessageCode.INVALID_API_KEY: "Invalid or missing agent API key",
    MessageCode.WALLET_ADDRESS_REQUIRED: "Missing wallet address",
    MessageCode.WALLET_ADDRESS_MISMATCH: "Wallet address mismatch",
    # Users
    MessageCode.USER_SAVED: "User saved successfully",
    # Requests & bids
    MessageCode.REQUEST_SAVED: "Request saved successfully",
    MessageCode.REQUEST_NOT_FOUND: "Request not found",
    MessageCode.BID_SAVED: "Bid saved successfully",
    MessageCode.BID_NOT_FOUND: "Bid not found",
    MessageCode.DEADLINE_NOT_IN_FUTURE: "Deadline must be in the future",
    # Coverage
    MessageCode.COVERAGE_AREA_CREATED: "Coverage area created successfully",
    MessageCode.COVERAGE_AREA_UPDATED: "Coverage area updated successfully",
    MessageCode.COVERAGE_AREA_DELETED: "Coverage area deleted successfully",
    MessageCode.COVERAGE_AREA_NOT_FOUND: "Coverage area not found",
    MessageCode.COVERAGE_AREA_LIMIT_EXCEEDED: "Maximum 3 coverage areas allowed per provider",
    MessageCode.AREA_OF_INTEREST_SAVED: "Area of interest saved successfully",
    MessageCode.AREA_OF_INTEREST_DELETED: "Area of interest deleted successfully",
    # Profiles
    MessageCode.PROFILE_CREATED: "Provider profile created successfully",
    MessageCode.PROFILE_UPDATED: "Provider profile updated successfully",
    MessageCode.PROFILE_ALREADY_EXISTS: "Profile already exists. Use PUT to update.",
    # Ratings
    MessageCode.RATING_CREATED: "Rating submitted successfully",
    # Chain / reconciliation
    MessageCode.RECONCILED: "Transaction confirmed and recorded",
    MessageCode.CHAIN_CONFIRMED_MIRROR_FAILED: "Transaction succeeded on-chain but could not be fully recorded. Do not resubmit.",
    MessageCode.CHAIN_NOT_CONFIGURED: "Agent chain access is not configured",
    MessageCode.CHAIN_TX_REJECTED: "Transaction was rejected.",
    MessageCode.CHAIN_INSUFFICIENT_FUNDS: "Insufficient funds for transaction.",
    MessageCode.CHAIN_TX_REVERTED: "Transaction reverted. Please check your inputs (e.g., deadline must be in the future).",
    MessageCode.CHAIN_TX_TIMEOUT: "Timed out waiting for transaction confirmation.",
    MessageCode.CHAIN_TX_FAILED: "Transaction failed.",
    # Rate limiting
    MessageCode.RATE_LIMIT_EXCEEDED: "Rate limit exceeded",
    # Validation errors
    MessageCode.VALIDATION_ERROR: "Validation failed",
    MessageCode.PAYLOAD_TOO_LARGE: "Request payload too large",
    # Generic errors
    MessageCode.CONFLICT: "Resource conflict",
    MessageCode.INTERNAL_ERROR: "Internal server error",
    MessageCode.BAD_REQUEST: "Bad request",
    MessageCode.NOT_FOUND: "Resource not found",
}

T = TypeVar("T")


class PaginationInfo(BaseModel):
    """Common pagination information."""

    total: int
    page: int
    limit: int
    has_more: bool


class Paginated(BaseModel, Generic[T]):
    """Generic paginated response wrapper."""

    items: list[T]
    pagination: PaginationInfo


class APIResponse(BaseModel, Generic[T]):
    """Base API response model with consistent structure and proper typing."""

    message_code: MessageCode
    message: str
    data: T | None = None

    @classmethod
    def success(
        cls,
        message_code: MessageCode = MessageCode.SUCCESS,
        message: str | None = None,
        data: T | None = None,
    ) -> "APIResponse[T]":
        """Create a success response."""
        return cls(
            message_code=message_code,
            message=message or DEFAULT_MESSAGES.get(message_code, "Success"),
            data=data,
        )


def get_default_message(message_code: MessageCode) -> str:
    """Get default message for a message code."""
    return DEFAULT_MESSAGES.get(message_code, "Operation completed")
