"""Shared domain error messages and error types."""

from typing import Optional


class DomainError(ValueError):
    """Base class for client-detected errors.

    These are raised before any request is sent. Subclasses provide
    semantic categories while preserving ValueError compatibility.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class ActionInProgressError(DomainError):
    """The same action is already running and was not started again."""


class ApiError(Exception):
    """Base class for failures that originate from the network.

    Attributes:
        status: HTTP status code, or None when no response was received
        message: Server supplied message when the body carried one
    """

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status = status


class AuthError(ApiError):
    """The server rejected the credential (HTTP 401)."""


class ServerError(ApiError):
    """The server failed to handle the request (HTTP 5xx)."""


class ClientError(ApiError):
    """The server refused the request (HTTP 4xx other than 401)."""


class RequestTimeoutError(ApiError):
    """No response arrived before the transport timeout."""


class NetworkError(ApiError):
    """The request failed before any response was received."""


class UploadError(ApiError):
    """The profile image could not be uploaded."""


def name_required(kind: str) -> str:
    """Return message for a missing display name."""
    return f"Please enter {kind} name"


def invalid_amount() -> str:
    """Return message for a missing, non-numeric or non-positive amount."""
    return "Amount should be a valid number greater than 0"


def date_required() -> str:
    """Return message for a missing date."""
    return "Please select a date"


def future_date(value) -> str:
    """Return message for a date later than today."""
    return f"Date cannot be in the future ({value})"


def category_required() -> str:
    """Return message for a missing category reference."""
    return "Please select a category"


def invalid_transaction_type(value: str) -> str:
    """Return message for an unknown income/expense type."""
    return f"Invalid type '{value}'. Must be \"income\" or \"expense\""


def duplicate_category_name(name: str, category_type: str) -> str:
    """Return message for a category name already used within a type."""
    return f"Category name '{name}' already exists for {category_type}"


def category_not_found(category: str) -> str:
    """Return message for a category that cannot be resolved."""
    return f"Category '{category}' not found"


def action_in_progress(action: str) -> str:
    """Return message when an action is latched by an outstanding request."""
    return f"'{action}' is already in progress, please wait"


def login_required() -> str:
    """Return message shown when the session must be re-established."""
    return "You are not logged in. Please run 'mymoney login'"
