# vt_core/common/errors.py
from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """
    Base for errors raised by selectors/services.

    Stores never build HTTP responses; api_exception_handler maps each
    subclass to a status code and the canonical error envelope.
    """
    code = "domain_error"
    default_message = "Request failed."

    def __init__(self, message: str | None = None, *, code: str | None = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        if code:
            self.code = code
        super().__init__(self.message)


class NotFoundError(DomainError):
    """Missing row OR row outside the caller's site scope (deliberately indistinguishable)."""
    code = "not_found"
    default_message = "Not found."


class DuplicateError(DomainError):
    code = "duplicate"
    default_message = "A record with these values already exists."


class InUseError(DomainError):
    code = "in_use"
    default_message = "This record is still referenced and cannot be deleted."


class InvalidInputError(DomainError):
    code = "validation_error"
    default_message = "Invalid input."


class NothingToUpdateError(InvalidInputError):
    code = "nothing_to_update"
    default_message = "No fields to update."


class AuthenticationError(DomainError):
    code = "authentication_failed"
    default_message = "Invalid credentials."
