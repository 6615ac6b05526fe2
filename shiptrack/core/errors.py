"""Typed domain exceptions raised by the service layer.

Routes catch these and translate them into HTTP responses:

    NotFoundError       -> 404
    UnauthorizedError   -> 403
    ConflictError       -> 409
    InvalidCredentials  -> 401

A missing record is always reported as ``NotFoundError`` before any
authorization rule is evaluated, so callers can tell "does not exist"
apart from "exists but not yours".
"""


class DomainError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    """Resource was not found. Maps to HTTP 404."""

    def __init__(self, resource_type: str, identifier) -> None:
        super().__init__(f"{resource_type} not found")
        self.resource_type = resource_type
        self.identifier = identifier


class UnauthorizedError(DomainError):
    """Principal is not allowed to perform the action. Maps to HTTP 403."""


class UnauthorizedAccess(UnauthorizedError):
    def __init__(self) -> None:
        super().__init__("Unauthorized access")


class UnauthorizedUpdate(UnauthorizedError):
    def __init__(self) -> None:
        super().__init__("Unauthorized update")


class UnauthorizedDelete(UnauthorizedError):
    def __init__(self) -> None:
        super().__init__("Unauthorized delete")


class UnauthorizedCompleteDelivery(UnauthorizedError):
    def __init__(self) -> None:
        super().__init__("Unauthorized complete delivery")


class ConflictError(DomainError):
    """Resource conflict (e.g., duplicate username). Maps to HTTP 409."""


class InvalidCredentials(DomainError):
    def __init__(self) -> None:
        super().__init__("Invalid credentials")
