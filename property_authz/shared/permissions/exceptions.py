"""
Authorization exceptions.

`AuthorizationDenied` is the only exception that represents a decision.
`StoreUnavailableError` is an infrastructure failure and must never be read
as "allowed".
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .types import DecisionReason


class AuthorizationException(Exception):
    """Base exception for authorization errors."""

    pass


class AuthorizationDenied(AuthorizationException):
    """Raised by the gate when a subject may not perform an action."""

    def __init__(
        self,
        reason: "DecisionReason",
        resource_type: str,
        action: str,
        resource_id: Optional[str] = None,
    ) -> None:
        self.reason = reason
        self.resource_type = resource_type
        self.action = action
        self.resource_id = resource_id
        target = f"{resource_type}:{resource_id}" if resource_id else resource_type
        super().__init__(f"Denied {action} on {target} ({reason.value})")


class ResourceNotFoundError(AuthorizationException):
    """Raised when a resource scope cannot be resolved."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(f"{resource_type} {resource_id} not found")


class StoreUnavailableError(AuthorizationException):
    """Raised when a backing store cannot be read."""

    pass


class UnknownRoleError(AuthorizationException):
    """Raised when a role name is not part of the role catalog."""

    def __init__(self, role_name: str) -> None:
        self.role_name = role_name
        super().__init__(f"Unknown role: {role_name}")


class RoleCatalogConfigurationError(AuthorizationException):
    """Raised at import when a role grants a statement the registry lacks."""

    pass
