"""
Shared authorization core for multi-tenant access control.

This package holds the statement registry, the role catalog, the pure
permission evaluator and the per-request authorization gate. Everything here
is transport-agnostic; the FastAPI dependencies live in
`property_authz.shared.permissions.dependencies`.

Usage:
    from property_authz.shared.permissions import Action, ResourceType
    from property_authz.shared.permissions.dependencies import require_permission

    @router.get("/organizations/{org_id}/properties/{property_id}")
    async def get_property(
        property_id: str,
        context: EvaluationContext = Depends(
            require_permission(
                ResourceType.PROPERTY, Action.READ, resource_param="property_id"
            )
        ),
    ):
        pass
"""

from .exceptions import (
    AuthorizationDenied,
    AuthorizationException,
    ResourceNotFoundError,
    RoleCatalogConfigurationError,
    StoreUnavailableError,
    UnknownRoleError,
)
from .gate import AuthorizationGate
from .models import ROLE_GRANTS, Role, grants_for, parse_role
from .services import evaluate, has_permission
from .statements import (
    STATEMENTS,
    Action,
    ResourceType,
    actions_for,
    is_read_class,
    is_valid_action,
)
from .types import (
    Decision,
    DecisionReason,
    EvaluationContext,
    GlobalRole,
    Identity,
    Membership,
    MemberStatus,
    ResourceScope,
)

__all__ = [
    "Action",
    "AuthorizationDenied",
    "AuthorizationException",
    "AuthorizationGate",
    "Decision",
    "DecisionReason",
    "EvaluationContext",
    "GlobalRole",
    "Identity",
    "MemberStatus",
    "Membership",
    "ROLE_GRANTS",
    "ResourceNotFoundError",
    "ResourceScope",
    "ResourceType",
    "Role",
    "RoleCatalogConfigurationError",
    "STATEMENTS",
    "StoreUnavailableError",
    "UnknownRoleError",
    "actions_for",
    "evaluate",
    "grants_for",
    "has_permission",
    "is_read_class",
    "is_valid_action",
    "parse_role",
]
