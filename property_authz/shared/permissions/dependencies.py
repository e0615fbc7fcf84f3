import logging
from typing import Awaitable, Callable, Optional

from fastapi import Depends, Header, Request

from property_authz.core.settings import settings
from property_authz.domains.auth.dependencies import get_current_identity
from property_authz.domains.memberships.resolver import MembershipResolver
from property_authz.domains.resources.scope_index import ResourceScopeIndex
from property_authz.shared.exceptions import (
    AuthorizationUnavailableError,
    NotAuthorizedError,
)

from .exceptions import AuthorizationDenied, StoreUnavailableError
from .gate import AuthorizationGate
from .statements import Action, ResourceType, is_valid_action
from .stores import AuthorizationStores
from .types import EvaluationContext, Identity

logger = logging.getLogger(__name__)


def build_gate(stores: AuthorizationStores) -> AuthorizationGate:
    """Build a fresh gate over the given stores."""
    return AuthorizationGate(
        memberships=MembershipResolver(stores.memberships),
        scopes=ResourceScopeIndex(stores.scopes),
        organizations=stores.organizations,
        audit_allowed=settings.AUDIT_ALLOWED_DECISIONS,
    )


def get_authorization_gate(request: Request) -> AuthorizationGate:
    """
    Gate for the current request.

    A new gate per request keeps its membership cache from leaking between
    callers.
    """
    stores: AuthorizationStores = request.app.state.authorization_stores
    return build_gate(stores)


def get_evaluation_context(
    org_id: str,
    identity: Identity = Depends(get_current_identity),
    x_active_team: Optional[str] = Header(None),
) -> EvaluationContext:
    """Build the immutable evaluation context for this request."""
    return EvaluationContext(
        identity=identity,
        active_organization_id=org_id,
        active_team_id=x_active_team,
    )


def require_permission(
    resource_type: ResourceType,
    action: Action,
    resource_param: Optional[str] = None,
) -> Callable[..., Awaitable[EvaluationContext]]:
    """
    Dependency factory for resource authorization.

    Creates a dependency that checks the caller may perform `action` on
    `resource_type` in the organization from the `org_id` path parameter.

    Args:
        resource_type: Type of the resource the endpoint acts on
        action: Action the endpoint performs
        resource_param: Name of the path parameter holding the resource ID;
            None for organization-level checks such as creation

    Returns:
        Async dependency function that returns the evaluation context

    Raises:
        ValueError: If (resource_type, action) is not a known statement
    """
    if not is_valid_action(resource_type, action):
        raise ValueError(f"Unknown statement {resource_type.value}:{action.value}")

    async def check_permission(
        request: Request,
        context: EvaluationContext = Depends(get_evaluation_context),
        gate: AuthorizationGate = Depends(get_authorization_gate),
    ) -> EvaluationContext:
        """
        Validate the caller may perform the action.

        Raises:
            HTTPException: 403 when denied, 503 when a store is unavailable
        """
        resource_id = None
        if resource_param:
            resource_id = request.path_params.get(resource_param)

        try:
            await gate.assert_can(context, resource_type, action, resource_id)
        except AuthorizationDenied:
            raise NotAuthorizedError()
        except StoreUnavailableError:
            logger.error(
                f"Authorization store unavailable for {context.user_id} "
                f"in {context.active_organization_id}"
            )
            raise AuthorizationUnavailableError()

        return context

    return check_permission
