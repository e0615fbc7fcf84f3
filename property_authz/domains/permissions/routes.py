# property_authz/domains/permissions/routes.py
import logging
from typing import List

from fastapi import APIRouter, Depends

from property_authz.domains.auth.dependencies import get_current_identity
from property_authz.domains.permissions.models import (
    CapabilitiesResponse,
    RoleResponse,
    StatementResponse,
    statements_to_dict,
)
from property_authz.shared.exceptions import (
    AuthorizationUnavailableError,
    InvalidDataError,
)
from property_authz.shared.permissions import (
    ROLE_GRANTS,
    STATEMENTS,
    AuthorizationGate,
    EvaluationContext,
    Identity,
    Role,
    StoreUnavailableError,
    UnknownRoleError,
    grants_for,
)
from property_authz.shared.permissions.dependencies import (
    get_authorization_gate,
    get_evaluation_context,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Permissions"])


@router.get(
    "/organizations/{org_id}/permissions",
    response_model=CapabilitiesResponse,
    operation_id="getOrganizationPermissions",
)
async def get_organization_permissions(
    context: EvaluationContext = Depends(get_evaluation_context),
    gate: AuthorizationGate = Depends(get_authorization_gate),
) -> CapabilitiesResponse:
    """
    Get the statements the current user holds in an organization.

    Used by clients to show or hide actions. The map is organization-wide:
    ownership and team tags of individual resources are not reflected, and
    every resource request is still checked on the server. A caller with no
    active membership gets an empty map.
    """
    try:
        granted = await gate.capabilities(context)
    except StoreUnavailableError:
        logger.error(
            f"Could not compute permissions for {context.user_id} "
            f"in {context.active_organization_id}"
        )
        raise AuthorizationUnavailableError()

    return CapabilitiesResponse(
        organization_id=context.active_organization_id,
        team_id=context.active_team_id,
        user_id=context.user_id,
        permissions=statements_to_dict(granted),
    )


@router.get(
    "/permissions/roles",
    response_model=List[RoleResponse],
    operation_id="listRoles",
)
async def list_roles(
    identity: Identity = Depends(get_current_identity),
) -> List[RoleResponse]:
    """List every organization role with the statements it grants."""
    return [
        RoleResponse(role=role.value, statements=statements_to_dict(grants))
        for role, grants in ROLE_GRANTS.items()
    ]


@router.get(
    "/permissions/roles/{role_name}",
    response_model=RoleResponse,
    operation_id="getRole",
)
async def get_role(
    role_name: str,
    identity: Identity = Depends(get_current_identity),
) -> RoleResponse:
    """Get the statements granted to a single role."""
    try:
        grants = grants_for(role_name)
    except UnknownRoleError:
        valid = ", ".join(role.value for role in Role)
        raise InvalidDataError(f"Unknown role '{role_name}'. Valid roles: {valid}")

    return RoleResponse(role=role_name, statements=statements_to_dict(grants))


@router.get(
    "/permissions/statements",
    response_model=List[StatementResponse],
    operation_id="listStatements",
)
async def list_statements(
    identity: Identity = Depends(get_current_identity),
) -> List[StatementResponse]:
    """List every resource type with the actions it supports."""
    return [
        StatementResponse(resource_type=resource_type, actions=actions)
        for resource_type, actions in statements_to_dict(STATEMENTS).items()
    ]
