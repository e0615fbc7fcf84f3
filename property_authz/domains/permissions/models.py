# property_authz/domains/permissions/models.py
from typing import Mapping, Optional

from pydantic import BaseModel

from property_authz.shared.permissions.statements import Action, ResourceType


def statements_to_dict(
    grants: Mapping[ResourceType, frozenset[Action]],
) -> dict[str, list[str]]:
    """Flatten a grant mapping into sorted plain strings for JSON output."""
    return {
        resource.value: sorted(action.value for action in actions)
        for resource, actions in sorted(grants.items(), key=lambda g: g[0].value)
    }


class StatementResponse(BaseModel):
    resource_type: str
    actions: list[str]


class RoleResponse(BaseModel):
    role: str
    statements: dict[str, list[str]]


class CapabilitiesResponse(BaseModel):
    organization_id: str
    team_id: Optional[str]
    user_id: str
    permissions: dict[str, list[str]]
