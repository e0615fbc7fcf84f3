from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from .exceptions import RoleCatalogConfigurationError, UnknownRoleError
from .statements import STATEMENTS, Action, ResourceType

Grants = Mapping[ResourceType, frozenset[Action]]


class Role(str, Enum):
    """
    Organization roles a membership can carry.

    Values are stored verbatim on membership records.
    """

    agent_owner = "agent_owner"  # Runs the agency; every statement
    manager = "manager"  # Senior staff; no closing the org or removing people
    agent = "agent"  # Day-to-day staff
    property_owner = "property_owner"  # Landlord; read-only portfolio view
    caretaker = "caretaker"  # On-site maintenance and tenant contact
    tenant = "tenant"  # Tenant portal user


def _grant(
    statements: dict[ResourceType, set[Action]],
) -> dict[ResourceType, frozenset[Action]]:
    return {resource: frozenset(actions) for resource, actions in statements.items()}


def _union(*grants: Grants) -> dict[ResourceType, frozenset[Action]]:
    combined: dict[ResourceType, frozenset[Action]] = {}
    for grant in grants:
        for resource, actions in grant.items():
            combined[resource] = combined.get(resource, frozenset()) | actions
    return combined


def _subtract(base: Grants, removed: Grants) -> dict[ResourceType, frozenset[Action]]:
    remaining: dict[ResourceType, frozenset[Action]] = {}
    for resource, actions in base.items():
        left = actions - removed.get(resource, frozenset())
        if left:
            remaining[resource] = left
    return remaining


_EVERY_STATEMENT = dict(STATEMENTS)

_PORTFOLIO_READ = _grant(
    {
        ResourceType.PROPERTY: {Action.READ, Action.LIST},
        ResourceType.UNIT: {Action.READ, Action.LIST},
        ResourceType.TENANT: {Action.READ, Action.LIST},
        ResourceType.LEASE: {Action.READ, Action.LIST},
        ResourceType.MAINTENANCE: {Action.READ, Action.LIST},
        ResourceType.DOCUMENT: {Action.READ},
        ResourceType.SETTINGS: {Action.READ},
    }
)

_ROLE_DEFINITIONS: dict[Role, dict[ResourceType, frozenset[Action]]] = {
    Role.agent_owner: _EVERY_STATEMENT,
    Role.manager: _subtract(
        _EVERY_STATEMENT,
        _grant(
            {
                ResourceType.ORGANIZATION: {
                    Action.DELETE,
                    Action.MANAGE_SUBSCRIPTION,
                },
                ResourceType.MEMBER: {Action.REMOVE},
                ResourceType.TEAM: {Action.DELETE},
            }
        ),
    ),
    Role.agent: _union(
        _PORTFOLIO_READ,
        _grant(
            {
                ResourceType.PROPERTY: {Action.CREATE, Action.UPDATE},
                ResourceType.UNIT: {Action.CREATE, Action.UPDATE},
                ResourceType.TENANT: {
                    Action.CREATE,
                    Action.UPDATE,
                    Action.CONTACT,
                    Action.APPROVE,
                },
                ResourceType.LEASE: {Action.CREATE, Action.UPDATE, Action.RENEW},
                ResourceType.PAYMENT: {Action.READ, Action.LIST, Action.RECORD},
                ResourceType.MAINTENANCE: {
                    Action.CREATE,
                    Action.UPDATE,
                    Action.ASSIGN,
                    Action.RESOLVE,
                    Action.COMPLETE,
                },
                ResourceType.REPORT: {Action.READ, Action.GENERATE},
                ResourceType.DOCUMENT: {Action.UPLOAD},
                ResourceType.TEAM: {Action.READ},
                ResourceType.MEMBER: {Action.READ},
                ResourceType.ORGANIZATION: {Action.READ},
                ResourceType.INVITATION: {Action.READ},
            }
        ),
    ),
    Role.property_owner: _union(
        _PORTFOLIO_READ,
        _grant(
            {
                ResourceType.PAYMENT: {Action.READ, Action.LIST},
                ResourceType.MAINTENANCE: {Action.CREATE},
                ResourceType.REPORT: {Action.READ},
            }
        ),
    ),
    Role.caretaker: _union(
        _PORTFOLIO_READ,
        _grant(
            {
                ResourceType.TENANT: {Action.CONTACT},
                ResourceType.MAINTENANCE: {
                    Action.CREATE,
                    Action.UPDATE,
                    Action.RESOLVE,
                    Action.COMPLETE,
                },
            }
        ),
    ),
    Role.tenant: _grant(
        {
            ResourceType.LEASE: {Action.READ},
            ResourceType.PAYMENT: {Action.READ, Action.RECORD},
            ResourceType.MAINTENANCE: {Action.CREATE, Action.READ, Action.LIST},
            ResourceType.DOCUMENT: {Action.READ},
        }
    ),
}


def _validate(role: Role, grants: Grants) -> None:
    for resource, actions in grants.items():
        if resource not in STATEMENTS:
            raise RoleCatalogConfigurationError(
                f"Role {role.value} grants unknown resource type {resource!r}"
            )
        unknown = actions - STATEMENTS[resource]
        if unknown:
            names = ", ".join(sorted(action.value for action in unknown))
            raise RoleCatalogConfigurationError(
                f"Role {role.value} grants {resource.value} actions "
                f"missing from the statement registry: {names}"
            )


def build_role_catalog(
    definitions: Mapping[Role, Grants],
) -> Mapping[Role, Grants]:
    """
    Validate role definitions against the statement registry and freeze them.

    Args:
        definitions: Role to grant mapping

    Returns:
        Read-only mapping of role to read-only grants

    Raises:
        RoleCatalogConfigurationError: If a role is missing or grants a
            statement that is not in the registry
    """
    missing = set(Role) - set(definitions)
    if missing:
        names = ", ".join(sorted(role.value for role in missing))
        raise RoleCatalogConfigurationError(f"Roles without definitions: {names}")

    catalog: dict[Role, Grants] = {}
    for role, grants in definitions.items():
        _validate(role, grants)
        catalog[role] = MappingProxyType(
            {resource: frozenset(actions) for resource, actions in grants.items()}
        )
    return MappingProxyType(catalog)


ROLE_GRANTS: Mapping[Role, Grants] = build_role_catalog(_ROLE_DEFINITIONS)


def parse_role(role_name: Role | str) -> Optional[Role]:
    """Resolve a stored role name to a catalog role, or None if unknown."""
    if isinstance(role_name, Role):
        return role_name
    try:
        return Role(role_name)
    except ValueError:
        return None


def grants_for(role_name: Role | str) -> Grants:
    """
    Get the statements granted to a role.

    Args:
        role_name: Role enum member or stored role name

    Returns:
        Read-only mapping of resource type to granted actions

    Raises:
        UnknownRoleError: If the role is not in the catalog
    """
    role = parse_role(role_name)
    if role is None:
        raise UnknownRoleError(str(role_name))
    return ROLE_GRANTS[role]
