"""
Statement registry: every resource type and the actions it supports.

A statement is a single (resource type, action) capability. The table below is
the only place statements are defined; role grants are validated against it
when the role catalog is built.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ResourceType(str, Enum):
    """Resource types that can be the target of an authorization check."""

    PROPERTY = "property"
    UNIT = "unit"
    TENANT = "tenant"
    LEASE = "lease"
    PAYMENT = "payment"
    MAINTENANCE = "maintenance"
    REPORT = "report"
    SETTINGS = "settings"
    DOCUMENT = "document"
    TEAM = "team"
    MEMBER = "member"
    ORGANIZATION = "organization"
    INVITATION = "invitation"


class Action(str, Enum):
    """Actions a statement can name. Not every action applies to every type."""

    CREATE = "create"
    READ = "read"
    LIST = "list"
    UPDATE = "update"
    DELETE = "delete"
    ASSIGN = "assign"
    ASSIGN_CARETAKER = "assign_caretaker"
    CONTACT = "contact"
    APPROVE = "approve"
    TERMINATE = "terminate"
    RENEW = "renew"
    RECORD = "record"
    PROCESS = "process"
    RESOLVE = "resolve"
    COMPLETE = "complete"
    GENERATE = "generate"
    EXPORT = "export"
    UPLOAD = "upload"
    ASSIGN_MEMBERS = "assign_members"
    ASSIGN_PROPERTIES = "assign_properties"
    INVITE = "invite"
    UPDATE_ROLE = "update_role"
    REMOVE = "remove"
    MANAGE_SUBSCRIPTION = "manage_subscription"
    CANCEL = "cancel"
    RESEND = "resend"


# Actions that ownership/caretaker assignment grants without a role statement
READ_CLASS_ACTIONS: frozenset[Action] = frozenset(
    {Action.READ, Action.LIST, Action.CONTACT}
)


_STATEMENT_TABLE: dict[ResourceType, tuple[Action, ...]] = {
    ResourceType.PROPERTY: (
        Action.CREATE,
        Action.READ,
        Action.LIST,
        Action.UPDATE,
        Action.DELETE,
        Action.ASSIGN,
        Action.ASSIGN_CARETAKER,
    ),
    ResourceType.UNIT: (
        Action.CREATE,
        Action.READ,
        Action.LIST,
        Action.UPDATE,
        Action.DELETE,
    ),
    ResourceType.TENANT: (
        Action.CREATE,
        Action.READ,
        Action.LIST,
        Action.UPDATE,
        Action.DELETE,
        Action.CONTACT,
        Action.APPROVE,
    ),
    ResourceType.LEASE: (
        Action.CREATE,
        Action.READ,
        Action.LIST,
        Action.UPDATE,
        Action.DELETE,
        Action.TERMINATE,
        Action.RENEW,
    ),
    ResourceType.PAYMENT: (
        Action.READ,
        Action.LIST,
        Action.RECORD,
        Action.PROCESS,
        Action.APPROVE,
    ),
    ResourceType.MAINTENANCE: (
        Action.CREATE,
        Action.READ,
        Action.LIST,
        Action.UPDATE,
        Action.ASSIGN,
        Action.RESOLVE,
        Action.COMPLETE,
    ),
    ResourceType.REPORT: (Action.READ, Action.GENERATE, Action.EXPORT),
    ResourceType.SETTINGS: (Action.READ, Action.UPDATE),
    ResourceType.DOCUMENT: (Action.READ, Action.UPLOAD, Action.DELETE),
    ResourceType.TEAM: (
        Action.CREATE,
        Action.READ,
        Action.UPDATE,
        Action.DELETE,
        Action.ASSIGN_MEMBERS,
        Action.ASSIGN_PROPERTIES,
    ),
    ResourceType.MEMBER: (
        Action.READ,
        Action.INVITE,
        Action.UPDATE_ROLE,
        Action.REMOVE,
    ),
    ResourceType.ORGANIZATION: (
        Action.READ,
        Action.UPDATE,
        Action.DELETE,
        Action.MANAGE_SUBSCRIPTION,
    ),
    ResourceType.INVITATION: (
        Action.CREATE,
        Action.READ,
        Action.CANCEL,
        Action.RESEND,
    ),
}

STATEMENTS: Mapping[ResourceType, frozenset[Action]] = MappingProxyType(
    {
        resource_type: frozenset(actions)
        for resource_type, actions in _STATEMENT_TABLE.items()
    }
)


def _coerce_resource_type(resource_type: ResourceType | str) -> ResourceType | None:
    if isinstance(resource_type, ResourceType):
        return resource_type
    try:
        return ResourceType(resource_type)
    except ValueError:
        return None


def _coerce_action(action: Action | str) -> Action | None:
    if isinstance(action, Action):
        return action
    try:
        return Action(action)
    except ValueError:
        return None


def actions_for(resource_type: ResourceType | str) -> frozenset[Action]:
    """
    Get the actions defined for a resource type.

    Args:
        resource_type: Resource type enum member or its string value

    Returns:
        Frozen set of actions; empty for an unknown resource type
    """
    parsed = _coerce_resource_type(resource_type)
    if parsed is None:
        return frozenset()
    return STATEMENTS.get(parsed, frozenset())


def is_valid_action(resource_type: ResourceType | str, action: Action | str) -> bool:
    """
    Check whether (resource_type, action) is a statement in the registry.

    Args:
        resource_type: Resource type enum member or its string value
        action: Action enum member or its string value

    Returns:
        True if the statement exists, False otherwise
    """
    parsed_action = _coerce_action(action)
    if parsed_action is None:
        return False
    return parsed_action in actions_for(resource_type)


def is_read_class(action: Action | str) -> bool:
    """Check whether an action belongs to the read/contact class."""
    return _coerce_action(action) in READ_CLASS_ACTIONS
