from .models import Role, grants_for, parse_role
from .statements import Action, ResourceType, is_read_class
from .types import (
    Decision,
    DecisionReason,
    GlobalRole,
    MemberStatus,
    ResourceScope,
    Subject,
)

_SUSPENDED_STATUSES = frozenset({MemberStatus.suspended, MemberStatus.removed})


def has_permission(
    role: Role | str, resource_type: ResourceType | str, action: Action | str
) -> bool:
    """
    Check if a role grants a specific statement.

    Args:
        role: The organization role to check
        resource_type: The resource type of the statement
        action: The action of the statement

    Returns:
        True if the role grants the statement, False otherwise (including for
        unknown roles, resource types and actions)
    """
    parsed = parse_role(role)
    if parsed is None:
        return False
    try:
        resource = ResourceType(resource_type)
        granted_action = Action(action)
    except ValueError:
        return False
    return granted_action in grants_for(parsed).get(resource, frozenset())


def evaluate(
    subject: Subject,
    action: Action | str,
    resource_type: ResourceType | str,
    scope: ResourceScope,
) -> Decision:
    """
    Decide whether a subject may perform an action on a scoped resource.

    Checks run in a fixed order and the first conclusive one wins:
    tenant isolation, superuser, membership status, organization owner,
    resource ownership (read/contact actions only), team partition, and
    finally the role's statements.

    Args:
        subject: Caller with its resolved membership and organization owner
        action: Requested action
        resource_type: Type of the target resource
        scope: Tenant, team and ownership tags of the target

    Returns:
        Decision carrying allow/deny and the reason
    """
    if subject.active_organization_id != scope.organization_id:
        return Decision.denied(DecisionReason.wrong_tenant)

    if subject.global_role == GlobalRole.admin:
        return Decision.allowed(DecisionReason.admin_override)

    membership = subject.membership
    if membership is None or membership.organization_id != scope.organization_id:
        return Decision.denied(DecisionReason.no_membership)
    if membership.status in _SUSPENDED_STATUSES:
        return Decision.denied(DecisionReason.suspended_membership)
    if membership.status != MemberStatus.active:
        return Decision.denied(DecisionReason.no_membership)

    if (
        subject.organization_owner_id is not None
        and subject.user_id == subject.organization_owner_id
    ):
        return Decision.allowed(DecisionReason.org_owner)

    if is_read_class(action) and subject.user_id in (
        scope.owner_id,
        scope.caretaker_id,
    ):
        return Decision.allowed(DecisionReason.resource_owner)

    # Team assignment is a hard partition; untagged resources stay org-wide
    if (
        membership.team_id is not None
        and scope.team_id is not None
        and scope.team_id != membership.team_id
    ):
        return Decision.denied(DecisionReason.outside_team)

    if parse_role(membership.role) is None:
        return Decision.denied(DecisionReason.unknown_role)
    if has_permission(membership.role, resource_type, action):
        return Decision.allowed(DecisionReason.role_grant)
    return Decision.denied(DecisionReason.insufficient_role)
