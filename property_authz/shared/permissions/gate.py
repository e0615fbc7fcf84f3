"""
Authorization gate: the per-request entry point for permission checks.

Build one gate per request. It remembers the caller's membership and the
organization owner for the lifetime of that request only.
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Iterable, Optional

from .exceptions import AuthorizationDenied, ResourceNotFoundError
from .services import evaluate
from .statements import STATEMENTS, Action, ResourceType, is_valid_action
from .stores import OrganizationStore
from .types import (
    Decision,
    DecisionReason,
    EvaluationContext,
    GlobalRole,
    ResourceScope,
    Subject,
)

if TYPE_CHECKING:
    from property_authz.domains.memberships.resolver import MembershipResolver
    from property_authz.domains.resources.scope_index import ResourceScopeIndex

audit_logger = logging.getLogger("property_authz.audit")


class AuthorizationGate:
    """
    Answers "can this user do this here" for one request.

    Denials carry their reason. Store failures raise `StoreUnavailableError`
    from every method, including `can`; they are never reported as allowed.
    """

    def __init__(
        self,
        memberships: "MembershipResolver",
        scopes: "ResourceScopeIndex",
        organizations: OrganizationStore,
        audit_allowed: bool = False,
    ):
        self.memberships = memberships
        self.scopes = scopes
        self.organizations = organizations
        self.audit_allowed = audit_allowed
        self._subjects: dict[tuple[str, str], Subject] = {}

    async def decide(
        self,
        context: EvaluationContext,
        resource_type: ResourceType | str,
        action: Action | str,
        resource_id: Optional[str] = None,
    ) -> Decision:
        """
        Evaluate a permission check and return the full decision.

        Without a resource ID the check is made against the active
        organization itself (e.g. "may this user create properties here").

        Args:
            context: The caller's evaluation context
            resource_type: Type of the target resource
            action: Requested action
            resource_id: Optional ID of a specific resource

        Returns:
            Decision with allow/deny and reason

        Raises:
            ValueError: If (resource_type, action) is not a known statement
            StoreUnavailableError: If a backing store cannot be read
        """
        resource, requested = self._statement(resource_type, action)

        try:
            scope = await self._scope(context, resource, resource_id)
        except ResourceNotFoundError:
            decision = Decision.denied(DecisionReason.resource_not_found)
            self._audit(context, resource, requested, resource_id, decision)
            return decision

        subject = await self._subject(context, scope)
        decision = evaluate(subject, requested, resource, scope)
        self._audit(context, resource, requested, resource_id, decision)
        return decision

    async def can(
        self,
        context: EvaluationContext,
        resource_type: ResourceType | str,
        action: Action | str,
        resource_id: Optional[str] = None,
    ) -> bool:
        """Non-raising check for UI gating. Store failures still raise."""
        decision = await self.decide(context, resource_type, action, resource_id)
        return decision.allow

    async def assert_can(
        self,
        context: EvaluationContext,
        resource_type: ResourceType | str,
        action: Action | str,
        resource_id: Optional[str] = None,
    ) -> None:
        """
        Raise unless the caller may perform the action.

        Raises:
            AuthorizationDenied: With the machine-readable reason
            StoreUnavailableError: If a backing store cannot be read
        """
        decision = await self.decide(context, resource_type, action, resource_id)
        if not decision.allow:
            raise AuthorizationDenied(
                reason=decision.reason,
                resource_type=ResourceType(resource_type).value,
                action=Action(action).value,
                resource_id=resource_id,
            )

    async def filter_allowed(
        self,
        context: EvaluationContext,
        resource_type: ResourceType | str,
        action: Action | str,
        resource_ids: Iterable[str],
    ) -> list[str]:
        """
        Keep only the resource IDs the caller may act on, in input order.

        Args:
            context: The caller's evaluation context
            resource_type: Type shared by all the resources
            action: Requested action
            resource_ids: Candidate resource IDs

        Returns:
            The allowed subset of resource_ids

        Raises:
            ValueError: If (resource_type, action) is not a known statement
            StoreUnavailableError: If a backing store cannot be read; the
                remaining checks are cancelled
        """
        ids = list(resource_ids)
        if not ids:
            return []
        self._statement(resource_type, action)

        # Resolve the caller once so the concurrent checks share the cache
        await self._subject(
            context, ResourceScope(organization_id=context.active_organization_id)
        )
        try:
            async with asyncio.TaskGroup() as group:
                tasks = [
                    group.create_task(self.decide(context, resource_type, action, rid))
                    for rid in ids
                ]
        except ExceptionGroup as errors:
            raise errors.exceptions[0]

        return [rid for rid, task in zip(ids, tasks) if task.result().allow]

    async def capabilities(
        self, context: EvaluationContext
    ) -> dict[ResourceType, frozenset[Action]]:
        """
        Organization-wide statements the caller holds, for client-side gating.

        Resource-specific bypasses (ownership, team tags) are not reflected;
        the server still checks each resource.
        """
        scope = ResourceScope(organization_id=context.active_organization_id)
        subject = await self._subject(context, scope)

        granted: dict[ResourceType, frozenset[Action]] = {}
        for resource, actions in STATEMENTS.items():
            allowed = frozenset(
                action
                for action in actions
                if evaluate(subject, action, resource, scope).allow
            )
            if allowed:
                granted[resource] = allowed
        return granted

    def _statement(
        self, resource_type: ResourceType | str, action: Action | str
    ) -> tuple[ResourceType, Action]:
        if not is_valid_action(resource_type, action):
            resource_name = getattr(resource_type, "value", resource_type)
            action_name = getattr(action, "value", action)
            raise ValueError(f"Unknown statement {resource_name}:{action_name}")
        return ResourceType(resource_type), Action(action)

    async def _scope(
        self,
        context: EvaluationContext,
        resource_type: ResourceType,
        resource_id: Optional[str],
    ) -> ResourceScope:
        if resource_id is None:
            return ResourceScope(organization_id=context.active_organization_id)
        return await self.scopes.scope_of(resource_type, resource_id)

    async def _subject(
        self, context: EvaluationContext, scope: ResourceScope
    ) -> Subject:
        identity = context.identity
        organization_id = context.active_organization_id

        # Neither the superuser nor a cross-tenant request needs a membership read
        if (
            identity.global_role == GlobalRole.admin
            or scope.organization_id != organization_id
        ):
            return Subject(
                user_id=identity.user_id,
                global_role=identity.global_role,
                active_organization_id=organization_id,
            )

        key = (identity.user_id, organization_id)
        cached = self._subjects.get(key)
        if cached is not None and cached.global_role == identity.global_role:
            return cached

        membership = await self.memberships.resolve(identity.user_id, organization_id)
        owner_id = await self.organizations.owner_id_of(organization_id)
        subject = Subject(
            user_id=identity.user_id,
            global_role=identity.global_role,
            active_organization_id=organization_id,
            membership=membership,
            organization_owner_id=owner_id,
        )
        self._subjects[key] = subject
        return subject

    def _audit(
        self,
        context: EvaluationContext,
        resource_type: ResourceType,
        action: Action,
        resource_id: Optional[str],
        decision: Decision,
    ) -> None:
        if decision.allow and not self.audit_allowed:
            return

        fields = {
            "user_id": context.user_id,
            "organization_id": context.active_organization_id,
            "team_id": context.active_team_id,
            "resource_type": resource_type.value,
            "resource_id": resource_id,
            "action": action.value,
            "allow": decision.allow,
            "reason": decision.reason.value,
        }
        if decision.allow:
            audit_logger.debug(
                f"Allowed {action.value} on {resource_type.value} "
                f"({decision.reason.value})",
                extra=fields,
            )
        else:
            audit_logger.info(
                f"Denied {action.value} on {resource_type.value} "
                f"({decision.reason.value})",
                extra=fields,
            )
