"""
Collaborator interfaces the authorization core reads from.

Implementations must raise `StoreUnavailableError` when the backing store
cannot be read, and return None (never raise) for a missing record.
"""

from typing import NamedTuple, Optional, Protocol

from .statements import ResourceType
from .types import Membership, ScopeRecord


class MembershipStore(Protocol):
    async def find_membership(
        self, user_id: str, organization_id: str
    ) -> Optional[Membership]:
        """Return the (user, organization) membership with its status, if any."""
        ...


class OrganizationStore(Protocol):
    async def owner_id_of(self, organization_id: str) -> Optional[str]:
        """Return the organization's owning user id, or None if it does not exist."""
        ...


class ResourceScopeStore(Protocol):
    async def scope_of(
        self, resource_type: ResourceType, resource_id: str
    ) -> Optional[ScopeRecord]:
        """Return the scope tags stored on a resource row, or None if missing."""
        ...


class AuthorizationStores(NamedTuple):
    """The three collaborators a gate is built from."""

    memberships: MembershipStore
    organizations: OrganizationStore
    scopes: ResourceScopeStore
