"""
Resource scope index.

Every resource type has a scope resolver that turns the stored row into a
`ResourceScope`. Rows that hang off a property (units, tenants, leases,
payments, maintenance requests, documents) usually carry no team tag of their
own, so their resolver climbs to the parent property for it.
"""

import logging
from typing import Mapping, Optional

from property_authz.shared.permissions.exceptions import ResourceNotFoundError
from property_authz.shared.permissions.statements import ResourceType
from property_authz.shared.permissions.stores import ResourceScopeStore
from property_authz.shared.permissions.types import ResourceScope, ScopeRecord

logger = logging.getLogger(__name__)


class ScopeResolver:
    """Resolves the scope of one resource type from its stored record."""

    async def resolve(
        self, store: ResourceScopeStore, record: ScopeRecord
    ) -> ResourceScope:
        return ResourceScope(
            organization_id=record.organization_id,
            team_id=record.team_id,
            owner_id=record.owner_id,
            caretaker_id=record.caretaker_id,
        )


class PropertyChildScopeResolver(ScopeResolver):
    """
    Scope for resources that belong to a property.

    A record without a team tag takes the parent property's team when the parent
    is in the same organization. Owner and caretaker tags are never inherited:
    they only cover the property itself.
    """

    async def resolve(
        self, store: ResourceScopeStore, record: ScopeRecord
    ) -> ResourceScope:
        scope = await super().resolve(store, record)
        if record.parent_property_id is None:
            return scope

        parent = await store.scope_of(ResourceType.PROPERTY, record.parent_property_id)
        if parent is None:
            logger.debug(
                f"Parent property {record.parent_property_id} no longer exists; "
                f"using the record's own scope"
            )
            return scope

        if parent.organization_id != record.organization_id:
            logger.warning(
                f"Parent property {record.parent_property_id} belongs to "
                f"{parent.organization_id}, child belongs to "
                f"{record.organization_id}; not inheriting its scope"
            )
            return scope

        return ResourceScope(
            organization_id=record.organization_id,
            team_id=record.team_id or parent.team_id,
            owner_id=record.owner_id,
            caretaker_id=record.caretaker_id,
        )


_DIRECT = ScopeResolver()
_PROPERTY_CHILD = PropertyChildScopeResolver()

DEFAULT_SCOPE_RESOLVERS: Mapping[ResourceType, ScopeResolver] = {
    ResourceType.PROPERTY: _DIRECT,
    ResourceType.UNIT: _PROPERTY_CHILD,
    ResourceType.TENANT: _PROPERTY_CHILD,
    ResourceType.LEASE: _PROPERTY_CHILD,
    ResourceType.PAYMENT: _PROPERTY_CHILD,
    ResourceType.MAINTENANCE: _PROPERTY_CHILD,
    ResourceType.DOCUMENT: _PROPERTY_CHILD,
    ResourceType.REPORT: _DIRECT,
    ResourceType.SETTINGS: _DIRECT,
    ResourceType.TEAM: _DIRECT,
    ResourceType.MEMBER: _DIRECT,
    ResourceType.ORGANIZATION: _DIRECT,
    ResourceType.INVITATION: _DIRECT,
}


class ResourceScopeIndex:
    """Looks up the scope of any resource by type and id."""

    def __init__(
        self,
        store: ResourceScopeStore,
        resolvers: Optional[Mapping[ResourceType, ScopeResolver]] = None,
    ):
        self.store = store
        self.resolvers = resolvers or DEFAULT_SCOPE_RESOLVERS

    async def scope_of(
        self, resource_type: ResourceType | str, resource_id: str
    ) -> ResourceScope:
        """
        Resolve the organization, team and ownership tags of a resource.

        Args:
            resource_type: Type of the resource
            resource_id: ID of the resource

        Returns:
            The resource's scope

        Raises:
            ResourceNotFoundError: If the resource does not exist
            StoreUnavailableError: If the scope store cannot be read
        """
        resource = ResourceType(resource_type)
        resolver = self.resolvers.get(resource)
        if resolver is None:
            raise ResourceNotFoundError(resource.value, resource_id)

        record = await self.store.scope_of(resource, resource_id)
        if record is None:
            raise ResourceNotFoundError(resource.value, resource_id)

        return await resolver.resolve(self.store, record)
