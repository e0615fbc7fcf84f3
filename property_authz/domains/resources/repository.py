import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from property_authz.shared.permissions.exceptions import StoreUnavailableError
from property_authz.shared.permissions.statements import ResourceType
from property_authz.shared.permissions.types import ScopeRecord

if TYPE_CHECKING:
    from prisma import Prisma

logger = logging.getLogger(__name__)


def _property_scope(row: Any) -> ScopeRecord:
    return ScopeRecord(
        organization_id=row.organizationId,
        team_id=row.teamId,
        owner_id=row.ownerId,
        caretaker_id=row.caretakerId,
    )


def _property_child_scope(row: Any) -> ScopeRecord:
    return ScopeRecord(
        organization_id=row.organizationId,
        parent_property_id=row.propertyId,
    )


def _document_scope(row: Any) -> ScopeRecord:
    return ScopeRecord(
        organization_id=row.organizationId,
        parent_property_id=row.relatedPropertyId,
    )


def _team_scope(row: Any) -> ScopeRecord:
    return ScopeRecord(organization_id=row.organizationId, team_id=row.id)


def _member_scope(row: Any) -> ScopeRecord:
    # Members can always read their own membership record
    return ScopeRecord(
        organization_id=row.organizationId,
        team_id=row.teamId,
        owner_id=row.profileId,
    )


def _invitation_scope(row: Any) -> ScopeRecord:
    return ScopeRecord(organization_id=row.organizationId, team_id=row.teamId)


def _organization_scope(row: Any) -> ScopeRecord:
    return ScopeRecord(organization_id=row.id)


# Reports have no rows: report checks are organization-level and pass no id.
# Settings are addressed by their organization's id.
_LOOKUPS: dict[ResourceType, tuple[str, Callable[[Any], ScopeRecord]]] = {
    ResourceType.PROPERTY: ("property", _property_scope),
    ResourceType.UNIT: ("unit", _property_child_scope),
    ResourceType.TENANT: ("tenant", _property_child_scope),
    ResourceType.LEASE: ("lease", _property_child_scope),
    ResourceType.PAYMENT: ("payment", _property_child_scope),
    ResourceType.MAINTENANCE: ("maintenancerequest", _property_child_scope),
    ResourceType.DOCUMENT: ("document", _document_scope),
    ResourceType.TEAM: ("team", _team_scope),
    ResourceType.MEMBER: ("organizationmember", _member_scope),
    ResourceType.INVITATION: ("invitation", _invitation_scope),
    ResourceType.ORGANIZATION: ("organization", _organization_scope),
    ResourceType.SETTINGS: ("organization", _organization_scope),
}


class PrismaResourceScopeStore:
    """Reads the scope tags of resource rows through the Prisma client."""

    def __init__(self, db: "Prisma"):
        self.db = db

    async def scope_of(
        self, resource_type: ResourceType, resource_id: str
    ) -> Optional[ScopeRecord]:
        lookup = _LOOKUPS.get(resource_type)
        if lookup is None:
            return None

        model_name, to_scope = lookup
        try:
            row = await getattr(self.db, model_name).find_unique(
                where={"id": resource_id}
            )
        except Exception as e:
            logger.error(
                f"Scope lookup failed for {resource_type.value} {resource_id}: {e}",
                exc_info=True,
            )
            raise StoreUnavailableError("Resource scope store unavailable") from e

        if not row:
            return None
        return to_scope(row)
