import logging
from typing import TYPE_CHECKING, Any, Optional

from property_authz.shared.permissions.exceptions import StoreUnavailableError
from property_authz.shared.permissions.types import Membership, MemberStatus

if TYPE_CHECKING:
    from prisma import Prisma

logger = logging.getLogger(__name__)


def enum_value(value: Any) -> Any:
    """Unwrap a Prisma enum member to its stored string value."""
    return getattr(value, "value", value)


class PrismaMembershipStore:
    """Membership lookups against the `OrganizationMember` table."""

    def __init__(self, db: "Prisma"):
        self.db = db

    async def find_membership(
        self, user_id: str, organization_id: str
    ) -> Optional[Membership]:
        try:
            member = await self.db.organizationmember.find_first(
                where={"profileId": user_id, "organizationId": organization_id}
            )
        except Exception as e:
            logger.error(
                f"Membership lookup failed for {user_id} in {organization_id}: {e}",
                exc_info=True,
            )
            raise StoreUnavailableError("Membership store unavailable") from e

        if not member:
            return None

        try:
            status = MemberStatus(enum_value(member.status))
        except ValueError:
            logger.warning(
                f"Membership {member.id} has unrecognised status {member.status!r}; "
                f"treating as no membership"
            )
            return None

        return Membership(
            user_id=member.profileId,
            organization_id=member.organizationId,
            role=enum_value(member.role),
            status=status,
            team_id=member.teamId,
        )
