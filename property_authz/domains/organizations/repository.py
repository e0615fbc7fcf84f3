import logging
from typing import TYPE_CHECKING, Optional

from property_authz.shared.permissions.exceptions import StoreUnavailableError

if TYPE_CHECKING:
    from prisma import Prisma

logger = logging.getLogger(__name__)


class PrismaOrganizationStore:
    """Organization ownership lookups against the `Organization` table."""

    def __init__(self, db: "Prisma"):
        self.db = db

    async def owner_id_of(self, organization_id: str) -> Optional[str]:
        """
        Get the agent owner of an organization.

        Returns:
            The owning user's profile ID, or None if the organization does not
            exist or has no owner recorded

        Raises:
            StoreUnavailableError: If the organization table cannot be read
        """
        try:
            organization = await self.db.organization.find_unique(
                where={"id": organization_id}
            )
        except Exception as e:
            logger.error(
                f"Organization lookup failed for {organization_id}: {e}",
                exc_info=True,
            )
            raise StoreUnavailableError("Organization store unavailable") from e

        if not organization:
            return None
        return organization.agentOwnerId
