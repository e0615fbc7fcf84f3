import logging
from typing import Optional

from property_authz.shared.permissions.stores import MembershipStore
from property_authz.shared.permissions.types import Membership

logger = logging.getLogger(__name__)


class MembershipResolver:
    """Resolves a user's membership in an organization through a store."""

    def __init__(self, store: MembershipStore):
        self.store = store

    async def resolve(
        self, user_id: str, organization_id: str
    ) -> Optional[Membership]:
        """
        Look up the membership binding a user to an organization.

        The membership is returned with whatever status it currently has;
        callers decide what a non-active status means.

        Args:
            user_id: The user's profile ID
            organization_id: The organization ID

        Returns:
            The membership, or None when the user has never been a member

        Raises:
            StoreUnavailableError: If the membership store cannot be read
        """
        if not user_id or not organization_id:
            return None

        membership = await self.store.find_membership(user_id, organization_id)
        if membership is None:
            logger.debug(f"No membership for user {user_id} in {organization_id}")
            return None

        # A row for another pair means the store query is wrong; never trust it
        if (
            membership.user_id != user_id
            or membership.organization_id != organization_id
        ):
            logger.warning(
                f"Membership store returned a record for "
                f"{membership.user_id}/{membership.organization_id} when asked "
                f"for {user_id}/{organization_id}"
            )
            return None

        return membership
