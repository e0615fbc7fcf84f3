"""
Tests for MembershipResolver.
"""

import pytest

from property_authz.domains.memberships.resolver import MembershipResolver
from property_authz.shared.permissions.exceptions import StoreUnavailableError
from property_authz.shared.permissions.models import Role
from property_authz.shared.permissions.types import MemberStatus


class TestResolve:
    """Test MembershipResolver.resolve."""

    @pytest.mark.asyncio
    async def test_returns_membership(
        self,
        mock_membership_store,
        membership_records,
        make_membership,
        test_profile_id,
        test_organization_id,
    ):
        membership = make_membership(role=Role.caretaker, team_id="team-1")
        membership_records[(test_profile_id, test_organization_id)] = membership

        resolver = MembershipResolver(mock_membership_store)
        result = await resolver.resolve(test_profile_id, test_organization_id)

        assert result == membership
        mock_membership_store.find_membership.assert_awaited_once_with(
            test_profile_id, test_organization_id
        )

    @pytest.mark.asyncio
    async def test_returns_non_active_status_unchanged(
        self,
        mock_membership_store,
        membership_records,
        make_membership,
        test_profile_id,
        test_organization_id,
    ):
        """Test that status is left for the evaluator to judge."""
        membership_records[(test_profile_id, test_organization_id)] = (
            make_membership(status=MemberStatus.removed)
        )

        resolver = MembershipResolver(mock_membership_store)
        result = await resolver.resolve(test_profile_id, test_organization_id)

        assert result.status == MemberStatus.removed

    @pytest.mark.asyncio
    async def test_no_membership(
        self, mock_membership_store, test_profile_id, test_organization_id
    ):
        resolver = MembershipResolver(mock_membership_store)

        assert await resolver.resolve(test_profile_id, test_organization_id) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("user_id,organization_id", [("", "org"), ("user", "")])
    async def test_empty_ids_skip_the_store(
        self, mock_membership_store, user_id, organization_id
    ):
        resolver = MembershipResolver(mock_membership_store)

        assert await resolver.resolve(user_id, organization_id) is None
        mock_membership_store.find_membership.assert_not_called()

    @pytest.mark.asyncio
    async def test_mismatched_record_is_discarded(
        self,
        mock_membership_store,
        make_membership,
        test_profile_id,
        test_organization_id,
        other_organization_id,
    ):
        """Test that a record for another organization is never trusted."""
        mock_membership_store.find_membership.side_effect = None
        mock_membership_store.find_membership.return_value = make_membership(
            organization_id=other_organization_id
        )

        resolver = MembershipResolver(mock_membership_store)

        assert await resolver.resolve(test_profile_id, test_organization_id) is None

    @pytest.mark.asyncio
    async def test_store_failure_propagates(
        self, mock_membership_store, test_profile_id, test_organization_id
    ):
        mock_membership_store.find_membership.side_effect = StoreUnavailableError(
            "down"
        )

        resolver = MembershipResolver(mock_membership_store)

        with pytest.raises(StoreUnavailableError):
            await resolver.resolve(test_profile_id, test_organization_id)
