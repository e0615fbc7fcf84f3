"""
Tests for the Prisma-backed organization store.
"""

from types import SimpleNamespace

import pytest

from property_authz.domains.organizations.repository import PrismaOrganizationStore
from property_authz.shared.permissions.exceptions import StoreUnavailableError


class TestOwnerIdOf:
    """Test PrismaOrganizationStore.owner_id_of."""

    @pytest.mark.asyncio
    async def test_returns_agent_owner(self, mock_prisma):
        mock_prisma.organization.find_unique.return_value = SimpleNamespace(
            id="org-123", agentOwnerId="owner-profile-1"
        )

        store = PrismaOrganizationStore(mock_prisma)

        assert await store.owner_id_of("org-123") == "owner-profile-1"
        mock_prisma.organization.find_unique.assert_awaited_once_with(
            where={"id": "org-123"}
        )

    @pytest.mark.asyncio
    async def test_organization_without_owner(self, mock_prisma):
        mock_prisma.organization.find_unique.return_value = SimpleNamespace(
            id="org-123", agentOwnerId=None
        )

        store = PrismaOrganizationStore(mock_prisma)

        assert await store.owner_id_of("org-123") is None

    @pytest.mark.asyncio
    async def test_missing_organization(self, mock_prisma):
        mock_prisma.organization.find_unique.return_value = None

        store = PrismaOrganizationStore(mock_prisma)

        assert await store.owner_id_of("org-404") is None

    @pytest.mark.asyncio
    async def test_database_error_raises_store_unavailable(self, mock_prisma):
        mock_prisma.organization.find_unique.side_effect = RuntimeError("pool closed")

        store = PrismaOrganizationStore(mock_prisma)

        with pytest.raises(StoreUnavailableError):
            await store.owner_id_of("org-123")
