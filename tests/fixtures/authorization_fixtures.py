"""
Test fixtures and factories for authorization value types.
"""

from typing import Callable, Optional

import pytest

from property_authz.shared.permissions.models import Role
from property_authz.shared.permissions.types import (
    EvaluationContext,
    GlobalRole,
    Identity,
    Membership,
    MemberStatus,
    ResourceScope,
    Subject,
)

AGENT_OWNER_PROFILE_ID = "agent-owner-profile-001"


@pytest.fixture
def agent_owner_profile_id() -> str:
    """Profile ID recorded as the test organization's agent owner."""
    return AGENT_OWNER_PROFILE_ID


@pytest.fixture
def make_membership(
    test_profile_id: str, test_organization_id: str
) -> Callable[..., Membership]:
    """Factory for memberships in the test organization."""

    def _make(
        role: Role | str = Role.agent,
        user_id: Optional[str] = None,
        organization_id: Optional[str] = None,
        status: MemberStatus = MemberStatus.active,
        team_id: Optional[str] = None,
    ) -> Membership:
        return Membership(
            user_id=user_id or test_profile_id,
            organization_id=organization_id or test_organization_id,
            role=role.value if isinstance(role, Role) else role,
            status=status,
            team_id=team_id,
        )

    return _make


@pytest.fixture
def make_context(
    test_profile_id: str, test_organization_id: str
) -> Callable[..., EvaluationContext]:
    """Factory for evaluation contexts."""

    def _make(
        user_id: Optional[str] = None,
        organization_id: Optional[str] = None,
        team_id: Optional[str] = None,
        global_role: GlobalRole = GlobalRole.user,
    ) -> EvaluationContext:
        return EvaluationContext(
            identity=Identity(
                user_id=user_id or test_profile_id,
                email="member@example.com",
                global_role=global_role,
            ),
            active_organization_id=organization_id or test_organization_id,
            active_team_id=team_id,
        )

    return _make


@pytest.fixture
def make_subject(
    test_profile_id: str, test_organization_id: str, agent_owner_profile_id: str
) -> Callable[..., Subject]:
    """Factory for evaluator subjects in the test organization."""

    def _make(
        membership: Optional[Membership] = None,
        user_id: Optional[str] = None,
        global_role: GlobalRole = GlobalRole.user,
        organization_id: Optional[str] = None,
        organization_owner_id: Optional[str] = agent_owner_profile_id,
    ) -> Subject:
        return Subject(
            user_id=user_id or test_profile_id,
            global_role=global_role,
            active_organization_id=organization_id or test_organization_id,
            membership=membership,
            organization_owner_id=organization_owner_id,
        )

    return _make


@pytest.fixture
def org_scope(test_organization_id: str) -> ResourceScope:
    """Untagged scope in the test organization."""
    return ResourceScope(organization_id=test_organization_id)


@pytest.fixture
def team_property_scope(test_organization_id: str, test_team_id: str) -> ResourceScope:
    """Property scope tagged with the test member's team."""
    return ResourceScope(
        organization_id=test_organization_id,
        team_id=test_team_id,
        owner_id="landlord-profile-001",
        caretaker_id="caretaker-profile-001",
    )


@pytest.fixture
def other_team_property_scope(
    test_organization_id: str, other_team_id: str
) -> ResourceScope:
    """Property scope tagged with a different team."""
    return ResourceScope(
        organization_id=test_organization_id,
        team_id=other_team_id,
        owner_id="landlord-profile-002",
        caretaker_id="caretaker-profile-002",
    )
