"""
Value types passed through the authorization core.

All models are frozen: an evaluation never mutates its inputs.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GlobalRole(str, Enum):
    """Platform-wide role tag carried on the user, independent of tenants."""

    admin = "admin"
    user = "user"


class MemberStatus(str, Enum):
    invited = "invited"
    active = "active"
    suspended = "suspended"
    removed = "removed"


class DecisionReason(str, Enum):
    """Machine-readable reason attached to every decision."""

    wrong_tenant = "wrong_tenant"
    admin_override = "admin_override"
    no_membership = "no_membership"
    suspended_membership = "suspended_membership"
    org_owner = "org_owner"
    resource_owner = "resource_owner"
    outside_team = "outside_team"
    role_grant = "role_grant"
    insufficient_role = "insufficient_role"
    unknown_role = "unknown_role"
    resource_not_found = "resource_not_found"


class Membership(BaseModel):
    """Binding of a user to an organization."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    organization_id: str
    role: str
    status: MemberStatus
    team_id: Optional[str] = None


class ResourceScope(BaseModel):
    """Tenant, team and ownership tags of a single resource."""

    model_config = ConfigDict(frozen=True)

    organization_id: str
    team_id: Optional[str] = None
    owner_id: Optional[str] = None
    caretaker_id: Optional[str] = None


class ScopeRecord(ResourceScope):
    """Scope as stored on the row itself, before climbing to a parent property."""

    parent_property_id: Optional[str] = None


class Identity(BaseModel):
    """Authenticated user, as established by the transport layer."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    email: Optional[str] = None
    global_role: GlobalRole = GlobalRole.user


class EvaluationContext(BaseModel):
    """Per-request context: who is asking, and inside which organization/team."""

    model_config = ConfigDict(frozen=True)

    identity: Identity
    active_organization_id: str
    active_team_id: Optional[str] = None

    @property
    def user_id(self) -> str:
        return self.identity.user_id


class Subject(BaseModel):
    """Everything the evaluator needs to know about the caller."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    global_role: GlobalRole = GlobalRole.user
    active_organization_id: str
    membership: Optional[Membership] = None
    organization_owner_id: Optional[str] = None


class Decision(BaseModel):
    model_config = ConfigDict(frozen=True)

    allow: bool
    reason: DecisionReason = Field(description="Why the decision was reached")

    @classmethod
    def allowed(cls, reason: DecisionReason) -> "Decision":
        return cls(allow=True, reason=reason)

    @classmethod
    def denied(cls, reason: DecisionReason) -> "Decision":
        return cls(allow=False, reason=reason)
