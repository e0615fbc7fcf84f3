"""
Global pytest configuration and fixtures for the authorization test suite.
"""

import os
from typing import Any, Callable, Dict, Optional

import jwt
import pytest

# Set test environment variables before settings are imported
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only-32-chars"

# Import fixtures from fixture modules
from tests.fixtures.authorization_fixtures import *  # noqa: E402, F403, F401
from tests.fixtures.store_fixtures import *  # noqa: E402, F403, F401


@pytest.fixture
def test_jwt_secret() -> str:
    """JWT secret for generating test tokens."""
    return "test-secret-key-for-testing-only-32-chars"


@pytest.fixture
def valid_jwt_payload(test_profile_id: str) -> Dict[str, Any]:
    """Valid JWT payload for testing."""
    return {
        "sub": test_profile_id,
        "email": "agent@example.com",
        "aud": "authenticated",
        "iss": "supabase",
    }


@pytest.fixture
def valid_jwt_token(test_jwt_secret: str, valid_jwt_payload: Dict[str, Any]) -> str:
    """Generate a valid JWT token for testing."""
    return jwt.encode(valid_jwt_payload, test_jwt_secret, algorithm="HS256")


@pytest.fixture
def invalid_jwt_token() -> str:
    """Generate a JWT token signed with the wrong secret."""
    return jwt.encode({"sub": "someone"}, "wrong-secret", algorithm="HS256")


@pytest.fixture
def auth_headers(valid_jwt_token: str) -> Dict[str, str]:
    """Generate authentication headers with valid JWT token."""
    return {"Authorization": f"Bearer {valid_jwt_token}"}


@pytest.fixture
def make_auth_headers(test_jwt_secret: str) -> Callable[..., Dict[str, str]]:
    """Factory for bearer headers for any user, optionally a global admin."""

    def _make(user_id: str, global_role: Optional[str] = None) -> Dict[str, str]:
        payload: Dict[str, Any] = {"sub": user_id, "email": f"{user_id}@example.com"}
        if global_role:
            payload["app_metadata"] = {"role": global_role}
        token = jwt.encode(payload, test_jwt_secret, algorithm="HS256")
        return {"Authorization": f"Bearer {token}"}

    return _make


# Test data fixtures for consistent test scenarios
@pytest.fixture
def test_organization_id() -> str:
    """Standard test organization ID."""
    return "42f929b1-8fdb-45b1-a7cf-34fae2314561"


@pytest.fixture
def other_organization_id() -> str:
    """A second organization, used for tenant isolation checks."""
    return "9d1c7a52-0b7e-4f4e-8c55-2f0a9d3b6e10"


@pytest.fixture
def test_profile_id() -> str:
    """Standard test profile ID."""
    return "test-profile-id-123"


@pytest.fixture
def test_team_id() -> str:
    """Team the standard test member belongs to."""
    return "team-north-001"


@pytest.fixture
def other_team_id() -> str:
    """A different team in the same organization."""
    return "team-south-002"
