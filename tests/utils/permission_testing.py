"""
Dynamic permission testing utilities for sustainable test maintenance.

These utilities derive expected statements from the live STATEMENTS registry
and ROLE_GRANTS catalog, so tests stay correct when statements are added.
"""

from typing import Set, Tuple

from property_authz.shared.permissions.models import ROLE_GRANTS, Role
from property_authz.shared.permissions.statements import (
    READ_CLASS_ACTIONS,
    STATEMENTS,
    Action,
    ResourceType,
)

Statement = Tuple[ResourceType, Action]


class PermissionTestHelpers:
    """Helper class for dynamic statement testing."""

    @staticmethod
    def get_all_statements() -> Set[Statement]:
        """Get every (resource type, action) pair in the registry."""
        return {
            (resource, action)
            for resource, actions in STATEMENTS.items()
            for action in actions
        }

    @staticmethod
    def get_role_statements(role: Role) -> Set[Statement]:
        """Get the statements granted to a role, as pairs."""
        return {
            (resource, action)
            for resource, actions in ROLE_GRANTS[role].items()
            for action in actions
        }

    @staticmethod
    def get_read_class_statements() -> Set[Statement]:
        """Get every statement whose action is read, list or contact."""
        return {
            statement
            for statement in PermissionTestHelpers.get_all_statements()
            if statement[1] in READ_CLASS_ACTIONS
        }

    @staticmethod
    def get_destructive_statements() -> Set[Statement]:
        """
        Get statements that are considered destructive/high-risk.

        These should typically be restricted to staff roles.
        """
        destructive_actions = {
            Action.DELETE,
            Action.REMOVE,
            Action.TERMINATE,
            Action.MANAGE_SUBSCRIPTION,
        }
        return {
            statement
            for statement in PermissionTestHelpers.get_all_statements()
            if statement[1] in destructive_actions
        }

    @staticmethod
    def assert_role_has_exactly_statements(
        role: Role, expected_statements: Set[Statement]
    ) -> None:
        """
        Assert that a role has exactly the expected statements.

        Provides detailed error messages about missing or unexpected statements.
        """
        actual = PermissionTestHelpers.get_role_statements(role)
        missing = expected_statements - actual
        unexpected = actual - expected_statements

        error_parts = []
        if missing:
            names = sorted(f"{r.value}:{a.value}" for r, a in missing)
            error_parts.append(f"Missing statements: {names}")
        if unexpected:
            names = sorted(f"{r.value}:{a.value}" for r, a in unexpected)
            error_parts.append(f"Unexpected statements: {names}")

        if error_parts:
            raise AssertionError(
                f"Role {role.value} statement mismatch. " + "; ".join(error_parts)
            )
