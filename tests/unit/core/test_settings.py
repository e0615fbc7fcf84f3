"""
Tests for application settings.
"""

from property_authz.core.settings import Settings


class TestSettings:
    """Test environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        for name in ("LOG_LEVEL", "LOG_FORMAT", "AUDIT_ALLOWED_DECISIONS"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.delenv("ADMIN_ROLE_CLAIM", raising=False)

        settings = Settings(_env_file=None)

        assert settings.ADMIN_ROLE_CLAIM == "role"
        assert settings.LOG_LEVEL == "INFO"
        assert settings.LOG_FORMAT == "json"
        assert settings.AUDIT_ALLOWED_DECISIONS is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("AUDIT_ALLOWED_DECISIONS", "true")
        monkeypatch.setenv("LOG_FORMAT", "console")
        monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")

        settings = Settings(_env_file=None)

        assert settings.AUDIT_ALLOWED_DECISIONS is True
        assert settings.LOG_FORMAT == "console"
        assert settings.SUPABASE_URL == "https://project.supabase.co"

    def test_reads_jwt_secret(self):
        """Test that the test environment's JWT_SECRET is picked up."""
        settings = Settings(_env_file=None)

        assert settings.JWT_SECRET == "test-secret-key-for-testing-only-32-chars"
