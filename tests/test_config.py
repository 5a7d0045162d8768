"""
Tests for settings loading.
"""
from app.core.config import Settings


class TestSettings:
    """Test env-file and environment parsing."""

    def test_reads_env_file(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text(
            "DATABASE_URL=sqlite:///./from_file.db\n"
            "LOG_LEVEL=debug\n"
            'CORS_ORIGINS=["https://a.com", "https://b.com"]\n',
            encoding="utf-8",
        )

        settings = Settings(_env_file=str(env_file))
        assert settings.DATABASE_URL == "sqlite:///./from_file.db"
        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.CORS_ORIGINS == ["https://a.com", "https://b.com"]

    def test_cors_origins_comma_separated(self):
        settings = Settings(_env_file=None, CORS_ORIGINS="https://a.com, https://b.com")
        assert settings.CORS_ORIGINS == ["https://a.com", "https://b.com"]
