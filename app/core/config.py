from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    DATABASE_URL: str = "sqlite:///./satas.db"

    # Identity provider (Supabase Auth)
    SUPABASE_URL: str = ""
    SUPABASE_ANON_KEY: str = ""
    SUPABASE_SERVICE_ROLE_KEY: str = ""
    SUPABASE_JWT_SECRET: str = "your-jwt-secret-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str = "authenticated"
    SESSION_COOKIE_NAME: str = "sb-access-token"
    CODE_VERIFIER_COOKIE_NAME: str = "sb-auth-token-code-verifier"  # set by the client before the OAuth redirect
    IDENTITY_REQUEST_TIMEOUT: float = 10.0

    # Object storage
    STORAGE_BACKEND: str = "local"  # 'local' | 'supabase'
    UPLOAD_DIRECTORY: str = "uploads"
    PUBLIC_FILES_URL: str = "http://localhost:8000/files"
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024
    STORAGE_BUCKETS: str = "profile-pictures,cover-pictures,cvs,logos,banners"

    # Application
    APP_NAME: str = "SATAS"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    FRONTEND_URL: str = "http://localhost:3000"
    BACKEND_CORS_ORIGINS: str = (
        "http://localhost:3000,"
        "http://127.0.0.1:3000"
    )

    @property
    def storage_buckets(self) -> list[str]:
        return [
            bucket.strip()
            for bucket in self.STORAGE_BUCKETS.split(",")
            if bucket.strip()
        ]


settings = Settings()
