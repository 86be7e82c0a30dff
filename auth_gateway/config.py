from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List, Literal
from pydantic import Field, field_validator, model_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # API Settings
    PROJECT_NAME: str = "Authentication Gateway"
    AUTH_PREFIX: str = "/auth"
    LOG_LEVEL: str = "INFO"
    PORT: int = 3000

    # Identity provider settings
    IDENTITY_PROVIDER: Literal["supabase", "memory"] = Field(
        default="supabase",
        description="Identity provider binding (use 'memory' only for local development and tests)"
    )
    SUPABASE_URL: Optional[str] = Field(
        default=None,
        description="Supabase project URL"
    )
    SUPABASE_KEY: Optional[str] = Field(
        default=None,
        description="Supabase API key used by the gateway"
    )

    # Email verification settings
    FRONTEND_URL: str = Field(
        default="http://localhost:3000",
        description="Frontend base URL that verification emails redirect to"
    )
    EMAIL_REDIRECT_PATH: str = "/auth/callback"

    # Test login settings
    ENABLE_TEST_LOGIN: bool = Field(
        default=False,
        description="Feature flag for the test-login endpoint (never enable in production)"
    )
    TEST_EMAIL: Optional[str] = None
    TEST_EMAIL_PASSWORD: Optional[str] = None

    # CORS Settings
    CORS_ORIGINS: List[str] = ["*"]

    # Rate limit settings
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = Field(
        default="memory://",
        description="slowapi storage backend, e.g. redis://localhost:6379/0"
    )
    RATE_LIMIT_DEFAULT: str = "100/15 minutes"  # per client address
    RATE_LIMIT_SIGNUP: str = "10/minute"
    RATE_LIMIT_LOGIN: str = "20/minute"
    RATE_LIMIT_RESEND: str = "5/minute"
    RATE_LIMIT_VERIFY: str = "20/minute"

    # In-memory provider settings
    VERIFICATION_TOKEN_TTL_SECONDS: int = 86400  # 24 hours
    SESSION_TTL_SECONDS: int = 3600              # 1 hour

    @field_validator('FRONTEND_URL')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the frontend URL so redirect paths join cleanly."""
        return v.rstrip("/")

    @model_validator(mode="after")
    def require_supabase_credentials(self) -> "Settings":
        """Supabase credentials are mandatory when Supabase is the provider."""
        if self.IDENTITY_PROVIDER == "supabase" and not (self.SUPABASE_URL and self.SUPABASE_KEY):
            raise ValueError("SUPABASE_URL and SUPABASE_KEY must be set when IDENTITY_PROVIDER is 'supabase'")
        return self

    @property
    def email_redirect_url(self) -> str:
        return f"{self.FRONTEND_URL}{self.EMAIL_REDIRECT_PATH}"

settings = Settings()
