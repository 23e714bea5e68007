# 📄 File: app/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# The main configuration center that reads all settings from environment variables
# and hands them to the rest of the food delivery marketplace in an organized way.
#
# 🧪 Purpose (Technical Summary):
# Pydantic-based settings management with environment variable loading,
# validation, and type safety for database, security, payment gateway and
# order pricing parameters.
#
# 🔗 Dependencies:
# - pydantic-settings for configuration management
# - python-dotenv for .env file loading
# - typing for type hints
#
# 🔄 Connected Modules / Calls From:
# - app.main (application startup)
# - app.shared.infrastructure.database.connection
# - app.modules.payments (gateway credentials, webhook secret)
# - app.modules.orders (tax rate, delivery share, ETA)

from decimal import Decimal
from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety. Settings are loaded
    from environment variables with fallback to .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================

    APP_NAME: str = Field(default="Food Delivery Marketplace API", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    APP_DESCRIPTION: str = Field(
        default="Multi-role food delivery marketplace: customers, restaurants, delivery partners",
        description="Application description"
    )
    ENVIRONMENT: str = Field(default="development", description="Runtime environment")
    DEBUG: bool = Field(default=False, description="Debug mode flag")
    HOST: str = Field(default="0.0.0.0", description="Bind address for the development server")
    PORT: int = Field(default=8000, description="Bind port for the development server")

    # =========================================================================
    # LOGGING
    # =========================================================================

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="json", description="Log output format (json|text)")

    # =========================================================================
    # DATABASE CONFIGURATION
    # =========================================================================

    DATABASE_URL: Optional[str] = Field(None, description="Async SQLAlchemy connection URL")
    DB_HOST: str = Field(default="localhost", description="Database host")
    DB_PORT: int = Field(default=5432, description="Database port")
    DB_NAME: str = Field(default="food_delivery", description="Database name")
    DB_USER: str = Field(default="postgres", description="Database user")
    DB_PASSWORD: str = Field(default="", description="Database password")

    DB_POOL_SIZE: int = Field(default=10, description="Database pool size")
    DB_MAX_OVERFLOW: int = Field(default=20, description="Database pool overflow")
    DB_POOL_TIMEOUT: int = Field(default=30, description="Database pool timeout")
    DB_POOL_RECYCLE: int = Field(default=3600, description="Database pool recycle time")
    DB_ECHO: bool = Field(default=False, description="Echo SQL statements")

    # =========================================================================
    # SECURITY SETTINGS
    # =========================================================================

    JWT_SECRET_KEY: str = Field(..., description="JWT secret key")
    JWT_ALGORITHM: str = Field(default="HS256", description="JWT algorithm")
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default=60 * 24,
        description="JWT access token expiry"
    )
    BCRYPT_ROUNDS: int = Field(default=12, description="bcrypt cost factor")

    CORS_ORIGINS: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma separated list of allowed origins"
    )
    RATE_LIMIT_ENABLED: bool = Field(default=True, description="Enable slowapi rate limiting")
    AUTH_RATE_LIMIT: str = Field(default="10/minute", description="Login attempts per client")

    # =========================================================================
    # PAYMENT GATEWAY
    # =========================================================================

    PAYMENT_GATEWAY_BASE_URL: str = Field(
        default="https://api.razorpay.com/v1",
        description="Payment gateway REST base URL"
    )
    PAYMENT_GATEWAY_KEY_ID: str = Field(default="", description="Gateway key id")
    PAYMENT_GATEWAY_KEY_SECRET: str = Field(default="", description="Gateway key secret")
    PAYMENT_WEBHOOK_SECRET: str = Field(default="", description="Webhook signing secret")
    PAYMENT_CURRENCY: str = Field(default="INR", description="Settlement currency")
    PAYMENT_GATEWAY_TIMEOUT: int = Field(default=15, description="Gateway request timeout (seconds)")
    PAYMENT_GATEWAY_MAX_RETRIES: int = Field(default=3, description="Gateway retry attempts")

    # =========================================================================
    # ORDER PRICING & SETTLEMENT
    # =========================================================================

    TAX_RATE: Decimal = Field(default=Decimal("0.10"), description="Tax rate applied to subtotal")
    DELIVERY_PARTNER_SHARE: Decimal = Field(
        default=Decimal("0.80"),
        description="Share of the delivery fee paid to the delivery partner"
    )
    DEFAULT_RESTAURANT_COMMISSION: Decimal = Field(
        default=Decimal("10"),
        description="Platform commission on restaurant subtotal (percent)"
    )
    ESTIMATED_DELIVERY_MINUTES: int = Field(default=30, description="Default ETA for new orders")

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed_environments = ["development", "testing", "staging", "production"]
        if v.lower() not in allowed_environments:
            raise ValueError(f"Environment must be one of {allowed_environments}")
        return v.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed_levels:
            raise ValueError(f"Log level must be one of {allowed_levels}")
        return v.upper()

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        if v.lower() not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        """Validate JWT algorithm."""
        allowed_algorithms = ["HS256", "HS384", "HS512"]
        if v not in allowed_algorithms:
            raise ValueError(f"JWT algorithm must be one of {allowed_algorithms}")
        return v

    @field_validator("JWT_SECRET_KEY")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        """Validate JWT secret length."""
        if len(v) < 32:
            raise ValueError("JWT secret key must be at least 32 characters long")
        return v

    @field_validator("CORS_ORIGINS")
    @classmethod
    def validate_cors_origins(cls, v: str) -> str:
        """Validate CORS origins format."""
        origins = [origin.strip() for origin in v.split(",")]
        for origin in origins:
            if not origin.startswith(("http://", "https://", "*")):
                raise ValueError(f"Invalid CORS origin format: {origin}")
        return v

    @field_validator("TAX_RATE", "DELIVERY_PARTNER_SHARE")
    @classmethod
    def validate_rate(cls, v: Decimal) -> Decimal:
        if v < 0 or v > 1:
            raise ValueError("Rate must be between 0 and 1")
        return v

    @field_validator("DEFAULT_RESTAURANT_COMMISSION")
    @classmethod
    def validate_commission(cls, v: Decimal) -> Decimal:
        if v < 0 or v > 100:
            raise ValueError("Commission must be between 0 and 100")
        return v

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================

    @property
    def database_url(self) -> str:
        """Get the database URL, preferring explicit DATABASE_URL."""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.ENVIRONMENT == "testing"

    def get_payment_gateway_config(self) -> dict:
        """
        Get payment gateway client configuration.

        Returns:
            dict: Base URL, credentials and retry policy for the gateway client
        """
        return {
            "base_url": self.PAYMENT_GATEWAY_BASE_URL,
            "key_id": self.PAYMENT_GATEWAY_KEY_ID,
            "key_secret": self.PAYMENT_GATEWAY_KEY_SECRET,
            "timeout": self.PAYMENT_GATEWAY_TIMEOUT,
            "max_retries": self.PAYMENT_GATEWAY_MAX_RETRIES,
        }


# ============================================================================
# SETTINGS FACTORY
# ============================================================================

@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Uses lru_cache to ensure settings are loaded only once
    and reused throughout the application lifecycle.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
