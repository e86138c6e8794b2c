from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str

    # Auth / tokens
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 12
    AUTH_COOKIE_NAME: str = "access_token"
    COOKIE_SECURE: bool = False

    # Flash messages live in a signed session cookie
    SESSION_SECRET: str

    # Redirect targets of the login flow
    LOGIN_PATH: str = "/login"
    SHOP_PATH: str = "/shop"
    ADMIN_PATH: str = "/api/admin"

    # Listing computes an offset but historically never applied it
    PAGINATION_APPLY_OFFSET: bool = False

    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]
    LOG_LEVEL: str = "INFO"

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="allow"
    )


settings = Settings()
