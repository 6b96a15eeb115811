from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str

    # API
    API_TITLE: str = "iswear forum API"
    API_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = ""

    # Security
    SECRET_KEY: str
    SESSION_COOKIE_NAME: str = "forum.sid"
    SESSION_MAX_AGE_DAYS: int = 30
    SESSION_COOKIE_SECURE: bool = False

    # Uploads
    UPLOAD_DIR: str = "uploads"
    UPLOAD_URL_PREFIX: str = "/uploads"
    MAX_UPLOAD_SIZE: int = 5 * 1024 * 1024

    # Presence
    ONLINE_WINDOW_SECONDS: int = 300

    class Config:
        env_file = ".env"
        case_sensitive = True

# Create settings instance
settings = Settings()
