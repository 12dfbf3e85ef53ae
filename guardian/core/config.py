import os
from typing import Optional, List
from dotenv import load_dotenv

load_dotenv()


def _csv(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [item.strip().lower() for item in value.split(",") if item.strip()]


class Settings:
    ENV: str = os.getenv("ENV", "local")
    APP_NAME: str = os.getenv("APP_NAME", "Guardian")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "local")
    SMS_BACKEND: str = os.getenv("SMS_BACKEND", "console")

    # Database
    DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")
    DATABASE_ECHO: bool = os.getenv("DATABASE_ECHO", "False").lower() == "true"
    DATABASE_POOL_SIZE: int = int(os.getenv("DATABASE_POOL_SIZE", 20))
    DATABASE_MAX_OVERFLOW: int = int(os.getenv("DATABASE_MAX_OVERFLOW", 10))

    # JWT (tokens are issued by the identity service)
    SECRET_KEY: str = os.getenv("SECRET_KEY")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 15))

    # CORS
    BACKEND_CORS_ORIGINS: Optional[str] = os.getenv("BACKEND_CORS_ORIGINS")

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "True").lower() == "true"
    RATE_LIMIT_REQUESTS: int = int(os.getenv("RATE_LIMIT_REQUESTS", 100))
    RATE_LIMIT_PERIOD_SECONDS: int = int(os.getenv("RATE_LIMIT_PERIOD_SECONDS", 60))

    # Document uploads
    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "uploads")
    MAX_UPLOAD_SIZE_BYTES: int = int(os.getenv("MAX_UPLOAD_SIZE_BYTES", 5 * 1024 * 1024))
    ALLOWED_UPLOAD_EXTENSIONS: List[str] = _csv(os.getenv("ALLOWED_UPLOAD_EXTENSIONS", "jpeg,jpg,png,pdf"))
    REQUIRED_DOCUMENT_TYPES: List[str] = _csv(os.getenv("REQUIRED_DOCUMENT_TYPES", "aadhaar"))

    # AWS S3
    AWS_S3_BUCKET: Optional[str] = os.getenv("AWS_S3_BUCKET")
    AWS_REGION: Optional[str] = os.getenv("AWS_REGION")
    AWS_ACCESS_KEY_ID: Optional[str] = os.getenv("AWS_ACCESS_KEY_ID")
    AWS_SECRET_ACCESS_KEY: Optional[str] = os.getenv("AWS_SECRET_ACCESS_KEY")

    # SMS (Twilio account dedicated to SOS traffic)
    TWILIO_ACCOUNT_SID_SOS: Optional[str] = os.getenv("TWILIO_ACCOUNT_SID_SOS")
    TWILIO_AUTH_TOKEN_SOS: Optional[str] = os.getenv("TWILIO_AUTH_TOKEN_SOS")
    TWILIO_FROM_NUMBER_SOS: Optional[str] = os.getenv("TWILIO_FROM_NUMBER_SOS")

    # SOS
    SOS_AUTHORITY_NUMBER: str = os.getenv("SOS_AUTHORITY_NUMBER", "+91807643514")
    SOS_CONTACT_ATTEMPTS: int = int(os.getenv("SOS_CONTACT_ATTEMPTS", 3))
    SOS_AUTHORITY_ATTEMPTS: int = int(os.getenv("SOS_AUTHORITY_ATTEMPTS", 1))
    SOS_ATTEMPT_DELAY_SECONDS: float = float(os.getenv("SOS_ATTEMPT_DELAY_SECONDS", 2))
    SOS_HISTORY_LIMIT: int = int(os.getenv("SOS_HISTORY_LIMIT", 20))
    MAX_EMERGENCY_CONTACTS: int = int(os.getenv("MAX_EMERGENCY_CONTACTS", 5))

    @property
    def is_development(self) -> bool:
        return self.ENV.lower() == "development"


settings = Settings()
