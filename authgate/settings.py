import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    API_KEY: str = os.getenv("API_KEY", "")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    # Lock and form-status calls sit on the login path; never block it for long
    REDIS_SOCKET_TIMEOUT_SEC: float = float(os.getenv("REDIS_SOCKET_TIMEOUT_SEC", "2"))

    # Credential-verification backend
    AUTH_SERVICE_URL: str = os.getenv("AUTH_SERVICE_URL", "")
    AUTH_LOGIN_PATH: str = os.getenv("AUTH_LOGIN_PATH", "/api/auth/login")
    # Sent as x-client-api-key when set
    AUTH_CLIENT_API_KEY: str = os.getenv("AUTH_CLIENT_API_KEY", "")
    # Transport-level only; the submission core itself has no timeout
    AUTH_TIMEOUT_SEC: float = float(os.getenv("AUTH_TIMEOUT_SEC", "10"))

    # Post-login navigation
    DEFAULT_REDIRECT_PATH: str = os.getenv("DEFAULT_REDIRECT_PATH", "/")

    # Phone field carries maxLength=10 on the login page
    PHONE_INPUT_MAX_LENGTH: int = int(os.getenv("PHONE_INPUT_MAX_LENGTH", "10"))

    # Single in-flight submission per formId across requests
    SUBMISSION_LOCK_TTL_MS: int = int(os.getenv("SUBMISSION_LOCK_TTL_MS", "30000"))

    # Last outcome per formId, retrievable via GET /api/login/{formId}
    STORE_FORM_STATUS: bool = os.getenv("STORE_FORM_STATUS", "true").lower() == "true"
    FORM_STATUS_TTL_SEC: int = int(os.getenv("FORM_STATUS_TTL_SEC", "900"))

    # Security & Privacy
    ENABLE_PII_REDACTION: bool = os.getenv("ENABLE_PII_REDACTION", "true").lower() == "true"

settings = Settings()
