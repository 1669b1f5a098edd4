# app/core/config.py
import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    PORT: int = int(os.getenv("PORT", "3000"))
    HOST: str = os.getenv("HOST", "0.0.0.0")

    # Shared admin password for the dashboard login
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "changeme")
    SESSION_SECRET: str = os.getenv("SESSION_SECRET", "dev-session-secret")
    SESSION_MAX_AGE: int = int(os.getenv("SESSION_MAX_AGE", str(14 * 24 * 60 * 60)))

    # Credential sources, inline JSON wins over the file
    GOOGLE_SERVICE_ACCOUNT_JSON: str | None = os.getenv("GOOGLE_SERVICE_ACCOUNT_JSON")
    FIREBASE_SERVICE_ACCOUNT_PATH: str = os.getenv(
        "FIREBASE_SERVICE_ACCOUNT_PATH",
        "service-account.json",
    )

    # The Android app subscribes every device to this topic
    NOTIFICATION_TOPIC: str = os.getenv("NOTIFICATION_TOPIC", "updates")

    # Admin dashboard HTML, served at / when present
    STATIC_DIR: str = os.getenv("STATIC_DIR", "public")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
