import os
import yaml

ROOT_PATH = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_FILE_PATH = os.environ.get("GRIMOIRE_CONFIG", os.path.join(ROOT_PATH, "env.yaml"))

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./grimoire.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))

    # Credential and session policy
    SESSION_TTL_DAYS = int(data.get("SESSION_TTL_DAYS", 7))
    EMAIL_VERIFICATION_TTL_HOURS = int(data.get("EMAIL_VERIFICATION_TTL_HOURS", 24))
    PASSWORD_RESET_TTL_HOURS = int(data.get("PASSWORD_RESET_TTL_HOURS", 1))
    ARGON2_MEMORY_COST = int(data.get("ARGON2_MEMORY_COST", 65536))  # KiB
    ARGON2_TIME_COST = int(data.get("ARGON2_TIME_COST", 3))
    ARGON2_PARALLELISM = int(data.get("ARGON2_PARALLELISM", 1))

    # Outbound email; an empty SMTP_HOST logs messages instead of sending
    SMTP_HOST = data.get("SMTP_HOST", "")
    SMTP_PORT = int(data.get("SMTP_PORT", 587))
    SMTP_USER = data.get("SMTP_USER", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_TIMEOUT = float(data.get("SMTP_TIMEOUT", 10))
    EMAIL_FROM = data.get("EMAIL_FROM", "GRIMOIRE <noreply@grimoire.app>")
    FRONTEND_URL = data.get("FRONTEND_URL", "http://localhost:5173")
