import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./offboard_tenancy.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    # Shared secret of the identity provider's HS256 tokens
    IDENTITY_JWT_SECRET = data.get("IDENTITY_JWT_SECRET", "dev-secret-key-change-in-production")
    IDENTITY_JWT_ALGORITHM = data.get("IDENTITY_JWT_ALGORITHM", "HS256")
    ADMIN_API_KEY = data.get("ADMIN_API_KEY", "test-admin-key-12345")
    APP_URL = data.get("APP_URL", "http://localhost:3000")
    EMAIL_DISPATCH_URL = data.get("EMAIL_DISPATCH_URL", "")
    EMAIL_DISPATCH_API_KEY = data.get("EMAIL_DISPATCH_API_KEY", "")
    EMAIL_DISPATCH_TIMEOUT = float(data.get("EMAIL_DISPATCH_TIMEOUT", 10.0))
