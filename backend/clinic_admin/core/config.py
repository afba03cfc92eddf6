import os
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # 🧠 App Info
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "Dashboard Administrasi Klinik")
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = os.getenv("DEBUG", "true").lower() == "true"

    # 🗄️ Managed database (PostgreSQL; sqlite accepted for local dev)
    POSTGRES_USER: str = os.getenv("POSTGRES_USER", "postgres")
    POSTGRES_PASSWORD: str = os.getenv("POSTGRES_PASSWORD", "strongpass")
    POSTGRES_HOST: str = os.getenv("POSTGRES_HOST", "localhost")
    POSTGRES_PORT: str = os.getenv("POSTGRES_PORT", "5432")
    POSTGRES_DB: str = os.getenv("POSTGRES_DB", "postgres")

    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        f"postgresql+psycopg2://{POSTGRES_USER}:{POSTGRES_PASSWORD}@{POSTGRES_HOST}:{POSTGRES_PORT}/{POSTGRES_DB}"
    )
    CREATE_SCHEMA_ON_STARTUP: bool = os.getenv("CREATE_SCHEMA_ON_STARTUP", "false").lower() == "true"

    # 🔒 Session cookie signing (flash notifications)
    SECRET_KEY: str = os.getenv("SECRET_KEY", "changeme")

    # 🖼️ Templates
    TEMPLATES_DIR: str = os.getenv(
        "TEMPLATES_DIR", os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")
    )

    # 🕓 Locale / Logs
    TIMEZONE: str = os.getenv("TIMEZONE", "Asia/Jakarta")
    CURRENCY_PREFIX: str = os.getenv("CURRENCY_PREFIX", "Rp")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

settings = Settings()
