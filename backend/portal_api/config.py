import os

from dotenv import load_dotenv

load_dotenv()

PROJECT_NAME = os.getenv("PROJECT_NAME", "Customer Portal API")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("true", "1", "yes")
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "10"))

# Comma-separated; empty means any origin
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]

VERIFICATION_TTL_MINUTES = int(os.getenv("VERIFICATION_TTL_MINUTES", "15"))


def database_url() -> str:
    """Resolve the database URL.

    DATABASE_URL wins. Otherwise, when DB_HOST is set, a MySQL URL is built
    from the DB_* variables. Falls back to a local SQLite file.
    """
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    host = os.getenv("DB_HOST")
    if host:
        port = os.getenv("DB_PORT", "3306")
        user = os.getenv("DB_USER", "root")
        password = os.getenv("DB_PASS", "")
        name = os.getenv("DB_NAME", "portal_pji_project")
        return f"mysql+pymysql://{user}:{password}@{host}:{port}/{name}"

    return "sqlite:///./portal.db"
