# app/database.py
from sqlmodel import SQLModel, create_engine, Session

from app.core.config import get_settings

settings = get_settings()


def _require_ssl(db_url: str) -> str:
    """Append sslmode=require unless the URL already sets an sslmode."""
    if "sslmode=" in db_url:
        return db_url
    separator = "&" if "?" in db_url else "?"
    return f"{db_url}{separator}sslmode=require"


# Supabase Session mode limits the number of pooler clients, so each
# process keeps exactly one connection (pool_size=1, max_overflow=0) and
# pings it before use. Larger pools end in
#   "MaxClientsInSessionMode: max clients reached"
engine = create_engine(
    _require_ssl(settings.DATABASE_URL),
    echo=False,
    pool_pre_ping=True,
    pool_size=1,
    max_overflow=0,
)


def create_db_and_tables() -> None:
    """
    Create orders/users/services tables if they do not exist.

    Called once from the application lifespan.
    """
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session per request.
    """
    with Session(engine) as session:
        yield session
