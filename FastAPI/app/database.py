import logging

from fastapi import Request
from sqlalchemy import JSON, create_engine, inspect, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()

# Document-shaped columns: JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests).
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


def _engine_kwargs(url: str, pool_size: int, max_overflow: int) -> dict:
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url in {"sqlite://", "sqlite:///"}:
            # One shared connection so every session sees the same in-memory DB
            kwargs["poolclass"] = StaticPool
        return kwargs
    return {
        "pool_pre_ping": True,
        "pool_size": pool_size,
        "max_overflow": max_overflow,
    }


class Database:
    """Owns the engine (connection pool) and session factory for one app instance."""

    def __init__(self, url: str, *, pool_size: int = 5, max_overflow: int = 10, echo: bool = False):
        self.url = url
        self.engine = create_engine(url, echo=echo, **_engine_kwargs(url, pool_size, max_overflow))
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self):
        return self.SessionLocal()

    def init_db(self) -> None:
        import app.models  # noqa: F401

        try:
            Base.metadata.create_all(bind=self.engine)
            logger.info("Database initialized")
        except Exception as e:
            logger.exception("Database initialization failed: %s", e)
            raise

    def ensure_tables_exist(self) -> list[str]:
        """Create any missing tables without touching existing data. Returns the created table names."""
        import app.models  # noqa: F401

        try:
            existing_tables = set(inspect(self.engine).get_table_names())
            Base.metadata.create_all(bind=self.engine)
            created_tables = sorted(set(Base.metadata.tables.keys()) - existing_tables)
            if created_tables:
                logger.info("Created missing DB tables: %s", ", ".join(created_tables))
            else:
                logger.info("All DB tables already exist; no schema changes applied.")
            return created_tables
        except Exception as e:
            logger.exception("Ensure tables failed: %s", e)
            raise

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request):
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
