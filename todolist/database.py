import logging
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from todolist.models import Base

logger = logging.getLogger(__name__)


class Database:
    """
    Owns the SQLAlchemy engine and session factory for one database URL.

    Build it once at startup, hand it to the app factory, dispose it on shutdown.
    """

    def __init__(self, url: str) -> None:
        parsed = make_url(url)
        engine_args = {}
        connect_args = {}
        if parsed.get_backend_name() == "sqlite":
            # sync routes run in FastAPI's thread pool
            connect_args["check_same_thread"] = False
            if parsed.database and parsed.database != ":memory:":
                Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)
            else:
                # one shared connection, or each thread would see its own empty database
                engine_args["poolclass"] = StaticPool

        self.url = parsed
        self.engine = create_engine(url, connect_args=connect_args, **engine_args)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        logger.info("Database engine created url=%s", parsed.render_as_string(hide_password=True))

    def create_schema(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database engine disposed")
