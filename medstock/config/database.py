import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from .settings import Settings

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def _enable_sqlite_immediate_transactions(engine: Engine) -> None:
    """
    pysqlite defers BEGIN until the first write, so two sales could both read
    the same stock before either takes the write lock. Take over transaction
    control and start every transaction with BEGIN IMMEDIATE instead.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_engine(settings: Settings) -> Engine:
    """Create the engine for the configured store"""
    url = settings.database_url

    if _is_sqlite(url):
        busy_timeout = settings.sqlite_busy_timeout_seconds or settings.lock_timeout_seconds
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False, "timeout": busy_timeout},
            echo=settings.debug
        )
        _enable_sqlite_immediate_transactions(engine)
    else:
        engine = create_engine(
            url,
            pool_pre_ping=settings.pool_pre_ping,
            pool_recycle=settings.pool_recycle,
            echo=settings.debug
        )

    logger.info(f"Database engine created for dialect '{engine.dialect.name}'")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to one engine; each unit of work gets its own Session"""
    return sessionmaker(autoflush=False, expire_on_commit=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create tables for every registered model"""
    from medstock.shared.database import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
