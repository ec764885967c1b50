from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine
from app.core.config import settings
from app.core.errors import DatabaseError
from app.core.logging import get_logger
from app.db.gateway import Gateway, translate_driver_errors
from app import models  # registers every table on SQLModel.metadata

logger = get_logger(__name__)


def connect_args_for(url: str, timeout: int) -> dict:
    """Driver arguments bounding every statement to ``timeout`` seconds."""
    if url.startswith("sqlite"):
        # check_same_thread is needed for SQLite
        return {"check_same_thread": False, "timeout": timeout}
    if url.startswith("mysql"):
        return {"connect_timeout": timeout, "read_timeout": timeout, "write_timeout": timeout}
    if url.startswith("postgresql"):
        return {"connect_timeout": timeout, "options": f"-c statement_timeout={timeout * 1000}"}
    return {}


def use_immediate_transactions(engine: Engine):
    """Make pysqlite open every transaction with BEGIN IMMEDIATE.

    The driver otherwise defers BEGIN until the first write, which lets two
    readers race past the open-cart check.
    """
    @event.listens_for(engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(url: str) -> Engine:
    timeout = settings.DB_QUERY_TIMEOUT
    kwargs = {"connect_args": connect_args_for(url, timeout), "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        kwargs.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=timeout,
        )
    engine = create_engine(url, **kwargs)
    if engine.dialect.name == "sqlite":
        use_immediate_transactions(engine)
    return engine


engine = build_engine(settings.SQLALCHEMY_DATABASE_URL)
gateway = Gateway(engine)


def get_gateway() -> Gateway:
    return gateway


def create_db_and_tables():
    with translate_driver_errors():
        SQLModel.metadata.create_all(engine)


def check_connection() -> bool:
    """Log, but do not raise, when the database cannot be reached."""
    try:
        gateway.ping()
    except DatabaseError as e:
        logger.error(f"Error connecting to database: {e}")
        return False
    logger.info("Database connection established")
    return True
