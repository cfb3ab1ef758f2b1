# campus_ops/core/database.py
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from campus_ops.core.config import get_settings

settings = get_settings()


def build_engine(url: str, **kwargs):
    sqlite = url.startswith("sqlite")
    connect_args = {"check_same_thread": False} if sqlite else {}
    connect_args.update(kwargs.pop("connect_args", {}))
    db_engine = create_engine(url, connect_args=connect_args, **kwargs)
    if sqlite:
        _configure_sqlite(db_engine)
    return db_engine


def _configure_sqlite(db_engine) -> None:
    # pysqlite defers BEGIN until the first write, so reads take no lock.
    # Emitting BEGIN IMMEDIATE ourselves makes every transaction hold the
    # write lock from its first statement, which serializes check-then-write.
    @event.listens_for(db_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(db_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# Common DB dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)
