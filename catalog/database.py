"""
Database Configuration Module

SQLAlchemy 2.0 setup for the catalog store.

The catalog treats its store like a document collection: every record gets a
store-assigned string identifier on first insert, and references between
records are plain identifier columns. There are deliberately no foreign-key
constraints; referential integrity is checked by the catalog services at
delete time.

Engines are created explicitly by `CatalogStore.open()` (see catalog.store)
rather than at import time, so tests and scripts can point a store at any URL.
"""

import secrets

from sqlalchemy import Engine, create_engine, event, func
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all catalog models.

    Alembic reads Base.metadata to discover the tables.
    """
    pass


def new_record_id() -> str:
    """
    Generate a store-assigned record identifier.

    24 lowercase hex characters, the same shape as a document-store ObjectId,
    so URLs look the same whatever backend holds the data.
    """
    return secrets.token_hex(12)


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.

    SQLite connections are used from the worker thread pool, so the
    same-thread check is switched off for that dialect. SQLite's built-in
    lower() folds ASCII letters only, so SQLite connections also get a
    Unicode-aware casefold() function (see case_fold_function).
    """
    is_sqlite = database_url.startswith("sqlite")
    connect_args = {}
    if is_sqlite:
        connect_args["check_same_thread"] = False

    engine = create_engine(
        database_url,
        connect_args=connect_args,
        pool_pre_ping=True,  # Verify connections are alive before using
        echo=echo,
    )
    if is_sqlite:
        event.listen(engine, "connect", _register_sqlite_functions)
    return engine


def _casefold(value):
    if value is None:
        return None
    return str(value).casefold()


def _register_sqlite_functions(dbapi_connection, connection_record) -> None:
    dbapi_connection.create_function("casefold", 1, _casefold, deterministic=True)


def case_fold_function(engine: Engine):
    """
    SQL function used for case-insensitive matches on this engine.

    Both the column and the searched value go through the same function,
    so stored rows and submitted values are folded identically.
    """
    if engine.dialect.name == "sqlite":
        return func.casefold
    return func.lower


def create_tables(engine: Engine) -> None:
    """
    Create all catalog tables that don't exist yet.

    Use Alembic migrations for a production database; this is for
    development and tests.
    """
    Base.metadata.create_all(bind=engine)


def drop_tables(engine: Engine) -> None:
    """Drop all catalog tables. Deletes all data."""
    Base.metadata.drop_all(bind=engine)
