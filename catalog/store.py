"""
Catalog Store

The store is the catalog's only way to reach persisted records. It offers a
small document-style contract on top of SQLAlchemy:

- find_by_id(id, populate=...)        record or None
- find(where, order_by, fields, populate)
- find_one(where, ignore_case=...)
- count(where)
- insert(values)
- update_by_id(id, values)            record or None
- delete_by_id(id)                    True if something was removed

One Collection per entity hangs off the store (store.authors, store.genres,
store.books, store.bookinstances).

Lifecycle
=========
The store is an explicit handle, not module state:

    store = CatalogStore(settings.database_url)
    store.open()      # engine + tables, at process start
    ...
    store.close()     # dispose the engine, at shutdown

Concurrency
===========
Every operation opens its own short-lived session and runs on a worker
thread, so a request can gather several reads at once:

    book, copies = await asyncio.gather(
        store.books.find_by_id(book_id, populate=("author", "genre")),
        store.bookinstances.find({"book": book_id}),
    )

Each operation is atomic on its own. Nothing here wraps several operations in
one transaction.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import ColumnElement, Engine, delete, func, select
from sqlalchemy.orm import Session, load_only, sessionmaker

from catalog.database import Base, build_engine, case_fold_function, create_tables, drop_tables
from catalog.models import Author, Book, BookGenre, BookInstance, Genre
from catalog.schemas import AuthorRecord, BookInstanceRecord, BookRecord, GenreRecord

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)
ResultT = TypeVar("ResultT")


class Reference:
    """A reference field that populate() can expand into a record."""

    def __init__(self, collection: str, many: bool = False) -> None:
        self.collection = collection
        self.many = many


class Collection(Generic[RecordT]):
    """
    Document-style access to one table.

    Subclasses name their model, their read model and any reference fields.
    Documents are plain dicts keyed by field name; records are the pydantic
    read models built from them.
    """

    model: ClassVar[type[Base]]
    record: ClassVar[type[BaseModel]]
    references: ClassVar[dict[str, Reference]] = {}

    def __init__(self, store: "CatalogStore") -> None:
        self._store = store

    # -------------------------------------------------------------------------
    # Public (async) operations
    # -------------------------------------------------------------------------
    async def find_by_id(
        self,
        record_id: str,
        populate: Sequence[str] = (),
    ) -> RecordT | None:
        return await self._store.run(self._find_by_id, record_id, populate)

    async def find(
        self,
        where: Mapping[str, Any] | None = None,
        order_by: Sequence[str] = (),
        fields: Sequence[str] | None = None,
        populate: Sequence[str] = (),
    ) -> list[RecordT]:
        """
        Records matching every key of `where`, in `order_by` order.

        `order_by` entries are field names, with a leading '-' for
        descending. `fields` limits the loaded columns; records built from a
        projection carry only those fields (plus id).
        """
        return await self._store.run(self._find, where, order_by, fields, populate)

    async def find_one(
        self,
        where: Mapping[str, Any],
        ignore_case: Iterable[str] = (),
    ) -> RecordT | None:
        """First match, comparing the fields named in `ignore_case` case-insensitively."""
        return await self._store.run(self._find_one, where, tuple(ignore_case))

    async def count(self, where: Mapping[str, Any] | None = None) -> int:
        return await self._store.run(self._count, where)

    async def insert(self, values: Mapping[str, Any]) -> RecordT:
        return await self._store.run(self._insert, values)

    async def update_by_id(
        self,
        record_id: str,
        values: Mapping[str, Any],
    ) -> RecordT | None:
        return await self._store.run(self._update_by_id, record_id, values)

    async def delete_by_id(self, record_id: str) -> bool:
        return await self._store.run(self._delete_by_id, record_id)

    # -------------------------------------------------------------------------
    # Session-bound implementations (run on a worker thread)
    # -------------------------------------------------------------------------
    def _find_by_id(self, session: Session, record_id: str, populate: Sequence[str]):
        row = session.get(self.model, record_id)
        if row is None:
            return None
        return self._to_record(session, row, None, populate)

    def _find(self, session, where, order_by, fields, populate):
        stmt = self._select(where)
        for field in order_by:
            descending = field.startswith("-")
            column = self._column(field.lstrip("-"))
            stmt = stmt.order_by(column.desc() if descending else column)
        if fields is not None:
            columns = [self._column(f) for f in fields if f in self._column_names()]
            stmt = stmt.options(load_only(*columns))
        rows = session.execute(stmt).scalars().all()
        return [self._to_record(session, row, fields, populate) for row in rows]

    def _find_one(self, session, where, ignore_case):
        stmt = select(self.model)
        fold = case_fold_function(session.get_bind())
        for field, value in (where or {}).items():
            if field in ignore_case:
                stmt = stmt.where(fold(self._column(field)) == fold(str(value)))
            else:
                stmt = stmt.where(self._condition(field, value))
        row = session.execute(stmt.limit(1)).scalars().first()
        if row is None:
            return None
        return self._to_record(session, row, None, ())

    def _count(self, session, where):
        stmt = select(func.count()).select_from(self.model)
        for condition in self._conditions(where):
            stmt = stmt.where(condition)
        return session.execute(stmt).scalar_one()

    def _insert(self, session, values):
        row = self.model(**self._column_values(values))
        session.add(row)
        session.flush()  # assigns the id
        self._write_extra(session, row, values)
        session.commit()
        logger.debug(f"Inserted {self.model.__tablename__} {row.id}")
        return self._to_record(session, row, None, ())

    def _update_by_id(self, session, record_id, values):
        row = session.get(self.model, record_id)
        if row is None:
            return None
        for field, value in self._column_values(values).items():
            if field != "id":
                setattr(row, field, value)
        self._write_extra(session, row, values)
        session.commit()
        return self._to_record(session, row, None, ())

    def _delete_by_id(self, session, record_id):
        row = session.get(self.model, record_id)
        if row is None:
            return False
        self._delete_extra(session, record_id)
        session.delete(row)
        session.commit()
        return True

    # -------------------------------------------------------------------------
    # Document helpers
    # -------------------------------------------------------------------------
    def _column_names(self) -> list[str]:
        return [attr.key for attr in self.model.__mapper__.column_attrs]

    def _column(self, field: str):
        if field not in self._column_names():
            raise KeyError(f"{self.model.__tablename__} has no column '{field}'")
        return getattr(self.model, field)

    def _column_values(self, values: Mapping[str, Any]) -> dict[str, Any]:
        names = self._column_names()
        return {k: v for k, v in values.items() if k in names}

    def _condition(self, field: str, value: Any) -> ColumnElement[bool]:
        return self._column(field) == value

    def _conditions(self, where: Mapping[str, Any] | None) -> list[ColumnElement[bool]]:
        return [self._condition(f, v) for f, v in (where or {}).items()]

    def _select(self, where):
        stmt = select(self.model)
        for condition in self._conditions(where):
            stmt = stmt.where(condition)
        return stmt

    def _document(self, session: Session, row: Any, fields: Sequence[str] | None) -> dict[str, Any]:
        names = self._column_names()
        if fields is not None:
            names = [n for n in names if n == "id" or n in fields]
        return {name: getattr(row, name) for name in names}

    def _to_record(self, session, row, fields, populate):
        doc = self._document(session, row, fields)
        for field in populate:
            if field in doc:
                doc[field] = self._expand(session, field, doc[field])
        if fields is not None:
            # Projections skip validation: unrequested fields stay unset
            return self.record.model_construct(**doc)
        return self.record.model_validate(doc)

    def _expand(self, session: Session, field: str, value: Any) -> Any:
        reference = self.references[field]
        target = self._store.collection(reference.collection)
        if reference.many:
            ids = list(value or [])
            if not ids:
                return []
            rows = session.execute(
                select(target.model).where(target.model.id.in_(ids))
            ).scalars().all()
            by_id = {row.id: row for row in rows}
            # Keep the document's order; ids that no longer resolve drop out
            return [
                target._to_record(session, by_id[i], None, ())
                for i in ids if i in by_id
            ]
        if value is None:
            return None
        row = session.get(target.model, value)
        return target._to_record(session, row, None, ()) if row is not None else None

    def _write_extra(self, session: Session, row: Any, values: Mapping[str, Any]) -> None:
        """Persist document fields that don't live in the model's own table."""

    def _delete_extra(self, session: Session, record_id: str) -> None:
        """Remove rows owned by a record that is being deleted."""


class AuthorCollection(Collection[AuthorRecord]):
    model = Author
    record = AuthorRecord


class GenreCollection(Collection[GenreRecord]):
    model = Genre
    record = GenreRecord


class BookCollection(Collection[BookRecord]):
    """
    Books keep their genre set in book_genres.

    The collection reads it into the document's `genre` list, accepts
    `genre` in where filters (membership), and replaces the whole set on
    insert/update whenever `genre` is among the values.
    """

    model = Book
    record = BookRecord
    references = {
        "author": Reference("authors"),
        "genre": Reference("genres", many=True),
    }

    def _condition(self, field, value):
        if field == "genre":
            members = select(BookGenre.book_id).where(BookGenre.genre_id == value)
            return Book.id.in_(members)
        return super()._condition(field, value)

    def _document(self, session, row, fields):
        doc = super()._document(session, row, fields)
        if fields is None or "genre" in fields:
            doc["genre"] = list(
                session.execute(
                    select(BookGenre.genre_id)
                    .where(BookGenre.book_id == row.id)
                    .order_by(BookGenre.genre_id)
                ).scalars()
            )
        return doc

    def _write_extra(self, session, row, values):
        if "genre" not in values:
            return
        session.execute(delete(BookGenre).where(BookGenre.book_id == row.id))
        # A set: repeated ids collapse, first occurrence wins
        for genre_id in dict.fromkeys(values["genre"] or []):
            session.add(BookGenre(book_id=row.id, genre_id=genre_id))
        session.flush()

    def _delete_extra(self, session, record_id):
        session.execute(delete(BookGenre).where(BookGenre.book_id == record_id))


class BookInstanceCollection(Collection[BookInstanceRecord]):
    model = BookInstance
    record = BookInstanceRecord
    references = {
        "book": Reference("books"),
    }


class CatalogStore:
    """
    Handle to the catalog's persisted records.

    Created once per process and handed to every service call. Records
    returned from it are detached copies; changing one changes nothing in
    the store.
    """

    def __init__(self, database_url: str, echo: bool = False) -> None:
        self.database_url = database_url
        self._echo = echo
        self._engine: Engine | None = None
        self._sessionmaker: sessionmaker[Session] | None = None

        self.authors = AuthorCollection(self)
        self.genres = GenreCollection(self)
        self.books = BookCollection(self)
        self.bookinstances = BookInstanceCollection(self)

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    def open(self) -> None:
        """Connect and make sure the tables exist. Opening twice is a no-op."""
        if self._engine is not None:
            return
        self._engine = build_engine(self.database_url, echo=self._echo)
        create_tables(self._engine)
        self._sessionmaker = sessionmaker(
            bind=self._engine,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info(f"Catalog store opened ({self._engine.url.get_backend_name()})")

    def close(self) -> None:
        """Dispose of the connection pool. Closing twice is a no-op."""
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("Catalog store closed")

    def reset(self) -> None:
        """Drop and recreate every catalog table. Deletes all data."""
        if self._engine is None:
            raise RuntimeError("CatalogStore is not open")
        drop_tables(self._engine)
        create_tables(self._engine)
        logger.info("Catalog store reset")

    def collection(self, name: str) -> Collection:
        collections = {
            "authors": self.authors,
            "genres": self.genres,
            "books": self.books,
            "bookinstances": self.bookinstances,
        }
        return collections[name]

    async def run(self, operation: Callable[..., ResultT], *args: Any) -> ResultT:
        """Run `operation(session, *args)` in a fresh session on a worker thread."""
        if self._sessionmaker is None:
            raise RuntimeError("CatalogStore is not open")
        return await asyncio.to_thread(self._call, operation, *args)

    def _call(self, operation: Callable[..., ResultT], *args: Any) -> ResultT:
        with self._sessionmaker() as session:
            try:
                return operation(session, *args)
            except Exception:
                session.rollback()
                raise
