"""
Tests for the Catalog Store

The document-style contract the services rely on: ids, reference
population, projections, filters and the genre set.
"""

import asyncio
from datetime import date

import pytest

from catalog.errors import SchemaViolation
from catalog.schemas import AuthorRecord, GenreRecord
from catalog.store import CatalogStore


class TestLifecycle:
    """Tests for open()/close()."""

    def test_open_and_close_are_idempotent(self, tmp_path):
        store = CatalogStore(f"sqlite:///{tmp_path / 'lifecycle.db'}")

        store.open()
        store.open()
        assert store.is_open

        store.close()
        store.close()
        assert not store.is_open

    @pytest.mark.asyncio
    async def test_operations_need_an_open_store(self, tmp_path):
        store = CatalogStore(f"sqlite:///{tmp_path / 'closed.db'}")

        with pytest.raises(RuntimeError):
            await store.authors.count()

    @pytest.mark.asyncio
    async def test_reset_deletes_everything(self, store, sample_book):
        store.reset()

        assert await store.books.count() == 0
        assert await store.authors.count() == 0


class TestInsertAndFind:
    """Tests for insert(), find_by_id() and find()."""

    @pytest.mark.asyncio
    async def test_insert_assigns_hex_id(self, store):
        author = await store.authors.insert({"first_name": "Ursula", "family_name": "LeGuin"})

        assert len(author.id) == 24
        int(author.id, 16)  # hex

    @pytest.mark.asyncio
    async def test_find_by_id(self, store, sample_author):
        author = await store.authors.find_by_id(sample_author.id)

        assert author == sample_author
        assert author.date_of_birth == date(1920, 1, 2)

    @pytest.mark.asyncio
    async def test_find_by_unknown_id(self, store):
        assert await store.authors.find_by_id("0" * 24) is None

    @pytest.mark.asyncio
    async def test_find_orders_by_field(self, store):
        for family_name in ("Zelazny", "Banks", "Moorcock"):
            await store.authors.insert({"first_name": "A", "family_name": family_name})

        ascending = await store.authors.find(order_by=("family_name",))
        descending = await store.authors.find(order_by=("-family_name",))

        assert [a.family_name for a in ascending] == ["Banks", "Moorcock", "Zelazny"]
        assert [a.family_name for a in descending] == ["Zelazny", "Moorcock", "Banks"]

    @pytest.mark.asyncio
    async def test_find_with_unknown_field(self, store):
        with pytest.raises(KeyError):
            await store.authors.find({"nickname": "Ike"})

    @pytest.mark.asyncio
    async def test_projection_loads_only_requested_fields(self, store, sample_book):
        books = await store.books.find(fields=("title",))

        assert len(books) == 1
        assert books[0].title == "Foundation"
        assert books[0].url == sample_book.url
        assert "summary" not in books[0].model_fields_set

    @pytest.mark.asyncio
    async def test_records_are_detached_copies(self, store, sample_genre):
        genre = await store.genres.find_by_id(sample_genre.id)
        genre.name = "Changed"

        stored = await store.genres.find_by_id(sample_genre.id)
        assert stored.name == "Science Fiction"


class TestPopulate:
    """Tests for reference population."""

    @pytest.mark.asyncio
    async def test_populate_author_and_genres(self, store, sample_book, sample_author, sample_genre):
        book = await store.books.find_by_id(sample_book.id, populate=("author", "genre"))

        assert isinstance(book.author, AuthorRecord)
        assert book.author.name == "Asimov, Isaac"
        assert [g.name for g in book.genre] == ["Science Fiction"]
        assert isinstance(book.genre[0], GenreRecord)

    @pytest.mark.asyncio
    async def test_unpopulated_references_are_ids(self, store, sample_book, sample_author):
        book = await store.books.find_by_id(sample_book.id)

        assert book.author == sample_author.id
        assert book.genre_ids == sample_book.genre_ids

    @pytest.mark.asyncio
    async def test_dangling_references(self, store):
        book = await store.books.insert({
            "title": "Orphan",
            "author": "f" * 24,
            "summary": "s",
            "isbn": "i",
            "genre": ["e" * 24],
        })

        populated = await store.books.find_by_id(book.id, populate=("author", "genre"))

        assert populated.author is None
        assert populated.genre == []

    @pytest.mark.asyncio
    async def test_populate_copy_book(self, store, sample_bookinstance, sample_book):
        copy = await store.bookinstances.find_by_id(sample_bookinstance.id, populate=("book",))

        assert copy.book.title == "Foundation"
        assert copy.book_id == sample_book.id


class TestGenreSet:
    """Tests for the book's genre list."""

    @pytest.mark.asyncio
    async def test_find_books_by_genre(self, store, sample_book, sample_genre):
        other = await store.books.insert({
            "title": "Untagged", "author": "a", "summary": "s", "isbn": "i", "genre": [],
        })

        books = await store.books.find({"genre": sample_genre.id})

        assert [b.id for b in books] == [sample_book.id]
        assert other.id not in [b.id for b in books]

    @pytest.mark.asyncio
    async def test_repeated_genre_ids_collapse(self, store, sample_genre):
        book = await store.books.insert({
            "title": "Twice", "author": "a", "summary": "s", "isbn": "i",
            "genre": [sample_genre.id, sample_genre.id],
        })

        assert book.genre_ids == [sample_genre.id]

    @pytest.mark.asyncio
    async def test_update_replaces_genre_set(self, store, sample_book):
        updated = await store.books.update_by_id(sample_book.id, {"genre": []})

        assert updated.genre == []
        assert updated.title == "Foundation"

    @pytest.mark.asyncio
    async def test_delete_removes_genre_links(self, store, sample_book, sample_genre):
        assert await store.books.delete_by_id(sample_book.id)

        assert await store.books.find({"genre": sample_genre.id}) == []


class TestFindOneAndCount:
    """Tests for find_one() and count()."""

    @pytest.mark.asyncio
    async def test_find_one_ignoring_case(self, store, sample_genre):
        found = await store.genres.find_one({"name": "SCIENCE fiction"}, ignore_case=("name",))

        assert found.id == sample_genre.id

    @pytest.mark.asyncio
    async def test_find_one_ignoring_case_beyond_ascii(self, store):
        """Accented capitals fold the same way in the store and in the value."""
        genre = await store.genres.insert({"name": "Ética"})

        for name in ("Ética", "ética", "ÉTICA"):
            found = await store.genres.find_one({"name": name}, ignore_case=("name",))
            assert found is not None and found.id == genre.id

    @pytest.mark.asyncio
    async def test_find_one_exact_by_default(self, store, sample_genre):
        assert await store.genres.find_one({"name": "science fiction"}) is None

    @pytest.mark.asyncio
    async def test_count_with_filter(self, store, sample_bookinstance, sample_book):
        await store.bookinstances.insert({"book": sample_book.id, "imprint": "Second printing"})

        assert await store.bookinstances.count() == 2
        assert await store.bookinstances.count({"status": "Available"}) == 1

    @pytest.mark.asyncio
    async def test_gathered_reads(self, store, sample_book, sample_bookinstance):
        """Independent reads can run concurrently on the same store."""
        book, copies, genres = await asyncio.gather(
            store.books.find_by_id(sample_book.id),
            store.bookinstances.find({"book": sample_book.id}),
            store.genres.find(),
        )

        assert book.id == sample_book.id
        assert len(copies) == 1
        assert len(genres) == 1


class TestUpdateAndDelete:
    """Tests for update_by_id() and delete_by_id()."""

    @pytest.mark.asyncio
    async def test_update_unknown_id(self, store):
        assert await store.genres.update_by_id("0" * 24, {"name": "Nothing"}) is None

    @pytest.mark.asyncio
    async def test_delete_unknown_id(self, store):
        assert await store.genres.delete_by_id("0" * 24) is False

    @pytest.mark.asyncio
    async def test_update_keeps_id(self, store, sample_genre):
        updated = await store.genres.update_by_id(
            sample_genre.id, {"id": "other", "name": "Space Opera"}
        )

        assert updated.id == sample_genre.id
        assert updated.name == "Space Opera"


class TestSchemaRules:
    """Tests for persisted-value checks."""

    @pytest.mark.asyncio
    async def test_defaults_for_new_copy(self, store, sample_book):
        copy = await store.bookinstances.insert({"book": sample_book.id, "imprint": "Ace"})

        assert copy.status == "Maintenance"
        assert copy.due_back is not None

    @pytest.mark.asyncio
    async def test_status_outside_domain(self, store, sample_book):
        with pytest.raises(SchemaViolation):
            await store.bookinstances.insert({
                "book": sample_book.id,
                "imprint": "Ace",
                "status": "Lost",
            })

        assert await store.bookinstances.count() == 0

    @pytest.mark.asyncio
    async def test_required_text(self, store):
        with pytest.raises(SchemaViolation):
            await store.genres.insert({"name": ""})
