"""
Tests for the BookInstance Workflow

Copies have no dependents. A blank status or due date falls back to the
schema defaults, and an out-of-domain status is rejected by the store.
"""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi import status

from catalog.errors import NotFound, SchemaViolation
from catalog.services import bookinstances
from catalog.services.outcomes import DeletePage, FormPage, Redirect
from tests.conftest import run


def utc_naive(value: datetime) -> datetime:
    """Compare aware and SQLite-naive timestamps on the same footing."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.replace(tzinfo=None)


class TestBookInstanceServices:
    """Tests for the book-instance service operations."""

    @pytest.mark.asyncio
    async def test_list_populates_book(self, store, sample_bookinstance):
        page = await bookinstances.list_page(store)

        assert page.title == "Book-instance list"
        assert page.items[0].book.title == "Foundation"

    @pytest.mark.asyncio
    async def test_detail_not_found(self, store):
        with pytest.raises(NotFound, match="Book copy not found"):
            await bookinstances.detail(store, "0" * 24)

    @pytest.mark.asyncio
    async def test_create_with_defaults(self, store, sample_book):
        before = datetime.now(timezone.utc) - timedelta(seconds=1)

        outcome = await bookinstances.create_submit(
            store, {"book": sample_book.id, "imprint": "Ace Books"}
        )

        after = datetime.now(timezone.utc) + timedelta(seconds=1)
        assert isinstance(outcome, Redirect)
        copy = (await store.bookinstances.find())[0]
        assert outcome.url == copy.url
        assert copy.status == "Maintenance"
        assert utc_naive(before) <= utc_naive(copy.due_back) <= utc_naive(after)

    @pytest.mark.asyncio
    async def test_create_with_status_and_date(self, store, sample_book):
        await bookinstances.create_submit(store, {
            "book": sample_book.id,
            "imprint": "Ace Books",
            "status": "Loaned",
            "due_back": "2026-12-01",
        })

        copy = (await store.bookinstances.find())[0]
        assert copy.status == "Loaned"
        assert copy.due_back_yyyy_mm_dd == "2026-12-01"

    @pytest.mark.asyncio
    async def test_create_with_offset_due_back(self, store, sample_book):
        """The stored date is the UTC date of an offset timestamp."""
        await bookinstances.create_submit(store, {
            "book": sample_book.id,
            "imprint": "Ace Books",
            "due_back": "2026-01-01T23:30:00-05:00",
        })

        copy = (await store.bookinstances.find())[0]
        assert utc_naive(copy.due_back) == datetime(2026, 1, 2, 4, 30)
        assert copy.due_back_yyyy_mm_dd == "2026-01-02"

    @pytest.mark.asyncio
    async def test_create_invalid_offers_books(self, store, sample_book):
        outcome = await bookinstances.create_submit(
            store, {"book": sample_book.id, "imprint": "", "due_back": "never"}
        )

        assert isinstance(outcome, FormPage)
        assert [e.message for e in outcome.errors] == ["Imprint must be specified", "Invalid date"]
        assert [(o.record.id, o.selected) for o in outcome.options["books"]] == [
            (sample_book.id, True)
        ]

    @pytest.mark.asyncio
    async def test_create_unknown_status_rejected(self, store, sample_book):
        with pytest.raises(SchemaViolation):
            await bookinstances.create_submit(
                store, {"book": sample_book.id, "imprint": "Ace", "status": "Lost"}
            )

        assert await store.bookinstances.count() == 0

    @pytest.mark.asyncio
    async def test_delete_form_is_never_blocked(self, store, sample_bookinstance):
        page = await bookinstances.delete_form(store, sample_bookinstance.id)

        assert isinstance(page, DeletePage)
        assert not page.is_blocked

    @pytest.mark.asyncio
    async def test_delete(self, store, sample_bookinstance):
        outcome = await bookinstances.delete_submit(store, sample_bookinstance.id)

        assert outcome == Redirect("/catalog/bookinstances")
        assert await store.bookinstances.count() == 0

    @pytest.mark.asyncio
    async def test_delete_form_missing_copy(self, store):
        outcome = await bookinstances.delete_form(store, "0" * 24)

        assert outcome == Redirect("/catalog/bookinstances")

    @pytest.mark.asyncio
    async def test_update_form_prefilled(self, store, sample_bookinstance, sample_book):
        page = await bookinstances.update_form(store, sample_bookinstance.id)

        assert page.draft.imprint == "Bantam Spectra, 1991."
        assert [o.selected for o in page.options["books"]] == [True]

    @pytest.mark.asyncio
    async def test_update_blank_status_resets_to_default(self, store, sample_bookinstance, sample_book):
        outcome = await bookinstances.update_submit(
            store, sample_bookinstance.id, {"book": sample_book.id, "imprint": "Reprint"}
        )

        assert outcome == Redirect(sample_bookinstance.url)
        copy = await store.bookinstances.find_by_id(sample_bookinstance.id)
        assert copy.imprint == "Reprint"
        assert copy.status == "Maintenance"

    @pytest.mark.asyncio
    async def test_update_missing_copy(self, store, sample_book):
        with pytest.raises(NotFound):
            await bookinstances.update_submit(
                store, "0" * 24, {"book": sample_book.id, "imprint": "Reprint"}
            )


class TestBookInstancePages:
    """Tests for the /catalog/bookinstance* endpoints."""

    def test_list_page(self, client, sample_bookinstance):
        response = client.get("/catalog/bookinstances")

        assert response.status_code == status.HTTP_200_OK
        assert "Foundation" in response.text
        assert "Available" in response.text

    def test_create_form_lists_statuses(self, client, sample_book):
        response = client.get("/catalog/bookinstance/create")

        assert response.status_code == status.HTTP_200_OK
        for value in ("Available", "Maintenance", "Loaned", "Reserved"):
            assert f'value="{value}"' in response.text

    def test_create_redirects(self, client, store, sample_book):
        response = client.post("/catalog/bookinstance/create", data={
            "book": sample_book.id,
            "imprint": "Ace Books",
            "status": "Reserved",
        })

        assert response.status_code == status.HTTP_302_FOUND
        copy = run(store.bookinstances.find())[0]
        assert response.headers["location"] == copy.url

    def test_unknown_status_is_bad_request(self, client, sample_book):
        response = client.post("/catalog/bookinstance/create", data={
            "book": sample_book.id,
            "imprint": "Ace Books",
            "status": "Lost",
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_detail_page(self, client, sample_bookinstance):
        response = client.get(sample_bookinstance.url)

        assert response.status_code == status.HTTP_200_OK
        assert sample_bookinstance.id in response.text

    def test_detail_not_found(self, client):
        response = client.get(f"/catalog/bookinstance/{'0' * 24}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "Book copy not found" in response.text

    def test_delete(self, client, store, sample_bookinstance):
        response = client.post(f"{sample_bookinstance.url}/delete")

        assert response.status_code == status.HTTP_302_FOUND
        assert response.headers["location"] == "/catalog/bookinstances"
        assert run(store.bookinstances.count()) == 0
