"""
Tests for the Author Workflow

Service-level tests call catalog.services.authors directly; the HTTP
tests go through /catalog/author* endpoints.
"""

import pytest
from fastapi import status

from catalog.errors import NotFound
from catalog.services import authors
from catalog.services.outcomes import DeletePage, FormPage, Redirect
from tests.conftest import run

VALID_AUTHOR = {
    "first_name": "Ursula",
    "family_name": "LeGuin",
    "date_of_birth": "1929-10-21",
    "date_of_death": "2018-01-22",
}


class TestAuthorServices:
    """Tests for the author service operations."""

    @pytest.mark.asyncio
    async def test_list_sorted_by_family_name(self, store):
        for family_name in ("Zelazny", "Banks"):
            await store.authors.insert({"first_name": "A", "family_name": family_name})

        page = await authors.list_page(store)

        assert page.title == "Author list"
        assert [a.family_name for a in page.items] == ["Banks", "Zelazny"]

    @pytest.mark.asyncio
    async def test_detail_lists_books(self, store, sample_author, sample_book):
        page = await authors.detail(store, sample_author.id)

        assert page.record.name == "Asimov, Isaac"
        assert [b.title for b in page.related] == ["Foundation"]

    @pytest.mark.asyncio
    async def test_detail_not_found(self, store):
        with pytest.raises(NotFound, match="Author not found"):
            await authors.detail(store, "0" * 24)

    @pytest.mark.asyncio
    async def test_create_redirects_to_detail(self, store):
        outcome = await authors.create_submit(store, VALID_AUTHOR)

        assert isinstance(outcome, Redirect)
        created = (await store.authors.find())[0]
        assert outcome.url == created.url
        assert created.name == "LeGuin, Ursula"

    @pytest.mark.asyncio
    async def test_create_invalid_stores_nothing(self, store):
        outcome = await authors.create_submit(store, {"first_name": "", "family_name": "O'Brien"})

        assert isinstance(outcome, FormPage)
        assert [e.message for e in outcome.errors] == [
            "First name must be specified.",
            "First name has non-alphanumeric characters.",
            "Family name has non-alphanumeric characters.",
        ]
        assert outcome.draft.family_name == "O&#x27;Brien"
        assert await store.authors.count() == 0

    @pytest.mark.asyncio
    async def test_delete_form_lists_books(self, store, sample_author, sample_book):
        page = await authors.delete_form(store, sample_author.id)

        assert isinstance(page, DeletePage)
        assert page.is_blocked
        assert [b.id for b in page.dependents] == [sample_book.id]

    @pytest.mark.asyncio
    async def test_delete_refused_while_books_refer(self, store, sample_author, sample_book):
        outcome = await authors.delete_submit(store, sample_author.id)

        assert isinstance(outcome, DeletePage)
        assert [b.title for b in outcome.dependents] == ["Foundation"]
        assert await store.authors.find_by_id(sample_author.id) is not None

    @pytest.mark.asyncio
    async def test_delete_without_books(self, store, sample_author):
        outcome = await authors.delete_submit(store, sample_author.id)

        assert outcome == Redirect("/catalog/authors")
        page = await authors.list_page(store)
        assert sample_author.id not in [a.id for a in page.items]

    @pytest.mark.asyncio
    async def test_delete_form_for_deleted_author_redirects(self, store, sample_author):
        await store.authors.delete_by_id(sample_author.id)

        outcome = await authors.delete_form(store, sample_author.id)

        assert outcome == Redirect("/catalog/authors")

    @pytest.mark.asyncio
    async def test_update_form_prefilled(self, store, sample_author):
        page = await authors.update_form(store, sample_author.id)

        assert page.draft.first_name == "Isaac"
        assert page.draft.date_of_birth_yyyy_mm_dd == "1920-01-02"

    @pytest.mark.asyncio
    async def test_update_form_not_found(self, store):
        with pytest.raises(NotFound):
            await authors.update_form(store, "0" * 24)

    @pytest.mark.asyncio
    async def test_update_keeps_id(self, store, sample_author):
        outcome = await authors.update_submit(
            store, sample_author.id, {"first_name": "Isaac", "family_name": "Azimov"}
        )

        assert outcome == Redirect(sample_author.url)
        author = await store.authors.find_by_id(sample_author.id)
        assert author.family_name == "Azimov"
        assert author.date_of_birth is None

    @pytest.mark.asyncio
    async def test_update_invalid_keeps_draft_id(self, store, sample_author):
        outcome = await authors.update_submit(store, sample_author.id, {"first_name": "Isaac"})

        assert isinstance(outcome, FormPage)
        assert outcome.draft.id == sample_author.id

    @pytest.mark.asyncio
    async def test_update_missing_author(self, store):
        with pytest.raises(NotFound):
            await authors.update_submit(store, "0" * 24, VALID_AUTHOR)


class TestAuthorPages:
    """Tests for the /catalog/author* endpoints."""

    def test_list_page(self, client, sample_author):
        response = client.get("/catalog/authors")

        assert response.status_code == status.HTTP_200_OK
        assert "Asimov, Isaac" in response.text
        assert "Jan 2, 1920 - Apr 6, 1992" in response.text

    def test_create_form(self, client):
        response = client.get("/catalog/author/create")

        assert response.status_code == status.HTTP_200_OK
        assert 'name="first_name"' in response.text

    def test_create_redirects(self, client, store):
        response = client.post("/catalog/author/create", data=VALID_AUTHOR)

        assert response.status_code == status.HTTP_302_FOUND
        created = run(store.authors.find())[0]
        assert response.headers["location"] == created.url

    def test_create_invalid_rerenders_form(self, client):
        response = client.post("/catalog/author/create", data={"first_name": "<b>", "family_name": ""})

        assert response.status_code == status.HTTP_200_OK
        assert "First name has non-alphanumeric characters." in response.text
        assert "Family name must be specified." in response.text
        assert "<b>" not in response.text

    def test_detail_not_found_page(self, client):
        response = client.get(f"/catalog/author/{'0' * 24}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "Author not found" in response.text

    def test_delete_blocked_page(self, client, sample_author, sample_book):
        response = client.post(f"/catalog/author/{sample_author.id}/delete")

        assert response.status_code == status.HTTP_200_OK
        assert "Delete the following books" in response.text
        assert "Foundation" in response.text

    def test_delete_redirects_to_list(self, client, store, sample_author):
        response = client.post(f"/catalog/author/{sample_author.id}/delete")

        assert response.status_code == status.HTTP_302_FOUND
        assert response.headers["location"] == "/catalog/authors"
        assert run(store.authors.count()) == 0

    def test_delete_form_for_missing_author_redirects(self, client):
        response = client.get(f"/catalog/author/{'0' * 24}/delete")

        assert response.status_code == status.HTTP_302_FOUND
        assert response.headers["location"] == "/catalog/authors"

    def test_update_form_not_found(self, client):
        response = client.get(f"/catalog/author/{'0' * 24}/update")

        assert response.status_code == status.HTTP_404_NOT_FOUND
