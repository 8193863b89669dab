"""
QuickNotes — Notes API Tests
==============================

What:  End-to-end tests of the /api/notes endpoints over ASGI.
Why:   The wire contract (statuses, createdAt, message bodies) is what every
       client depends on, and a 2xx must mean the write is committed.
How:   HTTPX AsyncClient → FastAPI app → in-memory SQLite.
"""

import uuid
from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from quicknotes.database import get_db_session
from quicknotes.main import create_app


async def _create(client, title="Shopping", content="Milk, eggs"):
    response = await client.post("/api/notes", json={"title": title, "content": content})
    assert response.status_code == 201
    return response.json()


class TestListNotes:
    """Tests for GET /api/notes."""

    @pytest.mark.asyncio
    async def test_empty_list(self, test_client):
        """An empty store lists as an empty JSON array."""
        response = await test_client.get("/api/notes")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_list_is_newest_first(self, test_client):
        """Listed notes are ordered by createdAt, newest first."""
        created = [await _create(test_client, title=f"note {i}") for i in range(3)]

        listed = (await test_client.get("/api/notes")).json()

        stamps = [datetime.fromisoformat(n["createdAt"]) for n in listed]
        assert stamps == sorted(stamps, reverse=True)
        assert {n["id"] for n in listed} == {n["id"] for n in created}


class TestCreateNote:
    """Tests for POST /api/notes."""

    @pytest.mark.asyncio
    async def test_create_returns_wire_form(self, test_client):
        """The created note has exactly id, title, content and createdAt."""
        body = await _create(test_client)

        assert set(body) == {"id", "title", "content", "createdAt"}
        assert uuid.UUID(body["id"])
        assert body["title"] == "Shopping"
        assert body["content"] == "Milk, eggs"
        assert datetime.fromisoformat(body["createdAt"]).tzinfo is not None

    @pytest.mark.asyncio
    async def test_create_then_list_contains_exactly_one_new_note(self, test_client):
        """A created note appears in the next listing exactly once."""
        existing = await _create(test_client, title="old")
        new = await _create(test_client, title="new", content="body")

        listed = (await test_client.get("/api/notes")).json()
        matches = [n for n in listed if n["id"] == new["id"]]

        assert len(listed) == 2
        assert len(matches) == 1
        assert matches[0]["title"] == "new"
        assert matches[0]["content"] == "body"
        assert new["id"] != existing["id"]

    @pytest.mark.asyncio
    async def test_client_supplied_id_is_ignored(self, test_client):
        """The server always assigns the id."""
        forced = str(uuid.uuid4())
        response = await test_client.post(
            "/api/notes", json={"id": forced, "title": "t", "content": "c"}
        )
        assert response.status_code == 201
        assert response.json()["id"] != forced

    @pytest.mark.asyncio
    async def test_markup_is_stored_verbatim(self, test_client):
        """Markup in a note is stored and returned unchanged."""
        body = await _create(test_client, title="<h1>hi</h1>", content="<script>alert('x')</script>")
        listed = (await test_client.get("/api/notes")).json()
        assert listed[0]["id"] == body["id"]
        assert listed[0]["content"] == "<script>alert('x')</script>"

    @pytest.mark.asyncio
    async def test_missing_fields_rejected_with_400(self, test_client):
        """A missing content field is rejected and nothing is stored."""
        response = await test_client.post("/api/notes", json={"title": "only title"})
        assert response.status_code == 400
        assert "message" in response.json()

        listed = (await test_client.get("/api/notes")).json()
        assert listed == []

    @pytest.mark.asyncio
    async def test_wrong_type_rejected_with_400(self, test_client):
        """A non-string field is a 400 with a message-only body."""
        response = await test_client.post("/api/notes", json={"title": {"a": 1}, "content": "c"})
        assert response.status_code == 400
        assert set(response.json()) == {"message"}

    @pytest.mark.asyncio
    async def test_invalid_json_rejected_with_400(self, test_client):
        """A body that is not JSON is a 400, not a 422."""
        response = await test_client.post(
            "/api/notes",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400


class TestUpdateNote:
    """Tests for PUT /api/notes/{id}."""

    @pytest.mark.asyncio
    async def test_update_content_only_keeps_title(self, test_client):
        """Sending only content keeps the stored title and createdAt."""
        note = await _create(test_client)
        response = await test_client.put(
            f"/api/notes/{note['id']}", json={"content": "Milk, eggs, bread"}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["title"] == "Shopping"
        assert body["content"] == "Milk, eggs, bread"
        assert body["createdAt"] == note["createdAt"]

    @pytest.mark.asyncio
    async def test_update_title_only_keeps_content(self, test_client):
        """Sending only a title keeps the stored content."""
        note = await _create(test_client)
        body = (await test_client.put(f"/api/notes/{note['id']}", json={"title": "Groceries"})).json()
        assert body["title"] == "Groceries"
        assert body["content"] == "Milk, eggs"

    @pytest.mark.asyncio
    async def test_update_with_empty_values_changes_nothing(self, test_client):
        """Empty strings fall back to the stored values."""
        note = await _create(test_client)
        response = await test_client.put(
            f"/api/notes/{note['id']}", json={"title": "", "content": ""}
        )
        assert response.status_code == 200
        assert response.json() == note

    @pytest.mark.asyncio
    async def test_update_with_empty_body_changes_nothing(self, test_client):
        """An empty body is a successful no-op."""
        note = await _create(test_client)
        response = await test_client.put(f"/api/notes/{note['id']}", json={})
        assert response.json() == note

    @pytest.mark.asyncio
    async def test_update_persists(self, test_client):
        """The update is visible in the next listing."""
        note = await _create(test_client)
        await test_client.put(f"/api/notes/{note['id']}", json={"title": "A", "content": "B"})
        listed = (await test_client.get("/api/notes")).json()
        assert (listed[0]["title"], listed[0]["content"]) == ("A", "B")

    @pytest.mark.asyncio
    async def test_update_unknown_id_is_404(self, test_client):
        """An unknown id is a 404 with the not-found message."""
        response = await test_client.put(f"/api/notes/{uuid.uuid4()}", json={"title": "x"})
        assert response.status_code == 404
        assert response.json() == {"message": "Note not found"}

    @pytest.mark.asyncio
    async def test_update_malformed_id_is_404(self, test_client):
        """A malformed id is reported as not found."""
        response = await test_client.put("/api/notes/not-an-id", json={"title": "x"})
        assert response.status_code == 404


class TestDeleteNote:
    """Tests for DELETE /api/notes/{id}."""

    @pytest.mark.asyncio
    async def test_delete_existing(self, test_client):
        """Deleting a note confirms and removes it from the listing."""
        note = await _create(test_client)

        response = await test_client.delete(f"/api/notes/{note['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Note deleted"}
        listed = (await test_client.get("/api/notes")).json()
        assert note["id"] not in {n["id"] for n in listed}

    @pytest.mark.asyncio
    async def test_delete_unknown_is_404_and_list_unchanged(self, test_client):
        """Deleting an unknown id is a 404 and leaves the list alone."""
        note = await _create(test_client)

        response = await test_client.delete(f"/api/notes/{uuid.uuid4()}")

        assert response.status_code == 404
        assert response.json() == {"message": "Note not found"}
        listed = (await test_client.get("/api/notes")).json()
        assert listed == [note]


class TestScenario:
    """End-to-end walk through create, update and delete."""

    @pytest.mark.asyncio
    async def test_shopping_note_lifecycle(self, test_client):
        """Create, partially update, then delete a shopping note."""
        note = await _create(test_client, "Shopping", "Milk, eggs")
        listed = (await test_client.get("/api/notes")).json()
        assert [n["title"] for n in listed] == ["Shopping"]

        await test_client.put(f"/api/notes/{note['id']}", json={"content": "Milk, eggs, bread"})
        listed = (await test_client.get("/api/notes")).json()
        assert listed[0]["title"] == "Shopping"
        assert listed[0]["content"] == "Milk, eggs, bread"

        await test_client.delete(f"/api/notes/{note['id']}")
        assert (await test_client.get("/api/notes")).json() == []


class LostConnectionSession(AsyncSession):
    """A session whose commit always fails, as when the database drops mid-write."""

    async def commit(self) -> None:
        raise OperationalError("COMMIT", {}, Exception("connection lost"))


class TestCommitBeforeResponse:
    """A 2xx answer is only sent once the write is committed."""

    @staticmethod
    def _client_for(db_engine, session_class=AsyncSession):
        app = create_app()
        factory = async_sessionmaker(db_engine, class_=session_class, expire_on_commit=False)

        async def session_without_cleanup_commit():
            async with factory() as session:
                try:
                    yield session
                finally:
                    # Anything not committed by the handler is discarded here
                    await session.rollback()

        app.dependency_overrides[get_db_session] = session_without_cleanup_commit
        return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")

    @pytest.mark.asyncio
    async def test_created_note_is_listed_without_cleanup_commit(self, db_engine):
        """The handler commits, so nothing depends on code that runs after the response."""
        async with self._client_for(db_engine) as client:
            created = await _create(client)
            listed = (await client.get("/api/notes")).json()

        assert [n["id"] for n in listed] == [created["id"]]

    @pytest.mark.asyncio
    async def test_update_and_delete_are_committed(self, db_engine):
        """Update and delete are visible to the very next request."""
        async with self._client_for(db_engine) as client:
            note = await _create(client)
            await client.put(f"/api/notes/{note['id']}", json={"title": "Groceries"})
            assert (await client.get("/api/notes")).json()[0]["title"] == "Groceries"

            await client.delete(f"/api/notes/{note['id']}")
            assert (await client.get("/api/notes")).json() == []

    @pytest.mark.asyncio
    async def test_failed_commit_is_500_not_201(self, db_engine):
        """A commit that fails is reported to the caller and nothing is stored."""
        async with self._client_for(db_engine, LostConnectionSession) as client:
            response = await client.post("/api/notes", json={"title": "t", "content": "c"})
            assert response.status_code == 500
            assert response.json() == {"message": "Could not save the note. Please try again."}

        async with self._client_for(db_engine) as client:
            assert (await client.get("/api/notes")).json() == []
