"""
Employee Directory API - Document Repository Tests
===================================================

What we test:
    ✅ In-memory adapter: CRUD, isolation between instances, copy semantics
    ✅ Adapter boundary: timeouts → StoreTimeoutError, backend errors → StoreError
    ✅ SQL adapter against a temporary SQLite file (aiosqlite)
    ✅ Firestore adapter against a mocked AsyncClient
    ✅ build_repository picks the adapter named by DOCUMENT_STORE
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio

from employee_directory.config import Settings
from employee_directory.exceptions import NotFoundError, StoreError, StoreTimeoutError
from employee_directory.repositories import build_repository
from employee_directory.repositories.firestore import FirestoreDocumentRepository
from employee_directory.repositories.memory import InMemoryDocumentRepository
from employee_directory.repositories.sql import SqlDocumentRepository


class TestInMemoryRepository:

    @pytest.mark.asyncio
    async def test_create_and_get(self, repository):
        document_id = await repository.create_document("branches", {"name": "HQ"})

        document = await repository.get_document_by_id("branches", document_id)

        assert document.id == document_id
        assert document.data == {"name": "HQ"}
        assert document.exists

    @pytest.mark.asyncio
    async def test_ids_are_unique_strings(self, repository):
        ids = {await repository.create_document("branches", {}) for _ in range(20)}
        assert len(ids) == 20
        assert all(isinstance(i, str) and len(i) == 20 for i in ids)

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, repository):
        assert await repository.get_document_by_id("branches", "nope") is None

    @pytest.mark.asyncio
    async def test_collections_are_separate(self, repository):
        await repository.create_document("branches", {"name": "HQ"})
        assert await repository.get_documents("employees") == []

    @pytest.mark.asyncio
    async def test_instances_share_nothing(self):
        first = InMemoryDocumentRepository()
        second = InMemoryDocumentRepository()
        await first.create_document("branches", {"name": "HQ"})
        assert await second.get_documents("branches") == []

    @pytest.mark.asyncio
    async def test_update_overwrites_supplied_keys(self, repository):
        document_id = await repository.create_document("branches", {"name": "HQ", "phone": "1"})

        await repository.update_document("branches", document_id, {"phone": "2"})

        document = await repository.get_document_by_id("branches", document_id)
        assert document.data == {"name": "HQ", "phone": "2"}

    @pytest.mark.asyncio
    async def test_update_missing_is_a_store_error(self, repository):
        with pytest.raises(StoreError):
            await repository.update_document("branches", "nope", {"phone": "2"})

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, repository):
        document_id = await repository.create_document("branches", {"name": "HQ"})
        await repository.delete_document("branches", document_id)
        await repository.delete_document("branches", document_id)
        assert await repository.get_documents("branches") == []

    @pytest.mark.asyncio
    async def test_reads_return_copies(self, repository):
        data = {"name": "HQ"}
        document_id = await repository.create_document("branches", data)
        data["name"] = "changed"

        document = await repository.get_document_by_id("branches", document_id)
        document.data["name"] = "changed again"

        again = await repository.get_document_by_id("branches", document_id)
        assert again.data == {"name": "HQ"}

    @pytest.mark.asyncio
    async def test_custom_id_factory(self):
        repository = InMemoryDocumentRepository(id_factory=iter(["a", "b"]).__next__)
        assert await repository.create_document("branches", {}) == "a"
        assert await repository.create_document("branches", {}) == "b"


class SlowRepository(InMemoryDocumentRepository):
    """Every list call takes longer than any timeout used in these tests."""

    async def _list(self, collection):
        await asyncio.sleep(5)
        return []


class BrokenRepository(InMemoryDocumentRepository):

    async def _get(self, collection, document_id):
        raise ConnectionError("backend down")


class NotFoundRepository(InMemoryDocumentRepository):

    async def _get(self, collection, document_id):
        raise NotFoundError(resource="Branch", resource_id=document_id)


class TestAdapterBoundary:

    @pytest.mark.asyncio
    async def test_timeout_raises_store_timeout(self):
        repository = SlowRepository(timeout=0.05)

        with pytest.raises(StoreTimeoutError) as exc_info:
            await repository.get_documents("branches")

        assert exc_info.value.timeout == 0.05
        assert exc_info.value.context["operation"] == "get_documents"

    @pytest.mark.asyncio
    async def test_backend_exception_wrapped(self):
        repository = BrokenRepository()

        with pytest.raises(StoreError) as exc_info:
            await repository.get_document_by_id("branches", "x")

        assert not isinstance(exc_info.value, StoreTimeoutError)
        assert "backend down" not in exc_info.value.message
        assert exc_info.value.context["error_type"] == "ConnectionError"
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    @pytest.mark.asyncio
    async def test_application_errors_pass_through(self):
        repository = NotFoundRepository()

        with pytest.raises(NotFoundError):
            await repository.get_document_by_id("branches", "x")

    def test_default_timeout_from_settings(self):
        from employee_directory.config import settings

        assert InMemoryDocumentRepository().timeout == settings.store_timeout_seconds


class TestSqlRepository:

    @pytest_asyncio.fixture
    async def sql_repository(self, tmp_path):
        repository = SqlDocumentRepository(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", timeout=5.0)
        await repository.initialize()
        yield repository
        await repository.close()

    @pytest.mark.asyncio
    async def test_crud_round(self, sql_repository):
        document_id = await sql_repository.create_document(
            "employees", {"name": "Alice", "branchId": "1"}
        )

        document = await sql_repository.get_document_by_id("employees", document_id)
        assert document.data == {"name": "Alice", "branchId": "1"}

        await sql_repository.update_document("employees", document_id, {"name": "Alicia"})
        document = await sql_repository.get_document_by_id("employees", document_id)
        assert document.data == {"name": "Alicia", "branchId": "1"}

        await sql_repository.delete_document("employees", document_id)
        assert await sql_repository.get_document_by_id("employees", document_id) is None

    @pytest.mark.asyncio
    async def test_list_is_scoped_to_collection(self, sql_repository):
        first = await sql_repository.create_document("branches", {"name": "A"})
        second = await sql_repository.create_document("branches", {"name": "B"})
        await sql_repository.create_document("employees", {"name": "C"})

        documents = await sql_repository.get_documents("branches")

        assert {d.id for d in documents} == {first, second}

    @pytest.mark.asyncio
    async def test_update_missing_is_a_store_error(self, sql_repository):
        with pytest.raises(StoreError):
            await sql_repository.update_document("branches", "nope", {"name": "X"})


class TestFirestoreRepository:

    @pytest.fixture
    def client(self):
        """MagicMock shaped like google.cloud.firestore.AsyncClient."""
        client = MagicMock()
        collection = MagicMock()
        document = MagicMock()
        client.collection.return_value = collection
        collection.document.return_value = document
        collection.add = AsyncMock(return_value=(None, MagicMock(id="fs-1")))
        collection.get = AsyncMock()
        document.get = AsyncMock()
        document.update = AsyncMock()
        document.delete = AsyncMock()
        return client

    @staticmethod
    def snapshot(document_id, data, exists=True):
        snap = MagicMock()
        snap.id = document_id
        snap.exists = exists
        snap.to_dict.return_value = data
        return snap

    @pytest.mark.asyncio
    async def test_create_returns_generated_id(self, client):
        repository = FirestoreDocumentRepository(client, timeout=1.0)

        document_id = await repository.create_document("branches", {"name": "HQ"})

        assert document_id == "fs-1"
        client.collection.assert_called_with("branches")
        client.collection.return_value.add.assert_awaited_once_with({"name": "HQ"})

    @pytest.mark.asyncio
    async def test_list_maps_snapshots(self, client):
        client.collection.return_value.get.return_value = [
            self.snapshot("a", {"name": "A"}),
            self.snapshot("b", {"name": "B"}),
        ]
        repository = FirestoreDocumentRepository(client, timeout=1.0)

        documents = await repository.get_documents("branches")

        assert [(d.id, d.data) for d in documents] == [("a", {"name": "A"}), ("b", {"name": "B"})]

    @pytest.mark.asyncio
    async def test_get_keeps_exists_flag(self, client):
        client.collection.return_value.document.return_value.get.return_value = self.snapshot(
            "x", None, exists=False
        )
        repository = FirestoreDocumentRepository(client, timeout=1.0)

        document = await repository.get_document_by_id("branches", "x")

        assert document.exists is False
        assert document.data == {}

    @pytest.mark.asyncio
    async def test_update_and_delete(self, client):
        repository = FirestoreDocumentRepository(client, timeout=1.0)
        reference = client.collection.return_value.document.return_value

        await repository.update_document("branches", "x", {"phone": "2"})
        await repository.delete_document("branches", "x")

        reference.update.assert_awaited_once_with({"phone": "2"})
        reference.delete.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_client_errors_wrapped(self, client):
        client.collection.return_value.get.side_effect = RuntimeError("permission denied")
        repository = FirestoreDocumentRepository(client, timeout=1.0)

        with pytest.raises(StoreError):
            await repository.get_documents("branches")


class TestBuildRepository:

    def test_memory_by_default(self):
        repository = build_repository(Settings(document_store="memory", store_timeout_seconds=3))
        assert isinstance(repository, InMemoryDocumentRepository)
        assert repository.timeout == 3

    def test_sql(self, tmp_path):
        config = Settings(
            document_store="sql",
            database_url=f"sqlite+aiosqlite:///{tmp_path / 'build.db'}",
        )
        assert isinstance(build_repository(config), SqlDocumentRepository)
