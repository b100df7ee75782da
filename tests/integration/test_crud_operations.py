"""
Test suite for DocumentCRUD and ChunkCRUD.

System role: Verification of document and chunk persistence
"""

import uuid

from docqa.boundary.db.CRUD.chunk_crud import chunk_crud
from docqa.boundary.db.CRUD.document_crud import document_crud
from docqa.boundary.db.models.chunk_model import ChunkModel


class TestDocumentCRUD:
    """Test suite for DocumentCRUD."""

    async def test_create_should_persist_access_labels(self, test_async_db) -> None:
        # Act
        document = await document_crud.create(
            test_async_db,
            title="Rota",
            file_path="/rag_files/1_rota.txt",
            allowed_locations=["Sydney"],
            allowed_positions=None,
            allowed_websites=["intranet", "portal"],
        )
        await test_async_db.commit()

        # Assert
        loaded = await document_crud.get_by_id(test_async_db, document.id)
        assert loaded.title == "Rota"
        assert loaded.allowed_locations == ["Sydney"]
        assert loaded.allowed_positions is None
        assert loaded.allowed_websites == ["intranet", "portal"]
        assert loaded.created_at is not None

    async def test_update_by_id_should_change_fields(self, test_async_db, sample_document) -> None:
        updated = await document_crud.update_by_id(test_async_db, sample_document.id, title="Handbook v2")

        assert updated.title == "Handbook v2"

    async def test_update_by_id_should_return_none_for_unknown(self, test_async_db) -> None:
        assert await document_crud.update_by_id(test_async_db, uuid.uuid4(), title="x") is None

    async def test_delete_by_id_should_report_outcome(self, test_async_db, sample_document) -> None:
        assert await document_crud.delete_by_id(test_async_db, sample_document.id) is True
        assert await document_crud.delete_by_id(test_async_db, sample_document.id) is False
        assert not await document_crud.exists(test_async_db, sample_document.id)

    async def test_get_page_should_paginate_and_count(self, test_async_db) -> None:
        for i in range(3):
            await document_crud.create(test_async_db, title=f"Doc {i}", file_path=f"/rag_files/{i}_doc.txt")
        await test_async_db.commit()

        page = await document_crud.get_page(test_async_db, limit=2, offset=0)
        rest = await document_crud.get_page(test_async_db, limit=2, offset=2)

        assert len(page) == 2
        assert len(rest) == 1
        assert {d.id for d in page}.isdisjoint({d.id for d in rest})
        assert await document_crud.count(test_async_db) == 3

    async def test_get_page_should_filter_by_title_case_insensitively(self, test_async_db) -> None:
        # Arrange
        for title in ("Employee Handbook", "Leave policy", "handbook appendix"):
            await document_crud.create(test_async_db, title=title, file_path=f"/rag_files/1_{title}.txt")
        await test_async_db.commit()

        # Act
        page = await document_crud.get_page(test_async_db, search="HANDBOOK")

        # Assert
        assert {d.title for d in page} == {"Employee Handbook", "handbook appendix"}
        assert await document_crud.count_matching(test_async_db, search="HANDBOOK") == 2
        assert await document_crud.count_matching(test_async_db) == 3

    async def test_search_should_treat_wildcards_literally(self, test_async_db) -> None:
        await document_crud.create(test_async_db, title="100% attendance", file_path="/rag_files/1_a.txt")
        await document_crud.create(test_async_db, title="1000 attendees", file_path="/rag_files/1_b.txt")
        await test_async_db.commit()

        page = await document_crud.get_page(test_async_db, search="0%")

        assert [d.title for d in page] == ["100% attendance"]

    async def test_search_should_match_exact_document_id(self, test_async_db, sample_document) -> None:
        await document_crud.create(test_async_db, title="Other", file_path="/rag_files/1_other.txt")
        await test_async_db.commit()

        page = await document_crud.get_page(test_async_db, search=str(sample_document.id))

        assert [d.id for d in page] == [sample_document.id]

    async def test_get_access_labels_should_project_labels(self, test_async_db) -> None:
        document = await document_crud.create(
            test_async_db,
            title="Scoped",
            file_path="/rag_files/1_scoped.txt",
            allowed_positions=["Nurse"],
        )

        rows = await document_crud.get_access_labels(test_async_db)

        assert len(rows) == 1
        assert rows[0].id == document.id
        assert rows[0].allowed_positions == ["Nurse"]
        assert rows[0].allowed_locations is None


class TestChunkCRUD:
    """Test suite for ChunkCRUD."""

    async def test_get_by_document_id_should_order_by_index(
        self, test_async_db, vector_store, sample_document
    ) -> None:
        for index, content in enumerate(["zero", "one", "two"]):
            await vector_store.put_chunk(test_async_db, sample_document.id, index, content)

        chunks = await chunk_crud.get_by_document_id(test_async_db, sample_document.id)

        assert [c.content for c in chunks] == ["zero", "one", "two"]

    async def test_counts_should_track_embedding_progress(
        self, test_async_db, vector_store, sample_document, make_axis_vector
    ) -> None:
        first = await vector_store.put_chunk(test_async_db, sample_document.id, 0, "zero")
        await vector_store.put_chunk(test_async_db, sample_document.id, 1, "one")
        await vector_store.set_embedding(test_async_db, first, make_axis_vector(1))

        assert await chunk_crud.count_by_document_id(test_async_db, sample_document.id) == 2
        assert await chunk_crud.count_embedded_by_document_id(test_async_db, sample_document.id) == 1

    async def test_delete_by_document_id_should_leave_other_documents(
        self, test_async_db, vector_store, sample_document
    ) -> None:
        other = await document_crud.create(test_async_db, title="Other", file_path="/rag_files/2_o.txt")
        await vector_store.put_chunk(test_async_db, sample_document.id, 0, "mine")
        await vector_store.put_chunk(test_async_db, other.id, 0, "theirs")

        deleted = await chunk_crud.delete_by_document_id(test_async_db, sample_document.id)

        assert deleted == 1
        assert await chunk_crud.count_by_document_id(test_async_db, other.id) == 1


class TestSchema:
    """Test suite for the declarative base shared by both tables."""

    def test_foreign_key_should_follow_naming_convention(self) -> None:
        fk_names = {fk.name for fk in ChunkModel.__table__.foreign_key_constraints}

        assert fk_names == {"fk_document_chunks_document_id_documents"}

    async def test_ids_and_timestamps_should_be_assigned_on_insert(self, test_async_db) -> None:
        document = await document_crud.create(test_async_db, title="Rota", file_path="/rag_files/1_rota.txt")

        assert isinstance(document.id, uuid.UUID)
        assert document.created_at is not None
        assert document.updated_at is not None
