"""
BlockNotes — Note Service Unit Tests
======================================

What:  NoteService business rules against a mocked AsyncSession.
How:   No database; execute() results are shaped with MagicMock.

What we test:
    ✅ Id parsing: missing and malformed ids are ValidationErrors
    ✅ get/update/delete raise NotFoundError for unknown ids
    ✅ Writes convert legacy string content to block arrays
    ✅ Unexpected driver errors are wrapped in DatabaseError
"""

import pytest
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

from blocknotes.exceptions import DatabaseError, NotFoundError, ValidationError
from blocknotes.models.note import Note
from blocknotes.schemas.note import NoteCreate, NoteUpdate
from blocknotes.services.note_service import NoteService, parse_note_id


class TestParseNoteId:

    def test_valid_uuid(self):
        raw = str(uuid4())
        assert parse_note_id(raw) == UUID(raw)

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_missing_id(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            parse_note_id(raw)
        assert exc_info.value.message == "Note ID is required"
        assert exc_info.value.field == "id"

    @pytest.mark.parametrize("raw", ["not-a-uuid", "123", "65f1c2e4a1b2c3d4e5f60718"])
    def test_malformed_id(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            parse_note_id(raw)
        assert exc_info.value.message == "Invalid note ID"


class TestNoteServiceGet:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_get_note_found(self, mock_db_session, sample_note, scalar_result):
        mock_db_session.execute.return_value = scalar_result(sample_note)

        result = await self.service.get_note(mock_db_session, str(sample_note.id))

        assert result.note.id == str(sample_note.id)
        assert result.note.title == "Groceries"
        assert result.note.content == sample_note.content

    @pytest.mark.asyncio
    async def test_get_note_not_found(self, mock_db_session, scalar_result):
        mock_db_session.execute.return_value = scalar_result(None)

        with pytest.raises(NotFoundError):
            await self.service.get_note(mock_db_session, str(uuid4()))

    @pytest.mark.asyncio
    async def test_invalid_id_never_reaches_database(self, mock_db_session):
        with pytest.raises(ValidationError):
            await self.service.get_note(mock_db_session, "not-a-uuid")

        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_driver_error_becomes_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = RuntimeError("connection reset")

        with pytest.raises(DatabaseError):
            await self.service.get_note(mock_db_session, str(uuid4()))


class TestNoteServiceList:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_list_notes(self, mock_db_session, sample_note):
        result_mock = MagicMock()
        result_mock.scalars.return_value.all.return_value = [sample_note]
        mock_db_session.execute.return_value = result_mock

        result = await self.service.list_notes(mock_db_session)

        assert result.collection == "notes"
        assert [n.id for n in result.data] == [str(sample_note.id)]

    @pytest.mark.asyncio
    async def test_list_notes_empty(self, mock_db_session):
        result_mock = MagicMock()
        result_mock.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = result_mock

        result = await self.service.list_notes(mock_db_session)

        assert result.data == []

    @pytest.mark.asyncio
    async def test_list_notes_database_failure(self, mock_db_session):
        mock_db_session.execute.side_effect = RuntimeError("boom")

        with pytest.raises(DatabaseError):
            await self.service.list_notes(mock_db_session)


class TestNoteServiceWrite:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_create_note_with_empty_content(self, mock_db_session):
        result = await self.service.create_note(
            mock_db_session, NoteCreate(title="Untitled Note", content=[])
        )

        added = mock_db_session.add.call_args[0][0]
        assert isinstance(added, Note)
        assert added.title == "Untitled Note"
        assert added.content == []
        assert added.created_at == added.updated_at
        assert result.success is True
        assert result.id == str(added.id)
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_note_converts_legacy_string(self, mock_db_session):
        await self.service.create_note(mock_db_session, NoteCreate(title="Old", content="plain text"))

        added = mock_db_session.add.call_args[0][0]
        assert len(added.content) == 1
        assert added.content[0]["type"] == "text"
        assert added.content[0]["content"] == "plain text"

    @pytest.mark.asyncio
    async def test_create_note_flush_failure(self, mock_db_session):
        mock_db_session.flush.side_effect = RuntimeError("disk full")

        with pytest.raises(DatabaseError):
            await self.service.create_note(mock_db_session, NoteCreate(title="x"))

    @pytest.mark.asyncio
    async def test_update_note_replaces_title_and_content(
        self, mock_db_session, sample_note, scalar_result
    ):
        mock_db_session.execute.return_value = scalar_result(sample_note)
        before = sample_note.updated_at
        payload = NoteUpdate(
            id=str(sample_note.id),
            title="Renamed",
            content=[{"id": "x", "type": "text", "content": "new body"}],
        )

        result = await self.service.update_note(mock_db_session, payload)

        assert result.success is True
        assert sample_note.title == "Renamed"
        assert sample_note.content == [{"id": "x", "type": "text", "content": "new body"}]
        assert sample_note.updated_at > before

    @pytest.mark.asyncio
    async def test_update_note_requires_id(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.update_note(mock_db_session, NoteUpdate(title="x"))

        assert exc_info.value.message == "Note ID is required"

    @pytest.mark.asyncio
    async def test_update_note_not_found(self, mock_db_session, scalar_result):
        mock_db_session.execute.return_value = scalar_result(None)

        with pytest.raises(NotFoundError):
            await self.service.update_note(
                mock_db_session, NoteUpdate(id=str(uuid4()), title="x")
            )

    @pytest.mark.asyncio
    async def test_delete_note(self, mock_db_session, sample_note, scalar_result):
        mock_db_session.execute.return_value = scalar_result(sample_note)

        result = await self.service.delete_note(mock_db_session, str(sample_note.id))

        assert result.success is True
        mock_db_session.delete.assert_awaited_once_with(sample_note)

    @pytest.mark.asyncio
    async def test_delete_note_missing_id(self, mock_db_session):
        with pytest.raises(ValidationError):
            await self.service.delete_note(mock_db_session, None)

    @pytest.mark.asyncio
    async def test_delete_note_database_failure(self, mock_db_session, sample_note, scalar_result):
        mock_db_session.execute.return_value = scalar_result(sample_note)
        mock_db_session.delete = AsyncMock(side_effect=RuntimeError("locked"))

        with pytest.raises(DatabaseError):
            await self.service.delete_note(mock_db_session, str(sample_note.id))
