import pytest

from openai_tools.errors import ConfigError, NotFoundError
from openai_tools.models.files import FilePurpose
from openai_tools.services.files import Files

FILE_OBJECT = {
    "id": "file-abc",
    "object": "file",
    "bytes": 8,
    "created_at": 1700000000,
    "filename": "train.jsonl",
    "purpose": "fine-tune",
    "status": "processed",
}


@pytest.fixture
def files(server, openai_auth):
    """Provide a Files client wired to the mock server"""
    return Files(openai_auth, transport=server.transport)


class TestFiles:
    """Tests for the files client"""

    @pytest.mark.asyncio
    async def test_upload_bytes(self, server, files):
        server.respond(json_body=FILE_OBJECT)

        uploaded = await files.upload_bytes(b'{"a":1}\n', "train.jsonl", FilePurpose.FINE_TUNE)

        assert uploaded.id == "file-abc"
        request = server.last
        assert request.method == "POST"
        assert str(request.url) == "https://api.openai.com/v1/files"
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        assert b"fine-tune" in request.content
        assert b'filename="train.jsonl"' in request.content

    @pytest.mark.asyncio
    async def test_upload_from_path(self, server, files, tmp_path):
        path = tmp_path / "batch.jsonl"
        path.write_bytes(b"{}\n")
        server.respond(json_body=dict(FILE_OBJECT, filename="batch.jsonl", purpose="batch"))

        uploaded = await files.upload(path, "batch")

        assert uploaded.purpose == "batch"
        assert b'filename="batch.jsonl"' in server.last.content

    @pytest.mark.asyncio
    async def test_upload_missing_file(self, server, files, tmp_path):
        with pytest.raises(ConfigError):
            await files.upload(tmp_path / "missing.jsonl", FilePurpose.BATCH)
        assert server.requests == []

    @pytest.mark.asyncio
    async def test_unknown_purpose_rejected(self, server, files):
        with pytest.raises(ConfigError, match="file purpose"):
            await files.upload_bytes(b"x", "a.jsonl", "bogus")
        with pytest.raises(ConfigError):
            await files.list("bogus")
        assert server.requests == []

    @pytest.mark.asyncio
    async def test_list_with_purpose(self, server, files):
        server.respond(json_body={"object": "list", "data": [FILE_OBJECT], "has_more": False})

        listing = await files.list(FilePurpose.FINE_TUNE)

        assert [f.id for f in listing.data] == ["file-abc"]
        assert server.last.url.params["purpose"] == "fine-tune"

    @pytest.mark.asyncio
    async def test_retrieve_delete_content(self, server, files):
        server.respond(json_body=FILE_OBJECT)
        server.respond(json_body={"id": "file-abc", "object": "file", "deleted": True})
        server.respond(content=b"raw-bytes")

        assert (await files.retrieve("file-abc")).filename == "train.jsonl"
        assert str(server.last.url) == "https://api.openai.com/v1/files/file-abc"

        deleted = await files.delete("file-abc")
        assert deleted.deleted is True
        assert server.last.method == "DELETE"

        assert await files.content("file-abc") == b"raw-bytes"
        assert str(server.last.url) == "https://api.openai.com/v1/files/file-abc/content"

    @pytest.mark.asyncio
    async def test_empty_id(self, server, files):
        with pytest.raises(ConfigError):
            await files.retrieve("")
        assert server.requests == []

    @pytest.mark.asyncio
    async def test_not_found(self, server, files):
        server.respond(404, {"error": {"message": "No such File object: file-x", "type": "invalid_request_error"}})
        with pytest.raises(NotFoundError):
            await files.retrieve("file-x")
