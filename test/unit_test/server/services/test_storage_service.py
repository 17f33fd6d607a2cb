"""Unit tests for the local job photo storage."""

import io
import re

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from jobdispatch.core.errors import InvalidRequestError
from jobdispatch.server.core.config import StorageConfig
from jobdispatch.server.services.storage import LocalPhotoStorage, file_extension, get_storage

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


@pytest.fixture
def storage(tmp_path) -> LocalPhotoStorage:
    return LocalPhotoStorage(StorageConfig(directory=str(tmp_path)))


class TestFileExtension:
    @pytest.mark.parametrize(
        "filename,content_type,expected",
        [
            ("photo.JPG", "image/jpeg", "jpg"),
            ("archive.tar.png", "image/png", "png"),
            ("no-extension", "image/webp", "webp"),
            (None, "image/svg+xml", "svg"),
            ("weird.p$n%g", "image/png", "png"),
            (None, "", "bin"),
        ],
    )
    def test_extension(self, filename, content_type, expected):
        assert file_extension(filename, content_type) == expected


class TestValidation:
    def test_rejects_large_files(self, tmp_path):
        storage = LocalPhotoStorage(StorageConfig(directory=str(tmp_path), max_upload_bytes=1024 * 1024))
        with pytest.raises(InvalidRequestError, match="File size exceeds 1MB limit"):
            storage.validate("image/png", 1024 * 1024 + 1)

    @pytest.mark.parametrize("content_type", [None, "", "application/pdf", "text/plain"])
    def test_rejects_non_images(self, storage, content_type):
        with pytest.raises(InvalidRequestError, match="File must be an image"):
            storage.validate(content_type, 10)

    def test_accepts_image_at_limit(self, storage):
        storage.validate("image/jpeg", storage.config.max_upload_bytes)


class TestNamingAndUrls:
    def test_object_name_layout(self, storage):
        name = storage.object_name("card-1", "photo.jpg", "image/jpeg")
        assert re.fullmatch(r"card-1/\d{13}-[0-9a-f]{8}\.jpg", name)

    def test_object_names_are_unique(self, storage):
        names = {storage.object_name("card-1", "a.png", "image/png") for _ in range(20)}
        assert len(names) == 20

    def test_relative_public_url(self, storage):
        assert storage.public_url("card-1/1-a.png") == "/media/job-photos/card-1/1-a.png"

    def test_absolute_public_url(self, tmp_path):
        storage = LocalPhotoStorage(
            StorageConfig(
                directory=str(tmp_path), public_base_url="https://api.example.com/", media_url_prefix="files/"
            )
        )
        assert storage.public_url("card-1/1-a.png") == "https://api.example.com/files/job-photos/card-1/1-a.png"


class TestSave:
    @pytest.mark.asyncio
    async def test_save_writes_file(self, storage, tmp_path):
        stored = await storage.save("card-1", "photo.png", "image/png", PNG_BYTES)

        path = tmp_path / "job-photos" / stored.file_name
        assert path.read_bytes() == PNG_BYTES
        assert stored.size == len(PNG_BYTES)
        assert stored.content_type == "image/png"
        assert stored.public_url.endswith(stored.file_name)

    @pytest.mark.asyncio
    async def test_save_validates_before_writing(self, storage, tmp_path):
        with pytest.raises(InvalidRequestError):
            await storage.save("card-1", "notes.txt", "text/plain", b"hello")
        assert not (tmp_path / "job-photos").exists()


def make_upload(data: bytes, content_type: str = "image/png", size=None) -> tuple[UploadFile, io.BytesIO]:
    buffer = io.BytesIO(data)
    upload = UploadFile(file=buffer, size=size, filename="photo.png", headers=Headers({"content-type": content_type}))
    return upload, buffer


class TestReadUpload:
    @pytest.fixture
    def small_storage(self, tmp_path) -> LocalPhotoStorage:
        return LocalPhotoStorage(StorageConfig(directory=str(tmp_path), max_upload_bytes=1024 * 1024))

    @pytest.mark.asyncio
    async def test_returns_contents_within_limit(self, storage):
        upload, _ = make_upload(PNG_BYTES, size=len(PNG_BYTES))
        assert await storage.read_upload(upload) == PNG_BYTES

    @pytest.mark.asyncio
    async def test_non_image_rejected_before_reading(self, storage):
        upload, buffer = make_upload(b"%PDF-1.7", content_type="application/pdf")
        with pytest.raises(InvalidRequestError, match="File must be an image"):
            await storage.read_upload(upload)
        assert buffer.tell() == 0

    @pytest.mark.asyncio
    async def test_declared_size_over_limit_rejected_before_reading(self, small_storage):
        upload, buffer = make_upload(b"\x00" * 16, size=small_storage.config.max_upload_bytes + 1)
        with pytest.raises(InvalidRequestError, match="File size exceeds 1MB limit"):
            await small_storage.read_upload(upload)
        assert buffer.tell() == 0

    @pytest.mark.asyncio
    async def test_undeclared_oversized_body_read_only_past_limit(self, small_storage):
        limit = small_storage.config.max_upload_bytes
        upload, buffer = make_upload(b"\x00" * (limit * 3))
        with pytest.raises(InvalidRequestError, match="File size exceeds 1MB limit"):
            await small_storage.read_upload(upload)
        assert buffer.tell() == limit + 1


def test_get_storage_uses_settings():
    storage = get_storage()
    assert isinstance(storage, LocalPhotoStorage)
    assert storage.config.bucket == "job-photos"
