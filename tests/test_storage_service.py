import io
import os

from fastapi import UploadFile

from freshbite.services import storage_service
from freshbite.services.storage_service import StorageService, public_url


def upload(name="avatar.JPG", content=b"jpeg-bytes"):
    return UploadFile(file=io.BytesIO(content), filename=name)


def test_public_url():
    assert public_url("a.png") == "/uploads/a.png"
    assert public_url(None) is None


def test_no_file_stores_nothing(tmp_path):
    storage = StorageService(str(tmp_path))

    assert storage.save(None) is None
    assert storage.save(upload(name="")) is None
    assert os.listdir(tmp_path) == []


def test_uploads_in_same_millisecond_do_not_collide(tmp_path, monkeypatch):
    monkeypatch.setattr(storage_service.time, "time", lambda: 1_800_000_000.0)
    storage = StorageService(str(tmp_path))

    first = storage.save(upload(content=b"first"))
    second = storage.save(upload(content=b"second"))

    assert first != second
    assert first.startswith("1800000000000-") and first.endswith(".jpg")
    assert (tmp_path / first).read_bytes() == b"first"
    assert (tmp_path / second).read_bytes() == b"second"


def test_discard(tmp_path):
    storage = StorageService(str(tmp_path))
    stored = storage.save(upload())

    storage.discard(stored)
    storage.discard(stored)
    storage.discard(None)

    assert os.listdir(tmp_path) == []
