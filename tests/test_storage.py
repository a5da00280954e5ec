"""Tests for local image storage."""

from __future__ import annotations

from pathlib import Path

import pytest

from thriftdesk.config import get_settings
from thriftdesk.domain.exceptions import StorageError, ValidationError
from thriftdesk.infrastructure.storage import (
    ImageUpload,
    delete_image,
    discard_images,
    store_image,
    store_images,
)


def _local_path(reference: str) -> Path:
    return Path(get_settings().upload_dir) / reference.removeprefix("/uploads/")


def test_store_and_delete_local_image():
    reference = store_image("exclusive", ImageUpload("Tag.JPG", "image/jpeg", b"abc"))

    assert reference.startswith("/uploads/exclusive/exclusive-")
    assert reference.endswith(".jpg")
    assert _local_path(reference).read_bytes() == b"abc"

    delete_image(reference)
    assert not _local_path(reference).exists()
    # Deleting again is a no-op.
    delete_image(reference)


def test_rejects_non_images_and_oversized_files(monkeypatch):
    with pytest.raises(ValidationError):
        store_image("exclusive", ImageUpload("a.pdf", "application/pdf", b"%PDF"))

    monkeypatch.setattr(get_settings(), "upload_max_bytes", 4)
    with pytest.raises(ValidationError):
        store_image("exclusive", ImageUpload("a.png", "image/png", b"12345"))


def test_store_images_validates_everything_first():
    uploads = [
        ImageUpload("a.png", "image/png", b"1"),
        ImageUpload("b.txt", "text/plain", b"2"),
    ]
    folder = Path(get_settings().upload_dir) / "batch"

    with pytest.raises(ValidationError):
        store_images("batch", uploads)

    assert not folder.exists() or not any(folder.iterdir())


def test_refuses_to_delete_outside_upload_directory():
    with pytest.raises(StorageError):
        delete_image("/uploads/../outside.png")


def test_discard_images_logs_and_continues(caplog):
    kept = store_image("discount", ImageUpload("a.png", "image/png", b"1"))

    discard_images([None, "/uploads/../outside.png", kept])

    assert not _local_path(kept).exists()
    assert "Could not remove image" in caplog.text
