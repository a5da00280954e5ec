"""Helpers turning multipart files into storage uploads."""

from collections.abc import Iterable

from fastapi import UploadFile

from thriftdesk.infrastructure.storage import ImageUpload


def read_image_upload(file: UploadFile | None) -> ImageUpload | None:
    """Return the bytes of ``file`` or ``None`` when the form left it empty."""

    if file is None or not file.filename:
        return None
    try:
        data = file.file.read()
    finally:
        file.file.seek(0)
    return ImageUpload(filename=file.filename, content_type=file.content_type, data=data)


def read_image_uploads(files: Iterable[UploadFile] | None) -> list[ImageUpload]:
    uploads = (read_image_upload(file) for file in files or [])
    return [upload for upload in uploads if upload is not None]
