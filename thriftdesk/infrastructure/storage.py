"""Image storage for item and communication log pictures.

Images are written to the local upload directory and served under
``/uploads``. When an Azure Blob Storage connection string is configured the
bytes go to the configured container instead and the blob URL is stored as
the reference.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path, PurePosixPath

from azure.core.exceptions import AzureError, ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import BlobServiceClient, ContainerClient, ContentSettings

from thriftdesk.config import get_settings
from thriftdesk.domain.exceptions import StorageError, ValidationError

logger = logging.getLogger(__name__)

LOCAL_URL_PREFIX = "/uploads"


@dataclass(frozen=True)
class ImageUpload:
    """Raw bytes of an uploaded picture as received by the API."""

    filename: str
    content_type: str | None
    data: bytes


def upload_root() -> Path:
    """Return the directory that holds locally stored uploads."""

    return Path(get_settings().upload_dir).resolve()


@lru_cache
def _get_container_client() -> ContainerClient:
    settings = get_settings()
    service_client = BlobServiceClient.from_connection_string(
        settings.azure_storage_connection_string
    )
    try:
        service_client.create_container(settings.azure_storage_container_name)
    except ResourceExistsError:
        pass
    return service_client.get_container_client(settings.azure_storage_container_name)


def validate_image(upload: ImageUpload) -> None:
    """Reject non-image uploads and files above the configured size."""

    if not (upload.content_type or "").startswith("image/"):
        raise ValidationError("Only image files are allowed")
    if len(upload.data) > get_settings().upload_max_bytes:
        raise ValidationError("Image exceeds the maximum upload size")


def store_image(folder: str, upload: ImageUpload) -> str:
    """Persist ``upload`` under ``folder`` and return its addressable reference."""

    validate_image(upload)
    extension = PurePosixPath(upload.filename or "").suffix.lower()
    name = f"{folder}-{uuid.uuid4().hex}{extension}"

    if get_settings().uses_blob_storage:
        blob_path = f"{folder}/{name}"
        try:
            blob_client = _get_container_client().get_blob_client(blob_path)
            blob_client.upload_blob(
                upload.data,
                overwrite=True,
                content_settings=ContentSettings(content_type=upload.content_type),
            )
        except AzureError as exc:
            logger.exception("Failed to upload image blob %s", blob_path)
            raise StorageError("Failed to store image") from exc
        return blob_client.url

    destination = upload_root() / folder / name
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(upload.data)
    except OSError as exc:
        logger.exception("Failed to write image %s", destination)
        raise StorageError("Failed to store image") from exc
    return f"{LOCAL_URL_PREFIX}/{folder}/{name}"


def store_images(folder: str, uploads: Iterable[ImageUpload]) -> list[str]:
    """Store every upload; on failure remove the ones already written."""

    uploads = list(uploads)
    for upload in uploads:
        validate_image(upload)

    references: list[str] = []
    try:
        for upload in uploads:
            references.append(store_image(folder, upload))
    except StorageError:
        discard_images(references)
        raise
    return references


def delete_image(reference: str) -> None:
    """Delete the stored image behind ``reference``; missing images are ignored."""

    if reference.startswith(f"{LOCAL_URL_PREFIX}/"):
        relative = reference[len(LOCAL_URL_PREFIX) + 1 :]
        root = upload_root()
        path = (root / relative).resolve()
        if root not in path.parents:
            raise StorageError(f"Refusing to delete outside the upload directory: {reference}")
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            raise StorageError(f"Failed to delete image {reference}") from exc
        return

    container_client = _get_container_client()
    prefix = f"{container_client.url.rstrip('/')}/"
    if not reference.startswith(prefix):
        raise StorageError(f"Unknown image reference: {reference}")
    try:
        container_client.get_blob_client(reference[len(prefix) :]).delete_blob()
    except ResourceNotFoundError:
        return
    except AzureError as exc:
        raise StorageError(f"Failed to delete image {reference}") from exc


def discard_images(references: Iterable[str | None]) -> None:
    """Best-effort removal used for cleanup paths; failures are only logged."""

    for reference in references:
        if not reference:
            continue
        try:
            delete_image(reference)
        except StorageError:
            logger.warning("Could not remove image %s", reference, exc_info=True)


__all__ = [
    "ImageUpload",
    "LOCAL_URL_PREFIX",
    "delete_image",
    "discard_images",
    "store_image",
    "store_images",
    "upload_root",
    "validate_image",
]
