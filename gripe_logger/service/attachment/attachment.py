import asyncio
import logging
import re
import time
from typing import List, Optional, Protocol, Tuple

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

import gripe_logger.config.config as configs
from gripe_logger.client.db.psql import session_scope
from gripe_logger.client.storage.blob import BlobStorageError, blob_storage
from gripe_logger.db.models.attachment import ComplaintAttachment
from gripe_logger.model.attachment.attachment_response import AttachmentResponse, UploadOutcome, UploadStatus
from gripe_logger.model.auth.identity import Identity
from gripe_logger.service.complaint.access import load_for_participant
from gripe_logger.service.errors import NotFound, PermissionDenied, StorageFailure

logger = logging.getLogger(__name__)

EXTENSION_RE = re.compile(r"[^A-Za-z0-9]")


class IncomingFile(Protocol):
    filename: Optional[str]
    content_type: Optional[str]

    async def read(self, size: int = -1) -> bytes: ...


def _extension(file_name: str) -> str:
    if "." not in file_name:
        return ""
    return EXTENSION_RE.sub("", file_name.rsplit(".", 1)[-1])[:16]


def build_blob_path(uploader_id: str, complaint_id: int, file_name: str, now_ms: Optional[int] = None) -> str:
    """``{uploader}/{complaint}/{epoch_ms}.{ext}``, bumping the timestamp past any taken key."""
    ext = _extension(file_name)
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    while True:
        path = f"{uploader_id}/{complaint_id}/{stamp}" + (f".{ext}" if ext else "")
        if not blob_storage.exists(path):
            return path
        stamp += 1


def _max_size_label() -> str:
    return f"{configs.MAX_ATTACHMENT_BYTES / (1024 * 1024):g}MB"


def _too_large(name: str) -> UploadOutcome:
    return UploadOutcome(
        file_name=name,
        status=UploadStatus.REJECTED,
        detail=f"File {name} is too large. Maximum size is {_max_size_label()}.",
    )


def _check_participant(identity: Identity, complaint_id: int) -> None:
    with session_scope() as db:
        load_for_participant(db, identity, complaint_id)


def _store_blob(identity: Identity, complaint_id: int, name: str, data: bytes) -> str:
    path = build_blob_path(identity.user_id, complaint_id, name)
    blob_storage.upload(path, data)
    return path


def _insert_record(
    identity: Identity, complaint_id: int, name: str, path: str, size: int, content_type: Optional[str]
) -> AttachmentResponse:
    with session_scope() as db:
        record = ComplaintAttachment(
            complaint_id=complaint_id,
            file_name=name,
            file_path=path,
            file_size=size,
            content_type=content_type,
            uploaded_by=identity.user_id,
        )
        db.add(record)
        db.flush()
        return AttachmentResponse.model_validate(record)


def _discard_blob(path: str) -> None:
    try:
        blob_storage.remove([path])
    except BlobStorageError:
        logger.warning("orphaned blob %s after failed record insert", path)


async def _upload_one(identity: Identity, complaint_id: int, upload: IncomingFile) -> UploadOutcome:
    name = upload.filename or "file"
    limit = configs.MAX_ATTACHMENT_BYTES
    declared = getattr(upload, "size", None)
    if declared is not None and declared > limit:
        return _too_large(name)

    # never pull more than one byte past the limit into memory
    data = await upload.read(limit + 1)
    if len(data) > limit:
        return _too_large(name)

    try:
        path = await asyncio.to_thread(_store_blob, identity, complaint_id, name, data)
    except BlobStorageError:
        logger.exception("blob upload failed file=%s complaint=%s", name, complaint_id)
        return UploadOutcome(file_name=name, status=UploadStatus.FAILED, detail=f"Failed to upload {name}")

    try:
        attachment = await asyncio.to_thread(
            _insert_record, identity, complaint_id, name, path, len(data), upload.content_type
        )
    except SQLAlchemyError:
        await asyncio.to_thread(_discard_blob, path)
        return UploadOutcome(file_name=name, status=UploadStatus.FAILED, detail=f"Failed to save {name} record")

    return UploadOutcome(file_name=name, status=UploadStatus.UPLOADED, attachment=attachment)


async def upload_attachments(identity: Identity, complaint_id: int, files: List[IncomingFile]) -> List[UploadOutcome]:
    await asyncio.to_thread(_check_participant, identity, complaint_id)

    # one at a time so each file fails on its own
    results = []
    for upload in files:
        results.append(await _upload_one(identity, complaint_id, upload))

    uploaded = sum(1 for r in results if r.status == UploadStatus.UPLOADED)
    logger.info("complaint=%s upload batch: %d/%d stored", complaint_id, uploaded, len(results))
    return results


def list_attachments(identity: Identity, complaint_id: int) -> List[AttachmentResponse]:
    with session_scope() as db:
        load_for_participant(db, identity, complaint_id)
        rows = db.execute(
            select(ComplaintAttachment)
            .where(ComplaintAttachment.complaint_id == complaint_id)
            .order_by(ComplaintAttachment.created_at.desc(), ComplaintAttachment.id.desc())
        ).scalars().all()
        return [AttachmentResponse.model_validate(row) for row in rows]


def _load_attachment(identity: Identity, attachment_id: int) -> AttachmentResponse:
    with session_scope() as db:
        record = db.get(ComplaintAttachment, attachment_id)
        if record is None:
            raise NotFound("Attachment not found")
        load_for_participant(db, identity, record.complaint_id)
        return AttachmentResponse.model_validate(record)


def download_attachment(identity: Identity, attachment_id: int) -> Tuple[AttachmentResponse, bytes]:
    attachment = _load_attachment(identity, attachment_id)
    try:
        data = blob_storage.download(attachment.file_path)
    except BlobStorageError as exc:
        logger.exception("download failed attachment=%s", attachment_id)
        raise StorageFailure("Failed to download file") from exc
    return attachment, data


def delete_attachment(identity: Identity, attachment_id: int) -> None:
    """Remove the blob, then the record.

    If the blob cannot be removed the record is kept. If the record delete
    fails afterwards the blob is already gone and stays orphaned.
    """
    attachment = _load_attachment(identity, attachment_id)
    if attachment.uploaded_by != identity.user_id:
        raise PermissionDenied("Only the uploader can delete this file")

    try:
        blob_storage.remove([attachment.file_path])
    except BlobStorageError as exc:
        logger.exception("blob delete failed attachment=%s", attachment_id)
        raise StorageFailure("Failed to delete file") from exc

    try:
        with session_scope() as db:
            db.execute(delete(ComplaintAttachment).where(ComplaintAttachment.id == attachment_id))
    except SQLAlchemyError as exc:
        logger.warning("orphaned blob %s: record delete failed", attachment.file_path)
        raise StorageFailure("Failed to delete file record") from exc

    logger.info("attachment=%s deleted by user=%s", attachment_id, identity.user_id)
