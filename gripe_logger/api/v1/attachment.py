from typing import List
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Response, UploadFile

from gripe_logger.api.deps import require_auth
from gripe_logger.model.attachment.attachment_response import AttachmentListResponse, UploadResponse
from gripe_logger.model.auth.identity import Identity
from gripe_logger.service.attachment.attachment import (
    delete_attachment,
    download_attachment,
    list_attachments,
    upload_attachments,
)

router = APIRouter()


@router.get("/complaints/{complaint_id}/attachments", response_model=AttachmentListResponse)
def list_attachments_endpoint(complaint_id: int, identity: Identity = Depends(require_auth)):
    return AttachmentListResponse(items=list_attachments(identity, complaint_id))


@router.post("/complaints/{complaint_id}/attachments", response_model=UploadResponse)
async def upload_attachments_endpoint(
    complaint_id: int,
    files: List[UploadFile] = File(...),
    identity: Identity = Depends(require_auth),
):
    return UploadResponse(results=await upload_attachments(identity, complaint_id, files))


@router.get("/attachments/{attachment_id}/download")
def download_attachment_endpoint(attachment_id: int, identity: Identity = Depends(require_auth)):
    attachment, data = download_attachment(identity, attachment_id)
    return Response(
        content=data,
        media_type=attachment.content_type or "application/octet-stream",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(attachment.file_name)}"},
    )


@router.delete("/attachments/{attachment_id}", status_code=204)
def delete_attachment_endpoint(attachment_id: int, identity: Identity = Depends(require_auth)):
    delete_attachment(identity, attachment_id)
    return Response(status_code=204)
