from fastapi import APIRouter, Depends, Response

from gripe_logger.api.deps import require_admin, require_auth
from gripe_logger.model.auth.identity import Identity
from gripe_logger.model.complaint.complaint_enum import StatusFilter
from gripe_logger.model.complaint.complaint_request import (
    ComplaintAdminUpdateRequest,
    ComplaintCreateRequest,
    ComplaintEditRequest,
)
from gripe_logger.model.complaint.complaint_response import (
    ComplaintListResponse,
    ComplaintResponse,
    ComplaintStatsResponse,
)
from gripe_logger.service.complaint.complaint import (
    admin_update_complaint,
    complaint_stats,
    create_complaint,
    delete_complaint,
    edit_complaint,
    get_complaint,
    list_all_complaints,
    list_own_complaints,
)

router = APIRouter()


@router.post("/complaints", response_model=ComplaintResponse, status_code=201)
def create_complaint_endpoint(req: ComplaintCreateRequest, identity: Identity = Depends(require_auth)):
    return create_complaint(identity, req)


@router.get("/complaints", response_model=ComplaintListResponse)
def list_own_endpoint(status: StatusFilter = StatusFilter.ALL, identity: Identity = Depends(require_auth)):
    return ComplaintListResponse(items=list_own_complaints(identity, status))


@router.get("/complaints/{complaint_id}", response_model=ComplaintResponse)
def get_complaint_endpoint(complaint_id: int, identity: Identity = Depends(require_auth)):
    return get_complaint(identity, complaint_id)


@router.patch("/complaints/{complaint_id}", response_model=ComplaintResponse)
def edit_complaint_endpoint(complaint_id: int, req: ComplaintEditRequest, identity: Identity = Depends(require_auth)):
    return edit_complaint(identity, complaint_id, req)


@router.delete("/complaints/{complaint_id}", status_code=204)
def delete_complaint_endpoint(complaint_id: int, identity: Identity = Depends(require_auth)):
    delete_complaint(identity, complaint_id)
    return Response(status_code=204)


@router.get("/admin/complaints", response_model=ComplaintListResponse)
def list_all_endpoint(status: StatusFilter = StatusFilter.ALL, identity: Identity = Depends(require_admin)):
    return ComplaintListResponse(items=list_all_complaints(identity, status))


@router.get("/admin/complaints/stats", response_model=ComplaintStatsResponse)
def stats_endpoint(identity: Identity = Depends(require_admin)):
    return complaint_stats(identity)


@router.patch("/admin/complaints/{complaint_id}", response_model=ComplaintResponse)
def admin_update_endpoint(
    complaint_id: int, req: ComplaintAdminUpdateRequest, identity: Identity = Depends(require_admin)
):
    return admin_update_complaint(identity, complaint_id, req)
