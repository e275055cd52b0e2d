import logging
from typing import List, Optional

from sqlalchemy import delete, func, select

import gripe_logger.config.config as configs
from gripe_logger.client.db.psql import session_scope
from gripe_logger.client.storage.blob import BlobStorageError, blob_storage
from gripe_logger.db.models.attachment import ComplaintAttachment
from gripe_logger.db.models.comment import ComplaintComment
from gripe_logger.db.models.complaint import Complaint
from gripe_logger.db.models.profile import Profile
from gripe_logger.db.models.user_role import UserRole
from gripe_logger.model.auth.auth_response import ProfileResponse
from gripe_logger.model.auth.identity import Identity
from gripe_logger.model.auth.role import Role
from gripe_logger.model.complaint.complaint_enum import (
    ALLOWED_TRANSITIONS,
    ComplaintStatus,
    StatusFilter,
)
from gripe_logger.model.complaint.complaint_request import (
    ComplaintAdminUpdateRequest,
    ComplaintCreateRequest,
    ComplaintEditRequest,
)
from gripe_logger.model.complaint.complaint_response import ComplaintResponse, ComplaintStatsResponse
from gripe_logger.service.complaint.access import is_owner, load_for_participant, require_admin
from gripe_logger.service.errors import Conflict, NotFound, PermissionDenied, ValidationFailed

logger = logging.getLogger(__name__)


def can_edit(identity: Identity, complaint: Complaint) -> bool:
    return is_owner(identity, complaint) and complaint.status == ComplaintStatus.PENDING.value


def _to_response(identity: Identity, complaint: Complaint, student: Optional[Profile] = None) -> ComplaintResponse:
    return ComplaintResponse(
        id=complaint.id,
        student_id=complaint.student_id,
        title=complaint.title,
        description=complaint.description,
        category=complaint.category,
        priority=complaint.priority,
        status=complaint.status,
        resolution_note=complaint.resolution_note,
        assigned_to=complaint.assigned_to,
        created_at=complaint.created_at,
        updated_at=complaint.updated_at,
        can_edit=can_edit(identity, complaint),
        student=ProfileResponse.model_validate(student) if student else None,
    )


def _filtered(query, status_filter: StatusFilter):
    if status_filter != StatusFilter.ALL:
        query = query.where(Complaint.status == status_filter.value)
    return query.order_by(Complaint.created_at.desc(), Complaint.id.desc())


def create_complaint(identity: Identity, req: ComplaintCreateRequest) -> ComplaintResponse:
    if identity.is_admin:
        raise PermissionDenied("Only students can submit complaints")
    with session_scope() as db:
        complaint = Complaint(
            student_id=identity.user_id,
            title=req.title,
            description=req.description,
            category=req.category,
            priority=req.priority.value,
            status=ComplaintStatus.PENDING.value,
        )
        db.add(complaint)
        db.flush()
        logger.info("complaint=%s submitted by user=%s", complaint.id, identity.user_id)
        return _to_response(identity, complaint)


def list_own_complaints(identity: Identity, status_filter: StatusFilter = StatusFilter.ALL) -> List[ComplaintResponse]:
    with session_scope() as db:
        query = select(Complaint).where(Complaint.student_id == identity.user_id)
        rows = db.execute(_filtered(query, status_filter)).scalars().all()
        return [_to_response(identity, row) for row in rows]


def list_all_complaints(identity: Identity, status_filter: StatusFilter = StatusFilter.ALL) -> List[ComplaintResponse]:
    require_admin(identity)
    with session_scope() as db:
        rows = db.execute(_filtered(select(Complaint), status_filter)).scalars().all()
        student_ids = {row.student_id for row in rows}
        profiles = {}
        if student_ids:
            found = db.execute(select(Profile).where(Profile.id.in_(list(student_ids)))).scalars().all()
            profiles = {p.id: p for p in found}
        return [_to_response(identity, row, profiles.get(row.student_id)) for row in rows]


def complaint_stats(identity: Identity) -> ComplaintStatsResponse:
    require_admin(identity)
    with session_scope() as db:
        counts = dict(db.execute(select(Complaint.status, func.count()).group_by(Complaint.status)).all())
    return ComplaintStatsResponse(
        total=sum(counts.values()),
        pending=counts.get(ComplaintStatus.PENDING.value, 0),
        in_progress=counts.get(ComplaintStatus.IN_PROGRESS.value, 0),
        resolved=counts.get(ComplaintStatus.RESOLVED.value, 0),
    )


def get_complaint(identity: Identity, complaint_id: int) -> ComplaintResponse:
    with session_scope() as db:
        complaint = load_for_participant(db, identity, complaint_id)
        student = db.get(Profile, complaint.student_id) if identity.is_admin else None
        return _to_response(identity, complaint, student)


def edit_complaint(identity: Identity, complaint_id: int, req: ComplaintEditRequest) -> ComplaintResponse:
    with session_scope() as db:
        complaint = load_for_participant(db, identity, complaint_id)
        if not is_owner(identity, complaint):
            raise PermissionDenied("Only the owner can edit a complaint")
        if complaint.status != ComplaintStatus.PENDING.value:
            raise Conflict("Only pending complaints can be edited")

        fields = req.model_fields_set
        cleared = sorted(f for f in ("title", "description", "priority") if f in fields and getattr(req, f) is None)
        if cleared:
            raise ValidationFailed("Required fields cannot be cleared", {f: f"{f} is required" for f in cleared})

        if "title" in fields:
            complaint.title = req.title
        if "description" in fields:
            complaint.description = req.description
        if "category" in fields:
            complaint.category = req.category
        if "priority" in fields:
            complaint.priority = req.priority.value
        db.flush()
        return _to_response(identity, complaint)


def delete_complaint(identity: Identity, complaint_id: int) -> None:
    with session_scope() as db:
        complaint = load_for_participant(db, identity, complaint_id)
        if not is_owner(identity, complaint):
            raise PermissionDenied("Only the owner can delete a complaint")
        if not configs.ALLOW_DELETE_AFTER_TRIAGE and complaint.status != ComplaintStatus.PENDING.value:
            raise Conflict("Only pending complaints can be deleted")

        blob_paths = list(
            db.execute(
                select(ComplaintAttachment.file_path).where(ComplaintAttachment.complaint_id == complaint_id)
            ).scalars()
        )
        db.execute(delete(ComplaintAttachment).where(ComplaintAttachment.complaint_id == complaint_id))
        db.execute(delete(ComplaintComment).where(ComplaintComment.complaint_id == complaint_id))
        db.delete(complaint)

    logger.info("complaint=%s deleted by user=%s", complaint_id, identity.user_id)
    if blob_paths:
        try:
            blob_storage.remove(blob_paths)
        except BlobStorageError:
            logger.warning("orphaned blobs left after deleting complaint=%s: %s", complaint_id, blob_paths)


def admin_update_complaint(
    identity: Identity, complaint_id: int, req: ComplaintAdminUpdateRequest
) -> ComplaintResponse:
    require_admin(identity)
    fields = req.model_fields_set
    with session_scope() as db:
        complaint = db.get(Complaint, complaint_id)
        if complaint is None:
            raise NotFound("Complaint not found")

        if "status" in fields:
            if req.status is None:
                raise ValidationFailed("Status cannot be cleared", {"status": "status is required"})
            current = ComplaintStatus(complaint.status)
            if req.status not in ALLOWED_TRANSITIONS[current]:
                raise Conflict(f"Cannot move a complaint from {current.value} to {req.status.value}")
            complaint.status = req.status.value

        if "resolution_note" in fields:
            complaint.resolution_note = req.resolution_note

        if "assigned_to" in fields:
            if req.assigned_to is not None:
                assignee_role = db.execute(
                    select(UserRole.role).where(UserRole.user_id == req.assigned_to)
                ).scalar_one_or_none()
                if assignee_role != Role.ADMIN.value:
                    raise ValidationFailed(
                        "Complaints can only be assigned to admins", {"assigned_to": "not an admin user"}
                    )
            complaint.assigned_to = req.assigned_to

        db.flush()
        logger.info("complaint=%s updated by admin=%s fields=%s", complaint_id, identity.user_id, sorted(fields))
        student = db.get(Profile, complaint.student_id)
        return _to_response(identity, complaint, student)
