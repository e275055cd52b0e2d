from sqlalchemy.orm import Session

from gripe_logger.db.models.complaint import Complaint
from gripe_logger.model.auth.identity import Identity
from gripe_logger.service.errors import NotFound, PermissionDenied


def is_owner(identity: Identity, complaint: Complaint) -> bool:
    return complaint.student_id == identity.user_id


def load_for_participant(db: Session, identity: Identity, complaint_id: int) -> Complaint:
    """Fetch a complaint the caller may see: its owner or any admin.

    Other students get ``NotFound``, the same as row-level security hiding the row.
    """
    complaint = db.get(Complaint, complaint_id)
    if complaint is None or not (identity.is_admin or is_owner(identity, complaint)):
        raise NotFound("Complaint not found")
    return complaint


def require_admin(identity: Identity) -> None:
    if not identity.is_admin:
        raise PermissionDenied("Admin access required")
