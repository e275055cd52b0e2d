import logging
from typing import List

from sqlalchemy import select

from gripe_logger.client.db.psql import session_scope
from gripe_logger.db.models.comment import ComplaintComment
from gripe_logger.db.models.profile import Profile
from gripe_logger.model.auth.auth_response import ProfileResponse
from gripe_logger.model.auth.identity import Identity
from gripe_logger.model.comment.comment_response import CommentResponse
from gripe_logger.service.complaint.access import load_for_participant
from gripe_logger.service.errors import ValidationFailed

logger = logging.getLogger(__name__)


def list_comments(identity: Identity, complaint_id: int) -> List[CommentResponse]:
    with session_scope() as db:
        load_for_participant(db, identity, complaint_id)
        rows = db.execute(
            select(ComplaintComment)
            .where(ComplaintComment.complaint_id == complaint_id)
            .order_by(ComplaintComment.created_at.asc(), ComplaintComment.id.asc())
        ).scalars().all()

        # authors come from a second lookup, not a join
        author_ids = {row.user_id for row in rows}
        profiles = {}
        if author_ids:
            found = db.execute(select(Profile).where(Profile.id.in_(list(author_ids)))).scalars().all()
            profiles = {p.id: ProfileResponse.model_validate(p) for p in found}

        return [
            CommentResponse(
                id=row.id,
                complaint_id=row.complaint_id,
                user_id=row.user_id,
                content=row.content,
                created_at=row.created_at,
                author=profiles.get(row.user_id),
            )
            for row in rows
        ]


def add_comment(identity: Identity, complaint_id: int, content: str) -> CommentResponse:
    content = (content or "").strip()
    if not content:
        raise ValidationFailed("Comment cannot be empty", {"content": "Comment cannot be empty"})

    with session_scope() as db:
        load_for_participant(db, identity, complaint_id)
        comment = ComplaintComment(complaint_id=complaint_id, user_id=identity.user_id, content=content)
        db.add(comment)
        db.flush()
        author = db.get(Profile, identity.user_id)
        logger.info("comment=%s added to complaint=%s by user=%s", comment.id, complaint_id, identity.user_id)
        return CommentResponse(
            id=comment.id,
            complaint_id=comment.complaint_id,
            user_id=comment.user_id,
            content=comment.content,
            created_at=comment.created_at,
            author=ProfileResponse.model_validate(author) if author else None,
        )
