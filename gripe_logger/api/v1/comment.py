from fastapi import APIRouter, Depends

from gripe_logger.api.deps import require_auth
from gripe_logger.model.auth.identity import Identity
from gripe_logger.model.comment.comment_request import CommentCreateRequest
from gripe_logger.model.comment.comment_response import CommentListResponse, CommentResponse
from gripe_logger.service.comment.comment import add_comment, list_comments

router = APIRouter()


@router.get("/complaints/{complaint_id}/comments", response_model=CommentListResponse)
def list_comments_endpoint(complaint_id: int, identity: Identity = Depends(require_auth)):
    return CommentListResponse(items=list_comments(identity, complaint_id))


@router.post("/complaints/{complaint_id}/comments", response_model=CommentResponse, status_code=201)
def add_comment_endpoint(complaint_id: int, req: CommentCreateRequest, identity: Identity = Depends(require_auth)):
    return add_comment(identity, complaint_id, req.content)
