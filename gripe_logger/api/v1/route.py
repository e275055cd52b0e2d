from fastapi import APIRouter

from gripe_logger.api.v1.attachment import router as attachment_router
from gripe_logger.api.v1.auth import router as auth_router
from gripe_logger.api.v1.comment import router as comment_router
from gripe_logger.api.v1.complaint import router as complaint_router

api_router = APIRouter()
api_router.include_router(auth_router)
api_router.include_router(complaint_router)
api_router.include_router(comment_router)
api_router.include_router(attachment_router)
