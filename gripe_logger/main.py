import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

import gripe_logger.config.config as configs
from gripe_logger.api.v1.route import api_router as MainRouter
from gripe_logger.db import models  # noqa: F401
from gripe_logger.db.session import Base, engine
from gripe_logger.service.auth.auth import seed_admin
from gripe_logger.service.auth.events import AuthChange, Subscription, auth_events
from gripe_logger.service.errors import ServiceError, ValidationFailed

# ---------------- logging ----------------
logging.basicConfig(level=configs.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger("gripe-logger")

app = FastAPI(title=configs.APP_NAME, version=configs.APP_VERSION)
app.include_router(router=MainRouter, prefix="/api/v1")

_auth_audit: Optional[Subscription] = None


def _log_auth_change(change: AuthChange) -> None:
    user_id = change.identity.user_id if change.identity else None
    logger.info("auth event=%s user=%s", change.event.value, user_id)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    body = {"detail": exc.message}
    if isinstance(exc, ValidationFailed) and exc.errors:
        body["errors"] = exc.errors
    if exc.status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=body)


@app.on_event("startup")
def startup() -> None:
    global _auth_audit
    Base.metadata.create_all(bind=engine)
    if seed_admin(configs.ADMIN_EMAIL, configs.ADMIN_PASSWORD, configs.ADMIN_NAME):
        logger.info("admin account ready: %s", configs.ADMIN_EMAIL)
    _auth_audit = auth_events.subscribe(_log_auth_change)


@app.on_event("shutdown")
def shutdown() -> None:
    global _auth_audit
    if _auth_audit is not None:
        _auth_audit.unsubscribe()
        _auth_audit = None


@app.get("/health")
def health():
    return {"status": "ok", "version": configs.APP_VERSION}
