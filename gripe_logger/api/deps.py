from typing import Optional

from fastapi import Depends, Header, HTTPException

from gripe_logger.model.auth.identity import Identity
from gripe_logger.service.auth.auth import resolve_token


def get_bearer_token(authorization: Optional[str] = Header(None)) -> Optional[str]:
    if not authorization:
        return None
    if not authorization.lower().startswith("bearer "):
        return None
    return authorization.split(" ", 1)[1].strip() or None


def get_current_identity(token: Optional[str] = Depends(get_bearer_token)) -> Optional[Identity]:
    return resolve_token(token)


def require_auth(identity: Optional[Identity] = Depends(get_current_identity)) -> Identity:
    if identity is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return identity


def require_admin(identity: Identity = Depends(require_auth)) -> Identity:
    if not identity.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return identity
