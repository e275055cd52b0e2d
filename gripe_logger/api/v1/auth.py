from typing import Optional

from fastapi import APIRouter, Depends, Response

from gripe_logger.api.deps import get_bearer_token, require_auth
from gripe_logger.model.auth.auth_request import SignInRequest, SignUpRequest
from gripe_logger.model.auth.auth_response import MeResponse, ProfileResponse, SessionResponse
from gripe_logger.model.auth.identity import Identity
from gripe_logger.model.auth.role import Role
from gripe_logger.model.auth.route_response import NavigateResponse
from gripe_logger.service.auth.auth import get_profile, sign_in, sign_out, sign_up
from gripe_logger.service.auth.context import SessionContext
from gripe_logger.service.auth.gate import navigate

router = APIRouter()


@router.post("/auth/signup", response_model=ProfileResponse, status_code=201)
def signup_endpoint(req: SignUpRequest):
    return sign_up(req.email, req.password, req.name)


@router.post("/auth/signin", response_model=SessionResponse)
def signin_endpoint(req: SignInRequest):
    return sign_in(req.email, req.password)


@router.post("/auth/signout", status_code=204)
def signout_endpoint(token: Optional[str] = Depends(get_bearer_token)):
    sign_out(token)
    return Response(status_code=204)


@router.get("/auth/me", response_model=MeResponse)
def me_endpoint(identity: Identity = Depends(require_auth)):
    return MeResponse(profile=get_profile(identity.user_id), role=identity.role)


@router.get("/navigate", response_model=NavigateResponse)
def navigate_endpoint(area: Optional[Role] = None, token: Optional[str] = Depends(get_bearer_token)):
    with SessionContext(token) as ctx:
        return navigate(area, ctx.state)
