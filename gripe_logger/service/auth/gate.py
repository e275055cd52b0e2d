from typing import Optional

from gripe_logger.model.auth.role import Role
from gripe_logger.model.auth.route_response import ROUTE_LOCATIONS, NavigateResponse, RouteDecision
from gripe_logger.service.auth.context import AuthState


def _home_for(role: Optional[Role]) -> RouteDecision:
    return RouteDecision.ADMIN_AREA if role == Role.ADMIN else RouteDecision.STUDENT_AREA


def resolve_route(required_role: Optional[Role], state: AuthState) -> RouteDecision:
    """Map a requested area onto where the caller may actually go.

    A role mismatch sends the caller to their own area, never to login.
    """
    if state.loading:
        return RouteDecision.LOADING
    if state.user_id is None:
        return RouteDecision.LOGIN
    if required_role is None or state.role != required_role:
        return _home_for(state.role)
    return _home_for(required_role)


def navigate(required_role: Optional[Role], state: AuthState) -> NavigateResponse:
    decision = resolve_route(required_role, state)
    return NavigateResponse(decision=decision, location=ROUTE_LOCATIONS[decision])
