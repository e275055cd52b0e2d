from enum import Enum

from pydantic import BaseModel


class RouteDecision(str, Enum):
    STUDENT_AREA = "student_area"
    ADMIN_AREA = "admin_area"
    LOGIN = "login"
    LOADING = "loading"


ROUTE_LOCATIONS = {
    RouteDecision.STUDENT_AREA: "/student",
    RouteDecision.ADMIN_AREA: "/admin",
    RouteDecision.LOGIN: "/login",
    RouteDecision.LOADING: None,
}


class NavigateResponse(BaseModel):
    decision: RouteDecision
    location: str | None = None
