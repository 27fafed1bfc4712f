"""HTTP contract shared by the routers and the API client.

Each entry names the method and path of one operation. Routers register
their handlers on these paths and the client builds request URLs from them,
so the two sides cannot drift apart.
"""
from typing import Dict, NamedTuple, Optional, Union

from app.core.config import settings


class Route(NamedTuple):
    method: str
    path: str


def _p(path: str) -> str:
    return f"{settings.API_PREFIX}{path}"


class AuthRoutes:
    signup = Route("POST", _p("/auth/signup"))
    login = Route("POST", _p("/auth/login"))
    me = Route("GET", _p("/auth/me"))


class CourseRoutes:
    list = Route("GET", _p("/courses"))
    get = Route("GET", _p("/courses/{id}"))
    create = Route("POST", _p("/courses"))
    update = Route("PUT", _p("/courses/{id}"))
    delete = Route("DELETE", _p("/courses/{id}"))


class EnrollmentRoutes:
    enroll = Route("POST", _p("/enroll"))
    list = Route("GET", _p("/enrollments/me"))
    update_progress = Route("PUT", _p("/enrollments/{id}/progress"))


class AdminRoutes:
    users = Route("GET", _p("/users"))
    stats = Route("GET", _p("/reports"))


class api:
    auth = AuthRoutes
    courses = CourseRoutes
    enrollments = EnrollmentRoutes
    admin = AdminRoutes


def build_url(path: str, params: Optional[Dict[str, Union[str, int]]] = None) -> str:
    url = path
    for key, value in (params or {}).items():
        url = url.replace(f"{{{key}}}", str(value))
    return url
