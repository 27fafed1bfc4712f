"""Python data-access layer for the course API.

Queries are cached by endpoint path plus parameters so repeated reads of the
same resource share one result; mutations invalidate the query keys they
affect. Identity-scoped queries are skipped entirely while no token is held.
"""
import logging
from typing import Any, Callable, Dict, List, Optional, Union

import httpx

from app.client.query_cache import QueryCache, make_key
from app.client.token_store import TokenStore
from app.core.contract import Route, api, build_url
from app.schemas.course import Course, CourseCreate, CourseUpdate, CourseWithLessons
from app.schemas.enrollment import Enrollment, EnrollmentWithCourse
from app.schemas.report import StatsSchema
from app.schemas.token import AuthResponse
from app.schemas.user import User

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.field = field

    def __repr__(self):
        return f"ApiError(status_code={self.status_code}, message={self.message!r}, field={self.field!r})"


class CourseHubClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        http: Optional[httpx.Client] = None,
        token_store: Optional[TokenStore] = None,
        cache: Optional[QueryCache] = None,
        notify: Optional[Callable[[ApiError], None]] = None,
        timeout: float = 10.0,
    ):
        if http is None:
            if base_url is None:
                raise ValueError("Either base_url or http must be provided")
            http = httpx.Client(base_url=base_url, timeout=timeout)
        self._http = http
        self.tokens = token_store or TokenStore()
        self.cache = cache or QueryCache()
        self._notify = notify

    # -- transport ---------------------------------------------------------

    def _request(
        self,
        route: Route,
        *,
        path_params: Optional[Dict[str, Union[str, int]]] = None,
        json: Any = None,
        params: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        headers = {}
        token = self.tokens.get()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        url = build_url(route.path, path_params)
        try:
            return self._http.request(route.method, url, json=json, params=params, headers=headers)
        except httpx.RequestError as e:
            self._fail(ApiError(503, f"Network error: {e}"))

    def _fail(self, error: ApiError):
        logger.warning(f"API request failed: {error.status_code} {error.message}")
        if self._notify:
            self._notify(error)
        raise error

    def _check(self, response: httpx.Response) -> httpx.Response:
        if response.is_success:
            return response
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        self._fail(ApiError(response.status_code, body.get("message") or response.reason_phrase, body.get("field")))

    def _identity_keys(self):
        return (
            api.auth.me.path,
            api.enrollments.list.path,
            api.admin.users.path,
            api.admin.stats.path,
        )

    def _reset_identity_queries(self):
        for path in self._identity_keys():
            self.cache.invalidate(path)

    # -- auth --------------------------------------------------------------

    @property
    def is_authenticated(self) -> bool:
        return bool(self.tokens)

    def me(self) -> Optional[User]:
        if not self.is_authenticated:
            return None

        def load():
            response = self._request(api.auth.me)
            if response.status_code == 401:
                return None
            return User.model_validate(self._check(response).json())

        return self.cache.fetch(make_key(api.auth.me.path), load)

    def _store_session(self, auth: AuthResponse) -> AuthResponse:
        self.tokens.set(auth.token)
        self._reset_identity_queries()
        self.cache.set(make_key(api.auth.me.path), auth.user)
        return auth

    def login(self, email: str, password: str) -> AuthResponse:
        response = self._check(self._request(api.auth.login, json={"email": email, "password": password}))
        return self._store_session(AuthResponse.model_validate(response.json()))

    def signup(self, name: str, email: str, password: str) -> AuthResponse:
        response = self._check(
            self._request(api.auth.signup, json={"name": name, "email": email, "password": password})
        )
        return self._store_session(AuthResponse.model_validate(response.json()))

    def logout(self) -> None:
        self.tokens.clear()
        self._reset_identity_queries()
        self.cache.set(make_key(api.auth.me.path), None)

    # -- courses -----------------------------------------------------------

    def courses(self, category: Optional[str] = None, search: Optional[str] = None) -> List[CourseWithLessons]:
        filters = {"category": category or None, "search": search or None}
        params = {k: v for k, v in filters.items() if v is not None}

        def load():
            response = self._check(self._request(api.courses.list, params=params))
            return [CourseWithLessons.model_validate(item) for item in response.json()]

        return self.cache.fetch(make_key(api.courses.list.path, filters), load)

    def course(self, id_or_slug: Union[int, str]) -> CourseWithLessons:
        def load():
            response = self._check(self._request(api.courses.get, path_params={"id": id_or_slug}))
            return CourseWithLessons.model_validate(response.json())

        return self.cache.fetch(make_key(api.courses.get.path, str(id_or_slug)), load)

    def create_course(self, course_in: CourseCreate) -> CourseWithLessons:
        response = self._check(
            self._request(api.courses.create, json=course_in.model_dump(mode="json", by_alias=True))
        )
        self.cache.invalidate(api.courses.list.path)
        return CourseWithLessons.model_validate(response.json())

    def update_course(self, course_id: int, course_in: CourseUpdate) -> Course:
        response = self._check(
            self._request(
                api.courses.update,
                path_params={"id": course_id},
                json=course_in.model_dump(mode="json", by_alias=True, exclude_unset=True),
            )
        )
        self.cache.invalidate(api.courses.list.path)
        self.cache.invalidate(api.courses.get.path)
        return Course.model_validate(response.json())

    def delete_course(self, course_id: int) -> None:
        self._check(self._request(api.courses.delete, path_params={"id": course_id}))
        self.cache.invalidate(api.courses.list.path)
        self.cache.invalidate(api.courses.get.path)
        self.cache.invalidate(api.enrollments.list.path)

    # -- enrollments -------------------------------------------------------

    def enrollments(self) -> Optional[List[EnrollmentWithCourse]]:
        if not self.is_authenticated:
            return None

        def load():
            response = self._request(api.enrollments.list)
            if response.status_code == 401:
                return None
            return [EnrollmentWithCourse.model_validate(item) for item in self._check(response).json()]

        return self.cache.fetch(make_key(api.enrollments.list.path), load)

    def enroll(self, course_id: int) -> Enrollment:
        response = self._check(self._request(api.enrollments.enroll, json={"courseId": course_id}))
        self.cache.invalidate(api.enrollments.list.path)
        self.cache.invalidate(api.courses.get.path)
        return Enrollment.model_validate(response.json())

    def update_progress(self, enrollment_id: int, lesson_id: int, completed: bool) -> Enrollment:
        response = self._check(
            self._request(
                api.enrollments.update_progress,
                path_params={"id": enrollment_id},
                json={"lessonId": lesson_id, "completed": completed},
            )
        )
        self.cache.invalidate(api.enrollments.list.path)
        return Enrollment.model_validate(response.json())

    # -- admin -------------------------------------------------------------

    def admin_users(self) -> Optional[List[User]]:
        if not self.is_authenticated:
            return None

        def load():
            response = self._check(self._request(api.admin.users))
            return [User.model_validate(item) for item in response.json()]

        return self.cache.fetch(make_key(api.admin.users.path), load)

    def admin_stats(self) -> Optional[StatsSchema]:
        if not self.is_authenticated:
            return None

        def load():
            response = self._check(self._request(api.admin.stats))
            return StatsSchema.model_validate(response.json())

        return self.cache.fetch(make_key(api.admin.stats.path), load)

    def close(self) -> None:
        self._http.close()
