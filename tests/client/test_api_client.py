import pytest
from decimal import Decimal

from app.client.api_client import ApiError, CourseHubClient
from app.client.query_cache import make_key
from app.client.token_store import TokenStore
from app.core.constants import RoleEnum
from app.schemas.course import CourseCreate, CourseUpdate
from tests.helpers.payloads import make_course_payload


class NoNetwork:
    """Stands in for the HTTP client and fails the test if any request is issued."""

    def request(self, *args, **kwargs):
        raise AssertionError(f"unexpected request: {args}")

    def close(self):
        pass


@pytest.fixture
def notifications():
    return []


@pytest.fixture
def api_client(client, notifications):
    return CourseHubClient(http=client, notify=notifications.append)


@pytest.fixture
def admin_client(client, user_factory):
    user = user_factory(email="client-admin@example.com", role=RoleEnum.ADMIN)
    hub = CourseHubClient(http=client)
    hub.login(user.email, "testpass123")
    return hub


class TestAnonymousQueries:
    def test_identity_queries_skip_network_without_token(self):
        hub = CourseHubClient(http=NoNetwork())
        assert hub.me() is None
        assert hub.enrollments() is None
        assert hub.admin_users() is None
        assert hub.admin_stats() is None

    def test_requires_base_url_or_http(self):
        with pytest.raises(ValueError):
            CourseHubClient()

    def test_public_catalog_without_token(self, api_client, course_factory):
        course_factory(slug="public-one")
        assert [c.slug for c in api_client.courses()] == ["public-one"]
        assert api_client.course("public-one").slug == "public-one"


class TestQueryCaching:
    def test_course_list_is_cached_per_filter(self, api_client, course_factory):
        course_factory(category="Development")
        assert len(api_client.courses()) == 1

        course_factory(category="Design")
        assert len(api_client.courses()) == 1
        assert len(api_client.courses(category="Design")) == 1
        assert api_client.courses(category="") is api_client.courses()

    def test_create_invalidates_course_list(self, admin_client, course_factory):
        course_factory()
        assert len(admin_client.courses()) == 1

        created = admin_client.create_course(CourseCreate.model_validate(make_course_payload(slug="from-client")))
        assert created.slug == "from-client"
        assert created.price == Decimal("19.99")
        assert len(admin_client.courses()) == 2

    def test_update_invalidates_list_and_detail(self, admin_client, course_factory):
        course = course_factory(title="Before")
        assert admin_client.course(course.id).title == "Before"
        assert admin_client.courses()[0].title == "Before"

        updated = admin_client.update_course(course.id, CourseUpdate(title="After"))
        assert updated.title == "After"
        assert admin_client.course(course.id).title == "After"
        assert admin_client.courses()[0].title == "After"

    def test_delete_invalidates_catalog(self, admin_client, course_factory):
        course_id = course_factory().id
        assert len(admin_client.courses()) == 1

        admin_client.delete_course(course_id)
        assert admin_client.courses() == []
        with pytest.raises(ApiError) as exc:
            admin_client.course(course_id)
        assert exc.value.status_code == 404


class TestSessionAndEnrollments:
    def test_login_populates_identity_cache(self, api_client, user_factory):
        user = user_factory(email="reader@example.com")
        auth = api_client.login("reader@example.com", "testpass123")
        assert auth.user.id == user.id
        assert api_client.cache.contains(make_key("/api/auth/me"))
        assert api_client.me().email == "reader@example.com"

    def test_signup_then_logout(self, api_client):
        api_client.signup("New Person", "new@example.com", "password123")
        assert api_client.is_authenticated
        assert api_client.me().role == RoleEnum.USER

        api_client.logout()
        assert not api_client.is_authenticated
        assert api_client.me() is None
        assert api_client.enrollments() is None

    def test_enroll_and_progress_refresh_enrollments(self, api_client, user_factory, course_factory):
        user_factory(email="learner@example.com")
        course = course_factory(lesson_orders=(1, 2))
        first, second = (lesson.id for lesson in course.lessons)
        api_client.login("learner@example.com", "testpass123")

        assert api_client.enrollments() == []
        enrollment = api_client.enroll(course.id)
        assert [e.course_id for e in api_client.enrollments()] == [course.id]

        api_client.update_progress(enrollment.id, first, True)
        api_client.update_progress(enrollment.id, second, True)
        assert api_client.enrollments()[0].progress == {str(first): True, str(second): True}

    def test_failed_mutation_raises_and_notifies(self, api_client, notifications, user_factory, course_factory):
        user_factory(email="again@example.com")
        course = course_factory()
        api_client.login("again@example.com", "testpass123")
        api_client.enroll(course.id)

        with pytest.raises(ApiError) as exc:
            api_client.enroll(course.id)
        assert exc.value.status_code == 400
        assert exc.value.message == "Already enrolled"
        assert notifications == [exc.value]

    def test_bad_credentials(self, api_client, user_factory):
        user_factory(email="someone@example.com")
        with pytest.raises(ApiError) as exc:
            api_client.login("someone@example.com", "wrong-password")
        assert exc.value.status_code == 401
        assert not api_client.is_authenticated

    def test_validation_error_carries_field(self, api_client, user_factory):
        with pytest.raises(ApiError) as exc:
            api_client.signup("Short", "short@example.com", "tiny")
        assert exc.value.field == "password"

    def test_stale_token_reads_as_signed_out(self, client, user_factory):
        store = TokenStore()
        store.set("not-a-real-token")
        hub = CourseHubClient(http=client, token_store=store)
        assert hub.me() is None
        assert hub.enrollments() is None

    def test_admin_queries(self, admin_client, course_factory):
        course_factory()
        stats = admin_client.admin_stats()
        assert (stats.total_users, stats.total_courses, stats.total_enrollments) == (1, 1, 0)
        assert [u.email for u in admin_client.admin_users()] == ["client-admin@example.com"]

    def test_admin_queries_forbidden_for_students(self, api_client, user_factory):
        user_factory(email="plain@example.com")
        api_client.login("plain@example.com", "testpass123")
        with pytest.raises(ApiError) as exc:
            api_client.admin_stats()
        assert exc.value.status_code == 403
