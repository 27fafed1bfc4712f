import pytest
from decimal import Decimal
from sqlalchemy.exc import IntegrityError

from app.crud.course import course as crud_course
from app.crud.enrollment import enrollment as crud_enrollment
from app.crud.report import get_stats
from app.crud.user import user as crud_user
from app.models.lesson import Lesson


def test_stats_on_empty_database(db_session):
    assert get_stats(db_session) == {"total_users": 0, "total_courses": 0, "total_enrollments": 0}


def test_stats_count_rows(db_session, user_factory, course_factory):
    user = user_factory()
    user_factory()
    course = course_factory()
    crud_enrollment.create_for_user(db_session, user_id=user.id, course_id=course.id)

    assert get_stats(db_session) == {"total_users": 2, "total_courses": 1, "total_enrollments": 1}


def test_duplicate_email_violates_constraint(db_session, user_factory):
    user_factory(email="dup@example.com")
    with pytest.raises(IntegrityError):
        user_factory(email="dup@example.com")
    assert crud_user.count(db_session) == 1


def test_duplicate_enrollment_violates_constraint(db_session, user_factory, course_factory):
    user = user_factory()
    course = course_factory()
    crud_enrollment.create_for_user(db_session, user_id=user.id, course_id=course.id)
    with pytest.raises(IntegrityError):
        crud_enrollment.create_for_user(db_session, user_id=user.id, course_id=course.id)
    assert crud_enrollment.count(db_session) == 1


def test_course_creation_is_atomic(db_session, course_factory):
    course_factory(slug="existing")
    with pytest.raises(IntegrityError):
        crud_course.create_with_lessons(
            db_session,
            course_data={
                "title": "Clash",
                "slug": "existing",
                "description": "",
                "price": Decimal("1.00"),
                "category": "Development",
                "difficulty": "Beginner",
            },
            lessons=[{"title": "Orphan", "content_html": "<p/>", "order": 1}],
        )
    assert crud_course.count(db_session) == 1
    assert db_session.query(Lesson).filter(Lesson.title == "Orphan").count() == 0


def test_lessons_ordered_by_order_then_id(db_session, course_factory):
    course = course_factory(lesson_orders=(2, 1, 2))
    lessons = crud_course.get(db_session, id=course.id).lessons
    assert [lesson.order for lesson in lessons] == [1, 2, 2]
    assert lessons[1].id < lessons[2].id


def test_get_filtered_orders_by_id(db_session, course_factory):
    ids = [course_factory().id for _ in range(3)]
    assert [c.id for c in crud_course.get_filtered(db_session)] == ids


def test_update_scalars_missing_course(db_session):
    assert crud_course.update_scalars(db_session, id=424242, obj_in={"title": "X"}) is None


def test_delete_cascade_missing_course(db_session):
    assert crud_course.delete_cascade(db_session, id=424242) is False


def test_replace_progress_overwrites_map(db_session, user_factory, course_factory):
    user = user_factory()
    course = course_factory()
    created = crud_enrollment.create_for_user(db_session, user_id=user.id, course_id=course.id)

    crud_enrollment.replace_progress(db_session, id=created.id, progress={"1": True, "2": False})
    updated = crud_enrollment.replace_progress(db_session, id=created.id, progress={"2": True})
    assert updated.progress == {"2": True}


def test_users_listed_newest_first(db_session, user_factory):
    first = user_factory()
    second = user_factory()
    assert [u.id for u in crud_user.get_all(db_session)] == [second.id, first.id]
