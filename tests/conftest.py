import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

TEST_DB_PATH = "./test.db"

# Settings are read once at import time, so the environment must be set first
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["LOG_TO_FILE"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import uuid
from decimal import Decimal
import pytest
from fastapi.testclient import TestClient
from app.core.constants import RoleEnum
from app.core.database import Base, SessionLocal, engine, get_db, init_db
from app.core.security import get_password_hash
from app.crud.course import course as crud_course
from app.crud.user import user as crud_user
from tests.helpers.asserts import auth_headers
import main


@pytest.fixture(scope="session")
def database_engine():
    init_db()
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)

@pytest.fixture(scope="function")
def db_session(database_engine):
    db = SessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()
        with database_engine.begin() as conn:
            for table in reversed(Base.metadata.sorted_tables):
                conn.execute(table.delete())

@pytest.fixture(scope="function")
def client(db_session):
    main.app.dependency_overrides[get_db] = lambda: db_session
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()


@pytest.fixture
def user_factory(db_session):
    def _user_factory(email=None, password="testpass123", role=RoleEnum.USER, name="Test User"):
        return crud_user.create_user(
            db_session,
            obj_in={
                "name": name,
                "email": email or f"user-{uuid.uuid4().hex[:8]}@test.com",
                "hashed_password": get_password_hash(password),
                "role": role,
            },
        )
    return _user_factory

@pytest.fixture
def login(client):
    def _login(email, password="testpass123"):
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, f"Login failed: {response.text}"
        return response.json()["token"]
    return _login

@pytest.fixture
def student(user_factory, login):
    user = user_factory(name="Test Student")
    return {"user": user, "headers": auth_headers(login(user.email))}

@pytest.fixture
def other_student(user_factory, login):
    user = user_factory(name="Other Student")
    return {"user": user, "headers": auth_headers(login(user.email))}

@pytest.fixture
def admin(user_factory, login):
    user = user_factory(name="Test Admin", role=RoleEnum.ADMIN)
    return {"user": user, "headers": auth_headers(login(user.email))}


@pytest.fixture
def course_factory(db_session):
    def _course_factory(slug=None, title=None, category="Development", lesson_orders=(1, 2)):
        slug = slug or f"course-{uuid.uuid4().hex[:8]}"
        course_data = {
            "title": title or f"Course {slug}",
            "slug": slug,
            "description": "A test course",
            "price": Decimal("19.99"),
            "category": category,
            "difficulty": "Beginner",
        }
        lessons = [
            {"title": f"Lesson {order}", "content_html": f"<p>Lesson {order}</p>", "order": order}
            for order in lesson_orders
        ]
        return crud_course.create_with_lessons(db_session, course_data=course_data, lessons=lessons)
    return _course_factory
