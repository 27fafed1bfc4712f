import logging
from decimal import Decimal
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.constants import RoleEnum
from app.core.security import get_password_hash
from app.crud.course import course as crud_course
from app.crud.user import user as crud_user

logger = logging.getLogger(__name__)

DEMO_COURSES = [
    {
        "course": {
            "title": "Full Stack React & Node",
            "slug": "full-stack-react-node",
            "description": "Learn to build modern web applications from scratch.",
            "price": Decimal("49.99"),
            "category": "Development",
            "difficulty": "Intermediate",
            "thumbnail_url": "https://images.unsplash.com/photo-1633356122544-f134324a6cee?w=800&q=80",
        },
        "lessons": [
            {"title": "Introduction", "content_html": "<p>Welcome to the course!</p>", "order": 1},
            {"title": "Setup", "content_html": "<p>Let's install Node.js</p>", "order": 2},
        ],
    },
    {
        "course": {
            "title": "Advanced TypeScript Patterns",
            "slug": "advanced-typescript",
            "description": "Master generic types, utility types, and advanced architectural patterns.",
            "price": Decimal("79.99"),
            "category": "Development",
            "difficulty": "Advanced",
            "thumbnail_url": "https://images.unsplash.com/photo-1516116216624-53e697fedbea?w=800&q=80",
        },
        "lessons": [
            {"title": "Generics Deep Dive", "content_html": "<p>Understanding generic constraints and defaults.</p>", "order": 1},
            {"title": "Conditional Types", "content_html": "<p>Creating dynamic types based on inputs.</p>", "order": 2},
        ],
    },
    {
        "course": {
            "title": "UI/UX Design Fundamentals",
            "slug": "ui-ux-fundamentals",
            "description": "The essential guide to modern interface design and user experience.",
            "price": Decimal("39.99"),
            "category": "Design",
            "difficulty": "Beginner",
            "thumbnail_url": "https://images.unsplash.com/photo-1586717791821-3f44a563eb4c?w=800&q=80",
        },
        "lessons": [
            {"title": "Visual Hierarchy", "content_html": "<p>Guiding the user's eye with color and spacing.</p>", "order": 1},
            {"title": "Typography", "content_html": "<p>Choosing and pairing fonts effectively.</p>", "order": 2},
        ],
    },
    {
        "course": {
            "title": "Mastering Tailwind CSS",
            "slug": "mastering-tailwind",
            "description": "Build beautiful, responsive layouts at lightning speed with Tailwind.",
            "price": Decimal("29.99"),
            "category": "Design",
            "difficulty": "Intermediate",
            "thumbnail_url": "https://images.unsplash.com/photo-1587620962725-abab7fe55159?w=800&q=80",
        },
        "lessons": [
            {"title": "Utility First Concept", "content_html": "<p>Why utility classes beat traditional CSS.</p>", "order": 1},
            {"title": "Responsive Design", "content_html": "<p>Building layouts for every screen size.</p>", "order": 2},
        ],
    },
]


def seed_database(db: Session) -> bool:
    """Create the admin account and demo catalog on an empty user table.

    Returns True when data was inserted, False when users already exist.
    """
    if crud_user.count(db) > 0:
        return False

    # One transaction: a failed run must leave the user table empty
    try:
        crud_user.create_user(
            db,
            obj_in={
                "name": settings.ADMIN_NAME,
                "email": settings.ADMIN_EMAIL,
                "hashed_password": get_password_hash(settings.ADMIN_PASSWORD),
                "role": RoleEnum.ADMIN,
            },
            commit=False,
        )
        for demo in DEMO_COURSES:
            crud_course.create_with_lessons(
                db, course_data=demo["course"], lessons=demo["lessons"], commit=False
            )
        db.commit()
    except Exception:
        db.rollback()
        logger.error("Seeding failed; no seed data was kept", exc_info=True)
        raise

    logger.info(f"Seeded admin {settings.ADMIN_EMAIL} and {len(DEMO_COURSES)} demo courses")
    return True
