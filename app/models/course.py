from sqlalchemy import Column, Integer, String, Text, Numeric, DateTime, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base
from app.core.constants import DifficultyEnum, enum_values

class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, index=True, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String, index=True, nullable=False)
    difficulty = Column(
        Enum(DifficultyEnum, name="difficultyenum", values_callable=enum_values),
        nullable=False,
    )
    thumbnail_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    lessons = relationship("Lesson", back_populates="course", order_by="(Lesson.order, Lesson.id)")
    enrollments = relationship("Enrollment", back_populates="course")
