from pydantic import ConfigDict, Field
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from app.core.constants import DifficultyEnum
from app.schemas.base import CamelModel

class LessonBase(CamelModel):
    title: str = Field(..., min_length=1)
    content_html: str
    video_url: Optional[str] = None
    order: int

class LessonCreate(LessonBase):
    pass

class Lesson(LessonBase):
    id: int
    course_id: int

    model_config = ConfigDict(from_attributes=True)

class CourseBase(CamelModel):
    title: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    description: str
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    category: str = Field(..., min_length=1)
    difficulty: DifficultyEnum
    thumbnail_url: Optional[str] = None

class CourseCreate(CourseBase):
    lessons: List[LessonCreate] = Field(default_factory=list)

class CourseUpdate(CamelModel):
    """Partial update of scalar course fields. Lessons are not editable here."""
    title: Optional[str] = Field(None, min_length=1)
    slug: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    category: Optional[str] = Field(None, min_length=1)
    difficulty: Optional[DifficultyEnum] = None
    thumbnail_url: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

class Course(CourseBase):
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class CourseWithLessons(Course):
    lessons: List[Lesson] = Field(default_factory=list)
