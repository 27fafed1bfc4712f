from pydantic import ConfigDict, Field
from typing import Dict, Optional
from datetime import datetime

from app.schemas.base import CamelModel
from app.schemas.course import Course


class EnrollmentCreate(CamelModel):
    course_id: int


class ProgressUpdate(CamelModel):
    lesson_id: int
    completed: bool


class Enrollment(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    course_id: int
    progress: Dict[str, bool] = Field(default_factory=dict)
    enrolled_at: Optional[datetime] = None


class EnrollmentWithCourse(Enrollment):
    course: Course
