from app.schemas.base import CamelModel

class StatsSchema(CamelModel):
    total_users: int
    total_courses: int
    total_enrollments: int
