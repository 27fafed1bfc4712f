from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.core.database import Base

class Lesson(Base):
    __tablename__ = "lessons"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), index=True, nullable=False)
    title = Column(String, nullable=False)
    content_html = Column(Text, nullable=False)
    video_url = Column(String, nullable=True)
    # Playback sequence within the course; not unique
    order = Column(Integer, nullable=False)

    course = relationship("Course", back_populates="lessons")
