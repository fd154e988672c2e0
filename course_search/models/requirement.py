from sqlalchemy import Column, Integer, String, Text, Table, ForeignKey
from sqlalchemy.orm import relationship
from course_search.database import Base

course_requirements = Table(
    "course_requirements",
    Base.metadata,
    Column("course_id", Integer, ForeignKey("courses.id", ondelete="CASCADE"), primary_key=True),
    Column("requirement_id", Integer, ForeignKey("requirements.id", ondelete="CASCADE"), primary_key=True),
)


class Requirement(Base):
    __tablename__ = "requirements"

    id = Column(Integer, primary_key=True)
    code = Column(String(40), unique=True, nullable=False, index=True)
    name = Column(String(255))
    description = Column(Text)

    courses = relationship("Course", secondary=course_requirements, back_populates="requirements")
