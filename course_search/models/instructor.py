from sqlalchemy import Column, Integer, String, Table, ForeignKey
from course_search.database import Base

section_instructors = Table(
    "section_instructors",
    Base.metadata,
    Column("section_id", Integer, ForeignKey("sections.id", ondelete="CASCADE"), primary_key=True),
    Column("instructor_id", Integer, ForeignKey("instructors.id", ondelete="CASCADE"), primary_key=True),
)


class Instructor(Base):
    __tablename__ = "instructors"

    id = Column(Integer, primary_key=True)
    name = Column(String(200), unique=True, nullable=False)
