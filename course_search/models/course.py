from sqlalchemy import Column, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from course_search.database import Base

from course_search.models.requirement import Requirement, course_requirements
from course_search.models.section import Section


class Course(Base):
    __tablename__ = "courses"
    __table_args__ = (UniqueConstraint("subject", "number", name="uq_course_subject_number"),)

    id = Column(Integer, primary_key=True)

    subject = Column(String(20), nullable=False, index=True)
    number = Column(String(20), nullable=False)
    title = Column(String(255))
    # free-form, e.g. "3" or "1-3"
    units = Column(String(20))

    # relationship
    sections = relationship(Section, back_populates="course", order_by=Section.section_code)
    requirements = relationship(
        Requirement, secondary=course_requirements, back_populates="courses", order_by=Requirement.code
    )

    @property
    def code(self) -> str:
        return f"{self.subject} {self.number}"

    @property
    def ge_codes(self) -> list[str]:
        return [r.code for r in self.requirements]
