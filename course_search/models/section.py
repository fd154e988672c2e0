from sqlalchemy import Column, Integer, String, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from course_search.database import Base

from course_search.models.enums import Modality, SectionStatus
from course_search.models.instructor import Instructor, section_instructors
from course_search.models.meeting import Meeting
from course_search.models.term import Term


class Section(Base):
    __tablename__ = "sections"
    __table_args__ = (UniqueConstraint("term_id", "section_code", name="uq_section_term_code"),)

    id = Column(Integer, primary_key=True)
    course_id = Column(Integer, ForeignKey("courses.id", ondelete="CASCADE"), nullable=False)
    term_id = Column(Integer, ForeignKey("terms.id", ondelete="CASCADE"), nullable=False)

    section_code = Column(String(40), nullable=False)
    class_number = Column(String(40))

    modality = Column(Enum(Modality), nullable=False, default=Modality.UNKNOWN)
    status = Column(Enum(SectionStatus), nullable=False, default=SectionStatus.UNKNOWN)

    capacity = Column(Integer)
    enrolled = Column(Integer)
    waitlist = Column(Integer)
    campus = Column(String(100))

    course = relationship("Course", back_populates="sections")
    term = relationship(Term)
    meetings = relationship(Meeting, back_populates="section", order_by=Meeting.id)
    instructors = relationship(Instructor, secondary=section_instructors, order_by=Instructor.name)

    @property
    def available_seats(self):
        """capacity - enrolled, or None when either count is unknown."""
        if self.capacity is None or self.enrolled is None:
            return None
        return self.capacity - self.enrolled
