from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from course_search.database import Base


class Meeting(Base):
    __tablename__ = "meetings"

    id = Column(Integer, primary_key=True)
    section_id = Column(Integer, ForeignKey("sections.id", ondelete="CASCADE"), nullable=False)

    # canonical day letters in MTWRFSU order, or "TBA"
    days = Column(String(8))
    # minutes since midnight; both null only for TBA/async meetings
    start_min = Column(Integer)
    end_min = Column(Integer)
    location = Column(String(100))

    section = relationship("Section", back_populates="meetings")
