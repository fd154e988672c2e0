from sqlalchemy import Column, Integer, String
from course_search.database import Base


class Term(Base):
    __tablename__ = "terms"

    id = Column(Integer, primary_key=True)
    code = Column(String(40), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
