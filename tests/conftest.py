import os
import tempfile

# must be set before course_search.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="course_search_logs_"))
os.environ["DEFAULT_TERM"] = "2026SP"

import pytest

from course_search.database import Base, SessionLocal, engine
from course_search.search.repository import InMemoryCourseRepository

from factories import build_catalog


@pytest.fixture
def catalog():
    return build_catalog()


@pytest.fixture
def memory_repo(catalog):
    return InMemoryCourseRepository(catalog)


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded_db(db):
    db.add_all(build_catalog())
    db.commit()
    return db
