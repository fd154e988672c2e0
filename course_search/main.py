# course_search/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from course_search.config import settings
from course_search.database import Base, engine
from course_search.routers import schedule, search, terms

import time
import logging
from fastapi import Request
from course_search.logging_config import setup_logging


setup_logging()
logger = logging.getLogger("course_search")


# create tables if missing
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Course Search Backend", version="1.0.0")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
        ms = int((time.time() - start) * 1000)
        logger.info("%s %s -> %s (%dms)", request.method, request.url.path, response.status_code, ms)
        return response
    except Exception:
        ms = int((time.time() - start) * 1000)
        logger.exception("Unhandled error %s %s (%dms)", request.method, request.url.path, ms)
        raise


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(search.router)
app.include_router(terms.router)
app.include_router(schedule.router)


@app.get("/")
def root():
    return {"message": "Course search backend is running!"}
