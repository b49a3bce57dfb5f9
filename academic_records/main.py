from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging
import time

from .core.config import settings
from .core.database import close_db_connections
from .core.error_handlers import general_exception_handler
from .core.logging import setup_logging

from .routers import health, users, students, teachers, subjects, careers, enrollment, queries, reports

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info(f"Starting Academic Records API ({settings.environment})")

    yield

    logger.info("Shutting down Academic Records API")
    await close_db_connections()
    logger.info("Shutdown complete")

app = FastAPI(
    title="Academic Records API",
    description="Students, teachers, subjects and enrollments across the users, profiles and academic databases",
    version=settings.app_version,
    lifespan=lifespan
)

@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    logger.info(f"{request.method} {request.url.path} - {process_time:.3f}s")
    return response

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=3600,
)

app.add_exception_handler(Exception, general_exception_handler)

app.include_router(health.router)
app.include_router(users.router)
app.include_router(students.router)
app.include_router(teachers.router)
app.include_router(subjects.router)
app.include_router(careers.router)
app.include_router(enrollment.router)
app.include_router(queries.router)
app.include_router(reports.router)

@app.get("/")
async def root():
    return {
        "message": "Academic Records API",
        "version": settings.app_version,
        "databases": ["users", "profiles", "academic"],
        "status": "active"
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("academic_records.main:app", host="0.0.0.0", port=8000, reload=True)
