import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from college_admin.api import (
    attendance,
    auth,
    courses,
    dashboard,
    enrollments,
    faculty,
    fees,
    marks,
    students,
)
from college_admin.core.config import settings
from college_admin.core.errors import DomainError
from college_admin.db.session import create_tables

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Creating database tables...")
    create_tables()
    yield


app = FastAPI(
    title="College Admin API",
    description="Students, courses, faculty, fees, marks, attendance and enrollments",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    logger.info(f"{request.method} {request.url.path} -> {exc.code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    # Details stay in the server log
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "code": "INTERNAL_ERROR"},
    )


@app.get("/health", tags=["health"])
def health_check():
    return {"status": "healthy"}


app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(students.router, prefix="/api/students", tags=["students"])
app.include_router(courses.router, prefix="/api/courses", tags=["courses"])
app.include_router(faculty.router, prefix="/api/faculty", tags=["faculty"])
app.include_router(fees.router, prefix="/api/fees", tags=["fees"])
app.include_router(marks.router, prefix="/api/marks", tags=["marks"])
app.include_router(attendance.router, prefix="/api/attendance", tags=["attendance"])
app.include_router(enrollments.router, prefix="/api/enrollments", tags=["enrollments"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("college_admin.main:app", host="0.0.0.0", port=8000, reload=True)
