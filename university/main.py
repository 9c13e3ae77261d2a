import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from university.core.config import CORS_ORIGINS, LOG_LEVEL
from university.core.errors import PersistenceFailure
from university.core.logging_middleware import LoggingMiddleware
from university.core.validation import format_errors
from university.db.init_db import init_db
from university.routers.auth import router as auth_router
from university.routers.course_assignments import router as course_assignments_router
from university.routers.courses import router as courses_router
from university.routers.departments import router as departments_router
from university.routers.enrollments import router as enrollments_router
from university.routers.grades import router as grades_router
from university.routers.semesters import router as semesters_router
from university.routers.student import router as student_router
from university.routers.users import router as users_router

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="University Administration API")

# Middleware
app.add_middleware(LoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Error bodies: {"error": "..."} or {"errors": [{"field", "msg"}, ...]}
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if isinstance(exc.detail, list):
        body = {"errors": exc.detail}
    else:
        body = {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=body, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"errors": format_errors(exc.errors())})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    # DBAPI errors carry the driver message on .orig
    reason = getattr(exc, "orig", None) or exc
    failure = PersistenceFailure(f"{PersistenceFailure.default_message}: {reason}")
    return JSONResponse(status_code=failure.status_code, content={"error": failure.detail})


@app.get("/")
def root():
    return {"message": "University Administration API is running"}


@app.get("/health")
def health():
    return {"status": "ok"}


@app.on_event("startup")
def on_startup():
    init_db()


app.include_router(auth_router, prefix="/api", tags=["auth"])
app.include_router(users_router, prefix="/api/users", tags=["users"])
app.include_router(departments_router, prefix="/api/departments", tags=["departments"])
app.include_router(courses_router, prefix="/api/courses", tags=["courses"])
app.include_router(semesters_router, prefix="/api/semesters", tags=["semesters"])
app.include_router(enrollments_router, prefix="/api/enrollments", tags=["enrollments"])
app.include_router(
    course_assignments_router, prefix="/api/course-assignments", tags=["course-assignments"]
)
app.include_router(grades_router, prefix="/api/grades", tags=["grades"])

# Student self-service (route already defines its full path)
app.include_router(student_router)
