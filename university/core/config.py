import os
from datetime import timedelta
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent.parent

DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR}/university.db")

# DEV default only: set JWT_SECRET in any real deployment.
SECRET_KEY = os.getenv("JWT_SECRET", "change-me-in-production-not-a-real-secret")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE = timedelta(days=7)

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Role names
STUDENT = "student"
INSTRUCTOR = "instructor"
ADMIN = "admin"
ROLES = (STUDENT, INSTRUCTOR, ADMIN)

SEMESTER_NAMES = ("First Semester", "Second Semester")
ENROLLMENT_STATUSES = ("enrolled", "completed", "dropped")
