from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from university.core.config import ADMIN, INSTRUCTOR, STUDENT
from university.core.deps import get_db
from university.core.permissions import guard
from university.schemas.auth import LoginRequest
from university.schemas.token import Claim, Token
from university.schemas.user import AdminRegister, InstructorRegister, StudentRegister
from university.services import users as user_service

router = APIRouter()


@router.post(
    "/register/student",
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Validation failed or email / ID number already registered"},
    },
)
def register_student(payload: StudentRegister, db: Session = Depends(get_db)):
    user = user_service.register(db, STUDENT, payload)
    return {
        "user_id": user.id,
        "id_number": user.id_number,
        "message": "Student registered",
    }


@router.post("/register/instructor", status_code=status.HTTP_201_CREATED)
def register_instructor(
    payload: InstructorRegister,
    db: Session = Depends(get_db),
    admin: Claim = Depends(guard("users.register_instructor")),
):
    user = user_service.register(db, INSTRUCTOR, payload)
    return {"user_id": user.id, "message": "Instructor registered"}


@router.post("/register/admin", status_code=status.HTTP_201_CREATED)
def register_admin(
    payload: AdminRegister,
    db: Session = Depends(get_db),
    admin: Claim = Depends(guard("users.register_admin")),
):
    user = user_service.register(db, ADMIN, payload)
    return {"user_id": user.id, "message": "Admin registered"}


@router.post(
    "/login",
    response_model=Token,
    responses={
        401: {"description": "Invalid credentials"},
    },
)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    return user_service.authenticate(db, payload.email, payload.password)
