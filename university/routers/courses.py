from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from university.core.deps import get_db
from university.core.permissions import guard
from university.schemas.course import CourseCreate, CourseRead, CourseUpdate
from university.schemas.token import Claim
from university.services import courses as course_service

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_course(
    payload: CourseCreate,
    db: Session = Depends(get_db),
    admin: Claim = Depends(guard("courses.write")),
):
    course = course_service.create_course(db, admin, payload)
    return {"course_id": course.id, "message": "Course created"}


@router.get("", response_model=list[CourseRead])
def list_courses(db: Session = Depends(get_db)):
    return course_service.list_courses(db)


@router.get("/{course_id}", response_model=CourseRead)
def get_course(course_id: int, db: Session = Depends(get_db)):
    return course_service.get_course(db, course_id)


@router.put("/{course_id}", response_model=CourseRead)
def update_course(
    course_id: int,
    payload: CourseUpdate,
    db: Session = Depends(get_db),
    admin: Claim = Depends(guard("courses.write")),
):
    return course_service.update_course(db, admin, course_id, payload)


@router.delete("/{course_id}")
def delete_course(
    course_id: int,
    db: Session = Depends(get_db),
    admin: Claim = Depends(guard("courses.write")),
):
    course_service.delete_course(db, admin, course_id)
    return {"message": "Course deleted"}
