from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from university.core.deps import get_db
from university.core.permissions import guard
from university.schemas.course_assignment import CourseAssignmentCreate, CourseAssignmentRead
from university.schemas.token import Claim
from university.services import course_assignments as assignment_service

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_course_assignment(
    payload: CourseAssignmentCreate,
    db: Session = Depends(get_db),
    admin: Claim = Depends(guard("course_assignments.write")),
):
    assignment = assignment_service.create_assignment(db, admin, payload)
    return {"assignment_id": assignment.id, "message": "Course assignment created"}


@router.get("", response_model=list[CourseAssignmentRead])
def list_course_assignments(
    db: Session = Depends(get_db),
    admin: Claim = Depends(guard("course_assignments.list")),
):
    return assignment_service.list_assignments(db, admin)


@router.get("/my-assignments", response_model=list[CourseAssignmentRead])
def my_course_assignments(
    db: Session = Depends(get_db),
    me: Claim = Depends(guard("course_assignments.mine")),
):
    return assignment_service.list_assignments(db, me, mine_only=True)


@router.delete("/{assignment_id}")
def delete_course_assignment(
    assignment_id: int,
    db: Session = Depends(get_db),
    admin: Claim = Depends(guard("course_assignments.write")),
):
    assignment_service.delete_assignment(db, admin, assignment_id)
    return {"message": "Course assignment deleted"}
