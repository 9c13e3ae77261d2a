from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from university.core.deps import get_db
from university.core.permissions import guard
from university.schemas.token import Claim
from university.schemas.user import UserRead, UserSelfUpdate, UserSummary, UserUpdate
from university.services import users as user_service

router = APIRouter()


@router.get("", response_model=list[UserRead])
def list_users(db: Session = Depends(get_db)):
    return user_service.list_users(db)


# fixed paths are declared before /{user_id}
@router.get("/list", response_model=list[UserSummary])
def list_managed_users(
    db: Session = Depends(get_db),
    admin: Claim = Depends(guard("users.list_managed")),
):
    return user_service.list_managed_users(db)


@router.get("/me", response_model=UserRead)
def me(
    db: Session = Depends(get_db),
    claim: Claim = Depends(guard("users.me")),
):
    return user_service.get_user(db, claim, claim.user_id)


@router.put("/me", response_model=UserRead)
def update_me(
    payload: UserSelfUpdate,
    db: Session = Depends(get_db),
    claim: Claim = Depends(guard("users.update_self")),
):
    return user_service.update_self(db, claim, payload)


@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    claim: Claim = Depends(guard("users.read")),
):
    return user_service.get_user(db, claim, user_id)


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    payload: UserUpdate,
    db: Session = Depends(get_db),
    admin: Claim = Depends(guard("users.update")),
):
    return user_service.update_user(db, admin, user_id, payload)


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    admin: Claim = Depends(guard("users.delete")),
):
    user_service.delete_user(db, admin, user_id)
    return {"message": "User deleted successfully"}
