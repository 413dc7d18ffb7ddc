from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from database import get_db
from crud import users as crud_users
from exceptions import LedgerError, to_http_exception
from schemas.users import User, UserCreate, UserUpdate

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=List[User])
def read_users(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    """Retrieve collectors together with the plots assigned to them."""
    return crud_users.get_users(db, skip=skip, limit=limit)


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(user: UserCreate, db: Session = Depends(get_db)):
    """Register a new collector."""
    try:
        return crud_users.create_user(db, user)
    except LedgerError as e:
        raise to_http_exception(e)


@router.get("/{user_id}", response_model=User)
def read_user(user_id: int, db: Session = Depends(get_db)):
    """Retrieve a single collector by ID."""
    db_user = crud_users.get_user(db, user_id)
    if db_user is None:
        raise HTTPException(status_code=404, detail={"message": "User not found", "code": "not_found"})
    return db_user


@router.put("/{user_id}", response_model=User)
def update_user(user_id: int, user: UserUpdate, db: Session = Depends(get_db)):
    """Update a collector's name, email or mobile number."""
    try:
        return crud_users.update_user(db, user_id, user)
    except LedgerError as e:
        raise to_http_exception(e)


@router.delete("/{user_id}", status_code=status.HTTP_200_OK)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    """Delete a collector and unassign them from their plots."""
    try:
        return crud_users.delete_user(db, user_id)
    except LedgerError as e:
        raise to_http_exception(e)
