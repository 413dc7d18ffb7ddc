from sqlalchemy.orm import Session, selectinload
import logging

from models.users import User
from schemas.users import UserCreate, UserUpdate
from exceptions import NotFoundError, DuplicateError

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int):
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str):
    return db.query(User).filter(User.email == email).first()


def get_users(db: Session, skip: int = 0, limit: int = 100):
    return db.query(User).options(selectinload(User.plots)).order_by(User.id).offset(skip).limit(limit).all()


def create_user(db: Session, user: UserCreate):
    if get_user_by_email(db, user.email):
        raise DuplicateError("User with this email already exists")

    db_user = User(**user.model_dump())
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def update_user(db: Session, user_id: int, user: UserUpdate):
    db_user = get_user(db, user_id)
    if db_user is None:
        raise NotFoundError("User")

    update_data = user.model_dump(exclude_unset=True)
    if "email" in update_data and update_data["email"] != db_user.email:
        if get_user_by_email(db, update_data["email"]):
            raise DuplicateError("User with this email already exists")

    for key, value in update_data.items():
        setattr(db_user, key, value)
    db.commit()
    db.refresh(db_user)
    return db_user


def delete_user(db: Session, user_id: int):
    db_user = get_user(db, user_id)
    if db_user is None:
        raise NotFoundError("User")

    # Unassigns the user from every plot as well
    db.delete(db_user)
    db.commit()
    logger.info(f"User {user_id} deleted")
    return {"message": "User removed"}
