from sqlalchemy.orm import Session, selectinload
import logging

from models.locations import Location
from schemas.locations import LocationCreate, LocationUpdate
from exceptions import NotFoundError, DuplicateError, ConflictError

logger = logging.getLogger(__name__)


def get_location(db: Session, location_id: int):
    return db.query(Location).filter(Location.id == location_id).first()


def get_location_by_name(db: Session, name: str):
    return db.query(Location).filter(Location.name == name).first()


def get_locations(db: Session, skip: int = 0, limit: int = 100):
    return db.query(Location).options(selectinload(Location.plots)).order_by(Location.name).offset(skip).limit(limit).all()


def create_location(db: Session, location: LocationCreate):
    if get_location_by_name(db, location.name):
        raise DuplicateError("Location already exists")

    db_location = Location(**location.model_dump())
    db.add(db_location)
    db.commit()
    db.refresh(db_location)
    logger.info(f"Location '{db_location.name}' created")
    return db_location


def update_location(db: Session, location_id: int, location: LocationUpdate):
    db_location = get_location(db, location_id)
    if db_location is None:
        raise NotFoundError("Location")

    if location.name != db_location.name and get_location_by_name(db, location.name):
        raise DuplicateError("Location already exists")

    db_location.name = location.name
    db.commit()
    db.refresh(db_location)
    return db_location


def delete_location(db: Session, location_id: int):
    db_location = get_location(db, location_id)
    if db_location is None:
        raise NotFoundError("Location")

    if db_location.plots:
        raise ConflictError(
            f"Location '{db_location.name}' still has {len(db_location.plots)} plots and cannot be deleted."
        )

    db.delete(db_location)
    db.commit()
    logger.info(f"Location {location_id} deleted")
    return {"message": "Location removed"}
