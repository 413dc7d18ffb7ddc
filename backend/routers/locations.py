from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from database import get_db
from crud import locations as crud_locations
from exceptions import LedgerError, to_http_exception
from schemas.locations import Location, LocationCreate, LocationUpdate

router = APIRouter(prefix="/api/locations", tags=["Locations"])


@router.get("", response_model=List[Location])
def read_locations(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    """Retrieve a list of locations."""
    return crud_locations.get_locations(db, skip=skip, limit=limit)


@router.post("", response_model=Location, status_code=status.HTTP_201_CREATED)
def create_location(location: LocationCreate, db: Session = Depends(get_db)):
    """Create a new location."""
    try:
        return crud_locations.create_location(db, location)
    except LedgerError as e:
        raise to_http_exception(e)


@router.put("/{location_id}", response_model=Location)
def update_location(location_id: int, location: LocationUpdate, db: Session = Depends(get_db)):
    """Rename a location."""
    try:
        return crud_locations.update_location(db, location_id, location)
    except LedgerError as e:
        raise to_http_exception(e)


@router.delete("/{location_id}", status_code=status.HTTP_200_OK)
def delete_location(location_id: int, db: Session = Depends(get_db)):
    """Delete a location that no longer has plots."""
    try:
        return crud_locations.delete_location(db, location_id)
    except LedgerError as e:
        raise to_http_exception(e)
