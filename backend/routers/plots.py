from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from database import get_db
from crud import plots as crud_plots
from exceptions import LedgerError, to_http_exception
from schemas.plots import Plot, PlotCreate, PlotUpdate, PlotAssignUsers

router = APIRouter(prefix="/api/plots", tags=["Plots"])


@router.get("", response_model=List[Plot])
def read_plots(skip: int = 0, limit: int = 100, db: Session = Depends(get_db)):
    """Retrieve plots with their location and assigned collectors."""
    return crud_plots.get_plots(db, skip=skip, limit=limit)


@router.post("", response_model=Plot, status_code=status.HTTP_201_CREATED)
def create_plot(plot: PlotCreate, db: Session = Depends(get_db)):
    """Create a new plot inside an existing location."""
    try:
        return crud_plots.create_plot(db, plot)
    except LedgerError as e:
        raise to_http_exception(e)


@router.get("/{plot_id}", response_model=Plot)
def read_plot(plot_id: int, db: Session = Depends(get_db)):
    """Retrieve a single plot by ID."""
    db_plot = crud_plots.get_plot(db, plot_id)
    if db_plot is None:
        raise HTTPException(status_code=404, detail={"message": "Plot not found", "code": "not_found"})
    return db_plot


@router.put("/{plot_id}", response_model=Plot)
def update_plot(plot_id: int, plot: PlotUpdate, db: Session = Depends(get_db)):
    """Update an existing plot."""
    try:
        return crud_plots.update_plot(db, plot_id, plot)
    except LedgerError as e:
        raise to_http_exception(e)


@router.delete("/{plot_id}", status_code=status.HTTP_200_OK)
def delete_plot(plot_id: int, db: Session = Depends(get_db)):
    """Delete a plot and its payment schedules."""
    try:
        return crud_plots.delete_plot(db, plot_id)
    except LedgerError as e:
        raise to_http_exception(e)


@router.put("/{plot_id}/assign", response_model=Plot)
def assign_users_to_plot(plot_id: int, assignment: PlotAssignUsers, db: Session = Depends(get_db)):
    """Replace the collectors assigned to a plot."""
    try:
        return crud_plots.assign_users(db, plot_id, assignment.user_ids)
    except LedgerError as e:
        raise to_http_exception(e)
