from sqlalchemy.orm import Session, selectinload
from typing import List
import logging

from models.plots import Plot
from models.locations import Location
from models.users import User
from models.payment_schedules import PaymentSchedule
from schemas.plots import PlotCreate, PlotUpdate
from exceptions import NotFoundError, DuplicateError, InvalidReferenceError

logger = logging.getLogger(__name__)


def get_plot(db: Session, plot_id: int):
    return db.query(Plot).filter(Plot.id == plot_id).first()


def get_plot_by_number(db: Session, plot_number: str):
    return db.query(Plot).filter(Plot.plot_number == plot_number).first()


def get_plots(db: Session, skip: int = 0, limit: int = 100):
    return (
        db.query(Plot)
        .options(selectinload(Plot.location), selectinload(Plot.users), selectinload(Plot.payment_schedules))
        .order_by(Plot.id)
        .offset(skip)
        .limit(limit)
        .all()
    )


def append_payment_ref(plot: Plot, payment: PaymentSchedule):
    """Link a schedule to its plot. The caller commits."""
    if payment not in plot.payment_schedules:
        plot.payment_schedules.append(payment)


def remove_payment_ref(plot: Plot, payment: PaymentSchedule):
    """Unlink a schedule from its plot. The caller commits."""
    if payment in plot.payment_schedules:
        plot.payment_schedules.remove(payment)


def create_plot(db: Session, plot: PlotCreate):
    if get_plot_by_number(db, plot.plot_number):
        raise DuplicateError("Plot already exists")

    location = db.query(Location).filter(Location.id == plot.location_id).first()
    if location is None:
        raise InvalidReferenceError("Location")

    db_plot = Plot(**plot.model_dump())
    db.add(db_plot)
    db.commit()
    db.refresh(db_plot)
    logger.info(f"Plot {db_plot.plot_number} created in location {location.name}")
    return db_plot


def update_plot(db: Session, plot_id: int, plot: PlotUpdate):
    db_plot = get_plot(db, plot_id)
    if db_plot is None:
        raise NotFoundError("Plot")

    update_data = plot.model_dump(exclude_unset=True)
    if "plot_number" in update_data and update_data["plot_number"] != db_plot.plot_number:
        if get_plot_by_number(db, update_data["plot_number"]):
            raise DuplicateError("Plot already exists")
    if "location_id" in update_data:
        if db.query(Location).filter(Location.id == update_data["location_id"]).first() is None:
            raise InvalidReferenceError("Location")

    for key, value in update_data.items():
        setattr(db_plot, key, value)
    db.commit()
    db.refresh(db_plot)
    return db_plot


def delete_plot(db: Session, plot_id: int):
    db_plot = get_plot(db, plot_id)
    if db_plot is None:
        raise NotFoundError("Plot")

    schedule_count = len(db_plot.payment_schedules)
    db.delete(db_plot)
    db.commit()
    logger.info(f"Plot {plot_id} deleted together with {schedule_count} payment schedules")
    return {"message": "Plot removed"}


def assign_users(db: Session, plot_id: int, user_ids: List[int]):
    db_plot = get_plot(db, plot_id)
    if db_plot is None:
        raise NotFoundError("Plot")

    unique_ids = list(dict.fromkeys(user_ids))
    users = db.query(User).filter(User.id.in_(unique_ids)).all() if unique_ids else []
    if len(users) != len(unique_ids):
        raise InvalidReferenceError("One or more users")

    # Replaces the previous assignment
    db_plot.users = users
    db.commit()
    db.refresh(db_plot)
    logger.info(f"Plot {plot_id} assigned to users {unique_ids}")
    return db_plot
