from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Header, HTTPException, Path, Query, Request
from loguru import logger
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api.errors import db_failure
from api.schemas import MAX_ID, RentalCreate
from database import get_db
from handlers.calculator import calculate_rental_total, total_matches
from models.car import Car
from models.customer import Customer
from models.rental import Rental

router = APIRouter(prefix="/rentals", tags=["rentals"])


@router.get("")
def list_rentals(db: Session = Depends(get_db)):
    try:
        rows = (
            db.query(
                Rental.id,
                Customer.name.label("customer_name"),
                func.coalesce(Rental.car_name, Car.name).label("car_name"),
                func.coalesce(Rental.car_price, Car.priceday).label("car_price"),
                Rental.start_date,
                Rental.end_date,
                Rental.days,
                Rental.driver,
                Rental.total,
                Rental.created_at,
            )
            .join(Customer, Rental.customer_id == Customer.id)
            .outerjoin(Car, Rental.car_id == Car.id)
            .order_by(Rental.created_at.desc(), Rental.id.desc())
            .all()
        )
    except SQLAlchemyError as e:
        raise db_failure(db, "Failed to fetch rentals", e)
    return [row._asdict() for row in rows]


def check_total(payload: RentalCreate, car: Car, settings):
    try:
        expected = calculate_rental_total(
            car.priceday, payload.days, car.discount or 0.0,
            payload.driver, settings.driver_fee_per_day,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not total_matches(payload.total, expected):
        raise HTTPException(
            status_code=400,
            detail={"error": "Total does not match the rental price", "expected_total": expected},
        )


@router.post("")
def create_rental(payload: RentalCreate, request: Request, db: Session = Depends(get_db)):
    settings = request.app.state.settings
    try:
        car = db.query(Car).filter(Car.id == payload.car_id).first()
        if not car:
            raise HTTPException(status_code=404, detail="Car not found")
        if settings.strict_totals:
            check_total(payload, car, settings)

        customer = Customer(name=payload.name)
        db.add(customer)
        db.flush()

        rental = Rental(
            customer_id=customer.id,
            car_id=car.id,
            car_name=car.name,
            car_price=car.priceday,
            start_date=payload.start_date,
            end_date=payload.end_date,
            days=payload.days,
            driver=1 if payload.driver else 0,
            total=payload.total,
        )
        db.add(rental)
        db.commit()
    except HTTPException:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        raise db_failure(db, "Failed to create rental", e)

    logger.info(f"Rental {rental.id} created for customer {customer.id} on car {car.id}")
    return {
        "success": True,
        "customer_id": customer.id,
        "rental_id": rental.id,
        "message": "Rental created successfully",
    }


@router.delete("/{rental_id}")
def delete_rental(rental_id: int = Path(ge=1, le=MAX_ID), db: Session = Depends(get_db)):
    try:
        deleted = db.query(Rental).filter(Rental.id == rental_id).delete()
        db.commit()
    except SQLAlchemyError as e:
        raise db_failure(db, "Failed to delete rental", e)
    if not deleted:
        raise HTTPException(status_code=404, detail="Rental not found")
    return {"success": True, "message": "Rental deleted"}


@router.delete("")
def delete_all_rentals(
        request: Request,
        confirm: bool = Query(False),
        x_admin_token: Optional[str] = Header(None),
        db: Session = Depends(get_db),
):
    admin_token = request.app.state.settings.admin_token
    if admin_token and x_admin_token != admin_token:
        logger.warning("Refused to delete all rentals: bad or missing admin token")
        raise HTTPException(status_code=403, detail="Admin token required")
    if not admin_token and not confirm:
        logger.warning("Refused to delete all rentals: not confirmed")
        raise HTTPException(status_code=400, detail="Pass confirm=true to delete all rentals")

    try:
        deleted = db.query(Rental).delete()
        db.commit()
    except SQLAlchemyError as e:
        raise db_failure(db, "Failed to delete all rentals", e)
    logger.warning(f"All rentals deleted ({deleted} rows)")
    return {"success": True, "deleted": deleted, "message": "All rentals deleted"}


def register_rentals_handlers(app: FastAPI):
    app.include_router(router)
