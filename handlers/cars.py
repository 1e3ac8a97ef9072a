from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Path, Request, UploadFile, FastAPI
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api.errors import db_failure
from api.schemas import MAX_ID, CarUpdate
from database import get_db
from handlers.images import image_filename, image_url, remove_image, save_upload, upload_basename
from models.car import Car

router = APIRouter(prefix="/cars", tags=["cars"])


def car_out(car: Car, backend_url: str) -> dict:
    data = car.to_dict()
    data["img"] = image_url(backend_url, car.img)
    return data


@router.get("")
def list_cars(request: Request, db: Session = Depends(get_db)):
    settings = request.app.state.settings
    try:
        cars = db.query(Car).all()
    except SQLAlchemyError as e:
        raise db_failure(db, "Failed to fetch cars", e)
    return [car_out(car, settings.backend_url) for car in cars]


@router.get("/{car_id}")
def get_car(request: Request, car_id: int = Path(ge=1, le=MAX_ID), db: Session = Depends(get_db)):
    try:
        car = db.query(Car).filter(Car.id == car_id).first()
    except SQLAlchemyError as e:
        raise db_failure(db, "Failed to fetch car", e)
    if not car:
        raise HTTPException(status_code=404, detail="Car not found")
    return car_out(car, request.app.state.settings.backend_url)


@router.post("")
def create_car(
        request: Request,
        name: str = Form(...),
        descrp: str = Form(""),
        priceday: float = Form(..., allow_inf_nan=False),
        discount: float = Form(0.0, allow_inf_nan=False),
        image: Optional[UploadFile] = File(None),
        db: Session = Depends(get_db),
):
    if image is None or not image.filename:
        raise HTTPException(status_code=400, detail="Image file is required")
    if not upload_basename(image.filename):
        raise HTTPException(status_code=400, detail="Image file name is invalid")

    images_dir = request.app.state.settings.images_dir
    img = save_upload(image, images_dir)
    car = Car(name=name, descrp=descrp, priceday=priceday, discount=discount, img=img)
    try:
        db.add(car)
        db.commit()
    except SQLAlchemyError as e:
        remove_image(img, images_dir)
        raise db_failure(db, "Failed to insert car", e)

    logger.info(f"Car {car.id} ({car.name}) created")
    return {"affectedRows": 1, "insertId": car.id, "img": img}


@router.put("/{car_id}")
def update_car(payload: CarUpdate, request: Request, car_id: int = Path(ge=1, le=MAX_ID), db: Session = Depends(get_db)):
    backend_url = request.app.state.settings.backend_url
    try:
        car = db.query(Car).filter(Car.id == car_id).first()
        if not car:
            raise HTTPException(status_code=404, detail="Car not found")
        car.name = payload.name
        car.descrp = payload.descrp
        car.priceday = payload.priceday
        car.discount = payload.discount
        car.img = image_filename(backend_url, payload.img)
        db.commit()
    except SQLAlchemyError as e:
        raise db_failure(db, "Failed to update car", e)
    return {"success": True, "message": "Car updated successfully"}


@router.delete("/{car_id}")
def delete_car(car_id: int = Path(ge=1, le=MAX_ID), db: Session = Depends(get_db)):
    try:
        deleted = db.query(Car).filter(Car.id == car_id).delete()
        db.commit()
    except SQLAlchemyError as e:
        raise db_failure(db, "Failed to delete car", e)
    if not deleted:
        raise HTTPException(status_code=404, detail="Car not found")
    logger.info(f"Car {car_id} deleted")
    return {"success": True, "message": "Car deleted successfully"}


def register_cars_handlers(app: FastAPI):
    app.include_router(router)
