from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

# Largest key a signed 64-bit integer column holds
MAX_ID = 2 ** 63 - 1
MAX_DAYS = 2 ** 31 - 1


class CarUpdate(BaseModel):
    name: str
    descrp: Optional[str] = None
    priceday: float = Field(allow_inf_nan=False)
    discount: float = Field(allow_inf_nan=False)
    img: Optional[str] = None


class RentalCreate(BaseModel):
    name: str
    car_id: int = Field(ge=1, le=MAX_ID)
    start_date: date
    end_date: date
    days: int = Field(ge=0, le=MAX_DAYS)
    driver: bool = False
    total: float = Field(allow_inf_nan=False)
