from sqlalchemy import Column, Integer, String, Float, Text
from database import Base


class Car(Base):
    __tablename__ = "cars"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    descrp = Column(Text, nullable=True)
    priceday = Column(Float, nullable=False)
    discount = Column(Float, default=0.0)
    img = Column(String(255), nullable=True)
