from sqlalchemy import Column, Integer, ForeignKey, Date, Float, String, DateTime, func
from database import Base
from sqlalchemy.orm import relationship


class Rental(Base):
    __tablename__ = "rentals"

    id = Column(Integer, primary_key=True, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False)
    # No FK: cars may be deleted while their rentals are kept
    car_id = Column(Integer, index=True, nullable=False)
    car_name = Column(String(255), nullable=True)
    car_price = Column(Float, nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    days = Column(Integer, nullable=False)
    driver = Column(Integer, nullable=False, default=0)
    total = Column(Float, nullable=False)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    customer = relationship("Customer", back_populates="rentals")
