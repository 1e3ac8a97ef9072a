from sqlalchemy import Column, Integer, String
from database import Base
from sqlalchemy.orm import relationship


class Customer(Base):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)

    rentals = relationship("Rental", back_populates="customer")
