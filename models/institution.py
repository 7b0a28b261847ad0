from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from .base import Base, utc_now


class Institution(Base):
     """
     Institution model - a university or school that issues records.
     """
     __tablename__ = "institutions"

     id = Column(Integer, primary_key=True, autoincrement=True)
     name = Column(String(255), nullable=False)
     code = Column(String(50), unique=True, nullable=False)
     wallet_address = Column(String(64), nullable=True)
     verified = Column(Boolean, default=False, nullable=False)
     created_at = Column(DateTime, default=utc_now, nullable=False)
     updated_at = Column(DateTime, onupdate=utc_now, nullable=True)

     # Relationships
     students = relationship("Student", back_populates="institution")

     def __repr__(self):
          return f"<Institution(id={self.id}, code='{self.code}')>"
