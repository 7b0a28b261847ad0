# models/user.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from .base import Base, utc_now


class User(Base):
     """
     User model - central authentication table.
     role is one of admin, institution, student.
     """
     __tablename__ = "users"

     id = Column(Integer, primary_key=True, autoincrement=True)
     email = Column(String(255), unique=True, nullable=True, index=True)  # empty for wallet-only accounts
     password = Column(String(255), nullable=True)
     name = Column(String(200), nullable=False)
     role = Column(String(50), nullable=False, default="student")
     wallet_address = Column(String(64), nullable=True, index=True)
     institution_id = Column(Integer, ForeignKey("institutions.id", ondelete="SET NULL"), nullable=True)
     student_id = Column(String(100), nullable=True)  # public student identifier for role=student
     created_at = Column(DateTime, default=utc_now, nullable=False)
     updated_at = Column(DateTime, onupdate=utc_now, nullable=True)

     def __repr__(self):
          return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
