from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, utc_now


class Student(Base):
     """
     Student model - the subject entity records are issued about.
     student_id is the public identifier (e.g. STU2024001) used as a record's
     subject_entity_id.
     """
     __tablename__ = "students"

     id = Column(Integer, primary_key=True, autoincrement=True)
     student_id = Column(String(100), unique=True, nullable=False, index=True)

     # Profile
     name = Column(String(200), nullable=False)
     email = Column(String(255), nullable=False)
     course = Column(String(200), nullable=True)
     department = Column(String(200), nullable=True)
     enrollment_year = Column(Integer, nullable=True)
     wallet_address = Column(String(64), nullable=True, index=True)

     institution_id = Column(Integer, ForeignKey("institutions.id", ondelete="SET NULL"), nullable=True)
     status = Column(String(50), default="active", nullable=False)  # active, pending_verification

     created_at = Column(DateTime, default=utc_now, nullable=False)

     # Relationships
     institution = relationship("Institution", back_populates="students")

     def __repr__(self):
          return f"<Student(id={self.id}, student_id='{self.student_id}', name='{self.name}')>"
