# services/student_service.py
"""
Student Service - business logic for student registration and lookup.

Students are the subject entities records are issued about; their public
student_id is what a record's subject_entity_id refers to.
"""
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

import config
from models import Institution, Payment, PaymentStatus, Student, User
from services.exceptions import DuplicateStudentError
from services.user_service import UserService


class StudentService:
     """Service class for student-related business logic."""

     @staticmethod
     def register(
          db: Session,
          student_id: str,
          name: str,
          email: str,
          course: Optional[str] = None,
          department: Optional[str] = None,
          enrollment_year: Optional[int] = None,
          wallet_address: Optional[str] = None,
          institution_id: Optional[int] = None,
          status: str = "active"
     ) -> Student:
          """
          Register a student under an institution.

          Args:
               db: SQLAlchemy database session
               student_id: Public student identifier (e.g. STU2024001)
               institution_id: Issuing institution; defaults to the first registered one

          Returns:
               Created Student object

          Raises:
               DuplicateStudentError: If the student_id is already registered
          """
          if StudentService.get_by_student_id(db, student_id) is not None:
               raise DuplicateStudentError("Student already exists")

          if institution_id is None:
               first = db.query(Institution).order_by(Institution.id).first()
               institution_id = first.id if first else None

          student = Student(
               student_id=student_id,
               name=name,
               email=email,
               course=course or "",
               department=department or "",
               enrollment_year=enrollment_year or date.today().year,
               wallet_address=wallet_address,
               institution_id=institution_id,
               status=status,
          )
          db.add(student)
          db.flush()
          return student

     @staticmethod
     def self_register(
          db: Session,
          student_id: str,
          name: str,
          email: str,
          password: str,
          course: Optional[str] = None,
          department: Optional[str] = None,
          enrollment_year: Optional[int] = None
     ) -> Tuple[User, Student, Payment]:
          """
          Public sign-up: creates the login, a student profile awaiting
          verification, and a pending registration fee.
          """
          if StudentService.get_by_student_id(db, student_id) is not None:
               raise DuplicateStudentError("Student ID already registered")

          user = UserService.create_user(
               db,
               email=email,
               password=password,
               name=name,
               role="student",
               student_id=student_id,
          )
          student = StudentService.register(
               db,
               student_id=student_id,
               name=name,
               email=email,
               course=course,
               department=department,
               enrollment_year=enrollment_year,
               status="pending_verification",
          )
          fee = Payment(
               user_id=user.id,
               student_id=student_id,
               type="registration_fee",
               amount=Decimal(config.REGISTRATION_FEE),
               currency=config.DEFAULT_CURRENCY,
               status=PaymentStatus.PENDING,
               description="Registration Fee",
          )
          db.add(fee)
          db.flush()
          return user, student, fee

     @staticmethod
     def get_by_student_id(db: Session, student_id: str) -> Optional[Student]:
          return db.query(Student).filter(Student.student_id == student_id).first()

     @staticmethod
     def get_by_wallet(db: Session, wallet_address: str) -> Optional[Student]:
          """Case-insensitive wallet lookup."""
          return (
               db.query(Student)
               .filter(func.lower(Student.wallet_address) == wallet_address.lower())
               .first()
          )

     @staticmethod
     def list_all(db: Session) -> List[Student]:
          return db.query(Student).order_by(Student.id).all()

     @staticmethod
     def count(db: Session, status: Optional[str] = None) -> int:
          query = db.query(Student)
          if status is not None:
               query = query.filter(Student.status == status)
          return query.count()
