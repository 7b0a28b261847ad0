# services/institution_service.py
"""
Institution Service - issuers and their verification status.

Deleting an institution detaches its students and users (institution_id is
set to NULL). Records it issued stay in place and keep verifying: a record
names its issuer only as an opaque issued_by string, and ledger entries are
never touched.
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from models import Institution, SystemAction, User
from services.audit_service import AuditService
from services.exceptions import DuplicateInstitutionError, InstitutionNotFoundError

EDITABLE_FIELDS = frozenset({"name", "code", "wallet_address", "verified"})


class InstitutionService:
     """Service class for institutions."""

     @staticmethod
     def get(db: Session, institution_id: int) -> Optional[Institution]:
          return db.query(Institution).filter(Institution.id == institution_id).first()

     @staticmethod
     def get_by_code(db: Session, code: str) -> Optional[Institution]:
          return db.query(Institution).filter(Institution.code == code).first()

     @staticmethod
     def list_all(db: Session) -> List[Institution]:
          return db.query(Institution).order_by(Institution.id).all()

     @staticmethod
     def count(db: Session, verified: Optional[bool] = None) -> int:
          query = db.query(Institution)
          if verified is not None:
               query = query.filter(Institution.verified == verified)
          return query.count()

     @staticmethod
     def create(
          db: Session,
          name: str,
          code: str,
          wallet_address: Optional[str] = None,
          verified: bool = False
     ) -> Institution:
          """
          Raises:
               DuplicateInstitutionError: If the code is already taken
          """
          if InstitutionService.get_by_code(db, code) is not None:
               raise DuplicateInstitutionError("Institution code already exists")

          institution = Institution(name=name, code=code, wallet_address=wallet_address, verified=verified)
          db.add(institution)
          db.flush()
          return institution

     @staticmethod
     def _get_or_raise(db: Session, institution_id: int) -> Institution:
          institution = InstitutionService.get(db, institution_id)
          if institution is None:
               raise InstitutionNotFoundError("Institution not found")
          return institution

     @staticmethod
     def update(db: Session, institution_id: int, changes: dict, performed_by: int) -> Institution:
          """
          Admin edit, including verifying an institution.

          Raises:
               InstitutionNotFoundError: If the institution does not exist
               DuplicateInstitutionError: If the new code belongs to another institution
               ValueError: If a field name is unknown
          """
          unknown = set(changes) - EDITABLE_FIELDS
          if unknown:
               raise ValueError(f"Unknown institution field(s): {', '.join(sorted(unknown))}")
          institution = InstitutionService._get_or_raise(db, institution_id)

          code = changes.get("code")
          if code and code != institution.code and InstitutionService.get_by_code(db, code) is not None:
               raise DuplicateInstitutionError("Institution code already exists")

          applied = {}
          for name, value in changes.items():
               if value is None and name != "wallet_address":
                    continue
               setattr(institution, name, value)
               applied[name] = value
          db.flush()

          AuditService.record(
               db,
               SystemAction.INSTITUTION_UPDATED,
               performed_by=performed_by,
               target_institution_id=institution.id,
               details=applied,
          )
          return institution

     @staticmethod
     def delete(db: Session, institution_id: int, performed_by: int) -> None:
          """
          Raises:
               InstitutionNotFoundError: If the institution does not exist
          """
          institution = InstitutionService._get_or_raise(db, institution_id)
          name = institution.name

          # Mirrors ON DELETE SET NULL on backends that do not enforce it
          for student in list(institution.students):
               student.institution = None
          db.query(User).filter(User.institution_id == institution.id).update(
               {"institution_id": None}, synchronize_session="fetch"
          )
          db.delete(institution)
          db.flush()

          AuditService.record(
               db,
               SystemAction.INSTITUTION_DELETED,
               performed_by=performed_by,
               target_institution_id=institution_id,
               details={"name": name},
          )
