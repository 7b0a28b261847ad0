# services/user_service.py
"""
User Service - accounts, credentials and account administration.

Password changes, profile edits and every admin action on an account are
written to the system log (AuditService) in the same transaction.
"""
import secrets
from typing import List, Optional, Tuple

from passlib.context import CryptContext
from sqlalchemy import func
from sqlalchemy.orm import Session

from models import Payment, SystemAction, User
from services.audit_service import AuditService
from services.exceptions import (
     DuplicateUserError,
     InvalidPasswordError,
     UserNotFoundError,
)

# Bcrypt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ROLES = ("admin", "institution", "student")

PROFILE_FIELDS = frozenset({"name", "email", "wallet_address"})
ADMIN_EDITABLE_FIELDS = PROFILE_FIELDS | {"role"}


class UserService:
     """Service class for user accounts."""

     @staticmethod
     def create_user(
          db: Session,
          email: Optional[str],
          password: Optional[str],
          name: str,
          role: str = "student",
          wallet_address: Optional[str] = None,
          institution_id: Optional[int] = None,
          student_id: Optional[str] = None
     ) -> User:
          """
          Create a user with a bcrypt-hashed password.

          email and password may both be None for wallet-only accounts.

          Raises:
               DuplicateUserError: If the email is already registered
               ValueError: If the role is unknown
          """
          if role not in ROLES:
               raise ValueError(f"Unknown role: {role}")
          if email is not None and UserService.get_by_email(db, email) is not None:
               raise DuplicateUserError("Email already in use")

          user = User(
               email=email,
               password=pwd_context.hash(password) if password else None,
               name=name,
               role=role,
               wallet_address=wallet_address,
               institution_id=institution_id,
               student_id=student_id,
          )
          db.add(user)
          db.flush()
          return user

     @staticmethod
     def get_by_email(db: Session, email: str) -> Optional[User]:
          return db.query(User).filter(User.email == email).first()

     @staticmethod
     def get_by_wallet(db: Session, wallet_address: str) -> Optional[User]:
          """Case-insensitive wallet lookup."""
          return (
               db.query(User)
               .filter(func.lower(User.wallet_address) == wallet_address.lower())
               .order_by(User.id)
               .first()
          )

     @staticmethod
     def get(db: Session, user_id: int) -> Optional[User]:
          return db.query(User).filter(User.id == user_id).first()

     @staticmethod
     def list_all(db: Session) -> List[User]:
          return db.query(User).order_by(User.id).all()

     @staticmethod
     def count_by_role(db: Session) -> dict:
          counts = dict(db.query(User.role, func.count(User.id)).group_by(User.role).all())
          return {role: counts.get(role, 0) for role in ROLES}

     @staticmethod
     def authenticate(db: Session, email: str, password: str) -> Optional[User]:
          """Return the user if the credentials match, else None."""
          user = UserService.get_by_email(db, email)
          if user is None or not user.password or not pwd_context.verify(password, user.password):
               return None
          return user

     @staticmethod
     def wallet_login(db: Session, wallet_address: str) -> Tuple[User, bool]:
          """
          Find the account owning a wallet, creating a student account for
          unknown wallets. The signature is not checked (simulated chain).

          Returns:
               (user, created)
          """
          user = UserService.get_by_wallet(db, wallet_address)
          if user is not None:
               return user, False

          user = UserService.create_user(
               db,
               email=None,
               password=None,
               name=f"User {wallet_address[:8]}",
               role="student",
               wallet_address=wallet_address,
          )
          return user, True

     @staticmethod
     def _apply_changes(db: Session, user: User, changes: dict, allowed: frozenset) -> dict:
          unknown = set(changes) - allowed
          if unknown:
               raise ValueError(f"Unknown user field(s): {', '.join(sorted(unknown))}")
          if "role" in changes and changes["role"] not in ROLES:
               raise ValueError(f"Unknown role: {changes['role']}")

          email = changes.get("email")
          if email and email != user.email:
               other = UserService.get_by_email(db, email)
               if other is not None and other.id != user.id:
                    raise DuplicateUserError("Email already in use")

          # Empty name/email mean "leave unchanged"; wallet_address may be cleared
          applied = {}
          for name, value in changes.items():
               if name in ("name", "email", "role") and not value:
                    continue
               setattr(user, name, value)
               applied[name] = value
          db.flush()
          return applied

     @staticmethod
     def change_password(
          db: Session,
          user: User,
          current_password: str,
          new_password: str,
          ip_address: Optional[str] = None
     ) -> None:
          """
          Raises:
               InvalidPasswordError: If current_password does not match
          """
          if not user.password or not pwd_context.verify(current_password, user.password):
               raise InvalidPasswordError("Current password is incorrect")

          user.password = pwd_context.hash(new_password)
          db.flush()
          AuditService.record(
               db,
               SystemAction.PASSWORD_CHANGED,
               performed_by=user.id,
               target_user_id=user.id,
               target_email=user.email,
               ip_address=ip_address,
          )

     @staticmethod
     def update_profile(db: Session, user: User, changes: dict, ip_address: Optional[str] = None) -> User:
          """Self-service edit of name, email and wallet address."""
          applied = UserService._apply_changes(db, user, changes, PROFILE_FIELDS)
          AuditService.record(
               db,
               SystemAction.PROFILE_UPDATED,
               performed_by=user.id,
               target_user_id=user.id,
               target_email=user.email,
               details=applied,
               ip_address=ip_address,
          )
          return user

     @staticmethod
     def _get_or_raise(db: Session, user_id: int) -> User:
          user = UserService.get(db, user_id)
          if user is None:
               raise UserNotFoundError("User not found")
          return user

     @staticmethod
     def admin_update(db: Session, user_id: int, changes: dict, performed_by: int) -> User:
          """
          Admin edit of name, email, role and wallet address.

          Raises:
               UserNotFoundError: If the user does not exist
               DuplicateUserError: If the new email belongs to another user
               ValueError: If the role or a field name is unknown
          """
          user = UserService._get_or_raise(db, user_id)
          applied = UserService._apply_changes(db, user, changes, ADMIN_EDITABLE_FIELDS)
          AuditService.record(
               db,
               SystemAction.USER_UPDATED,
               performed_by=performed_by,
               target_user_id=user.id,
               target_email=user.email,
               details=applied,
          )
          return user

     @staticmethod
     def delete_user(db: Session, user_id: int, performed_by: int) -> None:
          """
          Remove an account and its payments.

          Issued records and ledger entries are untouched: records are keyed by
          student id, not by account, and ledger entries never change.

          Raises:
               ValueError: If an admin tries to delete their own account
               UserNotFoundError: If the user does not exist
          """
          if user_id == performed_by:
               raise ValueError("Cannot delete your own account")
          user = UserService._get_or_raise(db, user_id)
          email = user.email

          # Mirrors ON DELETE CASCADE on backends that do not enforce it
          db.query(Payment).filter(Payment.user_id == user.id).delete(synchronize_session="fetch")
          db.delete(user)
          db.flush()
          AuditService.record(
               db,
               SystemAction.USER_DELETED,
               performed_by=performed_by,
               target_user_id=user_id,
               target_email=email,
          )

     @staticmethod
     def reset_password(
          db: Session,
          user_id: int,
          performed_by: int,
          new_password: Optional[str] = None
     ) -> str:
          """Set a new password (random if none is given) and return it."""
          user = UserService._get_or_raise(db, user_id)
          password = new_password or secrets.token_urlsafe(9)
          user.password = pwd_context.hash(password)
          db.flush()
          AuditService.record(
               db,
               SystemAction.PASSWORD_RESET,
               performed_by=performed_by,
               target_user_id=user.id,
               target_email=user.email,
          )
          return password
